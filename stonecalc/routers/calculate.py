"""
Calculation endpoint.

POST /api/calculate - run the engine on form input and, by default, append
the result to the caller's history.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from .. import history_store
from ..database import get_db
from ..engine import StoneCalcEngine
from ..errors import DivisionByZero, InvalidDimension, InvalidMode
from ..schemas import CalculationInput, CalculationResult, UserProfile
from ..users import get_current_user, owner_key

logger = logging.getLogger(__name__)

router = APIRouter(tags=["calculate"])

_engine = StoneCalcEngine()


def get_engine() -> StoneCalcEngine:
    return _engine


def run_calculation(calc_engine: StoneCalcEngine, calc_input: CalculationInput) -> CalculationResult:
    """Run the engine, translating calculation errors to HTTP errors."""
    try:
        return calc_engine.calculate(calc_input)
    except InvalidMode as e:
        logger.error("Calculation reached an unknown mode: %s", e)
        raise HTTPException(status_code=400, detail="Unsupported calculation mode")
    except (InvalidDimension, DivisionByZero) as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.post("/calculate", response_model=CalculationResult)
def calculate(
    calc_input: CalculationInput,
    record: bool = True,
    db: Session = Depends(get_db),
    calc_engine: StoneCalcEngine = Depends(get_engine),
    current_user: Optional[UserProfile] = Depends(get_current_user),
):
    """
    Calculate quantities, weight and price for one piece size.

    Returns: CalculationResult (full precision; round for display client-side
    or via /api/share).
    """
    result = run_calculation(calc_engine, calc_input)
    if record:
        history_store.record(db, result, owner_mobile=owner_key(current_user))
    return result
