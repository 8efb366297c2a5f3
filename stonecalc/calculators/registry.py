"""
Calculator registry: maps calculation modes to calculator classes.
"""

import logging

from ..errors import InvalidMode
from ..schemas import CalcMode
from .base import BaseCalculator
from .to_murubba import ToMurubbaCalculator
from .to_pieces import ToPiecesCalculator
from .to_pieces_from_meter import ToPiecesFromMeterCalculator
from .to_murubba_from_pieces import ToMurubbaFromPiecesCalculator

logger = logging.getLogger(__name__)

CALCULATOR_REGISTRY: dict[CalcMode, type] = {
    CalcMode.TO_MURUBBA: ToMurubbaCalculator,
    CalcMode.TO_PIECES: ToPiecesCalculator,
    CalcMode.TO_PIECES_FROM_METER: ToPiecesFromMeterCalculator,
    CalcMode.TO_MURUBBA_FROM_PIECES: ToMurubbaFromPiecesCalculator,
}


def _coerce_mode(calc_mode):
    try:
        return CalcMode(calc_mode)
    except ValueError:
        return None


def get_calculator(calc_mode) -> BaseCalculator:
    """Returns an instance of the calculator for a mode, or raises InvalidMode."""
    mode = _coerce_mode(calc_mode)
    if mode not in CALCULATOR_REGISTRY:
        logger.error("No calculator registered for mode %r", calc_mode)
        raise InvalidMode(
            f"No calculator registered for mode: {calc_mode}. "
            f"Available: {list_calculators()}"
        )
    return CALCULATOR_REGISTRY[mode]()


def has_calculator(calc_mode) -> bool:
    """Check if a calculator exists for a mode."""
    return _coerce_mode(calc_mode) in CALCULATOR_REGISTRY


def list_calculators() -> list[str]:
    """List all registered calculation modes."""
    return [mode.value for mode in CALCULATOR_REGISTRY]
