"""
Calculation engine.

Raw form input → unit normalizer → mode dispatcher → derived metrics.
Pure math, no state, no I/O: the same CalculationInput always yields an
identical CalculationResult, so it is safe to call on every keystroke.
"""

import logging

from .calculators.registry import get_calculator
from .constants import EngineConstants
from .metrics import derive_metrics
from .schemas import CalculationInput, CalculationResult, CalcMode, InputUnit
from .units import normalize

logger = logging.getLogger(__name__)


class StoneCalcEngine:
    """
    Runs one calculation end to end.
    Constants are injected; default comes from application settings.
    """

    def __init__(self, constants: EngineConstants = None):
        self.constants = constants or EngineConstants.from_settings()

    def calculate(self, calc_input: CalculationInput) -> CalculationResult:
        """
        Args:
            calc_input: validated CalculationInput (mode, unit, raw dims,
                target_value, unit_price)

        Returns:
            CalculationResult with every derived field populated

        Raises:
            InvalidDimension, InvalidMode, DivisionByZero
        """
        dims = normalize(
            calc_input.length,
            calc_input.width,
            calc_input.height,
            calc_input.input_unit,
            self.constants,
        )
        calculator = get_calculator(calc_input.calc_mode)
        outcome = calculator.calculate(dims, calc_input.target_value, self.constants)

        result = derive_metrics(
            dims,
            outcome,
            CalcMode(calc_input.calc_mode),
            InputUnit(calc_input.input_unit),
            calc_input.unit_price,
            self.constants,
            target_value=calc_input.target_value,
        )
        logger.debug(
            "calculated %s: quantity=%s murubba=%.4f price=%.2f",
            result.calc_mode.value, result.quantity, result.total_murubba, result.total_price,
        )
        return result


def calculate(calc_input: CalculationInput, constants: EngineConstants = None) -> CalculationResult:
    """Convenience wrapper around StoneCalcEngine for one-off calls."""
    return StoneCalcEngine(constants).calculate(calc_input)
