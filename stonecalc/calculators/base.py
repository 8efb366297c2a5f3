"""
Abstract base class for all calculation-mode calculators.

Input: canonical dimensions (units.CanonicalDims) + the mode's target value
Output: ModeOutcome: the mode-specific primary quantity plus the area and
linear totals that metrics.derive_metrics builds the full result from.
"""

import enum
import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass

from ..constants import DEFAULT_CONSTANTS, EngineConstants
from ..errors import DivisionByZero, InvalidDimension
from ..units import CanonicalDims, check_in_range

logger = logging.getLogger(__name__)

# Relative distance from an integer treated as float noise when counting pieces
PIECE_SNAP_TOLERANCE = 1e-9


class PriceBasis(str, enum.Enum):
    """Which quantity unit_price is quoted against."""
    PIECE = "piece"
    MURUBBA = "murubba"
    LINEAR_METER = "linear_meter"


@dataclass(frozen=True)
class ModeOutcome:
    quantity: float
    total_area: float             # m²
    total_murubba: float
    total_linear_unit: float      # running meters
    pieces_per_linear_unit: float
    price_basis: PriceBasis


class BaseCalculator(ABC):
    """All mode calculators inherit from this."""

    MODE = None
    PRICE_BASIS = PriceBasis.MURUBBA

    @abstractmethod
    def calculate(self, dims: CanonicalDims, target_value: float,
                  constants: EngineConstants = DEFAULT_CONSTANTS) -> ModeOutcome:
        """
        Takes canonical dimensions and the mode's target value.
        Returns the ModeOutcome for this mode.
        """
        pass

    # --- Helper methods for all calculators ---

    def piece_area(self, dims: CanonicalDims) -> float:
        """Plan area of one piece in m². Raises DivisionByZero when zero, since callers divide by it."""
        area = dims.length * dims.width
        if area == 0:
            raise DivisionByZero("Per-piece area is zero")
        return check_in_range("Per-piece area", area)

    def piece_length(self, dims: CanonicalDims) -> float:
        """Length of one piece in m. Raises DivisionByZero when zero."""
        if dims.length == 0:
            raise DivisionByZero("Per-piece length is zero")
        return dims.length

    def pieces_needed(self, raw_count: float) -> int:
        """
        Whole pieces needed to cover raw_count. Always rounds UP, never
        under-delivering material, except that values within float noise of an
        integer snap to it, so 3.0000000000000004 is 3 pieces, not 4.
        """
        check_in_range("Required piece count", raw_count)
        nearest = round(raw_count)
        if abs(raw_count - nearest) <= PIECE_SNAP_TOLERANCE * max(1.0, abs(raw_count)):
            return int(nearest)
        return math.ceil(raw_count)

    def murubba_from_area(self, area_sq_m: float, constants: EngineConstants) -> float:
        """Convert m² to murubba."""
        return area_sq_m / constants.murubba_sq_m

    def area_from_murubba(self, murubba: float, constants: EngineConstants) -> float:
        """Convert murubba to m²."""
        return murubba * constants.murubba_sq_m

    def check_target(self, target_value: float, meaning: str) -> float:
        """Target values may be zero but never negative or non-finite."""
        try:
            value = float(target_value)
        except (TypeError, ValueError):
            raise InvalidDimension(f"{meaning} must be a number, got {target_value!r}")
        if not math.isfinite(value) or value < 0:
            raise InvalidDimension(f"{meaning} must be a non-negative finite number, got {target_value!r}")
        return value

    def make_outcome(self, dims: CanonicalDims, quantity: float,
                     constants: EngineConstants,
                     total_linear_unit: float = None) -> ModeOutcome:
        """Build the ModeOutcome for a quantity of pieces of size dims."""
        total_area = dims.length * dims.width * quantity
        if total_linear_unit is None:
            # Pieces laid end to end along their length
            total_linear_unit = dims.length * quantity
        outcome = ModeOutcome(
            quantity=quantity,
            total_area=total_area,
            total_murubba=self.murubba_from_area(total_area, constants),
            total_linear_unit=total_linear_unit,
            pieces_per_linear_unit=1.0 / self.piece_length(dims),
            price_basis=self.PRICE_BASIS,
        )
        check_in_range("Total area", outcome.total_area)
        check_in_range("Total murubba", outcome.total_murubba)
        check_in_range("Running length", outcome.total_linear_unit)
        logger.debug("%s -> %s", self.MODE, outcome)
        return outcome
