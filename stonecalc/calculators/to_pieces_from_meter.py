"""
Pieces-for-running-length calculator.

Pieces are laid end to end along their length:
pieces_per_linear_unit = 1 / length, quantity = ceil(target_m × pieces_per_linear_unit).
The running total echoes the requested target, not quantity × length.
"""

from ..schemas import CalcMode
from .base import BaseCalculator, PriceBasis


class ToPiecesFromMeterCalculator(BaseCalculator):

    MODE = CalcMode.TO_PIECES_FROM_METER
    PRICE_BASIS = PriceBasis.LINEAR_METER

    def calculate(self, dims, target_value, constants):
        target_meters = self.check_target(target_value, "target running meters")
        pieces_per_meter = 1.0 / self.piece_length(dims)
        quantity = self.pieces_needed(target_meters * pieces_per_meter)
        return self.make_outcome(dims, quantity, constants, total_linear_unit=target_meters)
