"""
Pieces-for-murubba calculator: inverse of the forward area calculation.

quantity = ceil(target_murubba × K / (length × width)). Fractional pieces
round up; the area and murubba totals describe the pieces actually supplied.
"""

from ..schemas import CalcMode
from .base import BaseCalculator, PriceBasis


class ToPiecesCalculator(BaseCalculator):

    MODE = CalcMode.TO_PIECES
    PRICE_BASIS = PriceBasis.PIECE

    def calculate(self, dims, target_value, constants):
        target_murubba = self.check_target(target_value, "target murubba")
        target_area = self.area_from_murubba(target_murubba, constants)
        quantity = self.pieces_needed(target_area / self.piece_area(dims))
        return self.make_outcome(dims, quantity, constants)
