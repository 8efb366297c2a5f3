"""
Murubba-from-piece-count calculator.

Same math as the forward area calculation, framed around a piece count the
customer already has: total_area = length × width × count.
"""

from ..schemas import CalcMode
from .base import BaseCalculator, PriceBasis


class ToMurubbaFromPiecesCalculator(BaseCalculator):

    MODE = CalcMode.TO_MURUBBA_FROM_PIECES
    PRICE_BASIS = PriceBasis.MURUBBA

    def calculate(self, dims, target_value, constants):
        count = self.check_target(target_value, "piece count")
        return self.make_outcome(dims, count, constants)
