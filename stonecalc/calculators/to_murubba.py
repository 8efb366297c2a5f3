"""
Forward area calculator.

total_area = length × width × count, total_murubba = total_area / K.
Count defaults to 1, i.e. the slab itself.
"""

from ..schemas import CalcMode
from .base import BaseCalculator, PriceBasis


class ToMurubbaCalculator(BaseCalculator):

    MODE = CalcMode.TO_MURUBBA
    PRICE_BASIS = PriceBasis.MURUBBA

    def calculate(self, dims, target_value, constants):
        count = self.check_target(1.0 if target_value is None else target_value, "piece count")
        return self.make_outcome(dims, count, constants)
