"""
Presentation-boundary formatting for CalculationResult.

The engine stores full precision; everything user-facing (share text, PDF,
API summaries) rounds here: 2 dp for money / area / volume / running length,
1 dp for weight and pieces-per-murubba, whole pieces by ceiling.
"""

import math

from .config import settings
from .schemas import CalculationResult, CalcMode

CURRENCY = "TK"

# English label set. Localized tables live in the UI.
DEFAULT_LABELS = {
    "app_title": "Stone Calculator",
    "brand": "Stone Pro",
    "length": "Size",
    "thickness": "Thickness",
    "quantity": "Pieces",
    "total_pieces": "Total Pieces",
    "total_murubba": "Total Murubba",
    "murubba": "murubba",
    "linear": "Running Length",
    "meter": "m",
    "weight": "Weight",
    "ton": "ton",
    "volume": "Volume (m3)",
    "one_in_piece": "Pieces per Murubba",
    "price_by_murubba": "Total Price (by murubba)",
    "price_by_piece": "Total Price (by piece)",
    "price_by_meter": "Total Price (by meter)",
}


def configured_labels() -> dict:
    """Label overrides from settings: app title and brand."""
    return {"app_title": settings.APP_TITLE, "brand": settings.BRAND_NAME}


PIECE_MODES = (CalcMode.TO_PIECES, CalcMode.TO_PIECES_FROM_METER)


def round_money(value: float) -> float:
    return round(value, 2)


def round_weight(value: float) -> float:
    return round(value, 1)


def round_tenths(value: float) -> float:
    return round(value, 1)


def is_piece_mode(calc_mode) -> bool:
    return CalcMode(calc_mode) in PIECE_MODES


def display_quantity(result: CalculationResult) -> int:
    """Whole pieces shown to the user, never rounded down."""
    return math.ceil(result.quantity)


def price_label(calc_mode, labels: dict = None) -> str:
    """Label matching the unit unit_price was quoted against."""
    labels = {**DEFAULT_LABELS, **(labels or {})}
    mode = CalcMode(calc_mode)
    if mode is CalcMode.TO_PIECES_FROM_METER:
        return labels["price_by_meter"]
    if mode is CalcMode.TO_PIECES:
        return labels["price_by_piece"]
    return labels["price_by_murubba"]


def fmt_number(value: float, places: int = 2) -> str:
    """Thousands-separated fixed-point, e.g. 12,345.60"""
    return f"{value:,.{places}f}"


def fmt_price(result: CalculationResult) -> str:
    """Unpriced results always show 0.00."""
    if result.unit_price <= 0:
        return fmt_number(0.0)
    return fmt_number(result.total_price)


def summarize(result: CalculationResult, labels: dict = None) -> dict:
    """
    Rounded view of a result, in the layout of the result card:
    primary box (pieces or murubba), running length, price, then weight /
    pieces-per-murubba / volume.
    """
    labels = {**DEFAULT_LABELS, **(labels or {})}
    piece_mode = is_piece_mode(result.calc_mode)

    if piece_mode:
        primary = {
            "label": labels["total_pieces"],
            "value": display_quantity(result),
            "unit": labels["quantity"],
        }
    else:
        primary = {
            "label": labels["total_murubba"],
            "value": round_money(result.total_murubba),
            "unit": labels["murubba"],
        }

    return {
        "primary": primary,
        "linear_m": round_money(result.total_linear_unit or 0.0),
        "price_label": price_label(result.calc_mode, labels),
        "total_price": round_money(result.total_price) if result.unit_price > 0 else 0.0,
        "currency": CURRENCY,
        "weight_ton": round_weight(result.estimated_weight_ton),
        "pieces_per_murubba": round_tenths(result.pieces_per_murubba),
        "volume_m3": round_money(result.total_volume_m3),
    }
