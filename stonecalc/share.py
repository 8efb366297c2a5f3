"""
Share text for external messaging.

Field order is fixed: title, size (length × width), thickness, quantity,
murubba total, running length, weight, price, brand footer.
"""

from urllib.parse import quote

from .display import DEFAULT_LABELS, display_quantity, fmt_price, price_label
from .schemas import CalculationResult

WHATSAPP_URL = "https://wa.me/?text="
RULE = "-" * 18


def _fmt_dim(value: float) -> str:
    """Short dimension such as 3.048, 0.6 or 2, without float noise or trailing zeros."""
    return f"{round(value, 3):g}"


def build_share_text(result: CalculationResult, labels: dict = None) -> str:
    """Render a result as a plain-text block (WhatsApp-style *bold* / _italic_)."""
    labels = {**DEFAULT_LABELS, **(labels or {})}
    lines = [
        f"*{labels['app_title']} Report*",
        RULE,
        f"{labels['length']}: {_fmt_dim(result.length)}m x {_fmt_dim(result.width)}m",
        f"{labels['thickness']}: {_fmt_dim(result.height)}cm",
        f"{labels['quantity']}: {display_quantity(result)}",
        f"{labels['total_murubba']}: {result.total_murubba:.2f}",
        f"{labels['linear']}: {(result.total_linear_unit or 0.0):.2f} {labels['meter']}",
        f"{labels['weight']}: {result.estimated_weight_ton:.1f} {labels['ton']}",
        f"{price_label(result.calc_mode, labels)}: {fmt_price(result)}",
        RULE,
        f"_{labels['brand']} Stone Calculator_",
    ]
    return "\n".join(lines)


def whatsapp_share_url(text: str) -> str:
    """wa.me deep link with the text URL-encoded."""
    return WHATSAPP_URL + quote(text, safe="")
