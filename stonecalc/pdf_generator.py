"""
Printable PDF export of a CalculationResult.

Uses fpdf2 (pure Python, no system dependencies). Renders the same fields,
in the same order, as the share text, followed by the secondary metrics:

1. Header (title, brand, date)
2. Piece dimensions
3. Quantities (pieces, murubba, area, running length)
4. Weight & volume
5. Price
"""

from datetime import datetime, timezone

from fpdf import FPDF

from .display import (
    CURRENCY, DEFAULT_LABELS, display_quantity, fmt_number, fmt_price, price_label,
)
from .schemas import CalculationResult

MODE_NAMES = {
    "toMurubba": "Size to Murubba",
    "toPieces": "Murubba to Pieces",
    "toPiecesFromMeter": "Running Meters to Pieces",
    "toMurubbaFromPieces": "Pieces to Murubba",
}


def _safe(text: str) -> str:
    """Replace Unicode chars that can't be rendered by built-in PDF fonts (latin-1)."""
    if not text:
        return ""
    return (
        text
        .replace("\u00d7", "x")    # multiplication sign
        .replace("\u00b2", "2")    # superscript two
        .replace("\u00b3", "3")    # superscript three
        .replace("\u2014", " - ")  # em dash
        .replace("\u2013", "-")    # en dash
        .encode("latin-1", errors="replace")
        .decode("latin-1")
    )


class ResultPDF(FPDF):
    """One-page printable calculation sheet."""

    def __init__(self, brand=""):
        super().__init__()
        self.brand = brand
        self.set_auto_page_break(auto=True, margin=20)

    def header(self):
        pass  # Title block is drawn by generate_result_pdf

    def footer(self):
        self.set_y(-15)
        self.set_font("Helvetica", "I", 8)
        self.set_text_color(150, 150, 150)
        self.cell(0, 10, _safe(f"{self.brand} Stone Calculator - Page {self.page_no()}/{{nb}}"), align="C")

    def section_header(self, title):
        """Render a section header bar."""
        self.set_font("Helvetica", "B", 11)
        self.set_fill_color(45, 55, 72)
        self.set_text_color(255, 255, 255)
        self.cell(0, 8, _safe(f"  {title}"), fill=True, new_x="LMARGIN", new_y="NEXT")
        self.set_text_color(0, 0, 0)
        self.ln(2)

    def field_row(self, label, value):
        """Label on the left, value right-aligned."""
        self.set_font("Helvetica", "", 10)
        self.cell(120, 7, _safe(label))
        self.set_font("Helvetica", "B", 10)
        self.cell(70, 7, _safe(str(value)), align="R", new_x="LMARGIN", new_y="NEXT")


def generate_result_pdf(
    result: CalculationResult,
    title: str = None,
    labels: dict = None,
    created_at: datetime = None,
) -> bytes:
    """
    Generate a printable PDF for one calculation.

    Args:
        result: the CalculationResult (or HistoryItem) to render
        title: heading, defaults to the app title label
        labels: overrides for display.DEFAULT_LABELS
        created_at: date printed in the header, defaults to now

    Returns:
        PDF bytes
    """
    labels = {**DEFAULT_LABELS, **(labels or {})}
    title = title or labels["app_title"]
    date_str = (created_at or datetime.now(timezone.utc)).strftime("%B %d, %Y")
    mode = result.calc_mode.value

    pdf = ResultPDF(brand=labels["brand"])
    pdf.alias_nb_pages()
    pdf.add_page()

    # ── SECTION 1: Header ──
    pdf.set_font("Helvetica", "B", 20)
    pdf.cell(0, 10, _safe(title), new_x="LMARGIN", new_y="NEXT")
    pdf.set_font("Helvetica", "", 10)
    pdf.set_text_color(100, 100, 100)
    pdf.cell(0, 5, _safe(f"{MODE_NAMES.get(mode, mode)} | {date_str}"), new_x="LMARGIN", new_y="NEXT")
    pdf.set_text_color(0, 0, 0)
    pdf.ln(4)

    # ── SECTION 2: Dimensions ──
    pdf.section_header("PIECE SIZE")
    pdf.field_row(labels["length"], f"{result.length:.3f} m x {result.width:.3f} m")
    pdf.field_row(labels["thickness"], f"{result.height:.2f} cm")
    pdf.ln(3)

    # ── SECTION 3: Quantities ──
    pdf.section_header("QUANTITY")
    pdf.field_row(labels["quantity"], display_quantity(result))
    pdf.field_row(labels["total_murubba"], fmt_number(result.total_murubba))
    pdf.field_row("Area (m2)", fmt_number(result.total_area))
    pdf.field_row(labels["linear"], f"{fmt_number(result.total_linear_unit or 0.0)} {labels['meter']}")
    pdf.field_row(labels["one_in_piece"], fmt_number(result.pieces_per_murubba, 1))
    pdf.ln(3)

    # ── SECTION 4: Weight & volume ──
    pdf.section_header("WEIGHT")
    pdf.field_row(labels["weight"], f"{fmt_number(result.estimated_weight_ton, 1)} {labels['ton']}")
    pdf.field_row(labels["volume"], fmt_number(result.total_volume_m3))
    pdf.ln(3)

    # ── SECTION 5: Price ──
    pdf.section_header("PRICE")
    pdf.field_row("Unit price", f"{fmt_number(max(result.unit_price, 0.0))} {CURRENCY}")
    pdf.ln(1)
    pdf.set_fill_color(45, 55, 72)
    pdf.set_text_color(255, 255, 255)
    pdf.set_font("Helvetica", "B", 13)
    pdf.cell(120, 10, _safe(f"  {price_label(mode, labels).upper()}"), fill=True)
    pdf.cell(70, 10, f"{fmt_price(result)} {CURRENCY}  ", fill=True, align="R")
    pdf.set_text_color(0, 0, 0)
    pdf.ln(14)

    return pdf.output()
