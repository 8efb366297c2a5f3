"""
Share and print/export of a result the client already holds.

POST /api/share       - plain-text block, WhatsApp link, rounded summary
POST /api/export/pdf  - printable PDF
"""

from fastapi import APIRouter
from fastapi.responses import Response

from ..display import configured_labels, summarize
from ..pdf_generator import generate_result_pdf
from ..schemas import CalculationResult, ShareResponse
from ..share import build_share_text, whatsapp_share_url

router = APIRouter(tags=["export"])


@router.post("/share", response_model=ShareResponse)
def share_result(result: CalculationResult):
    labels = configured_labels()
    text = build_share_text(result, labels=labels)
    return ShareResponse(text=text, url=whatsapp_share_url(text), summary=summarize(result, labels))


@router.post("/export/pdf")
def export_pdf(result: CalculationResult):
    """Returns: application/pdf"""
    pdf_bytes = generate_result_pdf(result, labels=configured_labels())
    return Response(
        content=bytes(pdf_bytes),
        media_type="application/pdf",
        headers={"Content-Disposition": 'attachment; filename="stone-calc.pdf"'},
    )
