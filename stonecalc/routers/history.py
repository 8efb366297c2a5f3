"""
History endpoints: the caller's saved calculations.

GET    /api/history           : caller's entries, newest first
GET    /api/history/{item_id} : one entry (replay)
GET    /api/history/{item_id}/pdf
DELETE /api/history           : clear the caller's entries
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from sqlalchemy.orm import Session

from .. import history_store
from ..database import get_db
from ..display import configured_labels
from ..pdf_generator import generate_result_pdf
from ..schemas import ClearHistoryResponse, HistoryItem, UserProfile
from ..users import get_current_user, owner_key

router = APIRouter(prefix="/history", tags=["history"])


def _owned_item(item_id: str, db: Session, current_user: Optional[UserProfile]) -> HistoryItem:
    item = history_store.get_item(db, item_id)
    if not item:
        raise HTTPException(status_code=404, detail="History item not found")
    if item.user_mobile != owner_key(current_user):
        raise HTTPException(status_code=403, detail="Not your history item")
    return item


@router.get("", response_model=List[HistoryItem])
def list_history(
    db: Session = Depends(get_db),
    current_user: Optional[UserProfile] = Depends(get_current_user),
):
    return list(history_store.list_for_owner(db, owner_key(current_user)))


@router.delete("", response_model=ClearHistoryResponse)
def clear_history(
    db: Session = Depends(get_db),
    current_user: Optional[UserProfile] = Depends(get_current_user),
):
    """Only a known owner can clear; anonymous entries are left alone."""
    if current_user is None:
        raise HTTPException(status_code=400, detail="X-User-Mobile header required to clear history")
    deleted = history_store.clear_for_owner(db, current_user.mobile)
    return ClearHistoryResponse(deleted=deleted)


@router.get("/{item_id}", response_model=HistoryItem)
def get_history_item(
    item_id: str,
    db: Session = Depends(get_db),
    current_user: Optional[UserProfile] = Depends(get_current_user),
):
    return _owned_item(item_id, db, current_user)


@router.get("/{item_id}/pdf")
def download_history_pdf(
    item_id: str,
    db: Session = Depends(get_db),
    current_user: Optional[UserProfile] = Depends(get_current_user),
):
    """Returns: application/pdf"""
    item = _owned_item(item_id, db, current_user)
    pdf_bytes = generate_result_pdf(item, title=item.label, labels=configured_labels())
    return Response(
        content=bytes(pdf_bytes),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="stone-calc-{item.id}.pdf"'},
    )
