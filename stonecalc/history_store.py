"""
SQLAlchemy persistence for the history log.

The table mirrors a HistoryLog: every write loads the log, applies the
HistoryLog operation, and deletes whatever rows the operation dropped, so the
capacity and ownership rules live in one place (history.py).
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from . import models
from .config import settings
from .history import HistoryLog, new_history_item
from .schemas import CalculationResult, HistoryItem

logger = logging.getLogger(__name__)


def _row_to_item(row: models.HistoryEntry) -> HistoryItem:
    return HistoryItem(
        **row.result_json,
        id=row.item_id,
        timestamp=row.timestamp,
        label=row.label,
        user_mobile=row.user_mobile,
    )


def _all_items(db: Session) -> tuple:
    rows = (
        db.query(models.HistoryEntry)
        .order_by(models.HistoryEntry.timestamp.desc(), models.HistoryEntry.id.desc())
        .all()
    )
    return tuple(_row_to_item(row) for row in rows)


def load_log(db: Session, capacity: int = None) -> HistoryLog:
    """Current log, newest first, bounded to capacity."""
    return HistoryLog(items=_all_items(db), capacity=capacity or settings.HISTORY_LIMIT)


def _delete_items(db: Session, items) -> int:
    ids = [item.id for item in items]
    if not ids:
        return 0
    return (
        db.query(models.HistoryEntry)
        .filter(models.HistoryEntry.item_id.in_(ids))
        .delete(synchronize_session=False)
    )


def record(
    db: Session,
    result: CalculationResult,
    owner_mobile: Optional[str] = None,
    title: str = None,
    capacity: int = None,
) -> HistoryItem:
    """Append a result to the log, evicting the oldest entries beyond capacity."""
    capacity = capacity or settings.HISTORY_LIMIT
    everything = _all_items(db)
    # Unbounded view so rows left over from a larger capacity are evicted too
    previous = HistoryLog(items=everything, capacity=max(len(everything), 1))
    log = HistoryLog(items=everything, capacity=capacity)

    item = new_history_item(
        result,
        owner_mobile=owner_mobile,
        label=log.next_label(owner_mobile, title or settings.APP_TITLE),
    )
    updated = log.append(item)

    db.add(models.HistoryEntry(
        item_id=item.id,
        timestamp=item.timestamp,
        user_mobile=item.user_mobile,
        label=item.label,
        calc_mode=item.calc_mode.value,
        total_murubba=item.total_murubba,
        total_price=item.total_price,
        result_json=result.model_dump(mode="json", by_alias=True, include=set(CalculationResult.model_fields)),
    ))
    evicted = _delete_items(db, previous.evicted_by(updated))
    db.commit()

    if evicted:
        logger.info("History cap %d reached, evicted %d entries", capacity, evicted)
    logger.debug("Recorded history item %s for owner %s", item.id, owner_mobile)
    return item


def list_for_owner(db: Session, owner_mobile: Optional[str]) -> tuple:
    """Owner's entries, newest first."""
    return load_log(db).for_owner(owner_mobile)


def get_item(db: Session, item_id: str) -> Optional[HistoryItem]:
    row = db.query(models.HistoryEntry).filter(models.HistoryEntry.item_id == item_id).first()
    return _row_to_item(row) if row else None


def clear_for_owner(db: Session, owner_mobile: Optional[str]) -> int:
    """Delete every entry owned by owner_mobile. Returns the number removed."""
    everything = _all_items(db)
    log = HistoryLog(items=everything, capacity=max(len(everything), 1))
    deleted = _delete_items(db, log.evicted_by(log.clear_owner(owner_mobile)))
    db.commit()
    logger.info("Cleared %d history entries for owner %s", deleted, owner_mobile)
    return deleted
