"""
modules/stats.py — Couple Stats
==================================
The four numbers on the dashboard header. Recomputed on every request:
they're three COUNT(*)s and a date subtraction.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models import Couple, CalendarEvent, Photo, LoveNote
from app.schemas import StatsResponse


def days_since(start: Optional[datetime], now: Optional[datetime] = None) -> int:
    """Whole days elapsed (floored). 0 if unset or in the future."""
    if start is None:
        return 0
    now = now or datetime.now(timezone.utc)
    # SQLite hands back naive datetimes; everything we store is UTC
    if start.tzinfo is None:
        start = start.replace(tzinfo=timezone.utc)
    return max((now - start).days, 0)


def _count(db: Session, model, couple_id: int) -> int:
    return db.query(func.count(model.id)).filter(model.couple_id == couple_id).scalar() or 0


def couple_stats(db: Session, couple: Optional[Couple], now: Optional[datetime] = None) -> StatsResponse:
    if couple is None:
        return StatsResponse()
    return StatsResponse(
        days_together=days_since(couple.relationship_start, now),
        memories_shared=_count(db, Photo, couple.id),
        dates_planned=_count(db, CalendarEvent, couple.id),
        love_notes=_count(db, LoveNote, couple.id),
    )
