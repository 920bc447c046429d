"""
modules/calendar.py — Shared Calendar
========================================
Dates, memories and anniversaries the couple plans together. Events belong
to the couple, not to whoever created them, so both partners can edit or
delete any of them.
"""

from typing import Optional
from sqlalchemy.orm import Session

from app.exceptions import NotFound
from app.models import User, Couple, CalendarEvent
from app.schemas import CalendarEventCreate, CalendarEventUpdate


def list_events(db: Session, couple: Optional[Couple]) -> list[CalendarEvent]:
    """Newest event date first. No couple yet means nothing to show."""
    if couple is None:
        return []
    return (
        db.query(CalendarEvent)
        .filter(CalendarEvent.couple_id == couple.id)
        .order_by(CalendarEvent.date.desc(), CalendarEvent.id.desc())
        .all()
    )


def create_event(db: Session, couple: Couple, user: User, payload: CalendarEventCreate) -> CalendarEvent:
    event = CalendarEvent(
        couple_id=couple.id,
        title=payload.title,
        description=payload.description,
        date=payload.date,
        type=payload.type,
        created_by=user.id,
    )
    db.add(event)
    db.commit()
    db.refresh(event)
    return event


def _get_owned(db: Session, couple: Couple, event_id: int) -> CalendarEvent:
    event = (
        db.query(CalendarEvent)
        .filter(CalendarEvent.id == event_id, CalendarEvent.couple_id == couple.id)
        .first()
    )
    if event is None:
        raise NotFound("Event not found")
    return event


def update_event(db: Session, couple: Couple, event_id: int, payload: CalendarEventUpdate) -> CalendarEvent:
    event = _get_owned(db, couple, event_id)
    for field, value in payload.model_dump(exclude_unset=True).items():
        # title/date/type are NOT NULL; an explicit null means "leave it"
        if value is None and field != "description":
            continue
        setattr(event, field, value)
    db.commit()
    db.refresh(event)
    return event


def delete_event(db: Session, couple: Couple, event_id: int) -> None:
    event = _get_owned(db, couple, event_id)
    db.delete(event)
    db.commit()
