"""
routers/calendar.py — Shared Calendar Endpoints
=================================================
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.auth import get_current_user, get_settings
from app.config import Settings
from app.database import get_db
from app.models import User
from app.modules import calendar
from app.modules.pairing import find_couple_for_user, require_couple
from app.schemas import CalendarEventCreate, CalendarEventUpdate, CalendarEventResponse, MessageResponse

router = APIRouter(prefix="/api/calendar/events", tags=["calendar"])


@router.get("", response_model=list[CalendarEventResponse])
def list_events(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> list[CalendarEventResponse]:
    events = calendar.list_events(db, find_couple_for_user(db, user.id))
    return [CalendarEventResponse.model_validate(e) for e in events]


@router.post("", response_model=CalendarEventResponse)
def create_event(
    payload: CalendarEventCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> CalendarEventResponse:
    couple = require_couple(db, user, settings)
    event = calendar.create_event(db, couple, user, payload)
    return CalendarEventResponse.model_validate(event)


@router.patch("/{event_id}", response_model=CalendarEventResponse)
def update_event(
    event_id: int,
    payload: CalendarEventUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> CalendarEventResponse:
    couple = require_couple(db, user, settings)
    event = calendar.update_event(db, couple, event_id, payload)
    return CalendarEventResponse.model_validate(event)


@router.delete("/{event_id}", response_model=MessageResponse)
def delete_event(
    event_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> MessageResponse:
    couple = require_couple(db, user, settings)
    calendar.delete_event(db, couple, event_id)
    return MessageResponse(message="Event deleted")
