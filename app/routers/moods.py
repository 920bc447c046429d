"""
routers/moods.py — Mood & Work Status Endpoints
=================================================
The two "how are you right now" indicators. Both belong to a person rather
than the couple, so neither needs pairing to write. Only the partner view
does.

GET  /api/moods/today           own mood for today, or null
GET  /api/moods/partner/today   partner's mood for today, or null
POST /api/moods                 set (or replace) today's mood
GET  /api/work-status/me        own status, or null
POST /api/work-status           set status
"""

from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.auth import get_current_user, get_settings
from app.config import Settings
from app.database import get_db
from app.models import User
from app.modules import moods, work_status
from app.modules.pairing import find_couple_for_user
from app.schemas import MoodCreate, MoodResponse, WorkStatusUpdate, WorkStatusResponse

router = APIRouter(tags=["moods"])


def _mood_or_none(mood) -> Optional[MoodResponse]:
    return MoodResponse.model_validate(mood) if mood else None


@router.get("/api/moods/today", response_model=Optional[MoodResponse])
def my_mood_today(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    return _mood_or_none(moods.get_mood_for_day(db, user.id, moods.local_today(settings)))


@router.get("/api/moods/partner/today", response_model=Optional[MoodResponse])
def partner_mood_today(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    couple = find_couple_for_user(db, user.id)
    if couple is None:
        return None
    partner_id = couple.partner_id_of(user.id)
    return _mood_or_none(moods.get_mood_for_day(db, partner_id, moods.local_today(settings)))


@router.post("/api/moods", response_model=MoodResponse)
def set_mood(
    payload: MoodCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> MoodResponse:
    return MoodResponse.model_validate(moods.upsert_mood_for_today(db, user, payload, settings))


@router.get("/api/work-status/me", response_model=Optional[WorkStatusResponse])
def my_work_status(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    status = work_status.get_work_status(db, user.id)
    return WorkStatusResponse.model_validate(status) if status else None


@router.post("/api/work-status", response_model=WorkStatusResponse)
def set_work_status(
    payload: WorkStatusUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> WorkStatusResponse:
    return WorkStatusResponse.model_validate(work_status.upsert_work_status(db, user, payload))
