"""
routers/love_notes.py — Love Notes & Stats Endpoints
======================================================
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.auth import get_current_user, get_settings
from app.config import Settings
from app.database import get_db
from app.models import User
from app.modules import love_notes, stats
from app.modules.pairing import find_couple_for_user, require_couple
from app.schemas import LoveNoteCreate, LoveNoteResponse, StatsResponse

router = APIRouter(tags=["love-notes"])


@router.get("/api/love-notes", response_model=list[LoveNoteResponse])
def list_notes(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> list[LoveNoteResponse]:
    notes = love_notes.list_notes(db, find_couple_for_user(db, user.id))
    return [LoveNoteResponse.model_validate(n) for n in notes]


@router.post("/api/love-notes", response_model=LoveNoteResponse)
def send_note(
    payload: LoveNoteCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> LoveNoteResponse:
    couple = require_couple(db, user, settings)
    return LoveNoteResponse.model_validate(love_notes.create_note(db, couple, user, payload))


@router.get("/api/stats", response_model=StatsResponse, tags=["stats"])
def couple_stats(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> StatsResponse:
    # Zeros until the couple exists
    return stats.couple_stats(db, find_couple_for_user(db, user.id))
