"""
routers/couples.py — Who Am I, Who's My Partner
==================================================
GET  /api/users/me    → {user, couple}
GET  /api/couples/me  → {couple, partner1, partner2}, or null before pairing
POST /api/couples     → pair up now (optionally with a real start date)
"""

from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.auth import get_current_user, get_settings
from app.config import Settings
from app.database import get_db
from app.exceptions import PartnerNotFound
from app.models import User, Couple
from app.modules.pairing import find_couple_for_user, ensure_couple
from app.schemas import (
    CoupleCreate, CoupleResponse, CoupleWithUsersResponse, MeResponse, UserResponse,
)

router = APIRouter(tags=["couples"])


def _with_users(couple: Couple) -> CoupleWithUsersResponse:
    return CoupleWithUsersResponse(
        couple=CoupleResponse.model_validate(couple),
        partner1=UserResponse.model_validate(couple.partner1),
        partner2=UserResponse.model_validate(couple.partner2),
    )


@router.get("/api/users/me", response_model=MeResponse)
def me(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> MeResponse:
    couple = find_couple_for_user(db, user.id)
    return MeResponse(
        user=UserResponse.model_validate(user),
        couple=CoupleResponse.model_validate(couple) if couple else None,
    )


@router.get("/api/couples/me", response_model=Optional[CoupleWithUsersResponse])
def my_couple(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    couple = find_couple_for_user(db, user.id)
    if couple is None:
        return None
    return _with_users(couple)


@router.post("/api/couples", response_model=CoupleWithUsersResponse)
def create_couple(
    payload: CoupleCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> CoupleWithUsersResponse:
    """
    Idempotent: returns the existing couple if there is one. A
    relationshipStart in the body is applied either way, so this is also
    how the couple sets their real anniversary.
    """
    couple = ensure_couple(db, user, settings, relationship_start=payload.relationship_start)
    if couple is None:
        raise PartnerNotFound()

    if payload.relationship_start is not None and couple.relationship_start != payload.relationship_start:
        couple.relationship_start = payload.relationship_start
        db.commit()
        db.refresh(couple)

    return _with_users(couple)
