"""
routers/photos.py — Photo Gallery Endpoints
=============================================
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.auth import get_current_user, get_settings
from app.config import Settings
from app.database import get_db
from app.models import User
from app.modules import photos
from app.modules.pairing import find_couple_for_user, require_couple
from app.schemas import PhotoCreate, PhotoResponse, MessageResponse

router = APIRouter(prefix="/api/photos", tags=["photos"])


@router.get("", response_model=list[PhotoResponse])
def list_photos(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> list[PhotoResponse]:
    return [PhotoResponse.model_validate(p) for p in photos.list_photos(db, find_couple_for_user(db, user.id))]


@router.post("", response_model=PhotoResponse)
def create_photo(
    payload: PhotoCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> PhotoResponse:
    couple = require_couple(db, user, settings)
    return PhotoResponse.model_validate(photos.create_photo(db, couple, user, payload))


@router.delete("/{photo_id}", response_model=MessageResponse)
def delete_photo(
    photo_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> MessageResponse:
    couple = require_couple(db, user, settings)
    photos.delete_photo(db, couple, photo_id)
    return MessageResponse(message="Photo deleted")
