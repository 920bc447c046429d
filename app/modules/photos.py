"""
modules/photos.py — Photo Gallery
====================================
We store URLs, not bytes. The image itself lives wherever the frontend
uploaded it.
"""

from typing import Optional
from sqlalchemy.orm import Session

from app.exceptions import NotFound
from app.models import User, Couple, Photo
from app.schemas import PhotoCreate


def list_photos(db: Session, couple: Optional[Couple]) -> list[Photo]:
    if couple is None:
        return []
    return (
        db.query(Photo)
        .filter(Photo.couple_id == couple.id)
        .order_by(Photo.created_at.desc(), Photo.id.desc())
        .all()
    )


def create_photo(db: Session, couple: Couple, user: User, payload: PhotoCreate) -> Photo:
    photo = Photo(
        couple_id=couple.id,
        url=payload.url,
        caption=payload.caption,
        uploaded_by=user.id,
    )
    db.add(photo)
    db.commit()
    db.refresh(photo)
    return photo


def delete_photo(db: Session, couple: Couple, photo_id: int) -> None:
    photo = db.query(Photo).filter(Photo.id == photo_id, Photo.couple_id == couple.id).first()
    if photo is None:
        raise NotFound("Photo not found")
    db.delete(photo)
    db.commit()
