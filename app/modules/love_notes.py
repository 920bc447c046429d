"""
modules/love_notes.py — Love Notes
=====================================
Short messages between the two partners. The recipient is never sent by
the client: it's always "the other person in the couple".
"""

from typing import Optional
from sqlalchemy.orm import Session

from app.models import User, Couple, LoveNote
from app.schemas import LoveNoteCreate


def list_notes(db: Session, couple: Optional[Couple]) -> list[LoveNote]:
    if couple is None:
        return []
    return (
        db.query(LoveNote)
        .filter(LoveNote.couple_id == couple.id)
        .order_by(LoveNote.created_at.desc(), LoveNote.id.desc())
        .all()
    )


def create_note(db: Session, couple: Couple, sender: User, payload: LoveNoteCreate) -> LoveNote:
    note = LoveNote(
        couple_id=couple.id,
        from_user_id=sender.id,
        to_user_id=couple.partner_id_of(sender.id),
        message=payload.message,
    )
    db.add(note)
    db.commit()
    db.refresh(note)
    return note
