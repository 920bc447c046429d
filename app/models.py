"""
models.py — Database Table Definitions
========================================
Seven flat tables. Two of them (users, couples) are about WHO; the other
five are the things a couple shares.

Ownership:
  - Shared things (calendar events, photos, love notes) hang off a Couple.
  - Personal things (mood, work status) hang off a User.

The interesting constraints are the uniqueness ones. They keep
"one couple per pair", "one mood per person per day" and "one status per
person" true even when two requests race each other.
"""

from sqlalchemy import (
    Column, Integer, String, Text, DateTime, Date, ForeignKey,
    UniqueConstraint, CheckConstraint,
)
from sqlalchemy.orm import relationship
from datetime import datetime, timezone

from app.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


EVENT_TYPES = ("date", "memory", "anniversary")
WORK_STATUSES = ("available", "busy", "in-meeting", "away")


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=False, default="")
    avatar = Column(String, nullable=True)
    google_id = Column(String, unique=True, index=True, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)


class Couple(Base):
    """
    The pairing record. Exactly two users, stored lowest id first so that
    (A, B) and (B, A) collide on the same unique key.
    """
    __tablename__ = "couples"
    __table_args__ = (
        UniqueConstraint("partner1_id", "partner2_id", name="uq_couples_partners"),
        CheckConstraint("partner1_id < partner2_id", name="ck_couples_partner_order"),
    )

    id = Column(Integer, primary_key=True, index=True)
    partner1_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    partner2_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    relationship_start = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    partner1 = relationship("User", foreign_keys=[partner1_id])
    partner2 = relationship("User", foreign_keys=[partner2_id])

    def includes_user(self, user_id: int) -> bool:
        return user_id in (self.partner1_id, self.partner2_id)

    def partner_id_of(self, user_id: int) -> int:
        """Given one partner, return the other one's id."""
        return self.partner2_id if user_id == self.partner1_id else self.partner1_id


class CalendarEvent(Base):
    __tablename__ = "calendar_events"

    id = Column(Integer, primary_key=True, index=True)
    couple_id = Column(Integer, ForeignKey("couples.id"), nullable=False, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    date = Column(DateTime, nullable=False, index=True)
    type = Column(String, nullable=False)  # one of EVENT_TYPES
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)


class Photo(Base):
    __tablename__ = "photos"

    id = Column(Integer, primary_key=True, index=True)
    couple_id = Column(Integer, ForeignKey("couples.id"), nullable=False, index=True)
    url = Column(String, nullable=False)
    caption = Column(Text, nullable=True)
    uploaded_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)


class Mood(Base):
    """
    One mood per user per calendar day. `day` is the local date of `date`
    (in settings.timezone), and the unique key is built on it.
    """
    __tablename__ = "moods"
    __table_args__ = (
        UniqueConstraint("user_id", "day", name="uq_moods_user_day"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    emoji = Column(String, nullable=False)
    message = Column(Text, nullable=True)
    date = Column(DateTime, default=utcnow, nullable=False)
    day = Column(Date, nullable=False)


class WorkStatus(Base):
    __tablename__ = "work_status"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, unique=True, index=True)
    status = Column(String, nullable=False)  # one of WORK_STATUSES
    note = Column(Text, nullable=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)


class LoveNote(Base):
    __tablename__ = "love_notes"

    id = Column(Integer, primary_key=True, index=True)
    couple_id = Column(Integer, ForeignKey("couples.id"), nullable=False, index=True)
    from_user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    to_user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    message = Column(Text, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
