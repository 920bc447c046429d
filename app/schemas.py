"""
schemas.py — API Request/Response Shapes
==========================================
The JSON the frontend sends and receives. Keys are camelCase on the wire
(`relationshipStart`, `coupleId`) and snake_case in Python; the alias
generator does the translation both ways.

Request schemas are the validation layer: if a payload doesn't fit one of
these, FastAPI rejects it before any handler (or database) is touched, and
the error handler turns that into a 400 with per-field errors.
"""

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel
from datetime import datetime, timezone
from typing import Optional, Literal

EventType = Literal["date", "memory", "anniversary"]
WorkStatusValue = Literal["available", "busy", "in-meeting", "away"]


class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True
        str_strip_whitespace = True


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Offset-aware input becomes naive UTC, which is how every column stores time."""
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


# ============================================================
# Users & Couples
# ============================================================

class UserResponse(CamelModel):
    id: int
    email: str
    name: str
    avatar: Optional[str] = None
    created_at: datetime


class CoupleResponse(CamelModel):
    id: int
    partner1_id: int
    partner2_id: int
    relationship_start: Optional[datetime] = None
    created_at: datetime


class CoupleWithUsersResponse(CamelModel):
    couple: CoupleResponse
    partner1: UserResponse
    partner2: UserResponse


class CoupleCreate(CamelModel):
    """POST /api/couples: optionally backdate when the relationship started."""
    relationship_start: Optional[datetime] = None

    @field_validator("relationship_start")
    @classmethod
    def start_as_utc(cls, v):
        return as_utc(v)


class MeResponse(CamelModel):
    user: UserResponse
    couple: Optional[CoupleResponse] = None


# ============================================================
# Calendar
# ============================================================

class CalendarEventCreate(CamelModel):
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = None
    date: datetime
    type: EventType = "date"

    @field_validator("date")
    @classmethod
    def date_as_utc(cls, v):
        return as_utc(v)


class CalendarEventUpdate(CamelModel):
    """Partial update: only the fields sent are changed."""
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None
    date: Optional[datetime] = None
    type: Optional[EventType] = None

    @field_validator("date")
    @classmethod
    def date_as_utc(cls, v):
        return as_utc(v)


class CalendarEventResponse(CamelModel):
    id: int
    couple_id: int
    title: str
    description: Optional[str] = None
    date: datetime
    type: str
    created_by: int
    created_at: datetime


# ============================================================
# Photos
# ============================================================

class PhotoCreate(CamelModel):
    url: str = Field(min_length=1)
    caption: Optional[str] = None


class PhotoResponse(CamelModel):
    id: int
    couple_id: int
    url: str
    caption: Optional[str] = None
    uploaded_by: int
    created_at: datetime


# ============================================================
# Moods & Work Status
# ============================================================

class MoodCreate(CamelModel):
    emoji: str = Field(min_length=1, max_length=16)
    message: Optional[str] = None


class MoodResponse(CamelModel):
    id: int
    user_id: int
    emoji: str
    message: Optional[str] = None
    date: datetime


class WorkStatusUpdate(CamelModel):
    status: WorkStatusValue
    note: Optional[str] = None


class WorkStatusResponse(CamelModel):
    id: int
    user_id: int
    status: str
    note: Optional[str] = None
    updated_at: datetime


# ============================================================
# Love Notes
# ============================================================

class LoveNoteCreate(CamelModel):
    message: str = Field(min_length=1, max_length=2000)


class LoveNoteResponse(CamelModel):
    id: int
    couple_id: int
    from_user_id: int
    to_user_id: int
    message: str
    created_at: datetime


# ============================================================
# Stats & System
# ============================================================

class StatsResponse(CamelModel):
    days_together: int = 0
    memories_shared: int = 0
    dates_planned: int = 0
    love_notes: int = 0


class SetupStatusResponse(CamelModel):
    database: bool
    google_auth: bool
    emails: bool


class MessageResponse(BaseModel):
    message: str


class HealthResponse(CamelModel):
    status: str
    environment: str
    version: str
    google_connected: bool
