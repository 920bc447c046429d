"""
modules/moods.py — Daily Mood Check-in
=========================================
One mood per person per day. Posting again the same day replaces the
earlier one (emoji, message, and timestamp all move to the new values).

"Day" is the calendar day in settings.timezone. A mood posted at 11pm in
Toronto belongs to that day, not to tomorrow's UTC date.
"""

import logging
from datetime import datetime, date, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import Settings
from app.models import User, Mood
from app.schemas import MoodCreate

logger = logging.getLogger(__name__)


def local_today(settings: Settings, now: Optional[datetime] = None) -> date:
    now = now or datetime.now(timezone.utc)
    return now.astimezone(ZoneInfo(settings.timezone)).date()


def get_mood_for_day(db: Session, user_id: int, day: date) -> Optional[Mood]:
    return db.query(Mood).filter(Mood.user_id == user_id, Mood.day == day).first()


def upsert_mood_for_today(
    db: Session,
    user: User,
    payload: MoodCreate,
    settings: Settings,
    now: Optional[datetime] = None,
) -> Mood:
    now = now or datetime.now(timezone.utc)
    day = local_today(settings, now)

    mood = get_mood_for_day(db, user.id, day)
    if mood is None:
        mood = Mood(user_id=user.id, emoji=payload.emoji, message=payload.message, date=now, day=day)
        db.add(mood)
        try:
            db.commit()
        except IntegrityError:
            # Another request inserted today's row first; update that one instead
            db.rollback()
            logger.info("Mood insert for user %s on %s lost a race; updating", user.id, day)
            mood = get_mood_for_day(db, user.id, day)
            if mood is None:
                raise
            mood.emoji, mood.message, mood.date = payload.emoji, payload.message, now
            db.commit()
    else:
        mood.emoji = payload.emoji
        mood.message = payload.message
        mood.date = now
        db.commit()

    db.refresh(mood)
    return mood
