"""
modules/pairing.py — Identity & Couple Pairing
================================================
Two jobs:

1. resolve_user: someone just signed in with Google. Are they one of the
   two allowlisted emails? If so, find (or create) their user row.

2. ensure_couple: once BOTH allowlisted people have signed in at least once,
   link them with a Couple. Safe to call as often as you like; it only
   ever creates one.

The race to watch: both partners signing in for the first time at nearly
the same moment. Each request sees "no couple yet" and tries to insert one.
The (partner1_id, partner2_id) unique key makes the second insert fail;
create_couple catches that, rolls back, and returns the row that won.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import Settings
from app.exceptions import EmailNotAllowed, PartnerNotFound
from app.models import User, Couple, utcnow

logger = logging.getLogger(__name__)


@dataclass
class GoogleProfile:
    """What we keep from a verified Google ID token."""
    google_id: str
    email: str
    name: str = ""
    avatar: Optional[str] = None


def is_allowed(email: str, settings: Settings) -> bool:
    return bool(email) and email.strip().lower() in settings.allowed_emails


def partner_email_for(email: str, settings: Settings) -> Optional[str]:
    """The other address on the allowlist, or None if it isn't configured."""
    me = email.strip().lower()
    others = [e for e in settings.allowed_emails if e != me]
    return others[0] if others else None


def resolve_user(db: Session, profile: GoogleProfile, settings: Settings) -> User:
    """Allowlist check, then find-or-create by Google id (falling back to email). Refreshes name/avatar."""
    if not is_allowed(profile.email, settings):
        logger.warning("Sign-in refused for %s: not on the allowlist", profile.email)
        raise EmailNotAllowed(profile.email)

    email = profile.email.strip().lower()
    user = _find_user(db, profile.google_id, email)
    if user is None:
        user = User(
            email=email,
            name=profile.name or "",
            avatar=profile.avatar,
            google_id=profile.google_id,
        )
        db.add(user)
        try:
            db.commit()
        except IntegrityError:
            # Same account signing in twice at once; the other request inserted it
            db.rollback()
            user = _find_user(db, profile.google_id, email)
            if user is None:
                raise
        else:
            logger.info("Created user for %s", email)
            db.refresh(user)
            return user

    if user.google_id != profile.google_id:
        # The allowlisted, verified email is the identity; the Google id can change
        logger.warning("Rebinding %s to a new Google account id", email)
        user.google_id = profile.google_id
    if profile.name:
        user.name = profile.name
    if profile.avatar:
        user.avatar = profile.avatar

    db.commit()
    db.refresh(user)
    return user


def _find_user(db: Session, google_id: str, email: str) -> Optional[User]:
    user = db.query(User).filter(User.google_id == google_id).first()
    if user is None:
        user = db.query(User).filter(User.email == email).first()
    return user


def find_couple_for_user(db: Session, user_id: int) -> Optional[Couple]:
    return (
        db.query(Couple)
        .filter(or_(Couple.partner1_id == user_id, Couple.partner2_id == user_id))
        .first()
    )


def create_couple(
    db: Session,
    user: User,
    partner: User,
    relationship_start: Optional[datetime] = None,
) -> Couple:
    """
    Insert the couple row for this pair, or return the one that already exists.

    Partners are stored lowest id first, so the unique key covers both orders.
    """
    first, second = sorted((user, partner), key=lambda u: u.id)
    couple = Couple(
        partner1_id=first.id,
        partner2_id=second.id,
        relationship_start=relationship_start or utcnow(),
    )
    db.add(couple)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        existing = find_couple_for_user(db, user.id)
        if existing is None:
            raise
        logger.info("Couple for users %s/%s already created by a concurrent request", first.id, second.id)
        return existing

    db.refresh(couple)
    logger.info("Created couple %s for users %s/%s", couple.id, first.id, second.id)
    return couple


def ensure_couple(
    db: Session,
    user: User,
    settings: Settings,
    relationship_start: Optional[datetime] = None,
) -> Optional[Couple]:
    """
    Existing couple for this user, or a new one if the partner has signed up.
    Returns None while the partner has never signed in.
    """
    existing = find_couple_for_user(db, user.id)
    if existing is not None:
        return existing

    partner_email = partner_email_for(user.email, settings)
    if partner_email is None:
        return None

    partner = db.query(User).filter(User.email == partner_email).first()
    if partner is None:
        return None

    return create_couple(db, user, partner, relationship_start)


def require_couple(db: Session, user: User, settings: Settings) -> Couple:
    """For writes: try pairing once inline, fail loudly if there's still no partner."""
    couple = ensure_couple(db, user, settings)
    if couple is None:
        raise PartnerNotFound()
    return couple
