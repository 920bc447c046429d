"""
modules/work_status.py — "Can I call you right now?"
=======================================================
One row per person, overwritten on every update.
"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models import User, WorkStatus, utcnow
from app.schemas import WorkStatusUpdate

logger = logging.getLogger(__name__)


def get_work_status(db: Session, user_id: int) -> Optional[WorkStatus]:
    return db.query(WorkStatus).filter(WorkStatus.user_id == user_id).first()


def upsert_work_status(db: Session, user: User, payload: WorkStatusUpdate) -> WorkStatus:
    status = get_work_status(db, user.id)
    if status is None:
        status = WorkStatus(user_id=user.id, status=payload.status, note=payload.note, updated_at=utcnow())
        db.add(status)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.info("Work status insert for user %s lost a race; updating", user.id)
            status = get_work_status(db, user.id)
            if status is None:
                raise
            status.status, status.note, status.updated_at = payload.status, payload.note, utcnow()
            db.commit()
    else:
        status.status = payload.status
        status.note = payload.note
        status.updated_at = utcnow()
        db.commit()

    db.refresh(status)
    return status
