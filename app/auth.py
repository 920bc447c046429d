"""
auth.py — Session Authentication
==================================
Sign-in happens once through Google (routers/auth.py). After that the
browser just carries a signed session cookie holding our user id.

`get_current_user` is the gate every protected endpoint depends on: no
session (or a session pointing at a user that's gone) means 401, and the
handler never runs. A user whose email has since been dropped from the
allowlist gets 403 and loses the session.
"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.config import Settings
from app.database import get_db
from app.exceptions import EmailNotAllowed, Unauthorized
from app.models import User

SESSION_USER_KEY = "user_id"


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def login_session(request: Request, user: User) -> None:
    # Fresh session on sign-in; drops any leftover OAuth state
    request.session.clear()
    request.session[SESSION_USER_KEY] = user.id


def logout_session(request: Request) -> None:
    request.session.clear()


async def get_current_user(
    request: Request,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> User:
    user_id = request.session.get(SESSION_USER_KEY)
    if user_id is None:
        raise Unauthorized()

    user = db.get(User, user_id)
    if user is None:
        request.session.clear()
        raise Unauthorized()
    if user.email not in settings.allowed_emails:
        request.session.clear()
        raise EmailNotAllowed(user.email)
    return user
