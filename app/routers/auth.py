"""
routers/auth.py — Sign-in / Sign-out
=======================================
GET  /api/auth/google           → bounce to Google's consent screen
GET  /api/auth/google/callback  → Google bounces back here; we check the
                                  allowlist, create the user (and the couple,
                                  if the partner's already here), set the
                                  session cookie, and send the browser home
POST /api/auth/logout
GET  /api/auth/user
"""

import logging
from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from app.auth import get_current_user, get_settings, login_session, logout_session
from app.config import Settings
from app.database import get_db
from app.exceptions import OAuthNotConfigured, OAuthStateMismatch, Unauthorized
from app.models import User
from app.modules.pairing import resolve_user, ensure_couple
from app.schemas import UserResponse, MessageResponse
from app.services import google_auth

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])

OAUTH_STATE_KEY = "oauth_state"
OAUTH_VERIFIER_KEY = "oauth_code_verifier"


@router.get("/google")
async def google_login(request: Request, settings: Settings = Depends(get_settings)):
    if not google_auth.is_google_configured(settings):
        raise OAuthNotConfigured()

    redirect_uri = str(request.url_for("google_callback"))
    url, state, code_verifier = google_auth.authorization_url(settings, redirect_uri)
    request.session[OAUTH_STATE_KEY] = state
    if code_verifier:
        request.session[OAUTH_VERIFIER_KEY] = code_verifier
    return RedirectResponse(url, status_code=302)


@router.get("/google/callback", name="google_callback")
async def google_callback(
    request: Request,
    code: str = "",
    state: str = "",
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    if not google_auth.is_google_configured(settings):
        return RedirectResponse("/setup", status_code=302)

    expected_state = request.session.pop(OAUTH_STATE_KEY, None)
    code_verifier = request.session.pop(OAUTH_VERIFIER_KEY, None)
    if not state or state != expected_state:
        raise OAuthStateMismatch()
    if not code:
        raise Unauthorized("Google did not return an authorization code")

    redirect_uri = str(request.url_for("google_callback"))
    profile = await run_in_threadpool(
        google_auth.fetch_profile, settings, redirect_uri, code, state, code_verifier
    )

    user = resolve_user(db, profile, settings)
    ensure_couple(db, user, settings)

    login_session(request, user)
    logger.info("User %s signed in", user.id)
    return RedirectResponse("/", status_code=302)


@router.post("/logout", response_model=MessageResponse)
def logout(request: Request, user: User = Depends(get_current_user)):
    logout_session(request)
    logger.info("User %s signed out", user.id)
    return MessageResponse(message="Logged out successfully")


@router.get("/user", response_model=UserResponse)
def current_user(user: User = Depends(get_current_user)) -> UserResponse:
    return UserResponse.model_validate(user)
