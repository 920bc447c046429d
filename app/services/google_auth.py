"""
google_auth.py — Google Sign-In (OAuth 2.0 web flow)
=====================================================
Two steps, one per request:

1. authorization_url(): build the Google consent URL. Returns the URL plus
   the `state` and PKCE `code_verifier`, which the caller stashes in the
   session so step 2 can prove it's the same browser.

2. fetch_profile(): Google redirected back with ?code=...; trade it for
   tokens, verify the ID token's signature and audience, and pull out the
   identity fields we store.

We only ask for identity scopes; no Calendar/Gmail access is needed.
"""

import os
from typing import Optional

from google.auth.transport.requests import Request
from google.oauth2 import id_token
from google_auth_oauthlib.flow import Flow

from app.config import Settings
from app.modules.pairing import GoogleProfile

SCOPES = [
    "openid",
    "https://www.googleapis.com/auth/userinfo.email",
    "https://www.googleapis.com/auth/userinfo.profile",
]

AUTH_URI = "https://accounts.google.com/o/oauth2/auth"
TOKEN_URI = "https://oauth2.googleapis.com/token"


def is_google_configured(settings: Settings) -> bool:
    """Check if Google OAuth client credentials are set."""
    return settings.google_configured


def _client_config(settings: Settings) -> dict:
    return {
        "web": {
            "client_id": settings.google_client_id,
            "client_secret": settings.google_client_secret,
            "auth_uri": AUTH_URI,
            "token_uri": TOKEN_URI,
        }
    }


def _build_flow(
    settings: Settings,
    redirect_uri: str,
    state: Optional[str] = None,
    code_verifier: Optional[str] = None,
) -> Flow:
    # oauthlib refuses plain-http callbacks unless told otherwise; fine for localhost
    if settings.environment == "development":
        os.environ.setdefault("OAUTHLIB_INSECURE_TRANSPORT", "1")
    flow = Flow.from_client_config(
        _client_config(settings),
        scopes=SCOPES,
        redirect_uri=redirect_uri,
        state=state,
    )
    if code_verifier:
        flow.code_verifier = code_verifier
    return flow


def authorization_url(settings: Settings, redirect_uri: str) -> tuple[str, str, Optional[str]]:
    """Returns (url, state, code_verifier)."""
    flow = _build_flow(settings, redirect_uri)
    url, state = flow.authorization_url(prompt="select_account", include_granted_scopes="true")
    return url, state, flow.code_verifier


def fetch_profile(
    settings: Settings,
    redirect_uri: str,
    code: str,
    state: str,
    code_verifier: Optional[str] = None,
) -> GoogleProfile:
    """
    Exchange the callback code and verify the resulting ID token.
    Blocking (network calls); run it in a threadpool from async code.
    """
    flow = _build_flow(settings, redirect_uri, state=state, code_verifier=code_verifier)
    flow.fetch_token(code=code)

    claims = id_token.verify_oauth2_token(
        flow.credentials.id_token,
        Request(),
        settings.google_client_id,
    )
    email = claims.get("email", "") if claims.get("email_verified", False) else ""
    return GoogleProfile(
        google_id=claims["sub"],
        email=email,
        name=claims.get("name", ""),
        avatar=claims.get("picture"),
    )
