# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# Every test gets its own app wired to an in-memory SQLite database.
# Google is never called: the two OAuth helpers are monkeypatched, and the
# callback's `code` picks which fake profile "signs in".
# =============================================================================

import os

# Keep a developer's .env from leaking into the test run
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.database import Database
from app.main import create_app
from app.modules.pairing import GoogleProfile
from app.services import google_auth

ALEX_EMAIL = "alex@example.com"
SAM_EMAIL = "sam@example.com"

PROFILES = {
    "alex": GoogleProfile(google_id="google-alex", email=ALEX_EMAIL, name="Alex", avatar="https://img/alex.png"),
    "sam": GoogleProfile(google_id="google-sam", email=SAM_EMAIL, name="Sam"),
    "alex-new-id": GoogleProfile(google_id="google-alex-2", email=ALEX_EMAIL, name="Alex"),
    "stranger": GoogleProfile(google_id="google-stranger", email="stranger@example.com", name="Nope"),
}

FAKE_STATE = "test-state"


@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite://",
        google_client_id="test-client-id",
        google_client_secret="test-client-secret",
        session_secret="test-session-secret",
        partner1_email=ALEX_EMAIL,
        partner2_email=SAM_EMAIL,
        environment="test",
        timezone="UTC",
    )


@pytest.fixture
def database(settings):
    db = Database(settings.database_url)
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def session(database):
    s = database.session()
    yield s
    s.close()


@pytest.fixture
def fake_google(monkeypatch):
    def fake_authorization_url(settings, redirect_uri):
        return f"https://accounts.google.test/auth?redirect_uri={redirect_uri}", FAKE_STATE, "verifier"

    def fake_fetch_profile(settings, redirect_uri, code, state, code_verifier=None):
        return PROFILES[code]

    monkeypatch.setattr(google_auth, "authorization_url", fake_authorization_url)
    monkeypatch.setattr(google_auth, "fetch_profile", fake_fetch_profile)


@pytest.fixture
def app(settings, database, fake_google):
    return create_app(settings, db=database)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_client(app, client):
    """Extra browsers against the same app (the first `client` runs startup)."""
    def _make():
        return TestClient(app)
    return _make


def sign_in(client: TestClient, who: str):
    start = client.get("/api/auth/google", follow_redirects=False)
    assert start.status_code == 302
    return client.get(
        "/api/auth/google/callback",
        params={"code": who, "state": FAKE_STATE},
        follow_redirects=False,
    )


@pytest.fixture
def alex(client):
    resp = sign_in(client, "alex")
    assert resp.status_code == 302
    return client


@pytest.fixture
def sam(make_client):
    c = make_client()
    resp = sign_in(c, "sam")
    assert resp.status_code == 302
    return c


@pytest.fixture
def paired(alex, sam):
    """Both partners signed in, so the couple exists. Returns (alex, sam)."""
    return alex, sam
