"""
config.py — Centralized Settings
=================================
Every setting the app needs, in one place. Reads from .env file.

Nothing here is strictly required to boot: a missing DATABASE_URL falls back
to a local SQLite file, and missing Google/partner settings are reported by
GET /api/setup/status instead of crashing the server.
"""

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    # --- Database ---
    # Empty means "not configured"; the app uses a local SQLite file.
    database_url: str = Field(default="")

    # --- Google OAuth (sign-in) ---
    google_client_id: str = Field(default="")
    google_client_secret: str = Field(default="")

    # --- Sessions ---
    session_secret: str = Field(default="dev-session-secret-change-me")
    session_max_age: int = Field(default=60 * 60 * 24, description="Session cookie lifetime in seconds")

    # --- The two people allowed in ---
    partner1_email: str = Field(default="")
    partner2_email: str = Field(default="")

    # --- Server ---
    environment: str = Field(default="development")
    # Decides what "today" means for moods.
    timezone: str = Field(default="UTC")
    log_level: str = Field(default="INFO")

    class Config:
        env_file = ".env"
        case_sensitive = False

    @property
    def allowed_emails(self) -> list[str]:
        """The allowlist, normalized. Blank entries are dropped."""
        return [e.strip().lower() for e in (self.partner1_email, self.partner2_email) if e.strip()]

    @property
    def google_configured(self) -> bool:
        return bool(self.google_client_id and self.google_client_secret)

    @property
    def emails_configured(self) -> bool:
        return bool(self.partner1_email.strip() and self.partner2_email.strip())


settings = Settings()
