"""
exceptions.py — Error Types & Handlers
========================================
Every failure the API reports is one of these. Handlers raise them; the
handlers registered at the bottom turn them into JSON:

    {"detail": "...", "code": "...", "errors": [...]}

`errors` only appears for InvalidInput (one item per bad field).
"""

import logging
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class LoveSyncError(Exception):
    """Base error. Carries everything needed to build the HTTP response."""

    def __init__(
        self,
        message: str,
        code: str = "LOVESYNC_ERROR",
        status_code: int = 500,
        errors: Optional[list[dict[str, Any]]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.errors = errors

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"detail": self.message, "code": self.code}
        if self.errors is not None:
            result["errors"] = self.errors
        return result


# ─── Auth ──────────────────────────────────────────────────

class Unauthorized(LoveSyncError):
    """No session, or a session for a user that no longer exists."""

    def __init__(self, message: str = "Authentication required", code: str = "UNAUTHORIZED", status_code: int = 401):
        super().__init__(message, code=code, status_code=status_code)


class EmailNotAllowed(Unauthorized):
    def __init__(self, email: str):
        super().__init__(
            f"{email or 'This account'} is not allowed to sign in",
            code="EMAIL_NOT_ALLOWED",
            status_code=403,
        )


class OAuthStateMismatch(Unauthorized):
    def __init__(self):
        super().__init__("Sign-in state did not match; start again", code="OAUTH_STATE_MISMATCH", status_code=403)


class OAuthNotConfigured(LoveSyncError):
    def __init__(self):
        super().__init__("Google OAuth not configured", code="OAUTH_NOT_CONFIGURED", status_code=503)


# ─── Input / lookup ───────────────────────────────────────

class InvalidInput(LoveSyncError):
    def __init__(self, errors: list[dict[str, Any]], message: str = "Invalid input"):
        super().__init__(message, code="INVALID_INPUT", status_code=400, errors=errors)


class NotFound(LoveSyncError):
    def __init__(self, message: str = "Not found", code: str = "NOT_FOUND"):
        super().__init__(message, code=code, status_code=404)


class PartnerNotFound(NotFound):
    """A write needed a couple, and the partner has never signed in."""

    def __init__(self):
        super().__init__("Your partner hasn't signed in yet", code="PARTNER_NOT_FOUND")


# ─── Storage ──────────────────────────────────────────────

class StorageUnavailable(LoveSyncError):
    def __init__(self, message: str = "Storage unavailable"):
        super().__init__(message, code="STORAGE_UNAVAILABLE", status_code=500)


# ─── Handlers ─────────────────────────────────────────────

def _field_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    errors = []
    for err in exc.errors():
        # loc looks like ("body", "title"); the leading "body"/"query" isn't useful to a client
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        errors.append({"field": ".".join(loc) or None, "message": err.get("msg", "Invalid value")})
    return errors


async def lovesync_error_handler(request: Request, exc: LoveSyncError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return await lovesync_error_handler(request, InvalidInput(_field_errors(exc)))


async def storage_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Storage failure on %s %s", request.method, request.url.path)
    return await lovesync_error_handler(request, StorageUnavailable())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(LoveSyncError, lovesync_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, storage_error_handler)
