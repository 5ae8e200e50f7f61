"""
Application error taxonomy.

Each error carries the HTTP status it maps to and the JSON key its message is
rendered under (most endpoints answer `{"message": ...}`, a few older ones
answer `{"error": ...}`). The API layer registers one handler for AppError.
"""

from __future__ import annotations

from typing import Any


class AppError(Exception):
    """Base error rendered as a JSON body by the API layer."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(
        self,
        message: str | None = None,
        *,
        key: str = "message",
        extra: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.default_message
        self.key = key
        self.extra = extra or {}
        super().__init__(self.message)

    def to_body(self) -> dict[str, Any]:
        body: dict[str, Any] = dict(self.extra)
        body[self.key] = self.message
        return body


class ValidationError(AppError):
    status_code = 400
    default_message = "Invalid request"


class ConflictError(AppError):
    status_code = 400
    default_message = "Already exists"


class DuplicateError(AppError):
    """Unique-key clash reported as 409 (course slugs)."""

    status_code = 409
    default_message = "Already exists"


class InvalidTokenError(AppError):
    status_code = 400
    default_message = "Invalid token"


class ExpiredTokenError(InvalidTokenError):
    default_message = "Token expired"


class AuthorizationError(AppError):
    status_code = 401
    default_message = "Unauthorized"


class ForbiddenError(AppError):
    status_code = 403
    default_message = "Forbidden"


class NotFoundError(AppError):
    status_code = 404
    default_message = "Not found"


class InternalError(AppError):
    status_code = 500
    default_message = "Internal server error"
