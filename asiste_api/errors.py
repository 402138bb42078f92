"""Error taxonomy shared by routers and services.

Every error maps to an HTTP status and renders as ``{"error": message}``
(plus any ``extra`` keys) through the handlers registered in ``main``.
"""

from typing import Any


class ApiError(Exception):
    """Base class for errors that carry their own HTTP status."""

    status_code = 500

    def __init__(self, message: str, **extra: Any) -> None:
        super().__init__(message)
        self.message = message
        self.extra = extra

    def to_body(self) -> dict[str, Any]:
        return {"error": self.message, **self.extra}


class ValidationError(ApiError):
    """Malformed or missing input."""

    status_code = 400


class AuthError(ApiError):
    status_code = 401


class UnauthorizedError(AuthError):
    """Missing token or bad credentials."""

    status_code = 401


class ForbiddenError(AuthError):
    """Token present but invalid or expired."""

    status_code = 403


class NotFoundError(ApiError):
    status_code = 404

