"""FastAPI dependencies — injected collaborators and the admin auth gate."""

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from fastapi.security.utils import get_authorization_scheme_param

from asiste_api.config import Settings
from asiste_api.errors import ForbiddenError, UnauthorizedError
from asiste_api.models.admin import AdminIdentity
from asiste_api.services.auth import decode_token
from asiste_api.services.database import Database
from asiste_api.services.notifications import Notifier

bearer_scheme = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_notifier(request: Request) -> Notifier:
    return request.app.state.notifier


async def require_admin(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    settings: Settings = Depends(get_app_settings),
) -> AdminIdentity:
    """Gate for admin routes.

    No token at all → 401. A token that fails verification, or one sent
    under a scheme other than ``Bearer``, → 403. The decoded identity is
    also stored on ``request.state.admin``.
    """
    if credentials is None:
        _, token = get_authorization_scheme_param(
            request.headers.get("Authorization")
        )
        if token:
            raise ForbiddenError("Invalid token")
        raise UnauthorizedError("Access token required")

    admin = decode_token(credentials.credentials, settings)
    request.state.admin = admin
    return admin
