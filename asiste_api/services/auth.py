"""Admin login and bearer-token handling.

Tokens are self-contained HS256 JWTs; there is no session store.
"""

import asyncio
import logging
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt
from pydantic import ValidationError as PydanticValidationError

from asiste_api.config import Settings
from asiste_api.errors import ForbiddenError, UnauthorizedError, ValidationError
from asiste_api.models.admin import AdminIdentity, LoginResponse
from asiste_api.services.admins import find_active_admin
from asiste_api.services.database import Database
from asiste_api.services.validation import is_blank

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def check_password(password: str, password_hash: str) -> bool:
    """bcrypt comparison. Malformed hashes count as a mismatch."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        logger.warning("Stored admin password hash is not a valid bcrypt hash")
        return False


def issue_token(
    admin: AdminIdentity, settings: Settings, now: datetime | None = None
) -> str:
    """Sign a token carrying the admin's identity, valid ``token_ttl_hours``."""
    now = now or datetime.now(timezone.utc)
    payload = {
        **admin.model_dump(),
        "iat": now,
        "exp": now + timedelta(hours=settings.token_ttl_hours),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=ALGORITHM)


def decode_token(token: str, settings: Settings) -> AdminIdentity:
    """Return the identity in a valid token.

    Raises ForbiddenError for a bad signature, an expired token, or claims
    that do not describe an admin.
    """
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[ALGORITHM],
            options={"require": ["exp"]},
        )
        return AdminIdentity.model_validate(claims)
    except (jwt.PyJWTError, PydanticValidationError) as exc:
        logger.info("Rejected admin token: %s", exc)
        raise ForbiddenError("Invalid token") from exc


async def authenticate(
    db: Database, settings: Settings, username: str | None, password: str | None
) -> LoginResponse:
    """Check admin credentials and issue a token.

    Unknown, inactive and wrong-password logins are indistinguishable to the
    caller. There is no lockout after repeated failures.
    """
    if is_blank(username) or is_blank(password):
        raise ValidationError("Username and password are required")

    row = await find_active_admin(db, username)
    if row is None:
        logger.info("Login failed for unknown or inactive admin %r", username)
        raise UnauthorizedError("Invalid credentials")

    # CPU-bound, runs in a worker thread
    valid = await asyncio.to_thread(check_password, password, row["password"])
    if not valid:
        logger.info("Login failed for admin %r: wrong password", username)
        raise UnauthorizedError("Invalid credentials")

    admin = AdminIdentity.model_validate(row)
    logger.info("Admin %r logged in", admin.username)
    return LoginResponse(token=issue_token(admin, settings), admin=admin)
