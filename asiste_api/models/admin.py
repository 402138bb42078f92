"""Admin authentication models."""

from asiste_api.models.common import ApiModel


class LoginRequest(ApiModel):
    username: str | None = None
    password: str | None = None


class AdminIdentity(ApiModel):
    """Claims embedded in an admin token. Never includes the password hash."""

    id: int
    username: str
    email: str
    name: str


class LoginResponse(ApiModel):
    token: str
    admin: AdminIdentity
