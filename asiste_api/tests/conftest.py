"""Shared fixtures for asiste-api tests.

Every test gets its own SQLite database file with the full schema, so the
SQL the services run is exercised for real.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from asiste_api.config import Settings, get_settings
from asiste_api.models.admin import AdminIdentity
from asiste_api.services.admins import insert_admin
from asiste_api.services.auth import issue_token
from asiste_api.services.database import Database
from asiste_api.tests.helpers import ADMIN_PASSWORD_HASH, RecordingNotifier


@pytest.fixture(autouse=True)
def _reset_settings_cache():
    """Environment-derived settings must not leak between tests."""
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Settings with safe test defaults."""
    return Settings(
        environment="test",
        database_url="sqlite+aiosqlite://",
        jwt_secret="test-secret-key-that-is-long-enough-for-hs256",
        token_ttl_hours=24,
        smtp_host="smtp.test",
        smtp_port=587,
        smtp_user="web@asistehealth.com",
        smtp_pass="smtp-pass",
        contact_email="info@asistehealth.com",
    )


@pytest.fixture
async def db(tmp_path):
    database = Database(f"sqlite+aiosqlite:///{tmp_path / 'asiste-test.db'}")
    await database.create_schema()
    yield database
    await database.dispose()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def app(settings, db, notifier):
    from asiste_api.main import create_app

    return create_app(settings=settings, database=db, notifier=notifier)


@pytest.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as c:
        yield c


@pytest.fixture
async def admin(db) -> AdminIdentity:
    """An active admin account with password ``admin123``."""
    admin_id = await insert_admin(
        db,
        username="admin",
        email="admin@asistecare.com",
        password_hash=ADMIN_PASSWORD_HASH,
        name="Administrador",
    )
    return AdminIdentity(
        id=admin_id, username="admin", email="admin@asistecare.com", name="Administrador"
    )


@pytest.fixture
def admin_token(admin, settings) -> str:
    return issue_token(admin, settings)


@pytest.fixture
def auth_headers(admin_token) -> dict[str, str]:
    return {"Authorization": f"Bearer {admin_token}"}
