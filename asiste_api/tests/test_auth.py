"""Tests for admin login, token issuance and the auth gate."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from asiste_api.errors import ForbiddenError, UnauthorizedError, ValidationError
from asiste_api.models.admin import AdminIdentity
from asiste_api.services.admins import insert_admin
from asiste_api.services.auth import (
    authenticate,
    check_password,
    decode_token,
    hash_password,
    issue_token,
)
from asiste_api.tests.helpers import ADMIN_PASSWORD, ADMIN_PASSWORD_HASH

IDENTITY = AdminIdentity(id=1, username="admin", email="admin@asistecare.com", name="Admin")


class TestPasswords:
    def test_hash_is_salted_bcrypt(self):
        assert ADMIN_PASSWORD_HASH.startswith("$2")
        assert ADMIN_PASSWORD not in ADMIN_PASSWORD_HASH
        assert check_password(ADMIN_PASSWORD, ADMIN_PASSWORD_HASH) is True
        assert check_password("wrong", ADMIN_PASSWORD_HASH) is False

    def test_same_password_hashes_differently(self):
        assert hash_password("s3cret") != hash_password("s3cret")

    def test_malformed_hash_is_a_mismatch(self):
        assert check_password("admin123", "not-a-bcrypt-hash") is False


class TestTokens:
    def test_round_trip_carries_identity(self, settings):
        token = issue_token(IDENTITY, settings)
        assert decode_token(token, settings) == IDENTITY

    def test_expires_after_ttl(self, settings):
        token = issue_token(IDENTITY, settings)
        claims = jwt.decode(token, settings.jwt_secret, algorithms=["HS256"])
        assert claims["exp"] - claims["iat"] == 24 * 3600

    def test_expired_token_is_forbidden(self, settings):
        issued = datetime.now(timezone.utc) - timedelta(hours=25)
        token = issue_token(IDENTITY, settings, now=issued)
        with pytest.raises(ForbiddenError, match="Invalid token"):
            decode_token(token, settings)

    def test_wrong_signature_is_forbidden(self, settings):
        token = jwt.encode(
            {**IDENTITY.model_dump(), "exp": datetime.now(timezone.utc) + timedelta(hours=1)},
            "another-secret-that-is-also-long-enough!!",
            algorithm="HS256",
        )
        with pytest.raises(ForbiddenError):
            decode_token(token, settings)

    def test_token_without_identity_claims_is_forbidden(self, settings):
        token = jwt.encode(
            {"exp": datetime.now(timezone.utc) + timedelta(hours=1)},
            settings.jwt_secret,
            algorithm="HS256",
        )
        with pytest.raises(ForbiddenError):
            decode_token(token, settings)

    def test_garbage_is_forbidden(self, settings):
        with pytest.raises(ForbiddenError):
            decode_token("not.a.jwt", settings)


class TestAuthenticate:
    async def test_success_issues_token(self, db, settings, admin):
        result = await authenticate(db, settings, "admin", ADMIN_PASSWORD)
        assert result.admin == admin
        assert decode_token(result.token, settings) == admin

    async def test_wrong_password(self, db, settings, admin):
        with pytest.raises(UnauthorizedError, match="Invalid credentials"):
            await authenticate(db, settings, "admin", "wrong-password")

    async def test_unknown_user(self, db, settings, admin):
        with pytest.raises(UnauthorizedError, match="Invalid credentials"):
            await authenticate(db, settings, "nobody", ADMIN_PASSWORD)

    async def test_inactive_admin_cannot_log_in(self, db, settings):
        await insert_admin(db, "former", "former@asistecare.com", ADMIN_PASSWORD_HASH, "Former")
        await db.execute("UPDATE admins SET active = 0 WHERE username = 'former'")
        with pytest.raises(UnauthorizedError):
            await authenticate(db, settings, "former", ADMIN_PASSWORD)

    @pytest.mark.parametrize("username,password", [(None, "x"), ("admin", ""), ("", "")])
    async def test_missing_credentials(self, db, settings, username, password):
        with pytest.raises(ValidationError, match="required"):
            await authenticate(db, settings, username, password)


class TestLoginEndpoint:
    async def test_login_returns_token_and_admin(self, client, admin):
        response = await client.post(
            "/api/admin/auth", json={"username": "admin", "password": ADMIN_PASSWORD}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["token"]
        assert data["admin"] == {
            "id": admin.id,
            "username": "admin",
            "email": "admin@asistecare.com",
            "name": "Administrador",
        }
        assert "password" not in data["admin"]

    async def test_wrong_password_gives_401_without_token(self, client, admin):
        response = await client.post(
            "/api/admin/auth", json={"username": "admin", "password": "nope"}
        )
        assert response.status_code == 401
        assert response.json() == {"error": "Invalid credentials"}

    async def test_repeated_failures_do_not_lock_out(self, client, admin):
        for _ in range(3):
            response = await client.post(
                "/api/admin/auth", json={"username": "admin", "password": "nope"}
            )
            assert response.status_code == 401

        response = await client.post(
            "/api/admin/auth", json={"username": "admin", "password": ADMIN_PASSWORD}
        )
        assert response.status_code == 200

    async def test_missing_fields_give_400(self, client, admin):
        response = await client.post("/api/admin/auth", json={"username": "admin"})
        assert response.status_code == 400
        assert "required" in response.json()["error"]


class TestAuthGate:
    async def test_missing_token_is_401(self, client):
        response = await client.get("/api/admin/me")
        assert response.status_code == 401
        assert response.json() == {"error": "Access token required"}

    async def test_invalid_token_is_403(self, client):
        response = await client.get(
            "/api/admin/me", headers={"Authorization": "Bearer not-a-token"}
        )
        assert response.status_code == 403
        assert response.json() == {"error": "Invalid token"}

    @pytest.mark.parametrize("header", ["Token abc", "Basic YWRtaW46YWRtaW4="])
    async def test_other_scheme_is_403(self, client, header):
        response = await client.get("/api/admin/me", headers={"Authorization": header})
        assert response.status_code == 403
        assert response.json() == {"error": "Invalid token"}

    async def test_valid_token_under_other_scheme_is_403(self, client, admin_token):
        response = await client.get(
            "/api/admin/me", headers={"Authorization": f"Token {admin_token}"}
        )
        assert response.status_code == 403

    @pytest.mark.parametrize("header", ["Bearer", "Bearer ", "not-a-scheme"])
    async def test_header_without_token_is_401(self, client, header):
        response = await client.get("/api/admin/me", headers={"Authorization": header})
        assert response.status_code == 401
        assert response.json() == {"error": "Access token required"}

    async def test_expired_token_is_403(self, client, admin, settings):
        issued = datetime.now(timezone.utc) - timedelta(hours=48)
        token = issue_token(admin, settings, now=issued)
        response = await client.get(
            "/api/admin/me", headers={"Authorization": f"Bearer {token}"}
        )
        assert response.status_code == 403

    async def test_valid_token_exposes_identity(self, client, admin, auth_headers):
        response = await client.get("/api/admin/me", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["username"] == "admin"
