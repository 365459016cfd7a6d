"""Unit tests for authentication and account endpoints."""

import uuid
from datetime import UTC, datetime
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from civiclens_api.api.v1.auth import router
from civiclens_api.core.config import Settings, get_settings
from civiclens_api.core.dependencies import get_async_session, get_current_user
from civiclens_api.schemas.auth import TokenResponse

_SERVICE = "civiclens_api.services.auth_service"


def _account(role: str = "citizen") -> SimpleNamespace:
    return SimpleNamespace(
        id=uuid.uuid4(),
        username=f"test{role}",
        email=f"{role}@example.com",
        role=role,
        is_active=True,
        created_at=datetime.now(UTC),
        last_login_at=None,
    )


def _client(settings: Settings, user: object | None = None) -> AsyncClient:
    app = FastAPI()
    app.include_router(router, prefix="/api/v1")
    app.dependency_overrides[get_async_session] = lambda: AsyncMock()
    app.dependency_overrides[get_settings] = lambda: settings
    if user is not None:
        app.dependency_overrides[get_current_user] = lambda: user
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


class TestPublicEndpoints:
    @pytest.mark.asyncio
    async def test_health(self, settings: Settings) -> None:
        resp = await _client(settings).get("/api/v1/health")
        assert resp.json() == {"status": "healthy"}

    @pytest.mark.asyncio
    async def test_info(self, settings: Settings) -> None:
        resp = await _client(settings).get("/api/v1/info")
        assert resp.json()["environment"] == "production"


class TestRegister:
    @pytest.mark.asyncio
    async def test_creates_citizen(self, settings: Settings) -> None:
        with patch(f"{_SERVICE}.create_user", new_callable=AsyncMock, return_value=_account()) as mock_create:
            resp = await _client(settings).post(
                "/api/v1/auth/register",
                json={"username": "wanjiru", "email": "wanjiru@example.com", "password": "s3cret-pass"},
            )
        assert resp.status_code == 201
        assert resp.json()["role"] == "citizen"
        assert "role" not in mock_create.call_args.kwargs

    @pytest.mark.asyncio
    async def test_role_field_ignored_on_signup(self, settings: Settings) -> None:
        with patch(f"{_SERVICE}.create_user", new_callable=AsyncMock, return_value=_account()) as mock_create:
            await _client(settings).post(
                "/api/v1/auth/register",
                json={
                    "username": "sneaky",
                    "email": "sneaky@example.com",
                    "password": "s3cret-pass",
                    "role": "admin",
                },
            )
        request = mock_create.call_args.args[1]
        assert not hasattr(request, "role")

    @pytest.mark.asyncio
    async def test_duplicate_is_409(self, settings: Settings) -> None:
        with patch(
            f"{_SERVICE}.create_user",
            new_callable=AsyncMock,
            side_effect=ValueError("Username or email already exists"),
        ):
            resp = await _client(settings).post(
                "/api/v1/auth/register",
                json={"username": "wanjiru", "email": "wanjiru@example.com", "password": "s3cret-pass"},
            )
        assert resp.status_code == 409


class TestLogin:
    @pytest.mark.asyncio
    async def test_bad_credentials(self, settings: Settings) -> None:
        with patch(f"{_SERVICE}.authenticate_user", new_callable=AsyncMock, return_value=None):
            resp = await _client(settings).post(
                "/api/v1/auth/login", data={"username": "wanjiru", "password": "nope"}
            )
        assert resp.status_code == 401

    @pytest.mark.asyncio
    async def test_returns_tokens(self, settings: Settings) -> None:
        tokens = TokenResponse(access_token="a", refresh_token="r", expires_in=1800)
        with (
            patch(f"{_SERVICE}.authenticate_user", new_callable=AsyncMock, return_value=_account()),
            patch(f"{_SERVICE}.generate_tokens", return_value=tokens),
        ):
            resp = await _client(settings).post(
                "/api/v1/auth/login", data={"username": "wanjiru", "password": "s3cret-pass"}
            )
        assert resp.status_code == 200
        assert resp.json()["token_type"] == "bearer"

    @pytest.mark.asyncio
    async def test_invalid_refresh_is_401(self, settings: Settings) -> None:
        with patch(
            f"{_SERVICE}.refresh_access_token",
            new_callable=AsyncMock,
            side_effect=ValueError("Invalid refresh token"),
        ):
            resp = await _client(settings).post("/api/v1/auth/refresh", json={"refresh_token": "garbage"})
        assert resp.status_code == 401


class TestUsers:
    @pytest.mark.asyncio
    async def test_me(self, settings: Settings) -> None:
        account = _account()
        resp = await _client(settings, account).get("/api/v1/auth/me")
        assert resp.json()["username"] == account.username

    @pytest.mark.asyncio
    async def test_citizen_cannot_list_users(self, settings: Settings) -> None:
        resp = await _client(settings, _account("citizen")).get("/api/v1/users")
        assert resp.status_code == 403

    @pytest.mark.asyncio
    async def test_admin_lists_users(self, settings: Settings) -> None:
        with patch(f"{_SERVICE}.list_users", new_callable=AsyncMock, return_value=([_account()], 1)):
            resp = await _client(settings, _account("admin")).get("/api/v1/users")
        assert resp.status_code == 200
        assert resp.json()["pagination"]["total"] == 1

    @pytest.mark.asyncio
    async def test_admin_can_grant_admin(self, settings: Settings) -> None:
        with patch(
            f"{_SERVICE}.create_user", new_callable=AsyncMock, return_value=_account("admin")
        ) as mock_create:
            resp = await _client(settings, _account("admin")).post(
                "/api/v1/users",
                json={"username": "mod", "email": "mod@example.com", "password": "s3cret-pass", "role": "admin"},
            )
        assert resp.status_code == 201
        assert mock_create.call_args.args[1].role == "admin"


class TestChangePassword:
    @pytest.mark.asyncio
    async def test_changed(self, settings: Settings) -> None:
        account = _account()
        with patch(f"{_SERVICE}.change_password", new_callable=AsyncMock) as mock_change:
            resp = await _client(settings, account).post(
                "/api/v1/auth/password",
                json={"current_password": "s3cret-pass", "new_password": "even-better-pass"},
            )
        assert resp.status_code == 204
        assert mock_change.call_args.args[1:] == (account, "s3cret-pass", "even-better-pass")

    @pytest.mark.asyncio
    async def test_wrong_current_password_is_400(self, settings: Settings) -> None:
        with patch(
            f"{_SERVICE}.change_password",
            new_callable=AsyncMock,
            side_effect=ValueError("Current password is incorrect"),
        ):
            resp = await _client(settings, _account()).post(
                "/api/v1/auth/password",
                json={"current_password": "wrong-pass", "new_password": "even-better-pass"},
            )
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Current password is incorrect"

    @pytest.mark.asyncio
    async def test_short_new_password_rejected(self, settings: Settings) -> None:
        resp = await _client(settings, _account()).post(
            "/api/v1/auth/password", json={"current_password": "s3cret-pass", "new_password": "short"}
        )
        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_requires_authentication(self, settings: Settings) -> None:
        resp = await _client(settings).post(
            "/api/v1/auth/password", json={"current_password": "s3cret-pass", "new_password": "even-better-pass"}
        )
        assert resp.status_code == 401
