"""Integration tests for account creation and token issuance."""

import uuid

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from civiclens_api.core.config import Settings
from civiclens_api.core.security import create_refresh_token, decode_token
from civiclens_api.models import User
from civiclens_api.schemas.auth import RegisterRequest, UserCreateRequest
from civiclens_api.services import auth_service


class TestCreateUser:
    @pytest.mark.asyncio
    async def test_register_defaults_to_citizen(self, async_session: AsyncSession) -> None:
        user = await auth_service.create_user(
            async_session, RegisterRequest(username="newcitizen", email="new@test.com", password="longenough1")
        )
        assert user.role == "citizen"
        assert user.is_admin is False
        assert user.hashed_password != "longenough1"

    @pytest.mark.asyncio
    async def test_operator_may_grant_admin(self, async_session: AsyncSession) -> None:
        user = await auth_service.create_user(
            async_session,
            UserCreateRequest(username="boss", email="boss@test.com", password="longenough1", role="admin"),
        )
        assert user.is_admin is True

    @pytest.mark.asyncio
    async def test_duplicate_username_rejected(self, async_session: AsyncSession, citizen_user: User) -> None:
        with pytest.raises(ValueError, match="already exists"):
            await auth_service.create_user(
                async_session,
                RegisterRequest(username=citizen_user.username, email="fresh@test.com", password="longenough1"),
            )


class TestAuthenticate:
    @pytest.mark.asyncio
    async def test_valid_credentials(self, async_session: AsyncSession, citizen_user: User) -> None:
        user = await auth_service.authenticate_user(async_session, "testcitizen", "testpassword123")
        assert user is not None
        assert user.last_login_at is not None

    @pytest.mark.asyncio
    async def test_wrong_password(self, async_session: AsyncSession, citizen_user: User) -> None:
        assert await auth_service.authenticate_user(async_session, "testcitizen", "nope") is None

    @pytest.mark.asyncio
    async def test_inactive_user(self, async_session: AsyncSession, citizen_user: User) -> None:
        citizen_user.is_active = False
        await async_session.commit()
        assert await auth_service.authenticate_user(async_session, "testcitizen", "testpassword123") is None


class TestTokens:
    @pytest.mark.asyncio
    async def test_subject_is_user_id(self, citizen_user: User, settings: Settings) -> None:
        tokens = auth_service.generate_tokens(citizen_user, settings)

        payload = decode_token(tokens.access_token, settings.jwt_secret_key, settings.jwt_algorithm)
        assert payload["sub"] == str(citizen_user.id)
        assert payload["role"] == "citizen"
        assert tokens.expires_in == 30 * 60

    @pytest.mark.asyncio
    async def test_refresh(self, async_session: AsyncSession, citizen_user: User, settings: Settings) -> None:
        tokens = auth_service.generate_tokens(citizen_user, settings)

        refreshed = await auth_service.refresh_access_token(async_session, tokens.refresh_token, settings)

        payload = decode_token(refreshed.access_token, settings.jwt_secret_key, settings.jwt_algorithm)
        assert payload["sub"] == str(citizen_user.id)

    @pytest.mark.asyncio
    async def test_access_token_cannot_refresh(
        self, async_session: AsyncSession, citizen_user: User, settings: Settings
    ) -> None:
        tokens = auth_service.generate_tokens(citizen_user, settings)
        with pytest.raises(ValueError, match="Invalid refresh token"):
            await auth_service.refresh_access_token(async_session, tokens.access_token, settings)

    @pytest.mark.asyncio
    async def test_refresh_for_unknown_user(self, async_session: AsyncSession, settings: Settings) -> None:
        token = create_refresh_token(
            subject=str(uuid.uuid4()),
            secret_key=settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
        )
        with pytest.raises(ValueError, match="not found"):
            await auth_service.refresh_access_token(async_session, token, settings)


class TestChangePassword:
    @pytest.mark.asyncio
    async def test_new_password_replaces_old(self, async_session: AsyncSession, citizen_user: User) -> None:
        await auth_service.change_password(async_session, citizen_user, "testpassword123", "brand-new-pass")

        assert await auth_service.authenticate_user(async_session, "testcitizen", "brand-new-pass") is not None
        assert await auth_service.authenticate_user(async_session, "testcitizen", "testpassword123") is None

    @pytest.mark.asyncio
    async def test_wrong_current_password(self, async_session: AsyncSession, citizen_user: User) -> None:
        old_hash = citizen_user.hashed_password
        with pytest.raises(ValueError, match="Current password is incorrect"):
            await auth_service.change_password(async_session, citizen_user, "not-my-password", "brand-new-pass")
        assert citizen_user.hashed_password == old_hash
