"""Accounts and session tokens.

Tokens name the user by id, so renaming an account does not sign it
out. The role claim inside a token is never trusted for authorization;
routes re-read the stored user.
"""

import uuid
from datetime import UTC, datetime

import jwt
from loguru import logger
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from civiclens_api.core.config import Settings
from civiclens_api.core.security import (
    REFRESH_TOKEN_TYPE,
    create_access_token,
    create_refresh_token,
    decode_token,
    hash_password,
    verify_password,
)
from civiclens_api.models.user import CITIZEN_ROLE, User
from civiclens_api.schemas.auth import RegisterRequest, TokenResponse, UserCreateRequest


async def get_user(session: AsyncSession, user_id: uuid.UUID) -> User | None:
    return await session.get(User, user_id)


async def get_user_by_username(session: AsyncSession, username: str) -> User | None:
    return await session.scalar(select(User).where(User.username == username))


async def authenticate_user(session: AsyncSession, username: str, password: str) -> User | None:
    """Check a username and password and stamp ``last_login_at``.

    Returns ``None`` for an unknown name, a wrong password, or a
    deactivated account, without saying which.
    """
    user = await get_user_by_username(session, username)
    if user is None or not user.is_active or not verify_password(password, user.hashed_password):
        return None
    user.last_login_at = datetime.now(UTC)
    await session.commit()
    return user


async def create_user(session: AsyncSession, request: RegisterRequest, *, role: str = CITIZEN_ROLE) -> User:
    """Insert an account with a bcrypt-hashed password.

    Public signups arrive as ``RegisterRequest`` and get ``role``. An
    operator's ``UserCreateRequest`` carries its own role, which wins.

    Raises:
        ValueError: The username or the email is already taken.
    """
    granted = request.role if isinstance(request, UserCreateRequest) else role

    clash = await session.scalar(
        select(User.id).where(or_(User.username == request.username, User.email == request.email))
    )
    if clash is not None:
        msg = "Username or email already exists"
        raise ValueError(msg)

    user = User(
        username=request.username,
        email=request.email,
        hashed_password=hash_password(request.password),
        role=granted,
    )
    session.add(user)
    await session.commit()
    await session.refresh(user)
    logger.info(f"Created {granted} account {user.id}")
    return user


async def change_password(session: AsyncSession, user: User, current_password: str, new_password: str) -> None:
    """Replace ``user``'s password after checking the current one.

    Raises:
        ValueError: ``current_password`` does not match.
    """
    if not verify_password(current_password, user.hashed_password):
        msg = "Current password is incorrect"
        raise ValueError(msg)
    user.hashed_password = hash_password(new_password)
    await session.commit()
    logger.info(f"Password changed for account {user.id}")


async def list_users(session: AsyncSession, page: int = 1, page_size: int = 20) -> tuple[list[User], int]:
    """One page of accounts in signup order, plus the overall count."""
    total = await session.scalar(select(func.count()).select_from(User))
    rows = await session.scalars(
        select(User).order_by(User.created_at, User.username).offset((page - 1) * page_size).limit(page_size)
    )
    return list(rows), total or 0


def generate_tokens(user: User, settings: Settings) -> TokenResponse:
    subject = str(user.id)
    return TokenResponse(
        access_token=create_access_token(
            subject,
            user.role,
            settings.jwt_secret_key,
            settings.jwt_algorithm,
            expires_minutes=settings.jwt_access_token_expire_minutes,
        ),
        refresh_token=create_refresh_token(
            subject,
            settings.jwt_secret_key,
            settings.jwt_algorithm,
            expires_days=settings.jwt_refresh_token_expire_days,
        ),
        expires_in=settings.jwt_access_token_expire_minutes * 60,
    )


async def refresh_access_token(session: AsyncSession, refresh_token_str: str, settings: Settings) -> TokenResponse:
    """Trade a refresh token for a fresh pair.

    Raises:
        ValueError: The token is not a valid refresh token, or its user
            no longer exists or has been deactivated.
    """
    try:
        claims = decode_token(
            refresh_token_str,
            settings.jwt_secret_key,
            settings.jwt_algorithm,
            expected_type=REFRESH_TOKEN_TYPE,
        )
        user_id = uuid.UUID(str(claims.get("sub")))
    except (jwt.InvalidTokenError, ValueError) as e:
        msg = "Invalid refresh token"
        raise ValueError(msg) from e

    user = await get_user(session, user_id)
    if user is None or not user.is_active:
        msg = "User not found or inactive"
        raise ValueError(msg)
    return generate_tokens(user, settings)
