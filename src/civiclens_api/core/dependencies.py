"""Request-scoped dependencies: the database session and the calling user.

Routes resolve the caller here and pass the ``User`` to services as an
argument. Services never read the token themselves.
"""

import uuid
from collections.abc import AsyncGenerator, Callable
from typing import Annotated, Any

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from civiclens_api.core.config import Settings, get_settings
from civiclens_api.core.database import get_session_factory
from civiclens_api.core.security import ACCESS_TOKEN_TYPE, decode_token
from civiclens_api.models.user import User

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="api/v1/auth/login")


async def get_async_session() -> AsyncGenerator[AsyncSession]:
    async with get_session_factory()() as session:
        yield session


def _unauthenticated() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )


def _subject_id(token: str, settings: Settings) -> uuid.UUID:
    """User id from a valid access token; raises 401 otherwise."""
    try:
        claims = decode_token(
            token,
            settings.jwt_secret_key,
            settings.jwt_algorithm,
            expected_type=ACCESS_TOKEN_TYPE,
        )
        return uuid.UUID(str(claims.get("sub")))
    except (jwt.InvalidTokenError, ValueError) as exc:
        raise _unauthenticated() from exc


async def get_current_user(
    token: Annotated[str, Depends(oauth2_scheme)],
    session: Annotated[AsyncSession, Depends(get_async_session)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> User:
    """The active user named by the bearer token, or 401."""
    user = await session.get(User, _subject_id(token, settings))
    if user is None or not user.is_active:
        raise _unauthenticated()
    return user


def require_role(*roles: str) -> Callable[..., Any]:
    """Dependency admitting only users whose role is one of ``roles`` (403 otherwise)."""

    async def role_checker(
        current_user: Annotated[User, Depends(get_current_user)],
    ) -> User:
        if current_user.role in roles:
            return current_user
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Role '{current_user.role}' is not permitted here",
        )

    return role_checker
