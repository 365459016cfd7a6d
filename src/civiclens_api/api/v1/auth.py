"""Service probes, sign-in, and account management.

Signup through ``/auth/register`` can only ever create citizens; the
admin role is granted by an existing administrator via ``POST /users``
or by an operator with ``civiclens user create``.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.ext.asyncio import AsyncSession

from civiclens_api import __version__
from civiclens_api.core.config import Settings, get_settings
from civiclens_api.core.dependencies import get_async_session, get_current_user, require_role
from civiclens_api.models.user import ADMIN_ROLE, User
from civiclens_api.schemas.auth import (
    PasswordChangeRequest,
    RefreshRequest,
    RegisterRequest,
    TokenResponse,
    UserCreateRequest,
    UserListResponse,
    UserResponse,
)
from civiclens_api.schemas.common import PaginationMeta, PaginationParams
from civiclens_api.services import auth_service

router = APIRouter(tags=["auth"])

Session = Annotated[AsyncSession, Depends(get_async_session)]
AppSettings = Annotated[Settings, Depends(get_settings)]
AdminUser = Annotated[User, Depends(require_role(ADMIN_ROLE))]


async def _insert_account(session: AsyncSession, request: RegisterRequest) -> User:
    try:
        return await auth_service.create_user(session, request)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e


@router.get("/health")
async def health_check() -> dict:
    return {"status": "healthy"}


@router.get("/info")
async def info(settings: AppSettings) -> dict:
    return {"version": __version__, "environment": settings.environment}


@router.post("/auth/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(request: RegisterRequest, session: Session) -> User:
    """Sign up as a citizen. Username and email must both be unused (409 otherwise)."""
    return await _insert_account(session, request)


@router.post("/auth/login", response_model=TokenResponse)
async def login(
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    session: Session,
    settings: AppSettings,
) -> TokenResponse:
    """OAuth2 password flow: form-encoded username and password in, token pair out."""
    user = await auth_service.authenticate_user(session, form_data.username, form_data.password)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return auth_service.generate_tokens(user, settings)


@router.post("/auth/refresh", response_model=TokenResponse)
async def refresh_token(request: RefreshRequest, session: Session, settings: AppSettings) -> TokenResponse:
    try:
        return await auth_service.refresh_access_token(session, request.refresh_token, settings)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e)) from e


@router.get("/auth/me", response_model=UserResponse)
async def get_me(current_user: Annotated[User, Depends(get_current_user)]) -> User:
    return current_user


@router.post("/auth/password", status_code=status.HTTP_204_NO_CONTENT)
async def change_password(
    request: PasswordChangeRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    session: Session,
) -> Response:
    """Set a new password. The current one must be supplied (400 otherwise)."""
    try:
        await auth_service.change_password(session, current_user, request.current_password, request.new_password)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/users", response_model=UserListResponse)
async def list_users(
    _admin: AdminUser,
    session: Session,
    pagination: Annotated[PaginationParams, Depends()],
) -> UserListResponse:
    users, total = await auth_service.list_users(session, pagination.page, pagination.page_size)
    return UserListResponse(
        items=[UserResponse.model_validate(u) for u in users],
        pagination=PaginationMeta.build(total=total, page=pagination.page, page_size=pagination.page_size),
    )


@router.post("/users", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(request: UserCreateRequest, _admin: AdminUser, session: Session) -> User:
    """Create an account with either role."""
    return await _insert_account(session, request)
