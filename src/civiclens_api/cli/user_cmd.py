"""Account management CLI commands.

Administrators are only ever created here or by another administrator
over HTTP; public signup always grants the citizen role.
"""

import asyncio
from typing import TYPE_CHECKING, Annotated

import typer

if TYPE_CHECKING:
    from civiclens_api.schemas.auth import UserCreateRequest

user_app = typer.Typer()


@user_app.command("create")
def create_user(
    username: Annotated[str, typer.Option(prompt=True, help="Username")],
    email: Annotated[str, typer.Option(prompt=True, help="Email address")],
    password: Annotated[str, typer.Option(prompt=True, hide_input=True, confirmation_prompt=True, help="Password")],
    role: Annotated[str, typer.Option(prompt=True, help="Account role (admin or citizen)")] = "citizen",
    if_not_exists: Annotated[
        bool, typer.Option("--if-not-exists", help="Succeed without changes when the username is taken")
    ] = False,
) -> None:
    """Create an account, prompting for anything not given."""
    from pydantic import ValidationError

    from civiclens_api.schemas.auth import UserCreateRequest

    try:
        request = UserCreateRequest(username=username, email=email, password=password, role=role)
    except ValidationError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e

    asyncio.run(_create_user(request, if_not_exists=if_not_exists))


async def _create_user(request: "UserCreateRequest", *, if_not_exists: bool) -> None:
    from civiclens_api.core.config import get_settings
    from civiclens_api.core.database import standalone_session
    from civiclens_api.services.auth_service import create_user, get_user_by_username

    settings = get_settings()
    async with standalone_session(settings.database_url, schema=settings.database_schema) as session:
        if if_not_exists and await get_user_by_username(session, request.username) is not None:
            typer.echo(f"User '{request.username}' already exists, skipping (--if-not-exists)")
            return
        try:
            user = await create_user(session, request)
        except ValueError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(code=1) from e
    typer.echo(f"User '{user.username}' created with role '{user.role}'")


@user_app.command("list")
def list_users(
    page_size: Annotated[int, typer.Option("--limit", min=1, help="Maximum accounts to show")] = 1000,
) -> None:
    """List accounts, oldest first."""
    asyncio.run(_list_users(page_size))


async def _list_users(page_size: int) -> None:
    from civiclens_api.core.config import get_settings
    from civiclens_api.core.database import standalone_session
    from civiclens_api.services.auth_service import list_users

    settings = get_settings()
    async with standalone_session(settings.database_url, schema=settings.database_schema) as session:
        users, total = await list_users(session, page_size=page_size)

    typer.echo(f"{'Username':<20} {'Email':<30} {'Role':<10} {'Active':<8}")
    typer.echo("-" * 68)
    for user in users:
        typer.echo(f"{user.username:<20} {user.email:<30} {user.role:<10} {user.is_active!s:<8}")
    typer.echo(f"\nTotal: {total}")
