"""Plaza CLI application using Typer.

This module provides command-line utilities for the Plaza backend:
secret generation, admin bootstrap, session housekeeping and serving
the API.
"""

import asyncio
import secrets
from collections.abc import Awaitable, Callable
from typing import TypeVar

import typer
from rich.console import Console
from sqlalchemy.ext.asyncio import async_sessionmaker

from plaza.application.services import UserAdminService
from plaza.domain.shared.exceptions import DomainException
from plaza.infrastructure.persistence.sqlalchemy.init_db import (
    create_engine_from_settings,
    create_tables,
)
from plaza.infrastructure.persistence.sqlalchemy.repositories import (
    SQLAlchemyRepositoryFactory,
)
from plaza_auth import PasswordHashingService, WeakPasswordError
from plaza_config.settings import get_settings

T = TypeVar("T")

app = typer.Typer(
    name="plaza",
    help="Plaza - social backend CLI",
    no_args_is_help=True,
)
console = Console()


# Create subcommand groups
secrets_app = typer.Typer(
    name="secrets",
    help="Secret generation utilities",
    no_args_is_help=True,
)
users_app = typer.Typer(
    name="users",
    help="User management",
    no_args_is_help=True,
)
tokens_app = typer.Typer(
    name="tokens",
    help="Refresh token housekeeping",
    no_args_is_help=True,
)
app.add_typer(secrets_app)
app.add_typer(users_app)
app.add_typer(tokens_app)


async def _with_admin_service(
    action: Callable[[UserAdminService], Awaitable[T]],
) -> T:
    """Run ``action`` in one committed transaction against the configured DB."""
    settings = get_settings()
    engine = create_engine_from_settings(settings)
    try:
        await create_tables(engine)
        session_maker = async_sessionmaker(engine, expire_on_commit=False)
        async with session_maker() as session:
            service = UserAdminService.from_factory(
                SQLAlchemyRepositoryFactory(session),
                password_service=PasswordHashingService(
                    rounds=settings.bcrypt_rounds,
                    min_length=settings.password_min_length,
                    max_length=settings.password_max_length,
                ),
            )
            try:
                result = await action(service)
                await session.commit()
            except Exception:
                await session.rollback()
                raise
            return result
    finally:
        await engine.dispose()


@secrets_app.command("generate")
def generate_secrets() -> None:
    """Generate secure secrets for Plaza configuration.

    Generates two required secrets:
    - JWT_SECRET_KEY: Secret for signing JWT authentication tokens
    - POSTGRES_PASSWORD: Database password

    Copy the output to your .env file.
    """
    console.print("\n[bold green]Plaza Secret Generation[/bold green]")
    console.print("=" * 60)
    console.print(
        "\nGenerated secrets for your [bold].env[/bold] configuration file:\n"
    )

    # 64 bytes of entropy for HS256
    jwt_secret = secrets.token_urlsafe(64)
    console.print(f"[cyan]JWT_SECRET_KEY[/cyan]={jwt_secret}")

    db_password = secrets.token_urlsafe(32)
    console.print(f"[cyan]POSTGRES_PASSWORD[/cyan]={db_password}")

    console.print("\n" + "=" * 60)
    console.print(
        "[yellow]Keep these secrets secure and never commit them "
        "to version control![/yellow]"
    )
    console.print(
        "[dim]Copy the above values to your config/.env (Docker) or "
        "config/.env.dev (local) file.[/dim]\n"
    )


@users_app.command("create-admin")
def create_admin(
    email: str = typer.Argument(..., help="Admin email address"),
    name: str = typer.Option(..., "--name", help="Display name"),
    password: str = typer.Option(
        ...,
        "--password",
        prompt=True,
        hide_input=True,
        confirmation_prompt=True,
        help="Admin password (8-128 characters)",
    ),
) -> None:
    """Create an ACTIVE administrator account."""
    try:
        user = asyncio.run(
            _with_admin_service(
                lambda service: service.create_admin(email, password, name),
            ),
        )
    except (WeakPasswordError, DomainException) as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(code=1) from e

    console.print(
        f"[green]Admin created:[/green] {user.email} [dim](id: {user.id})[/dim]"
    )


@tokens_app.command("prune")
def prune_tokens() -> None:
    """Delete expired refresh tokens."""
    deleted = asyncio.run(
        _with_admin_service(lambda service: service.prune_expired_tokens()),
    )
    console.print(f"[green]Deleted {deleted} expired refresh token(s)[/green]")


@app.command("serve")
def serve(
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
) -> None:
    """Run the API server with uvicorn."""
    import uvicorn

    settings = get_settings()
    console.print(
        f"[bold]Serving {settings.app_name} API[/bold] "
        f"on {settings.api_host}:{settings.api_port}"
    )
    uvicorn.run(
        "plaza.presentation.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
