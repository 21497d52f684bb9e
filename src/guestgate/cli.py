"""Command-line interface for GuestGate.

This module provides the CLI commands for running and managing
the GuestGate application.
"""

import asyncio
from typing import NoReturn

import click

from guestgate.core.config import get_settings
from guestgate.core.logging import configure_logging, get_logger


@click.group()
@click.version_option(version="0.1.0", prog_name="GuestGate")
def cli() -> None:
    """GuestGate - event check-in with access-code roles.

    Settings are read from GUESTGATE_* environment variables and .env.
    """


@cli.command()
@click.option("--host", type=str, default=None, help="Host to bind to (overrides config)")
@click.option("--port", type=int, default=None, help="Port to bind to (overrides config)")
@click.option(
    "--workers",
    type=int,
    default=None,
    help="Number of worker processes (overrides config)",
)
@click.option(
    "--reload/--no-reload",
    default=None,
    help="Auto-reload on code changes (default: on in development)",
)
def serve(host: str | None, port: int | None, workers: int | None, reload: bool | None) -> None:
    """Start the GuestGate server."""
    import uvicorn

    settings = get_settings()

    bind_host = host or settings.host
    bind_port = port or settings.port
    bind_workers = workers or settings.workers
    if reload is None:
        reload = settings.is_development

    configure_logging(settings)
    logger = get_logger(__name__)
    logger.info(
        "Starting GuestGate server",
        host=bind_host,
        port=bind_port,
        workers=bind_workers,
        reload=reload,
        environment=settings.environment,
    )

    uvicorn.run(
        "guestgate.infrastructure.api.app:app",
        host=bind_host,
        port=bind_port,
        workers=1 if reload else bind_workers,
        reload=reload,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


@cli.command()
@click.option("--force", is_flag=True, help="Skip confirmation prompt")
def init_db(force: bool) -> None:
    """Initialize the database.

    Creates all tables (development only), seeds one access code per role
    and applies the bootstrap admin grant. In production, use migrations.
    """
    from guestgate.infrastructure.persistence.database import (
        get_db_manager,
        init_database,
    )

    settings = get_settings()
    configure_logging(settings)

    if settings.is_production and not force:
        click.echo(
            "ERROR: Running in production mode. Use migrations instead of init-db.",
            err=True,
        )
        raise SystemExit(1)

    if not force:
        click.confirm(
            "This will create all database tables. Continue?",
            abort=True,
            default=False,
        )

    async def initialize() -> None:
        try:
            await init_database()
            click.echo("Database initialized successfully.")
        finally:
            await get_db_manager().disconnect()

    asyncio.run(initialize())


@cli.command()
@click.option("--email", type=str, default=None, help="Email of an existing account (prompts if not provided)")
def grant_admin(email: str | None) -> None:
    """Give the admin role to an existing account.

    Only works while no admin exists. Later admins join with the admin
    access code.
    """
    from guestgate.domain.exceptions import (
        BootstrapAlreadyDoneError,
        RoleAlreadyAssignedError,
    )
    from guestgate.domain.services import RoleAssignmentService
    from guestgate.infrastructure.persistence.database import get_db_manager
    from guestgate.infrastructure.persistence.repositories import IdentityRepository

    settings = get_settings()
    configure_logging(settings)
    logger = get_logger(__name__)

    if email is None:
        email = click.prompt("Admin email", type=str)

    async def grant() -> None:
        db = get_db_manager()
        try:
            async with db.session() as session:
                identity = await IdentityRepository(session).get_by_email(email)
                if identity is None:
                    click.echo(f"Error: No account with email {email}. Sign up first.", err=True)
                    raise SystemExit(1)
                try:
                    await RoleAssignmentService(session).grant_initial_admin(identity.id)
                except (BootstrapAlreadyDoneError, RoleAlreadyAssignedError) as e:
                    click.echo(f"Error: {e.message}", err=True)
                    raise SystemExit(1)

            click.echo(f"\nAdmin role granted to {email}.\n")
            logger.info("Admin granted via CLI", user_id=identity.id, email=email)
        finally:
            await db.disconnect()

    asyncio.run(grant())


@cli.command()
def info() -> None:
    """Display GuestGate configuration."""
    settings = get_settings()

    click.echo(f"""
GuestGate v{settings.app_version}
{'=' * 40}

Configuration:
  Environment:  {settings.environment}
  Debug:        {settings.debug}
  API Prefix:   {settings.api_prefix}

Server:
  Host:         {settings.host}
  Port:         {settings.port}
  Workers:      {settings.workers}

Database:
  URL:          {settings.database_url}
  Pool Size:    {settings.db_pool_size}
  Echo:         {settings.db_echo}

Security:
  Token Expire: {settings.access_token_expire_minutes} minutes
  Signup:       {"collapsed failures" if settings.signup_collapse_failures else "detailed failures"}
  Boot Admins:  {", ".join(settings.bootstrap_admin_emails) or "-"}

Logging:
  Level:        {settings.log_level}
  Format:       {settings.log_format}
""")


def main() -> NoReturn:
    """Main entry point for the CLI.

    Called by the `guestgate` command and by `python -m guestgate`.
    """
    cli()


if __name__ == "__main__":
    main()
