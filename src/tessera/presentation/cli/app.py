"""Tessera CLI application using Typer.

This module provides command-line utilities for the Tessera backend:
running the API server, managing the database schema and generating
deployment secrets.
"""

import asyncio
import secrets

import typer
import uvicorn
from rich.console import Console

from tessera.presentation.api.dependencies import (
    create_engine,
    create_tables,
    drop_tables,
)
from tessera_config.settings import get_settings

app = typer.Typer(
    name="tessera",
    help="Tessera - account and session backend CLI",
    no_args_is_help=True,
)
console = Console()


secrets_app = typer.Typer(
    name="secrets",
    help="Secret generation utilities",
    no_args_is_help=True,
)
app.add_typer(secrets_app)

db_app = typer.Typer(
    name="db",
    help="Database schema management",
    no_args_is_help=True,
)
app.add_typer(db_app)


@app.command("serve")
def serve(
    host: str | None = typer.Option(None, help="Bind address (default: API_HOST)"),
    port: int | None = typer.Option(None, help="Bind port (default: API_PORT)"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
) -> None:
    """Run the API server with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "tessera.presentation.api.app:create_app",
        factory=True,
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=reload,
        log_config=None,  # create_app configures logging
    )


@db_app.command("init")
def init_db() -> None:
    """Create missing tables. Existing tables are left untouched."""
    settings = get_settings()

    async def _run() -> None:
        engine = create_engine(settings)
        try:
            await create_tables(engine)
        finally:
            await engine.dispose()

    asyncio.run(_run())
    console.print("[green]Database schema is up to date[/green]")


@db_app.command("drop")
def drop_db(
    yes: bool = typer.Option(False, "--yes", help="Skip the confirmation prompt"),
) -> None:
    """Drop all tables and their data."""
    if not yes:
        typer.confirm("This deletes every account. Continue?", abort=True)

    settings = get_settings()

    async def _run() -> None:
        engine = create_engine(settings)
        try:
            await drop_tables(engine)
        finally:
            await engine.dispose()

    asyncio.run(_run())
    console.print("[yellow]All tables dropped[/yellow]")


@secrets_app.command("generate")
def generate_secrets() -> None:
    """Generate secure secrets for Tessera configuration.

    Copy the output to your .env file.
    """
    console.print("\n[bold green]Tessera Secret Generation[/bold green]")
    console.print("=" * 60)
    console.print(
        "\nGenerated secrets for your [bold].env[/bold] configuration file:\n"
    )

    # 64 bytes for HS256
    console.print(f"[cyan]JWT_SECRET_KEY[/cyan]={secrets.token_urlsafe(64)}")
    console.print(f"[cyan]SESSION_SECRET_KEY[/cyan]={secrets.token_urlsafe(32)}")
    console.print(f"[cyan]POSTGRES_PASSWORD[/cyan]={secrets.token_urlsafe(32)}")

    console.print("\n" + "=" * 60)
    console.print(
        "[yellow]Keep these secrets secure and never commit them "
        "to version control![/yellow]"
    )


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
