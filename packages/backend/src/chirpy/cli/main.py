"""Chirpy CLI — run the server and handle one-off setup.

Usage:
    chirpy serve                 # Run the API with uvicorn
    chirpy gen-secret            # Print a random JWT signing secret
    chirpy init-db               # Create tables (dev; use alembic in prod)
"""

from __future__ import annotations

import asyncio
import secrets

import click

from chirpy.config import settings


@click.group()
@click.version_option(package_name="chirpy")
def cli():
    """Chirpy — small social-posting service."""


@cli.command()
@click.option("--host", default=None, help="Bind address (default: CHIRPY_HOST).")
@click.option("--port", type=int, default=None, help="Port (default: CHIRPY_PORT).")
@click.option("--reload", is_flag=True, help="Auto-reload on code changes.")
def serve(host: str | None, port: int | None, reload: bool):
    """Run the API server."""
    import uvicorn

    uvicorn.run(
        "chirpy.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
    )


@cli.command("gen-secret")
@click.option("--bytes", "nbytes", type=int, default=64, show_default=True)
def gen_secret(nbytes: int):
    """Print a random secret suitable for CHIRPY_JWT_SECRET."""
    if nbytes < 32:
        raise click.BadParameter("use at least 32 bytes", param_hint="--bytes")
    click.echo(secrets.token_urlsafe(nbytes))


@cli.command("init-db")
def init_db():
    """Create all tables on CHIRPY_DATABASE_URL."""
    from chirpy.db.engine import build_engine
    from chirpy.db.models import Base

    engine = build_engine(settings.database_url)

    async def _create():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        await engine.dispose()

    asyncio.run(_create())
    click.secho("Tables created.", fg="green")


def main():
    cli()


if __name__ == "__main__":
    main()
