#!/usr/bin/env python3
"""
Main CLI entry point for the txledger API server.
"""

import asyncio
import os
import sys

import click
import uvicorn

from txledger import __version__
from txledger.config import settings
from txledger.ledger import LedgerConfigurationError, create_ledger_driver
from txledger.logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="txledger")
def cli() -> None:
    """txledger CLI - run the API server and manage the ledger."""
    pass


@cli.command()
@click.option(
    "--host",
    default=settings.api_host,
    show_default=True,
    help="Host to bind to",
)
@click.option(
    "--port",
    default=settings.api_port,
    show_default=True,
    type=int,
    help="Port to bind to",
)
@click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Enable auto-reload for development",
)
@click.option(
    "--workers",
    default=1,
    type=int,
    help="Number of worker processes (default: 1)",
)
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
def serve(host: str, port: int, reload: bool, workers: int, log_level: str) -> None:
    """Start the txledger API server."""
    configure_logging(debug=(log_level == "debug"))

    logger.info(
        "Starting txledger API server",
        host=host,
        port=port,
        reload=reload,
        workers=workers,
        log_level=log_level,
    )

    # Worker processes re-read settings from the environment on import
    if log_level == "debug":
        os.environ["TXLEDGER_DEBUG"] = "true"
        os.environ["TXLEDGER_LOG_LEVEL"] = "debug"
    else:
        os.environ.setdefault("TXLEDGER_DEBUG", "false")
        os.environ.setdefault("TXLEDGER_LOG_LEVEL", log_level)

    try:
        if reload or workers > 1:
            uvicorn.run(
                "txledger.api.app:app",
                host=host,
                port=port,
                reload=reload,
                workers=(workers if not reload else 1),
                log_level=log_level,
                access_log=True,
            )
        else:
            from txledger.api.app import app

            uvicorn.run(app, host=host, port=port, log_level=log_level, access_log=True)
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")
    except Exception as e:
        logger.error("Server startup failed", error=str(e))
        sys.exit(1)


@cli.group()
def ledger() -> None:
    """Manage the ledger the API writes to."""
    pass


@ledger.command("init")
def init_ledger() -> None:
    """Create the transactions table in the configured ledger."""
    configure_logging()

    async def do_init():
        driver = create_ledger_driver()
        try:
            await driver.create_schema()
        finally:
            await driver.dispose()

    try:
        asyncio.run(do_init())
    except LedgerConfigurationError as e:
        click.echo(f"✗ {e}", err=True)
        sys.exit(1)
    except Exception as e:
        logger.error("Failed to initialize ledger", error=str(e))
        click.echo(f"✗ Error initializing ledger: {e}", err=True)
        sys.exit(1)

    click.echo(f"✓ Ledger '{settings.ledger_name}' initialized")


@ledger.command("check")
def check_ledger() -> None:
    """Check that the configured ledger is reachable."""
    configure_logging()

    async def do_check() -> tuple[bool, str | None]:
        driver = create_ledger_driver()
        try:
            return await driver.ping()
        finally:
            await driver.dispose()

    ok, error = asyncio.run(do_check())
    if not ok:
        click.echo(f"✗ {error}", err=True)
        sys.exit(1)

    click.echo(f"✓ Ledger '{settings.ledger_name}' is reachable")


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    cli()
