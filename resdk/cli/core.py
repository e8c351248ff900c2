"""Shared CLI application context and setup helpers."""

from __future__ import annotations

import sys

import typer
from dotenv import load_dotenv
from loguru import logger
from rich.console import Console

from resdk import __logo__, __version__
from resdk.utils.helpers import get_data_path

app = typer.Typer(
    name="resdk",
    help=f"{__logo__} resdk - pluggable request lifecycle for ASGI handlers",
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool) -> None:
    if value:
        console.print(f"{__logo__} resdk v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(None, "--version", "-v", callback=version_callback, is_eager=True),
) -> None:
    """resdk - pluggable request lifecycle for ASGI handlers."""
    # Precedence: existing env vars > .env file (override=False)
    load_dotenv(get_data_path() / ".env", override=False)


def configure_logging(level: str) -> None:
    """Route loguru output to stderr at *level*."""
    logger.remove()
    logger.add(sys.stderr, level=level.upper())
