"""Serve a handler over HTTP with uvicorn."""

from __future__ import annotations

import importlib
from pathlib import Path
from typing import Any

import typer
from loguru import logger

from resdk.config.loader import load_config
from resdk.config.schema import Config

from .core import app, configure_logging, console

# uvicorn has no SUCCESS level.
_UVICORN_LEVELS = {"SUCCESS": "info"}


def load_target(target: str, *, factory: bool, config: Config) -> Any:
    """Import ``module:attribute`` and return the ASGI app it names.

    With *factory*, the attribute is called with the loaded config and its
    return value is served instead.
    """
    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        raise typer.BadParameter(f"expected 'module:attribute', got {target!r}")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise typer.BadParameter(f"cannot import {module_name!r}: {e}") from e

    obj: Any = module
    for part in attr.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as e:
            raise typer.BadParameter(f"{module_name!r} has no attribute {attr!r}") from e

    return obj(config) if factory else obj


@app.command()
def serve(
    target: str = typer.Argument(..., help="Handler to serve, as 'module:attribute'"),
    factory: bool = typer.Option(False, "--factory", help="Call the target with the config to build the app"),
    host: str | None = typer.Option(None, "--host", help="Bind address (default from config)"),
    port: int | None = typer.Option(None, "--port", "-p", help="Bind port (default from config)"),
    log_level: str | None = typer.Option(None, "--log-level", help="Log level (default from config)"),
    config_path: Path | None = typer.Option(None, "--config", "-c", help="Config file to read"),
) -> None:
    """Serve one handler (or any ASGI app) with uvicorn."""
    import uvicorn

    config = load_config(config_path)
    level = (log_level or config.server.log_level).upper()
    configure_logging(level)

    asgi_app = load_target(target, factory=factory, config=config)
    bind_host = host or config.server.host
    bind_port = port or config.server.port

    logger.info(f"Serving {target} on http://{bind_host}:{bind_port}")
    console.print(f"Serving [cyan]{target}[/cyan] on http://{bind_host}:{bind_port}")
    uvicorn.run(
        asgi_app,
        host=bind_host,
        port=bind_port,
        log_level=_UVICORN_LEVELS.get(level, level.lower()),
        lifespan="off",
    )
