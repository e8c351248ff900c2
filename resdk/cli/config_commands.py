"""Configuration CLI commands."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.markup import escape
from rich.table import Table

from resdk.config.loader import get_config_path, load_config, save_config
from resdk.config.schema import Config
from resdk.core.errors import ConfigError
from resdk.core.handler import SERIALIZER_SLOTS

from .core import app, console

config_app = typer.Typer(help="Inspect and create resdk configuration")
app.add_typer(config_app, name="config")


@config_app.command("show")
def show(
    config_path: Path | None = typer.Option(None, "--config", "-c", help="Config file to read"),
) -> None:
    """Show the effective configuration."""
    path = config_path or get_config_path()
    try:
        config = load_config(path, strict=True)
    except ConfigError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)

    console.print(f"Config: {path} {'[green]✓[/green]' if path.exists() else '[dim](defaults)[/dim]'}")

    table = Table(title="Responses")
    table.add_column("Outcome", style="cyan")
    table.add_column("Status", justify="right")
    for outcome in SERIALIZER_SLOTS:
        table.add_row(outcome, str(config.responses.status_for(outcome)))
    console.print(table)

    console.print(f"Content-Type: {config.responses.content_type}")
    console.print(f"Server: {config.server.host}:{config.server.port} (log level {config.server.log_level})")
    if config.telemetry.enabled:
        console.print(f"Telemetry: [green]✓ {config.telemetry.host}:{config.telemetry.port}[/green]")
    else:
        console.print("Telemetry: [dim]disabled[/dim]")


@config_app.command("init")
def init(
    config_path: Path | None = typer.Option(None, "--config", "-c", help="Config file to write"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite without asking"),
) -> None:
    """Write a config file with default values."""
    path = config_path or get_config_path()
    if path.exists() and not force:
        console.print(f"[yellow]Config already exists at {path}[/yellow]")
        if not typer.confirm("Overwrite?"):
            raise typer.Exit()

    save_config(Config(), path)
    console.print(f"[green]✓[/green] Created config at {path}")
