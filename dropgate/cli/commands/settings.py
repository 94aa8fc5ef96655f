"""
Settings CLI commands.

Commands for inspecting the configuration and switching auto-accept
on or off.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from dropgate.config import AutoAcceptSetting, Config
from dropgate.constants import DEFAULT_CONFIG_FILE
from dropgate.exceptions import ConfigError


def get_console(ctx: click.Context) -> Console:
    """Get the Rich console from context."""
    return ctx.obj.get("console", Console())


def get_config_path(ctx: click.Context) -> Path:
    """Get the config file path from context."""
    return ctx.obj.get("config_path", DEFAULT_CONFIG_FILE)


def format_flag(value: bool) -> str:
    """Format a boolean setting for display."""
    return "[green]on[/green]" if value else "[dim]off[/dim]"


@click.group()
def settings() -> None:
    """Show and change Dropgate settings."""
    pass


@settings.command("show")
@click.option(
    "--json", "as_json",
    is_flag=True,
    help="Output as JSON.",
)
@click.pass_context
def show_cmd(ctx: click.Context, as_json: bool) -> None:
    """Show the current configuration."""
    console = get_console(ctx)
    config: Config = ctx.obj["config"]

    if as_json:
        click.echo(json.dumps(config.to_dict(), indent=2))
        return

    table = Table(title="Dropgate Settings")
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value")

    table.add_row("Auto-accept files", format_flag(config.auto_accept))
    table.add_row("Notification title", config.notifications.app_name)
    table.add_row("Notification sound", format_flag(config.notifications.sound))
    table.add_row("Log level", config.log_level)
    table.add_row("Config file", str(get_config_path(ctx)))

    console.print(table)


@settings.command("auto-accept")
@click.argument(
    "value",
    required=False,
    type=click.Choice(["on", "off", "toggle"]),
)
@click.pass_context
def auto_accept_cmd(ctx: click.Context, value: Optional[str]) -> None:
    """Show or change whether incoming transfers are accepted automatically.

    Without VALUE the current setting is printed. The change applies to
    transfers offered after it is made; transfers already waiting for
    an answer keep their prompt.
    """
    console = get_console(ctx)
    setting = AutoAcceptSetting(get_config_path(ctx))

    try:
        if value is None:
            enabled = setting.enabled()
        elif value == "toggle":
            enabled = setting.toggle()
        else:
            enabled = value == "on"
            setting.set(enabled)
    except ConfigError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    console.print(f"Auto-accept files: {format_flag(enabled)}")
