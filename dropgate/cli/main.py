"""
Main CLI entry point for Dropgate.

This module defines the root CLI group and initializes the application.

Usage:
    dropgate --help
    dropgate settings show
    dropgate settings auto-accept toggle
    dropgate simulate events.json
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler

from dropgate import __version__
from dropgate.config import Config, get_config
from dropgate.constants import DEFAULT_CONFIG_FILE, LOG_FILE_NAME
from dropgate.cli.commands import settings, simulate

# Rich console for pretty output
console = Console()


def resolve_log_level(verbose: bool, debug: bool, config: Config) -> int:
    """Pick the log level: --debug, then -v, then the configured level."""
    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    level = logging.getLevelName(config.log_level.upper())
    return level if isinstance(level, int) else logging.WARNING


def build_log_handlers(config: Config) -> list[logging.Handler]:
    """Console handler, plus a log file under log_dir when log_to_file is set."""
    handlers: list[logging.Handler] = [RichHandler(console=console, rich_tracebacks=True)]
    if config.log_to_file:
        config.log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(config.log_dir / LOG_FILE_NAME)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        handlers.append(file_handler)
    return handlers


def setup_logging(verbose: bool, debug: bool, config: Config) -> None:
    """Configure logging based on verbosity flags and config."""
    logging.basicConfig(
        level=resolve_log_level(verbose, debug, config),
        format="%(message)s",
        datefmt="[%X]",
        handlers=build_log_handlers(config),
    )


@click.group()
@click.version_option(version=__version__, prog_name="Dropgate")
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Enable verbose output.",
)
@click.option(
    "--debug",
    is_flag=True,
    help="Enable debug output (more verbose than -v).",
)
@click.option(
    "--config",
    type=click.Path(exists=False),
    help="Path to config file.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    debug: bool,
    config: Optional[str],
) -> None:
    """
    Dropgate - Consent handling for incoming nearby-share transfers.

    Decide whether files and text offered by nearby devices are
    accepted automatically or only after you confirm them.

    Examples:

        Show current settings:
        $ dropgate settings show

        Accept incoming transfers without asking:
        $ dropgate settings auto-accept on

        Replay a recorded sequence of transfer events:
        $ dropgate simulate events.json
    """
    # Store config in context
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    ctx.obj["console"] = console

    # Load configuration
    if config:
        ctx.obj["config_path"] = Path(config)
        ctx.obj["config"] = Config.load(Path(config))
    else:
        ctx.obj["config_path"] = DEFAULT_CONFIG_FILE
        ctx.obj["config"] = get_config()

    # Setup logging
    setup_logging(verbose, debug, ctx.obj["config"])


# Register command groups
cli.add_command(settings.settings)
cli.add_command(simulate.simulate)


def main() -> None:
    """Main entry point."""
    try:
        cli()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(130)
    except Exception as e:
        console.print(f"[red]Error:[/red] {e}")
        if "--debug" in sys.argv:
            raise
        sys.exit(1)


if __name__ == "__main__":
    main()
