#!/usr/bin/env python3
"""
Main CLI entry point for keynav
"""

from pathlib import Path
from typing import Optional

import typer

from keynav import __version__
from keynav.commands.config import config
from keynav.commands.demo import demo
from keynav.commands.navigation import inspect, simulate
from keynav.utils.logging import setup_logging


def version():
    """Show keynav version"""
    typer.echo(f"keynav version {__version__}")
    typer.echo("Keyboard Focus Navigation Engine")


def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Also write logs to this file"),
):
    """
    keynav - Keyboard Focus Navigation Engine

    Regions, zones and geometry-aware directional focus movement.

    [bold]Examples:[/bold]

    Try the built-in demo:
        [cyan]keynav demo[/cyan]

    Replay keys against a layout:
        [cyan]keynav simulate layout.yaml down right select[/cyan]

    Inspect a layout:
        [cyan]keynav inspect layout.yaml[/cyan]
    """
    setup_logging(verbose=verbose, log_file=log_file)


def create_app() -> typer.Typer:
    """Create and configure the main CLI application"""
    app = typer.Typer(
        name="keynav",
        help="Keyboard focus navigation engine",
        rich_markup_mode="rich",
        no_args_is_help=True,
    )
    app.callback()(main)
    app.command()(version)
    app.command()(simulate)
    app.command()(inspect)
    app.command()(demo)
    app.command()(config)
    return app


app = create_app()


def run():
    app()


if __name__ == "__main__":
    run()
