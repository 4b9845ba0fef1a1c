"""Typer application wiring for the ARK CLI."""

from __future__ import annotations
import logging
import sys
from typing import Annotated
import click
import typer
from rich.console import Console
from ark_cli.config import get_settings
from ark_cli.marketplace import MarketplaceClient
from .errors import CLIError
from .marketplace import marketplace_app
from .state import CLIContext


app = typer.Typer(help="Command line tools for the ARK platform.")
app.add_typer(marketplace_app, name="marketplace")


@app.callback()
def _configure(
    ctx: typer.Context,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging."),
    ] = False,
) -> None:
    """Initialise shared CLI state before executing a command."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    try:
        settings = get_settings(refresh=True)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    ctx.obj = CLIContext(
        settings=settings,
        marketplace=MarketplaceClient.from_settings(settings),
        console=Console(),
    )


def main() -> None:
    """Entry point used by console scripts."""
    console = Console()
    try:
        app(standalone_mode=False)
    except click.UsageError as exc:
        console.print(f"[red]Error:[/red] {exc.format_message()}")
        if exc.ctx and exc.ctx.command_path:
            help_cmd = f"{exc.ctx.command_path} --help"
            console.print(f"\nRun '[cyan]{help_cmd}[/cyan]' for usage information.")
        sys.exit(exc.exit_code)
    except CLIError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        sys.exit(1)


__all__ = ["app", "main"]
