"""Runtime state shared across CLI commands."""

from __future__ import annotations
from dataclasses import dataclass
from rich.console import Console
from ark_cli.config import MarketplaceSettings
from ark_cli.marketplace import MarketplaceClient


@dataclass(slots=True)
class CLIContext:
    """Object stored on :class:`typer.Context` for command access."""

    settings: MarketplaceSettings
    marketplace: MarketplaceClient
    console: Console


__all__ = ["CLIContext"]
