"""Output helpers for rendering data in the CLI."""

from __future__ import annotations
import json
from collections.abc import Sequence
from typing import Any
from rich.console import Console
from rich.panel import Panel
from rich.table import Table


def render_table(
    console: Console,
    *,
    title: str,
    columns: list[str],
    rows: list[list[Any]],
) -> None:
    """Render a table with ``columns`` and ``rows`` to ``console``."""
    table = Table(title=title, show_lines=False)
    for column in columns:
        table.add_column(column)
    for row in rows:
        table.add_row(*[str(cell) for cell in row])
    console.print(table)


def render_kv_section(
    console: Console,
    *,
    title: str,
    pairs: Sequence[tuple[str, str]],
) -> None:
    """Render key/value pairs in a bordered panel."""
    lines = [f"[bold]{key}[/]: {value}" for key, value in pairs]
    panel = Panel("\n".join(lines), title=title, expand=False)
    console.print(panel)


def print_json(payload: Any) -> None:
    """Write ``payload`` to stdout as indented JSON."""
    print(json.dumps(payload, indent=2, default=str))


__all__ = ["print_json", "render_kv_section", "render_table"]
