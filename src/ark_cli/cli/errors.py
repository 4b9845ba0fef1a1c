"""Error types surfaced by the ARK CLI."""

from __future__ import annotations


class CLIError(RuntimeError):
    """Raised for user-facing failures that end a command."""


__all__ = ["CLIError"]
