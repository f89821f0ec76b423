"""Logging setup shared by the entry-points.

The Core only uses module loggers (`logging.getLogger(__name__)`); handlers
are installed here, once, by whoever owns the process (CLI, scripts).
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: str | int = "WARNING", *, console: Console | None = None) -> None:
    """Install a `RichHandler` on the root logger (idempotent)."""

    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level!r}")
        level = resolved

    root = logging.getLogger()
    root.setLevel(level)
    if any(isinstance(handler, RichHandler) for handler in root.handlers):
        return

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root.addHandler(handler)
