"""Console and logging helpers."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

err_console = Console(stderr=True)


def setup_rich_logging(log_level: str = "warning", *, console: Console | None = None) -> None:
    """Configure logging to use Rich for consistent, pretty output.

    Args:
        log_level: Logging level (debug, info, warning, error).
        console: Rich console to log to (defaults to stderr, keeping stdout
            clean for `wt dir` and friends).

    """
    level = getattr(logging, log_level.upper(), logging.WARNING)

    handler = RichHandler(
        console=console or err_console,
        show_time=False,
        show_level=True,
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)
