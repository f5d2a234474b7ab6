"""Console output helpers for wt commands."""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, NoReturn

import typer
from pydantic import ValidationError
from rich.markup import escape

from wt_cli.core.utils import err_console
from wt_cli.errors import WtError

if TYPE_CHECKING:
    from collections.abc import Iterator


def error(msg: str) -> NoReturn:
    """Print an error message and exit."""
    err_console.print(f"[bold red]Error:[/bold red] {escape(msg)}", highlight=False)
    raise typer.Exit(1)


def success(msg: str) -> None:
    """Print a success message."""
    err_console.print(f"[bold green]✓[/bold green] {escape(msg)}")


def info(msg: str) -> None:
    """Print an info message, with special styling for commands."""
    if msg.startswith("Running: "):
        cmd = msg[9:]
        err_console.print(f"[dim]→[/dim] Running: [bold cyan]{escape(cmd)}[/bold cyan]")
    else:
        err_console.print(f"[dim]→[/dim] {escape(msg)}")


def warn(msg: str) -> None:
    """Print a warning message."""
    err_console.print(f"[yellow]Warning:[/yellow] {escape(msg)}")


@contextmanager
def reported_errors() -> Iterator[None]:
    """Turn `WtError` and config validation failures into an error exit."""
    try:
        yield
    except WtError as e:
        error(str(e))
    except ValidationError as e:
        error(f"invalid configuration: {e}")
