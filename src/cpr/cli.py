"""Shared CLI utilities for cpr.

Provides the standardised diagnostic helpers (``Error:`` / ``Note:`` lines on
stderr), the verbose trace printer and the single-write stdout helper used by
the command dispatcher.

Usage::

    from cpr.cli import error_exit, make_trace_printer, write_flags

    line = resolve_packages(pkgs, mode, trace=make_trace_printer(verbose))
    write_flags(line)
"""

from __future__ import annotations

from collections.abc import Callable
from typing import NoReturn

import typer
from rich.console import Console

USAGE = "Usage: cpr <flags|libs> [...PKGS]"

# ---------------------------------------------------------------------------
# Standardised output helpers
# ---------------------------------------------------------------------------

_err_console = Console(stderr=True, emoji=False, highlight=False)


def _emit(line: str, style: str | None = None) -> None:
    # User-supplied package names may contain "[", so markup stays off.
    _err_console.print(line, style=style, markup=False, soft_wrap=True)


def print_error(msg: str) -> None:
    """Print ``Error: <msg>`` to stderr."""
    _emit(f"Error: {msg}", style="bold red")


def print_note(msg: str) -> None:
    """Print ``Note: <msg>`` to stderr."""
    _emit(f"Note: {msg}", style="yellow")


def error_exit(
    msg: str,
    *,
    note: str | None = None,
    usage: bool = False,
    code: int = 1,
) -> NoReturn:
    """Print *msg* as an error and ``raise typer.Exit(code)``.

    *note* adds a ``Note:`` hint line, *usage* adds the usage line.
    """
    print_error(msg)
    if note:
        print_note(note)
    if usage:
        _emit(USAGE)
    raise typer.Exit(code=code)


def make_trace_printer(verbose: bool) -> Callable[[str], None] | None:
    """Return a stderr printer for per-package resolution traces, or ``None`` when quiet."""
    if not verbose:
        return None

    def _trace(line: str) -> None:
        _emit(line, style="dim")

    return _trace


def write_flags(line: bytes) -> None:
    """Write a resolved flag line to stdout in a single write.

    An empty *line* (nothing resolved to any text) writes nothing at all.
    """
    if line:
        typer.echo(line, nl=False)
