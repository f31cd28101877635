"""Resolve package names to compiler or linker flags.

Each package is looked up with the query tool first
(``pkg-config --cflags <pkg>``).  When that fails for any reason and
``CPRPATH`` is set, a flag pointing into the local package layout is
synthesized instead, provided the directory exists::

    CPRPATH=/opt/pkgs  ->  -I/opt/pkgs/<pkg>/include   (flags)
                           -L/opt/pkgs/<pkg>/lib       (libs)

A batch is all-or-nothing: the first unresolved package raises
:class:`PackageNotFoundError` and nothing from earlier packages is returned.
"""

from __future__ import annotations

import enum
import os
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from cpr.buffer import Buffer
from cpr.config import BASE_PATH_VAR, ResolverConfig, load_config
from cpr.fsprobe import is_directory
from cpr.process import capture_process

_SPACE = ord(" ")


@dataclass(frozen=True)
class ResolutionMode:
    """Query flag plus the fallback flag prefix and package subdirectory."""

    query_flag: str
    fallback_prefix: str
    fallback_subdir: str


COMPILE_FLAGS = ResolutionMode("--cflags", "-I", "include")
LINK_FLAGS = ResolutionMode("--libs", "-L", "lib")

# Command name -> mode
MODES: dict[str, ResolutionMode] = {
    "flags": COMPILE_FLAGS,
    "libs": LINK_FLAGS,
}


class Outcome(enum.Enum):
    QUERY = "query tool"
    FALLBACK = "local fallback"
    NOT_FOUND = "not found"


class ResolveError(Exception):
    """Base class for resolution failures."""


class PackageNotFoundError(ResolveError):
    """Neither the query tool nor the local fallback knows *package*."""

    def __init__(self, package: str, base_configured: bool) -> None:
        super().__init__(f"package '{package}' not found")
        self.package = package
        self.base_configured = base_configured

    @property
    def hint(self) -> str | None:
        """Setup advice, given only when no fallback base was configured."""
        if self.base_configured:
            return None
        return f"set up the '{BASE_PATH_VAR}' variable to access local packages"


def _append_fallback(
    buffer: Buffer, mode: ResolutionMode, base: str, package: str
) -> bool:
    """Append ``<prefix><base>/<package>/<subdir>`` and report whether that directory exists."""
    prefix = os.fsencode(mode.fallback_prefix)
    head = len(buffer)
    buffer.append_many(prefix)
    buffer.append_many(os.fsencode(base))
    buffer.append(ord("/"))
    buffer.append_many(os.fsencode(package))
    buffer.append(ord("/"))
    buffer.append_many(os.fsencode(mode.fallback_subdir))
    return is_directory(buffer.getvalue(head + len(prefix)))


def _resolve_one(
    buffer: Buffer, package: str, mode: ResolutionMode, config: ResolverConfig
) -> Outcome:
    head = len(buffer)

    if capture_process([config.query_tool, mode.query_flag, package], buffer):
        return Outcome.QUERY

    buffer.truncate(head)
    if config.base_path is None:
        return Outcome.NOT_FOUND
    if _append_fallback(buffer, mode, config.base_path, package):
        return Outcome.FALLBACK

    buffer.truncate(head)
    return Outcome.NOT_FOUND


def resolve_packages(
    packages: Sequence[str],
    mode: ResolutionMode,
    config: ResolverConfig | None = None,
    *,
    trace: Callable[[str], None] | None = None,
) -> bytes:
    """Resolve *packages* in order and return the flag line to print.

    The result is the space-joined flags followed by a newline, or ``b""``
    when there is nothing to print (no packages, or only empty results).

    Args:
        packages: Package names, resolved left to right.
        mode: :data:`COMPILE_FLAGS` or :data:`LINK_FLAGS`.
        config: Resolver settings; read from the environment when ``None``.
        trace: Optional callback receiving one line per resolved package.

    Raises:
        PackageNotFoundError: for the first package that cannot be resolved.
    """
    if config is None:
        config = load_config()

    with Buffer() as buffer:
        for package in packages:
            head = len(buffer)
            outcome = _resolve_one(buffer, package, mode, config)

            if outcome is Outcome.NOT_FOUND:
                if trace is not None:
                    trace(f"{package}: {outcome.value}")
                raise PackageNotFoundError(package, config.has_fallback)

            if trace is not None:
                text = buffer.getvalue(head).decode(errors="replace")
                trace(f"{package}: {outcome.value}: {text}")

            # Keep exactly one separator; empty captures add none.
            if len(buffer) and buffer.last != _SPACE:
                buffer.append(_SPACE)

        while buffer.last == _SPACE:
            buffer.truncate(len(buffer) - 1)
        if not len(buffer):
            return b""
        buffer.append(ord("\n"))
        return buffer.getvalue()
