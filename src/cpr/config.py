"""Runtime configuration for cpr.

cpr has no project file; everything comes from the environment and is read
once at the start of a resolution:

``CPRPATH``
    Base directory for locally built packages, laid out as
    ``$CPRPATH/<package>/include`` and ``$CPRPATH/<package>/lib``.  When unset
    the local fallback is never attempted.

``PKG_CONFIG``
    Query tool to run instead of ``pkg-config`` (the same override honoured
    by autotools and meson).

Usage::

    from cpr.config import load_config

    cfg = load_config()
    cfg.base_path     # "/opt/local-pkgs" or None
    cfg.query_tool    # "pkg-config"
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

BASE_PATH_VAR = "CPRPATH"
QUERY_TOOL_VAR = "PKG_CONFIG"
DEFAULT_QUERY_TOOL = "pkg-config"


@dataclass(frozen=True)
class ResolverConfig:
    """Settings for one resolution run."""

    # Root of the local package layout; None disables the fallback.
    base_path: str | None = None

    # Program invoked as ``<query_tool> <--cflags|--libs> <package>``.
    query_tool: str = DEFAULT_QUERY_TOOL

    @property
    def has_fallback(self) -> bool:
        return self.base_path is not None


def load_config(environ: Mapping[str, str] | None = None) -> ResolverConfig:
    """Build a :class:`ResolverConfig` from *environ* (default ``os.environ``).

    An empty ``CPRPATH`` still counts as set; an empty ``PKG_CONFIG`` falls
    back to ``pkg-config``.
    """
    if environ is None:
        environ = os.environ
    return ResolverConfig(
        base_path=environ.get(BASE_PATH_VAR),
        query_tool=environ.get(QUERY_TOOL_VAR) or DEFAULT_QUERY_TOOL,
    )
