"""Filesystem predicates used by the local package fallback."""

from __future__ import annotations

import os
import stat


def is_directory(path: str | bytes | os.PathLike) -> bool:
    """Return True if *path* exists and is a directory (symlinks are followed).

    Any stat failure, including a missing path, answers False.
    """
    try:
        st = os.stat(path)
    except (OSError, ValueError):
        return False
    return stat.S_ISDIR(st.st_mode)
