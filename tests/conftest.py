"""Shared fixtures: a scriptable stand-in for pkg-config."""

import stat
import sys
from pathlib import Path

import pytest

_FAKE_PKG_CONFIG = """\
#!/bin/sh
# usage: pkg-config --cflags|--libs <package>
echo "fake pkg-config: $*" >&2
f="{db}/${{1#--}}/$2"
[ -f "$f" ] || exit 1
cat "$f"
"""


class FakePkgConfig:
    """Executable pkg-config replacement answering from files under *root*."""

    def __init__(self, root: Path) -> None:
        self.db = root / "db"
        self.path = root / "bin" / "pkg-config"
        self.path.parent.mkdir(parents=True)
        self.path.write_text(_FAKE_PKG_CONFIG.format(db=self.db), encoding="utf-8")
        self.path.chmod(self.path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)

    def add(self, package: str, cflags: str | None = None, libs: str | None = None) -> None:
        """Register *package*; output is written as given plus a newline."""
        for kind, text in (("cflags", cflags), ("libs", libs)):
            if text is None:
                continue
            entry = self.db / kind / package
            entry.parent.mkdir(parents=True, exist_ok=True)
            entry.write_bytes(text.encode() + b"\n")

    def add_raw(self, kind: str, package: str, data: bytes) -> None:
        """Register exact output bytes for ``--<kind> <package>``."""
        entry = self.db / kind / package
        entry.parent.mkdir(parents=True, exist_ok=True)
        entry.write_bytes(data)


@pytest.fixture
def fake_pkg_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> FakePkgConfig:
    """Point ``PKG_CONFIG`` at a fake tool and clear ``CPRPATH``."""
    if sys.platform == "win32":
        pytest.skip("fake pkg-config is a POSIX shell script")
    fake = FakePkgConfig(tmp_path / "pkgconfig")
    monkeypatch.setenv("PKG_CONFIG", str(fake.path))
    monkeypatch.delenv("CPRPATH", raising=False)
    return fake


@pytest.fixture
def local_pkgs(tmp_path: Path) -> Path:
    """Empty directory to use as ``CPRPATH``."""
    base = tmp_path / "local"
    base.mkdir()
    return base

