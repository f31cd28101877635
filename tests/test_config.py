"""Tests for the environment-driven config loader."""

import pytest

from cpr.config import DEFAULT_QUERY_TOOL, ResolverConfig, load_config


class TestLoadConfig:
    def test_defaults(self) -> None:
        cfg = load_config({})
        assert cfg == ResolverConfig()
        assert cfg.base_path is None
        assert cfg.query_tool == DEFAULT_QUERY_TOOL
        assert not cfg.has_fallback

    def test_base_path(self) -> None:
        cfg = load_config({"CPRPATH": "/opt/pkgs"})
        assert cfg.base_path == "/opt/pkgs"
        assert cfg.has_fallback

    def test_empty_base_path_counts_as_set(self) -> None:
        assert load_config({"CPRPATH": ""}).has_fallback

    def test_query_tool_override(self) -> None:
        assert load_config({"PKG_CONFIG": "pkgconf"}).query_tool == "pkgconf"

    def test_empty_query_tool_uses_default(self) -> None:
        assert load_config({"PKG_CONFIG": ""}).query_tool == DEFAULT_QUERY_TOOL

    def test_reads_process_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CPRPATH", "/from/env")
        monkeypatch.delenv("PKG_CONFIG", raising=False)
        cfg = load_config()
        assert cfg.base_path == "/from/env"
        assert cfg.query_tool == DEFAULT_QUERY_TOOL

    def test_frozen(self) -> None:
        cfg = load_config({})
        with pytest.raises(AttributeError):
            cfg.base_path = "/x"  # type: ignore[misc]
