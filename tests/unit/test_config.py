"""Tests for environment-based configuration loading."""

from __future__ import annotations

import pytest

from teleskope.config import load_config
from teleskope.models.config import LayoutConfig


class TestLoadConfig:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for key in ("TELESKOPE_LOG_LEVEL", "TELESKOPE_LAYOUT_PADDING", "TELESKOPE_QUICK_INFO_COLUMNS"):
            monkeypatch.delenv(key, raising=False)
        config = load_config()
        assert config.layout == LayoutConfig()
        assert config.render.quick_info_columns == 4
        assert config.log.level == "info"

    def test_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TELESKOPE_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("TELESKOPE_LAYOUT_NODE_WIDTH", "200")
        monkeypatch.setenv("TELESKOPE_LAYOUT_NAMESPACE_GAP", "10")
        config = load_config()
        assert config.log.level == "debug"
        assert config.layout.node_width == 200
        assert config.layout.namespace_gap == 10

    def test_values_are_clamped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TELESKOPE_QUICK_INFO_COLUMNS", "99")
        monkeypatch.setenv("TELESKOPE_LAYOUT_NODE_WIDTH", "1")
        config = load_config()
        assert config.render.quick_info_columns == 10
        assert config.layout.node_width == 20

    def test_invalid_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TELESKOPE_LOG_LEVEL", "verbose")
        with pytest.raises(ValueError, match="Invalid log level"):
            load_config()

    def test_invalid_integer(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TELESKOPE_LAYOUT_PADDING", "wide")
        with pytest.raises(ValueError, match="TELESKOPE_LAYOUT_PADDING"):
            load_config()
