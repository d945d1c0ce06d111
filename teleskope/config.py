"""Configuration loading from environment variables."""

from __future__ import annotations

import os

from teleskope.models.config import (
    LayoutConfig,
    LogConfig,
    RenderConfig,
    TeleskopeConfig,
)


def _env(key: str, default: str = "") -> str:
    return os.environ.get(f"TELESKOPE_{key}", default)


def _env_int(key: str, default: int, min_val: int | None = None, max_val: int | None = None) -> int:
    raw = _env(key, str(default))
    try:
        val = int(raw)
    except ValueError:
        raise ValueError(f"Invalid integer for TELESKOPE_{key}: {raw!r}") from None
    if min_val is not None:
        val = max(val, min_val)
    if max_val is not None:
        val = min(val, max_val)
    return val


def _validate_log_level(value: str) -> str:
    valid = {"debug", "info", "warning", "error"}
    if value.lower() not in valid:
        raise ValueError(f"Invalid log level: {value}. Must be one of {valid}")
    return value.lower()


def load_config() -> TeleskopeConfig:
    """Load configuration from TELESKOPE_* environment variables."""
    return TeleskopeConfig(
        layout=LayoutConfig(
            node_width=_env_int("LAYOUT_NODE_WIDTH", 180, min_val=20, max_val=1000),
            node_height=_env_int("LAYOUT_NODE_HEIGHT", 60, min_val=10, max_val=500),
            rank_sep=_env_int("LAYOUT_RANK_SEP", 60, min_val=0, max_val=1000),
            node_sep=_env_int("LAYOUT_NODE_SEP", 30, min_val=0, max_val=1000),
            padding=_env_int("LAYOUT_PADDING", 40, min_val=0, max_val=500),
            header_height=_env_int("LAYOUT_HEADER_HEIGHT", 40, min_val=0, max_val=500),
            namespace_gap=_env_int("LAYOUT_NAMESPACE_GAP", 50, min_val=0, max_val=1000),
        ),
        render=RenderConfig(
            quick_info_columns=_env_int("QUICK_INFO_COLUMNS", 4, min_val=1, max_val=10),
        ),
        log=LogConfig(
            level=_validate_log_level(_env("LOG_LEVEL", "info")),
        ),
    )
