"""Configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class LayoutConfig:
    """Topology layout geometry, in canvas pixels."""

    node_width: int = 180
    node_height: int = 60
    rank_sep: int = 60
    node_sep: int = 30
    padding: int = 40
    header_height: int = 40
    namespace_gap: int = 50


@dataclass
class RenderConfig:
    """Table and detail rendering configuration."""

    quick_info_columns: int = 4


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "info"


@dataclass
class TeleskopeConfig:
    """Top-level Teleskope configuration."""

    layout: LayoutConfig = field(default_factory=LayoutConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    log: LogConfig = field(default_factory=LogConfig)
