"""Core data structures for Teleskope."""

from teleskope.models.config import TeleskopeConfig
from teleskope.models.resources import (
    ActionDefinition,
    ActionType,
    ColumnDefinition,
    ColumnType,
    Record,
    ResourceIdentity,
    ResourceProfile,
)

__all__ = [
    "ActionDefinition",
    "ActionType",
    "ColumnDefinition",
    "ColumnType",
    "Record",
    "ResourceIdentity",
    "ResourceProfile",
    "TeleskopeConfig",
]
