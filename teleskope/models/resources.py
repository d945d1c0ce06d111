"""Resource identity and display-profile data structures."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

# A decoded Kubernetes object: arbitrarily nested, shape unknown to the engine.
Record = Mapping[str, Any]


@dataclass(frozen=True)
class ResourceIdentity:
    """Group/Version/Kind triple.  An empty group is the core API group."""

    group: str
    version: str
    kind: str

    def __str__(self) -> str:
        if self.group:
            return f"{self.group}/{self.version}/{self.kind}"
        return f"{self.version}/{self.kind}"


class ColumnType(StrEnum):
    """Semantic type of a table column, selects the cell formatter."""

    TEXT = "text"
    LINK = "link"
    AGE = "age"
    STATUS = "status"
    ENHANCED_STATUS = "enhanced-status"
    LIST = "list"
    BOOLEAN = "boolean"
    NUMBER = "number"
    CONTAINER_STATUSES = "container-statuses"


class ActionType(StrEnum):
    """Capabilities a profile may expose for its kind."""

    EDIT = "edit"
    DELETE = "delete"
    VIEW = "view"
    TERMINAL = "terminal"
    OPEN_URL = "open-url"
    CUSTOM = "custom"


@dataclass(frozen=True)
class ColumnDefinition:
    """One table column: header, JSONPath into the record, and display type."""

    header: str
    path: str
    type: ColumnType
    width: str | None = None


@dataclass(frozen=True)
class ActionDefinition:
    label: str
    type: ActionType
    icon: str | None = None
    url_path: str | None = None  # only meaningful for OPEN_URL


@dataclass(frozen=True)
class ResourceProfile:
    """Display shape for one kind.

    Column order is display order; the first few columns double as the
    quick-info summary of the detail view.  ``actions`` is None when the
    profile declares no capabilities at all.
    """

    identity: ResourceIdentity
    columns: tuple[ColumnDefinition, ...]
    actions: tuple[ActionDefinition, ...] | None = None

    def __post_init__(self) -> None:
        if not self.columns:
            raise ValueError(f"Profile for {self.identity} must define at least one column")

    @property
    def headers(self) -> list[str]:
        return [col.header for col in self.columns]

    def supports(self, action: ActionType) -> bool:
        """Return True if the profile declares an action of the given type."""
        return any(a.type == action for a in self.actions or ())
