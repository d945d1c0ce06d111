"""Status classification for phases, conditions and container states.

Raw status strings are normalised (lower-case, whitespace and hyphens
removed) and bucketed into four categories.  "Terminating" is checked
before everything else: it belongs to the pending category but carries
its own paused glyph.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class StatusCategory(StrEnum):
    """Semantic class of a status badge, independent of any stylesheet."""

    HEALTHY = "healthy"
    PENDING = "pending"
    FAILED = "failed"
    UNKNOWN = "unknown"


class ContainerState(StrEnum):
    RUNNING = "running"
    WAITING = "waiting"
    TERMINATED = "terminated"
    PENDING = "pending"


GLYPH_HEALTHY = "✓"
GLYPH_PENDING = "⟳"
GLYPH_FAILED = "✕"
GLYPH_TERMINATING = "⏸"
GLYPH_UNKNOWN = "?"

_TERMINATING = "terminating"
_PENDING = frozenset({"pending", "progressing", "waiting", "containercreating"})
_FAILED = frozenset({"failed", "error", "crashloopbackoff", "imagepullbackoff", "false", "terminated"})
_HEALTHY = frozenset({"running", "active", "healthy", "ready", "true", "succeeded"})

_STRIP_RE = re.compile(r"[\s-]")

_CONTAINER_CATEGORY = {
    ContainerState.RUNNING: StatusCategory.HEALTHY,
    ContainerState.WAITING: StatusCategory.PENDING,
    ContainerState.TERMINATED: StatusCategory.FAILED,
    ContainerState.PENDING: StatusCategory.PENDING,
}

_CATEGORY_GLYPH = {
    StatusCategory.HEALTHY: GLYPH_HEALTHY,
    StatusCategory.PENDING: GLYPH_PENDING,
    StatusCategory.FAILED: GLYPH_FAILED,
    StatusCategory.UNKNOWN: GLYPH_UNKNOWN,
}


@dataclass(frozen=True)
class StatusBadge:
    """A classified status: the original label, its category and glyph."""

    label: str
    category: StatusCategory
    glyph: str


def normalize_status(raw: Any) -> str:
    if raw is None:
        return ""
    return _STRIP_RE.sub("", str(raw).lower())


def classify_status(raw: Any) -> StatusBadge:
    """Classify a raw status string.

    Order matters: terminating, pending, failed, healthy, then unknown.
    """
    label = "" if raw is None else str(raw)
    normalized = normalize_status(raw)

    if normalized == _TERMINATING:
        return StatusBadge(label, StatusCategory.PENDING, GLYPH_TERMINATING)
    if normalized in _PENDING:
        return StatusBadge(label, StatusCategory.PENDING, GLYPH_PENDING)
    if normalized in _FAILED:
        return StatusBadge(label, StatusCategory.FAILED, GLYPH_FAILED)
    if normalized in _HEALTHY:
        return StatusBadge(label, StatusCategory.HEALTHY, GLYPH_HEALTHY)
    return StatusBadge(label, StatusCategory.UNKNOWN, GLYPH_UNKNOWN)


def pod_status(record: Any) -> str:
    """Effective status of a Pod-like record.

    A deletion timestamp wins over whatever phase the record reports.
    """
    if not isinstance(record, Mapping):
        return "Unknown"

    metadata = record.get("metadata")
    if isinstance(metadata, Mapping) and metadata.get("deletionTimestamp"):
        return "Terminating"

    status = record.get("status")
    phase = str(status.get("phase") or "").strip() if isinstance(status, Mapping) else ""
    if phase:
        return phase[0].upper() + phase[1:].lower()
    return "Unknown"


def container_state(container_status: Any) -> ContainerState:
    """State of one entry of ``status.containerStatuses``."""
    state = container_status.get("state") if isinstance(container_status, Mapping) else None
    if not isinstance(state, Mapping):
        return ContainerState.PENDING
    if state.get("running"):
        return ContainerState.RUNNING
    if state.get("waiting"):
        return ContainerState.WAITING
    if state.get("terminated"):
        return ContainerState.TERMINATED
    return ContainerState.PENDING


def container_badge(container_status: Any) -> StatusBadge:
    state = container_state(container_status)
    category = _CONTAINER_CATEGORY[state]
    return StatusBadge(state.value, category, _CATEGORY_GLYPH[category])
