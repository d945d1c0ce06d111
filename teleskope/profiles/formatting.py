"""Cell formatting: raw extracted value + column type -> display string."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import UTC, datetime
from typing import Any

from teleskope.models.resources import ColumnType
from teleskope.profiles.status import classify_status, container_badge, pod_status

PLACEHOLDER = "-"

_MINUTE = 60
_HOUR = 60 * _MINUTE
_DAY = 24 * _HOUR


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def format_age(timestamp: Any, now: datetime | None = None) -> str:
    """Render the elapsed time since ``timestamp`` in its largest unit only.

    ``"2d"``, ``"5h"``, ``"59m"``, ``"12s"`` -- never combined units.
    """
    parsed = parse_timestamp(timestamp)
    if parsed is None:
        return PLACEHOLDER
    current = now or datetime.now(tz=UTC)
    seconds = max(int((current - parsed).total_seconds()), 0)

    if seconds >= _DAY:
        return f"{seconds // _DAY}d"
    if seconds >= _HOUR:
        return f"{seconds // _HOUR}h"
    if seconds >= _MINUTE:
        return f"{seconds // _MINUTE}m"
    return f"{seconds}s"


def stringify(value: Any) -> str:
    """Plain string form of a scalar, JSON-flavoured for booleans and nulls."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def format_value(value: Any, column_type: ColumnType | str, now: datetime | None = None) -> str:
    """Format an extracted value for display.

    Absent values render as the placeholder for every type, so a missing
    number ("-") stays distinguishable from zero ("0").
    """
    if value is None:
        return PLACEHOLDER

    try:
        kind = ColumnType(column_type)
    except ValueError:
        kind = ColumnType.TEXT

    if kind is ColumnType.AGE:
        return format_age(value, now=now)

    if kind is ColumnType.STATUS:
        return classify_status(stringify(value)).glyph

    if kind is ColumnType.ENHANCED_STATUS:
        return classify_status(pod_status(value)).glyph

    if kind is ColumnType.CONTAINER_STATUSES:
        containers = [value] if isinstance(value, Mapping) else value if _is_sequence(value) else []
        return " ".join(container_badge(c).glyph for c in containers) or PLACEHOLDER

    if kind is ColumnType.LIST:
        if _is_sequence(value):
            return ", ".join(stringify(v) for v in value)
        return stringify(value)

    if kind is ColumnType.BOOLEAN:
        return "Yes" if value else "No"

    if kind is ColumnType.NUMBER:
        return stringify(value)

    # text, link
    if isinstance(value, Mapping) or _is_sequence(value):
        return f"{len(value)} items"
    return stringify(value)
