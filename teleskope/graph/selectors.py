"""Label selector helpers.

Only equality-based ``matchLabels`` semantics are supported; set-based
expressions (``In``, ``NotIn``, ``Exists``...) are not interpreted.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from teleskope.profiles.jsonpath import extract


def selector_matches(selector: Any, labels: Any) -> bool:
    """True if every selector key is present in ``labels`` with an equal value.

    An empty or malformed selector matches nothing.
    """
    if not isinstance(selector, Mapping) or not selector:
        return False
    if not isinstance(labels, Mapping):
        return False
    return all(key in labels and labels[key] == value for key, value in selector.items())


def selector_to_string(match_labels: Any) -> str:
    """Render ``matchLabels`` as a ``k=v,k2=v2`` selector string, sorted by key."""
    if not isinstance(match_labels, Mapping):
        return ""
    return ",".join(f"{key}={value}" for key, value in sorted(match_labels.items(), key=lambda kv: str(kv[0])))


def backend_service_names(ingress: Any) -> list[str]:
    """Service names an Ingress routes to, in declaration order, deduplicated."""
    found: list[Any] = []
    for path in (
        "$.spec.defaultBackend.service.name",
        "$.spec.rules[*].http.paths[*].backend.service.name",
    ):
        value = extract(ingress, path)
        if isinstance(value, list):
            found.extend(value)
        elif value is not None:
            found.append(value)

    names: list[str] = []
    for name in found:
        if isinstance(name, str) and name and name not in names:
            names.append(name)
    return names
