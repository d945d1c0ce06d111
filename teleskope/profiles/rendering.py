"""Table rows, quick-info bars and detail sections for a record.

Everything here is pure: records go in, immutable display values come out.
The presentation layer decides how to draw them.
"""

from __future__ import annotations

import json
from collections.abc import Collection, Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from teleskope.models.resources import ColumnDefinition, ColumnType, Record, ResourceProfile
from teleskope.profiles.formatting import PLACEHOLDER, format_age, format_value, stringify
from teleskope.profiles.jsonpath import extract
from teleskope.profiles.status import (
    StatusBadge,
    StatusCategory,
    classify_status,
    container_badge,
    pod_status,
)

_SUMMARY_KEYS = 8
_VALUE_PREVIEW = 50
_SECRET_MASK = "••••••••"
_ANNOTATION_LIMIT = 5
_ANNOTATION_PREVIEW = 100
_HIDDEN_ANNOTATION_PREFIX = "kubectl.kubernetes.io"


@dataclass(frozen=True)
class RenderedCell:
    """One formatted cell.  ``category`` is set only for status-like columns."""

    header: str
    text: str
    raw: Any = None
    category: StatusCategory | None = None
    badges: tuple[StatusBadge, ...] = ()


@dataclass(frozen=True)
class DetailItem:
    label: str
    value: str


@dataclass(frozen=True)
class DetailSection:
    title: str
    items: tuple[DetailItem, ...] = field(default_factory=tuple)


# ---------------------------------------------------------------------------
# Table rendering
# ---------------------------------------------------------------------------


def render_cell(record: Record, column: ColumnDefinition, now: datetime | None = None) -> RenderedCell:
    value = extract(record, column.path)
    text = format_value(value, column.type, now=now)
    category: StatusCategory | None = None
    badges: tuple[StatusBadge, ...] = ()

    if column.type is ColumnType.STATUS:
        category = classify_status(None if value is None else stringify(value)).category
    elif column.type is ColumnType.ENHANCED_STATUS:
        category = classify_status(pod_status(value)).category
    elif column.type is ColumnType.CONTAINER_STATUSES:
        containers = [value] if isinstance(value, Mapping) else value if isinstance(value, list) else []
        badges = tuple(container_badge(c) for c in containers)

    return RenderedCell(header=column.header, text=text, raw=value, category=category, badges=badges)


def render_row(
    record: Record,
    profile: ResourceProfile,
    hidden: Collection[str] = (),
    now: datetime | None = None,
) -> list[RenderedCell]:
    """Render the visible columns of ``profile`` for one record, in order."""
    return [render_cell(record, col, now=now) for col in profile.columns if col.header not in hidden]


def render_table(
    records: Iterable[Record],
    profile: ResourceProfile,
    hidden: Collection[str] = (),
    now: datetime | None = None,
) -> list[list[RenderedCell]]:
    return [render_row(r, profile, hidden=hidden, now=now) for r in records]


def quick_info(
    record: Record,
    profile: ResourceProfile,
    count: int = 4,
    now: datetime | None = None,
) -> list[RenderedCell]:
    """Summary cells for the detail header: the first ``count`` columns."""
    return [render_cell(record, col, now=now) for col in profile.columns[:count]]


# ---------------------------------------------------------------------------
# Detail sections
# ---------------------------------------------------------------------------


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def _text(value: Any, default: str = PLACEHOLDER) -> str:
    if value is None or value == "":
        return default
    return stringify(value)


def _truncate(text: str, limit: int = _VALUE_PREVIEW) -> str:
    return text[:limit] + "..." if len(text) > limit else text


def detail_sections(kind: str, record: Record, now: datetime | None = None) -> list[DetailSection]:
    """Metadata, then Labels and Annotations when present, then kind-specific sections."""
    metadata = _mapping(record.get("metadata"))
    spec = _mapping(record.get("spec"))
    status = _mapping(record.get("status"))

    created = format_age(metadata.get("creationTimestamp"), now=now)
    uid = _text(metadata.get("uid"))
    metadata_section = DetailSection(
        "Metadata",
        (
            DetailItem("Name", _text(metadata.get("name"))),
            DetailItem("Namespace", _text(metadata.get("namespace"))),
            DetailItem("UID", uid[:8] + "..." if uid != PLACEHOLDER else uid),
            DetailItem("Created", f"{created} ago" if created != PLACEHOLDER else created),
            DetailItem("Resource Version", _text(metadata.get("resourceVersion"))),
        ),
    )

    if kind == "Pod":
        extra = _pod_sections(record, spec, status)
    elif kind == "Deployment":
        extra = _deployment_sections(spec, status)
    elif kind == "Service":
        extra = _service_sections(spec)
    elif kind == "Ingress":
        extra = _ingress_sections(spec, status)
    elif kind == "ConfigMap":
        extra = _configmap_sections(record)
    elif kind == "Secret":
        extra = _secret_sections(record)
    else:
        extra = _generic_sections(spec, status)
    return [metadata_section, *_label_sections(metadata), *extra]


def _label_sections(metadata: Mapping[str, Any]) -> list[DetailSection]:
    sections = []
    labels = _mapping(metadata.get("labels"))
    if labels:
        sections.append(
            DetailSection("Labels", tuple(DetailItem(str(k), stringify(v)) for k, v in labels.items()))
        )

    annotations = [
        (str(k), stringify(v))
        for k, v in _mapping(metadata.get("annotations")).items()
        if not str(k).startswith(_HIDDEN_ANNOTATION_PREFIX)
    ]
    if annotations:
        items = [DetailItem(k, _truncate(v, _ANNOTATION_PREVIEW)) for k, v in annotations[:_ANNOTATION_LIMIT]]
        hidden = len(annotations) - _ANNOTATION_LIMIT
        if hidden > 0:
            items.append(DetailItem("", f"+{hidden} more annotations"))
        sections.append(DetailSection("Annotations", tuple(items)))
    return sections


def _pod_sections(record: Record, spec: Mapping[str, Any], status: Mapping[str, Any]) -> list[DetailSection]:
    statuses = {
        s.get("name"): s for s in _list(status.get("containerStatuses")) if isinstance(s, Mapping)
    }
    containers = []
    for container in _list(spec.get("containers")):
        if not isinstance(container, Mapping):
            continue
        name = _text(container.get("name"))
        cs = _mapping(statuses.get(container.get("name")))
        image = _text(container.get("image")).rsplit("/", 1)[-1]
        ready = "✓" if cs.get("ready") else "✗"
        restarts = cs.get("restartCount") or 0
        containers.append(DetailItem(name, f"{image} | Ready: {ready} | Restarts: {restarts}"))

    return [
        DetailSection(
            "Pod Status",
            (
                DetailItem("Status", pod_status(record)),
                DetailItem("Phase", _text(status.get("phase"))),
                DetailItem("Pod IP", _text(status.get("podIP"))),
                DetailItem("Host IP", _text(status.get("hostIP"))),
                DetailItem("Node", _text(spec.get("nodeName"))),
                DetailItem("QoS Class", _text(status.get("qosClass"))),
            ),
        ),
        DetailSection("Containers", tuple(containers)),
    ]


def _deployment_sections(spec: Mapping[str, Any], status: Mapping[str, Any]) -> list[DetailSection]:
    ready = status.get("readyReplicas") or 0
    desired = spec.get("replicas") or 0
    return [
        DetailSection(
            "Deployment Status",
            (
                DetailItem("Replicas", f"{ready} / {desired}"),
                DetailItem("Updated", stringify(status.get("updatedReplicas") or 0)),
                DetailItem("Available", stringify(status.get("availableReplicas") or 0)),
                DetailItem("Strategy", _text(_mapping(spec.get("strategy")).get("type"))),
            ),
        )
    ]


def _service_sections(spec: Mapping[str, Any]) -> list[DetailSection]:
    ports = []
    for port in _list(spec.get("ports")):
        if not isinstance(port, Mapping):
            continue
        target = f" → {stringify(port['targetPort'])}" if port.get("targetPort") else ""
        protocol = port.get("protocol") or "TCP"
        ports.append(
            DetailItem(_text(port.get("name") or port.get("port")), f"{_text(port.get('port'))}{target} ({protocol})")
        )

    return [
        DetailSection(
            "Service Configuration",
            (
                DetailItem("Type", _text(spec.get("type"), "ClusterIP")),
                DetailItem("Cluster IP", _text(spec.get("clusterIP"))),
                DetailItem("Session Affinity", _text(spec.get("sessionAffinity"), "None")),
            ),
        ),
        DetailSection("Ports", tuple(ports)),
    ]


def _ingress_sections(spec: Mapping[str, Any], status: Mapping[str, Any]) -> list[DetailSection]:
    lb_ingress = _list(_mapping(status.get("loadBalancer")).get("ingress"))
    addresses = [
        stringify(entry.get("ip") or entry.get("hostname"))
        for entry in lb_ingress
        if isinstance(entry, Mapping) and (entry.get("ip") or entry.get("hostname"))
    ]

    rules = []
    for rule in _list(spec.get("rules")):
        if not isinstance(rule, Mapping):
            continue
        paths = _list(_mapping(rule.get("http")).get("paths"))
        rendered = ", ".join(_text(_mapping(p).get("path"), "/") for p in paths)
        rules.append(DetailItem(_text(rule.get("host"), "*"), rendered))

    return [
        DetailSection(
            "Ingress Configuration",
            (
                DetailItem("Class", _text(spec.get("ingressClassName"))),
                DetailItem("Address", ", ".join(addresses) or PLACEHOLDER),
            ),
        ),
        DetailSection("Rules", tuple(rules)),
    ]


def _configmap_sections(record: Record) -> list[DetailSection]:
    data = _mapping(record.get("data"))
    items = tuple(DetailItem(key, _truncate(stringify(value))) for key, value in data.items())
    return [DetailSection("Data Keys", items)]


def _secret_sections(record: Record) -> list[DetailSection]:
    data = _mapping(record.get("data"))
    items = tuple(
        DetailItem(key, f"{_SECRET_MASK} ({len(stringify(value))} base64 chars)") for key, value in data.items()
    )
    return [
        DetailSection("Secret Info", (DetailItem("Type", _text(record.get("type"), "Opaque")),)),
        DetailSection("Data Keys", items),
    ]


def _summarize(value: Any) -> str:
    if isinstance(value, (Mapping, list)):
        return json.dumps(value, default=str)[:_VALUE_PREVIEW] + "..."
    return stringify(value)


def _generic_sections(spec: Mapping[str, Any], status: Mapping[str, Any]) -> list[DetailSection]:
    sections = []
    for title, doc in (("Spec", spec), ("Status", status)):
        if doc:
            items = tuple(DetailItem(k, _summarize(v)) for k, v in list(doc.items())[:_SUMMARY_KEYS])
            sections.append(DetailSection(title, items))
    return sections
