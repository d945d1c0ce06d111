"""Topology graph builder: Ingress -> Service -> Pod, grouped by namespace.

``build_graph`` is a pure function of its three input collections.  It
never mutates its inputs and always returns a fresh ``TopologyGraph``, so
callers can rebuild on every new snapshot and swap the result in.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from typing import Any

import networkx as nx

from teleskope.graph.layout import layered_layout
from teleskope.graph.models import (
    GraphEdge,
    GraphNode,
    NamespaceGroup,
    NodeKind,
    Position,
    TopologyGraph,
)
from teleskope.graph.selectors import backend_service_names, selector_matches
from teleskope.models.config import LayoutConfig
from teleskope.models.resources import Record
from teleskope.observability.logging import get_logger

_logger = get_logger("graph.builder")


@dataclass
class _Bucket:
    ingresses: list[Record] = field(default_factory=list)
    services: list[Record] = field(default_factory=list)
    pods: list[Record] = field(default_factory=list)


def group_id(namespace: str) -> str:
    return f"ns-group-{namespace}"


def edge_id(source: str, target: str) -> str:
    return f"e-{source}-{target}"


def _metadata(record: Any) -> Mapping[str, Any] | None:
    if not isinstance(record, Mapping):
        return None
    metadata = record.get("metadata")
    if not isinstance(metadata, Mapping) or not metadata.get("name"):
        return None
    return metadata


def _partition(
    ingresses: Iterable[Record] | None,
    services: Iterable[Record] | None,
    pods: Iterable[Record] | None,
) -> dict[str, _Bucket]:
    buckets: dict[str, _Bucket] = {}
    for attr, records in (("ingresses", ingresses), ("services", services), ("pods", pods)):
        for record in records or ():
            metadata = _metadata(record)
            if metadata is None:
                _logger.debug("graph_record_skipped", collection=attr)
                continue
            namespace = str(metadata.get("namespace") or "")
            getattr(buckets.setdefault(namespace, _Bucket()), attr).append(record)
    return buckets


def _add_node(graph: nx.DiGraph, kind: NodeKind, namespace: str, record: Record) -> str | None:
    name = str(record["metadata"]["name"])
    node_id = kind.node_id(namespace, name)
    if node_id in graph:
        return None
    graph.add_node(
        node_id,
        node=GraphNode(
            id=node_id,
            kind=kind,
            namespace=namespace,
            name=name,
            parent_id=group_id(namespace),
            record=record,
        ),
    )
    return node_id


def _add_edge(graph: nx.DiGraph, source: str, target: str) -> None:
    if not graph.has_edge(source, target):
        graph.add_edge(source, target, edge=GraphEdge(id=edge_id(source, target), source=source, target=target))


def build_namespace_graph(namespace: str, bucket: _Bucket) -> nx.DiGraph:
    """Nodes and inferred edges for one namespace, without positions."""
    graph = nx.DiGraph()

    ingress_ids = [(_add_node(graph, NodeKind.INGRESS, namespace, r), r) for r in bucket.ingresses]
    service_ids = [(_add_node(graph, NodeKind.SERVICE, namespace, r), r) for r in bucket.services]
    pod_ids = [(_add_node(graph, NodeKind.POD, namespace, r), r) for r in bucket.pods]

    for ing_id, ingress in ingress_ids:
        if ing_id is None:
            continue
        for service_name in backend_service_names(ingress):
            target = NodeKind.SERVICE.node_id(namespace, service_name)
            if target in graph:
                _add_edge(graph, ing_id, target)

    for svc_id, service in service_ids:
        if svc_id is None:
            continue
        spec = service.get("spec")
        selector = spec.get("selector") if isinstance(spec, Mapping) else None
        if not isinstance(selector, Mapping) or not selector:
            continue
        for pod_id, pod in pod_ids:
            if pod_id is not None and selector_matches(selector, pod["metadata"].get("labels")):
                _add_edge(graph, svc_id, pod_id)

    return graph


def build_graph(
    ingresses: Iterable[Record] | None,
    services: Iterable[Record] | None,
    pods: Iterable[Record] | None,
    layout: LayoutConfig | None = None,
) -> TopologyGraph:
    """Build the namespace-partitioned topology for one snapshot.

    Namespaces are laid out in lexicographic order and stacked vertically;
    namespaces without any node are omitted.
    """
    cfg = layout or LayoutConfig()
    buckets = _partition(ingresses, services, pods)

    groups: list[NamespaceGroup] = []
    nodes: list[GraphNode] = []
    edges: list[GraphEdge] = []
    cursor = 0.0

    for namespace in sorted(buckets):
        subgraph = build_namespace_graph(namespace, buckets[namespace])
        if subgraph.number_of_nodes() == 0:
            continue

        placed = layered_layout(subgraph, cfg)
        groups.append(
            NamespaceGroup(
                id=group_id(namespace),
                namespace=namespace,
                position=Position(0.0, cursor),
                width=placed.width,
                height=placed.height,
            )
        )
        for node_id, data in subgraph.nodes(data=True):
            nodes.append(replace(data["node"], position=placed.positions[node_id]))
        edges.extend(data["edge"] for _, _, data in subgraph.edges(data=True))

        cursor += placed.height + cfg.namespace_gap

    _logger.debug("graph_built", namespaces=len(groups), nodes=len(nodes), edges=len(edges))
    return TopologyGraph(groups=tuple(groups), nodes=tuple(nodes), edges=tuple(edges))
