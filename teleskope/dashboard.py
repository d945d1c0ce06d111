"""Cluster map dashboard: snapshot fetch, graph rebuild and node navigation.

The data provider (API client) and the navigation sink (detail view) are
external collaborators, described here only as protocols.  Each refresh
fetches all three collections, rebuilds the graph from scratch and swaps
it in; a previously returned graph is never modified.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Protocol

from teleskope.graph.builder import build_graph
from teleskope.graph.models import NodeKind, TopologyGraph
from teleskope.graph.selectors import selector_to_string
from teleskope.models.config import LayoutConfig
from teleskope.models.resources import Record, ResourceIdentity
from teleskope.observability.logging import get_logger
from teleskope.profiles.jsonpath import extract

_logger = get_logger("dashboard")

# Kinds whose pods are found through spec.selector.matchLabels.
_SELECTOR_WORKLOADS = frozenset({"Deployment", "ReplicaSet", "StatefulSet", "DaemonSet"})


@dataclass(frozen=True)
class ResourceQuery:
    """A list request.  ``plural`` must already be resolved by the caller."""

    identity: ResourceIdentity
    plural: str
    namespace: str = ""
    label_selector: str = ""


@dataclass(frozen=True)
class NavigationTarget:
    """What the detail view needs to fetch and show a selected resource."""

    identity: ResourceIdentity
    plural: str
    name: str
    namespace: str | None = None


class DataProvider(Protocol):
    async def list_resources(self, query: ResourceQuery) -> Sequence[Record]: ...


class NavigationSink(Protocol):
    def navigate(self, target: NavigationTarget) -> None: ...


class TopologyDashboard:
    """Holds the latest topology graph and routes node clicks to navigation."""

    def __init__(
        self,
        provider: DataProvider,
        sink: NavigationSink | None = None,
        layout: LayoutConfig | None = None,
    ) -> None:
        self._provider = provider
        self._sink = sink
        self._layout = layout or LayoutConfig()
        self._graph = TopologyGraph()

    @property
    def graph(self) -> TopologyGraph:
        return self._graph

    async def refresh(self) -> TopologyGraph:
        """Fetch a consistent snapshot across all namespaces and rebuild.

        Provider errors propagate; the previous graph stays in place.
        """
        kinds = (NodeKind.INGRESS, NodeKind.SERVICE, NodeKind.POD)
        queries = [ResourceQuery(identity=k.identity, plural=k.plural) for k in kinds]
        try:
            ingresses, services, pods = await asyncio.gather(
                *(self._provider.list_resources(q) for q in queries)
            )
        except Exception as exc:
            _logger.error("topology_fetch_failed", error=str(exc))
            raise

        graph = build_graph(ingresses, services, pods, layout=self._layout)
        self._graph = graph
        _logger.info(
            "topology_refreshed",
            namespaces=len(graph.groups),
            nodes=len(graph.nodes),
            edges=len(graph.edges),
        )
        return graph

    def select(self, node_id: str, group_id: str | None = None) -> NavigationTarget | None:
        """Navigate to the resource behind ``node_id``.

        ``group_id`` is the clicked node's parent group and disambiguates ids
        shared by two namespaces. Namespace groups and unknown ids are ignored
        and return None.
        """
        node = self._graph.node(node_id, group_id)
        if node is None:
            return None

        metadata = node.record.get("metadata", {}) if isinstance(node.record, Mapping) else {}
        target = NavigationTarget(
            identity=node.identity,
            plural=node.kind.plural,
            name=node.name,
            namespace=metadata.get("namespace") or None,
        )
        if self._sink is not None:
            self._sink.navigate(target)
        return target


async def related_pods(provider: DataProvider, identity: ResourceIdentity, record: Record) -> list[Record]:
    """Pods selected by a workload's ``spec.selector.matchLabels``.

    Returns an empty list for other kinds or when the selector is missing.
    """
    if identity.kind not in _SELECTOR_WORKLOADS:
        return []
    selector = selector_to_string(extract(record, "$.spec.selector.matchLabels"))
    if not selector:
        return []

    pod = NodeKind.POD
    query = ResourceQuery(
        identity=pod.identity,
        plural=pod.plural,
        namespace=str(extract(record, "$.metadata.namespace") or ""),
        label_selector=selector,
    )
    return list(await provider.list_resources(query))
