"""Data structures for the namespace topology graph."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from teleskope.models.resources import ResourceIdentity


class NodeKind(StrEnum):
    """The three layers of the topology: Ingress -> Service -> Pod."""

    INGRESS = "Ingress"
    SERVICE = "Service"
    POD = "Pod"

    @property
    def tag(self) -> str:
        """Short prefix used in node ids."""
        return _TAGS[self]

    @property
    def identity(self) -> ResourceIdentity:
        return _IDENTITIES[self]

    @property
    def plural(self) -> str:
        return _PLURALS[self]

    def node_id(self, namespace: str, name: str) -> str:
        return f"{self.tag}-{namespace}-{name}"


_TAGS = {NodeKind.INGRESS: "ing", NodeKind.SERVICE: "svc", NodeKind.POD: "pod"}
_PLURALS = {NodeKind.INGRESS: "ingresses", NodeKind.SERVICE: "services", NodeKind.POD: "pods"}
_IDENTITIES = {
    NodeKind.INGRESS: ResourceIdentity("networking.k8s.io", "v1", "Ingress"),
    NodeKind.SERVICE: ResourceIdentity("", "v1", "Service"),
    NodeKind.POD: ResourceIdentity("", "v1", "Pod"),
}


@dataclass(frozen=True)
class Position:
    x: float
    y: float


@dataclass(frozen=True)
class GraphNode:
    """A resource in the topology.

    ``position`` is the top-left corner relative to the enclosing namespace
    group (``parent_id``).
    """

    id: str
    kind: NodeKind
    namespace: str
    name: str
    parent_id: str
    position: Position = Position(0.0, 0.0)
    record: Any = field(default=None, hash=False, compare=False, repr=False)

    @property
    def identity(self) -> ResourceIdentity:
        return self.kind.identity

    @property
    def label(self) -> str:
        return f"{self.kind.tag.upper()}: {self.name}"


@dataclass(frozen=True)
class GraphEdge:
    """A directed edge, e.g. an Ingress routing to a Service."""

    id: str
    source: str
    target: str


@dataclass(frozen=True)
class NamespaceGroup:
    """Container bounding every node of one namespace, in canvas coordinates."""

    id: str
    namespace: str
    position: Position
    width: float
    height: float


@dataclass(frozen=True)
class TopologyGraph:
    """Result of one graph build.  Never mutated after construction."""

    groups: tuple[NamespaceGroup, ...] = ()
    nodes: tuple[GraphNode, ...] = ()
    edges: tuple[GraphEdge, ...] = ()

    def node(self, node_id: str, group_id: str | None = None) -> GraphNode | None:
        """Return the node with ``node_id``, or None.

        Ids are not unique across namespaces (``pod-a-b-c`` can be pod ``b-c``
        in ``a`` or pod ``c`` in ``a-b``); pass ``group_id`` to pick the one
        inside that namespace group. Without it the first match wins.
        """
        for node in self.nodes:
            if node.id == node_id and (group_id is None or node.parent_id == group_id):
                return node
        return None

    @property
    def namespaces(self) -> list[str]:
        return [g.namespace for g in self.groups]
