"""Namespace topology graph.

Infers Ingress -> Service edges from declared backends and Service -> Pod
edges from label selectors, then lays each namespace out left-to-right.
"""

from teleskope.graph.builder import build_graph
from teleskope.graph.models import (
    GraphEdge,
    GraphNode,
    NamespaceGroup,
    NodeKind,
    Position,
    TopologyGraph,
)
from teleskope.graph.selectors import selector_matches, selector_to_string

__all__ = [
    "GraphEdge",
    "GraphNode",
    "NamespaceGroup",
    "NodeKind",
    "Position",
    "TopologyGraph",
    "build_graph",
    "selector_matches",
    "selector_to_string",
]
