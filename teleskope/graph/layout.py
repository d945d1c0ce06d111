"""Layered left-to-right layout for one namespace subgraph.

Ranks come from the longest path along edge direction (cycles, should a
caller ever produce one, are collapsed into a single rank via the
condensation graph).  Within a rank nodes are ordered by the barycenter of
their predecessors, ties broken by insertion order.  Each rank is a column;
columns are centred on the tallest one.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import networkx as nx

from teleskope.graph.models import Position
from teleskope.models.config import LayoutConfig


@dataclass
class LayoutResult:
    """Node positions (top-left, relative to the group) and group size."""

    positions: dict[str, Position] = field(default_factory=dict)
    width: float = 0.0
    height: float = 0.0


def assign_ranks(graph: nx.DiGraph) -> dict[str, int]:
    """Longest-path rank of every node; sources sit at rank 0."""
    condensed = nx.condensation(graph)
    members = condensed.graph["mapping"]
    component_rank: dict[int, int] = {}
    for component in nx.topological_sort(condensed):
        preds = [component_rank[p] + 1 for p in condensed.predecessors(component)]
        component_rank[component] = max(preds, default=0)
    return {node: component_rank[members[node]] for node in graph.nodes}


def order_ranks(graph: nx.DiGraph, ranks: dict[str, int]) -> list[list[str]]:
    """Group nodes into rank columns ordered to reduce edge crossings."""
    insertion = {node: i for i, node in enumerate(graph.nodes)}
    columns: list[list[str]] = [[] for _ in range(max(ranks.values(), default=-1) + 1)]
    for node in graph.nodes:
        columns[ranks[node]].append(node)

    slot: dict[str, int] = {}

    def barycenter(node: str) -> float:
        placed = [slot[p] for p in graph.predecessors(node) if p in slot]
        return sum(placed) / len(placed) if placed else float(insertion[node])

    for column in columns:
        column.sort(key=lambda n: (barycenter(n), insertion[n]))
        for i, node in enumerate(column):
            slot[node] = i
    return columns


def layered_layout(graph: nx.DiGraph, config: LayoutConfig | None = None) -> LayoutResult:
    """Position every node of ``graph`` and size the enclosing group.

    The content bounding box is translated to start at
    ``(padding, header_height + padding)``.
    """
    cfg = config or LayoutConfig()
    if graph.number_of_nodes() == 0:
        return LayoutResult()

    columns = order_ranks(graph, assign_ranks(graph))
    row_step = cfg.node_height + cfg.node_sep
    col_step = cfg.node_width + cfg.rank_sep

    def column_height(column: list[str]) -> float:
        return len(column) * cfg.node_height + max(len(column) - 1, 0) * cfg.node_sep

    tallest = max(column_height(c) for c in columns)

    raw: dict[str, tuple[float, float]] = {}
    for rank, column in enumerate(columns):
        offset = (tallest - column_height(column)) / 2
        for i, node in enumerate(column):
            raw[node] = (rank * col_step, offset + i * row_step)

    min_x = min(x for x, _ in raw.values())
    min_y = min(y for _, y in raw.values())
    max_x = max(x for x, _ in raw.values()) + cfg.node_width
    max_y = max(y for _, y in raw.values()) + cfg.node_height

    shift_x = cfg.padding - min_x
    shift_y = cfg.header_height + cfg.padding - min_y
    positions = {node: Position(x + shift_x, y + shift_y) for node, (x, y) in raw.items()}

    return LayoutResult(
        positions=positions,
        width=(max_x - min_x) + 2 * cfg.padding,
        height=(max_y - min_y) + cfg.header_height + 2 * cfg.padding,
    )
