"""In-memory puzzle graph for the active level."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from strokex.core.levels import Level, Position


@dataclass
class Node:
    id: int
    position: Position
    highlighted: bool = False


@dataclass
class Edge:
    """Undirected edge between two nodes with a per-attempt visit counter."""

    a: int
    b: int
    visit_count: int = 0

    def connects(self, a: int, b: int) -> bool:
        return (self.a == a and self.b == b) or (self.a == b and self.b == a)

    def touches(self, node_id: int) -> bool:
        return node_id in (self.a, self.b)


class GraphModel:
    """Nodes and edges of one level plus the visit state of the current attempt.

    Lookups scan the edge list; puzzle graphs hold a handful of edges.
    """

    def __init__(self, level: Optional[Level] = None) -> None:
        self._nodes: List[Node] = []
        self._edges: List[Edge] = []
        if level is not None:
            self.load(level)

    @property
    def nodes(self) -> List[Node]:
        return self._nodes

    @property
    def edges(self) -> List[Edge]:
        return self._edges

    def load(self, level: Level) -> None:
        """Replace the graph with a fresh copy of ``level``."""
        self._nodes = [Node(id=i, position=pos) for i, pos in enumerate(level.nodes)]
        self._edges = [Edge(a=a, b=b) for a, b in level.edges]

    def node(self, node_id: int) -> Node:
        return self._nodes[node_id]

    def find_edge(self, a: int, b: int) -> Optional[Edge]:
        for edge in self._edges:
            if edge.connects(a, b):
                return edge
        return None

    def are_connected(self, a: int, b: int) -> bool:
        return self.find_edge(a, b) is not None

    def mark_visited(self, a: int, b: int) -> None:
        """Count one traversal of the edge a-b. Unknown pairs are ignored."""
        edge = self.find_edge(a, b)
        if edge is not None:
            edge.visit_count += 1

    def visit_count(self, a: int, b: int) -> int:
        edge = self.find_edge(a, b)
        return edge.visit_count if edge is not None else 0

    def reset_visits(self) -> None:
        for edge in self._edges:
            edge.visit_count = 0

    def degree(self, node_id: int) -> int:
        return sum(1 for edge in self._edges if edge.touches(node_id))

    def degrees(self) -> List[int]:
        counts = [0] * len(self._nodes)
        for edge in self._edges:
            counts[edge.a] += 1
            counts[edge.b] += 1
        return counts

    def odd_degree_nodes(self) -> List[int]:
        return [node_id for node_id, d in enumerate(self.degrees()) if d % 2 == 1]

    def node_at(self, position: Position, radius: float) -> Optional[int]:
        """Return the first node whose center is within ``radius`` of ``position``."""
        px, py = position
        for node in self._nodes:
            nx, ny = node.position
            if math.hypot(px - nx, py - ny) <= radius:
                return node.id
        return None

    def clear_highlights(self) -> None:
        for node in self._nodes:
            node.highlighted = False

    def highlight(self, node_id: int) -> None:
        self._nodes[node_id].highlighted = True

    def visit_summary(self) -> Tuple[int, int]:
        """Return (edges traced at least once, total edges)."""
        traced = sum(1 for edge in self._edges if edge.visit_count > 0)
        return traced, len(self._edges)
