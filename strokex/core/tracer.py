from __future__ import annotations

from typing import List, Optional, Tuple

from strokex.core.graph import GraphModel
from strokex.core.levels import Position
from strokex.core.validator import SolutionStatus, evaluate

NODE_RADIUS = 39.2


class PathTracer:
    """State machine for the player's stroke over a :class:`GraphModel`.

    Idle until :meth:`start`, then Drawing until :meth:`release`. Every
    pointer-down is a fresh attempt, so ``start`` always clears the previous
    path and visit counts. Releasing keeps both for display until the next
    ``start`` or an explicit :meth:`reset`.
    """

    def __init__(self, graph: GraphModel, hit_radius: float = NODE_RADIUS) -> None:
        self._graph = graph
        self._hit_radius = hit_radius
        self._path: List[int] = []
        self._drawing = False

    @property
    def path(self) -> Tuple[int, ...]:
        return tuple(self._path)

    @property
    def is_drawing(self) -> bool:
        return self._drawing

    @property
    def last_node(self) -> Optional[int]:
        return self._path[-1] if self._path else None

    @property
    def hit_radius(self) -> float:
        return self._hit_radius

    def path_points(self) -> List[Position]:
        return [self._graph.node(node_id).position for node_id in self._path]

    def start(self, node_id: int) -> None:
        self.reset()
        self._path.append(node_id)
        self._drawing = True

    def extend(self, position: Position) -> Optional[int]:
        """Follow the pointer; return the node appended to the path, if any."""
        if not self._drawing:
            return None
        target = self._graph.node_at(position, self._hit_radius)
        if target is None:
            return None
        return target if self.step_to(target) else None

    def step_to(self, node_id: int) -> bool:
        """Append ``node_id`` if it is adjacent to the end of the path."""
        last = self.last_node
        if not self._drawing or last is None or node_id == last:
            return False
        if not self._graph.are_connected(last, node_id):
            return False
        self._path.append(node_id)
        self._graph.mark_visited(last, node_id)
        return True

    def release(self) -> SolutionStatus:
        status = evaluate(self._graph.edges)
        self._drawing = False
        return status

    def reset(self) -> None:
        self._path.clear()
        self._graph.reset_visits()
        self._graph.clear_highlights()
        self._drawing = False
