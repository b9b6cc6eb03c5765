from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, List, Optional, Tuple

from strokex.core.graph import GraphModel
from strokex.core.hints import Hint, advise
from strokex.core.levels import Level, LevelRepository, Position
from strokex.core.progress import ProgressionTracker
from strokex.core.scoring import score
from strokex.core.tracer import NODE_RADIUS, PathTracer
from strokex.core.validator import SolutionStatus

logger = logging.getLogger(__name__)


class PointerAction(Enum):
    DOWN = "down"
    MOVE = "move"
    UP = "up"


@dataclass(frozen=True)
class PointerEvent:
    action: PointerAction
    position: Position


class EngineEvent(Enum):
    LEVEL_LOADED = "level_loaded"
    STARTED = "started"
    EXTENDED = "extended"
    SOLVED = "solved"
    FAILED = "failed"
    RESET = "reset"


@dataclass(frozen=True)
class GameEvent:
    """Something observers (effects, sounds, HUD) may react to."""

    kind: EngineEvent
    level: int
    node_id: Optional[int] = None
    position: Optional[Position] = None
    score: int = 0


@dataclass(frozen=True)
class NodeView:
    id: int
    position: Position
    highlighted: bool
    on_path: bool


@dataclass(frozen=True)
class EdgeView:
    a: int
    b: int
    visit_count: int


@dataclass(frozen=True)
class Snapshot:
    """Read-only state handed to the presentation layer each frame."""

    level: int
    level_name: str
    level_count: int
    max_unlocked_level: int
    nodes: Tuple[NodeView, ...]
    edges: Tuple[EdgeView, ...]
    path: Tuple[int, ...]
    path_points: Tuple[Position, ...]
    is_drawing: bool
    level_complete: bool
    status: Optional[SolutionStatus]
    elapsed: float
    current_score: int
    total_score: int


GameListener = Callable[[GameEvent], None]


class GameSession:
    """Owns the active level's graph, the stroke in progress and the progression.

    Driven by one caller: the frame loop hands pointer events to
    :meth:`update` once per frame, and UI actions (reset, hint, level
    navigation) are plain method calls. Pointer input is never an error;
    anything that does not land on a valid node is ignored.
    """

    def __init__(
        self,
        levels: LevelRepository,
        start_level: int = 1,
        clock: Callable[[], float] = time.time,
        hit_radius: float = NODE_RADIUS,
    ) -> None:
        self._levels = levels
        self._clock = clock
        self._graph = GraphModel()
        self._tracer = PathTracer(self._graph, hit_radius=hit_radius)
        self._progress = ProgressionTracker(levels.count())
        self._listeners: List[GameListener] = []
        self._frame_events: Optional[List[GameEvent]] = None
        self._pointer: Optional[Position] = None
        self._play_time = 0.0
        self.load_level(start_level)

    # ------------------------------------------------------------------
    # State accessors
    # ------------------------------------------------------------------

    @property
    def level(self) -> Level:
        return self._level

    @property
    def graph(self) -> GraphModel:
        return self._graph

    @property
    def tracer(self) -> PathTracer:
        return self._tracer

    @property
    def progress(self) -> ProgressionTracker:
        return self._progress

    @property
    def status(self) -> Optional[SolutionStatus]:
        """Result of the last release on this level, None before any release."""
        return self._status

    @property
    def level_complete(self) -> bool:
        return self._level_complete

    @property
    def is_drawing(self) -> bool:
        return self._tracer.is_drawing

    @property
    def timer_running(self) -> bool:
        return self._started_at is not None

    @property
    def play_time(self) -> float:
        """Sum of frame delta times fed to :meth:`update`."""
        return self._play_time

    def elapsed(self) -> float:
        if self._started_at is None:
            return 0.0
        if self._level_complete and self._ended_at is not None:
            return self._ended_at - self._started_at
        return self._clock() - self._started_at

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def subscribe(self, listener: GameListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: GameListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _emit(self, kind: EngineEvent, **kwargs) -> None:
        event = GameEvent(kind=kind, level=self._level.number, **kwargs)
        if self._frame_events is not None:
            self._frame_events.append(event)
        for listener in list(self._listeners):
            listener(event)

    # ------------------------------------------------------------------
    # Level navigation
    # ------------------------------------------------------------------

    def load_level(self, number: int) -> Level:
        """Replace the active level. Unknown numbers load level 1."""
        self._level = self._levels.get(number)
        self._graph.load(self._level)
        self._tracer.reset()
        self._reset_level_state()
        self._progress.sync_current(self._level.number)
        logger.info("Loaded level %d (%s)", self._level.number, self._level.name)
        self._emit(EngineEvent.LEVEL_LOADED)
        return self._level

    def next_level(self) -> bool:
        if not self._progress.advance_level():
            return False
        self.load_level(self._progress.current_level)
        return True

    def previous_level(self) -> bool:
        if not self._progress.retreat_level():
            return False
        self.load_level(self._progress.current_level)
        return True

    def select_level(self, number: int) -> bool:
        if not self._levels.has(number) or not self._progress.select_level(number):
            return False
        self.load_level(number)
        return True

    def _reset_level_state(self) -> None:
        self._status: Optional[SolutionStatus] = None
        self._level_complete = False
        self._started_at: Optional[float] = None
        self._ended_at: Optional[float] = None
        self._current_score = 0

    # ------------------------------------------------------------------
    # Player actions
    # ------------------------------------------------------------------

    def reset(self) -> None:
        """Clear the path and all visit counts. The level timer keeps running."""
        self._tracer.reset()
        self._status = None
        self._emit(EngineEvent.RESET)

    @property
    def can_show_hint(self) -> bool:
        """Hints are only offered between strokes."""
        return not self._tracer.is_drawing

    def hint(self) -> Hint:
        return advise(self._graph)

    def update(
        self,
        events: Iterable[PointerEvent],
        delta_time: float,
        pointer: Optional[Position] = None,
    ) -> List[GameEvent]:
        """Apply one frame of pointer input, in arrival order.

        Returns the engine events emitted during this frame. ``pointer`` is
        the current hover position; it defaults to the last event position.
        """
        self._play_time += max(0.0, delta_time)
        self._frame_events = []
        try:
            for event in events:
                self._pointer = event.position
                if self._level_complete:
                    continue
                if event.action is PointerAction.DOWN:
                    self._pointer_down(event.position)
                elif event.action is PointerAction.MOVE:
                    self._pointer_move(event.position)
                elif event.action is PointerAction.UP:
                    self._pointer_up()
            self.hover(pointer if pointer is not None else self._pointer)
            return self._frame_events
        finally:
            self._frame_events = None

    def _pointer_down(self, position: Position) -> None:
        node_id = self._graph.node_at(position, self._tracer.hit_radius)
        if node_id is None:
            return
        self._tracer.start(node_id)
        self._status = None
        if self._started_at is None:
            self._started_at = self._clock()
        self._emit(EngineEvent.STARTED, node_id=node_id, position=self._graph.node(node_id).position)

    def _pointer_move(self, position: Position) -> None:
        if not self._tracer.is_drawing:
            return
        node_id = self._tracer.extend(position)
        if node_id is not None:
            self._emit(EngineEvent.EXTENDED, node_id=node_id, position=self._graph.node(node_id).position)

    def _pointer_up(self) -> None:
        if not self._tracer.is_drawing:
            return
        status = self._tracer.release()
        self._status = status
        if status is SolutionStatus.SOLVED:
            self._on_solved()
        elif status is SolutionStatus.FAILED:
            logger.info("Level %d failed: an edge was traced twice", self._level.number)
            self._emit(EngineEvent.FAILED)

    def _on_solved(self) -> None:
        self._ended_at = self._clock()
        self._level_complete = True
        self._current_score = score(self.elapsed())
        self._progress.on_solved(self._current_score)
        logger.info(
            "Level %d solved in %.1fs for %d points",
            self._level.number,
            self.elapsed(),
            self._current_score,
        )
        self._emit(EngineEvent.SOLVED, score=self._current_score)

    def hover(self, position: Optional[Position]) -> None:
        """Move the pointer and highlight the node under it, if any.

        Nothing is highlighted while a stroke is drawn or once the level
        is complete.
        """
        self._pointer = position
        self._graph.clear_highlights()
        if self._level_complete or self._tracer.is_drawing or self._pointer is None:
            return
        node_id = self._graph.node_at(self._pointer, self._tracer.hit_radius)
        if node_id is not None:
            self._graph.highlight(node_id)

    # ------------------------------------------------------------------
    # Presentation
    # ------------------------------------------------------------------

    def snapshot(self) -> Snapshot:
        path = self._tracer.path
        on_path = set(path)
        return Snapshot(
            level=self._level.number,
            level_name=self._level.name,
            level_count=self._progress.level_count,
            max_unlocked_level=self._progress.max_unlocked_level,
            nodes=tuple(
                NodeView(
                    id=node.id,
                    position=node.position,
                    highlighted=node.highlighted,
                    on_path=node.id in on_path,
                )
                for node in self._graph.nodes
            ),
            edges=tuple(EdgeView(a=e.a, b=e.b, visit_count=e.visit_count) for e in self._graph.edges),
            path=path,
            path_points=tuple(self._tracer.path_points()),
            is_drawing=self._tracer.is_drawing,
            level_complete=self._level_complete,
            status=self._status,
            elapsed=self.elapsed(),
            current_score=self._current_score,
            total_score=self._progress.total_score,
        )
