"""Puzzle board canvas and start-screen background."""

from __future__ import annotations

from typing import List, Optional, Tuple

from PySide6.QtCore import QPointF, QRectF, Qt
from PySide6.QtGui import QColor, QMouseEvent, QPainter, QPen
from PySide6.QtWidgets import QWidget

from strokex.core.levels import Position
from strokex.core.session import PointerAction, PointerEvent, Snapshot
from strokex.core.tracer import NODE_RADIUS
from strokex.ui.colors import NeonColors, edge_style
from strokex.ui.effects import BoardEffects, BouncingDots

# Level layouts are authored for this logical canvas size.
LOGICAL_WIDTH = 1880.0
LOGICAL_HEIGHT = 1060.0


def _qcolor(hex_color: str, alpha: float = 1.0) -> QColor:
    color = QColor(hex_color)
    color.setAlphaF(max(0.0, min(1.0, alpha)))
    return color


class _LogicalCanvas(QWidget):
    """Widget that paints in the fixed logical coordinate space, letterboxed."""

    def _scale_and_origin(self) -> Tuple[float, float, float]:
        s = min(self.width() / LOGICAL_WIDTH, self.height() / LOGICAL_HEIGHT)
        ox = (self.width() - LOGICAL_WIDTH * s) / 2
        oy = (self.height() - LOGICAL_HEIGHT * s) / 2
        return s, ox, oy

    def to_logical(self, x: float, y: float) -> Position:
        s, ox, oy = self._scale_and_origin()
        if s <= 0:
            return (x, y)
        return ((x - ox) / s, (y - oy) / s)

    def _begin(self, painter: QPainter) -> None:
        s, ox, oy = self._scale_and_origin()
        painter.setRenderHint(QPainter.Antialiasing, True)
        painter.translate(ox, oy)
        painter.scale(s, s)


class PuzzleBoard(_LogicalCanvas):
    """Draws the active graph, the traced path and the stroke effects.

    Pointer input is only queued here; the frame loop drains it with
    :meth:`take_events` and feeds it to the game session.
    """

    def __init__(self, effects: BoardEffects, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._effects = effects
        self._snapshot: Optional[Snapshot] = None
        self._pending: List[PointerEvent] = []
        self._pointer: Optional[Position] = None
        self._input_enabled = True
        self.setMouseTracking(True)
        self.setMinimumSize(640, 360)

    @property
    def pointer(self) -> Optional[Position]:
        return self._pointer

    def set_input_enabled(self, enabled: bool) -> None:
        self._input_enabled = enabled
        if not enabled:
            self._pending.clear()

    def set_snapshot(self, snapshot: Snapshot) -> None:
        self._snapshot = snapshot
        self.update()

    def take_events(self) -> List[PointerEvent]:
        events, self._pending = self._pending, []
        return events

    def _queue(self, action: PointerAction, event: QMouseEvent) -> None:
        pos = event.position()
        self._pointer = self.to_logical(pos.x(), pos.y())
        if self._input_enabled:
            self._pending.append(PointerEvent(action, self._pointer))

    def mousePressEvent(self, event: QMouseEvent) -> None:
        if event.button() == Qt.LeftButton:
            self._queue(PointerAction.DOWN, event)
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        if event.buttons() & Qt.LeftButton:
            self._queue(PointerAction.MOVE, event)
        else:
            pos = event.position()
            self._pointer = self.to_logical(pos.x(), pos.y())
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        if event.button() == Qt.LeftButton:
            self._queue(PointerAction.UP, event)
        super().mouseReleaseEvent(event)

    def paintEvent(self, event) -> None:
        super().paintEvent(event)
        painter = QPainter(self)
        painter.fillRect(self.rect(), QColor(NeonColors.BG))
        snap = self._snapshot
        if snap is None:
            return
        self._begin(painter)
        dx, dy = self._effects.shake.offset
        painter.translate(dx, dy)

        positions = {node.id: node.position for node in snap.nodes}
        for edge in snap.edges:
            color, width = edge_style(edge.visit_count)
            pen = QPen(QColor(color), width)
            pen.setCapStyle(Qt.RoundCap)
            painter.setPen(pen)
            painter.drawLine(QPointF(*positions[edge.a]), QPointF(*positions[edge.b]))

        points = snap.path_points
        for i in range(len(points) - 1):
            edge_visits = next(
                (e.visit_count for e in snap.edges
                 if {e.a, e.b} == {snap.path[i], snap.path[i + 1]}),
                0,
            )
            color = NeonColors.EDGE_ERROR if edge_visits > 1 else NeonColors.PATH
            painter.setPen(QPen(_qcolor(color, 0.85), 4.5))
            painter.drawLine(QPointF(*points[i]), QPointF(*points[i + 1]))

        if snap.is_drawing and points and self._pointer is not None:
            px, py = self._pointer
            pen = QPen(_qcolor(NeonColors.MAGENTA, 0.6), 3.0)
            pen.setStyle(Qt.DashLine)
            painter.setPen(pen)
            painter.drawLine(QPointF(*points[-1]), QPointF(px - dx, py - dy))

        for p in self._effects.particles.particles:
            painter.setPen(Qt.NoPen)
            painter.setBrush(_qcolor(p.color, p.alpha))
            painter.drawEllipse(QPointF(p.x, p.y), p.size, p.size)

        for node in snap.nodes:
            if node.highlighted:
                fill, border = NeonColors.NODE_HIGHLIGHT, NeonColors.MAGENTA
            elif node.on_path:
                fill, border = NeonColors.NODE_ON_PATH, NeonColors.VIOLET
            else:
                fill, border = NeonColors.NODE_FILL, NeonColors.NODE_BORDER
            painter.setBrush(_qcolor(fill, 0.9))
            painter.setPen(QPen(QColor(border), 4.0))
            painter.drawEllipse(QPointF(*node.position), NODE_RADIUS * 0.8, NODE_RADIUS * 0.8)
        painter.end()


class StartBackground(_LogicalCanvas):
    """Animated dots and decorative lines behind the start screen."""

    def __init__(self, dots: BouncingDots, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._dots = dots
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents, True)

    def paintEvent(self, event) -> None:
        super().paintEvent(event)
        painter = QPainter(self)
        painter.fillRect(self.rect(), QColor(NeonColors.BG_START))
        self._begin(painter)
        painter.setPen(Qt.NoPen)
        for dot in self._dots.dots:
            painter.setBrush(_qcolor(dot.color, 0.7))
            painter.drawEllipse(QPointF(dot.x, dot.y), dot.size, dot.size)
        painter.setPen(QPen(_qcolor(NeonColors.VIOLET, 0.6), 3.3))
        for i in range(6):
            painter.drawLine(QPointF(196.0, 141 + i * 143.0), QPointF(1684.0, 188 + i * 143.0))
        for cx, cy in ((104, 94), (1776, 94), (1776, 966), (104, 966)):
            for j in range(3):
                radius = 33 + j * 15
                painter.setPen(QPen(_qcolor(NeonColors.VIOLET, (100 - j * 30) / 255), 2.0))
                painter.setBrush(Qt.NoBrush)
                painter.drawEllipse(QRectF(cx - radius, cy - radius, radius * 2, radius * 2))
        painter.end()
