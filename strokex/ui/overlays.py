"""In-window overlays (hint popup, level completed)."""

from __future__ import annotations

from typing import Callable, Optional

from PySide6.QtCore import Qt, QEvent, Signal
from PySide6.QtGui import QColor
from PySide6.QtWidgets import (
    QFrame,
    QGraphicsDropShadowEffect,
    QGraphicsOpacityEffect,
    QGridLayout,
    QLabel,
    QPushButton,
    QSizePolicy,
    QVBoxLayout,
    QWidget,
)

from strokex.core.hints import Hint
from strokex.ui.colors import NeonColors
from strokex.ui.effects import Fade


def _card_container(object_name: str, border: str) -> QFrame:
    container = QFrame()
    container.setObjectName(object_name)
    container.setMinimumWidth(520)
    container.setMaximumWidth(800)
    container.setStyleSheet(
        f"""
        QFrame#{object_name} {{
            background: #f5f5f5;
            border: 3px solid {border};
            border-radius: 24px;
        }}
        """
    )
    shadow = QGraphicsDropShadowEffect(container)
    shadow.setBlurRadius(30)
    shadow.setOffset(0, 0)
    shadow.setColor(QColor(border))
    container.setGraphicsEffect(shadow)
    return container


def _overlay_background(parent: QWidget, on_click: Callable[[], None]) -> QWidget:
    overlay_bg = QWidget(parent)
    overlay_bg.setStyleSheet("background: rgba(0, 0, 0, 0.4);")
    overlay_bg.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
    overlay_bg.setMinimumSize(1, 1)
    overlay_bg.mousePressEvent = lambda e: on_click()
    return overlay_bg


def _label(text: str, color: str, size: int, weight: int = 600) -> QLabel:
    label = QLabel(text)
    label.setAlignment(Qt.AlignCenter)
    label.setWordWrap(True)
    label.setStyleSheet(f"color: {color}; font-size: {size}px; font-weight: {weight}; background: transparent;")
    return label


class _ParentSizedOverlay(QWidget):
    """Overlay that keeps covering its parent while shown."""

    def _update_geometry(self) -> None:
        parent = self.parentWidget()
        if parent is not None:
            self.setGeometry(parent.rect())

    def eventFilter(self, obj: QWidget, event: QEvent) -> bool:
        if obj is self.parentWidget() and event.type() == QEvent.Type.Resize:
            self._update_geometry()
        return super().eventFilter(obj, event)

    def showEvent(self, event) -> None:
        super().showEvent(event)
        self._update_geometry()
        parent = self.parentWidget()
        if parent is not None:
            parent.installEventFilter(self)

    def hideEvent(self, event) -> None:
        parent = self.parentWidget()
        if parent is not None:
            parent.removeEventFilter(self)
        super().hideEvent(event)


class HintOverlay(_ParentSizedOverlay):
    """Hint popup that fades in, and fades out after any click."""

    closed = Signal()

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.fade = Fade()
        self._opacity = QGraphicsOpacityEffect(self)
        self._opacity.setOpacity(0.0)
        self.setGraphicsEffect(self._opacity)

        layout = QGridLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(_overlay_background(self, self.dismiss), 0, 0)

        container = _card_container("hintContainer", NeonColors.VIOLET)
        container.mousePressEvent = lambda e: self.dismiss()
        content = QVBoxLayout(container)
        content.setContentsMargins(32, 28, 32, 28)
        content.setSpacing(16)
        content.addWidget(_label("HINT", NeonColors.MAGENTA, 48, 900))
        self._message = _label("", "#323232", 28)
        content.addWidget(self._message)
        self._tip = _label("", NeonColors.TEXT_MUTED, 20, 500)
        content.addWidget(self._tip)
        content.addWidget(_label("Click anywhere to close", NeonColors.VIOLET, 16, 500))
        layout.addWidget(container, 0, 0, 1, 1, Qt.AlignCenter)
        self.hide()

    def open(self, hint: Hint) -> None:
        self._message.setText(hint.message)
        self._tip.setText(hint.tip)
        self.fade.show()
        self.show()
        self.raise_()

    def dismiss(self) -> None:
        if self.fade.visible:
            self.fade.hide()
            self.closed.emit()

    def tick(self, dt: float) -> None:
        self.fade.update(dt)
        self._opacity.setOpacity(self.fade.alpha)
        if not self.fade.drawn and self.isVisible():
            self.hide()


class LevelCompletedOverlay(_ParentSizedOverlay):
    """Shown when the board is solved; offers the next level."""

    next_requested = Signal()

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        layout = QGridLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        bg = QWidget(self)
        bg.setStyleSheet("background: rgba(0, 0, 0, 0.55);")
        layout.addWidget(bg, 0, 0)

        container = _card_container("levelCompletedContainer", NeonColors.SUCCESS)
        container.setStyleSheet(
            "QFrame#levelCompletedContainer { background: rgba(20, 20, 30, 0.85);"
            f" border: 3px solid {NeonColors.SUCCESS}; border-radius: 24px; }}"
        )
        content = QVBoxLayout(container)
        content.setContentsMargins(32, 28, 32, 28)
        content.setSpacing(14)
        content.addWidget(_label("LEVEL COMPLETE!", NeonColors.SUCCESS, 56, 900))
        self._points = _label("", NeonColors.SCORE_GOLD, 40, 800)
        content.addWidget(self._points)
        self._time = _label("", "#ffffff", 30)
        content.addWidget(self._time)

        self._next_btn = QPushButton("NEXT LEVEL")
        self._next_btn.setCursor(Qt.CursorShape.PointingHandCursor)
        self._next_btn.setStyleSheet(
            f"""
            QPushButton {{
                background: transparent;
                color: {NeonColors.BUTTON_NEXT};
                padding: 12px 24px;
                border: 3px solid {NeonColors.BUTTON_NEXT};
                border-radius: 16px;
                font-size: 24px;
                font-weight: 800;
            }}
            QPushButton:hover {{ background: rgba(100, 200, 100, 0.25); }}
            """
        )
        self._next_btn.clicked.connect(self.next_requested.emit)
        content.addWidget(self._next_btn, 0, Qt.AlignHCenter)
        self._final = _label("All levels complete!", "#ffffff", 24)
        content.addWidget(self._final)
        layout.addWidget(container, 0, 0, 1, 1, Qt.AlignCenter)
        self.hide()

    def open(self, points: int, seconds: float, has_next: bool) -> None:
        self._points.setText(f"+{points} points!")
        self._time.setText(f"Time: {seconds:.1f}s")
        self._next_btn.setVisible(has_next)
        self._final.setVisible(not has_next)
        self.show()
        self.raise_()
