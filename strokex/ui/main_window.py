from __future__ import annotations

import logging
import time
from typing import List, Optional

from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QCloseEvent, QKeySequence, QShortcut
from PySide6.QtWidgets import (
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from strokex.core.levels import LevelRepository
from strokex.core.session import EngineEvent, GameEvent, GameSession
from strokex.ui.board_widgets import PuzzleBoard, StartBackground
from strokex.ui.colors import NeonColors, blend_hex
from strokex.ui.effects import BoardEffects, BouncingDots
from strokex.ui.models import build_level_states
from strokex.ui.overlays import HintOverlay, LevelCompletedOverlay

logger = logging.getLogger(__name__)

FRAME_INTERVAL_MS = 16


def _neon_button_style(color: str) -> str:
    hover_bg = blend_hex(color, "#ffffff", 0.75)
    return f"""
        QPushButton {{
            background: {blend_hex(color, "#ffffff", 0.88)};
            color: {color};
            padding: 14px 18px;
            border: 3px solid {color};
            border-radius: 18px;
            font-size: 26px;
            font-weight: 800;
        }}
        QPushButton:hover {{ background: {hover_bg}; }}
        QPushButton:disabled {{
            background: #eeeeee;
            color: {NeonColors.BUTTON_DISABLED};
            border-color: {NeonColors.BUTTON_DISABLED};
        }}
    """


class MainWindow(QMainWindow):
    """Start screen and puzzle screen around a single :class:`GameSession`.

    A QTimer acts as the frame loop: each tick drains the pointer events the
    board collected, feeds them to the session, then advances the cosmetic
    effects and repaints.
    """

    def __init__(self, levels: LevelRepository, session: GameSession) -> None:
        super().__init__()
        self._levels_repo = levels
        self._session = session
        self._effects = BoardEffects()
        self._dots = BouncingDots()
        self._session.subscribe(self._effects)
        self._session.subscribe(self._on_game_event)
        self._level_buttons: List[QPushButton] = []
        self._last_tick: Optional[float] = None

        self.setWindowTitle("StrokeX")
        self.setMinimumSize(1100, 640)
        self._build_ui()

        self._frame_timer = QTimer(self)
        self._frame_timer.setInterval(FRAME_INTERVAL_MS)
        self._frame_timer.timeout.connect(self._on_frame)
        self._frame_timer.start()

        QShortcut(QKeySequence("R"), self, activated=self._reset)
        QShortcut(QKeySequence("H"), self, activated=self._show_hint)
        QShortcut(QKeySequence(Qt.Key_Right), self, activated=self._next_level)
        QShortcut(QKeySequence(Qt.Key_Left), self, activated=self._previous_level)

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def _build_ui(self) -> None:
        self._stack = QStackedWidget()
        self._stack.addWidget(self._build_start_screen())
        self._stack.addWidget(self._build_game_screen())
        self.setCentralWidget(self._stack)
        self._show_start_screen()

    def _build_start_screen(self) -> QWidget:
        screen = QWidget()
        grid = QGridLayout(screen)
        grid.setContentsMargins(0, 0, 0, 0)
        self._start_background = StartBackground(self._dots)
        grid.addWidget(self._start_background, 0, 0)

        content = QWidget()
        content.setAttribute(Qt.WidgetAttribute.WA_TranslucentBackground, True)
        layout = QVBoxLayout(content)
        layout.setSpacing(18)
        layout.addStretch(2)

        title = QLabel("StrokeX")
        title.setAlignment(Qt.AlignCenter)
        title.setStyleSheet(f"color: {NeonColors.MAGENTA}; font-size: 120px; font-weight: 900;")
        layout.addWidget(title)
        subtitle = QLabel("One-Stroke Puzzle Challenge")
        subtitle.setAlignment(Qt.AlignCenter)
        subtitle.setStyleSheet(f"color: {NeonColors.VIOLET}; font-size: 30px; font-weight: 600;")
        layout.addWidget(subtitle)

        start_btn = QPushButton("START")
        start_btn.setCursor(Qt.CursorShape.PointingHandCursor)
        start_btn.setStyleSheet(_neon_button_style(NeonColors.VIOLET).replace("26px", "48px"))
        start_btn.setFixedWidth(360)
        start_btn.clicked.connect(self._show_game_screen)
        layout.addWidget(start_btn, 0, Qt.AlignHCenter)

        picker = QHBoxLayout()
        picker.setSpacing(8)
        picker.addStretch(1)
        for level in self._levels_repo.all():
            btn = QPushButton(str(level.number))
            btn.setFixedSize(52, 52)
            btn.setCursor(Qt.CursorShape.PointingHandCursor)
            btn.setToolTip(level.name)
            btn.clicked.connect(lambda _=False, n=level.number: self._pick_level(n))
            picker.addWidget(btn)
            self._level_buttons.append(btn)
        picker.addStretch(1)
        layout.addLayout(picker)

        for text in ("Draw through all lines once", "without lifting your finger!"):
            label = QLabel(text)
            label.setAlignment(Qt.AlignCenter)
            label.setStyleSheet(f"color: {NeonColors.VIOLET}; font-size: 26px;")
            layout.addWidget(label)
        layout.addStretch(2)
        grid.addWidget(content, 0, 0)
        return screen

    def _build_game_screen(self) -> QWidget:
        screen = QWidget()
        screen.setStyleSheet(f"background: {NeonColors.BG};")
        row = QHBoxLayout(screen)
        row.setContentsMargins(24, 24, 24, 24)
        row.setSpacing(24)

        left = QVBoxLayout()
        self._level_label = QLabel("")
        self._level_label.setStyleSheet(f"color: {NeonColors.VIOLET}; font-size: 36px; font-weight: 800;")
        self._score_label = QLabel("")
        self._score_label.setStyleSheet(f"color: {NeonColors.TEXT_PRIMARY}; font-size: 26px;")
        self._progress_label = QLabel("")
        self._progress_label.setStyleSheet(f"color: {NeonColors.TEXT_MUTED}; font-size: 20px;")
        left.addWidget(self._level_label)
        left.addWidget(self._score_label)
        left.addWidget(self._progress_label)

        board_area = QWidget()
        board_grid = QGridLayout(board_area)
        board_grid.setContentsMargins(0, 0, 0, 0)
        self._board = PuzzleBoard(self._effects)
        board_grid.addWidget(self._board, 0, 0)
        self._complete_overlay = LevelCompletedOverlay(self._board)
        self._complete_overlay.next_requested.connect(self._next_level)
        left.addWidget(board_area, 1)

        footer = QLabel("Draw through all lines once without lifting!")
        footer.setStyleSheet(f"color: {NeonColors.TEXT_MUTED}; font-size: 22px;")
        left.addWidget(footer)
        row.addLayout(left, 1)

        right = QVBoxLayout()
        right.setSpacing(16)
        self._timer_label = QLabel("0.0s")
        self._timer_label.setAlignment(Qt.AlignCenter)
        self._timer_label.setStyleSheet(
            f"color: {NeonColors.VIOLET}; font-size: 30px; font-weight: 800;"
            f" border: 3px solid {NeonColors.VIOLET}; border-radius: 18px; padding: 12px;"
        )
        right.addWidget(self._timer_label)
        self._reset_btn = self._side_button("RESET", NeonColors.BUTTON_RESET, self._reset)
        self._hint_btn = self._side_button("HINT", NeonColors.BUTTON_HINT, self._show_hint)
        right.addWidget(self._reset_btn)
        right.addWidget(self._hint_btn)
        right.addStretch(1)

        nav = QHBoxLayout()
        self._prev_btn = self._side_button("PREV", NeonColors.BUTTON_PREV, self._previous_level)
        self._next_btn = self._side_button("NEXT", NeonColors.BUTTON_NEXT, self._next_level)
        nav.addWidget(self._prev_btn)
        nav.addWidget(self._next_btn)
        right.addLayout(nav)
        self._locked_label = QLabel("LOCKED")
        self._locked_label.setAlignment(Qt.AlignRight)
        self._locked_label.setStyleSheet(f"color: {NeonColors.BUTTON_DISABLED}; font-size: 18px;")
        right.addWidget(self._locked_label)
        row.addLayout(right, 0)

        self._hint_overlay = HintOverlay(screen)
        self._hint_overlay.closed.connect(lambda: self._board.set_input_enabled(True))
        return screen

    def _side_button(self, text: str, color: str, slot) -> QPushButton:
        btn = QPushButton(text)
        btn.setCursor(Qt.CursorShape.PointingHandCursor)
        btn.setStyleSheet(_neon_button_style(color))
        btn.setMinimumWidth(180)
        btn.clicked.connect(slot)
        return btn

    # ------------------------------------------------------------------
    # Screens
    # ------------------------------------------------------------------

    def _show_start_screen(self) -> None:
        self._refresh_level_picker()
        self._stack.setCurrentIndex(0)

    def _show_game_screen(self) -> None:
        self._session.load_level(self._session.progress.current_level)
        self._stack.setCurrentIndex(1)
        self._refresh_hud()

    def _pick_level(self, number: int) -> None:
        if self._session.select_level(number):
            self._stack.setCurrentIndex(1)
            self._refresh_hud()

    def _refresh_level_picker(self) -> None:
        states = build_level_states(self._levels_repo.all(), self._session.progress)
        for btn, state in zip(self._level_buttons, states):
            btn.setEnabled(state.unlocked)
            color = NeonColors.MAGENTA if state.is_current else NeonColors.VIOLET
            btn.setStyleSheet(_neon_button_style(color).replace("26px", "18px").replace("14px 18px", "4px"))
            if state.best_score:
                btn.setToolTip(f"{state.level.name} - best {state.best_score}")

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def _reset(self) -> None:
        if self._stack.currentIndex() != 1 or self._session.level_complete:
            return
        self._session.reset()

    def _show_hint(self) -> None:
        if self._stack.currentIndex() != 1 or self._hint_overlay.fade.visible:
            return
        if not self._session.can_show_hint:
            return
        self._board.set_input_enabled(False)
        self._hint_overlay.open(self._session.hint())

    def _next_level(self) -> None:
        if self._stack.currentIndex() == 1:
            self._session.next_level()

    def _previous_level(self) -> None:
        if self._stack.currentIndex() == 1:
            self._session.previous_level()

    def _on_game_event(self, event: GameEvent) -> None:
        if event.kind is EngineEvent.SOLVED:
            progress = self._session.progress
            self._complete_overlay.open(
                event.score,
                self._session.elapsed(),
                has_next=progress.current_level < progress.level_count,
            )
        elif event.kind is EngineEvent.LEVEL_LOADED:
            self._complete_overlay.hide()

    # ------------------------------------------------------------------
    # Frame loop
    # ------------------------------------------------------------------

    def _on_frame(self) -> None:
        now = time.perf_counter()
        dt = 0.0 if self._last_tick is None else now - self._last_tick
        self._last_tick = now

        if self._stack.currentIndex() == 0:
            self._dots.step()
            self._start_background.update()
            return

        self._session.update(self._board.take_events(), dt, self._board.pointer)
        if self._session.is_drawing and self._board.pointer is not None:
            self._effects.trail(self._board.pointer)
        self._effects.update(dt)
        self._hint_overlay.tick(dt)
        self._refresh_hud()

    def _refresh_hud(self) -> None:
        snap = self._session.snapshot()
        self._board.set_snapshot(snap)
        self._level_label.setText(f"Level {snap.level}: {snap.level_name}")
        self._score_label.setText(f"Score: {snap.total_score}")
        traced, total = self._session.graph.visit_summary()
        self._progress_label.setText(f"Lines: {traced}/{total}")
        self._timer_label.setText(f"{snap.elapsed:.1f}s")
        self._reset_btn.setEnabled(not snap.level_complete)
        self._prev_btn.setEnabled(snap.level > 1)
        locked = snap.level >= snap.max_unlocked_level
        self._next_btn.setEnabled(not locked)
        self._locked_label.setVisible(locked and not snap.level_complete)

    def closeEvent(self, event: QCloseEvent) -> None:
        self._frame_timer.stop()
        logger.info("Session ended with %d points", self._session.progress.total_score)
        super().closeEvent(event)
