from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict

logger = logging.getLogger(__name__)


@dataclass
class LevelRecord:
    solved: int = 0
    best_score: int = 0


class ProgressionTracker:
    """Tracks the current level, the highest unlocked level and the total score.

    Held in memory for the lifetime of the process only. Levels are numbered
    ``1..level_count``.
    """

    def __init__(self, level_count: int, current_level: int = 1) -> None:
        self._level_count = max(1, int(level_count))
        self._current_level = current_level if 1 <= current_level <= self._level_count else 1
        self._max_unlocked_level = self._current_level
        self._total_score = 0
        self._last_score = 0
        self._records: Dict[int, LevelRecord] = {}

    @property
    def level_count(self) -> int:
        return self._level_count

    @property
    def current_level(self) -> int:
        return self._current_level

    @property
    def max_unlocked_level(self) -> int:
        return self._max_unlocked_level

    @property
    def total_score(self) -> int:
        return self._total_score

    @property
    def last_score(self) -> int:
        """Score of the most recent solve of the current level (0 if none yet)."""
        return self._last_score

    def is_unlocked(self, level: int) -> bool:
        return 1 <= level <= self._max_unlocked_level

    def can_advance(self) -> bool:
        return self._current_level < self._max_unlocked_level

    def can_retreat(self) -> bool:
        return self._current_level > 1

    def get_record(self, level: int) -> LevelRecord:
        return self._records.get(level, LevelRecord())

    def advance_level(self) -> bool:
        """Move to the next level if it is unlocked. Returns True if moved."""
        if not self.can_advance():
            logger.debug("Level %d is the highest unlocked, not advancing", self._current_level)
            return False
        self._current_level += 1
        self._last_score = 0
        return True

    def retreat_level(self) -> bool:
        """Move to the previous level. Returns True if moved."""
        if not self.can_retreat():
            return False
        self._current_level -= 1
        self._last_score = 0
        return True

    def select_level(self, level: int) -> bool:
        """Jump straight to an unlocked level (e.g. from a level picker)."""
        if not self.is_unlocked(level) or level > self._level_count:
            logger.debug("Level %r is locked or unknown, ignoring selection", level)
            return False
        if level != self._current_level:
            self._current_level = level
            self._last_score = 0
        return True

    def sync_current(self, level: int) -> None:
        """Record the level that was actually loaded (used after catalog fallback)."""
        if 1 <= level <= self._level_count:
            self._current_level = level
            self._max_unlocked_level = max(self._max_unlocked_level, level)

    def on_solved(self, level_score: int) -> bool:
        """Add a solve of the current level. Returns True if a new level unlocked."""
        self._last_score = level_score
        self._total_score += level_score
        record = self._records.setdefault(self._current_level, LevelRecord())
        record.solved += 1
        record.best_score = max(record.best_score, level_score)

        unlocked = False
        if (
            self._current_level == self._max_unlocked_level
            and self._max_unlocked_level < self._level_count
        ):
            self._max_unlocked_level += 1
            unlocked = True
            logger.info("Unlocked level %d", self._max_unlocked_level)
        return unlocked

    def unlock_all(self) -> None:
        self._max_unlocked_level = self._level_count
