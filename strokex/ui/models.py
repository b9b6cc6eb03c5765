"""Data models used by the UI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from strokex.core.levels import Level
from strokex.core.progress import ProgressionTracker


@dataclass
class LevelState:
    """UI state for a single level button: unlock status, best score, and selection."""

    level: Level
    unlocked: bool
    best_score: int
    is_current: bool = False


def build_level_states(levels: List[Level], progress: ProgressionTracker) -> List[LevelState]:
    states: List[LevelState] = []
    for level in levels:
        record = progress.get_record(level.number)
        states.append(
            LevelState(
                level=level,
                unlocked=progress.is_unlocked(level.number),
                best_score=record.best_score,
                is_current=level.number == progress.current_level,
            )
        )
    return states
