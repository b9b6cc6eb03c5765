from __future__ import annotations

import math

BASE_SCORE = 100
MIN_SCORE = 20
PENALTY_PER_SECOND = 2


def score(elapsed_seconds: float) -> int:
    """Points for a solve: 100 minus 2 per elapsed second, never below 20."""
    elapsed = max(0.0, float(elapsed_seconds))
    return max(MIN_SCORE, BASE_SCORE - math.floor(elapsed * PENALTY_PER_SECOND))
