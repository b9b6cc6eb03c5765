from __future__ import annotations

from enum import Enum
from typing import Iterable

from strokex.core.graph import Edge


class SolutionStatus(Enum):
    INCOMPLETE = "incomplete"
    SOLVED = "solved"
    FAILED = "failed"


def evaluate(edges: Iterable[Edge]) -> SolutionStatus:
    """Classify an attempt from its edge visit counts.

    Solved when every edge was traced exactly once, failed when any edge was
    traced more than once, incomplete otherwise.
    """
    all_once = True
    any_retraced = False
    for edge in edges:
        if edge.visit_count != 1:
            all_once = False
        if edge.visit_count > 1:
            any_retraced = True
    if all_once:
        return SolutionStatus.SOLVED
    if any_retraced:
        return SolutionStatus.FAILED
    return SolutionStatus.INCOMPLETE
