"""Hint selection based on the odd-degree nodes of the puzzle graph."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from strokex.core.graph import GraphModel

TIP = "Trace through each line exactly once."


class HintCategory(Enum):
    START_ANYWHERE = "start_anywhere"
    START_AT_ODD_NODE = "start_at_odd_node"
    KEEP_TRYING = "keep_trying"


_MESSAGES = {
    HintCategory.START_ANYWHERE: "You can start from any node!",
    HintCategory.START_AT_ODD_NODE: "Start from a node with odd connections!",
    HintCategory.KEEP_TRYING: "This puzzle has a solution - keep trying!",
}


@dataclass(frozen=True)
class Hint:
    category: HintCategory
    odd_count: int
    start_nodes: Tuple[int, ...]
    message: str
    tip: str = TIP


def advise(graph: GraphModel) -> Hint:
    """Pick a hint from the number of odd-degree nodes.

    Zero odd nodes means an Eulerian circuit (any start works); exactly two
    means an Eulerian trail starting at one of them. Anything else only gets
    the generic message and no start suggestion.
    """
    odd = graph.odd_degree_nodes()
    if len(odd) == 0:
        category = HintCategory.START_ANYWHERE
        start_nodes = tuple(node.id for node in graph.nodes)
    elif len(odd) == 2:
        category = HintCategory.START_AT_ODD_NODE
        start_nodes = tuple(odd)
    else:
        category = HintCategory.KEEP_TRYING
        start_nodes = ()
    return Hint(
        category=category,
        odd_count=len(odd),
        start_nodes=start_nodes,
        message=_MESSAGES[category],
    )
