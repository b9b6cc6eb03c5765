from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import yaml

logger = logging.getLogger(__name__)

Position = Tuple[float, float]
EdgePair = Tuple[int, int]

DEFAULT_LEVELS_DIR = Path(__file__).resolve().parent.parent / "data" / "levels"


@dataclass(frozen=True)
class Level:
    number: int
    name: str
    nodes: Tuple[Position, ...]
    edges: Tuple[EdgePair, ...]

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return len(self.edges)


class LevelRepository:
    """Read-only catalog of puzzle levels, keyed by 1-based level number.

    Levels are loaded once from ``level<N>.yaml`` files. Authoring mistakes
    in those files, including gaps in the numbering, are reported at load
    time; lookups never fail and fall back to level 1 for unknown numbers.
    """

    def __init__(self, base_dir: Optional[Path] = None) -> None:
        self._base_dir = Path(base_dir) if base_dir is not None else DEFAULT_LEVELS_DIR
        self._levels = self._load_levels()

    def all(self) -> List[Level]:
        return list(self._levels.values())

    def count(self) -> int:
        return len(self._levels)

    def numbers(self) -> List[int]:
        return list(self._levels.keys())

    def has(self, number: int) -> bool:
        return number in self._levels

    def get(self, number: int) -> Level:
        """Return the level with the given number, or level 1 if there is none."""
        level = self._levels.get(number)
        if level is None:
            logger.debug("Level %r not in catalog, falling back to level 1", number)
            return self._levels[1]
        return level

    def _load_levels(self) -> Dict[int, Level]:
        base_dir = self._base_dir
        if not base_dir.exists():
            raise FileNotFoundError(f"Levels directory not found: {base_dir}")

        levels: Dict[int, Level] = {}

        def _sort_key(p: Path) -> tuple[int, str]:
            m = re.match(r"^level(\d+)$", p.stem)
            if m:
                return (int(m.group(1)), p.stem)
            return (10**9, p.stem)

        for level_path in sorted(base_dir.glob("level*.yaml"), key=_sort_key):
            m = re.match(r"^level(\d+)$", level_path.stem)
            if not m:
                logger.warning("Skipping %s: file name has no level number", level_path.name)
                continue
            number = int(m.group(1))
            raw = yaml.safe_load(level_path.read_text(encoding="utf-8"))
            levels[number] = _parse_level(level_path.name, number, raw)

        if not levels:
            raise ValueError(f"No level files (level*.yaml) found in {base_dir}")
        expected = list(range(1, len(levels) + 1))
        if sorted(levels) != expected:
            missing = sorted(set(expected) - set(levels))
            raise ValueError(
                f"{base_dir}: level numbers must run 1..{len(levels)} without gaps, missing {missing}"
            )
        logger.info("Loaded %d levels from %s", len(levels), base_dir)
        return levels


def _parse_level(file_name: str, number: int, raw: object) -> Level:
    if not raw or not isinstance(raw, dict):
        raise ValueError(f"{file_name}: expected YAML with 'title', 'nodes' and 'edges'")
    title = raw.get("title")
    if not title or not isinstance(title, str):
        raise ValueError(f"{file_name}: missing or invalid 'title'")

    raw_nodes = raw.get("nodes")
    if not raw_nodes or not isinstance(raw_nodes, list):
        raise ValueError(f"{file_name}: missing or empty 'nodes'")
    nodes: List[Position] = []
    for index, item in enumerate(raw_nodes):
        if not isinstance(item, (list, tuple)) or len(item) != 2:
            raise ValueError(f"{file_name}: node {index} must be an [x, y] pair")
        try:
            nodes.append((float(item[0]), float(item[1])))
        except (TypeError, ValueError):
            raise ValueError(f"{file_name}: node {index} has a non-numeric position") from None

    raw_edges = raw.get("edges")
    if not raw_edges or not isinstance(raw_edges, list):
        raise ValueError(f"{file_name}: missing or empty 'edges'")
    edges: List[EdgePair] = []
    seen: set[frozenset[int]] = set()
    for index, item in enumerate(raw_edges):
        if (
            not isinstance(item, (list, tuple))
            or len(item) != 2
            or not all(isinstance(v, int) and not isinstance(v, bool) for v in item)
        ):
            raise ValueError(f"{file_name}: edge {index} must be a pair of node ids")
        a, b = item
        if a == b:
            raise ValueError(f"{file_name}: edge {index} connects node {a} to itself")
        if not (0 <= a < len(nodes) and 0 <= b < len(nodes)):
            raise ValueError(f"{file_name}: edge {index} references an unknown node")
        pair = frozenset((a, b))
        if pair in seen:
            raise ValueError(f"{file_name}: edge {index} duplicates {a}-{b}")
        seen.add(pair)
        edges.append((a, b))

    return Level(number=number, name=title.strip(), nodes=tuple(nodes), edges=tuple(edges))
