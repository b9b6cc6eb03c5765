"""Tests for strokex.core.levels – YAML-based level catalog."""

from __future__ import annotations

from collections import deque
from pathlib import Path

import pytest
import yaml

from strokex.core.levels import Level, LevelRepository


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def levels_dir(tmp_path: Path) -> Path:
    """Empty temporary levels directory."""
    d = tmp_path / "data" / "levels"
    d.mkdir(parents=True)
    return d


@pytest.fixture(scope="module")
def catalog() -> LevelRepository:
    """The catalog shipped with the game."""
    return LevelRepository()


def _write_yaml(path: Path, data: dict) -> None:
    path.write_text(yaml.dump(data, default_flow_style=None), encoding="utf-8")


TRIANGLE = {
    "title": "Triangle",
    "nodes": [[0, 0], [100, 0], [50, 80]],
    "edges": [[0, 1], [1, 2], [2, 0]],
}


def _is_connected(level: Level) -> bool:
    adjacency = {i: set() for i in range(level.node_count)}
    for a, b in level.edges:
        adjacency[a].add(b)
        adjacency[b].add(a)
    seen = {0}
    queue = deque([0])
    while queue:
        for nxt in adjacency[queue.popleft()]:
            if nxt not in seen:
                seen.add(nxt)
                queue.append(nxt)
    return len(seen) == level.node_count


# ---------------------------------------------------------------------------
# Level dataclass
# ---------------------------------------------------------------------------

class TestLevelDataclass:
    def test_creation(self):
        lv = Level(number=1, name="Triangle", nodes=((0.0, 0.0), (1.0, 1.0)), edges=((0, 1),))
        assert lv.number == 1
        assert lv.name == "Triangle"
        assert lv.node_count == 2
        assert lv.edge_count == 1

    def test_frozen(self):
        lv = Level(number=1, name="T", nodes=(), edges=())
        with pytest.raises(AttributeError):
            lv.number = 2  # type: ignore[misc]


# ---------------------------------------------------------------------------
# LevelRepository – shipped catalog
# ---------------------------------------------------------------------------

class TestShippedCatalog:
    def test_has_fourteen_levels(self, catalog: LevelRepository):
        assert catalog.count() == 14
        assert catalog.numbers() == list(range(1, 15))

    def test_level_one_is_triangle(self, catalog: LevelRepository):
        lv = catalog.get(1)
        assert lv.nodes == ((940.0, 441.0), (705.0, 707.0), (1175.0, 707.0))
        assert lv.edges == ((0, 1), (1, 2), (2, 0))

    def test_degree_sum_is_even(self, catalog: LevelRepository):
        for lv in catalog.all():
            degrees = [0] * lv.node_count
            for a, b in lv.edges:
                degrees[a] += 1
                degrees[b] += 1
            assert sum(degrees) % 2 == 0
            assert sum(1 for d in degrees if d % 2) % 2 == 0

    def test_every_level_is_connected(self, catalog: LevelRepository):
        for lv in catalog.all():
            assert _is_connected(lv), f"level {lv.number} is disconnected"

    def test_edges_reference_valid_nodes(self, catalog: LevelRepository):
        for lv in catalog.all():
            for a, b in lv.edges:
                assert a != b
                assert 0 <= a < lv.node_count
                assert 0 <= b < lv.node_count


# ---------------------------------------------------------------------------
# LevelRepository – lookups
# ---------------------------------------------------------------------------

class TestLookup:
    @pytest.mark.parametrize("number", [0, -1, 15, 999])
    def test_out_of_range_falls_back_to_level_one(self, catalog: LevelRepository, number: int):
        assert catalog.get(number) is catalog.get(1)

    def test_has(self, catalog: LevelRepository):
        assert catalog.has(14)
        assert not catalog.has(0)

    def test_get_is_deterministic(self, catalog: LevelRepository):
        assert catalog.get(5) == catalog.get(5)


# ---------------------------------------------------------------------------
# LevelRepository – custom directory
# ---------------------------------------------------------------------------

class TestLevelRepositoryHappy:
    def test_single_level(self, levels_dir: Path):
        _write_yaml(levels_dir / "level1.yaml", TRIANGLE)
        repo = LevelRepository(levels_dir)
        assert repo.count() == 1
        lv = repo.get(1)
        assert lv.name == "Triangle"
        assert lv.nodes == ((0.0, 0.0), (100.0, 0.0), (50.0, 80.0))
        assert lv.edges == ((0, 1), (1, 2), (2, 0))

    def test_numeric_ordering(self, levels_dir: Path):
        for n in range(10, 0, -1):
            _write_yaml(levels_dir / f"level{n}.yaml", TRIANGLE)
        repo = LevelRepository(levels_dir)
        assert [lv.number for lv in repo.all()] == list(range(1, 11))

    def test_fallback_is_level_one(self, levels_dir: Path):
        _write_yaml(levels_dir / "level1.yaml", TRIANGLE)
        _write_yaml(levels_dir / "level2.yaml", {**TRIANGLE, "title": "Second"})
        repo = LevelRepository(levels_dir)
        assert repo.get(99).number == 1
        assert repo.get(0).name == "Triangle"

    def test_title_stripped(self, levels_dir: Path):
        _write_yaml(levels_dir / "level1.yaml", {**TRIANGLE, "title": "  Padded  "})
        assert LevelRepository(levels_dir).get(1).name == "Padded"

    def test_unnumbered_file_skipped(self, levels_dir: Path):
        _write_yaml(levels_dir / "level1.yaml", TRIANGLE)
        _write_yaml(levels_dir / "levelx.yaml", TRIANGLE)
        assert LevelRepository(levels_dir).count() == 1


# ---------------------------------------------------------------------------
# LevelRepository – authoring errors
# ---------------------------------------------------------------------------

class TestLevelRepositoryErrors:
    def test_missing_directory(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            LevelRepository(tmp_path / "nope")

    def test_no_yaml_files(self, levels_dir: Path):
        with pytest.raises(ValueError, match="No level files"):
            LevelRepository(levels_dir)

    def test_empty_yaml(self, levels_dir: Path):
        (levels_dir / "level1.yaml").write_text("", encoding="utf-8")
        with pytest.raises(ValueError, match="expected YAML"):
            LevelRepository(levels_dir)

    def test_missing_title(self, levels_dir: Path):
        _write_yaml(levels_dir / "level1.yaml", {k: v for k, v in TRIANGLE.items() if k != "title"})
        with pytest.raises(ValueError, match="missing or invalid 'title'"):
            LevelRepository(levels_dir)

    def test_missing_nodes(self, levels_dir: Path):
        _write_yaml(levels_dir / "level1.yaml", {**TRIANGLE, "nodes": []})
        with pytest.raises(ValueError, match="'nodes'"):
            LevelRepository(levels_dir)

    def test_bad_position(self, levels_dir: Path):
        _write_yaml(levels_dir / "level1.yaml", {**TRIANGLE, "nodes": [[0, 0], [1], [2, 2]]})
        with pytest.raises(ValueError, match="node 1"):
            LevelRepository(levels_dir)

    def test_missing_edges(self, levels_dir: Path):
        _write_yaml(levels_dir / "level1.yaml", {**TRIANGLE, "edges": []})
        with pytest.raises(ValueError, match="'edges'"):
            LevelRepository(levels_dir)

    def test_self_loop(self, levels_dir: Path):
        _write_yaml(levels_dir / "level1.yaml", {**TRIANGLE, "edges": [[0, 1], [2, 2]]})
        with pytest.raises(ValueError, match="itself"):
            LevelRepository(levels_dir)

    def test_unknown_node(self, levels_dir: Path):
        _write_yaml(levels_dir / "level1.yaml", {**TRIANGLE, "edges": [[0, 1], [1, 7]]})
        with pytest.raises(ValueError, match="unknown node"):
            LevelRepository(levels_dir)

    def test_duplicate_pair_in_reverse_order(self, levels_dir: Path):
        _write_yaml(levels_dir / "level1.yaml", {**TRIANGLE, "edges": [[0, 1], [1, 0]]})
        with pytest.raises(ValueError, match="duplicates"):
            LevelRepository(levels_dir)

    def test_gap_in_level_numbers(self, levels_dir: Path):
        for n in (1, 2, 5):
            _write_yaml(levels_dir / f"level{n}.yaml", TRIANGLE)
        with pytest.raises(ValueError, match=r"missing \[3\]"):
            LevelRepository(levels_dir)

    def test_numbering_must_start_at_one(self, levels_dir: Path):
        _write_yaml(levels_dir / "level2.yaml", TRIANGLE)
        _write_yaml(levels_dir / "level3.yaml", TRIANGLE)
        with pytest.raises(ValueError, match="without gaps"):
            LevelRepository(levels_dir)

    def test_non_integer_ids(self, levels_dir: Path):
        _write_yaml(levels_dir / "level1.yaml", {**TRIANGLE, "edges": [[0, "a"]]})
        with pytest.raises(ValueError, match="pair of node ids"):
            LevelRepository(levels_dir)
