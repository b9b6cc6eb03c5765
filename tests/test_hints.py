"""Tests for strokex.core.hints – odd-degree hint advisor."""

from __future__ import annotations

import pytest

from strokex.core.graph import GraphModel
from strokex.core.hints import TIP, Hint, HintCategory, advise
from strokex.core.levels import Level, LevelRepository

SQUARE = ((0, 0), (100, 0), (100, 100), (0, 100))


def _graph(nodes, edges) -> GraphModel:
    return GraphModel(Level(number=1, name="G", nodes=tuple(nodes), edges=tuple(edges)))


class TestAdvise:
    def test_triangle_starts_anywhere(self):
        hint = advise(_graph(((0, 0), (100, 0), (50, 80)), ((0, 1), (1, 2), (2, 0))))
        assert hint.category is HintCategory.START_ANYWHERE
        assert hint.odd_count == 0
        assert hint.start_nodes == (0, 1, 2)
        assert hint.message == "You can start from any node!"

    def test_square_with_chord_starts_at_odd_node(self):
        hint = advise(_graph(SQUARE, ((0, 1), (1, 2), (2, 3), (3, 0), (0, 2))))
        assert hint.category is HintCategory.START_AT_ODD_NODE
        assert hint.odd_count == 2
        assert hint.start_nodes == (0, 2)
        assert "odd" in hint.message

    def test_four_odd_nodes_keeps_trying(self):
        k4 = ((0, 1), (0, 2), (0, 3), (1, 2), (1, 3), (2, 3))
        hint = advise(_graph(SQUARE, k4))
        assert hint.category is HintCategory.KEEP_TRYING
        assert hint.odd_count == 4
        assert hint.start_nodes == ()

    def test_tip_is_always_present(self):
        hint = advise(_graph(((0, 0), (100, 0)), ((0, 1),)))
        assert hint.tip == TIP

    def test_does_not_mutate_graph(self):
        g = _graph(((0, 0), (100, 0), (50, 80)), ((0, 1), (1, 2), (2, 0)))
        g.mark_visited(0, 1)
        advise(g)
        assert g.visit_count(0, 1) == 1


class TestHintDataclass:
    def test_frozen(self):
        hint = Hint(category=HintCategory.KEEP_TRYING, odd_count=4, start_nodes=(), message="m")
        with pytest.raises(AttributeError):
            hint.odd_count = 0  # type: ignore[misc]


class TestCatalogHints:
    def test_catalog_never_needs_the_fallback(self):
        for level in LevelRepository().all():
            hint = advise(GraphModel(level))
            assert hint.odd_count in (0, 2), f"level {level.number}"
            assert hint.category is not HintCategory.KEEP_TRYING
