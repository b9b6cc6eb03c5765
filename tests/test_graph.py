"""Tests for strokex.core.graph – graph model and edge visit counters."""

from __future__ import annotations

import pytest

from strokex.core.graph import Edge, GraphModel
from strokex.core.levels import Level


@pytest.fixture()
def triangle() -> Level:
    return Level(
        number=1,
        name="Triangle",
        nodes=((940.0, 441.0), (705.0, 707.0), (1175.0, 707.0)),
        edges=((0, 1), (1, 2), (2, 0)),
    )


@pytest.fixture()
def graph(triangle: Level) -> GraphModel:
    return GraphModel(triangle)


# ---------------------------------------------------------------------------
# Edge
# ---------------------------------------------------------------------------

class TestEdge:
    def test_connects_both_directions(self):
        e = Edge(a=0, b=1)
        assert e.connects(0, 1)
        assert e.connects(1, 0)
        assert not e.connects(0, 2)

    def test_visit_count_defaults_to_zero(self):
        assert Edge(a=0, b=1).visit_count == 0


# ---------------------------------------------------------------------------
# GraphModel – load
# ---------------------------------------------------------------------------

class TestLoad:
    def test_nodes_get_catalog_ids(self, graph: GraphModel):
        assert [n.id for n in graph.nodes] == [0, 1, 2]
        assert graph.node(2).position == (1175.0, 707.0)

    def test_empty_graph(self):
        g = GraphModel()
        assert g.nodes == []
        assert g.edges == []

    def test_reload_resets_visits_and_highlights(self, graph: GraphModel, triangle: Level):
        graph.mark_visited(0, 1)
        graph.highlight(1)
        graph.load(triangle)
        assert all(e.visit_count == 0 for e in graph.edges)
        assert not any(n.highlighted for n in graph.nodes)

    def test_load_does_not_share_state_with_previous_graph(self, triangle: Level):
        first = GraphModel(triangle)
        first.mark_visited(0, 1)
        second = GraphModel(triangle)
        assert second.visit_count(0, 1) == 0


# ---------------------------------------------------------------------------
# GraphModel – adjacency and visits
# ---------------------------------------------------------------------------

class TestAdjacency:
    def test_are_connected_is_order_independent(self, graph: GraphModel):
        assert graph.are_connected(0, 2)
        assert graph.are_connected(2, 0)

    def test_not_connected(self):
        g = GraphModel(Level(number=1, name="P", nodes=((0, 0), (1, 0), (2, 0)), edges=((0, 1), (1, 2))))
        assert not g.are_connected(0, 2)

    def test_mark_visited_increments(self, graph: GraphModel):
        graph.mark_visited(1, 0)
        graph.mark_visited(0, 1)
        assert graph.visit_count(0, 1) == 2
        assert graph.visit_count(1, 2) == 0

    def test_mark_visited_unknown_pair_is_noop(self, graph: GraphModel):
        graph.mark_visited(0, 7)
        assert [e.visit_count for e in graph.edges] == [0, 0, 0]

    def test_visit_count_unknown_pair_is_zero(self, graph: GraphModel):
        assert graph.visit_count(5, 6) == 0

    def test_reset_visits(self, graph: GraphModel):
        graph.mark_visited(0, 1)
        graph.mark_visited(1, 2)
        graph.reset_visits()
        assert [e.visit_count for e in graph.edges] == [0, 0, 0]

    def test_visit_summary(self, graph: GraphModel):
        graph.mark_visited(0, 1)
        graph.mark_visited(0, 1)
        assert graph.visit_summary() == (1, 3)


# ---------------------------------------------------------------------------
# GraphModel – degrees
# ---------------------------------------------------------------------------

class TestDegrees:
    def test_triangle_degrees(self, graph: GraphModel):
        assert [graph.degree(i) for i in range(3)] == [2, 2, 2]
        assert graph.degrees() == [2, 2, 2]
        assert graph.odd_degree_nodes() == []

    def test_odd_nodes_of_path(self):
        g = GraphModel(Level(number=1, name="P", nodes=((0, 0), (1, 0), (2, 0)), edges=((0, 1), (1, 2))))
        assert g.odd_degree_nodes() == [0, 2]

    def test_degree_of_unknown_node(self, graph: GraphModel):
        assert graph.degree(42) == 0


# ---------------------------------------------------------------------------
# GraphModel – hit testing
# ---------------------------------------------------------------------------

class TestNodeAt:
    def test_exact_center(self, graph: GraphModel):
        assert graph.node_at((705.0, 707.0), 39.2) == 1

    def test_on_radius_boundary(self, graph: GraphModel):
        assert graph.node_at((940.0 + 30.0, 441.0 + 40.0), 50.0) == 0

    def test_outside_radius(self, graph: GraphModel):
        assert graph.node_at((940.0, 441.0 + 40.0), 39.2) is None

    def test_empty_space(self, graph: GraphModel):
        assert graph.node_at((0.0, 0.0), 39.2) is None

    def test_first_match_wins(self):
        g = GraphModel(Level(number=1, name="O", nodes=((0, 0), (10, 0)), edges=((0, 1),)))
        assert g.node_at((5.0, 0.0), 20.0) == 0


class TestHighlights:
    def test_highlight_and_clear(self, graph: GraphModel):
        graph.highlight(2)
        assert graph.node(2).highlighted
        graph.clear_highlights()
        assert not graph.node(2).highlighted
