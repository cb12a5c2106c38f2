"""Tests for the neighbor-aggregation operators.

Covers reduce_on_neighbors, join_with_vertices, group_reduce_on_neighbors
and the partition helper, on the in-memory backend and across
parallelism levels.
"""

from __future__ import annotations

import operator

import pytest

from neighborgraph.engine import (
    group_reduce_on_neighbors,
    join_with_vertices,
    partition,
    reduce_on_neighbors,
)
from neighborgraph.exceptions import UnknownVertexError
from neighborgraph.graph import Direction, InMemoryGraph
from neighborgraph.recommend import initial_neighbor_set, union_neighbor_sets


# ── partition ─────────────────────────────────────────────────


class TestPartition:
    def test_even_split(self):
        assert partition([1, 2, 3, 4], 2) == [[1, 2], [3, 4]]

    def test_remainder_goes_to_leading_chunks(self):
        assert partition([1, 2, 3, 4, 5], 3) == [[1, 2], [3, 4], [5]]

    def test_more_parts_than_items(self):
        assert partition(["a", "b"], 5) == [["a"], ["b"]]

    def test_empty(self):
        assert partition([], 4) == []

    def test_invalid_parts(self):
        with pytest.raises(ValueError):
            partition([1], 0)


# ── reduce_on_neighbors ───────────────────────────────────────


class TestReduceOnNeighbors:
    """Folding neighbor values per vertex."""

    def test_union_yields_self_plus_one_hop(self, scenario_graph):
        result = reduce_on_neighbors(scenario_graph, union_neighbor_sets)
        assert result == {
            "A": frozenset("ABC"),
            "B": frozenset("ABDE"),
            "C": frozenset("ACDE"),
            "D": frozenset("BCD"),
            "E": frozenset("BCE"),
        }

    def test_symmetry(self, scenario_graph, scenario_edges):
        result = reduce_on_neighbors(scenario_graph, union_neighbor_sets)
        for edge in scenario_edges:
            assert edge.source_id in result[edge.target_id]
            assert edge.target_id in result[edge.source_id]

    def test_isolated_vertex_keeps_seed(self, scenario_edges):
        graph = InMemoryGraph.from_edges(scenario_edges, initial_neighbor_set, vertex_ids=["Z"])
        result = reduce_on_neighbors(graph, union_neighbor_sets)
        assert result["Z"] == frozenset({"Z"})

    def test_without_self_seed(self, scenario_edges):
        graph = InMemoryGraph.from_edges(scenario_edges, initial_neighbor_set, vertex_ids=["Z"])
        result = reduce_on_neighbors(graph, union_neighbor_sets, include_self=False)
        assert "Z" not in result
        assert result["A"] == frozenset("BC")

    def test_out_direction_only(self, scenario_graph):
        result = reduce_on_neighbors(
            scenario_graph, union_neighbor_sets, direction=Direction.OUT, include_self=False,
        )
        assert result == {"A": frozenset("BC"), "B": frozenset("DE"), "C": frozenset("DE")}

    def test_numeric_combine_counts_degree(self, scenario_graph):
        ones = scenario_graph.with_values({vid: 1 for vid in scenario_graph.vertex_ids()})
        result = reduce_on_neighbors(ones, operator.add, include_self=False)
        assert result == {"A": 2, "B": 3, "C": 3, "D": 2, "E": 2}

    @pytest.mark.parametrize("parallelism", [1, 2, 3, 8])
    def test_parallelism_does_not_change_result(self, scenario_graph, parallelism):
        expected = reduce_on_neighbors(scenario_graph, union_neighbor_sets)
        actual = reduce_on_neighbors(scenario_graph, union_neighbor_sets, parallelism=parallelism)
        assert actual == expected

    def test_graph_values_untouched(self, scenario_graph):
        reduce_on_neighbors(scenario_graph, union_neighbor_sets)
        for vid in scenario_graph.vertex_ids():
            assert scenario_graph.get_vertex(vid).value == frozenset({vid})

    def test_empty_graph(self):
        graph = InMemoryGraph.from_edges([], initial_neighbor_set)
        assert reduce_on_neighbors(graph, union_neighbor_sets) == {}


# ── join_with_vertices ────────────────────────────────────────


class TestJoinWithVertices:
    """Merging computed values back onto vertices."""

    def test_replace_merge(self, scenario_graph):
        joined = join_with_vertices(scenario_graph, {"A": frozenset("ABC")}, lambda old, new: new)
        assert joined.get_vertex("A").value == frozenset("ABC")

    def test_merge_receives_old_and_new(self, scenario_graph):
        joined = join_with_vertices(scenario_graph, {"B": frozenset("X")}, lambda old, new: old | new)
        assert joined.get_vertex("B").value == frozenset("BX")

    def test_absent_vertices_keep_value(self, scenario_graph):
        joined = join_with_vertices(scenario_graph, {"A": frozenset()}, lambda old, new: new)
        assert joined.get_vertex("E").value == frozenset({"E"})

    def test_empty_updates(self, scenario_graph):
        joined = join_with_vertices(scenario_graph, {}, lambda old, new: new)
        assert joined.get_vertex("A").value == frozenset({"A"})

    def test_unknown_vertex_is_invariant_violation(self, scenario_graph):
        with pytest.raises(UnknownVertexError):
            join_with_vertices(scenario_graph, {"nope": frozenset()}, lambda old, new: new)


# ── group_reduce_on_neighbors ─────────────────────────────────


class TestGroupReduceOnNeighbors:
    """Per-vertex custom functions over (edge, neighbor) pairs."""

    def test_called_once_per_connected_vertex(self, scenario_edges):
        graph = InMemoryGraph.from_edges(scenario_edges, initial_neighbor_set, vertex_ids=["Z"])
        calls = []

        def fn(vertex, pairs):
            calls.append(vertex.vertex_id)
            return []

        group_reduce_on_neighbors(graph, fn)
        assert sorted(calls) == ["A", "B", "C", "D", "E"]

    def test_emits_concatenated_records(self, scenario_graph):
        def degree(vertex, pairs):
            yield (vertex.vertex_id, len(pairs))

        result = group_reduce_on_neighbors(scenario_graph, degree)
        assert sorted(result) == [("A", 2), ("B", 3), ("C", 3), ("D", 2), ("E", 2)]

    def test_zero_or_many_records_per_vertex(self, scenario_graph):
        def neighbor_rows(vertex, pairs):
            for _, neighbor in pairs:
                if neighbor.vertex_id > vertex.vertex_id:
                    yield (vertex.vertex_id, neighbor.vertex_id)

        result = group_reduce_on_neighbors(scenario_graph, neighbor_rows)
        assert sorted(result) == [("A", "B"), ("A", "C"), ("B", "D"), ("B", "E"), ("C", "D"), ("C", "E")]

    def test_direction_skips_vertices_without_matching_edges(self, scenario_graph):
        seen = group_reduce_on_neighbors(
            scenario_graph, lambda v, pairs: [v.vertex_id], direction=Direction.OUT,
        )
        assert sorted(seen) == ["A", "B", "C"]

    def test_function_sees_vertex_value(self, scenario_graph):
        tagged = scenario_graph.with_values({"A": "tagged"})
        result = group_reduce_on_neighbors(
            tagged, lambda v, pairs: [v.value] if v.vertex_id == "A" else [],
        )
        assert result == ["tagged"]

    def test_pairs_include_edges(self, scenario_graph):
        result = group_reduce_on_neighbors(
            scenario_graph,
            lambda v, pairs: [(e.source_id, e.target_id) for e, _ in pairs] if v.vertex_id == "D" else [],
        )
        assert sorted(result) == [("B", "D"), ("C", "D")]

    @pytest.mark.parametrize("parallelism", [1, 2, 4])
    def test_worker_exception_propagates(self, scenario_graph, parallelism):
        def fail_on_c(vertex, pairs):
            if vertex.vertex_id == "C":
                raise RuntimeError("boom")
            return [vertex.vertex_id]

        with pytest.raises(RuntimeError, match="boom"):
            group_reduce_on_neighbors(scenario_graph, fail_on_c, parallelism=parallelism)

    @pytest.mark.parametrize("parallelism", [2, 5])
    def test_parallelism_does_not_change_records(self, scenario_graph, parallelism):
        def fn(vertex, pairs):
            return [(vertex.vertex_id, n.vertex_id) for _, n in pairs]

        expected = sorted(group_reduce_on_neighbors(scenario_graph, fn))
        assert sorted(group_reduce_on_neighbors(scenario_graph, fn, parallelism=parallelism)) == expected
