"""Pytest configuration and fixtures for neighborgraph tests."""

import pytest

from neighborgraph.graph import Edge, InMemoryGraph
from neighborgraph.recommend import initial_neighbor_set


# A-B, A-C, B-D, C-D, B-E, C-E: D and E are each two hops from A via B and C.
SCENARIO_PAIRS = [
    ("A", "B"),
    ("A", "C"),
    ("B", "D"),
    ("C", "D"),
    ("B", "E"),
    ("C", "E"),
]


@pytest.fixture
def make_edges():
    """Factory turning ("a", "b") tuples into Edge records."""

    def _make(pairs):
        return [Edge(source_id=s, target_id=t) for s, t in pairs]

    return _make


@pytest.fixture
def scenario_edges(make_edges):
    """Edge list for the two-paths scenario."""
    return make_edges(SCENARIO_PAIRS)


@pytest.fixture
def scenario_graph(scenario_edges):
    """Scenario graph seeded with each vertex's own ID."""
    return InMemoryGraph.from_edges(scenario_edges, initial_neighbor_set)


@pytest.fixture
def edge_file(tmp_path):
    """Write the scenario as a tab-separated edge file with weights."""
    path = tmp_path / "edges.tsv"
    path.write_text("".join(f"{s}\t{t}\t1.0\n" for s, t in SCENARIO_PAIRS), encoding="utf-8")
    return path
