"""People-you-might-know recommendations built on the neighbor operators.

For each user, every friend-of-friend who is not the user and not already
a friend is counted once per two-hop path that reaches them. Candidates
whose count is strictly greater than the threshold are recommended.

Public API:
    Recommendation: One (source, candidate) recommendation record.
    DEFAULT_THRESHOLD: Default minimum (exclusive) two-hop path count.
    initial_neighbor_set: Seed value for a vertex (its own ID).
    union_neighbor_sets: Associative/commutative merge of neighbor sets.
    people_you_might_know: Build the per-vertex group-reduce function.
    neighbor_sets: Attach each vertex's full neighbor set to the graph.
    recommend: Run the full recommendation computation on a graph.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Callable, Iterator

from .engine import NeighborPairs, group_reduce_on_neighbors, join_with_vertices, reduce_on_neighbors
from .exceptions import ConfigurationError
from .graph.protocol import NeighborGraph
from .graph.types import Direction, Vertex

DEFAULT_THRESHOLD = 20


@dataclass(frozen=True)
class Recommendation:
    """A recommended connection.

    Attributes:
        source_id: The user receiving the recommendation.
        candidate_id: The friend-of-friend being recommended.
        path_count: Number of two-hop paths from source to candidate.
    """

    source_id: str
    candidate_id: str
    path_count: int = 0

    def as_row(self) -> tuple[str, str]:
        """The (source, candidate) pair written to output."""
        return (self.source_id, self.candidate_id)


def initial_neighbor_set(vertex_id: str) -> frozenset[str]:
    return frozenset((vertex_id,))


def union_neighbor_sets(first: frozenset[str], second: frozenset[str]) -> frozenset[str]:
    return first | second


def validate_threshold(threshold: object) -> int:
    """Return *threshold* if it is a non-negative int, else raise ConfigurationError."""
    if isinstance(threshold, bool) or not isinstance(threshold, int):
        raise ConfigurationError(f"threshold must be an integer, got {threshold!r}")
    if threshold < 0:
        raise ConfigurationError(f"threshold must be non-negative, got {threshold}")
    return threshold


def people_you_might_know(
    threshold: int = DEFAULT_THRESHOLD,
) -> Callable[[Vertex, NeighborPairs], Iterator[Recommendation]]:
    """Build the group-reduce function that scores friends-of-friends.

    The returned function expects each vertex value to be the vertex's
    full neighbor set (itself included), as produced by ``neighbor_sets``.
    """
    threshold = validate_threshold(threshold)

    def iterate_neighbors(vertex: Vertex, neighbors: NeighborPairs) -> Iterator[Recommendation]:
        known = vertex.value
        scores: Counter[str] = Counter()
        for _, friend in neighbors:
            for friend_of_friend in friend.value:
                if friend_of_friend == vertex.vertex_id:
                    continue
                if friend_of_friend in known:
                    continue
                scores[friend_of_friend] += 1

        for candidate, count in scores.items():
            if count > threshold:
                yield Recommendation(vertex.vertex_id, candidate, count)

    return iterate_neighbors


def neighbor_sets(graph: NeighborGraph, parallelism: int = 1) -> NeighborGraph:
    """Return *graph* with each vertex value replaced by its neighbor set.

    Expects vertices seeded with ``initial_neighbor_set``. The resulting
    value of every vertex is its own ID plus all one-hop neighbors, in
    either edge direction.
    """
    reduced = reduce_on_neighbors(
        graph,
        union_neighbor_sets,
        direction=Direction.ALL,
        parallelism=parallelism,
    )
    return join_with_vertices(graph, reduced, lambda old, new: new)


def recommend(
    graph: NeighborGraph,
    threshold: int = DEFAULT_THRESHOLD,
    parallelism: int = 1,
) -> list[Recommendation]:
    """Compute recommendations for every vertex of a seeded graph.

    Args:
        graph: Graph whose vertices hold ``initial_neighbor_set`` values.
        threshold: Minimum (exclusive) number of two-hop paths.
        parallelism: Number of worker partitions per operator.
    """
    fn = people_you_might_know(threshold)
    with_neighbors = neighbor_sets(graph, parallelism=parallelism)
    return group_reduce_on_neighbors(
        with_neighbors,
        fn,
        direction=Direction.ALL,
        parallelism=parallelism,
    )


__all__ = [
    "Recommendation",
    "DEFAULT_THRESHOLD",
    "initial_neighbor_set",
    "union_neighbor_sets",
    "validate_threshold",
    "people_you_might_know",
    "neighbor_sets",
    "recommend",
]
