"""Neighbor-aggregation operators over any NeighborGraph backend.

Philosophy:
- Operators are pure: they read a graph and return new values or records
- Work is split into contiguous vertex partitions run on a thread pool
- Any worker failure propagates; no partial result is ever returned

Public API:
    reduce_on_neighbors: Fold an associative/commutative function over neighbor values.
    join_with_vertices: Merge a value mapping back onto a graph's vertices.
    group_reduce_on_neighbors: Call a function per vertex with its (edge, neighbor) pairs.
    partition: Split a list into contiguous chunks for the worker pool.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from functools import reduce
from typing import Any, Callable, Iterable, Mapping, Sequence, TypeVar

from .graph.protocol import NeighborGraph
from .graph.types import Direction, Edge, Vertex

logger = logging.getLogger(__name__)

V = TypeVar("V")
R = TypeVar("R")
T = TypeVar("T")

NeighborPairs = Sequence[tuple[Edge, Vertex]]
NeighborsFunction = Callable[[Vertex, NeighborPairs], Iterable[R]]


def partition(items: Sequence[T], parts: int) -> list[list[T]]:
    """Split *items* into at most *parts* contiguous, near-equal chunks.

    Empty chunks are dropped, so an empty input yields an empty list.
    """
    if parts < 1:
        raise ValueError(f"parts must be >= 1, got {parts}")
    size, extra = divmod(len(items), parts)
    chunks: list[list[T]] = []
    start = 0
    for idx in range(parts):
        end = start + size + (1 if idx < extra else 0)
        if end > start:
            chunks.append(list(items[start:end]))
        start = end
    return chunks


def _run_partitioned(
    vertex_ids: list[str],
    work: Callable[[list[str]], T],
    parallelism: int,
) -> list[T]:
    """Apply *work* to each partition of *vertex_ids*, preserving order."""
    chunks = partition(vertex_ids, parallelism)
    if len(chunks) <= 1:
        return [work(chunk) for chunk in chunks]
    with ThreadPoolExecutor(max_workers=len(chunks)) as pool:
        # map() re-raises the first worker exception in submission order.
        return list(pool.map(work, chunks))


def reduce_on_neighbors(
    graph: NeighborGraph,
    combine: Callable[[V, V], V],
    direction: Direction = Direction.ALL,
    include_self: bool = True,
    parallelism: int = 1,
) -> dict[str, V]:
    """Fold *combine* over the values of each vertex's neighbors.

    *combine* must be associative and commutative: neighbor order within
    a vertex is unspecified and partitions are reduced concurrently. It
    must return a new value rather than mutate either argument.

    Args:
        graph: Graph to aggregate over.
        combine: Binary merge of two vertex values.
        direction: Which incident edges define a neighbor.
        include_self: Seed each fold with the vertex's own value. Vertices
            without neighbors then keep their own value; otherwise they are
            left out of the result.
        parallelism: Number of worker partitions.

    Returns:
        Vertex ID -> aggregated value.
    """

    def reduce_chunk(chunk: list[str]) -> dict[str, V]:
        out: dict[str, V] = {}
        for vid in chunk:
            values = [neighbor.value for _, neighbor in graph.adjacency(vid, direction)]
            if include_self:
                out[vid] = reduce(combine, values, graph.get_vertex(vid).value)
            elif values:
                out[vid] = reduce(combine, values)
        return out

    merged: dict[str, V] = {}
    for part in _run_partitioned(graph.vertex_ids(), reduce_chunk, parallelism):
        merged.update(part)
    logger.debug(
        "reduce_on_neighbors: %d values over %d vertices (direction=%s)",
        len(merged), graph.num_vertices, direction.value,
    )
    return merged


def join_with_vertices(
    graph: NeighborGraph,
    updates: Mapping[str, V],
    merge: Callable[[Any, V], Any],
) -> NeighborGraph:
    """Return a graph whose vertex values are merged with *updates*.

    For each vertex ID in *updates* the new value is
    ``merge(old_value, update)``. Vertices absent from *updates* keep their
    value.

    Raises:
        UnknownVertexError: If *updates* names a vertex not in the graph.
    """
    merged = {
        vid: merge(graph.get_vertex(vid).value, new_value)
        for vid, new_value in updates.items()
    }
    logger.debug("join_with_vertices: %d of %d vertices updated", len(merged), graph.num_vertices)
    return graph.with_values(merged)


def group_reduce_on_neighbors(
    graph: NeighborGraph,
    fn: NeighborsFunction[R],
    direction: Direction = Direction.ALL,
    parallelism: int = 1,
) -> list[R]:
    """Invoke *fn* once per vertex with its incident (edge, neighbor) pairs.

    Vertices with no incident edges in *direction* are skipped and *fn* is
    not called for them. Every call receives its own list of pairs; the
    records it yields are concatenated into the result.

    Args:
        graph: Graph to iterate.
        fn: ``fn(vertex, pairs)`` returning an iterable of records.
        direction: Which incident edges to hand to *fn*.
        parallelism: Number of worker partitions.

    Returns:
        All emitted records, grouped by vertex in construction order.
    """

    def run_chunk(chunk: list[str]) -> list[R]:
        out: list[R] = []
        for vid in chunk:
            pairs = graph.adjacency(vid, direction)
            if not pairs:
                continue
            out.extend(fn(graph.get_vertex(vid), pairs))
        return out

    records: list[R] = []
    for part in _run_partitioned(graph.vertex_ids(), run_chunk, parallelism):
        records.extend(part)
    logger.debug(
        "group_reduce_on_neighbors: %d records from %d vertices (direction=%s)",
        len(records), graph.num_vertices, direction.value,
    )
    return records


__all__ = [
    "reduce_on_neighbors",
    "join_with_vertices",
    "group_reduce_on_neighbors",
    "partition",
]
