"""InMemoryGraph -- dict-backed implementation of the NeighborGraph protocol.

Public API:
    InMemoryGraph: Immutable graph with per-vertex edge indexes.
    collect_vertex_ids: Deduplicate endpoint IDs in first-seen order.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping

from ..exceptions import UnknownVertexError
from .types import Direction, Edge, Vertex


def collect_vertex_ids(
    edges: Iterable[Edge],
    vertex_ids: Iterable[str] | None = None,
) -> list[str]:
    """Return every distinct vertex ID, endpoints first, in first-seen order.

    Explicit *vertex_ids* not touched by any edge are appended, which is
    how isolated vertices enter a graph.
    """
    seen: dict[str, None] = {}
    for edge in edges:
        seen.setdefault(edge.source_id, None)
        seen.setdefault(edge.target_id, None)
    for vid in vertex_ids or ():
        seen.setdefault(vid, None)
    return list(seen)


class InMemoryGraph:
    """Immutable graph held in plain dicts and lists.

    Edges are stored once in input order; two index maps (vertex ID ->
    edge positions) serve outgoing and incoming adjacency. Derived graphs
    from ``with_values`` share the edge list and indexes and carry their
    own value mapping, so no state is ever mutated after construction.

    Args:
        edges: Edge records. Every endpoint must appear in *values*.
        values: Vertex ID -> vertex value, in construction order.
    """

    def __init__(self, edges: Iterable[Edge], values: Mapping[str, Any]) -> None:
        self._values: dict[str, Any] = dict(values)
        self._edges: list[Edge] = list(edges)
        self._out_index: dict[str, list[int]] = {}
        self._in_index: dict[str, list[int]] = {}
        for pos, edge in enumerate(self._edges):
            if edge.source_id not in self._values:
                raise UnknownVertexError(edge.source_id)
            if edge.target_id not in self._values:
                raise UnknownVertexError(edge.target_id)
            self._out_index.setdefault(edge.source_id, []).append(pos)
            self._in_index.setdefault(edge.target_id, []).append(pos)

    @classmethod
    def from_edges(
        cls,
        edges: Iterable[Edge],
        init_value: Callable[[str], Any],
        vertex_ids: Iterable[str] | None = None,
    ) -> "InMemoryGraph":
        """Build a graph whose vertices are derived from the edge endpoints.

        Args:
            edges: Edge records.
            init_value: Maps each vertex ID to its initial value.
            vertex_ids: Extra vertex IDs to include even without edges.
        """
        edge_list = list(edges)
        ids = collect_vertex_ids(edge_list, vertex_ids)
        return cls(edge_list, {vid: init_value(vid) for vid in ids})

    # ── size ──────────────────────────────────────────────────

    @property
    def num_vertices(self) -> int:
        return len(self._values)

    @property
    def num_edges(self) -> int:
        return len(self._edges)

    # ── vertex access ─────────────────────────────────────────

    def vertex_ids(self) -> list[str]:
        return list(self._values)

    def get_vertex(self, vertex_id: str) -> Vertex:
        try:
            return Vertex(vertex_id=vertex_id, value=self._values[vertex_id])
        except KeyError:
            raise UnknownVertexError(vertex_id) from None

    # ── edge access ───────────────────────────────────────────

    def edges(self) -> list[Edge]:
        return list(self._edges)

    def adjacency(
        self,
        vertex_id: str,
        direction: Direction = Direction.ALL,
    ) -> list[tuple[Edge, Vertex]]:
        if vertex_id not in self._values:
            raise UnknownVertexError(vertex_id)
        results: list[tuple[Edge, Vertex]] = []
        if direction in (Direction.OUT, Direction.ALL):
            for pos in self._out_index.get(vertex_id, ()):
                edge = self._edges[pos]
                results.append((edge, self.get_vertex(edge.target_id)))
        if direction in (Direction.IN, Direction.ALL):
            for pos in self._in_index.get(vertex_id, ()):
                edge = self._edges[pos]
                results.append((edge, self.get_vertex(edge.source_id)))
        return results

    # ── derivation ────────────────────────────────────────────

    def with_values(self, values: Mapping[str, Any]) -> "InMemoryGraph":
        for vid in values:
            if vid not in self._values:
                raise UnknownVertexError(vid)
        derived = object.__new__(InMemoryGraph)
        derived._values = {**self._values, **values}
        derived._edges = self._edges
        derived._out_index = self._out_index
        derived._in_index = self._in_index
        return derived

    # ── lifecycle ─────────────────────────────────────────────

    def close(self) -> None:
        """Nothing to release; present for protocol compliance."""

    def __repr__(self) -> str:
        return f"InMemoryGraph(vertices={self.num_vertices}, edges={self.num_edges})"


__all__ = ["InMemoryGraph", "collect_vertex_ids"]
