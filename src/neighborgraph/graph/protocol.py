"""NeighborGraph protocol -- the read-only interface every backend implements.

Public API:
    NeighborGraph: Runtime-checkable protocol for immutable adjacency graphs.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable

from .types import Direction, Edge, Vertex


@runtime_checkable
class NeighborGraph(Protocol):
    """Common interface for immutable graph backends.

    Every concrete implementation (in-memory, Kuzu) must satisfy this
    protocol so the engine operators can run over any backend without
    changes. Graphs never change after construction; ``with_values``
    returns a new graph.
    """

    # ── size ──────────────────────────────────────────────────

    @property
    def num_vertices(self) -> int:
        """Number of distinct vertices."""
        ...

    @property
    def num_edges(self) -> int:
        """Number of edge records, parallel edges included."""
        ...

    # ── vertex access ─────────────────────────────────────────

    def vertex_ids(self) -> list[str]:
        """All vertex IDs in construction order."""
        ...

    def get_vertex(self, vertex_id: str) -> Vertex:
        """Fetch a vertex by ID.

        Raises:
            UnknownVertexError: If *vertex_id* is not in the graph.
        """
        ...

    # ── edge access ───────────────────────────────────────────

    def edges(self) -> list[Edge]:
        """Edge records in the order they were supplied."""
        ...

    def adjacency(
        self,
        vertex_id: str,
        direction: Direction = Direction.ALL,
    ) -> list[tuple[Edge, Vertex]]:
        """Return (edge, neighbor) pairs incident to *vertex_id*.

        ``Direction.ALL`` yields the outgoing pairs followed by the
        incoming ones, so a self-loop is reported twice.

        Raises:
            UnknownVertexError: If *vertex_id* is not in the graph.
        """
        ...

    # ── derivation ────────────────────────────────────────────

    def with_values(self, values: Mapping[str, Any]) -> "NeighborGraph":
        """Return a graph of the same structure with replaced vertex values.

        Raises:
            UnknownVertexError: If *values* names a vertex not in the graph.
        """
        ...

    # ── lifecycle ─────────────────────────────────────────────

    def close(self) -> None:
        """Release resources held by the graph."""
        ...


__all__ = ["NeighborGraph"]
