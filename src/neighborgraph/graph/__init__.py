"""Immutable graph model with interchangeable backends.

Public API:
    Direction: Adjacency traversal direction.
    Vertex: Immutable vertex with a replaceable value.
    Edge: Immutable edge record.
    NeighborGraph: Protocol all backends implement.
    InMemoryGraph: Dict-backed implementation.
    KuzuGraph: Kuzu-backed implementation.
"""

from __future__ import annotations

from .kuzu_graph import KuzuGraph
from .memory_graph import InMemoryGraph, collect_vertex_ids
from .protocol import NeighborGraph
from .types import Direction, Edge, Vertex

__all__ = [
    "Direction",
    "Vertex",
    "Edge",
    "NeighborGraph",
    "InMemoryGraph",
    "KuzuGraph",
    "collect_vertex_ids",
]
