"""Graph data structures shared by every backend.

Public API:
    Direction: Adjacency traversal direction enum.
    Vertex: Immutable vertex with an ID and a replaceable value.
    Edge: Immutable edge record between two vertex IDs.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Direction(Enum):
    """Which incident edges an adjacency query follows."""

    OUT = "out"
    IN = "in"
    ALL = "all"


@dataclass(frozen=True)
class Vertex:
    """An immutable vertex.

    Attributes:
        vertex_id: Unique identifier for the vertex.
        value: Payload attached to the vertex. Replaced as a whole via
            ``with_values``, never mutated in place.
    """

    vertex_id: str
    value: Any = None


@dataclass(frozen=True)
class Edge:
    """An immutable edge record.

    Edges keep the direction they were read with; undirected traversal is
    a property of the query (``Direction.ALL``), not of the edge.

    Attributes:
        source_id: Vertex ID of the source endpoint.
        target_id: Vertex ID of the target endpoint.
        value: Opaque edge payload (the weight column), unused by the engine.
    """

    source_id: str
    target_id: str
    value: Any = None


__all__ = ["Direction", "Vertex", "Edge"]
