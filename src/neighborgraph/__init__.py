"""neighborgraph: neighbor-aggregation graph engine and friend recommendations."""

__version__ = "0.1.0"

from .config import PipelineConfig
from .engine import (
    group_reduce_on_neighbors,
    join_with_vertices,
    reduce_on_neighbors,
)
from .exceptions import (
    ConfigurationError,
    MalformedRecordError,
    NeighborGraphError,
    UnknownVertexError,
)
from .graph import Direction, Edge, InMemoryGraph, KuzuGraph, NeighborGraph, Vertex
from .io import parse_edge_line, read_edges, write_recommendations
from .pipeline import PipelineResult, run_pipeline
from .recommend import (
    DEFAULT_THRESHOLD,
    Recommendation,
    initial_neighbor_set,
    neighbor_sets,
    people_you_might_know,
    recommend,
    union_neighbor_sets,
)

__all__ = [
    # Graph model
    "Direction",
    "Vertex",
    "Edge",
    "NeighborGraph",
    "InMemoryGraph",
    "KuzuGraph",
    # Engine operators
    "reduce_on_neighbors",
    "join_with_vertices",
    "group_reduce_on_neighbors",
    # Recommendations
    "DEFAULT_THRESHOLD",
    "Recommendation",
    "initial_neighbor_set",
    "union_neighbor_sets",
    "people_you_might_know",
    "neighbor_sets",
    "recommend",
    # I/O and pipeline
    "parse_edge_line",
    "read_edges",
    "write_recommendations",
    "PipelineConfig",
    "PipelineResult",
    "run_pipeline",
    # Exceptions
    "NeighborGraphError",
    "MalformedRecordError",
    "ConfigurationError",
    "UnknownVertexError",
]
