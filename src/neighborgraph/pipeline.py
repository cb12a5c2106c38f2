"""Pipeline driver: edge file -> graph -> recommendations -> output file.

Public API:
    PipelineResult: Summary of a completed run.
    build_graph: Construct a seeded graph on the configured backend.
    run_pipeline: Execute one full run for a PipelineConfig.
    main: Console entry point (``people-you-might-know``).
"""

from __future__ import annotations

import logging
import tempfile
from contextlib import ExitStack
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from .config import PipelineConfig
from .exceptions import ConfigurationError, NeighborGraphError
from .graph.kuzu_graph import KuzuGraph
from .graph.memory_graph import InMemoryGraph
from .graph.protocol import NeighborGraph
from .graph.types import Edge
from .io import read_edges, write_recommendations
from .recommend import initial_neighbor_set, recommend

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Counts and location of a completed run."""

    num_vertices: int
    num_edges: int
    num_recommendations: int
    output_path: Path


def build_graph(
    edges: list[Edge],
    backend: str = "memory",
    kuzu_path: Path | str | None = None,
) -> NeighborGraph:
    """Build a graph seeded with ``initial_neighbor_set`` on *backend*."""
    if backend == "memory":
        return InMemoryGraph.from_edges(edges, initial_neighbor_set)
    if backend == "kuzu":
        if kuzu_path is None:
            raise ConfigurationError("kuzu backend requires a database path")
        return KuzuGraph.from_edges(edges, initial_neighbor_set, db_path=kuzu_path)
    raise ConfigurationError(f"Unknown backend: {backend!r}")


def run_pipeline(config: PipelineConfig) -> PipelineResult:
    """Run the recommendation pipeline end to end.

    The configuration is validated before any input is read. Output is
    written only after every stage has succeeded.

    Raises:
        ConfigurationError: If the configuration is invalid.
        MalformedRecordError: If the edge file contains a bad record.
    """
    config.validate()
    output_path = Path(config.output_path)

    edges = read_edges(config.input_path)
    logger.info("Read %d edges from %s", len(edges), config.input_path)

    with ExitStack() as stack:
        kuzu_path = config.kuzu_path
        if config.backend == "kuzu" and kuzu_path is None:
            tmp_dir = stack.enter_context(tempfile.TemporaryDirectory(prefix="neighborgraph-"))
            kuzu_path = Path(tmp_dir) / "graph_db"

        graph = build_graph(edges, backend=config.backend, kuzu_path=kuzu_path)
        stack.callback(graph.close)
        logger.info(
            "Built %s graph with %d vertices and %d edges",
            config.backend, graph.num_vertices, graph.num_edges,
        )

        records = recommend(graph, threshold=config.threshold, parallelism=config.parallelism)
        logger.info(
            "Computed %d recommendations (threshold=%d)", len(records), config.threshold
        )
        num_vertices = graph.num_vertices

    records.sort(key=lambda r: (r.source_id, r.candidate_id))
    written = write_recommendations(output_path, records)
    logger.info("Wrote %d recommendations to %s", written, output_path)

    return PipelineResult(
        num_vertices=num_vertices,
        num_edges=len(edges),
        num_recommendations=written,
        output_path=output_path,
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Parse arguments, run the pipeline and map failures to exit codes.

    Returns 0 on success, 2 on configuration errors and 1 on data errors.
    """
    try:
        config = PipelineConfig.from_args(argv)
    except ConfigurationError as e:
        logging.basicConfig(level=logging.INFO)
        logger.error("Invalid configuration: %s", e)
        return 2

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        run_pipeline(config)
    except ConfigurationError as e:
        logger.error("Invalid configuration: %s", e)
        return 2
    except NeighborGraphError as e:
        logger.error("Pipeline failed: %s", e)
        return 1
    except OSError as e:
        logger.error("I/O error: %s", e)
        return 1
    return 0


__all__ = ["PipelineResult", "build_graph", "run_pipeline", "main"]


if __name__ == "__main__":
    raise SystemExit(main())
