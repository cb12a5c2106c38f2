"""Tab-separated edge input and recommendation output.

Input has one edge per line, ``source<TAB>target[<TAB>weight]``. Only the
two IDs are used; the weight is carried on the edge as an opaque value.
Output has one recommendation per line, ``source<TAB>candidate``, with no
header row.

Public API:
    parse_edge_line: Parse one input record into an Edge.
    read_edges: Read every edge from a file, failing on the first bad line.
    write_recommendations: Atomically write recommendation rows to a file.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable

from .exceptions import MalformedRecordError
from .graph.types import Edge
from .recommend import Recommendation

logger = logging.getLogger(__name__)

FIELD_DELIMITER = "\t"


def parse_edge_line(line: str, line_number: int | None = None) -> Edge:
    """Parse a ``source<TAB>target[<TAB>weight]`` record.

    Raises:
        MalformedRecordError: On a field count other than 2 or 3, or an
            empty vertex ID.
    """
    record = line.rstrip("\r\n")
    fields = record.split(FIELD_DELIMITER)
    if len(fields) not in (2, 3):
        raise MalformedRecordError(
            f"expected 2 or 3 tab-separated fields, got {len(fields)}",
            line_number=line_number,
            line=record,
        )
    source_id, target_id = fields[0], fields[1]
    if not source_id.strip() or not target_id.strip():
        raise MalformedRecordError("empty vertex ID", line_number=line_number, line=record)
    weight = fields[2] if len(fields) == 3 else None
    return Edge(source_id=source_id, target_id=target_id, value=weight)


def read_edges(path: Path | str) -> list[Edge]:
    """Read all edges from *path*, skipping blank lines.

    Raises:
        MalformedRecordError: On the first malformed record, including
            bytes that are not valid UTF-8; nothing is returned.
    """
    edges: list[Edge] = []
    with open(path, "rb") as fh:
        for line_number, raw in enumerate(fh, start=1):
            try:
                line = raw.decode("utf-8")
            except UnicodeDecodeError as e:
                raise MalformedRecordError(
                    f"invalid UTF-8: {e.reason}",
                    line_number=line_number,
                    line=raw.decode("utf-8", errors="replace").rstrip("\r\n"),
                ) from e
            if not line.strip():
                continue
            edges.append(parse_edge_line(line, line_number))
    logger.debug("Read %d edges from %s", len(edges), path)
    return edges


def write_recommendations(path: Path | str, records: Iterable[Recommendation]) -> int:
    """Write ``source<TAB>candidate`` rows to *path*.

    Rows go to a temporary file next to *path* which then replaces it, so
    a failure part-way never leaves partial output behind.

    Returns:
        Number of rows written.
    """
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", dir=target.parent)
    count = 0
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as fh:
            for record in records:
                fh.write(FIELD_DELIMITER.join(record.as_row()) + "\n")
                count += 1
        os.replace(tmp_name, target)
    except Exception:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    logger.debug("Wrote %d recommendations to %s", count, target)
    return count


__all__ = ["parse_edge_line", "read_edges", "write_recommendations", "FIELD_DELIMITER"]
