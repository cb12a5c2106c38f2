"""KuzuGraph -- Kuzu-backed implementation of the NeighborGraph protocol.

The graph structure (vertices and edge relation) lives in an embedded
Kuzu database and adjacency is answered with parameterised Cypher.
Vertex values stay in a Python mapping so derived graphs can share the
database.

Public API:
    KuzuGraph: Concrete NeighborGraph backed by Kuzu.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any, Callable, Iterable, Mapping

import kuzu

from ..exceptions import NeighborGraphError, UnknownVertexError
from .memory_graph import collect_vertex_ids
from .types import Direction, Edge, Vertex

logger = logging.getLogger(__name__)

_VERTEX_TABLE = "Vertex"
_LINK_TABLE = "Link"

_OUT_QUERY = (
    f"MATCH (a:{_VERTEX_TABLE})-[r:{_LINK_TABLE}]->(b:{_VERTEX_TABLE}) "
    f"WHERE a.vertex_id = $vid "
    f"RETURN r.edge_pos, b.vertex_id ORDER BY r.edge_pos"
)
_IN_QUERY = (
    f"MATCH (a:{_VERTEX_TABLE})<-[r:{_LINK_TABLE}]-(b:{_VERTEX_TABLE}) "
    f"WHERE a.vertex_id = $vid "
    f"RETURN r.edge_pos, b.vertex_id ORDER BY r.edge_pos"
)


class _KuzuSession:
    """Database, connection and lock shared by a graph and its derivations.

    Once closed, every further query raises NeighborGraphError.
    """

    def __init__(self, db: kuzu.Database, conn: kuzu.Connection, db_path: Path | str) -> None:
        self.db = db
        self.conn = conn
        self.db_path = db_path
        self.closed = False
        self._lock = threading.Lock()

    def execute(self, cypher: str, params: dict[str, Any] | None = None) -> list[list[Any]]:
        """Run *cypher* and return all result rows."""
        with self._lock:
            if self.closed:
                raise NeighborGraphError(f"Kuzu graph at {self.db_path} is closed")
            if params:
                result = self.conn.execute(cypher, params)
            else:
                result = self.conn.execute(cypher)
            rows: list[list[Any]] = []
            while result.has_next():
                rows.append(result.get_next())
            return rows

    def close(self) -> None:
        with self._lock:
            if self.closed:
                return
            self.closed = True
            self.conn.close()
            self.db.close()


class KuzuGraph:
    """Kuzu graph database implementation of the NeighborGraph protocol.

    Use ``from_edges`` to build one; the constructor only wires up an
    already populated database. Each edge is stored as a ``Link`` row
    carrying its input position, which maps query results back to the
    original ``Edge`` records (and their values).

    Graphs derived with ``with_values`` share the owner's database. After
    the owning graph is closed, adjacency queries on any of them raise
    NeighborGraphError.

    Args:
        session: Open session on a populated database.
        edges: The edge records, in the positions stored in the database.
        values: Vertex ID -> vertex value, in construction order.
        owner: Whether ``close`` releases the session.
    """

    # ── construction / lifecycle ──────────────────────────────

    def __init__(
        self,
        session: _KuzuSession,
        edges: list[Edge],
        values: Mapping[str, Any],
        owner: bool = True,
    ) -> None:
        self._session = session
        self._edges = edges
        self._values: dict[str, Any] = dict(values)
        self._owner = owner

    @classmethod
    def from_edges(
        cls,
        edges: Iterable[Edge],
        init_value: Callable[[str], Any],
        db_path: Path | str,
        vertex_ids: Iterable[str] | None = None,
    ) -> "KuzuGraph":
        """Load *edges* into the Kuzu database at *db_path*.

        Any graph left at *db_path* by an earlier build, complete or not,
        is dropped first.

        Args:
            edges: Edge records.
            init_value: Maps each vertex ID to its initial value.
            db_path: Filesystem path for the Kuzu database.
            vertex_ids: Extra vertex IDs to include even without edges.
        """
        edge_list = list(edges)
        ids = collect_vertex_ids(edge_list, vertex_ids)

        db = kuzu.Database(str(db_path))
        session = _KuzuSession(db, kuzu.Connection(db), db_path)
        try:
            _reset_schema(session)
            for vid in ids:
                session.execute(f"CREATE (:{_VERTEX_TABLE} {{vertex_id: $vid}})", {"vid": vid})
            for pos, edge in enumerate(edge_list):
                session.execute(
                    f"MATCH (a:{_VERTEX_TABLE}), (b:{_VERTEX_TABLE}) "
                    f"WHERE a.vertex_id = $sid AND b.vertex_id = $tid "
                    f"CREATE (a)-[:{_LINK_TABLE} {{edge_pos: $pos}}]->(b)",
                    {"sid": edge.source_id, "tid": edge.target_id, "pos": pos},
                )
        except Exception:
            session.close()
            raise

        logger.debug(
            "Loaded %d vertices and %d edges into Kuzu at %s",
            len(ids), len(edge_list), db_path,
        )
        return cls(session, edge_list, {vid: init_value(vid) for vid in ids})

    def close(self) -> None:
        """Release Kuzu resources if this graph owns the database."""
        if self._owner:
            self._session.close()

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
            results.extend(self._query_pairs(_OUT_QUERY, vertex_id))
        if direction in (Direction.IN, Direction.ALL):
            results.extend(self._query_pairs(_IN_QUERY, vertex_id))
        return results

    def _query_pairs(self, cypher: str, vertex_id: str) -> list[tuple[Edge, Vertex]]:
        """Run an adjacency query and map rows back to (edge, neighbor)."""
        rows = self._session.execute(cypher, {"vid": vertex_id})
        return [(self._edges[pos], self.get_vertex(nid)) for pos, nid in rows]

    # ── derivation ────────────────────────────────────────────

    def with_values(self, values: Mapping[str, Any]) -> "KuzuGraph":
        for vid in values:
            if vid not in self._values:
                raise UnknownVertexError(vid)
        return KuzuGraph(
            self._session,
            self._edges,
            {**self._values, **values},
            owner=False,
        )

    def __repr__(self) -> str:
        return f"KuzuGraph(vertices={self.num_vertices}, edges={self.num_edges})"


def _reset_schema(session: _KuzuSession) -> None:
    """Drop any existing vertex and link tables, then create them empty."""
    existing = {row[0] for row in session.execute("CALL show_tables() RETURN name")}
    # The rel table references the node table, so it goes first.
    for table in (_LINK_TABLE, _VERTEX_TABLE):
        if table in existing:
            session.execute(f"DROP TABLE {table}")
    session.execute(
        f"CREATE NODE TABLE {_VERTEX_TABLE}"
        f"(vertex_id STRING, PRIMARY KEY(vertex_id))"
    )
    session.execute(
        f"CREATE REL TABLE {_LINK_TABLE}"
        f"(FROM {_VERTEX_TABLE} TO {_VERTEX_TABLE}, edge_pos INT64)"
    )


__all__ = ["KuzuGraph"]
