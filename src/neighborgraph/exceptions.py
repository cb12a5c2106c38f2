"""Custom exceptions for neighborgraph."""


class NeighborGraphError(Exception):
    """Base exception for graph construction and computation."""


class MalformedRecordError(NeighborGraphError):
    """Raised when an input edge record cannot be parsed.

    Attributes:
        line_number: 1-based line of the offending record, if known.
        line: The raw record text.
    """

    def __init__(self, message: str, line_number: int | None = None, line: str = "") -> None:
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number
        self.line = line


class ConfigurationError(NeighborGraphError):
    """Raised when required configuration is missing or invalid."""


class UnknownVertexError(NeighborGraphError, KeyError):
    """Raised when an operation references a vertex not in the graph."""

    def __init__(self, vertex_id: str) -> None:
        super().__init__(f"Vertex not found: {vertex_id}")
        self.vertex_id = vertex_id

    def __str__(self) -> str:
        return self.args[0]
