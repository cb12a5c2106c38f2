"""Pipeline configuration and its command-line front end.

Public API:
    PipelineConfig: Validated settings for one pipeline run.
    build_parser: The argparse parser behind ``PipelineConfig.from_args``.
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from .exceptions import ConfigurationError
from .recommend import DEFAULT_THRESHOLD, validate_threshold

BACKENDS = ("memory", "kuzu")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class _RaisingArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises ConfigurationError instead of exiting."""

    def error(self, message: str) -> None:  # type: ignore[override]
        raise ConfigurationError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _RaisingArgumentParser(
        prog="people-you-might-know",
        description=(
            "Recommend friends-of-friends reached by more than THRESHOLD "
            "distinct two-hop paths."
        ),
    )
    parser.add_argument("--input", required=True, help="Tab-separated edge list")
    parser.add_argument("--output", required=True, help="Where to write recommendations")
    parser.add_argument(
        "--threshold",
        type=int,
        default=DEFAULT_THRESHOLD,
        help=f"Minimum (exclusive) two-hop path count (default: {DEFAULT_THRESHOLD})",
    )
    parser.add_argument("--parallelism", type=int, default=1, help="Worker threads per stage")
    parser.add_argument("--backend", choices=BACKENDS, default="memory")
    parser.add_argument("--kuzu-path", default=None, help="Kuzu database path (kuzu backend)")
    parser.add_argument("--log-level", choices=LOG_LEVELS, default="INFO")
    return parser


@dataclass
class PipelineConfig:
    """Settings for one run of the recommendation pipeline.

    Attributes:
        input_path: Edge list to read.
        output_path: File to write recommendations to.
        threshold: Minimum (exclusive) two-hop path count.
        parallelism: Worker partitions per engine stage.
        backend: Graph backend, "memory" or "kuzu".
        kuzu_path: Database path for the kuzu backend; a temporary
            directory is used when None.
        log_level: Root logging level used by the console entry point.
    """

    input_path: Path | str | None = None
    output_path: Path | str | None = None
    threshold: int = DEFAULT_THRESHOLD
    parallelism: int = 1
    backend: str = "memory"
    kuzu_path: Path | str | None = None
    log_level: str = "INFO"

    def validate(self) -> "PipelineConfig":
        """Check every setting, raising ConfigurationError on the first problem."""
        if not self.input_path:
            raise ConfigurationError("input path is required")
        if not self.output_path:
            raise ConfigurationError("output path is required")
        validate_threshold(self.threshold)
        if isinstance(self.parallelism, bool) or not isinstance(self.parallelism, int):
            raise ConfigurationError(f"parallelism must be an integer, got {self.parallelism!r}")
        if self.parallelism < 1:
            raise ConfigurationError(f"parallelism must be >= 1, got {self.parallelism}")
        if self.backend not in BACKENDS:
            raise ConfigurationError(
                f"Unknown backend: {self.backend!r}. Choose from: {', '.join(BACKENDS)}"
            )
        if self.log_level.upper() not in LOG_LEVELS:
            raise ConfigurationError(f"Unknown log level: {self.log_level!r}")
        return self

    @classmethod
    def from_args(cls, argv: Sequence[str] | None = None) -> "PipelineConfig":
        """Parse command-line arguments into a validated config.

        Raises:
            ConfigurationError: On missing options or unparseable values.
        """
        args = build_parser().parse_args(argv)
        return cls(
            input_path=Path(args.input),
            output_path=Path(args.output),
            threshold=args.threshold,
            parallelism=args.parallelism,
            backend=args.backend,
            kuzu_path=args.kuzu_path,
            log_level=args.log_level,
        ).validate()


__all__ = ["PipelineConfig", "build_parser", "BACKENDS"]
