"""Application-layer result objects."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ResolvedTarget:
    """Validated destination of the structure document."""

    absolute_path: Path
    containing_dir: Path


@dataclass(frozen=True)
class ParseResult:
    """Structured parse outcome."""

    target: ResolvedTarget
    file_count: int
    bytes_written: int
    exit_code: int = 0
