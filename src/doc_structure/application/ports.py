"""Application ports for clean architecture boundaries."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from doc_structure.application.diagnostics import DiagnosticEvent
from doc_structure.application.options import FileSelectionOptions, ParserOptions


class ParseListener(Protocol):
    """Capability object handed to the parser for progress and diagnostics."""

    def on_log(self, event: DiagnosticEvent) -> None:
        """Receive a diagnostic event."""

    def on_progress(self) -> None:
        """Receive notice that one more file was processed."""


class FileDiscovery(Protocol):
    """Collect the source files that make up a project."""

    def configure(self, selection: FileSelectionOptions) -> None:
        """Apply extension, ignore, hidden and symlink policies and inputs."""

    def files(self) -> list[Path]:
        """Return the resolved file list."""

    def project_root(self) -> Path:
        """Return the common root of all resolved files."""


class StructureParser(Protocol):
    """Turn discovered files into a serialized structure document."""

    def configure(
        self,
        options: ParserOptions,
        existing_document: Path,
        project_root: Path,
    ) -> None:
        """Apply parser settings before parsing."""

    def parse_files(
        self,
        discovery: FileDiscovery,
        include_source: bool,
        listener: ParseListener,
    ) -> str:
        """Parse every discovered file and return the document content.

        Raises ``NoFilesFoundError`` when there is nothing to parse.
        """


class Reporter(Protocol):
    """Terminal-facing status and progress reporting for one run."""

    def status(self, text: str, nl: bool = True) -> None:
        """Write an orchestrator status message."""

    def listener(self) -> ParseListener:
        """Return the listener wired for the reporter's mode."""

    def start(self, total_units: int) -> None:
        """Begin progress display."""

    def finish(self) -> None:
        """End progress display."""
