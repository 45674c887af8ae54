"""Application-layer use-cases and option objects."""

from __future__ import annotations

from doc_structure.application.diagnostics import (
    DiagnosticEvent,
    LogStyle,
    ReportingMode,
    Verbosity,
    style_for_priority,
)
from doc_structure.application.options import (
    FileSelectionOptions,
    ParseOptions,
    ParserOptions,
    ReportingOptions,
)
from doc_structure.application.ports import FileDiscovery, ParseListener, StructureParser
from doc_structure.application.results import ParseResult, ResolvedTarget
from doc_structure.application.target import TargetResolver, resolve_target


def parse_project(
    *,
    options: ParseOptions,
    discovery: FileDiscovery | None = None,
    parser: StructureParser | None = None,
) -> ParseResult:
    """Run the parse use-case via lazy use-case import."""
    from doc_structure.application.use_cases import parse_project as _impl

    return _impl(options=options, discovery=discovery, parser=parser)


__all__ = [
    "DiagnosticEvent",
    "FileDiscovery",
    "FileSelectionOptions",
    "LogStyle",
    "ParseListener",
    "ParseOptions",
    "ParseResult",
    "ParserOptions",
    "ReportingMode",
    "ReportingOptions",
    "ResolvedTarget",
    "StructureParser",
    "TargetResolver",
    "Verbosity",
    "parse_project",
    "resolve_target",
    "style_for_priority",
]
