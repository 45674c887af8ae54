"""Typed option objects shared across parse use-cases."""

from __future__ import annotations

from dataclasses import dataclass, field

from doc_structure.application.diagnostics import ReportingMode, Verbosity

DEFAULT_EXTENSIONS = ("php", "php3", "phtml")
DEFAULT_MARKERS = ("TODO", "FIXME")
DEFAULT_PACKAGE_NAME = "Default"
DEFAULT_TARGET = "output"


@dataclass(frozen=True)
class FileSelectionOptions:
    """Which files the discovery collaborator collects."""

    files: tuple[str, ...] = ()
    directories: tuple[str, ...] = ()
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    ignore_patterns: tuple[str, ...] = ()
    include_hidden: bool = False
    follow_symlinks: bool = True


@dataclass(frozen=True)
class ParserOptions:
    """Settings forwarded to the parsing collaborator."""

    title: str = ""
    force: bool = False
    markers: tuple[str, ...] = DEFAULT_MARKERS
    ignored_tags: tuple[str, ...] = ()
    validate: bool = False
    visibility: tuple[str, ...] = ()
    default_package_name: str = DEFAULT_PACKAGE_NAME
    include_source: bool = False


@dataclass(frozen=True)
class ReportingOptions:
    """How progress and diagnostics reach the terminal."""

    progressbar: bool = False
    verbosity: Verbosity = Verbosity.NORMAL

    @property
    def mode(self) -> ReportingMode:
        """Reporting mode selected for the run."""
        return ReportingMode.PROGRESS if self.progressbar else ReportingMode.VERBOSE


@dataclass(frozen=True)
class ParseOptions:
    """Complete option tree consumed by the build orchestrator."""

    target: str = DEFAULT_TARGET
    selection: FileSelectionOptions = field(default_factory=FileSelectionOptions)
    parser: ParserOptions = field(default_factory=ParserOptions)
    reporting: ReportingOptions = field(default_factory=ReportingOptions)

