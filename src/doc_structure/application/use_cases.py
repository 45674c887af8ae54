"""Application use-cases orchestrating structure builds."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from enum import Enum

from doc_structure.adapters.discovery import FileCollection
from doc_structure.adapters.parser import StructureXmlParser
from doc_structure.application.diagnostics import ReportingMode, Verbosity
from doc_structure.application.options import (
    DEFAULT_EXTENSIONS,
    DEFAULT_MARKERS,
    DEFAULT_PACKAGE_NAME,
    DEFAULT_TARGET,
    FileSelectionOptions,
    ParseOptions,
    ParserOptions,
    ReportingOptions,
)
from doc_structure.application.ports import FileDiscovery, Reporter, StructureParser
from doc_structure.application.results import ParseResult, ResolvedTarget
from doc_structure.application.target import TargetResolver
from doc_structure.errors import (
    CollaboratorError,
    DocumentWriteError,
    NoFilesFoundError,
    StructureError,
)
from doc_structure.infrastructure.terminal import DiagnosticsBridge

logger = logging.getLogger(__name__)

NO_FILES_GUIDANCE = (
    "No parsable files were found, did you specify any using "
    "the -f or -d parameter?"
)

ReporterFactory = Callable[[ReportingMode, Verbosity], Reporter]


class RunState(Enum):
    """Lifecycle of a single orchestrated run."""

    INITIALIZING = "initializing"
    RESOLVING_TARGET = "resolving_target"
    CONFIGURING = "configuring"
    PARSING = "parsing"
    PERSISTING = "persisting"
    DONE = "done"
    FAILED = "failed"


def _default_reporter(mode: ReportingMode, verbosity: Verbosity) -> Reporter:
    return DiagnosticsBridge.configure(mode, verbosity)


class BuildOrchestrator:
    """Sequence target resolution, parsing and persistence for one run.

    Parameters
    ----------
    discovery : FileDiscovery
        File-discovery collaborator.
    parser : StructureParser
        Parsing collaborator.
    resolver : TargetResolver | None, default=None
        Target resolver; the default writes ``structure.xml``.
    reporter_factory : Callable | None, default=None
        Builds the reporter for the selected mode and verbosity.
    """

    def __init__(
        self,
        discovery: FileDiscovery,
        parser: StructureParser,
        resolver: TargetResolver | None = None,
        reporter_factory: ReporterFactory | None = None,
    ) -> None:
        self.discovery = discovery
        self.parser = parser
        self.resolver = resolver or TargetResolver()
        self.reporter_factory = reporter_factory or _default_reporter
        self.state = RunState.INITIALIZING
        self.result: ParseResult | None = None

    def _enter(self, state: RunState) -> None:
        logger.debug("run state %s -> %s", self.state.value, state.value)
        self.state = state

    def run(self, options: ParseOptions) -> int:
        """Execute one parse run and return the process exit code."""
        return self.execute(options).exit_code

    def execute(self, options: ParseOptions) -> ParseResult:
        """Execute one parse run and return its structured outcome.

        Raises
        ------
        InvalidTargetError
            If the target cannot be used.
        NoFilesFoundError
            If no parsable files were found; the message tells the operator
            how to select files.
        CollaboratorError
            If discovery or parsing fails for any other reason.
        DocumentWriteError
            If the document cannot be written to the resolved target.
        """
        self.state = RunState.INITIALIZING
        self.result = None
        mode = options.reporting.mode
        reporter = self.reporter_factory(mode, options.reporting.verbosity)
        listener = reporter.listener()

        reporter.status("Initializing parser and collecting files .. ", nl=False)
        self._enter(RunState.RESOLVING_TARGET)
        try:
            target = self.resolver.resolve(options.target)
        except StructureError:
            self._enter(RunState.FAILED)
            raise

        self._enter(RunState.CONFIGURING)
        try:
            file_count = self._configure(options, target)
        except StructureError:
            self._enter(RunState.FAILED)
            raise

        if mode is ReportingMode.PROGRESS:
            reporter.start(file_count)

        self._enter(RunState.PARSING)
        reporter.status("OK")
        reporter.status("Parsing files")
        try:
            content = self.parser.parse_files(
                self.discovery, options.parser.include_source, listener
            )
        except NoFilesFoundError as exc:
            self._enter(RunState.FAILED)
            raise NoFilesFoundError(NO_FILES_GUIDANCE) from exc
        except Exception as exc:
            self._enter(RunState.FAILED)
            logger.debug("parsing collaborator failed", exc_info=True)
            raise CollaboratorError(str(exc)) from exc
        finally:
            if mode is ReportingMode.PROGRESS:
                reporter.finish()

        self._enter(RunState.PERSISTING)
        reporter.status(
            f'Storing {target.absolute_path.name} in "{target.absolute_path}" .. ',
            nl=False,
        )
        data = content.encode("utf-8")
        try:
            target.absolute_path.write_bytes(data)
        except OSError as exc:
            self._enter(RunState.FAILED)
            raise DocumentWriteError(
                f'Could not write "{target.absolute_path}": {exc.strerror or exc}'
            ) from exc
        reporter.status("OK")

        self._enter(RunState.DONE)
        self.result = ParseResult(
            target=target, file_count=file_count, bytes_written=len(data)
        )
        return self.result

    def _configure(self, options: ParseOptions, target: ResolvedTarget) -> int:
        try:
            self.discovery.configure(options.selection)
            file_count = len(self.discovery.files())
            self.parser.configure(
                options.parser,
                existing_document=target.absolute_path,
                project_root=self.discovery.project_root(),
            )
        except StructureError:
            raise
        except Exception as exc:
            logger.debug("collaborator configuration failed", exc_info=True)
            raise CollaboratorError(str(exc)) from exc
        return file_count


def parse_project(
    *,
    options: ParseOptions,
    discovery: FileDiscovery | None = None,
    parser: StructureParser | None = None,
    resolver: TargetResolver | None = None,
    reporter_factory: ReporterFactory | None = None,
) -> ParseResult:
    """Use-case: build the structure document for a project."""
    orchestrator = BuildOrchestrator(
        discovery=discovery or FileCollection(),
        parser=parser or StructureXmlParser(),
        resolver=resolver,
        reporter_factory=reporter_factory,
    )
    return orchestrator.execute(options)


def build_parse_options(
    *,
    target: str = DEFAULT_TARGET,
    files: Iterable[str] = (),
    directories: Iterable[str] = (),
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    ignore_patterns: Iterable[str] = (),
    include_hidden: bool = False,
    follow_symlinks: bool = True,
    title: str = "",
    force: bool = False,
    markers: Iterable[str] = DEFAULT_MARKERS,
    ignored_tags: Iterable[str] = (),
    validate: bool = False,
    visibility: Iterable[str] = (),
    default_package_name: str = DEFAULT_PACKAGE_NAME,
    include_source: bool = False,
    progressbar: bool = False,
    verbose: bool = False,
) -> ParseOptions:
    """Build typed option object from command/API params."""
    return ParseOptions(
        target=target,
        selection=FileSelectionOptions(
            files=tuple(files),
            directories=tuple(directories),
            extensions=tuple(extensions),
            ignore_patterns=tuple(ignore_patterns),
            include_hidden=include_hidden,
            follow_symlinks=follow_symlinks,
        ),
        parser=ParserOptions(
            title=title,
            force=force,
            markers=tuple(markers),
            ignored_tags=tuple(ignored_tags),
            validate=validate,
            visibility=tuple(visibility),
            default_package_name=default_package_name,
            include_source=include_source,
        ),
        reporting=ReportingOptions(
            progressbar=progressbar,
            verbosity=Verbosity.VERBOSE if verbose else Verbosity.NORMAL,
        ),
    )

