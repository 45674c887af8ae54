"""Terminal rendering of parse diagnostics and progress."""

from __future__ import annotations

import sys
from contextlib import ExitStack
from typing import Any, TextIO

import typer

from doc_structure.application.diagnostics import (
    LOG_INDENT,
    DiagnosticEvent,
    LogStyle,
    ReportingMode,
    Verbosity,
    should_render,
    style_for_priority,
)
from doc_structure.application.ports import ParseListener

PROGRESS_LABEL = "Parsing files"
STYLE_COLORS = {
    LogStyle.ERROR: typer.colors.RED,
    LogStyle.WARNING: typer.colors.YELLOW,
}


class _LogListener:
    """Listener that renders log events and ignores progress."""

    def __init__(self, bridge: DiagnosticsBridge) -> None:
        self._bridge = bridge

    def on_log(self, event: DiagnosticEvent) -> None:
        self._bridge.on_log_event(event)

    def on_progress(self) -> None:
        return None


class _ProgressListener:
    """Listener that advances the progress bar and drops log events."""

    def __init__(self, bridge: DiagnosticsBridge) -> None:
        self._bridge = bridge

    def on_log(self, event: DiagnosticEvent) -> None:
        del event

    def on_progress(self) -> None:
        self._bridge.on_processed_event()


class DiagnosticsBridge:
    """Own the output sink for one run and render events into it.

    The reporting mode is chosen at construction and decides which of log
    rendering or progress rendering the bridge's listener performs.

    Parameters
    ----------
    mode : ReportingMode
        Progress display or verbose log lines.
    verbosity : Verbosity
        Threshold selector for log events.
    sink : TextIO | None, default=None
        Output stream; ``sys.stdout`` when omitted.
    color : bool | None, default=None
        Force ANSI styling on or off; ``None`` lets typer decide per stream.
    """

    def __init__(
        self,
        mode: ReportingMode,
        verbosity: Verbosity = Verbosity.NORMAL,
        sink: TextIO | None = None,
        color: bool | None = None,
    ) -> None:
        self.mode = mode
        self.verbosity = verbosity
        self.sink = sink if sink is not None else sys.stdout
        self.color = color
        self.processed = 0
        self._stack = ExitStack()
        self._bar: Any = None

    @classmethod
    def configure(
        cls,
        mode: ReportingMode,
        verbosity: Verbosity = Verbosity.NORMAL,
        sink: TextIO | None = None,
        color: bool | None = None,
    ) -> DiagnosticsBridge:
        """Build a bridge bound to ``sink``."""
        return cls(mode=mode, verbosity=verbosity, sink=sink, color=color)

    def listener(self) -> ParseListener:
        """Return the listener injected into the parsing collaborator."""
        if self.mode is ReportingMode.PROGRESS:
            return _ProgressListener(self)
        return _LogListener(self)

    def status(self, text: str, nl: bool = True) -> None:
        """Write an orchestrator status message."""
        typer.echo(text, file=self.sink, nl=nl, color=self.color)

    def on_log_event(self, event: DiagnosticEvent) -> None:
        """Render ``event`` when it passes the verbosity threshold.

        Progress bridges never render log lines.
        """
        if self.mode is not ReportingMode.VERBOSE:
            return
        if not should_render(event, self.verbosity):
            return
        message = event.message
        color = STYLE_COLORS.get(style_for_priority(event.priority))
        if color is not None:
            message = typer.style(message, fg=color)
        typer.echo(LOG_INDENT + message, file=self.sink, color=self.color)

    def on_processed_event(self) -> None:
        """Count one processed file and advance the progress bar in place.

        Verbose bridges do not count progress.
        """
        if self.mode is not ReportingMode.PROGRESS:
            return
        self.processed += 1
        if self._bar is not None:
            self._bar.update(1)

    def start(self, total_units: int) -> None:
        """Open the progress bar for ``total_units`` files."""
        if self.mode is not ReportingMode.PROGRESS or self._bar is not None:
            return
        self._bar = self._stack.enter_context(
            typer.progressbar(
                length=total_units,
                label=PROGRESS_LABEL,
                file=self.sink,
                color=self.color,
            )
        )

    def finish(self) -> None:
        """Close the progress bar."""
        if self.mode is not ReportingMode.PROGRESS:
            return
        self._stack.close()
        self._bar = None
