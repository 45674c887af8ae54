"""Diagnostic events, reporting modes and severity rules."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from doc_structure.types import Priority

DEFAULT_PRIORITY = 8
NORMAL_THRESHOLD = 5
VERBOSE_THRESHOLD = 8
WARNING_PRIORITY = 4
LOG_INDENT = "  "


class ReportingMode(Enum):
    """How a run reports to the terminal; fixed for the whole run."""

    VERBOSE = "verbose"
    PROGRESS = "progress"


class Verbosity(Enum):
    """Output verbosity requested by the operator."""

    NORMAL = "normal"
    VERBOSE = "verbose"


class LogStyle(Enum):
    """Rendering style of a log line."""

    ERROR = "error"
    WARNING = "warning"
    PLAIN = "plain"


@dataclass(frozen=True)
class DiagnosticEvent:
    """Severity-tagged message emitted by a collaborator.

    Parameters
    ----------
    message : str
        Text to render.
    priority : int, default=8
        ``0`` is the most severe; events without a priority are treated as
        the least severe level.
    """

    message: str
    priority: Priority = DEFAULT_PRIORITY


def threshold_for(verbosity: Verbosity) -> Priority:
    """Return the highest priority rendered at the given verbosity."""
    if verbosity is Verbosity.VERBOSE:
        return VERBOSE_THRESHOLD
    return NORMAL_THRESHOLD


def style_for_priority(priority: Priority) -> LogStyle:
    """Map an event priority onto its rendering style.

    Parameters
    ----------
    priority : int
        Event priority.

    Returns
    -------
    LogStyle
        ``WARNING`` for priority 4, ``ERROR`` for 0 through 3 and ``PLAIN``
        for everything else.
    """
    if priority == WARNING_PRIORITY:
        return LogStyle.WARNING
    if 0 <= priority < WARNING_PRIORITY:
        return LogStyle.ERROR
    return LogStyle.PLAIN


def should_render(event: DiagnosticEvent, verbosity: Verbosity) -> bool:
    """Return whether an event passes the verbosity threshold."""
    return event.priority <= threshold_for(verbosity)
