"""Error hierarchy for the project parse command."""

from __future__ import annotations


class StructureError(Exception):
    """Base error for structure builds.

    Attributes
    ----------
    exit_code : int
        Process exit code the CLI reports for this failure.
    """

    exit_code = 1


class OptionsError(StructureError):
    """Command options failed validation."""

    exit_code = 2


class InvalidTargetError(StructureError):
    """Target location is empty, root, not a folder or not writable."""


class NoFilesFoundError(StructureError):
    """No parsable files were found by the collaborators."""


class CollaboratorError(StructureError):
    """File discovery or parsing failed for any other reason."""


class DocumentWriteError(StructureError):
    """The structure document could not be written to the target."""
