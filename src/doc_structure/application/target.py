"""Resolution of the location where the structure document is written."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from doc_structure.application.results import ResolvedTarget
from doc_structure.errors import InvalidTargetError

logger = logging.getLogger(__name__)

DOCUMENT_FILENAME = "structure.xml"
DOCUMENT_EXTENSION = ".xml"
DIRECTORY_MODE = 0o755


class TargetResolver:
    """Resolve a requested output location into a writable file path.

    Parameters
    ----------
    filename : str, default="structure.xml"
        Document name used when the request denotes a directory.
    extension : str, default=".xml"
        Suffix marking a request as a full file path.
    """

    def __init__(
        self,
        filename: str = DOCUMENT_FILENAME,
        extension: str = DOCUMENT_EXTENSION,
    ) -> None:
        self.filename = filename
        self.extension = extension

    def resolve(self, requested: str) -> ResolvedTarget:
        """Return the absolute document path for ``requested``.

        Parameters
        ----------
        requested : str
            Directory or ``.xml`` file path given by the operator.

        Returns
        -------
        ResolvedTarget
            Canonical document path and its containing directory.

        Raises
        ------
        InvalidTargetError
            If the input is empty or root, cannot be created, is not a
            folder, or its containing directory is not writable.
        """
        target = requested.strip()
        if target in ("", os.sep):
            raise InvalidTargetError(
                f"Either an empty path or root was given: {target}"
            )

        if target.endswith(self.extension):
            containing_dir = Path(os.path.realpath(os.path.dirname(target) or "."))
            absolute_path = containing_dir / os.path.basename(target)
        else:
            containing_dir = self._ensure_directory(target)
            absolute_path = containing_dir / self.filename

        if not os.access(containing_dir, os.W_OK):
            raise InvalidTargetError(
                f'The given path "{absolute_path}" either does not exist or is '
                "not writable."
            )
        return ResolvedTarget(absolute_path=absolute_path, containing_dir=containing_dir)

    def _ensure_directory(self, target: str) -> Path:
        if not os.path.lexists(target):
            logger.debug("creating target directory %s", target)
            try:
                os.makedirs(target, mode=DIRECTORY_MODE, exist_ok=True)
            except OSError as exc:
                raise InvalidTargetError(
                    f'The given location "{target}" could not be created: {exc}'
                ) from exc

        if not os.path.isdir(target):
            raise InvalidTargetError(f'The given location "{target}" is not a folder')
        return Path(os.path.realpath(target))


def resolve_target(requested: str) -> ResolvedTarget:
    """Resolve ``requested`` with the default document name."""
    return TargetResolver().resolve(requested)
