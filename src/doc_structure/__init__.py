"""Top-level API for building project structure documents."""

from __future__ import annotations

from doc_structure.errors import (
    CollaboratorError,
    DocumentWriteError,
    InvalidTargetError,
    NoFilesFoundError,
    OptionsError,
    StructureError,
)

__version__ = "0.1.0"


def parse_project_to_xml(target: str = "output", **kwargs: object) -> str:
    """Parse a project and write its structure document.

    Parameters
    ----------
    target : str, default="output"
        Directory receiving ``structure.xml`` or a full ``.xml`` file path.
    **kwargs : object
        Forwarded to :func:`doc_structure.api.parse_project_to_xml`.

    Returns
    -------
    str
        Absolute path of the written document.
    """
    from .api import parse_project_to_xml as _impl

    return str(_impl(target, **kwargs))


__all__ = [
    "CollaboratorError",
    "DocumentWriteError",
    "InvalidTargetError",
    "NoFilesFoundError",
    "OptionsError",
    "StructureError",
    "parse_project_to_xml",
    "__version__",
]
