"""File-discovery adapter collecting project source files."""

from __future__ import annotations

import glob
import logging
import os
from fnmatch import fnmatch
from pathlib import Path

from doc_structure.application.options import FileSelectionOptions

logger = logging.getLogger(__name__)


def _is_hidden(name: str) -> bool:
    return name.startswith(".") and name not in (".", "..")


def _matches_any(path: Path, base: Path, patterns: tuple[str, ...]) -> bool:
    """Check a path against ignore globs (``*`` and ``?`` wildcards)."""
    if not patterns:
        return False
    candidates = {path.as_posix(), path.name}
    if path.is_relative_to(base):
        candidates.add(path.relative_to(base).as_posix())
    return any(fnmatch(candidate, pattern) for pattern in patterns for candidate in candidates)


class FileCollection:
    """Collect files from explicit globs and recursively walked directories."""

    def __init__(self, selection: FileSelectionOptions | None = None) -> None:
        self.selection = selection or FileSelectionOptions()
        self._files: list[Path] | None = None

    def configure(self, selection: FileSelectionOptions) -> None:
        """Replace the selection and drop any previously resolved files."""
        self.selection = selection
        self._files = None

    @property
    def extensions(self) -> frozenset[str]:
        """Allowed extensions, lowercased and without leading dot."""
        return frozenset(ext.lower().lstrip(".") for ext in self.selection.extensions)

    def files(self) -> list[Path]:
        """Return the sorted, de-duplicated list of resolved files."""
        if self._files is None:
            found: set[Path] = set()
            for pattern in self.selection.files:
                found.update(self._expand_file_pattern(pattern))
            for directory in self.selection.directories:
                found.update(self._walk_directory(Path(directory).expanduser()))
            self._files = sorted(found)
            logger.debug("discovered %d files", len(self._files))
        return list(self._files)

    def project_root(self) -> Path:
        """Return the deepest directory containing every resolved file."""
        files = self.files()
        if not files:
            return Path.cwd()
        return Path(os.path.commonpath([str(path.parent) for path in files]))

    def _expand_file_pattern(self, pattern: str) -> list[Path]:
        matches = glob.glob(os.path.expanduser(pattern))
        result = []
        for match in matches:
            path = Path(match)
            if not path.is_file():
                continue
            if _matches_any(path, path.parent, self.selection.ignore_patterns):
                continue
            result.append(path.resolve())
        return result

    def _walk_directory(self, root: Path) -> list[Path]:
        if not root.is_dir():
            logger.debug("skipping missing directory %s", root)
            return []
        selection = self.selection
        allowed = self.extensions
        result: list[Path] = []
        for current, dirnames, filenames in os.walk(root, followlinks=selection.follow_symlinks):
            current_path = Path(current)
            dirnames[:] = sorted(
                name
                for name in dirnames
                if (selection.include_hidden or not _is_hidden(name))
                and not _matches_any(current_path / name, root, selection.ignore_patterns)
            )
            for name in filenames:
                path = current_path / name
                if not selection.include_hidden and _is_hidden(name):
                    continue
                if not selection.follow_symlinks and path.is_symlink():
                    continue
                if path.suffix.lower().lstrip(".") not in allowed:
                    continue
                if _matches_any(path, root, selection.ignore_patterns):
                    continue
                result.append(path.resolve())
        return result
