"""Built-in parser emitting the structure document."""

from __future__ import annotations

import base64
import hashlib
import logging
import re
import xml.etree.ElementTree as ET
import zlib
from pathlib import Path

from doc_structure.application.diagnostics import DiagnosticEvent
from doc_structure.application.options import ParserOptions
from doc_structure.application.ports import FileDiscovery, ParseListener
from doc_structure.errors import NoFilesFoundError

logger = logging.getLogger(__name__)

STRUCTURE_VERSION = "1"
ERROR_PRIORITY = 3
WARNING_PRIORITY = 4
INFO_PRIORITY = 6
DEBUG_PRIORITY = 7
SETTINGS_ATTRIBUTE = "settings"


def _marker_pattern(markers: tuple[str, ...]) -> re.Pattern[str] | None:
    if not markers:
        return None
    alternatives = "|".join(re.escape(marker) for marker in markers)
    return re.compile(rf"(?:#|//|/\*|\*)\s*({alternatives})\b:?\s*(.*?)\s*(?:\*/)?$")


class StructureXmlParser:
    """Scan source files and serialize them into a ``<project>`` document.

    Each file becomes a ``<file>`` element carrying its relative path, an md5
    hash, the package name and any marker comments (``TODO``, ``FIXME``).
    Unchanged files are copied from the previous document unless the build
    is forced.
    """

    def __init__(self) -> None:
        self.options = ParserOptions()
        self.existing_document: Path | None = None
        self.project_root = Path.cwd()

    def configure(
        self,
        options: ParserOptions,
        existing_document: Path,
        project_root: Path,
    ) -> None:
        """Apply parser settings before parsing."""
        self.options = options
        self.existing_document = existing_document
        self.project_root = project_root

    def parse_files(
        self,
        discovery: FileDiscovery,
        include_source: bool,
        listener: ParseListener,
    ) -> str:
        """Parse every discovered file and return the XML document.

        Parameters
        ----------
        discovery : FileDiscovery
            Collaborator providing the files to parse.
        include_source : bool
            Whether to embed compressed source code per file.
        listener : ParseListener
            Receives one ``on_progress`` call per file and diagnostic events.

        Returns
        -------
        str
            Serialized structure document.

        Raises
        ------
        NoFilesFoundError
            If the discovery collaborator resolved no files.
        """
        files = discovery.files()
        if not files:
            raise NoFilesFoundError("No parsable files were found.")

        settings = self._settings_digest(include_source)
        cached = self._load_existing(settings, listener)
        project = ET.Element("project", version=STRUCTURE_VERSION)
        project.set(SETTINGS_ATTRIBUTE, settings)
        if self.options.title:
            project.set("title", self.options.title)
        if self.options.visibility:
            project.set("visibility", ",".join(self.options.visibility))

        for path in files:
            listener.on_progress()
            project.append(self._parse_file(path, include_source, cached, listener))

        ET.indent(project)
        return ET.tostring(project, encoding="unicode", xml_declaration=True) + "\n"

    def _relative(self, path: Path) -> str:
        try:
            return path.relative_to(self.project_root).as_posix()
        except ValueError:
            return path.as_posix()

    def _settings_digest(self, include_source: bool) -> str:
        """Fingerprint the settings that shape each ``<file>`` element."""
        parts = [
            f"source={int(include_source)}",
            f"package={self.options.default_package_name}",
            "markers=" + ",".join(self._active_markers()),
        ]
        return hashlib.md5(";".join(parts).encode("utf-8")).hexdigest()

    def _load_existing(
        self, settings: str, listener: ParseListener
    ) -> dict[str, ET.Element]:
        if self.options.force or self.existing_document is None:
            return {}
        if not self.existing_document.is_file():
            return {}
        try:
            tree = ET.parse(self.existing_document)
        except ET.ParseError as exc:
            listener.on_log(
                DiagnosticEvent(
                    f"Existing structure could not be read, doing a full build: {exc}",
                    WARNING_PRIORITY,
                )
            )
            return {}
        root = tree.getroot()
        if root.get(SETTINGS_ATTRIBUTE) != settings:
            listener.on_log(
                DiagnosticEvent(
                    "Parser settings changed since the last build, doing a full build",
                    INFO_PRIORITY,
                )
            )
            return {}
        cached = {element.get("path", ""): element for element in root.iter("file")}
        logger.debug("loaded %d entries from %s", len(cached), self.existing_document)
        return cached

    def _parse_file(
        self,
        path: Path,
        include_source: bool,
        cached: dict[str, ET.Element],
        listener: ParseListener,
    ) -> ET.Element:
        relative = self._relative(path)
        data = path.read_bytes()
        digest = hashlib.md5(data).hexdigest()

        previous = cached.get(relative)
        if previous is not None and previous.get("hash") == digest:
            listener.on_log(
                DiagnosticEvent(f"Reusing previous structure of {relative}", DEBUG_PRIORITY)
            )
            return previous

        listener.on_log(DiagnosticEvent(f"Parsing {relative}", INFO_PRIORITY))
        element = ET.Element(
            "file",
            path=relative,
            hash=digest,
            package=self.options.default_package_name,
        )
        text = self._decode(data, relative, listener)
        markers = self._markers(text)
        if len(markers):
            element.append(markers)
        if include_source:
            source = ET.SubElement(element, "source")
            source.text = base64.b64encode(zlib.compress(data)).decode("ascii")
        return element

    def _decode(self, data: bytes, relative: str, listener: ParseListener) -> str:
        if not self.options.validate:
            return data.decode("utf-8", errors="replace")
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as exc:
            listener.on_log(
                DiagnosticEvent(f"{relative} is not valid UTF-8: {exc}", ERROR_PRIORITY)
            )
            return data.decode("utf-8", errors="replace")

    def _active_markers(self) -> tuple[str, ...]:
        # ignored tags also silence markers of the same name
        ignored = {tag.lower() for tag in self.options.ignored_tags}
        return tuple(
            marker for marker in self.options.markers if marker.lower() not in ignored
        )

    def _markers(self, text: str) -> ET.Element:
        markers = self._active_markers()
        container = ET.Element("markers")
        pattern = _marker_pattern(markers)
        if pattern is None:
            return container
        for line_number, line in enumerate(text.splitlines(), start=1):
            match = pattern.search(line)
            if match is None:
                continue
            marker = ET.SubElement(
                container, "marker", type=match.group(1), line=str(line_number)
            )
            marker.text = match.group(2)
        return container
