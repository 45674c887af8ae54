"""Public parse API (delegates to application use-cases)."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable
from typing import Optional

from pydantic import ValidationError

from doc_structure.application.options import ParseOptions
from doc_structure.application.results import ParseResult
from doc_structure.application.use_cases import build_parse_options
from doc_structure.application.use_cases import parse_project
from doc_structure.errors import OptionsError
from doc_structure.schemas import ParseCommandConfig


def options_from_config(config: ParseCommandConfig) -> ParseOptions:
    """Translate a validated command config into the option tree."""
    return build_parse_options(
        target=config.target,
        files=config.filename,
        directories=config.directory,
        extensions=config.extensions,
        ignore_patterns=config.ignore,
        include_hidden=config.hidden,
        follow_symlinks=not config.ignore_symlinks,
        title=config.title,
        force=config.force,
        markers=config.markers,
        ignored_tags=config.ignore_tags,
        validate=config.validate_files,
        visibility=config.visibility,
        default_package_name=config.defaultpackagename,
        include_source=config.sourcecode,
        progressbar=config.progressbar,
        verbose=config.verbose,
    )


def build_structure(**params: object) -> ParseResult:
    """Validate raw command parameters and run the parse use-case.

    Raises
    ------
    OptionsError
        If the parameters fail validation.
    """
    try:
        config = ParseCommandConfig.model_validate(params)
    except ValidationError as exc:
        raise OptionsError(f"Invalid parse options: {exc}") from exc
    return parse_project(options=options_from_config(config))


def parse_project_to_xml(
    target: str = "output",
    files: Optional[Iterable[str]] = None,
    directories: Optional[Iterable[str]] = None,
    extensions: Optional[Iterable[str]] = None,
    ignore: Optional[Iterable[str]] = None,
    markers: Optional[Iterable[str]] = None,
    title: str = "",
    force: bool = False,
    include_source: bool = False,
    progressbar: bool = False,
    verbose: bool = False,
) -> Path:
    """Parse a project and return the path of the written structure document."""
    params: dict[str, object] = {
        "target": target,
        "filename": list(files or []),
        "directory": list(directories or []),
        "ignore": list(ignore or []),
        "title": title,
        "force": force,
        "sourcecode": include_source,
        "progressbar": progressbar,
        "verbose": verbose,
    }
    if extensions is not None:
        params["extensions"] = list(extensions)
    if markers is not None:
        params["markers"] = list(markers)
    return build_structure(**params).target.absolute_path
