#!/usr/bin/env python3
"""
doc_structure.cli.cli

Typer-based CLI that parses a project's source files into a structure
document (``structure.xml``).

Examples
--------
Parse a source directory into ``output/structure.xml``:

    doc-structure parse -d src

Write to an explicit file with a progress bar:

    doc-structure parse -d src -t build/api.xml --progressbar
"""

from __future__ import annotations

import logging
import sys
import traceback

import typer

from doc_structure.errors import StructureError

app = typer.Typer(
    name="doc-structure",
    help="Create a structure file from your source code.",
    no_args_is_help=True,
)

LIST_HELP_SUFFIX = "Comma-separated or repeatable."


def _print_parse_error(exc: Exception, debug: bool) -> int:
    """Print a user-friendly parse error.

    Parameters
    ----------
    exc : Exception
        Exception raised during the run.
    debug : bool
        Whether to include traceback details.

    Returns
    -------
    int
        Process exit code.
    """
    label = typer.style(f"✗ {type(exc).__name__}:", fg=typer.colors.RED)
    typer.echo(f"{label} {exc}", err=True)
    if debug:
        typer.echo("\nTraceback:", err=True)
        typer.echo("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)), err=True)
    code = getattr(exc, "exit_code", None)
    if isinstance(code, int) and code > 0:
        return code
    return 1


# -----------------------------
# Global options
# -----------------------------
@app.callback()
def _main(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Show full tracebacks and debug logs on error."),
) -> None:
    """Initialize shared CLI state.

    Parameters
    ----------
    ctx : typer.Context
        Typer context object used to store shared state.
    debug : bool, default=False
        Whether to enable debug logging and error output.
    """
    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            stream=sys.stderr,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
    ctx.obj = {"debug": debug}


# -----------------------------
# Commands
# -----------------------------
@app.command("parse")
def parse_cmd(
    ctx: typer.Context,
    target: str = typer.Option(
        "output", "--target", "-t", help="Path where to store the generated output."
    ),
    filename: list[str] | None = typer.Option(
        None,
        "--filename",
        "-f",
        help=f"Files to parse; the wildcards ? and * are supported. {LIST_HELP_SUFFIX}",
    ),
    directory: list[str] | None = typer.Option(
        None,
        "--directory",
        "-d",
        help=f"Directories to (recursively) parse. {LIST_HELP_SUFFIX}",
    ),
    extensions: list[str] | None = typer.Option(
        None,
        "--extensions",
        "-e",
        help=f"File extensions to parse (default: php, php3, phtml). {LIST_HELP_SUFFIX}",
    ),
    ignore: list[str] | None = typer.Option(
        None,
        "--ignore",
        "-i",
        help=f"Files and directories to ignore; wildcards * and ? are supported. {LIST_HELP_SUFFIX}",
    ),
    ignore_tags: list[str] | None = typer.Option(
        None,
        "--ignore-tags",
        help=(
            "Tags that will be ignored; markers of the same name (e.g. TODO) "
            f"are not collected either. {LIST_HELP_SUFFIX}"
        ),
    ),
    hidden: bool = typer.Option(
        False, "--hidden", help="Descend into hidden directories (starting with '.')."
    ),
    ignore_symlinks: bool = typer.Option(
        False, "--ignore-symlinks", help="Ignore symlinks to other files or directories."
    ),
    markers: list[str] | None = typer.Option(
        None,
        "--markers",
        "-m",
        help=f"Markers to collect (default: TODO, FIXME). {LIST_HELP_SUFFIX}",
    ),
    title: str = typer.Option("", "--title", help="Title for this project."),
    force: bool = typer.Option(
        False,
        "--force",
        help="Force a full build; do not reuse the existing structure file.",
    ),
    validate: bool = typer.Option(
        False, "--validate", help="Validate every processed file while parsing."
    ),
    visibility: list[str] | None = typer.Option(
        None,
        "--visibility",
        help=f"Visibility to include, e.g. public,protected. {LIST_HELP_SUFFIX}",
    ),
    defaultpackagename: str = typer.Option(
        "Default", "--defaultpackagename", help="Name to use for the default package."
    ),
    sourcecode: bool = typer.Option(
        False, "--sourcecode", help="Include the source code in the structure file."
    ),
    progressbar: bool = typer.Option(
        False,
        "--progressbar",
        "-p",
        help="Show a progress bar; quiets logging to stdout.",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Show debug and informational log lines."
    ),
) -> None:
    """Parse source files and write the structure file to the target.

    Source files come from ``-f`` and ``-d``; the structure file lands at
    ``<target>/structure.xml`` unless the target itself ends in ``.xml``.
    """
    debug: bool = bool(ctx.obj.get("debug", False)) if ctx.obj else False

    params: dict[str, object] = {
        "target": target,
        "filename": filename or [],
        "directory": directory or [],
        "ignore": ignore or [],
        "ignore_tags": ignore_tags or [],
        "hidden": hidden,
        "ignore_symlinks": ignore_symlinks,
        "title": title,
        "force": force,
        "validate_files": validate,
        "visibility": visibility or [],
        "defaultpackagename": defaultpackagename,
        "sourcecode": sourcecode,
        "progressbar": progressbar,
        "verbose": verbose,
    }
    if extensions:
        params["extensions"] = extensions
    if markers:
        params["markers"] = markers

    try:
        from doc_structure.api import build_structure

        build_structure(**params)
    except StructureError as exc:
        raise typer.Exit(code=_print_parse_error(exc, debug))
    except Exception as exc:
        # Unexpected crash: still show a clean message; debug prints traceback.
        raise typer.Exit(code=_print_parse_error(exc, debug))


app.command("project:parse", hidden=True)(parse_cmd)


@app.command("doctor")
def doctor_cmd() -> None:
    """Print installed toolchain versions."""
    import importlib.metadata as metadata

    typer.echo(f"Python: {sys.version.split()[0]}")
    for module in ("doc-structure", "typer", "click", "pydantic"):
        try:
            version = metadata.version(module)
            typer.echo(f"{module}: {version}")
        except metadata.PackageNotFoundError:
            typer.echo(f"{module}: <not installed>")


if __name__ == "__main__":
    app()
