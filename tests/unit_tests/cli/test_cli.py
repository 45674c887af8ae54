"""Unit tests for CLI command behavior."""

from __future__ import annotations

import pytest
import typer
from typer.testing import CliRunner

import doc_structure.api as api_module
from doc_structure.cli import cli as cli_module
from doc_structure.errors import CollaboratorError, InvalidTargetError

runner = CliRunner()


def test_help_shows_commands() -> None:
    """Ensure top-level help lists the parse command."""
    result = runner.invoke(cli_module.app, ["--help"])
    assert result.exit_code == 0
    assert "parse" in result.output
    assert "doctor" in result.output


def test_parse_forwards_options(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure the parse command forwards flags to the API layer."""
    called: dict[str, object] = {}

    def fake_build(**params: object) -> None:
        called.update(params)

    monkeypatch.setattr(api_module, "build_structure", fake_build)

    result = runner.invoke(
        cli_module.app,
        [
            "parse",
            "-d",
            "src,lib",
            "-f",
            "main.php",
            "-t",
            "build",
            "-p",
            "--hidden",
            "--ignore-symlinks",
            "--visibility",
            "public",
            "--sourcecode",
            "--validate",
        ],
    )

    assert result.exit_code == 0, result.output
    assert called["directory"] == ["src,lib"]
    assert called["filename"] == ["main.php"]
    assert called["target"] == "build"
    assert called["progressbar"] is True
    assert called["hidden"] is True
    assert called["ignore_symlinks"] is True
    assert called["visibility"] == ["public"]
    assert called["sourcecode"] is True
    assert called["validate_files"] is True
    assert "extensions" not in called
    assert "markers" not in called


def test_project_parse_alias(monkeypatch: pytest.MonkeyPatch) -> None:
    """The namespaced alias runs the same command."""
    calls: list[dict[str, object]] = []
    monkeypatch.setattr(api_module, "build_structure", lambda **p: calls.append(p))

    result = runner.invoke(cli_module.app, ["project:parse", "-d", "src"])

    assert result.exit_code == 0, result.output
    assert calls and calls[0]["directory"] == ["src"]


@pytest.mark.parametrize(
    ("error", "name"),
    [
        (InvalidTargetError("Either an empty path or root was given: "), "InvalidTargetError"),
        (CollaboratorError("bad parse"), "CollaboratorError"),
        (RuntimeError("unexpected"), "RuntimeError"),
    ],
)
def test_parse_handles_errors(
    monkeypatch: pytest.MonkeyPatch, error: Exception, name: str
) -> None:
    """Return non-zero and print error details when the run fails."""

    def fake_build(**_: object) -> None:
        raise error

    monkeypatch.setattr(api_module, "build_structure", fake_build)

    result = runner.invoke(cli_module.app, ["parse", "-d", "src"])

    assert result.exit_code == 1
    assert name in result.output
    assert str(error) in result.output
    assert "Traceback" not in result.output


def test_debug_prints_traceback(monkeypatch: pytest.MonkeyPatch) -> None:
    """Show the traceback when --debug is given."""

    def fake_build(**_: object) -> None:
        raise CollaboratorError("bad parse")

    monkeypatch.setattr(api_module, "build_structure", fake_build)
    monkeypatch.setattr(cli_module.logging, "basicConfig", lambda **_: None)

    result = runner.invoke(cli_module.app, ["--debug", "parse", "-d", "src"])

    assert result.exit_code == 1
    assert "Traceback" in result.output


def test_ignore_tags_help_mentions_markers() -> None:
    """The help for --ignore-tags says it also drops markers."""
    command = typer.main.get_command(cli_module.app)
    parse = command.commands["parse"]
    option = next(param for param in parse.params if param.name == "ignore_tags")

    assert "markers" in option.help


def test_doctor_lists_versions() -> None:
    """Print the interpreter and library versions."""
    result = runner.invoke(cli_module.app, ["doctor"])

    assert result.exit_code == 0
    assert "Python:" in result.output
    assert "typer:" in result.output
