"""Unit tests for target resolution."""

from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from doc_structure.application.target import TargetResolver, resolve_target
from doc_structure.errors import InvalidTargetError

_names = st.text(
    alphabet=st.sampled_from("abcdefghijklmnopqrstuvwxyz0123456789_-"),
    min_size=1,
    max_size=12,
)


@pytest.mark.parametrize("requested", ["", "   ", os.sep, f"  {os.sep} "])
def test_empty_or_root_target_is_rejected(requested: str) -> None:
    """Reject empty and root targets before touching the filesystem."""
    with pytest.raises(InvalidTargetError, match="empty path or root"):
        resolve_target(requested)


def test_directory_target_is_created(tmp_path: Path) -> None:
    """Create missing directories and append the default document name."""
    requested = tmp_path / "out" / "nested"

    resolved = resolve_target(str(requested))

    assert requested.is_dir()
    assert resolved.containing_dir == requested.resolve()
    assert resolved.absolute_path == requested.resolve() / "structure.xml"


def test_directory_target_is_idempotent(tmp_path: Path) -> None:
    """Resolve the same directory twice without error."""
    requested = f"  {tmp_path / 'out'}  "

    first = resolve_target(requested)
    second = resolve_target(requested)

    assert first == second


def test_existing_file_without_xml_suffix_is_rejected(tmp_path: Path) -> None:
    """Reject targets that exist but are not directories."""
    existing = tmp_path / "structure.txt"
    existing.write_text("x")

    with pytest.raises(InvalidTargetError, match="is not a folder"):
        resolve_target(str(existing))


def test_xml_target_keeps_file_name(tmp_path: Path) -> None:
    """Keep the requested file name and canonicalize its parent."""
    (tmp_path / "docs").mkdir()
    requested = tmp_path / "docs" / ".." / "docs" / "api.xml"

    resolved = resolve_target(str(requested))

    assert resolved.absolute_path == (tmp_path / "docs").resolve() / "api.xml"
    assert resolved.containing_dir == (tmp_path / "docs").resolve()


def test_xml_target_with_missing_parent_is_rejected(tmp_path: Path) -> None:
    """Never create directories for a full file path."""
    requested = tmp_path / "missing" / "api.xml"

    with pytest.raises(InvalidTargetError, match="not writable"):
        resolve_target(str(requested))
    assert not (tmp_path / "missing").exists()


def test_unwritable_directory_is_rejected(tmp_path: Path) -> None:
    """Fail when the containing directory is not writable."""
    if os.geteuid() == 0:
        pytest.skip("root bypasses permission checks")
    locked = tmp_path / "locked"
    locked.mkdir()
    locked.chmod(stat.S_IRUSR | stat.S_IXUSR)
    try:
        with pytest.raises(InvalidTargetError, match="not writable"):
            resolve_target(str(locked))
    finally:
        locked.chmod(stat.S_IRWXU)


def test_directory_creation_failure_is_translated(tmp_path: Path) -> None:
    """Translate directory creation failures into InvalidTargetError."""
    blocker = tmp_path / "file"
    blocker.write_text("x")

    with pytest.raises(InvalidTargetError, match="could not be created"):
        resolve_target(str(blocker / "child"))


def test_custom_document_name(tmp_path: Path) -> None:
    """Honour a custom document file name for directory targets."""
    resolver = TargetResolver(filename="api.xml")

    resolved = resolver.resolve(str(tmp_path))

    assert resolved.absolute_path.name == "api.xml"


@settings(suppress_health_check=[HealthCheck.function_scoped_fixture], max_examples=25)
@given(name=_names)
def test_xml_targets_never_create_directories(tmp_path: Path, name: str) -> None:
    """Full ``.xml`` targets resolve next to their parent without mkdir."""
    before = sorted(p.name for p in tmp_path.iterdir())

    resolved = resolve_target(str(tmp_path / f"{name}.xml"))

    assert resolved.absolute_path.name == f"{name}.xml"
    assert resolved.containing_dir == tmp_path.resolve()
    assert sorted(p.name for p in tmp_path.iterdir()) == before


@settings(suppress_health_check=[HealthCheck.function_scoped_fixture], max_examples=25)
@given(name=_names)
def test_directory_targets_end_in_document_name(tmp_path: Path, name: str) -> None:
    """Directory targets exist after resolution and end in structure.xml."""
    resolved = resolve_target(str(tmp_path / "targets" / name))

    assert resolved.absolute_path.name == "structure.xml"
    assert resolved.containing_dir.is_dir()
