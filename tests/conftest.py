"""Shared pytest configuration, marker assignment and project fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Attach suite markers based on test file path."""
    del config
    for item in items:
        parts = set(Path(str(item.fspath)).parts)
        if "e2e_tests" in parts:
            item.add_marker(pytest.mark.e2e)
        elif "integration_tests" in parts:
            item.add_marker(pytest.mark.integration)
        elif "unit_tests" in parts:
            item.add_marker(pytest.mark.unit)


@pytest.fixture
def source_tree(tmp_path: Path) -> Path:
    """Create a small PHP project with markers, a hidden dir and a non-PHP file."""
    root = tmp_path / "project"
    (root / "lib").mkdir(parents=True)
    (root / ".cache").mkdir()
    (root / "index.php").write_text(
        "<?php\n// TODO: split bootstrap\necho 'hi';\n", encoding="utf-8"
    )
    (root / "lib" / "util.php").write_text(
        "<?php\n/* FIXME handle nulls */\nfunction f() {}\n", encoding="utf-8"
    )
    (root / "lib" / "notes.txt").write_text("TODO: not parsed\n", encoding="utf-8")
    (root / ".cache" / "stale.php").write_text("<?php\n", encoding="utf-8")
    return root
