"""pytest configuration and fixtures for autoloader tests.

This module provides shared fixtures for testing the autoloader,
including fresh AutoloadChain/ClassTable singletons and on-disk source
trees for resolution.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Generator
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from autoloader import AutoloadChain, ClassTable, IncludeOnce


@pytest.fixture(scope="session")
def autoloader_module():
    """Provide the autoloader module as a fixture."""
    import autoloader

    return autoloader


@pytest.fixture
def autoload_chain() -> Generator[AutoloadChain, None, None]:
    """Provide a fresh process-wide AutoloadChain for each test."""
    from autoloader import AutoloadChain

    AutoloadChain.reset_instance()
    chain = AutoloadChain.instance()
    yield chain
    chain.clear()
    AutoloadChain.reset_instance()


@pytest.fixture
def class_table(autoload_chain: AutoloadChain) -> Generator[ClassTable, None, None]:
    """Provide a fresh process-wide ClassTable bound to the fresh chain."""
    from autoloader import ClassTable

    ClassTable.reset_instance()
    table = ClassTable.instance()
    yield table
    table.clear()
    ClassTable.reset_instance()


@pytest.fixture(autouse=True)
def include_once() -> Generator[IncludeOnce, None, None]:
    """Provide a fresh process-wide IncludeOnce for each test."""
    from autoloader import IncludeOnce

    IncludeOnce.reset_instance()
    yield IncludeOnce.instance()
    IncludeOnce.reset_instance()


def write_class_file(base: Path | str, identifier: str, body: str | None = None) -> Path:
    """Write a source file for a class identifier under a base directory.

    The file defines a class named after the identifier's last segment
    unless an explicit body is given.
    """
    relative = identifier.replace("\\", os.sep) + ".py"
    path = Path(str(base)) / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    short_name = identifier.rsplit("\\", 1)[-1]
    if body is None:
        body = f"class {short_name}:\n    source = {str(path)!r}\n"
    path.write_text(body)
    return path


@pytest.fixture
def source_tree(tmp_path: Path) -> dict[str, Path]:
    """Provide a primary root and two fallback roots.

    Layout:
        src/App/Models/User.py
        v2/                      (empty)
        v1/App/Bar.py
        v1/Shared/Both.py
        v2/Shared/Both.py
        abs/Foo.py
    """
    roots = {name: tmp_path / name for name in ("src", "v1", "v2", "abs")}
    for root in roots.values():
        root.mkdir()

    write_class_file(roots["src"], "App\\Models\\User")
    write_class_file(roots["v1"], "App\\Bar")
    write_class_file(roots["v1"], "Shared\\Both")
    write_class_file(roots["v2"], "Shared\\Both")
    (roots["abs"] / "Foo.py").write_text("class Foo:\n    pass\n")
    return roots


@pytest.fixture
def prefix() -> Callable[[Path], str]:
    """Turn a directory into a fallback prefix string (with trailing separator)."""

    def _prefix(path: Path) -> str:
        return str(path) + os.sep

    return _prefix


# Markers for test categorization
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow running",
    )
