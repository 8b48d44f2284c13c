"""Tests for IncludeOnce, the one-time file inclusion primitive."""

from __future__ import annotations

import pytest

from autoloader import IncludeError, IncludeOnce


class TestIncludeOnce:
    """Tests for IncludeOnce.include."""

    def test_include_executes_file(self, tmp_path):
        """Test the file is executed and its namespace returned."""
        path = tmp_path / "helpers.py"
        path.write_text("ANSWER = 42\n")
        includer = IncludeOnce()

        module = includer.include(path)

        assert module.ANSWER == 42
        assert includer.is_included(path)
        assert includer.module_for(path) is module

    def test_second_include_is_noop(self, tmp_path):
        """Test including a file again returns the same module without re-executing."""
        log = tmp_path / "log.txt"
        path = tmp_path / "once.py"
        path.write_text(
            f"with open({str(log)!r}, 'a') as f:\n"
            "    f.write('x')\n"
        )
        includer = IncludeOnce()

        first = includer.include(path)
        second = includer.include(str(path))

        assert first is second
        assert log.read_text() == "x"
        assert len(includer) == 1

    def test_key_is_real_path(self, tmp_path):
        """Test different spellings of the same path are one inclusion."""
        (tmp_path / "sub").mkdir()
        path = tmp_path / "mod.py"
        path.write_text("VALUE = 1\n")
        includer = IncludeOnce()

        includer.include(path)
        includer.include(tmp_path / "sub" / ".." / "mod.py")

        assert includer.included_files() == [str(path.resolve())]

    def test_missing_file(self, tmp_path):
        """Test a missing file raises IncludeError with the path."""
        includer = IncludeOnce()

        with pytest.raises(IncludeError, match="file not found") as exc_info:
            includer.include(tmp_path / "missing.py")

        assert exc_info.value.path.endswith("missing.py")

    def test_failing_file_stays_marked(self, tmp_path):
        """Test a file that raises is not executed a second time."""
        path = tmp_path / "broken.py"
        path.write_text("raise RuntimeError('boom')\n")
        includer = IncludeOnce()

        with pytest.raises(IncludeError, match="boom"):
            includer.include(path)

        assert includer.is_included(path)
        # Second attempt returns the partial module instead of re-raising
        includer.include(path)

    def test_non_py_extension(self, tmp_path):
        """Test files with a custom extension can be included."""
        path = tmp_path / "legacy.inc"
        path.write_text("class Legacy:\n    pass\n")

        module = IncludeOnce().include(path)

        assert module.Legacy.__name__ == "Legacy"

    def test_reentrant_include(self, tmp_path):
        """Test a file including itself does not execute twice."""
        log = tmp_path / "log.txt"
        path = tmp_path / "self_ref.py"
        path.write_text(
            f"with open({str(log)!r}, 'a') as f:\n"
            "    f.write('x')\n"
            "INCLUDER.include(__file__)\n"
        )
        includer = IncludeOnce()

        import builtins

        builtins.INCLUDER = includer  # type: ignore[attr-defined]
        try:
            includer.include(path)
        finally:
            del builtins.INCLUDER  # type: ignore[attr-defined]

        assert log.read_text() == "x"


class TestIncludeOnceSingleton:
    """Tests for the process-wide IncludeOnce."""

    def test_instance_is_shared(self):
        """Test instance() returns the same includer until reset."""
        includer = IncludeOnce.instance()
        assert IncludeOnce.instance() is includer

        IncludeOnce.reset_instance()
        assert IncludeOnce.instance() is not includer

    def test_direct_construction_is_independent(self, tmp_path):
        """Test an explicitly built includer does not share the process-wide state."""
        path = tmp_path / "helpers.py"
        path.write_text("ANSWER = 42\n")

        IncludeOnce().include(path)

        assert not IncludeOnce.instance().is_included(path)
