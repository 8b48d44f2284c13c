"""Tests for lookup table and include list loading.

These tests verify:
- YAML and JSON table files parse into LookupTable
- Missing files and missing keys yield empty defaults
- Malformed files raise LookupTableError
"""

from __future__ import annotations

from pathlib import Path

import pytest

from autoloader import LookupTable, LookupTableError, load_include_list, load_lookup_table


class TestLoadLookupTable:
    """Tests for load_lookup_table."""

    def test_yaml_table(self, tmp_path: Path):
        """Test a YAML table with both keys."""
        path = tmp_path / "class_map.yaml"
        path.write_text(
            "file:\n"
            "  App\\Foo: /abs/Foo.py\n"
            "  App\\Models\\User: /abs/User.py\n"
            "dir:\n"
            "  - /v2/\n"
            "  - /v1/\n"
        )

        table = load_lookup_table(path)

        assert table.file == {"App\\Foo": "/abs/Foo.py", "App\\Models\\User": "/abs/User.py"}
        assert table.dir == ("/v2/", "/v1/")

    def test_json_table(self, tmp_path: Path):
        """Test a JSON document is accepted."""
        path = tmp_path / "class_map.json"
        path.write_text('{"file": {"App\\\\Foo": "/abs/Foo.py"}, "dir": ["/lib/"]}')

        table = load_lookup_table(path)

        assert table.file == {"App\\Foo": "/abs/Foo.py"}
        assert table.dir == ("/lib/",)

    def test_missing_file_is_empty(self, tmp_path: Path):
        """Test a missing table file gives an empty table."""
        assert load_lookup_table(tmp_path / "nope.yaml") == LookupTable.empty()

    def test_empty_document_is_empty(self, tmp_path: Path):
        """Test an empty file gives an empty table."""
        path = tmp_path / "class_map.yaml"
        path.write_text("")

        assert load_lookup_table(path) == LookupTable()

    def test_only_dir_key(self, tmp_path: Path):
        """Test absence of the file key is valid."""
        path = tmp_path / "class_map.yaml"
        path.write_text("dir: [/a/]\n")

        table = load_lookup_table(path)

        assert table.file == {}
        assert table.dir == ("/a/",)

    def test_null_keys(self, tmp_path: Path):
        """Test keys present with null values are treated as empty."""
        path = tmp_path / "class_map.yaml"
        path.write_text("file:\ndir:\n")

        table = load_lookup_table(path)

        assert table.file == {}
        assert table.dir == ()

    def test_not_a_mapping(self, tmp_path: Path):
        """Test a top-level sequence is rejected."""
        path = tmp_path / "class_map.yaml"
        path.write_text("- /a/\n- /b/\n")

        with pytest.raises(LookupTableError, match="must be a mapping"):
            load_lookup_table(path)

    def test_unknown_key(self, tmp_path: Path):
        """Test unknown top-level keys are rejected."""
        path = tmp_path / "class_map.yaml"
        path.write_text("files: {}\n")

        with pytest.raises(LookupTableError, match="Invalid lookup table"):
            load_lookup_table(path)

    def test_invalid_yaml(self, tmp_path: Path):
        """Test a syntax error is reported as LookupTableError."""
        path = tmp_path / "class_map.yaml"
        path.write_text("file: {unclosed\n")

        with pytest.raises(LookupTableError, match="Failed to parse"):
            load_lookup_table(path)

    def test_table_is_frozen(self):
        """Test LookupTable attributes cannot be reassigned."""
        table = LookupTable(dir=["/a/"])

        with pytest.raises(Exception):
            table.dir = ("/b/",)  # type: ignore[misc]


class TestLoadIncludeList:
    """Tests for load_include_list."""

    def test_yaml_list(self, tmp_path: Path):
        """Test the list keeps its order."""
        path = tmp_path / "files.yaml"
        path.write_text("- /srv/b.py\n- /srv/a.py\n")

        assert load_include_list(path) == ["/srv/b.py", "/srv/a.py"]

    def test_missing_file(self, tmp_path: Path):
        """Test a missing include list is empty."""
        assert load_include_list(tmp_path / "files.yaml") == []

    def test_not_a_list(self, tmp_path: Path):
        """Test a mapping is rejected."""
        path = tmp_path / "files.yaml"
        path.write_text("a: b\n")

        with pytest.raises(LookupTableError, match="sequence of file paths"):
            load_include_list(path)

    def test_non_string_entry(self, tmp_path: Path):
        """Test non-string entries are rejected."""
        path = tmp_path / "files.yaml"
        path.write_text("- /srv/a.py\n- 3\n")

        with pytest.raises(LookupTableError):
            load_include_list(path)
