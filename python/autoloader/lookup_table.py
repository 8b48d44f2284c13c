"""Loading of the lookup table and eager-include list.

Both files are plain YAML (JSON documents are valid YAML too) and live
under ``<root_dir>/Autoload/`` by default:

    # Autoload/class_map.yaml
    file:
      App\\Kernel: /srv/app/src/Kernel.py
    dir:
      - /srv/app/modules/
      - /srv/app/legacy/

    # Autoload/files.yaml
    - /srv/app/helpers.py
    - /srv/app/constants.py

A missing file is not an error; it yields an empty table or list.

Example:
    >>> from autoloader.lookup_table import load_lookup_table
    >>> table = load_lookup_table(Path("Autoload/class_map.yaml"))
    >>> print(f"{len(table.file)} mapped classes, {len(table.dir)} fallback dirs")
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .exceptions import LookupTableError
from .logging import log_debug, log_warn
from .types import LookupTable


def load_lookup_table(path: Path | str) -> LookupTable:
    """Load the lookup table from a YAML file.

    Parameters
    ----------
    path : Path | str
        Path to the lookup table file.

    Returns
    -------
    LookupTable
        The parsed table, or an empty table when the file does not exist.

    Raises
    ------
    LookupTableError
        If the file cannot be parsed or does not describe a mapping with
        optional ``file`` and ``dir`` keys.
    """
    path = Path(path)
    data = _read_yaml(path)
    if data is None:
        return LookupTable.empty()

    if not isinstance(data, dict):
        raise LookupTableError(
            f"Lookup table {path} must be a mapping, got {type(data).__name__}"
        )

    try:
        table = LookupTable.model_validate(data)
    except ValidationError as e:
        raise LookupTableError(f"Invalid lookup table {path}: {e}") from e

    log_debug(
        f"Loaded lookup table from {path}",
        {"files": len(table.file), "dirs": len(table.dir)},
    )
    return table


def load_include_list(path: Path | str) -> list[str]:
    """Load the ordered list of files to include at startup.

    Parameters
    ----------
    path : Path | str
        Path to the include list file.

    Returns
    -------
    list[str]
        File paths in the order given, or an empty list when the file
        does not exist.

    Raises
    ------
    LookupTableError
        If the file is not a sequence of strings.
    """
    path = Path(path)
    data = _read_yaml(path)
    if data is None:
        return []

    if not isinstance(data, list) or not all(isinstance(item, str) for item in data):
        raise LookupTableError(f"Include list {path} must be a sequence of file paths")

    log_debug(f"Loaded {len(data)} eager include(s) from {path}")
    return list(data)


def _read_yaml(path: Path) -> Any:
    """Read a YAML document, returning None for a missing or empty file."""
    if not path.is_file():
        log_debug(f"No file at {path}, using empty default")
        return None

    try:
        with path.open(encoding="utf-8") as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        log_warn(f"Failed to parse {path}: {e}")
        raise LookupTableError(f"Failed to parse {path}: {e}") from e
    except OSError as e:
        raise LookupTableError(f"Failed to read {path}: {e}") from e


__all__ = [
    "load_lookup_table",
    "load_include_list",
]
