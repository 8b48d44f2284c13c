r"""Class resolver: identifier to file path, then include once.

Resolution order (first match wins):
1. Exact entry in LookupTable.file (trusted, no existence check)
2. vendor_dir + relative path + extension
3. Each LookupTable.dir prefix, in list order

where the relative path is the identifier with every namespace delimiter
rewritten to the platform path separator.

Example:
    >>> table = LookupTable(file={"App\\Foo": "/abs/Foo.py"}, dir=["/v2/", "/v1/"])
    >>> resolver = ClassResolver(vendor_dir="/src", table=table)
    >>> resolver.resolve("App\\Foo")
    PosixPath('/abs/Foo.py')
    >>> resolver.resolve("App\\Bar")   # only /v1/App/Bar.py exists
    PosixPath('/v1/App/Bar.py')
"""

from __future__ import annotations

import os
import threading
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING

from ..inclusion import IncludeOnce
from ..logging import log_debug, log_trace, log_warn
from ..types import DEFAULT_EXTENSION, NAMESPACE_DELIMITER, LogContext, LookupTable
from .base_resolver import BaseResolver

if TYPE_CHECKING:
    from ..class_table import ClassTable


class ClassResolver(BaseResolver):
    """Resolves class identifiers against a lookup table and search roots.

    The lookup table is copied into read-only views at construction and
    never changes afterwards, so resolve() is a pure function of the
    identifier and the filesystem.

    Attributes:
        vendor_dir: Primary search root, always ending in one separator.
        extension: Source file extension appended to candidates.
        delimiter: Namespace delimiter in class identifiers.
    """

    def __init__(
        self,
        vendor_dir: str | os.PathLike[str],
        table: LookupTable | None = None,
        extension: str = DEFAULT_EXTENSION,
        delimiter: str = NAMESPACE_DELIMITER,
        includer: IncludeOnce | None = None,
        class_table: ClassTable | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            vendor_dir: Primary search root.
            table: Lookup table; empty when omitted.
            extension: File extension including the leading dot.
            delimiter: Namespace delimiter rewritten to os.sep.
            includer: Inclusion primitive; the process-wide IncludeOnce
                when omitted.
            class_table: Where loaded classes are declared; the
                process-wide ClassTable when omitted.
        """
        if table is None:
            table = LookupTable.empty()
        self.vendor_dir = os.fspath(vendor_dir).rstrip(os.sep) + os.sep
        self.extension = extension
        self.delimiter = delimiter
        self._files = MappingProxyType(dict(table.file))
        self._dirs: tuple[str, ...] = tuple(table.dir)
        self._includer = includer if includer is not None else IncludeOnce.instance()
        self._class_table = class_table
        self._loaded: set[str] = set()
        self._lock = threading.RLock()

    @property
    def name(self) -> str:
        """Return the resolver name."""
        return "class_resolver"

    @property
    def files(self) -> MappingProxyType[str, str]:
        """Read-only exact-match entries."""
        return self._files

    @property
    def dirs(self) -> tuple[str, ...]:
        """Fallback directory prefixes in search order."""
        return self._dirs

    @property
    def includer(self) -> IncludeOnce:
        return self._includer

    def relative_path(self, identifier: str) -> str:
        """Rewrite namespace delimiters to the platform path separator.

        Example:
            >>> resolver.relative_path("App\\Models\\User")
            'App/Models/User'
        """
        return identifier.replace(self.delimiter, os.sep)

    def resolve(self, identifier: str) -> Path | None:
        """Map a class identifier to its source file.

        Args:
            identifier: Namespace-qualified class identifier. The empty
                string is accepted and simply yields an unlikely path.

        Returns:
            Path of the source file, or None if no candidate exists. A
            class map hit is the mapped string wrapped in Path, which
            drops "." segments and doubled separators but keeps "..".
        """
        mapped = self._files.get(identifier)
        if mapped is not None:
            log_trace(f"ClassResolver: '{identifier}' found in class map")
            return Path(mapped)

        relative = self.relative_path(identifier) + self.extension

        candidate = self.vendor_dir + relative
        if Path(candidate).is_file():
            log_trace(f"ClassResolver: '{identifier}' found under vendor dir")
            return Path(candidate)

        for prefix in self._dirs:
            candidate = prefix + relative
            if Path(candidate).is_file():
                log_trace(f"ClassResolver: '{identifier}' found under {prefix}")
                return Path(candidate)

        return None

    # Alias for callers that only need the path
    find_file = resolve

    def load(self, identifier: str) -> bool:
        """Resolve a class identifier and include its file once.

        Returns:
            True if the file was found and included (or was included by
            an earlier call), False if no candidate exists.

        Raises:
            IncludeError: If the resolved file fails to execute.
        """
        with self._lock:
            if identifier in self._loaded:
                return True

            path = self.resolve(identifier)
            if path is None:
                log_debug(f"ClassResolver: Could not resolve '{identifier}'")
                return False

            # Marked before inclusion: a re-entrant load is a no-op
            self._loaded.add(identifier)

        module = self._includer.include(path)
        log_debug(
            "ClassResolver: Loaded class file",
            LogContext(class_identifier=identifier, path=str(path), operation="load"),
        )
        self._publish(identifier, module)
        return True

    def loaded_identifiers(self) -> list[str]:
        """Identifiers that load() has handled, sorted."""
        return sorted(self._loaded)

    def is_loaded(self, identifier: str) -> bool:
        return identifier in self._loaded

    def _publish(self, identifier: str, module: object) -> None:
        """Declare the class a loaded file defines on the class table."""
        from ..class_table import ClassTable

        table = self._class_table if self._class_table is not None else ClassTable.instance()
        if table.is_declared(identifier):
            return

        short_name = identifier.rsplit(self.delimiter, 1)[-1]
        declared = getattr(module, short_name, None)
        if not isinstance(declared, type):
            log_warn(
                f"ClassResolver: File for '{identifier}' does not define class '{short_name}'",
                {"path": getattr(module, "__file__", "")},
            )
            return

        table.declare(identifier, declared)


__all__ = ["ClassResolver"]
