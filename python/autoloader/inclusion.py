"""One-time inclusion of Python source files.

IncludeOnce executes a source file at most once per resolved path and
remembers the resulting module. Including the same file again is a
no-op that returns the recorded module.

Example:
    >>> includer = IncludeOnce()
    >>> module = includer.include("/srv/app/App/Models/User.py")
    >>> includer.include("/srv/app/App/Models/User.py") is module
    True
"""

from __future__ import annotations

import hashlib
import importlib.machinery
import importlib.util
import os
import sys
import threading
from pathlib import Path
from types import ModuleType

from .exceptions import IncludeError
from .logging import log_debug, log_trace


class IncludeOnce:
    """Executes source files exactly once, keyed by their real path.

    A path is marked as included before its code runs, so a file that
    (directly or through autoloading) includes itself again gets the
    partially initialised module back instead of a second execution.
    A file that raises while executing stays marked.

    Resolvers share the process-wide instance by default, so a file
    reachable from several resolvers still executes once per process.
    """

    _instance: IncludeOnce | None = None

    def __init__(self) -> None:
        self._modules: dict[str, ModuleType] = {}
        self._lock = threading.RLock()

    @classmethod
    def instance(cls) -> IncludeOnce:
        """Get the process-wide includer.

        Example:
            >>> includer = IncludeOnce.instance()
            >>> assert includer is IncludeOnce.instance()
        """
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Reset the process-wide includer (primarily for tests)."""
        cls._instance = None

    def include(self, path: Path | str) -> ModuleType:
        """Execute a source file unless it was included before.

        Args:
            path: File to include.

        Returns:
            The module object the file was executed in.

        Raises:
            IncludeError: If the file is missing or raises while executing.
        """
        key = self._key(path)

        with self._lock:
            module = self._modules.get(key)
            if module is not None:
                log_trace(f"IncludeOnce: {key} already included")
                return module

            module_name = self._module_name(key)
            loader = importlib.machinery.SourceFileLoader(module_name, key)
            spec = importlib.util.spec_from_file_location(module_name, key, loader=loader)
            if spec is None:
                raise IncludeError(f"Cannot include {key}: unsupported file type", path=key)

            module = importlib.util.module_from_spec(spec)
            self._modules[key] = module
            sys.modules[module_name] = module

        log_debug(f"IncludeOnce: executing {key}")
        try:
            spec.loader.exec_module(module)
        except FileNotFoundError as e:
            raise IncludeError(f"Cannot include {key}: file not found", path=key) from e
        except Exception as e:
            raise IncludeError(f"Error while including {key}: {e}", path=key) from e

        return module

    def is_included(self, path: Path | str) -> bool:
        """Check whether a file has already been included."""
        return self._key(path) in self._modules

    def included_files(self) -> list[str]:
        """Real paths of all included files, in inclusion order."""
        return list(self._modules.keys())

    def module_for(self, path: Path | str) -> ModuleType | None:
        """Get the module recorded for an included file."""
        return self._modules.get(self._key(path))

    def __len__(self) -> int:
        return len(self._modules)

    @staticmethod
    def _key(path: Path | str) -> str:
        return os.path.realpath(os.fspath(path))

    @staticmethod
    def _module_name(key: str) -> str:
        # Unique per real path so two includers never clash in sys.modules.
        stem = Path(key).stem.replace("-", "_").replace(".", "_")
        digest = hashlib.sha1(key.encode("utf-8")).hexdigest()[:10]
        return f"_autoload_{stem}_{digest}"


__all__ = ["IncludeOnce"]
