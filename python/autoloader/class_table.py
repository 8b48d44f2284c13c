r"""Process-wide table of declared classes.

The ClassTable is the use-site for autoloading: looking up a class that
has not been declared yet hands its identifier to the AutoloadChain,
whose hooks include the defining file and declare the class here.

Example:
    >>> from autoloader import ClassTable
    >>> user_cls = ClassTable.instance().get("App\\Models\\User")
    >>> user = user_cls(name="alice")
"""

from __future__ import annotations

import threading

from .exceptions import ClassNotFoundError, ClassRedeclarationError
from .logging import log_debug
from .registry.autoload_chain import AutoloadChain


class ClassTable:
    """Registry of declared classes keyed by namespace-qualified identifier."""

    _instance: ClassTable | None = None

    def __init__(self, chain: AutoloadChain | None = None) -> None:
        """Initialize an empty table.

        Args:
            chain: Chain consulted on lookup misses; the process-wide
                chain when omitted (looked up at miss time).
        """
        self._classes: dict[str, type] = {}
        self._chain = chain
        self._lock = threading.RLock()

    @classmethod
    def instance(cls) -> ClassTable:
        """Get the process-wide table."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Reset the process-wide table (primarily for tests)."""
        cls._instance = None

    @property
    def chain(self) -> AutoloadChain:
        return self._chain if self._chain is not None else AutoloadChain.instance()

    def declare(self, identifier: str, cls: type) -> None:
        """Declare a class under an identifier.

        Declaring the same class again is a no-op.

        Raises:
            ClassRedeclarationError: If a different class is already
                declared under the identifier.
        """
        with self._lock:
            existing = self._classes.get(identifier)
            if existing is not None and existing is not cls:
                raise ClassRedeclarationError(
                    f"Cannot redeclare class '{identifier}' "
                    f"(already declared as {existing.__module__}.{existing.__qualname__})"
                )
            self._classes[identifier] = cls
        log_debug(f"ClassTable: Declared '{identifier}'")

    def is_declared(self, identifier: str) -> bool:
        return identifier in self._classes

    def get(self, identifier: str, autoload: bool = True) -> type:
        """Look up a class, autoloading it on first reference.

        Args:
            identifier: Namespace-qualified class identifier.
            autoload: Consult the autoload chain on a miss.

        Returns:
            The declared class.

        Raises:
            ClassNotFoundError: If the class is not declared and no hook
                could provide it.
        """
        cls = self._classes.get(identifier)
        if cls is not None:
            return cls

        if autoload:
            self.chain.autoload(identifier)
            cls = self._classes.get(identifier)
            if cls is not None:
                return cls

        raise ClassNotFoundError(identifier)

    def exists(self, identifier: str, autoload: bool = True) -> bool:
        """Check whether a class is declared, autoloading it if allowed."""
        try:
            self.get(identifier, autoload=autoload)
        except ClassNotFoundError:
            return False
        return True

    def declared(self) -> list[str]:
        """Identifiers of all declared classes, sorted."""
        return sorted(self._classes)

    def clear(self) -> None:
        with self._lock:
            self._classes.clear()

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._classes

    def __len__(self) -> int:
        return len(self._classes)


__all__ = ["ClassTable"]
