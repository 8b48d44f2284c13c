"""Abstract base class for class resolvers.

Resolvers map a class identifier to a source file and load it. They are
registered on the AutoloadChain, which tries each hook in order until one
reports success.

Resolution Contract:
1. name - Human-readable identifier for logging/debugging
2. resolve() - Map an identifier to a file path, or None (not found)
3. load() - Resolve and include the file once; True on success

Example Implementation:
    class PrefixResolver(BaseResolver):
        @property
        def name(self) -> str:
            return "prefix_resolver"

        def resolve(self, identifier: str) -> Path | None:
            if identifier.startswith("Legacy\\"):
                return Path("/srv/legacy") / (identifier[7:] + ".py")
            return None
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from .autoload_chain import AutoloadChain, AutoloadHook


class BaseResolver(ABC):
    """Abstract base class for class resolvers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for this resolver (for logging/debugging)."""
        ...

    @abstractmethod
    def resolve(self, identifier: str) -> Path | None:
        """Map a class identifier to a file path.

        Args:
            identifier: Namespace-qualified class identifier.

        Returns:
            Path of the source file, or None if not found.
        """
        ...

    @abstractmethod
    def load(self, identifier: str) -> bool:
        """Resolve and include the file defining a class.

        Args:
            identifier: Namespace-qualified class identifier.

        Returns:
            True if the class file was found and included.
        """
        ...

    def register(
        self,
        hook: AutoloadHook | None = None,
        prepend: bool = False,
        chain: AutoloadChain | None = None,
    ) -> None:
        """Register this resolver's load (or the given hook) on a chain.

        Args:
            hook: Callable to register; defaults to self.load.
            prepend: Run ahead of previously registered hooks.
            chain: Target chain; defaults to the process-wide chain.

        Raises:
            RegistrationError: If the chain rejects the hook.
        """
        from .autoload_chain import AutoloadChain

        target = chain if chain is not None else AutoloadChain.instance()
        target.register(hook if hook is not None else self.load, prepend=prepend)
