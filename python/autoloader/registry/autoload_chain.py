"""Autoload Chain - Ordered Hook Dispatch.

The AutoloadChain holds the process-wide list of autoload hooks. When a
class is referenced but not yet declared, the chain calls each hook with
the class identifier, in order, until one returns a truthy result.

Dispatch Contract:
1. Hooks run in registration order; prepend=True puts a hook first
2. A falsy result means "not mine" and dispatch moves to the next hook
3. The first truthy result stops dispatch and is reported as success
4. Exceptions raised by a hook propagate to the caller

Usage:
    chain = AutoloadChain.instance()
    chain.register(resolver.load)
    chain.register(legacy_resolver.load, prepend=True)

    if chain.autoload("App\\Models\\User"):
        ...
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any

from ..exceptions import RegistrationError
from ..logging import log_debug, log_info, log_trace, log_warn

AutoloadHook = Callable[[str], Any]


def describe_callable(hook: Any) -> str:
    """Return a readable qualified name for a callable.

    Bound methods render as ``ClassName.method``, functions by their
    qualified name, other callables by their type name.

    Example:
        >>> describe_callable(ClassResolver(vendor_dir="/srv").load)
        'ClassResolver.load'
    """
    qualname = getattr(hook, "__qualname__", None)
    if qualname:
        return qualname
    return type(hook).__qualname__


class AutoloadChain:
    """Ordered chain of autoload hooks.

    Implements singleton pattern for the process-wide chain; separate
    instances can still be created for isolated use.

    Attributes:
        max_hooks: Optional upper bound on registered hooks.
    """

    _instance: AutoloadChain | None = None

    def __init__(self, max_hooks: int | None = None) -> None:
        """Initialize an empty chain.

        Args:
            max_hooks: Reject registrations beyond this many hooks.
        """
        self.max_hooks = max_hooks
        self._hooks: list[AutoloadHook] = []
        self._lock = threading.RLock()

    @classmethod
    def instance(cls) -> AutoloadChain:
        """Get the process-wide chain.

        Example:
            >>> chain = AutoloadChain.instance()
            >>> assert chain is AutoloadChain.instance()
        """
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Reset the process-wide chain (primarily for tests)."""
        cls._instance = None

    def register(self, hook: AutoloadHook, prepend: bool = False) -> AutoloadChain:
        """Add a hook to the chain.

        Args:
            hook: Callable taking a class identifier and returning a bool.
            prepend: Insert ahead of previously registered hooks.

        Returns:
            Self for method chaining.

        Raises:
            RegistrationError: If the hook is not callable, is already
                registered, or the chain is full.
        """
        hook_name = describe_callable(hook)

        if not callable(hook):
            raise RegistrationError(
                f"Failed to register {hook_name} as an autoload hook: not callable"
            )

        with self._lock:
            if hook in self._hooks:
                raise RegistrationError(
                    f"Failed to register {hook_name} as an autoload hook: already registered"
                )
            if self.max_hooks is not None and len(self._hooks) >= self.max_hooks:
                raise RegistrationError(
                    f"Failed to register {hook_name} as an autoload hook: "
                    f"chain is full ({self.max_hooks} hooks)"
                )

            if prepend:
                self._hooks.insert(0, hook)
            else:
                self._hooks.append(hook)

        log_info(
            f"AutoloadChain: Registered {hook_name}",
            {"hook": hook_name, "prepend": prepend, "position": self._hooks.index(hook)},
        )
        return self

    def unregister(self, hook: AutoloadHook) -> bool:
        """Remove a hook from the chain.

        Returns:
            True if the hook was removed, False if it was not registered.
        """
        with self._lock:
            if hook in self._hooks:
                self._hooks.remove(hook)
                log_debug(f"AutoloadChain: Unregistered {describe_callable(hook)}")
                return True
            return False

    def autoload(self, identifier: str) -> bool:
        """Offer a class identifier to each hook until one succeeds.

        Args:
            identifier: The unresolved class identifier.

        Returns:
            True if a hook reported success, False if every hook declined.
        """
        # Snapshot so hooks may register further hooks while loading
        with self._lock:
            hooks = list(self._hooks)

        for hook in hooks:
            if hook(identifier):
                log_trace(
                    f"AutoloadChain: '{identifier}' loaded by {describe_callable(hook)}"
                )
                return True

        if hooks:
            log_debug(f"AutoloadChain: No hook could load '{identifier}'")
        else:
            log_warn(f"AutoloadChain: No hooks registered to load '{identifier}'")
        return False

    def hooks(self) -> list[AutoloadHook]:
        """Registered hooks in dispatch order."""
        return list(self._hooks)

    def hook_names(self) -> list[str]:
        """Qualified names of registered hooks in dispatch order."""
        return [describe_callable(h) for h in self._hooks]

    def clear(self) -> None:
        """Remove every hook."""
        with self._lock:
            self._hooks.clear()

    def __contains__(self, hook: object) -> bool:
        return hook in self._hooks

    def __len__(self) -> int:
        """Return number of hooks in the chain."""
        return len(self._hooks)


__all__ = [
    "AutoloadChain",
    "AutoloadHook",
    "describe_callable",
]
