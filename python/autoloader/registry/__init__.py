r"""Class resolver infrastructure.

Resolvers map namespace-qualified class identifiers to source files and
include them once. Their load methods are registered as hooks on the
AutoloadChain, which offers each unresolved identifier to the hooks in
order until one succeeds.

Built-in Resolvers:
- ClassResolver: class map -> vendor dir -> fallback dirs

Custom Resolvers:
Extend BaseResolver and register it like the built-in one:

    from autoloader.registry import BaseResolver

    class LegacyResolver(BaseResolver):
        name = "legacy"

        def resolve(self, identifier):
            ...

        def load(self, identifier):
            ...

    LegacyResolver().register(prepend=True)
"""

from __future__ import annotations

from .autoload_chain import AutoloadChain, AutoloadHook, describe_callable
from .base_resolver import BaseResolver
from .class_resolver import ClassResolver

__all__ = [
    # Resolver base class
    "BaseResolver",
    # Built-in resolver
    "ClassResolver",
    # Hook chain
    "AutoloadChain",
    "AutoloadHook",
    "describe_callable",
]
