"""Module export tests.

These tests verify:
- All expected symbols are exported from autoloader
- Submodule exports are available
- __all__ list is comprehensive
"""

from __future__ import annotations

import autoloader


class TestExports:
    """Test that the public API is exported."""

    def test_version(self):
        """Test version() matches __version__."""
        assert autoloader.version() == autoloader.__version__

    def test_all_names_resolve(self):
        """Test every name in __all__ is an attribute of the package."""
        for name in autoloader.__all__:
            assert hasattr(autoloader, name), name

    def test_core_exports(self):
        """Test the core resolution API is exported."""
        expected = {
            "ClassResolver",
            "AutoloadChain",
            "ClassTable",
            "IncludeOnce",
            "LookupTable",
            "bootstrap_autoloader",
            "check_platform",
            "RegistrationError",
        }
        assert expected <= set(autoloader.__all__)

    def test_registry_exports(self):
        """Test the registry subpackage exports."""
        from autoloader.registry import (
            AutoloadChain,
            BaseResolver,
            ClassResolver,
            describe_callable,
        )

        assert issubclass(ClassResolver, BaseResolver)
        assert AutoloadChain is autoloader.AutoloadChain
        assert callable(describe_callable)
