r"""
Autoloader

This package loads classes on demand from namespace-qualified
identifiers. A ClassResolver maps an identifier such as
``App\Models\User`` to a source file using a precomputed lookup table,
a primary search root and fallback directories, then includes the file
exactly once.

Example:
    >>> import autoloader
    >>> resolver, result = autoloader.bootstrap_autoloader(
    ...     autoloader.BootstrapConfig(root_dir="/srv/app", vendor_dir="/srv/src")
    ... )
    >>> resolver.resolve("App\\Models\\User")
    PosixPath('/srv/src/App/Models/User.py')

    >>> # First reference triggers the autoload chain
    >>> User = autoloader.ClassTable.instance().get("App\\Models\\User")

    >>> # Use structured logging
    >>> autoloader.log_info("Loaded user model", {"class_identifier": "App\\Models\\User"})
"""

from __future__ import annotations

from autoloader.bootstrap import (
    bootstrap_autoloader,
    check_platform,
    detect_interface,
    render_diagnostic,
)
from autoloader.class_table import ClassTable
from autoloader.exceptions import (
    AutoloadError,
    ClassNotFoundError,
    ClassRedeclarationError,
    ConfigurationError,
    EnvironmentPreconditionError,
    IncludeError,
    LookupTableError,
    RegistrationError,
)
from autoloader.inclusion import IncludeOnce
from autoloader.logging import log_debug, log_error, log_info, log_trace, log_warn
from autoloader.lookup_table import load_include_list, load_lookup_table
from autoloader.registry import AutoloadChain, BaseResolver, ClassResolver
from autoloader.types import (
    BootstrapConfig,
    BootstrapResult,
    Interface,
    LogContext,
    LookupTable,
    PlatformDiagnostic,
)

__version__ = "0.1.0"


def version() -> str:
    """Return the package version."""
    return __version__


__all__ = [
    "__version__",
    "version",
    # Bootstrap
    "bootstrap_autoloader",
    "check_platform",
    "detect_interface",
    "render_diagnostic",
    # Resolution
    "AutoloadChain",
    "BaseResolver",
    "ClassResolver",
    "ClassTable",
    "IncludeOnce",
    # Lookup table files
    "load_lookup_table",
    "load_include_list",
    # Types
    "BootstrapConfig",
    "BootstrapResult",
    "Interface",
    "LogContext",
    "LookupTable",
    "PlatformDiagnostic",
    # Exceptions
    "AutoloadError",
    "ClassNotFoundError",
    "ClassRedeclarationError",
    "ConfigurationError",
    "EnvironmentPreconditionError",
    "IncludeError",
    "LookupTableError",
    "RegistrationError",
    # Logging
    "log_error",
    "log_warn",
    "log_info",
    "log_debug",
    "log_trace",
]
