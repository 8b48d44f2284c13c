"""Custom exceptions for the autoloader package.

This module provides a hierarchy of exceptions for error handling
in class resolution, inclusion and bootstrap.

Note that a class that cannot be found by a resolver is NOT an error:
``ClassResolver.resolve`` returns None and ``ClassResolver.load`` returns
False so the next registered hook gets a chance.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .types import PlatformDiagnostic


class AutoloadError(Exception):
    """Base exception for all autoloader errors.

    Example:
        >>> try:
        ...     resolver, result = bootstrap_autoloader()
        ... except AutoloadError as e:
        ...     print(f"Autoload error: {e}")
    """

    pass


class RegistrationError(AutoloadError):
    """Raised when an autoload hook cannot be installed on the chain.

    The message always names the callable that failed to register.

    Common causes:
    - The hook is not callable
    - The hook is already registered
    - The chain has reached its hook limit
    """

    pass


class EnvironmentPreconditionError(AutoloadError):
    """Raised when the running interpreter does not meet the minimum version.

    Carries the structured diagnostic so the caller decides how to
    surface it (stderr for a console, status line + body for web).

    Example:
        >>> try:
        ...     bootstrap_autoloader(config)
        ... except EnvironmentPreconditionError as e:
        ...     print(render_diagnostic(e.diagnostic), file=sys.stderr)
    """

    def __init__(self, message: str, diagnostic: PlatformDiagnostic | None = None) -> None:
        super().__init__(message)
        self.diagnostic = diagnostic


class IncludeError(AutoloadError):
    """Raised when a resolved source file cannot be read or executed."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class ConfigurationError(AutoloadError):
    """Raised when autoloader settings are invalid.

    Example:
        >>> try:
        ...     BootstrapConfig.from_env(min_python="three")
        ... except ConfigurationError as e:
        ...     print(f"Bad settings: {e}")
    """

    pass


class LookupTableError(AutoloadError):
    """Raised when a lookup table or include list file is malformed."""

    pass


class ClassNotFoundError(AutoloadError):
    """Raised by ClassTable.get when no hook could provide the class."""

    def __init__(self, identifier: str) -> None:
        super().__init__(f"Class '{identifier}' not found")
        self.identifier = identifier


class ClassRedeclarationError(AutoloadError):
    """Raised when a different class is declared under an existing identifier."""

    pass


__all__ = [
    "AutoloadError",
    "RegistrationError",
    "EnvironmentPreconditionError",
    "ConfigurationError",
    "IncludeError",
    "LookupTableError",
    "ClassNotFoundError",
    "ClassRedeclarationError",
]
