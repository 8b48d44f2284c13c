"""Pydantic models for autoloader configuration and results.

These models carry the lookup table, bootstrap configuration and the
structured results returned by the bootstrap routine.
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from .exceptions import ConfigurationError

DEFAULT_EXTENSION = ".py"
NAMESPACE_DELIMITER = "\\"


def parse_version(version: str) -> tuple[int, ...]:
    """Parse a dotted version string into an int tuple.

    Example:
        >>> parse_version("3.10")
        (3, 10)

    Raises:
        ValueError: If a component is not an integer.
    """
    return tuple(int(part) for part in version.strip().split("."))


class Interface(str, Enum):
    """Channel through which a fatal platform diagnostic is surfaced."""

    CLI = "cli"
    WEB = "web"


class LookupTable(BaseModel):
    """Precomputed exact-match and directory-fallback data.

    Loaded once from an external file before any resolver exists and
    never mutated afterwards.

    Example:
        >>> table = LookupTable(
        ...     file={"App\\\\Foo": "/abs/Foo.py"},
        ...     dir=["/v2/", "/v1/"],
        ... )
        >>> table.dir
        ('/v2/', '/v1/')
    """

    file: dict[str, str] = Field(
        default_factory=dict,
        description="Fully-qualified class identifier to file path (exact match).",
    )
    dir: tuple[str, ...] = Field(
        default_factory=tuple,
        description="Directory prefixes searched in order after the exact match fails.",
    )

    model_config = {"extra": "forbid", "frozen": True}

    @field_validator("file", mode="before")
    @classmethod
    def none_file_is_empty(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("dir", mode="before")
    @classmethod
    def none_dir_is_empty(cls, value: Any) -> Any:
        return () if value is None else value

    @classmethod
    def empty(cls) -> LookupTable:
        """Return a table with no entries."""
        return cls()


class BootstrapConfig(BaseModel):
    """Configuration for bootstrapping the autoloader.

    Example:
        >>> config = BootstrapConfig(root_dir="/srv/app", vendor_dir="/srv")
        >>> config.class_map_path()
        PosixPath('/srv/app/Autoload/class_map.yaml')
    """

    root_dir: str = Field(
        default_factory=os.getcwd,
        description="Directory holding the Autoload/ table files.",
    )
    vendor_dir: str | None = Field(
        default=None,
        description="Primary search root. Defaults to the parent of root_dir.",
    )
    extension: str = Field(
        default=DEFAULT_EXTENSION,
        description="Source file extension appended to candidate paths.",
    )
    delimiter: str = Field(
        default=NAMESPACE_DELIMITER,
        description="Namespace delimiter rewritten to the path separator.",
    )
    prepend: bool = Field(
        default=True,
        description="Register the resolver ahead of existing hooks.",
    )
    min_python: str = Field(
        default="3.10",
        description="Minimum supported interpreter version (major.minor[.micro]).",
    )
    interface: Interface | None = Field(
        default=None,
        description="Diagnostic channel; auto-detected when unset.",
    )
    vendor_bootstrap: str | None = Field(
        default=None,
        description="Optional third-party bootstrap file included before registration.",
    )

    model_config = {"extra": "forbid"}

    @field_validator("min_python")
    @classmethod
    def min_python_is_dotted_version(cls, value: str) -> str:
        try:
            parse_version(value)
        except ValueError:
            raise ValueError(
                f"min_python must be a dotted version like '3.10', got {value!r}"
            ) from None
        return value

    def effective_vendor_dir(self) -> str:
        """Get the primary search root, defaulting to the parent of root_dir."""
        if self.vendor_dir:
            return self.vendor_dir
        return str(Path(self.root_dir).parent)

    def class_map_path(self) -> Path:
        """Path to the lookup table file."""
        return Path(self.root_dir) / "Autoload" / "class_map.yaml"

    def include_list_path(self) -> Path:
        """Path to the eager-include list file."""
        return Path(self.root_dir) / "Autoload" / "files.yaml"

    @classmethod
    def from_env(cls, **overrides: Any) -> BootstrapConfig:
        """Build a config from AUTOLOAD_* environment variables.

        Explicit keyword overrides win over the environment; None values
        are ignored so argparse defaults can be passed straight through.

        Raises:
            ConfigurationError: If a value fails validation.
        """
        values: dict[str, Any] = {}
        env_map = {
            "root_dir": "AUTOLOAD_ROOT_DIR",
            "vendor_dir": "AUTOLOAD_VENDOR_DIR",
            "extension": "AUTOLOAD_EXTENSION",
            "interface": "AUTOLOAD_INTERFACE",
            "min_python": "AUTOLOAD_MIN_PYTHON",
        }
        for field_name, env_var in env_map.items():
            env_value = os.environ.get(env_var)
            if env_value:
                values[field_name] = env_value
        values.update({k: v for k, v in overrides.items() if v is not None})
        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid autoloader configuration: {e}") from e


class PlatformDiagnostic(BaseModel):
    """Structured result of the platform precondition check.

    Returned instead of written to output so the calling harness decides
    how to surface it.
    """

    ok: bool = Field(description="Whether the platform satisfies the requirement.")
    python_version: str = Field(description="Running interpreter version.")
    required_version: str = Field(description="Minimum required version.")
    channel: Interface = Field(description="Channel the diagnostic targets.")
    issues: list[str] = Field(
        default_factory=list,
        description="Human-readable problems found.",
    )
    status_line: str | None = Field(
        default=None,
        description="Response status line for the web channel.",
    )
    message: str | None = Field(
        default=None,
        description="User-visible diagnostic text.",
    )


class BootstrapResult(BaseModel):
    """Result of bootstrapping the autoloader."""

    success: bool = Field(description="Whether bootstrap completed.")
    hook_name: str = Field(description="Qualified name of the registered hook.")
    table_files: int = Field(default=0, description="Exact-match entries in the lookup table.")
    table_dirs: int = Field(default=0, description="Fallback directories in the lookup table.")
    included_files: list[str] = Field(
        default_factory=list,
        description="Eager-include files executed during bootstrap, in order.",
    )
    vendor_bootstrap_loaded: bool = Field(
        default=False,
        description="Whether a vendor bootstrap file was included.",
    )


class LogContext(BaseModel):
    """Context fields for structured logging.

    Example:
        >>> context = LogContext(class_identifier="App\\\\Foo", operation="load")
        >>> log_debug("Loading class", context)
    """

    class_identifier: str | None = Field(
        default=None,
        description="Class identifier being resolved.",
    )
    path: str | None = Field(
        default=None,
        description="File path involved in the operation.",
    )
    hook: str | None = Field(
        default=None,
        description="Autoload hook name.",
    )
    operation: str | None = Field(
        default=None,
        description="Current operation name.",
    )


__all__ = [
    "DEFAULT_EXTENSION",
    "NAMESPACE_DELIMITER",
    "parse_version",
    "Interface",
    "LookupTable",
    "BootstrapConfig",
    "PlatformDiagnostic",
    "BootstrapResult",
    "LogContext",
]
