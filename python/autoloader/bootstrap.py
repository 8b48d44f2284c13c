"""Autoloader bootstrap.

This module provides the startup routine that checks the platform,
loads the lookup table, registers the class resolver on the autoload
chain and runs the eager includes.

Example:
    >>> from autoloader import bootstrap_autoloader, BootstrapConfig
    >>>
    >>> config = BootstrapConfig(root_dir="/srv/app", vendor_dir="/srv")
    >>> resolver, result = bootstrap_autoloader(config)
    >>> print(f"Registered {result.hook_name}, {len(result.included_files)} eager files")
    >>>
    >>> # The platform check on its own never raises or prints
    >>> diagnostic = check_platform("3.10")
    >>> if not diagnostic.ok:
    ...     print(render_diagnostic(diagnostic), file=sys.stderr)
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from .exceptions import ConfigurationError, EnvironmentPreconditionError, RegistrationError
from .inclusion import IncludeOnce
from .logging import log_debug, log_error, log_info
from .lookup_table import load_include_list, load_lookup_table
from .registry.autoload_chain import describe_callable
from .registry.class_resolver import ClassResolver
from .types import (
    BootstrapConfig,
    BootstrapResult,
    Interface,
    PlatformDiagnostic,
    parse_version,
)

if TYPE_CHECKING:
    from .class_table import ClassTable
    from .registry.autoload_chain import AutoloadChain

WEB_ERROR_STATUS = "HTTP/1.1 500 Internal Server Error"
DIAGNOSTIC_HEADER = "A problem was detected on your platform:"

# CGI/WSGI gateways export these for every request
WEB_ENV_MARKERS = ("GATEWAY_INTERFACE", "SERVER_SOFTWARE", "REQUEST_METHOD")


def detect_interface() -> Interface:
    """Guess whether the process serves web requests or runs from a console."""
    if any(os.environ.get(marker) for marker in WEB_ENV_MARKERS):
        return Interface.WEB
    return Interface.CLI


def check_platform(
    min_python: str = "3.10",
    interface: Interface | str | None = None,
    version_info: tuple[int, ...] | None = None,
) -> PlatformDiagnostic:
    """Check the running interpreter against a minimum version.

    Args:
        min_python: Minimum supported version ("major.minor[.micro]").
        interface: Diagnostic channel; auto-detected when None.
        version_info: Version to check; the running interpreter when None.

    Returns:
        PlatformDiagnostic. Nothing is written to any stream.

    Raises:
        ConfigurationError: If min_python is not a dotted version.
    """
    channel = Interface(interface) if interface is not None else detect_interface()
    running = tuple(version_info if version_info is not None else sys.version_info[:3])
    try:
        required = parse_version(min_python)
    except ValueError as e:
        raise ConfigurationError(
            f"Invalid minimum Python version '{min_python}': expected major.minor[.micro]"
        ) from e
    running_str = ".".join(str(part) for part in running)

    if running[: len(required)] >= required:
        return PlatformDiagnostic(
            ok=True,
            python_version=running_str,
            required_version=min_python,
            channel=channel,
        )

    running_sentence = f"You are running {running_str}."
    issue = f'Your dependencies require a Python version ">= {min_python}". {running_sentence}'

    if channel is Interface.WEB:
        # The web body does not disclose the interpreter version
        body = issue.replace(running_sentence, "").rstrip()
        status_line: str | None = WEB_ERROR_STATUS
    else:
        body = issue
        status_line = None

    return PlatformDiagnostic(
        ok=False,
        python_version=running_str,
        required_version=min_python,
        channel=channel,
        issues=[issue],
        status_line=status_line,
        message=f"{DIAGNOSTIC_HEADER}\n\n{body}\n\n",
    )


def render_diagnostic(diagnostic: PlatformDiagnostic) -> str:
    """Render a diagnostic as the text its channel should show."""
    if diagnostic.ok:
        return ""
    text = diagnostic.message or ""
    if diagnostic.status_line:
        return f"{diagnostic.status_line}\n\n{text}"
    return text


def bootstrap_autoloader(
    config: BootstrapConfig | None = None,
    chain: AutoloadChain | None = None,
    class_table: ClassTable | None = None,
) -> tuple[ClassResolver, BootstrapResult]:
    """Bootstrap the autoloader.

    Steps:
    - Check the interpreter version (fatal on violation)
    - Load the lookup table from <root_dir>/Autoload/class_map.yaml
    - Include the vendor bootstrap file, if configured and present
    - Register the resolver's load on the autoload chain
    - Include each file listed in <root_dir>/Autoload/files.yaml once

    Args:
        config: Bootstrap configuration; read from the environment when None.
        chain: Target chain; the process-wide chain when None.
        class_table: Where loaded classes are declared.

    Returns:
        The registered resolver and a BootstrapResult.

    Raises:
        EnvironmentPreconditionError: If the interpreter is too old. No
            hook is registered in that case.
        LookupTableError: If a table file is malformed.
        RegistrationError: If the hook cannot be registered.
        IncludeError: If an eager or vendor bootstrap file fails.
    """
    config = config or BootstrapConfig.from_env()

    diagnostic = check_platform(config.min_python, config.interface)
    if not diagnostic.ok:
        log_error(f"{DIAGNOSTIC_HEADER} {diagnostic.issues[0]}")
        raise EnvironmentPreconditionError(
            f"{DIAGNOSTIC_HEADER} {diagnostic.issues[0]}", diagnostic=diagnostic
        )

    table = load_lookup_table(config.class_map_path())
    includer = IncludeOnce.instance()

    vendor_loaded = False
    if config.vendor_bootstrap and Path(config.vendor_bootstrap).is_file():
        includer.include(config.vendor_bootstrap)
        vendor_loaded = True
        log_debug(f"Included vendor bootstrap {config.vendor_bootstrap}")

    resolver = ClassResolver(
        vendor_dir=config.effective_vendor_dir(),
        table=table,
        extension=config.extension,
        delimiter=config.delimiter,
        includer=includer,
        class_table=class_table,
    )

    hook_name = describe_callable(resolver.load)
    try:
        resolver.register(prepend=config.prepend, chain=chain)
    except RegistrationError as e:
        log_error(f"Autoloader bootstrap failed: {e}", {"hook": hook_name})
        raise

    included: list[str] = []
    for file in load_include_list(config.include_list_path()):
        includer.include(file)
        included.append(file)

    log_info(
        "Autoloader bootstrapped",
        {
            "hook": hook_name,
            "vendor_dir": resolver.vendor_dir,
            "table_files": len(table.file),
            "table_dirs": len(table.dir),
            "eager_includes": len(included),
        },
    )

    return resolver, BootstrapResult(
        success=True,
        hook_name=hook_name,
        table_files=len(table.file),
        table_dirs=len(table.dir),
        included_files=included,
        vendor_bootstrap_loaded=vendor_loaded,
    )


__all__ = [
    "WEB_ERROR_STATUS",
    "parse_version",
    "detect_interface",
    "check_platform",
    "render_diagnostic",
    "bootstrap_autoloader",
]
