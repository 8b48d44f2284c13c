"""Command-line interface for the autoloader.

Usage:
    autoload check [--min-python 3.10] [--interface cli|web]
    autoload resolve 'App\\Models\\User' --vendor-dir src --root-dir app
    autoload load 'App\\Models\\User' --vendor-dir src --root-dir app

Exit codes: 0 on success, 1 when a class is not found or the platform
check fails, 2 on configuration or loading errors.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys

from .bootstrap import bootstrap_autoloader, check_platform, render_diagnostic
from .class_table import ClassTable
from .exceptions import AutoloadError, EnvironmentPreconditionError
from .lookup_table import load_lookup_table
from .registry.class_resolver import ClassResolver
from .types import BootstrapConfig

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_ERROR = 2


def configure_logging() -> None:
    """Configure stdlib logging from the AUTOLOAD_LOG environment variable."""
    log_level = os.environ.get("AUTOLOAD_LOG", "warning").upper()
    level = 5 if log_level == "TRACE" else getattr(logging, log_level, logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="autoload",
        description="Resolve and load classes from namespace-qualified identifiers",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    check = subparsers.add_parser("check", help="Check the platform requirements")
    check.add_argument("--min-python", default=None, help="Minimum Python version")
    check.add_argument("--interface", choices=["cli", "web"], default=None)

    for name, help_text in (
        ("resolve", "Print the file a class identifier resolves to"),
        ("load", "Bootstrap the autoloader and load a class"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("identifier", help="Class identifier, e.g. App\\Models\\User")
        sub.add_argument("--root-dir", default=None, help="Directory holding Autoload/")
        sub.add_argument("--vendor-dir", default=None, help="Primary search root")
        sub.add_argument("--ext", dest="extension", default=None, help="Source file extension")

    return parser


def _cmd_check(args: argparse.Namespace) -> int:
    config = BootstrapConfig.from_env(min_python=args.min_python, interface=args.interface)
    diagnostic = check_platform(config.min_python, config.interface)
    if diagnostic.ok:
        print(f"Python {diagnostic.python_version} satisfies >= {diagnostic.required_version}")
        return EXIT_OK
    sys.stderr.write(render_diagnostic(diagnostic))
    return EXIT_NOT_FOUND


def _cmd_resolve(args: argparse.Namespace) -> int:
    config = BootstrapConfig.from_env(
        root_dir=args.root_dir, vendor_dir=args.vendor_dir, extension=args.extension
    )
    resolver = ClassResolver(
        vendor_dir=config.effective_vendor_dir(),
        table=load_lookup_table(config.class_map_path()),
        extension=config.extension,
        delimiter=config.delimiter,
    )
    path = resolver.resolve(args.identifier)
    if path is None:
        print(f"Class '{args.identifier}' not found", file=sys.stderr)
        return EXIT_NOT_FOUND
    print(path)
    return EXIT_OK


def _cmd_load(args: argparse.Namespace) -> int:
    config = BootstrapConfig.from_env(
        root_dir=args.root_dir, vendor_dir=args.vendor_dir, extension=args.extension
    )
    try:
        bootstrap_autoloader(config)
    except EnvironmentPreconditionError as e:
        if e.diagnostic is not None:
            sys.stderr.write(render_diagnostic(e.diagnostic))
        return EXIT_NOT_FOUND

    table = ClassTable.instance()
    if not table.exists(args.identifier):
        print(f"Class '{args.identifier}' not found", file=sys.stderr)
        return EXIT_NOT_FOUND

    cls = table.get(args.identifier)
    print(f"{args.identifier} -> {cls.__module__}.{cls.__qualname__}")
    return EXIT_OK


COMMANDS = {
    "check": _cmd_check,
    "resolve": _cmd_resolve,
    "load": _cmd_load,
}


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``autoload`` command."""
    configure_logging()
    args = build_parser().parse_args(argv)
    try:
        return COMMANDS[args.command](args)
    except AutoloadError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
