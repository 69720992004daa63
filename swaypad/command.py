"""Swaypad command line entry point."""

import argparse
import asyncio
import sys
from logging import Logger

import shtab

from .client import run_toggle
from .config import describe_identifier
from .config_loader import ConfigLoader
from .ipc import SwayIPC, format_action
from .logging_setup import get_logger, init_logger
from .models import ExitCode, SwaypadError
from .schema import validate_config
from .version import VERSION

__all__ = ["get_parser", "main"]

# shell functions completing APP with the configured names
PREAMBLE = {
    "bash": """
_swaypad_compgen_apps() {
  swaypad --list 2>/dev/null | cut -d" " -f1 | grep "^$1"
}
""",
    "zsh": """
_swaypad_apps() {
  compadd $(swaypad --list 2>/dev/null | cut -d" " -f1)
}
""",
}

APP_COMPLETION = {
    "bash": "_swaypad_compgen_apps",
    "zsh": "_swaypad_apps",
}


def get_parser() -> argparse.ArgumentParser:
    """Return the command line parser."""
    parser = argparse.ArgumentParser(
        prog="swaypad",
        description="Launch, focus or hide an application in the sway scratchpad.",
        allow_abbrev=False,
    )
    parser.add_argument("app", nargs="?", metavar="APP", help="Application name, as configured in [apps.APP]").complete = APP_COMPLETION  # type: ignore[attr-defined]
    parser.add_argument(
        "--config",
        metavar="filename",
        default="",
        help="Use a different configuration file or directory",
    ).complete = shtab.FILE  # type: ignore[attr-defined]
    parser.add_argument(
        "--debug",
        nargs="?",
        const="",
        default=None,
        metavar="filename",
        help="Enable debug logs, optionally to a file too",
    ).complete = shtab.FILE  # type: ignore[attr-defined]
    parser.add_argument("--dry-run", action="store_true", help="Print the sway command instead of running it")
    parser.add_argument("--validate", action="store_true", help="Check the configuration and exit")
    parser.add_argument("--list", action="store_true", help="List the configured applications and exit")
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    shtab.add_argument_to(parser, ["--print-completion"], preamble=PREAMBLE)
    return parser


def run_validate(loader: ConfigLoader, config_filename: str) -> int:
    """Validate the configuration, print the findings and return the exit code."""
    raw = loader.load_raw(config_filename)
    errors, warnings = validate_config(raw)
    for error in errors:
        print(f"ERROR: {error}")
    for warning in warnings:
        print(f"WARNING: {warning}")
    if errors:
        return ExitCode.CONFIG_ERROR
    print(f"Configuration OK ({', '.join(str(f) for f in loader.loaded_files)})")
    return ExitCode.SUCCESS


def run_list(loader: ConfigLoader, config_filename: str) -> int:
    """Print the configured applications."""
    config = loader.load(config_filename)
    for name, app in sorted(config.apps.items()):
        flags = " [terminal]" if app.is_terminal else ""
        print(f"{name:20s} {describe_identifier(app.identifier)}{flags}")
    return ExitCode.SUCCESS


def run(args: argparse.Namespace, log: Logger) -> int:
    """Run the requested operation, returning the exit code.

    Raises:
        SwaypadError: on any fatal error
    """
    loader = ConfigLoader(log)
    if args.validate:
        return run_validate(loader, args.config)
    if args.list:
        return run_list(loader, args.config)

    config = loader.load(args.config)

    action = asyncio.run(run_toggle(args.app, config, SwayIPC(log), log, dry_run=args.dry_run))
    if args.dry_run:
        print(format_action(action))
    return ExitCode.SUCCESS


def main(argv: list[str] | None = None) -> None:
    """Run the command."""
    parser = get_parser()
    args = parser.parse_args(argv)

    if args.debug is not None:
        init_logger(filename=args.debug or None, force_debug=True)
    else:
        init_logger()
    log = get_logger()

    if not (args.app or args.validate or args.list):
        parser.print_usage(sys.stderr)
        print("swaypad: error: the APP argument is required", file=sys.stderr)
        sys.exit(ExitCode.USAGE_ERROR)

    try:
        exit_code = run(args, log)
    except SwaypadError as e:
        log.critical("Error: %s", e)
        exit_code = e.exit_code
    except KeyboardInterrupt:
        exit_code = ExitCode.USAGE_ERROR
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
