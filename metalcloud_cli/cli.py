"""
CLI — Command line front end

    metalcloud-cli <subject> <predicate> [--flags]
    metalcloud-cli help
    metalcloud-cli config
    metalcloud-cli --version

The first two words select a command from the registry; the rest are that
command's flags. main() returns the process exit code:

    0  success
    1  error reported by the CLI or the API client
    2  usage error (unknown flag, missing predicate)
"""

import sys
from typing import List, Optional

import structlog

from . import __version__
from .api.client import load_client
from .commands import find_command, format_help
from .config import ConfigManager, get_config
from .console import get_console
from .core.arguments import ArgValue
from .errors import MetalCloudCLIError
from .log import configure_logging

logger = structlog.get_logger()

HELP_WORDS = ("help", "-h", "--help")
VERSION_WORDS = ("version", "-V", "--version")


def _apply_default_format(command, default_format: str) -> None:
    """Use display.format from config when --format was not given."""
    value = command.arguments.get("format")
    if value is not None and not value.present and default_format:
        command.arguments["format"] = ArgValue.of_str(default_format)


def _print_error(message: str) -> None:
    print(f"Error: {message}", file=sys.stderr)


def run(argv: List[str]) -> str:
    """
    Find, initialize and execute the command named by argv.

    Returns:
        Text to print

    Raises:
        MetalCloudCLIError: For CLI level failures
        SystemExit: On flag parsing errors (argparse)
    """
    command = find_command(argv[0], argv[1])
    command.init(argv[2:])

    config = get_config()
    configure_logging(config.logging.level)

    _apply_default_format(command, config.display.format)

    client = load_client(config.api, command.endpoint)
    return command.run(client, get_console())


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for metalcloud-cli.

    Uses the command registry: argv[0:2] select the command and its own
    argparse parser handles the remaining flags.
    """
    argv = list(sys.argv[1:] if argv is None else argv)

    if not argv or argv[0] in HELP_WORDS:
        print(format_help())
        return 0

    if argv[0] in VERSION_WORDS:
        print(f"metalcloud-cli {__version__}")
        return 0

    if argv[0] == "config" and len(argv) == 1:
        try:
            print(ConfigManager().display())
        except MetalCloudCLIError as e:
            _print_error(str(e))
            return 1
        return 0

    if len(argv) < 2:
        _print_error(f"Missing predicate for '{argv[0]}'")
        print(format_help(), file=sys.stderr)
        return 2

    try:
        output = run(argv)
    except SystemExit as e:
        # argparse: --help exits 0, usage errors exit 2
        return e.code if isinstance(e.code, int) else 2
    except MetalCloudCLIError as e:
        _print_error(str(e))
        return 1
    except Exception as e:
        # Errors raised by the API client are reported unchanged
        logger.debug("command_failed", error_type=type(e).__name__)
        _print_error(str(e))
        return 1

    if output:
        sys.stdout.write(output if output.endswith("\n") else output + "\n")

    return 0


if __name__ == '__main__':
    sys.exit(main())
