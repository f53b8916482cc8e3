"""
nexus CLI main dispatcher.

Usage:
- nexus <command> [args...]    Resolve <command> and run it with args
- nexus help                   Print the usage document
- nexus help <command>         Run <command> with its help flag
- nexus -V | --version         Print the package version

Global options must come before the command; everything after the command
token is forwarded to the child unchanged.
"""

import sys
import argparse
from typing import List, Optional

from rich.console import Console

from .. import __version__
from ..config import NexusConfig
from ..dispatcher import ProcessDispatcher
from ..logging import configure_global_logging, setup_tagged_logger
from ..registry import load_registry
from ..resolver import CommandResolver, PathResolver
from ..result import NexusError
from ..usage import read_usage

logger = setup_tagged_logger(__name__)


def print_error(error) -> None:
    """Write a single ``Error: <message>`` line to stderr."""
    console = Console(stderr=True)
    console.print(
        f"Error: {error}",
        style="red",
        markup=False,
        highlight=False,
        emoji=False,
        soft_wrap=True,
    )


def _build_parser():
    parser = argparse.ArgumentParser(
        prog='nexus',
        description='Run a registered command as a child process',
        add_help=False,
    )
    parser.add_argument('-h', '--help', action='store_true', dest='show_help')
    parser.add_argument('-V', '--version', action='store_true', dest='show_version')
    return parser


def _split_argv(argv: List[str]):
    """Split argv into (global options, command token, forwarded args)."""
    for index, token in enumerate(argv):
        if not token.startswith('-'):
            return argv[:index], token, argv[index + 1:]
    return argv, None, []


def _print_usage(config: NexusConfig) -> int:
    result = read_usage(config.usage_path)
    if not result.ok:
        print_error(result.error)
        return 1
    print(result.value, end='')
    return 0


def main(argv: Optional[List[str]] = None, config: Optional[NexusConfig] = None, dispatcher=None):
    """
    Main entry point for the nexus CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])
        config: Runtime configuration (defaults to NexusConfig.from_env())
        dispatcher: ProcessDispatcher to launch children with

    Returns:
        Process exit status.
    """
    argv = list(sys.argv[1:] if argv is None else argv)
    config = config or NexusConfig.from_env()
    configure_global_logging(config.log_level)

    options, command, rest = _split_argv(argv)
    args, unknown = _build_parser().parse_known_args(options)
    if unknown:
        print_error(f"invalid option. Value: `{unknown[0]}`.")
        return 1

    if args.show_version:
        print(__version__)
        return 0
    if args.show_help:
        return _print_usage(config)
    if command is None:
        status = _print_usage(config)
        return 1 if status == 0 else status

    help_mode = command == 'help'
    if help_mode:
        if not rest:
            return _print_usage(config)
        command = rest[0]
        rest = []

    try:
        registry = load_registry(config.registry_path).unwrap()
        desc = CommandResolver(registry).resolve(command).unwrap()
        executable = PathResolver(config.root, config.packages_dir).resolve(desc.path)
        dispatcher = dispatcher or ProcessDispatcher()
        outcome = dispatcher.dispatch(executable, rest, help_mode=help_mode).unwrap()
    except NexusError as e:
        logger.debug("Dispatch of %r failed: %s", command, e.tag)
        print_error(e)
        return 1

    if config.mirror_exit_status:
        return outcome.exit_status()
    return 0


if __name__ == '__main__':
    sys.exit(main())
