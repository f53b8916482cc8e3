"""
Usage-text maintenance command.

Commands:
- nexus-usage                  Regenerate the usage document from the registry
- nexus-usage --check          Exit 1 if the stored document is out of date
- nexus-usage --stdout         Print the generated document instead of writing it
"""

import sys
import argparse
import logging
from typing import List, Optional

from rich.console import Console

from ..config import NexusConfig
from ..logging import configure_global_logging
from ..registry import load_registry
from ..result import NexusError
from ..usage import UsageTextGenerator, load_header, read_usage, write_usage
from .main import print_error


def add_usage_arguments(parser, config: NexusConfig):
    """Add usage-generation arguments to ``parser``."""
    parser.add_argument(
        '--registry',
        default=str(config.registry_path),
        help=f'Command registry JSON (default: {config.registry_path})'
    )

    parser.add_argument(
        '--header',
        default=str(config.header_path),
        help=f'Usage header template (default: {config.header_path})'
    )

    parser.add_argument(
        '--output',
        default=str(config.usage_path),
        help=f'Usage document to write (default: {config.usage_path})'
    )

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        '--check',
        action='store_true',
        help='Compare against the stored document without writing'
    )
    mode.add_argument(
        '--stdout',
        action='store_true',
        help='Print the generated document instead of writing it'
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable debug logging'
    )

    return parser


def generate_usage(registry_path, header_path) -> str:
    """Load inputs and return the usage document; raises NexusError."""
    registry = load_registry(registry_path).unwrap()
    header = load_header(header_path).unwrap()
    return UsageTextGenerator(header).generate(registry).unwrap()


def handle_usage(args):
    """Handle a parsed nexus-usage invocation."""
    console = Console()

    try:
        text = generate_usage(args.registry, args.header)

        if args.stdout:
            print(text, end='')
            return 0

        if args.check:
            current = read_usage(args.output)
            if not current.ok or current.value != text:
                print_error(f"usage text is out of date. Run `nexus-usage` to regenerate. File: `{args.output}`.")
                return 1
            console.print(f"[green]✓[/green] Usage text is up to date: {args.output}")
            return 0

        write_usage(args.output, text).unwrap()
    except NexusError as e:
        print_error(e)
        return 1

    console.print(f"[green]✓[/green] Usage text written to: {args.output}")
    return 0


def main(argv: Optional[List[str]] = None, config: Optional[NexusConfig] = None):
    """
    Entry point for nexus-usage.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])
        config: Runtime configuration (defaults to NexusConfig.from_env())
    """
    config = config or NexusConfig.from_env()
    parser = argparse.ArgumentParser(
        prog='nexus-usage',
        description='Regenerate the nexus usage document from the command registry',
    )
    add_usage_arguments(parser, config)
    args = parser.parse_args(argv)

    configure_global_logging(logging.DEBUG if args.verbose else config.log_level)
    return handle_usage(args)


if __name__ == '__main__':
    sys.exit(main())
