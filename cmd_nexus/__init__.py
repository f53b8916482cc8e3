"""
cmd_nexus
=========

A command dispatcher: maps a command name from a static registry to an
executable entry point and runs it as a child process. The usage text is
generated from the same registry so help output and dispatch never drift.

Modules:
--------
- registry: Command descriptors and registry loading.
- resolver: Command-name and executable-path resolution.
- dispatcher: Child-process launch with inherited streams.
- usage: Usage-text generation and persistence.
- result: Result type and error taxonomy.
- config: Runtime configuration.
- logging: Tagged logging utilities.
"""

__version__ = "0.1.0"

from .result import (
    Result,
    NexusError,
    UnrecognizedCommand,
    LaunchError,
    GenerationError,
    CommandNameTooLong,
    CommandDescriptionTooLong,
    WriteFailure,
    ReadFailure,
    RegistryError,
)
from .registry import CommandDescriptor, CommandRegistry, load_registry, parse_registry
from .resolver import CommandResolver, PathResolver
from .dispatcher import ProcessDispatcher, LaunchOutcome
from .usage import UsageTextGenerator, load_header, read_usage, write_usage
from .config import NexusConfig
from .logging import setup_tagged_logger, configure_global_logging
