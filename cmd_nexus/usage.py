"""
usage.py
========

Usage-text generation from the command registry.

The generated document is a pure function of the header template and the
registry, so regenerating from unchanged inputs is byte-identical.

Layout:
-------
    <header template>
      help [command]                  Print help for a command.
      other                           General (ungrouped) commands...

    Dev:
      build                           Grouped commands, one section per group.
    <blank line>

Classes:
--------
- UsageTextGenerator: Group, sort and column-format a registry.

Functions:
----------
- load_header: Read the header template.
- read_usage: Read a persisted usage document.
- write_usage: Atomically persist a usage document.
"""

import os
import tempfile
from collections import defaultdict
from pathlib import Path
from typing import Dict, List, Optional

from .logging import setup_tagged_logger
from .registry import CommandDescriptor, CommandRegistry
from .result import (
    CommandDescriptionTooLong,
    CommandNameTooLong,
    ReadFailure,
    Result,
    WriteFailure,
)

logger = setup_tagged_logger(__name__)

INDENT = "  "
GUTTER = "  "
NAME_WIDTH = 30
MAX_PREFIX_WIDTH = 34
MAX_ROW_WIDTH = 80

# Lookup key of the entry pinned to the top of its section
PINNED_KEY = "help"


def _capitalize(group: str) -> str:
    return group[:1].upper() + group[1:]


def _sort_key(desc: CommandDescriptor):
    return (desc.key != PINNED_KEY, desc.key, desc.signature)


class UsageTextGenerator:
    """
    Render a CommandRegistry as a fixed-width usage document.

    Args:
        header: Text placed verbatim before the command sections.
    """

    def __init__(self, header: str = ""):
        self.header = header

    @staticmethod
    def partition(registry: CommandRegistry):
        """
        Split descriptors into the general bucket and named groups.

        Returns:
            (general, groups) where ``general`` is a list of descriptors and
            ``groups`` maps group name to descriptors, both sorted for output
            and ``groups`` ordered by name.
        """
        general: List[CommandDescriptor] = []
        groups: Dict[str, List[CommandDescriptor]] = defaultdict(list)
        for desc in registry:
            if desc.group:
                groups[desc.group].append(desc)
            else:
                general.append(desc)

        general.sort(key=_sort_key)
        ordered = {}
        for name in sorted(groups):
            ordered[name] = sorted(groups[name], key=_sort_key)
        return general, ordered

    @staticmethod
    def format_row(desc: CommandDescriptor) -> Result:
        prefix = INDENT + desc.signature.ljust(NAME_WIDTH) + GUTTER
        if len(prefix) > MAX_PREFIX_WIDTH:
            return Result.failure(CommandNameTooLong(desc.signature, len(prefix), MAX_PREFIX_WIDTH))
        row = prefix + desc.description
        if len(row) > MAX_ROW_WIDTH:
            return Result.failure(CommandDescriptionTooLong(desc.signature, len(row), MAX_ROW_WIDTH))
        return Result.success(row)

    def generate(self, registry: CommandRegistry) -> Result:
        """
        Build the usage document.

        Returns:
            Result wrapping the document text, or the first GenerationError
            encountered. Nothing is returned partially.
        """
        general, groups = self.partition(registry)

        sections: List[tuple] = [(None, general)]
        sections.extend(groups.items())

        lines: List[str] = []
        for name, descriptors in sections:
            if name is not None:
                lines.append("")
                lines.append(f"{_capitalize(name)}:")
            for desc in descriptors:
                row = self.format_row(desc)
                if not row.ok:
                    logger.debug("Layout check failed for %r: %s", desc.signature, row.error.tag)
                    return row
                lines.append(row.value)

        body = "\n".join(lines)
        text = self.header + body + "\n\n"
        logger.debug("Generated usage text for %d commands in %d sections", len(registry), len(sections))
        return Result.success(text)


def _read_text(path) -> Result:
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            return Result.success(f.read())
    except OSError as e:
        return Result.failure(ReadFailure(str(path), e.strerror or str(e)))


def load_header(path) -> Result:
    """Read the usage header template."""
    return _read_text(path)


def read_usage(path) -> Result:
    """Read a previously generated usage document."""
    return _read_text(path)


def write_usage(path, text: str) -> Result:
    """
    Persist ``text`` to ``path`` as UTF-8.

    The document is encoded first, then written to a temporary file in the
    target directory and moved into place, so a failed write leaves any
    existing file untouched.
    """
    path = Path(path)
    try:
        data = text.encode("utf-8")
    except UnicodeEncodeError as e:
        return Result.failure(WriteFailure(str(path), f"Text is not valid UTF-8: {e.reason}."))

    tmp_name: Optional[str] = None
    try:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        return Result.failure(WriteFailure(str(path), e.strerror or str(e)))

    logger.debug("Wrote %d bytes to %s", len(data), path)
    return Result.success(path)
