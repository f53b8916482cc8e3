"""
Command and path resolution.

CommandResolver maps a user token to a registry descriptor by exact,
case-sensitive lookup key. PathResolver turns a descriptor's path into an
executable location under the installation root.
"""

import re
from pathlib import Path
from typing import Dict, List

from .logging import setup_tagged_logger
from .registry import CommandDescriptor, CommandRegistry
from .result import Result, UnrecognizedCommand

logger = setup_tagged_logger(__name__)

NAMESPACE_PATTERN = re.compile(r"^@[^/\s]+/[^/\s]+")


class CommandResolver:
    """Exact-match lookup over a CommandRegistry."""

    def __init__(self, registry: CommandRegistry):
        self.registry = registry
        self._by_key: Dict[str, CommandDescriptor] = {desc.key: desc for desc in registry}

    def keys(self) -> List[str]:
        """Lookup keys in registry order."""
        return [desc.key for desc in self.registry]

    def resolve(self, token: str) -> Result:
        desc = self._by_key.get(token)
        if desc is None:
            logger.debug("No command matches %r", token)
            return Result.failure(UnrecognizedCommand(token))
        logger.debug("Resolved %r -> %s", token, desc.path)
        return Result.success(desc)


class PathResolver:
    """
    Resolve descriptor paths to executable locations.

    Namespaced package paths (``@scope/name``) resolve to
    ``<root>/<packages_dir>/<path>/bin/cli``; anything else is appended to
    the root as text, so a leading ``/`` stays under the root rather than
    replacing it. Existence is not checked.
    """

    def __init__(self, root, packages_dir: str = "node_modules"):
        self.root = Path(root).resolve()
        self.packages_dir = packages_dir

    @staticmethod
    def is_namespaced(path: str) -> bool:
        return NAMESPACE_PATTERN.match(path) is not None

    def resolve(self, path: str) -> Path:
        if self.is_namespaced(path):
            return self.root / self.packages_dir / path / "bin" / "cli"
        return self.root / path.lstrip("/")
