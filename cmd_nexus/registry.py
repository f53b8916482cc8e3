"""
registry.py
===========

Static command registry: the single source for both dispatch and usage text.

Classes:
--------
- CommandDescriptor: One dispatchable command.
- CommandRegistry: Immutable, ordered collection of descriptors.

Functions:
----------
- parse_registry: Build a registry from decoded JSON data.
- load_registry: Read and parse a registry JSON file.
"""

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .logging import setup_tagged_logger
from .result import RegistryError, Result

logger = setup_tagged_logger(__name__)

_INVALID_KEY = re.compile(r"[\s\[\]]")


def lookup_key(signature: str) -> str:
    """
    Derive the lookup key from a display signature.

    The key is the leading whitespace-delimited token with any bracket
    annotation stripped, e.g. ``"help [command]"`` -> ``"help"``.
    """
    tokens = signature.split()
    if not tokens:
        return ""
    return tokens[0].split("[", 1)[0]


@dataclass(frozen=True)
class CommandDescriptor:
    """
    A registry entry describing one dispatchable command.

    Attributes:
        name: Display signature as written in the registry.
        path: Namespaced package identifier or root-relative path.
        description: One-line help text.
        group: Usage-text section, None for the general section.
        key: Exact token a user types to select this command.
    """

    name: str
    path: str
    description: str
    group: Optional[str] = None
    key: str = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "key", lookup_key(self.name))
        if self.group == "":
            object.__setattr__(self, "group", None)

    @property
    def signature(self) -> str:
        return self.name


def _find_conflict(descriptors) -> Optional[RegistryError]:
    """Return the first malformed or duplicate lookup key, if any."""
    seen: Dict[str, CommandDescriptor] = {}
    for desc in descriptors:
        if not desc.key or _INVALID_KEY.search(desc.key):
            return RegistryError(f"invalid command name. Value: `{desc.name}`.")
        if desc.key in seen:
            return RegistryError(
                f"duplicate command. `{desc.name}` collides with "
                f"`{seen[desc.key].name}` on lookup key `{desc.key}`."
            )
        seen[desc.key] = desc
    return None


class CommandRegistry:
    """
    Ordered, immutable set of command descriptors with unique lookup keys.

    Use ``CommandRegistry.build`` to get a Result; direct construction
    raises RegistryError on an invalid descriptor set.
    """

    def __init__(self, descriptors):
        self._descriptors: Tuple[CommandDescriptor, ...] = tuple(descriptors)
        error = _find_conflict(self._descriptors)
        if error is not None:
            raise error

    @classmethod
    def build(cls, descriptors) -> Result:
        """Validate ``descriptors`` and wrap the registry in a Result."""
        descriptors = tuple(descriptors)
        error = _find_conflict(descriptors)
        if error is not None:
            return Result.failure(error)
        return Result.success(cls(descriptors))

    def __iter__(self) -> Iterator[CommandDescriptor]:
        return iter(self._descriptors)

    def __len__(self):
        return len(self._descriptors)

    def __getitem__(self, index):
        return self._descriptors[index]

    @property
    def descriptors(self) -> Tuple[CommandDescriptor, ...]:
        return self._descriptors


def parse_registry(data: Any) -> Result:
    """
    Build a CommandRegistry from decoded JSON.

    Args:
        data: List of objects with ``name``, ``path``, ``description``
            (or ``desc``) and optional ``group``.

    Returns:
        Result wrapping a CommandRegistry, or a RegistryError.
    """
    if not isinstance(data, list):
        return Result.failure(RegistryError("invalid registry. Expected a list of commands."))

    descriptors: List[CommandDescriptor] = []
    for index, entry in enumerate(data):
        if not isinstance(entry, dict):
            return Result.failure(
                RegistryError(f"invalid registry entry at index {index}. Expected an object.")
            )
        description = entry.get("description", entry.get("desc"))
        missing = [
            name for name, value in (
                ("name", entry.get("name")),
                ("path", entry.get("path")),
                ("description", description),
            )
            if not isinstance(value, str)
        ]
        if missing:
            return Result.failure(
                RegistryError(
                    f"invalid registry entry at index {index}. "
                    f"Missing or non-string field(s): {', '.join(missing)}."
                )
            )
        group = entry.get("group")
        if group is not None and not isinstance(group, str):
            return Result.failure(
                RegistryError(f"invalid registry entry at index {index}. Group must be a string.")
            )
        descriptors.append(
            CommandDescriptor(
                name=entry["name"],
                path=entry["path"],
                description=description,
                group=group,
            )
        )

    return CommandRegistry.build(descriptors)


def load_registry(path) -> Result:
    """Read a registry JSON file and parse it."""
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        return Result.failure(RegistryError(f"unable to read registry `{path}`. {e.strerror or e}"))
    except json.JSONDecodeError as e:
        return Result.failure(RegistryError(f"unable to parse registry `{path}`. {e}"))

    result = parse_registry(data)
    if result.ok:
        logger.debug("Loaded %d commands from %s", len(result.value), path)
    return result
