"""
Runtime configuration.

A NexusConfig is built once at process start (usually from the environment)
and passed explicitly to the components that need it.

Environment variables:
- NEXUS_ROOT            Installation root for relative command paths
- NEXUS_PACKAGES_DIR    Directory under the root holding namespaced packages
- NEXUS_REGISTRY        Command registry JSON file
- NEXUS_USAGE_HEADER    Usage-text header template
- NEXUS_USAGE           Generated usage document
- NEXUS_MIRROR_EXIT     Exit with the child's status instead of 0 (1/true/yes)
- NEXUS_LOG_LEVEL       Logging level name (default: WARNING)
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

PACKAGE_DIR = Path(__file__).resolve().parent
DATA_DIR = PACKAGE_DIR / "data"

DEFAULT_PACKAGES_DIR = "node_modules"
DEFAULT_REGISTRY = DATA_DIR / "commands.json"
DEFAULT_HEADER = DATA_DIR / "usage_header.txt"
DEFAULT_USAGE = DATA_DIR / "usage.txt"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class NexusConfig:
    """Paths and policies shared by the dispatcher and the usage tool."""

    root: Path = PACKAGE_DIR
    packages_dir: str = DEFAULT_PACKAGES_DIR
    registry_path: Path = DEFAULT_REGISTRY
    header_path: Path = DEFAULT_HEADER
    usage_path: Path = DEFAULT_USAGE
    mirror_exit_status: bool = False
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "NexusConfig":
        """Build a config from environment variables, falling back to defaults."""
        env = os.environ if environ is None else environ

        def _path(name, default):
            value = env.get(name)
            return Path(value).expanduser() if value else default

        return cls(
            root=_path("NEXUS_ROOT", PACKAGE_DIR),
            packages_dir=env.get("NEXUS_PACKAGES_DIR") or DEFAULT_PACKAGES_DIR,
            registry_path=_path("NEXUS_REGISTRY", DEFAULT_REGISTRY),
            header_path=_path("NEXUS_USAGE_HEADER", DEFAULT_HEADER),
            usage_path=_path("NEXUS_USAGE", DEFAULT_USAGE),
            mirror_exit_status=env.get("NEXUS_MIRROR_EXIT", "").strip().lower() in _TRUTHY,
            log_level=(env.get("NEXUS_LOG_LEVEL") or "WARNING").upper(),
        )
