"""Shared fixtures: temporary registries, executables and configs."""
import json
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from cmd_nexus.config import NexusConfig
from cmd_nexus.registry import parse_registry

HEADER = "Usage: nexus [options] <command> [args...]\n\nCommands:\n\n"


def make_executable(path: Path, body: str) -> Path:
    """Write a /bin/sh script at ``path`` and mark it executable."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("#!/bin/sh\n" + body, encoding="utf-8")
    path.chmod(0o755)
    return path


def build_registry(entries):
    return parse_registry(entries).unwrap()


@pytest.fixture(autouse=True)
def _plain_console(monkeypatch):
    """Keep rich output free of escape codes regardless of the host terminal."""
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    monkeypatch.delenv("TTY_COMPATIBLE", raising=False)
    monkeypatch.setenv("NO_COLOR", "1")


@pytest.fixture
def write_registry(tmp_path: Path):
    """Factory writing a registry JSON file and returning its path."""
    def _write(entries, name="commands.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(entries), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def nexus_env(tmp_path: Path, write_registry):
    """
    A complete installation under tmp_path: registry, header, usage document,
    one namespaced package and one root-relative tool.
    """
    out = tmp_path / "child.out"
    record = f'printf "%s\\n" "$@" > "{out}"\npwd >> "{out}"\nprintf "%s\\n" "$NEXUS_TEST_VAR" >> "{out}"\n'
    make_executable(tmp_path / "node_modules" / "@demo" / "echo" / "bin" / "cli", record)
    make_executable(tmp_path / "tools" / "fail", "exit 3\n")
    (tmp_path / "tools" / "noexec").write_text("#!/bin/sh\nexit 0\n", encoding="utf-8")

    entries = [
        {"name": "help [command]", "path": "@demo/help", "description": "Print help."},
        {"name": "echo [args]", "path": "@demo/echo", "description": "Echo arguments."},
        {"name": "fail", "path": "tools/fail", "description": "Exit with 3.", "group": "dev"},
        {"name": "noexec", "path": "tools/noexec", "description": "Not executable.", "group": "dev"},
        {"name": "missing", "path": "tools/missing", "description": "Not installed.", "group": "dev"},
    ]
    registry_path = write_registry(entries)
    header_path = tmp_path / "usage_header.txt"
    header_path.write_text(HEADER, encoding="utf-8")
    usage_path = tmp_path / "usage.txt"
    usage_path.write_text(HEADER + "  echo [args]  Echo arguments.\n\n", encoding="utf-8")

    config = NexusConfig(
        root=tmp_path,
        registry_path=registry_path,
        header_path=header_path,
        usage_path=usage_path,
    )
    return config, out
