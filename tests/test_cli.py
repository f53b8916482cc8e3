"""End-to-end tests for the nexus and nexus-usage entry points."""

import dataclasses
import sys

import pytest

from cmd_nexus import __version__
from cmd_nexus.cli import main, usage_main

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="uses /bin/sh scripts")


def _single_error_line(err: str) -> str:
    assert err.count("\n") == 1
    return err.strip()


def test_unrecognized_command(nexus_env, capsys):
    config, out = nexus_env
    assert main(["bogus"], config=config) == 1
    captured = capsys.readouterr()
    assert _single_error_line(captured.err) == (
        "Error: invalid argument. Unrecognized/unsupported command. Value: `bogus`."
    )
    assert not out.exists()


def test_help_prints_usage_document(nexus_env, capsys):
    config, _ = nexus_env
    assert main(["help"], config=config) == 0
    assert capsys.readouterr().out == config.usage_path.read_text(encoding="utf-8")


@pytest.mark.parametrize("flag", ["-h", "--help"])
def test_help_flag_prints_usage_document(nexus_env, capsys, flag):
    config, _ = nexus_env
    assert main([flag], config=config) == 0
    assert "echo [args]" in capsys.readouterr().out


def test_no_command_prints_usage_and_fails(nexus_env, capsys):
    config, _ = nexus_env
    assert main([], config=config) == 1
    assert "Usage:" in capsys.readouterr().out


def test_version(nexus_env, capsys):
    config, _ = nexus_env
    assert main(["--version"], config=config) == 0
    assert capsys.readouterr().out.strip() == __version__


def test_unknown_global_option(nexus_env, capsys):
    config, _ = nexus_env
    assert main(["--bogus", "echo"], config=config) == 1
    assert _single_error_line(capsys.readouterr().err) == "Error: invalid option. Value: `--bogus`."


@posix_only
def test_dispatch_forwards_arguments(nexus_env, monkeypatch):
    config, out = nexus_env
    monkeypatch.setenv("NEXUS_TEST_VAR", "env-ok")
    assert main(["echo", "a", "--flag", "-x"], config=config) == 0
    lines = out.read_text().splitlines()
    assert lines[:3] == ["a", "--flag", "-x"]
    assert lines[-1] == "env-ok"


@posix_only
def test_help_command_launches_in_help_mode(nexus_env):
    config, out = nexus_env
    assert main(["help", "echo", "ignored"], config=config) == 0
    assert out.read_text().splitlines()[0] == "--help"


def test_help_for_unknown_command(nexus_env, capsys):
    config, _ = nexus_env
    assert main(["help", "nope"], config=config) == 1
    assert "Value: `nope`." in capsys.readouterr().err


@posix_only
def test_child_exit_status_not_mirrored_by_default(nexus_env):
    config, _ = nexus_env
    assert main(["fail"], config=config) == 0


@posix_only
def test_child_exit_status_mirrored_when_configured(nexus_env):
    config, _ = nexus_env
    config = dataclasses.replace(config, mirror_exit_status=True)
    assert main(["fail"], config=config) == 3


@posix_only
@pytest.mark.parametrize("command", ["missing", "noexec"])
def test_launch_failure(nexus_env, capsys, command):
    config, _ = nexus_env
    assert main([command], config=config) == 1
    line = _single_error_line(capsys.readouterr().err)
    assert line.startswith("Error: unable to launch `")
    assert command in line


def test_broken_registry_reported(nexus_env, capsys):
    config, _ = nexus_env
    config.registry_path.write_text("not json", encoding="utf-8")
    assert main(["echo"], config=config) == 1
    assert capsys.readouterr().err.startswith("Error: unable to parse registry")


def _usage_args(config, *extra):
    return [
        "--registry", str(config.registry_path),
        "--header", str(config.header_path),
        "--output", str(config.usage_path),
        *extra,
    ]


def test_usage_tool_writes_document(nexus_env, capsys):
    config, _ = nexus_env
    assert usage_main(_usage_args(config), config=config) == 0
    text = config.usage_path.read_text(encoding="utf-8")
    assert text.startswith("Usage: nexus")
    assert "\nDev:\n  fail" in text
    assert text.endswith("\n\n")
    assert "Usage text written to" in capsys.readouterr().out

    assert usage_main(_usage_args(config, "--check"), config=config) == 0


def test_usage_tool_is_byte_stable(nexus_env):
    config, _ = nexus_env
    usage_main(_usage_args(config), config=config)
    first = config.usage_path.read_bytes()
    usage_main(_usage_args(config), config=config)
    assert config.usage_path.read_bytes() == first


def test_usage_check_detects_stale_document(nexus_env, capsys):
    config, _ = nexus_env
    before = config.usage_path.read_bytes()
    assert usage_main(_usage_args(config, "--check"), config=config) == 1
    assert "out of date" in capsys.readouterr().err
    assert config.usage_path.read_bytes() == before


def test_usage_stdout(nexus_env, capsys):
    config, _ = nexus_env
    before = config.usage_path.read_bytes()
    assert usage_main(_usage_args(config, "--stdout"), config=config) == 0
    assert "  echo [args]" in capsys.readouterr().out
    assert config.usage_path.read_bytes() == before


def test_usage_tool_aborts_without_writing(nexus_env, write_registry, capsys, tmp_path):
    config, _ = nexus_env
    registry = write_registry(
        [{"name": "x" * 40, "path": "x", "description": "Too wide."}], name="wide.json"
    )
    output = tmp_path / "fresh-usage.txt"
    args = ["--registry", str(registry), "--header", str(config.header_path), "--output", str(output)]
    assert usage_main(args, config=config) == 1
    line = _single_error_line(capsys.readouterr().err)
    assert line.startswith("Error: command name is too long.")
    assert not output.exists()


def test_usage_tool_rejects_unencodable_registry_text(nexus_env, write_registry, capsys, tmp_path):
    config, _ = nexus_env
    registry = write_registry(
        [{"name": "odd", "path": "x", "description": "Lone \ud800 surrogate."}], name="odd.json"
    )
    out_dir = tmp_path / "out"
    out_dir.mkdir()
    output = out_dir / "usage.txt"
    args = ["--registry", str(registry), "--header", str(config.header_path), "--output", str(output)]
    assert usage_main(args, config=config) == 1
    assert _single_error_line(capsys.readouterr().err).startswith("Error: unable to write")
    assert list(out_dir.iterdir()) == []
