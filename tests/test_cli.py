"""End‑to‑end tests for the ``cpp_project`` command line.

:func:`cpp_project.cli.run` is called directly for most cases; a few tests go
through the Typer application with :class:`typer.testing.CliRunner` to check
that raw tokens reach the flag parser unchanged.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import pytest
from typer.testing import CliRunner

from cpp_project import cli
from cpp_project.cli import USAGE, app, build_registry, run
from cpp_project.exceptions import CppProjectError


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def _tree(root: Path) -> list[str]:
    return sorted(str(p.relative_to(root)) for p in root.rglob("*"))


# ---------------------------------------------------------------------------
# run()
# ---------------------------------------------------------------------------


def test_shared_with_custom_name(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert run(["myapp", "-n=custom", "-s"], cwd = tmp_path) == 0

    out = capsys.readouterr().out
    assert out == ("Project Information:\n\tName: custom\n\tVersion: 1.0.0\n\tShared: 1\n"
                   f"\tDirectory: {tmp_path / 'myapp'}\n")
    assert _tree(tmp_path) == ["myapp", "myapp/CMakeLists.txt", "myapp/include", "myapp/src", "myapp/src/main.cpp"]
    cmakelists = (tmp_path / "myapp" / "CMakeLists.txt").read_text()
    assert cmakelists.startswith("cmake_minimum_required(VERSION 3.10)\n\nproject(myapp\n")
    assert cmakelists.endswith("add_library(custom SHARED ${SOURCE_FILES})")


def test_defaults(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert run(["myapp"], cwd = tmp_path) == 0

    out = capsys.readouterr().out
    assert "\tName: myapp\n\tVersion: 1.0.0\n\tShared: 0\n" in out
    assert "Description" not in out
    cmakelists = (tmp_path / "myapp" / "CMakeLists.txt").read_text()
    assert cmakelists.endswith("add_executable(myapp ${SOURCE_FILES})")


def test_version_and_description(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert run(["lib", "--version=2.0.1", "--description=A small demo", "--unknown"], cwd = tmp_path) == 0

    out = capsys.readouterr().out
    assert "\tVersion: 2.0.1\n\tDescription: A small demo\n" in out
    cmakelists = (tmp_path / "lib" / "CMakeLists.txt").read_text()
    assert "\t\tVERSION 2.0.1\n\t\tDESCRIPTION \"A small demo\"\n" in cmakelists


def test_empty_value_keeps_default(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert run(["myapp", "--name=", "-v="], cwd = tmp_path) == 0
    assert "\tName: myapp\n\tVersion: 1.0.0\n" in capsys.readouterr().out


def test_second_run_fails(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert run(["myapp"], cwd = tmp_path) == 0
    before = _tree(tmp_path)
    capsys.readouterr()

    assert run(["myapp", "-s"], cwd = tmp_path) == 1
    assert "already exists" in capsys.readouterr().err
    assert _tree(tmp_path) == before
    assert (tmp_path / "myapp" / "CMakeLists.txt").read_text().endswith("add_executable(myapp ${SOURCE_FILES})")


def test_no_arguments_prints_usage(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert run([], cwd = tmp_path) == 0
    assert capsys.readouterr().out == USAGE
    assert _tree(tmp_path) == []


@pytest.mark.parametrize("args", [["-h"], ["--help"], ["--help=x"], ["myapp", "-s", "-h"]])
def test_help_exits_without_scaffolding(tmp_path: Path, capsys: pytest.CaptureFixture[str], args: list[str]) -> None:
    assert run(args, cwd = tmp_path) == 0
    assert capsys.readouterr().out == USAGE
    assert _tree(tmp_path) == []


def test_leading_flag_is_not_a_project_name(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert run(["--shared", "myapp"], cwd = tmp_path) == 0
    assert capsys.readouterr().out == ""
    assert _tree(tmp_path) == []


def test_uses_current_directory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    assert run(["myapp"]) == 0
    assert (tmp_path / "myapp" / "src" / "main.cpp").is_file()


def test_registry_aliases() -> None:
    registry = build_registry()
    for short, name in [("h", "help"), ("n", "name"), ("s", "shared"), ("v", "version"), ("d", "description")]:
        assert registry.lookup(short) is registry.lookup(name)
    assert registry.lookup("debug") is not None


# ---------------------------------------------------------------------------
# Typer application
# ---------------------------------------------------------------------------


def test_cli_scaffold(runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(app, ["myapp", "-n=custom", "--shared", "--description=demo"])
    assert result.exit_code == 0, result.output
    assert "\tName: custom\n" in result.stdout
    cmakelists = (tmp_path / "myapp" / "CMakeLists.txt").read_text()
    assert "DESCRIPTION \"demo\"" in cmakelists
    assert cmakelists.endswith("add_library(custom SHARED ${SOURCE_FILES})")


def test_cli_help(runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert result.stdout == USAGE


def test_cli_no_arguments(runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(app, [])
    assert result.exit_code == 0
    assert result.stdout == USAGE


def test_cli_existing_project(runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    (tmp_path / "myapp").mkdir()
    result = runner.invoke(app, ["myapp"])
    assert result.exit_code == 1
    assert not (tmp_path / "myapp" / "src").exists()


# ---------------------------------------------------------------------------
# Failures and edge cases
# ---------------------------------------------------------------------------


def test_undecodable_description(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert run(["myapp", os.fsdecode(b"--description=\xff")], cwd = tmp_path) == 0
    assert "\tDescription: \\xff\n" in capsys.readouterr().out
    assert b"DESCRIPTION \"\xff\"" in (tmp_path / "myapp" / "CMakeLists.txt").read_bytes()
    assert _tree(tmp_path / "myapp") == ["CMakeLists.txt", "include", "src", "src/main.cpp"]


def test_undecodable_project_name(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    name = os.fsdecode(b"app\xfe")
    assert run([name], cwd = tmp_path) == 0
    assert "\tName: app\\xfe\n" in capsys.readouterr().out
    assert b"add_executable(app\xfe ${SOURCE_FILES})" in (tmp_path / name / "CMakeLists.txt").read_bytes()


def test_deleted_working_directory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch,
                                   capsys: pytest.CaptureFixture[str]) -> None:
    gone = tmp_path / "gone"
    gone.mkdir()
    monkeypatch.chdir(gone)
    gone.rmdir()

    assert run(["myapp"]) == 1
    assert "Couldn't get cwd" in capsys.readouterr().err


def test_unwritable_root(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    root = tmp_path / "plain.txt"
    root.write_text("not a directory")

    assert run(["myapp"], cwd = root) == 1
    assert "Failed to create directory" in capsys.readouterr().err
    assert _tree(tmp_path) == ["plain.txt"]


def test_broken_defaults_do_not_block_help(tmp_path: Path, monkeypatch: pytest.MonkeyPatch,
                                           capsys: pytest.CaptureFixture[str]) -> None:
    def _broken_defaults() -> None:
        raise CppProjectError("Failed to load defaults")

    monkeypatch.setattr(cli, "load_defaults", _broken_defaults)

    assert run(["--help"], cwd = tmp_path) == 0
    assert run([], cwd = tmp_path) == 0
    assert capsys.readouterr().out == USAGE + USAGE

    assert run(["myapp"], cwd = tmp_path) == 1
    assert "Failed to load defaults" in capsys.readouterr().err
    assert _tree(tmp_path) == []


def test_debug_logs_parsed_flags(tmp_path: Path, monkeypatch: pytest.MonkeyPatch,
                                 caplog: pytest.LogCaptureFixture) -> None:
    """Logging is configured before any flag is dispatched."""

    def _setup_logging(debug: bool) -> None:
        if debug:
            caplog.set_level(logging.DEBUG)

    monkeypatch.setattr(cli, "_setup_logging", _setup_logging)

    assert run(["myapp", "--debug", "--bogus"], cwd = tmp_path) == 0
    messages = [record.getMessage() for record in caplog.records]
    assert "Ignoring unrecognised flag '--bogus'" in messages
    assert "Dispatching flag 'debug' with value None" in messages
    assert any(message.startswith("Wrote ") for message in messages)


def test_no_debug_logs_without_flag(tmp_path: Path, monkeypatch: pytest.MonkeyPatch,
                                    caplog: pytest.LogCaptureFixture) -> None:
    def _setup_logging(debug: bool) -> None:
        if debug:
            caplog.set_level(logging.DEBUG)

    monkeypatch.setattr(cli, "_setup_logging", _setup_logging)

    assert run(["debug", "--bogus"], cwd = tmp_path) == 0
    assert not [record for record in caplog.records if record.levelno == logging.DEBUG]
