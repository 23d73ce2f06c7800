"""Command‑line interface for the **cpp_project** package.

``cpp_project <project_name> [flags]`` creates a minimal CMake/C++ project
in the current directory.

Implementation details
----------------------
* Uses **Typer** for the entry point.  Typer's own option handling is
  switched off for the single command: every token is handed unchanged to
  :func:`cpp_project.flags.handle_args`, which drives the flag handlers
  defined here.
* The handlers fill in a :class:`cpp_project.config.ProjectConfig`.
* All file‑system work is delegated to
  :func:`cpp_project.scaffold.create_project_scaffold`.
* Errors derived from :class:`cpp_project.exceptions.CppProjectError` are
  printed to standard error and turned into exit code 1.

The CLI is **stateless** – :func:`run` builds a fresh registry and
configuration for every call.
"""

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import List, Optional

import typer

from cpp_project.config import ProjectConfig, load_defaults
from cpp_project.exceptions import CppProjectError, WorkingDirectoryError
from cpp_project.flags import HELP_FLAG, FlagRegistry, handle_args, parse_token
from cpp_project.scaffold import create_project_scaffold, project_directory

log = logging.getLogger(__name__)

USAGE = ("Usage:\n"
         "\tcpp_project <project_name> [flags]\n"
         "\n"
         "Flags:\n"
         "\t-h, --help\t\t\t: Outputs this message.\n"
         "\t-n, --name=<name>\t\t: Sets the project binary's name.\n"
         "\t-d, --description=<desc>\t: Sets the project's description\n"
         "\t-v, --version=<ver>\t\t: Sets the project version.\n"
         "\t-s, --shared\t\t\t: Makes the project a shared library.\n")

REQUIRED_PARAMS = 1

app = typer.Typer(name = "cpp_project", add_completion = False, help = "Generate a minimal CMake C++ project")


# ---------------------------------------------------------------------------
# Flag handlers
# ---------------------------------------------------------------------------


def _set_name(config: ProjectConfig, value: str | None) -> None:
    if value is None:
        return
    config.explicit_name = value


def _set_description(config: ProjectConfig, value: str | None) -> None:
    if value is None:
        return
    config.description = value


def _set_version(config: ProjectConfig, value: str | None) -> None:
    if value is None:
        return
    config.version = value


def _set_shared(config: ProjectConfig, value: str | None) -> None:
    config.shared = True


def _set_debug(config: ProjectConfig, value: str | None) -> None:
    config.debug = True


def _show_help(config: ProjectConfig, usage: str | None) -> None:
    """Print the usage text and end the run successfully."""
    typer.echo(usage or USAGE, nl = False)
    raise typer.Exit()


def build_registry() -> FlagRegistry:
    """Return a registry with the flags understood by ``cpp_project``."""
    registry = FlagRegistry()
    registry.register(HELP_FLAG, _show_help, short = "h")
    registry.register("name", _set_name, short = "n")
    registry.register("shared", _set_shared, short = "s")
    registry.register("version", _set_version, short = "v")
    registry.register("description", _set_description, short = "d")
    registry.register("debug", _set_debug)
    return registry


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _setup_logging(debug: bool) -> None:
    """Configure the root logger; ``DEBUG`` when *debug* is set, ``WARNING`` otherwise."""
    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(
            level = level, format = "[%(asctime)s] %(levelname)s %(name)s: %(message)s", datefmt = "%H:%M:%S", )


def _debug_requested(registry: FlagRegistry, args: Sequence[str]) -> bool:
    """Tell whether a flag after the positional arguments enables debug logging."""
    debug = registry.lookup("debug")
    return any(registry.lookup(parse_token(token).name) is debug for token in args[REQUIRED_PARAMS:])


def _printable(text: object) -> str:
    """Return *text* with undecodable command-line bytes shown as ``\\xNN`` escapes."""
    return str(text).encode("utf-8", "surrogateescape").decode("utf-8", "backslashreplace")


def _working_directory() -> Path:
    try:
        return Path.cwd()
    except OSError as exc:
        raise WorkingDirectoryError(f"Couldn't get cwd: {exc.strerror or exc}") from exc


def _show_project_info(config: ProjectConfig, project_dir: Path) -> None:
    typer.echo("Project Information:")
    typer.echo(f"\tName: {_printable(config.name)}")
    typer.echo(f"\tVersion: {_printable(config.version)}")
    if config.description is not None:
        typer.echo(f"\tDescription: {_printable(config.description)}")
    typer.echo(f"\tShared: {int(config.shared)}")
    typer.echo(f"\tDirectory: {_printable(project_dir)}")


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------


def run(args: Sequence[str], cwd: Path | str | None = None) -> int:
    """Run the generator for *args* (program name excluded) and return the exit code.

    The project is created inside *cwd*, or the current working directory
    when *cwd* is ``None``.
    """
    args = list(args)
    registry = build_registry()
    _setup_logging(_debug_requested(registry, args))
    try:
        config = ProjectConfig(project_name = args[0] if args else "")
        if not handle_args(args, registry, config, USAGE, REQUIRED_PARAMS):
            return 0

        config.apply_defaults(load_defaults())
        log.debug(
                "Binary name %r (%s)", config.name, "defaulted" if config.name_is_default else "explicit")
        log.debug("Parsed configuration: %s", config)

        root = _working_directory() if cwd is None else Path(cwd)
        project_dir = project_directory(root, config)
        _show_project_info(config, project_dir)
        create_project_scaffold(root, config)
    except typer.Exit as exc:
        return exc.exit_code
    except CppProjectError as exc:
        typer.echo(_printable(exc), err = True)
        return 1
    return 0


@app.command(
        help = "Create a CMake C++ project named PROJECT_NAME in the current directory.", add_help_option = False,
        context_settings = {"ignore_unknown_options": True, "allow_extra_args": True}, )
def scaffold(
        tokens: Optional[List[str]] = typer.Argument(
                None, metavar = "<project_name> [flags]", show_default = False,
                help = "Project name followed by flags.", ), ) -> None:
    """Create the project; flags are parsed by :mod:`cpp_project.flags`."""
    raise typer.Exit(code = run(tokens or []))


def main() -> None:  # pragma: no cover – thin wrapper
    """Entry point used by the ``cpp_project`` console script and ``python -m cpp_project``."""
    app()


if __name__ == "__main__":
    main()
