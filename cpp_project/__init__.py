"""Top‑level package for *cpp_project*."""

from __future__ import annotations

from .config import ProjectConfig, ScaffoldDefaults, load_defaults
from .exceptions import CppProjectError, FileCreationError, ProjectExistsError, WorkingDirectoryError
from .file_generator import make_directory, write_file
from .flags import Flag, FlagParser, FlagRegistry, ParsedFlag, handle_args, parse_token
from .scaffold import create_project_scaffold, render_cmakelists

# Explicitly expose the public API members
__all__ = ["Flag", "FlagRegistry", "FlagParser", "ParsedFlag", "parse_token", "handle_args", "ProjectConfig",
        "ScaffoldDefaults", "load_defaults", "create_project_scaffold", "render_cmakelists", "write_file",
        "make_directory", "CppProjectError", "ProjectExistsError", "FileCreationError", "WorkingDirectoryError", ]
