"""
C++ project scaffold generator.
Creates `<project_name>/` with `include/`, `src/`, a `CMakeLists.txt` and a hello-world `src/main.cpp`.
Refuses to touch a directory that already exists.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .config import ProjectConfig
from .exceptions import ProjectExistsError
from .file_generator import make_directory, write_file

log = logging.getLogger(__name__)

CMAKELISTS_TEMPLATE = """cmake_minimum_required(VERSION {cmake_minimum_version})

project({project_name}
\t\tVERSION {version}
\t\tDESCRIPTION "{description}"
\t\tLANGUAGES CXX)

set(CMAKE_CXX_STANDARD {cxx_standard})
set(CMAKE_CXX_STANDARD_REQUIRED ON)

include_directories(include)

file(GLOB_RECURSE SOURCE_FILES "src/*.cpp" "src/*.c")
{target}"""

EXECUTABLE_TARGET = "add_executable({name} ${{SOURCE_FILES}})"
SHARED_LIBRARY_TARGET = "add_library({name} SHARED ${{SOURCE_FILES}})"

MAIN_CONTENT = """#include <cstdio>

int main(int argc, char* argv[]) {
\tprintf("Hello, world!\\n");
}"""


def render_cmakelists(config: ProjectConfig) -> str:
    """Return the ``CMakeLists.txt`` text for *config*."""
    target = SHARED_LIBRARY_TARGET if config.shared else EXECUTABLE_TARGET
    return CMAKELISTS_TEMPLATE.format(
            cmake_minimum_version = config.cmake_minimum_version, project_name = config.project_name,
            version = config.version, description = config.description or "", cxx_standard = config.cxx_standard,
            target = target.format(name = config.name), )


def project_directory(root: Path | str, config: ProjectConfig) -> Path:
    """Return the directory the project of *config* is generated into."""
    return Path(root) / config.project_name


def _create_directories(project_dir: Path) -> None:
    """Create the directory structure for the project."""
    make_directory(project_dir)
    for sub in ("include", "src"):
        make_directory(project_dir / sub, exist_ok = True)


def _create_files(project_dir: Path, config: ProjectConfig) -> None:
    """Create the files for the project."""
    files_to_create = {"CMakeLists.txt": render_cmakelists(config), "src/main.cpp": MAIN_CONTENT, }
    for file, content in files_to_create.items():
        write_file(project_dir / file, content)


def create_project_scaffold(root: Path | str, config: ProjectConfig) -> Path:
    """
    Create the project described by *config* inside *root*.

    Nothing is written when the project directory already exists.  A failure
    part way through leaves the directories and files created so far on disk.
    """
    project_dir = project_directory(root, config)
    if project_dir.exists() or project_dir.is_symlink():
        raise ProjectExistsError(f"Project directory already exists: {project_dir}")

    _create_directories(project_dir)
    _create_files(project_dir, config)
    log.debug("Scaffold created at %s", project_dir)

    return project_dir
