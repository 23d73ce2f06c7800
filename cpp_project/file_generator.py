"""Low-level file-system helpers used by the *cpp_project* package.

The helpers are synchronous and stateless.  They return a
:class:`pathlib.Path` pointing to what they created and raise
:class:`~cpp_project.exceptions.FileCreationError` on failure, with the
operating system's error message appended.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .exceptions import FileCreationError

log = logging.getLogger(__name__)

__all__ = ["write_file", "make_directory", ]


def _os_reason(exc: OSError) -> str:
    return exc.strerror or str(exc)


def make_directory(path: Path | str, *, exist_ok: bool = False, mode: int = 0o777) -> Path:
    """Create the directory *path* (its parent must already exist).

    Parameters
    ----------
    path:
        Directory to create.
    exist_ok:
        If ``False`` (the default) an existing directory is an error.
    mode:
        Permission bits, subject to the process umask.
    """

    path = Path(path)
    try:
        path.mkdir(mode = mode, exist_ok = exist_ok)
    except OSError as exc:
        raise FileCreationError(f"Failed to create directory {path}: {_os_reason(exc)}") from exc
    log.debug("Created directory %s", path)
    return path


def write_file(
        target: Path | str, content: str, *, mode: str = "w", encoding: str = "utf-8", ) -> Path:
    """Write *content* to *target* atomically.

    The content is written to a temporary file next to ``target`` which is
    then moved over ``target``, so an interrupted run never leaves a
    half-written file behind.  Line endings are written verbatim, and so are
    undecodable command-line bytes (surrogate-escaped text).

    Parameters
    ----------
    target:
        Destination file path.  Its directory must exist.
    content:
        Text to write.
    mode:
        File mode – defaults to ``"w"``.
    encoding:
        Text encoding – defaults to ``"utf-8"``.
    Returns
    -------
    Path
        The path of the written file.
    """

    target = Path(target)
    tmp = target.with_name(target.name + ".tmp")
    try:
        with tmp.open(mode, encoding = encoding, errors = "surrogateescape", newline = "") as fp:
            fp.write(content)
        tmp.replace(target)
    except (OSError, UnicodeError) as exc:
        tmp.unlink(missing_ok = True)
        reason = _os_reason(exc) if isinstance(exc, OSError) else str(exc)
        raise FileCreationError(f"Failed to write {target}: {reason}") from exc
    log.debug("Wrote %s", target)
    return target
