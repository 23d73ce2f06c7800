"""Custom exception hierarchy for the cpp_project package.

All public functions raise :class:`CppProjectError` (or a subclass) so
that callers can catch a single exception type.  This also allows the
CLI to catch all exceptions and print a diagnostic before exiting.
"""


class CppProjectError(RuntimeError):
    """Base exception for all cpp_project related errors."""


class ProjectExistsError(CppProjectError):
    """Raised when the target project directory is already present."""


class FileCreationError(CppProjectError):
    """Raised when a directory or file of the scaffold cannot be created."""


class WorkingDirectoryError(CppProjectError):
    """Raised when the current working directory cannot be determined."""
