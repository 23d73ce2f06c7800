"""Project configuration for the scaffold generator.

:class:`ProjectConfig` is the context object handed to every flag handler;
the handlers fill it in and the scaffold generator reads it back.  Its
starting values come from :class:`ScaffoldDefaults`, which is loaded from a
JSON file shipped with the package.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError

from .exceptions import CppProjectError

log = logging.getLogger(__name__)

__all__ = ["ScaffoldDefaults", "ProjectConfig", "load_defaults", "DEFAULTS_FILE", ]

DEFAULTS_FILE = Path(__file__).parent / "data" / "defaults.json"
DEFAULTED_FIELDS = ("version", "cmake_minimum_version", "cxx_standard")


class ScaffoldDefaults(BaseModel):
    """Values used when the command line does not override them."""

    version: str = "1.0.0"
    cmake_minimum_version: str = "3.10"
    cxx_standard: int = 17


class ProjectConfig(BaseModel):
    """Settings of the project being generated.

    The binary name is either *defaulted* (``explicit_name`` is ``None`` and
    the project name is used) or *explicit* (set with ``--name``).  Use
    :attr:`name` to get the effective value.
    """

    model_config = ConfigDict(validate_assignment = True)

    project_name: str
    explicit_name: str | None = None
    version: str = "1.0.0"
    description: str | None = None
    shared: bool = False
    debug: bool = False
    cmake_minimum_version: str = "3.10"
    cxx_standard: int = 17

    @property
    def name(self) -> str:
        if self.explicit_name is None:
            return self.project_name
        return self.explicit_name

    @property
    def name_is_default(self) -> bool:
        return self.explicit_name is None

    def apply_defaults(self, defaults: ScaffoldDefaults) -> ProjectConfig:
        """Fill in every default-backed field that was not set explicitly.

        Handlers may run before the defaults are loaded; values they assigned
        are kept.
        """
        for field in DEFAULTED_FIELDS:
            if field not in self.model_fields_set:
                setattr(self, field, getattr(defaults, field))
        return self

    @classmethod
    def from_defaults(
            cls, project_name: str, defaults: ScaffoldDefaults | None = None
            ) -> ProjectConfig:
        """Create a configuration for *project_name* seeded from *defaults*."""
        return cls(project_name = project_name).apply_defaults(defaults or ScaffoldDefaults())


def load_defaults(config_path: str | Path | None = None) -> ScaffoldDefaults:
    """Load scaffold defaults from JSON, tolerant to a missing file.

    Parameters
    ----------
    config_path:
        Path to the JSON file.  A directory is searched for
        ``defaults.json``.  When the file does not exist the packaged
        defaults are used, and when those are missing as well the built-in
        values of :class:`ScaffoldDefaults` apply.

    Returns
    -------
    ScaffoldDefaults
        Parsed defaults.
    """
    cfg_file = Path(config_path) if config_path is not None else DEFAULTS_FILE
    if cfg_file.is_dir():
        cfg_file = cfg_file / DEFAULTS_FILE.name

    if not cfg_file.exists():
        if cfg_file != DEFAULTS_FILE and DEFAULTS_FILE.exists():
            log.debug("Defaults file %s not found, using %s", cfg_file, DEFAULTS_FILE)
            cfg_file = DEFAULTS_FILE
        else:
            log.debug("No defaults file found, using built-in defaults")
            return ScaffoldDefaults()

    try:
        return ScaffoldDefaults.model_validate_json(cfg_file.read_text(encoding = "utf-8"))
    except (OSError, ValidationError) as exc:
        raise CppProjectError(f"Failed to load defaults from {cfg_file}: {exc}") from exc
