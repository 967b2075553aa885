"""Settings for mimic-core tooling.

Philosophy: Simple, scope-aware YAML settings. The library functions take
plain arguments; settings only supply the defaults the CLI passes in.

Scope priority (most specific wins):
1. project (./.mimic/settings.yaml) - committed, team-shared
2. global (~/.mimic/settings.yaml) - user defaults

Example file:

    probe:
      max_depth: 10
      marker: .git
      extension: [".md", ".txt"]
      candidates: [README.md, README.txt]
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from dataclasses import field
from dataclasses import fields
from pathlib import Path
from typing import Any

import yaml

from mimic_core.exceptions import SettingsError
from mimic_core.git import GIT_DIR
from mimic_core.git import MAX_SEARCH_DEPTH

logger = logging.getLogger(__name__)

SECTION = "probe"


def get_mimic_home() -> Path:
    """Get the mimic home directory.

    Resolves in order:
    1. MIMIC_HOME environment variable
    2. ~/.mimic (default)
    """
    env_home = os.environ.get("MIMIC_HOME")
    if env_home:
        return Path(env_home).expanduser().resolve()
    return (Path.home() / ".mimic").resolve()


@dataclass
class SettingsPaths:
    """Standard paths for settings files."""

    global_settings: Path
    project_settings: Path

    @classmethod
    def default(cls) -> SettingsPaths:
        """Create default paths for the standard layout."""
        return cls(
            global_settings=get_mimic_home() / "settings.yaml",
            project_settings=Path.cwd() / ".mimic" / "settings.yaml",
        )


@dataclass
class ProbeSettings:
    """Defaults for repository detection, tree collection and candidate reads."""

    max_depth: int = MAX_SEARCH_DEPTH
    marker: str = GIT_DIR
    extension: str | list[str] = ""
    candidates: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProbeSettings:
        """Build settings from a merged ``probe`` section.

        Raises:
            SettingsError: On unknown keys or values of the wrong type.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise SettingsError(f"Unknown {SECTION} setting(s): {', '.join(unknown)}")

        settings = cls(**data)

        if isinstance(settings.max_depth, bool) or not isinstance(settings.max_depth, int):
            raise SettingsError(f"{SECTION}.max_depth must be an integer, got {settings.max_depth!r}")
        if settings.max_depth < 0:
            raise SettingsError(f"{SECTION}.max_depth must not be negative, got {settings.max_depth}")
        if not isinstance(settings.marker, str) or not settings.marker:
            raise SettingsError(f"{SECTION}.marker must be a non-empty string, got {settings.marker!r}")
        if not isinstance(settings.extension, str) and not _is_str_list(settings.extension):
            raise SettingsError(f"{SECTION}.extension must be a string or list of strings")
        if not _is_str_list(settings.candidates):
            raise SettingsError(f"{SECTION}.candidates must be a list of strings")
        return settings

    @property
    def extension_filter(self) -> str | tuple[str, ...]:
        """Extension in the form the tree collector accepts."""
        if isinstance(self.extension, str):
            return self.extension
        return tuple(self.extension)


def _is_str_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(item, str) for item in value)


def _read_section(path: Path) -> dict[str, Any]:
    with open(path, encoding="utf-8") as f:
        content = yaml.safe_load(f) or {}
    if not isinstance(content, dict):
        raise SettingsError(f"Settings file {path} must contain a mapping")
    section = content.get(SECTION) or {}
    if not isinstance(section, dict):
        raise SettingsError(f"'{SECTION}' in {path} must be a mapping")
    return section


def load_settings(paths: SettingsPaths | None = None) -> ProbeSettings:
    """Load and merge settings from all scopes.

    Missing files are skipped; an absent scope contributes nothing.

    Raises:
        yaml.YAMLError: If a settings file is not valid YAML.
        SettingsError: If a settings file has the wrong shape.
        OSError: If an existing settings file can't be read.
    """
    paths = paths or SettingsPaths.default()
    merged: dict[str, Any] = {}

    # Order: global -> project (most specific wins)
    for path in (paths.global_settings, paths.project_settings):
        if path.exists():
            logger.debug(f"Loading settings from {path}")
            merged.update(_read_section(path))

    return ProbeSettings.from_dict(merged)
