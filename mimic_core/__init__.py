"""mimic-core - async filesystem exploration helpers for build tooling.

Three mechanisms over a minimal async filesystem layer:
- Repository detection: walk up to the enclosing git root, read branch and head
- Tree collection: gather the text of every matching file under a path
- Race to success: first successful attempt wins, all failures aggregate

Philosophy: Mechanism not policy. Functions report failures to the caller
and never retry or log them.
"""

from __future__ import annotations

__version__ = "0.3.0"

# Exceptions
from mimic_core.exceptions import AllFailedError
from mimic_core.exceptions import MalformedMetadataError
from mimic_core.exceptions import MimicError
from mimic_core.exceptions import RepositoryNotFoundError
from mimic_core.exceptions import SettingsError

# Filesystem primitives
from mimic_core.fs import ensure_directory
from mimic_core.fs import list_dir
from mimic_core.fs import make_dir
from mimic_core.fs import read_text
from mimic_core.fs import stat_path

# Repository detection
from mimic_core.git import RepoMetadata
from mimic_core.git import detect_repository
from mimic_core.git import parse_head_ref
from mimic_core.git import read_metadata

# Helpers
from mimic_core.helpers import map_values
from mimic_core.helpers import pick
from mimic_core.helpers import random_item

# Racing
from mimic_core.race import FileHit
from mimic_core.race import race_to_success
from mimic_core.race import read_first_available

# Settings
from mimic_core.settings import ProbeSettings
from mimic_core.settings import SettingsPaths
from mimic_core.settings import load_settings

# Tree collection
from mimic_core.tree import collect_tree
from mimic_core.tree import matches_extension

__all__ = [
    "__version__",
    # Exceptions
    "MimicError",
    "RepositoryNotFoundError",
    "MalformedMetadataError",
    "AllFailedError",
    "SettingsError",
    # Filesystem primitives
    "stat_path",
    "read_text",
    "list_dir",
    "make_dir",
    "ensure_directory",
    # Repository detection
    "RepoMetadata",
    "detect_repository",
    "read_metadata",
    "parse_head_ref",
    # Tree collection
    "collect_tree",
    "matches_extension",
    # Racing
    "FileHit",
    "race_to_success",
    "read_first_available",
    # Helpers
    "pick",
    "map_values",
    "random_item",
    # Settings
    "ProbeSettings",
    "SettingsPaths",
    "load_settings",
]
