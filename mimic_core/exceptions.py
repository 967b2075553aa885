"""Exception hierarchy for mimic-core.

Filesystem failures are not wrapped: the FS primitives raise the native
``FileNotFoundError`` / ``OSError`` family and every component lets them
propagate to its caller as-is. The classes below cover the conditions that
have no native counterpart.
"""

from __future__ import annotations

from pathlib import Path


class MimicError(Exception):
    """Base exception for all mimic-core errors."""


class RepositoryNotFoundError(MimicError, FileNotFoundError):
    """No repository marker was found above the starting directory.

    Also a ``FileNotFoundError``, so callers treating detection failure as
    plain NotFound keep working.

    Attributes:
        start: Directory the search started from.
        probes: Number of marker probes made before giving up.
    """

    def __init__(self, message: str, *, start: Path | None = None, probes: int = 0) -> None:
        super().__init__(message)
        self.start = start
        self.probes = probes


class MalformedMetadataError(MimicError, ValueError):
    """Pointer record exists but does not name a branch.

    Attributes:
        path: Path of the offending record.
        content: Raw record content.
    """

    def __init__(self, message: str, *, path: Path | None = None, content: str | None = None) -> None:
        super().__init__(message)
        self.path = path
        self.content = content


class AllFailedError(MimicError):
    """Every attempt of a race failed.

    Attributes:
        errors: One failure per attempt, in the order the attempts were given.
    """

    def __init__(self, errors: list[BaseException]) -> None:
        self.errors = list(errors)
        super().__init__(f"All {len(self.errors)} attempt(s) failed")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(errors={self.errors!r})"


class SettingsError(MimicError):
    """Settings file parsed but holds an unknown key or a value of the wrong type."""
