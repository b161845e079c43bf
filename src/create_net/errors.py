"""Exception and warning types raised while creating a project."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

__all__ = [
    "ConflictError",
    "CreateNetError",
    "ExtractionError",
    "InstallWarning",
    "InvalidPlaceholder",
    "InvalidProjectName",
    "NetworkError",
    "RewriteWarning",
    "UsageError",
]


class CreateNetError(RuntimeError):
    """Base class for fatal errors that abort project creation."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class UsageError(CreateNetError):
    """Raised when command line arguments are missing or invalid."""


class ConflictError(CreateNetError):
    """Raised when the target directory already exists or is not empty."""


class NetworkError(CreateNetError):
    """Raised when a template archive or listing cannot be fetched."""


class ExtractionError(CreateNetError):
    """Raised when a template archive cannot be unpacked."""


class InvalidPlaceholder(CreateNetError):
    """Raised when the template placeholder derives an empty casing variant."""


class InvalidProjectName(UsageError):
    """Raised when the project name derives an empty casing variant."""


@dataclass(frozen=True, slots=True)
class RewriteWarning:
    """A file whose content could not be rewritten or that could not be renamed."""

    path: Path
    reason: str

    def __str__(self) -> str:
        return f"{self.path}: {self.reason}"


@dataclass(frozen=True, slots=True)
class InstallWarning:
    """A dependency installation that did not succeed."""

    directory: Path
    command: tuple[str, ...]
    reason: str

    def __str__(self) -> str:
        action = " ".join(self.command) or "dependency installation"
        return f"{action} failed in {self.directory}: {self.reason}"
