"""Settings shared by the project materializer and CLI."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

__all__ = [
    "DEFAULT_BRANCH",
    "DEFAULT_INSTALLERS",
    "DEFAULT_ORGANIZATION",
    "DEFAULT_PLACEHOLDER",
    "IGNORED_ENTRIES",
    "Settings",
]


DEFAULT_ORGANIZATION = "NetCoreTemplates"
DEFAULT_BRANCH = "main"
DEFAULT_PLACEHOLDER = "MyApp"
IGNORED_ENTRIES: frozenset[str] = frozenset({"node_modules", ".git"})
DEFAULT_INSTALLERS: Mapping[str, tuple[str, ...]] = {"package.json": ("npm", "install")}


@dataclass(frozen=True, slots=True)
class Settings:
    """Process-level inputs for creating a project.

    Attributes
    ----------
    cwd:
        Directory in which new projects are created and temporary files are
        written.
    organization:
        GitHub organisation used when a template reference has no ``org/``
        prefix.
    branch:
        Branch whose archive is downloaded.
    placeholder:
        Identifier the templates use for the project name.
    github_token:
        Optional token sent with template listing requests.
    ignored:
        Entry names that neither block extraction into a non-empty directory
        nor are searched for dependency manifests.
    installers:
        Manifest file name mapped to the command that installs its
        dependencies.
    """

    cwd: Path
    organization: str = DEFAULT_ORGANIZATION
    branch: str = DEFAULT_BRANCH
    placeholder: str = DEFAULT_PLACEHOLDER
    github_token: str | None = None
    ignored: frozenset[str] = IGNORED_ENTRIES
    installers: Mapping[str, tuple[str, ...]] = field(default_factory=lambda: dict(DEFAULT_INSTALLERS))

    @classmethod
    def from_environ(cls, environ: Mapping[str, str], cwd: str | Path) -> "Settings":
        """Build :class:`Settings` from an environment mapping.

        Recognised variables are ``CREATE_NET_ORG``, ``CREATE_NET_BRANCH``,
        ``CREATE_NET_PLACEHOLDER`` and ``GITHUB_TOKEN``. Blank values fall back
        to the defaults.
        """

        def lookup(key: str, default: str) -> str:
            value = environ.get(key, "").strip()
            return value or default

        token = environ.get("GITHUB_TOKEN", "").strip() or None
        return cls(
            cwd=Path(cwd).expanduser().resolve(),
            organization=lookup("CREATE_NET_ORG", DEFAULT_ORGANIZATION),
            branch=lookup("CREATE_NET_BRANCH", DEFAULT_BRANCH),
            placeholder=lookup("CREATE_NET_PLACEHOLDER", DEFAULT_PLACEHOLDER),
            github_token=token,
        )
