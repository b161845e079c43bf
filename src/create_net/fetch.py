"""Retrieval of template archives and template listings from GitHub."""

from __future__ import annotations

import logging
import shutil
import urllib.error
import urllib.request
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Iterable

from pydantic import ValidationError

from .errors import NetworkError, UsageError
from .schema import TemplateListing, TemplateListings

__all__ = [
    "Opener",
    "TemplateRef",
    "archive_url",
    "download_archive",
    "format_listing",
    "list_templates",
]


LOGGER = logging.getLogger(__name__)

USER_AGENT = "create-net"
GITHUB_API = "https://api.github.com"
MIN_NAME_COLUMN = 25

Opener = Callable[[urllib.request.Request], Any]


@dataclass(frozen=True, slots=True)
class TemplateRef:
    """A GitHub ``organization/repository`` pair naming a template."""

    organization: str
    repository: str

    @classmethod
    def parse(cls, value: str, default_organization: str) -> "TemplateRef":
        """Parse ``org/repo`` or a bare ``repo`` using ``default_organization``."""

        text = value.strip()
        if "/" in text:
            organization, _, repository = text.partition("/")
        else:
            organization, repository = default_organization, text
        organization = organization.strip()
        repository = repository.strip().strip("/")
        if not organization or not repository or "/" in repository:
            raise UsageError(f"invalid template reference '{value}'. Expected <repo> or <org>/<repo>.")
        return cls(organization, repository)

    def __str__(self) -> str:
        return f"{self.organization}/{self.repository}"


def archive_url(ref: TemplateRef, branch: str = "main") -> str:
    return f"https://github.com/{ref.organization}/{ref.repository}/archive/refs/heads/{branch}.zip"


def _request(url: str, headers: dict[str, str] | None = None) -> urllib.request.Request:
    merged = {"User-Agent": USER_AGENT}
    merged.update(headers or {})
    return urllib.request.Request(url, headers=merged)


def download_archive(url: str, destination: str | Path, *, opener: Opener | None = None) -> Path:
    """Stream the archive at ``url`` into ``destination``.

    Redirects are followed by the opener. Any failure removes the partially
    written file and raises :class:`NetworkError`.
    """

    destination = Path(destination)
    opener_func = opener if opener is not None else urllib.request.urlopen
    LOGGER.info("Downloading from: %s", url)
    try:
        with opener_func(_request(url)) as response:
            status = getattr(response, "status", 200)
            if status != 200:
                raise NetworkError(f"Failed to download: HTTP {status}")
            with destination.open("wb") as handle:
                shutil.copyfileobj(response, handle)
    except urllib.error.HTTPError as exc:
        destination.unlink(missing_ok=True)
        raise NetworkError(f"Failed to download: HTTP {exc.code}") from exc
    except (urllib.error.URLError, OSError) as exc:
        destination.unlink(missing_ok=True)
        reason = getattr(exc, "reason", exc)
        raise NetworkError(f"Failed to download {url}: {reason}") from exc
    except NetworkError:
        destination.unlink(missing_ok=True)
        raise

    LOGGER.info("Download complete: %s", destination)
    return destination


def list_templates(
    organization: str,
    *,
    opener: Opener | None = None,
    token: str | None = None,
) -> list[TemplateListing]:
    """Return the repositories of ``organization``, most recently updated first."""

    url = f"{GITHUB_API}/orgs/{organization}/repos?per_page=100&sort=updated"
    headers = {"Accept": "application/vnd.github+json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    opener_func = opener if opener is not None else urllib.request.urlopen
    try:
        with opener_func(_request(url, headers)) as response:
            payload = response.read()
    except urllib.error.HTTPError as exc:
        raise NetworkError(f"HTTP {exc.code}: {exc.reason}") from exc
    except (urllib.error.URLError, OSError) as exc:
        raise NetworkError(f"Failed to fetch {url}: {getattr(exc, 'reason', exc)}") from exc

    try:
        return TemplateListings.validate_json(payload)
    except ValidationError as exc:
        raise NetworkError(f"Unexpected response from {url}") from exc


def format_listing(title: str, listings: Iterable[TemplateListing]) -> str:
    """Render ``listings`` as an aligned two column table under ``title``."""

    items = list(listings)
    lines = [title, "─" * 80]
    if not items:
        lines.append("  No templates found")
        return "\n".join(lines)

    padding = max(max(len(item.name) for item in items) + 2, MIN_NAME_COLUMN)
    for item in items:
        description = item.description or "No description available"
        lines.append(f"  {item.name.ljust(padding)}  {description}")
    return "\n".join(lines)
