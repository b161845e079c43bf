"""Unpacking of downloaded template archives."""

from __future__ import annotations

import logging
import zipfile
from pathlib import Path, PurePosixPath

from .errors import ExtractionError

__all__ = ["extract_archive"]


LOGGER = logging.getLogger(__name__)


def _root_folder(names: list[str]) -> str:
    first = PurePosixPath(names[0])
    if not first.parts:
        raise ExtractionError("archive has an unnamed first entry")
    return first.parts[0]


def _check_member(destination: Path, name: str) -> None:
    target = (destination / name).resolve()
    if target != destination and destination not in target.parents:
        raise ExtractionError(f"archive entry '{name}' escapes the extraction directory")


def extract_archive(archive_path: str | Path, destination: str | Path) -> Path:
    """Extract ``archive_path`` into ``destination`` and return its root folder.

    GitHub archives hold a single ``<repo>-<branch>/`` folder, so the root
    folder is the first path component of the first entry.
    """

    archive_path = Path(archive_path)
    destination = Path(destination).resolve()
    try:
        with zipfile.ZipFile(archive_path) as archive:
            names = archive.namelist()
            if not names:
                raise ExtractionError(f"{archive_path.name} is empty")
            for name in names:
                _check_member(destination, name)
            root = _root_folder(names)
            destination.mkdir(parents=True, exist_ok=True)
            archive.extractall(destination)
    except zipfile.BadZipFile as exc:
        raise ExtractionError(f"{archive_path.name} is not a valid zip archive") from exc
    except OSError as exc:
        raise ExtractionError(f"cannot extract {archive_path.name}: {exc}") from exc

    extracted = destination / root
    if not extracted.is_dir():
        raise ExtractionError(f"archive root '{root}' is not a directory")
    LOGGER.info("Extracted %s into %s", archive_path.name, extracted)
    return extracted
