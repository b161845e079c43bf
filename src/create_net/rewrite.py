"""Post-order rewriting of file contents and names under a project directory."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from .errors import RewriteWarning
from .replacements import ReplacementSet

__all__ = ["BINARY_EXTENSIONS", "RewriteReport", "is_binary_path", "rewrite_file", "rewrite_tree"]


LOGGER = logging.getLogger(__name__)

BINARY_EXTENSIONS: frozenset[str] = frozenset(
    {
        ".png",
        ".jpg",
        ".jpeg",
        ".gif",
        ".ico",
        ".zip",
        ".exe",
        ".dll",
        ".so",
        ".dylib",
        ".pdf",
        ".woff",
        ".woff2",
        ".ttf",
        ".eot",
        ".mp4",
        ".webm",
        ".ogg",
        ".mp3",
        ".wav",
    }
)


@dataclass(slots=True)
class RewriteReport:
    """Outcome of :func:`rewrite_tree`.

    Attributes
    ----------
    rewritten:
        Files whose content changed, by the path they had while being rewritten.
    renamed:
        ``(old, new)`` pairs in the order the renames happened.
    skipped_binary:
        Files left unread because of their extension.
    warnings:
        Files that could not be read, written or renamed. These never abort the
        walk.
    """

    rewritten: list[Path] = field(default_factory=list)
    renamed: list[tuple[Path, Path]] = field(default_factory=list)
    skipped_binary: list[Path] = field(default_factory=list)
    warnings: list[RewriteWarning] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.rewritten or self.renamed)


def is_binary_path(path: Path) -> bool:
    return path.suffix.lower() in BINARY_EXTENSIONS


def rewrite_file(path: Path, replacements: ReplacementSet, report: RewriteReport) -> None:
    """Apply ``replacements`` to the text content of ``path`` in place."""

    if is_binary_path(path):
        report.skipped_binary.append(path)
        return

    try:
        # newline="" keeps CRLF line endings intact on the round trip.
        with path.open("r", encoding="utf-8", newline="") as handle:
            content = handle.read()
    except FileNotFoundError:
        report.warnings.append(RewriteWarning(path, "missing"))
        return
    except UnicodeDecodeError:
        report.warnings.append(RewriteWarning(path, "not valid UTF-8 text"))
        return
    except OSError as exc:
        report.warnings.append(RewriteWarning(path, f"unreadable: {exc.strerror or exc}"))
        return

    updated = replacements.apply(content)
    if updated == content:
        return

    try:
        with path.open("w", encoding="utf-8", newline="") as handle:
            handle.write(updated)
    except OSError as exc:
        report.warnings.append(RewriteWarning(path, f"unwritable: {exc.strerror or exc}"))
        return

    report.rewritten.append(path)
    LOGGER.debug("Rewrote %s", path)


def _rename_entry(directory: Path, name: str, replacements: ReplacementSet, report: RewriteReport) -> None:
    new_name = replacements.apply(name)
    if new_name == name:
        return

    old_path = directory / name
    new_path = directory / new_name
    if os.path.lexists(new_path):
        report.warnings.append(RewriteWarning(old_path, f"cannot rename, {new_name} already exists"))
        return

    try:
        old_path.rename(new_path)
    except OSError as exc:
        report.warnings.append(RewriteWarning(old_path, f"cannot rename: {exc.strerror or exc}"))
        return

    report.renamed.append((old_path, new_path))
    LOGGER.info("Renamed: %s -> %s", name, new_name)


def _rewrite_directory(directory: Path, replacements: ReplacementSet, report: RewriteReport) -> None:
    with os.scandir(directory) as entries:
        names = sorted(entry.name for entry in entries)

    for name in names:
        path = directory / name
        if path.is_symlink():
            continue
        if path.is_dir():
            _rewrite_directory(path, replacements, report)
        else:
            rewrite_file(path, replacements, report)

    # Children are complete before any entry at this level moves.
    for name in names:
        _rename_entry(directory, name, replacements, report)


def rewrite_tree(root: str | Path, replacements: ReplacementSet) -> RewriteReport:
    """Rewrite contents and names of every node below ``root``.

    Subdirectories are processed before the entries of their parent are
    renamed, so the paths used while descending always exist. The root
    directory itself is never renamed.
    """

    root_path = Path(root)
    if not root_path.is_dir():
        raise NotADirectoryError(root_path)

    report = RewriteReport()
    _rewrite_directory(root_path, replacements, report)

    LOGGER.info(
        "Rewrote %d files and renamed %d paths under %s",
        len(report.rewritten),
        len(report.renamed),
        root_path,
    )
    for warning in report.warnings:
        LOGGER.debug("Skipped %s", warning)
    return report
