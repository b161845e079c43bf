"""Dependency installation for directories that declare a manifest."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Any, Callable, Iterable, Iterator, Mapping, Sequence

from .config import DEFAULT_INSTALLERS, IGNORED_ENTRIES
from .errors import InstallWarning

__all__ = ["Runner", "find_manifest_dirs", "install_dependencies"]


LOGGER = logging.getLogger(__name__)

Runner = Callable[..., Any]


def find_manifest_dirs(
    root: str | Path,
    manifests: Iterable[str],
    ignore: Iterable[str] = IGNORED_ENTRIES,
) -> Iterator[tuple[Path, str]]:
    """Yield ``(directory, manifest)`` for every manifest at or below ``root``.

    Parents are yielded before their children and ignored directory names are
    not descended into.
    """

    root = Path(root)
    wanted = tuple(manifests)
    skipped = frozenset(ignore)

    for manifest in wanted:
        if (root / manifest).is_file():
            yield root, manifest

    for child in sorted(root.iterdir()):
        if child.name in skipped or child.is_symlink() or not child.is_dir():
            continue
        yield from find_manifest_dirs(child, wanted, skipped)


def install_dependencies(
    root: str | Path,
    *,
    installers: Mapping[str, Sequence[str]] = DEFAULT_INSTALLERS,
    ignore: Iterable[str] = IGNORED_ENTRIES,
    runner: Runner | None = None,
) -> list[InstallWarning]:
    """Run the installer of every manifest found under ``root``.

    Installers inherit the standard streams. Failures are logged and returned
    as :class:`InstallWarning` records instead of being raised.
    """

    run = runner if runner is not None else subprocess.run
    warnings: list[InstallWarning] = []

    for directory, manifest in find_manifest_dirs(root, installers, ignore):
        command = tuple(installers[manifest])
        LOGGER.info("Running %s in %s...", " ".join(command), directory)
        try:
            result = run(list(command), cwd=directory, check=False)
        except OSError as exc:
            warning = InstallWarning(directory, command, exc.strerror or str(exc))
        else:
            if result.returncode == 0:
                continue
            warning = InstallWarning(directory, command, f"exit status {result.returncode}")
        LOGGER.warning("Warning: %s", warning)
        warnings.append(warning)

    return warnings
