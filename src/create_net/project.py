"""Turn an unpacked template into a renamed, ready to use project directory."""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable

from .archive import extract_archive
from .config import Settings
from .errors import ConflictError, InstallWarning, InvalidProjectName
from .fetch import Opener, TemplateRef, archive_url, download_archive
from .replacements import ReplacementSet, build_replacements
from .rewrite import RewriteReport, rewrite_tree

__all__ = [
    "CreateRequest",
    "Installer",
    "MaterializeResult",
    "create_project",
    "materialize",
]


LOGGER = logging.getLogger(__name__)

Installer = Callable[[Path], list[InstallWarning]]


@dataclass(frozen=True, slots=True)
class CreateRequest:
    """What the user asked for on the command line.

    When ``project_name`` is ``None`` the name of the working directory is used
    and the template is extracted into the working directory itself.
    """

    template: str
    project_name: str | None = None
    branch: str | None = None


@dataclass(slots=True)
class MaterializeResult:
    project_root: Path
    project_name: str
    replacements: ReplacementSet
    report: RewriteReport
    install_warnings: list[InstallWarning] = field(default_factory=list)
    in_place: bool = False


def _blocking_entries(directory: Path, ignored: Iterable[str]) -> list[str]:
    skipped = frozenset(ignored)
    return sorted(
        name for name in os.listdir(directory) if name not in skipped and not name.startswith(".")
    )


def _check_project_name(name: str) -> str:
    cleaned = name.strip()
    if not cleaned:
        raise InvalidProjectName("project name must not be empty")
    if cleaned in {".", ".."} or "/" in cleaned or os.sep in cleaned:
        raise InvalidProjectName(f"invalid project name '{name}'")
    return cleaned


def _is_real_dir(path: Path) -> bool:
    return path.is_dir() and not path.is_symlink()


def _merge_conflicts(source: Path, destination: Path) -> list[Path]:
    """Return paths where ``source`` and ``destination`` disagree on being a directory."""

    conflicts: list[Path] = []
    for name in sorted(os.listdir(source)):
        incoming = source / name
        existing = destination / name
        if not os.path.lexists(existing):
            continue
        if _is_real_dir(incoming) and _is_real_dir(existing):
            conflicts.extend(_merge_conflicts(incoming, existing))
        elif _is_real_dir(incoming) or _is_real_dir(existing):
            conflicts.append(existing)
    return conflicts


def _merge_into(source: Path, destination: Path) -> None:
    for name in sorted(os.listdir(source)):
        incoming = source / name
        existing = destination / name
        if _is_real_dir(incoming) and _is_real_dir(existing):
            _merge_into(incoming, existing)
        elif os.path.lexists(existing):
            # Template files replace clashing files already in the directory.
            os.replace(incoming, existing)
        else:
            shutil.move(str(incoming), str(existing))
    source.rmdir()


def _transfer(template_root: Path, project_root: Path, created: bool) -> None:
    if created:
        project_root.parent.mkdir(parents=True, exist_ok=True)
        shutil.move(str(template_root), str(project_root))
        return

    conflicts = _merge_conflicts(template_root, project_root)
    if conflicts:
        names = ", ".join(str(path.relative_to(project_root)) for path in conflicts)
        raise ConflictError(f"{project_root} already contains {names} with a different type")
    _merge_into(template_root, project_root)


def materialize(
    template_root: str | Path,
    project_root: str | Path,
    placeholder_name: str,
    target_name: str,
    *,
    installer: Installer | None = None,
    scratch: str | Path | None = None,
) -> MaterializeResult:
    """Move ``template_root`` to ``project_root`` and rename the placeholder.

    Parameters
    ----------
    template_root:
        The unpacked template folder. It is consumed by this call.
    project_root:
        Destination of the project. A missing directory is created; an existing
        one is filled in place.
    placeholder_name:
        Identifier used throughout the template, typically ``MyApp``.
    target_name:
        Name of the new project.
    installer:
        Called with ``project_root`` once rewriting succeeded. Its warnings are
        recorded on the result and never abort materialization.
    scratch:
        Temporary directory holding ``template_root``, removed once the
        template has been moved out of it.

    A ``project_root`` created by this call and ``scratch`` are removed again
    when moving or rewriting fails. An existing ``project_root`` is left as it
    is. Clashing files in an existing ``project_root`` are replaced by the
    template's files; a file on one side and a directory on the other raise
    :class:`ConflictError` before anything moves.
    """

    template_root = Path(template_root)
    project_root = Path(project_root)
    created = not project_root.exists()

    try:
        replacements = build_replacements(placeholder_name, target_name)
        _transfer(template_root, project_root, created)
        if scratch is not None:
            shutil.rmtree(scratch, ignore_errors=True)
        LOGGER.info("Replacing template names with project name...")
        report = rewrite_tree(project_root, replacements)
    except Exception:
        if created and project_root.exists():
            LOGGER.debug("Removing partially created %s", project_root)
            shutil.rmtree(project_root, ignore_errors=True)
        if scratch is not None:
            shutil.rmtree(scratch, ignore_errors=True)
        raise

    result = MaterializeResult(
        project_root=project_root,
        project_name=target_name,
        replacements=replacements,
        report=report,
        in_place=not created,
    )

    if installer is not None:
        LOGGER.info("Installing dependencies...")
        try:
            result.install_warnings.extend(installer(project_root))
        except OSError as exc:
            warning = InstallWarning(project_root, (), exc.strerror or str(exc))
            LOGGER.warning("Warning: %s", warning)
            result.install_warnings.append(warning)

    return result


def create_project(
    request: CreateRequest,
    settings: Settings,
    *,
    opener: Opener | None = None,
    installer: Installer | None = None,
) -> MaterializeResult:
    """Download, unpack and materialize the template described by ``request``.

    The archive and the extraction directory live in a hidden scratch directory
    under ``settings.cwd`` that is removed on every exit path.
    """

    ref = TemplateRef.parse(request.template, settings.organization)
    cwd = settings.cwd

    if request.project_name is None:
        project_name = _check_project_name(cwd.name)
        project_root = cwd
        LOGGER.info('No project name specified, using current directory name: "%s"', project_name)
        found = _blocking_entries(cwd, settings.ignored)
        if found:
            raise ConflictError(
                "Current directory is not empty. Please run this command in an empty directory. "
                f"Found: {', '.join(found)}"
            )
    else:
        project_name = _check_project_name(request.project_name)
        project_root = cwd / project_name
        if os.path.lexists(project_root):
            raise ConflictError(f'Directory "{project_name}" already exists.')

    LOGGER.info('Creating project "%s" from %s...', project_name, ref)
    url = archive_url(ref, request.branch or settings.branch)
    scratch = Path(tempfile.mkdtemp(prefix=".create-net-", dir=cwd))
    try:
        archive = download_archive(url, scratch / "template.zip", opener=opener)
        extracted = extract_archive(archive, scratch / "extract")
        archive.unlink()
        return materialize(
            extracted,
            project_root,
            settings.placeholder,
            project_name,
            installer=installer,
            scratch=scratch,
        )
    finally:
        shutil.rmtree(scratch, ignore_errors=True)
