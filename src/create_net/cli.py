"""Command line interface for creating projects from GitHub templates."""

from __future__ import annotations

import argparse
import functools
import logging
import os
import sys
from pathlib import Path
from typing import Mapping, Sequence

from . import __version__
from .config import Settings
from .errors import CreateNetError, NetworkError
from .fetch import format_listing, list_templates
from .install import install_dependencies
from .project import CreateRequest, MaterializeResult, create_project

LOGGER = logging.getLogger(__name__)

DEFAULT_TITLES = {"NetCoreTemplates": ".NET Templates"}

USAGE_FOOTER = """\
Usage:
  create-net create <repo> [ProjectName]
  create-net create <org>/<repo> [ProjectName]
  create-net ls [org]

Examples:
  create-net ls                                   # List all templates
  create-net ls <org>                             # List specific org templates
  create-net create <template> ProjectName        # Create from the default organization
  create-net create <org>/<template> ProjectName  # Create from specific org"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="create-net",
        description="Create a project from a GitHub template, renaming MyApp to the project name",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug output")
    subparsers = parser.add_subparsers(dest="command", required=True)

    create_parser = subparsers.add_parser("create", help="create a project from a template")
    create_parser.add_argument("template", help="Template as <repo> or <org>/<repo>")
    create_parser.add_argument(
        "project_name",
        nargs="?",
        help="Name of the new project. Defaults to the current directory name, "
        "in which case the template is extracted into the current directory",
    )
    create_parser.add_argument("-b", "--branch", help="Branch of the template to download")
    create_parser.add_argument(
        "--no-install",
        action="store_true",
        help="Skip installing dependencies after the project is created",
    )

    list_parser = subparsers.add_parser("ls", aliases=["list"], help="list available templates")
    list_parser.add_argument("organization", nargs="?", help="GitHub organization to list")

    return parser


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(format="%(message)s", stream=sys.stdout)
    logging.getLogger("create_net").setLevel(level)


def _report_created(result: MaterializeResult) -> None:
    for warning in result.report.warnings:
        LOGGER.debug("Left unchanged: %s", warning)
    for warning in result.install_warnings:
        print(f"Warning: {warning}", file=sys.stderr)

    print("\n✓ Project created successfully!")
    print("\nNext steps:")
    if not result.in_place:
        print(f"  cd {result.project_name}")
    print("  npm start (or appropriate command for your template)")


def _handle_create(args: argparse.Namespace, settings: Settings) -> int:
    installer = None
    if not args.no_install:
        installer = functools.partial(
            install_dependencies,
            installers=settings.installers,
            ignore=settings.ignored,
        )
    request = CreateRequest(
        template=args.template,
        project_name=args.project_name,
        branch=args.branch,
    )
    result = create_project(request, settings, installer=installer)
    _report_created(result)
    return 0


def _handle_list(args: argparse.Namespace, settings: Settings) -> int:
    if args.organization:
        organizations = [(args.organization, f"{args.organization} Templates")]
    else:
        name = settings.organization
        organizations = [(name, DEFAULT_TITLES.get(name, f"{name} Templates"))]

    print("Fetching available project templates...\n")
    for name, title in organizations:
        try:
            listings = list_templates(name, token=settings.github_token)
        except NetworkError as exc:
            print(title)
            print("─" * 80)
            print(f"  Error fetching templates: {exc}")
        else:
            print(format_listing(title, listings))
        print()

    print(USAGE_FOOTER)
    return 0


def main(
    argv: Sequence[str] | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    cwd: str | Path | None = None,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    settings = Settings.from_environ(
        os.environ if environ is None else environ,
        Path.cwd() if cwd is None else cwd,
    )
    try:
        if args.command == "create":
            return _handle_create(args, settings)
        if args.command in {"ls", "list"}:
            return _handle_list(args, settings)
    except CreateNetError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    parser.error("no command provided")
    return 2


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
