"""Create projects from GitHub templates by renaming their placeholder name.

The package derives consistent casing variants from an identifier such as
``MyApp``, rewrites every occurrence of the template's variants with the
project's variants across file contents and paths, and wraps the archive
download, unpacking and dependency installation around that rewrite engine.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .config import Settings
from .errors import (
    ConflictError,
    CreateNetError,
    ExtractionError,
    InstallWarning,
    InvalidPlaceholder,
    InvalidProjectName,
    NetworkError,
    RewriteWarning,
    UsageError,
)
from .project import CreateRequest, MaterializeResult, create_project, materialize
from .naming import VariantSet, derive_variants, split_words
from .replacements import Replacement, ReplacementSet, build_replacements
from .rewrite import RewriteReport, rewrite_tree

__all__ = [
    "ConflictError",
    "CreateNetError",
    "CreateRequest",
    "ExtractionError",
    "InstallWarning",
    "InvalidPlaceholder",
    "InvalidProjectName",
    "MaterializeResult",
    "NetworkError",
    "Replacement",
    "ReplacementSet",
    "RewriteReport",
    "RewriteWarning",
    "Settings",
    "UsageError",
    "VariantSet",
    "build_replacements",
    "create_project",
    "derive_variants",
    "materialize",
    "rewrite_tree",
    "split_words",
]
