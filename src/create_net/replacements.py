"""Ordered literal replacements pairing placeholder variants with project variants."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Sequence

from .errors import InvalidPlaceholder, InvalidProjectName
from .naming import VariantSet, derive_variants

__all__ = ["REPLACEMENT_ORDER", "Replacement", "ReplacementSet", "build_replacements"]


LOGGER = logging.getLogger(__name__)

REPLACEMENT_ORDER: tuple[str, ...] = (
    "pascal_snake",
    "title_space",
    "kebab",
    "snake",
    "lowercase",
    "dot",
    "pascal",
)


@dataclass(frozen=True, slots=True)
class Replacement:
    source: str
    target: str

    @property
    def is_identity(self) -> bool:
        return self.source == self.target


@dataclass(frozen=True)
class ReplacementSet(Sequence[Replacement]):
    """An ordered sequence of literal ``source -> target`` substitutions.

    :meth:`apply` performs a single left-to-right scan of the input. Every
    non-overlapping occurrence of every source is replaced, and replaced text is
    never scanned again, so one pair's target cannot be rewritten by another
    pair. When two sources start at the same position the longer one wins and
    equal lengths fall back to the order of the pairs.
    """

    pairs: tuple[Replacement, ...]
    _lookup: dict[str, str] = field(init=False, repr=False, compare=False)
    _pattern: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        for pair in self.pairs:
            if not pair.source:
                raise ValueError("replacement sources must not be empty")

        lookup: dict[str, str] = {}
        for pair in self.pairs:
            lookup.setdefault(pair.source, pair.target)

        ordered = sorted(lookup, key=len, reverse=True)
        pattern = re.compile("|".join(re.escape(source) for source in ordered))
        object.__setattr__(self, "_lookup", lookup)
        object.__setattr__(self, "_pattern", pattern)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]]) -> "ReplacementSet":
        return cls(tuple(Replacement(source, target) for source, target in pairs))

    def __getitem__(self, index):  # type: ignore[override]
        return self.pairs[index]

    def __len__(self) -> int:
        return len(self.pairs)

    def __iter__(self) -> Iterator[Replacement]:
        return iter(self.pairs)

    def matches(self, text: str) -> bool:
        """Return ``True`` when ``text`` contains any replacement source."""

        return bool(self.pairs) and self._pattern.search(text) is not None

    def apply(self, text: str) -> str:
        """Return ``text`` with every source occurrence replaced by its target."""

        if not self.pairs:
            return text
        return self._pattern.sub(lambda match: self._lookup[match.group(0)], text)


def _check_variants(variants: VariantSet, name: str, error: type[Exception]) -> None:
    empty = variants.empty_fields()
    if empty:
        raise error(f"'{name}' derives empty casing variants: {', '.join(empty)}")


def build_replacements(placeholder_name: str, target_name: str) -> ReplacementSet:
    """Pair the casing variants of ``placeholder_name`` with those of ``target_name``.

    Parameters
    ----------
    placeholder_name:
        The identifier used throughout the template, for example ``MyApp``.
    target_name:
        The project name chosen by the caller, for example ``AcmeCorp``.

    Raises
    ------
    InvalidPlaceholder
        When the placeholder derives an empty variant. An empty source would
        match everywhere.
    InvalidProjectName
        When the project name derives an empty variant.
    """

    source = derive_variants(placeholder_name)
    target = derive_variants(target_name)
    _check_variants(source, placeholder_name, InvalidPlaceholder)
    _check_variants(target, target_name, InvalidProjectName)

    for group in target.collisions():
        LOGGER.warning(
            "Project name %r collapses %s to the same text %r",
            target_name,
            ", ".join(group),
            getattr(target, group[0]),
        )

    return ReplacementSet(
        tuple(
            Replacement(getattr(source, name), getattr(target, name))
            for name in REPLACEMENT_ORDER
        )
    )
