"""Casing variants derived from word-concatenated identifiers such as ``MyApp``."""

from __future__ import annotations

import re
from dataclasses import astuple, dataclass
from dataclasses import fields as dataclass_fields
from typing import Iterable

__all__ = ["VariantSet", "capitalize_word", "derive_variants", "split_words"]


_WORD_BOUNDARY = re.compile(r"(?=[A-Z])")


def split_words(identifier: str) -> list[str]:
    """Split ``identifier`` into word segments, each starting at a capital letter.

    A leading lowercase run forms its own segment, so joining the result always
    reproduces ``identifier``.
    """

    return [word for word in _WORD_BOUNDARY.split(identifier) if word]


def capitalize_word(word: str) -> str:
    return word[:1].upper() + word[1:].lower()


def _join_lower(words: Iterable[str], separator: str) -> str:
    return separator.join(word.lower() for word in words)


def _join_capitalized(words: Iterable[str], separator: str) -> str:
    return separator.join(capitalize_word(word) for word in words)


@dataclass(frozen=True, slots=True)
class VariantSet:
    """The seven casing forms of one identifier.

    Attributes
    ----------
    snake:
        ``my_app``
    kebab:
        ``my-app``
    lowercase:
        ``myapp``
    dot:
        ``my.app``
    pascal_snake:
        ``My_App``
    title_space:
        ``My App``
    pascal:
        ``MyApp``
    """

    snake: str
    kebab: str
    lowercase: str
    dot: str
    pascal_snake: str
    title_space: str
    pascal: str

    @classmethod
    def from_words(cls, words: Iterable[str]) -> "VariantSet":
        """Build every variant from a single segmentation."""

        segments = tuple(words)
        return cls(
            snake=_join_lower(segments, "_"),
            kebab=_join_lower(segments, "-"),
            lowercase=_join_lower(segments, ""),
            dot=_join_lower(segments, "."),
            pascal_snake=_join_capitalized(segments, "_"),
            title_space=_join_capitalized(segments, " "),
            pascal=_join_capitalized(segments, ""),
        )

    def fields(self) -> tuple[tuple[str, str], ...]:
        """Return ``(field name, value)`` pairs in declaration order."""

        return tuple(zip((item.name for item in dataclass_fields(self)), astuple(self)))

    def empty_fields(self) -> tuple[str, ...]:
        return tuple(name for name, value in self.fields() if not value)

    def collisions(self) -> list[tuple[str, ...]]:
        """Return groups of field names whose values are identical."""

        groups: dict[str, list[str]] = {}
        for name, value in self.fields():
            groups.setdefault(value, []).append(name)
        return [tuple(names) for names in groups.values() if len(names) > 1]


def derive_variants(identifier: str) -> VariantSet:
    """Return the :class:`VariantSet` for ``identifier``.

    The function is total: an identifier without capitals yields one segment
    and an empty identifier yields seven empty strings.
    """

    return VariantSet.from_words(split_words(identifier))
