"""Language identities and the catalog that hands them out by name."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class Language:
    name: str

    def __str__(self) -> str:
        return self.name


class LanguageCatalog:
    """Immutable name → Language lookup.

    Rules only ever compare names baked into their definitions, so the
    catalog is the single place Language values are created.
    """

    def __init__(self, names: Iterable[str] = ()):
        self._languages: dict[str, Language] = {}
        for name in names:
            if not isinstance(name, str) or not name.strip():
                raise ValueError(f"Language name must be a non-empty string, got: {name!r}")
            self._languages.setdefault(name, Language(name))

    def __contains__(self, name: object) -> bool:
        return name in self._languages

    def __iter__(self) -> Iterator[str]:
        return iter(self._languages)

    def __len__(self) -> int:
        return len(self._languages)

    def get(self, name: str) -> Language:
        """Return the Language called *name*, or raise ValueError."""
        if name not in self._languages:
            available = ", ".join(self.names())
            raise ValueError(f"Unknown language: {name!r}. Available: {available}")
        return self._languages[name]

    def names(self) -> list[str]:
        return sorted(self._languages)

    def extended(self, names: Iterable[str]) -> LanguageCatalog:
        """Return a new catalog with *names* added."""
        return LanguageCatalog([*self._languages, *names])

    def __repr__(self) -> str:
        return f"LanguageCatalog({len(self)} languages)"


KNOWN_LANGUAGES = (
    "AGS Script",
    "AsciiDoc",
    "BitBake",
    "BlitzBasic",
    "C",
    "C#",
    "C++",
    "Common Lisp",
    "Cool",
    "D",
    "DTrace",
    "ECL",
    "F#",
    "FORTRAN",
    "Forth",
    "Frege",
    "GAP",
    "GLSL",
    "Gosu",
    "Hack",
    "IDL",
    "JavaScript",
    "LiveScript",
    "LoomScript",
    "M",
    "MUF",
    "Makefile",
    "Mathematica",
    "Matlab",
    "Mercury",
    "NewLisp",
    "Objective-C",
    "OpenCL",
    "PHP",
    "Perl",
    "Perl6",
    "Prolog",
    "Public Key",
    "Scala",
    "Scilab",
    "Smalltalk",
    "SuperCollider",
    "Text",
    "TypeScript",
    "XML",
)

DEFAULT_CATALOG = LanguageCatalog(KNOWN_LANGUAGES)


def get_language(name: str) -> Language:
    """Look up a language in the default catalog."""
    return DEFAULT_CATALOG.get(name)


def language_name(value: Language | str) -> str:
    """Name of a language value, or the value itself when given a plain name.

    Any object with a ``name`` attribute is accepted, so identities from
    another catalog compare by name too.
    """
    return value if isinstance(value, str) else value.name


__all__ = [
    "DEFAULT_CATALOG",
    "KNOWN_LANGUAGES",
    "Language",
    "LanguageCatalog",
    "get_language",
    "language_name",
]
