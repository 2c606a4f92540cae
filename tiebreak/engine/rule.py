"""Disambiguation rule: a candidate-language set paired with a content heuristic."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from tiebreak.languages import Language, get_language, language_name

Heuristic = Callable[[str], "Language | str | None"]
LanguageLookup = Callable[[str], Language]


def normalize_content(content: str | bytes | None, max_chars: int = 0) -> str:
    """Coerce raw content to text the heuristics can scan.

    Bytes are decoded as UTF-8 with replacement characters so binary or
    broken input simply fails to match. ``max_chars`` > 0 bounds the window.
    """
    if content is None:
        text = ""
    elif isinstance(content, (bytes, bytearray, memoryview)):
        text = bytes(content).decode("utf-8", errors="replace")
    else:
        text = str(content)
    if max_chars > 0 and len(text) > max_chars:
        text = text[:max_chars]
    return text


def candidate_names(candidates: Iterable[Language | str]) -> set[str]:
    """Names of a candidate collection. A bare string is not a collection."""
    if isinstance(candidates, (str, bytes)):
        raise TypeError(
            f"candidates must be a collection of languages, not {type(candidates).__name__}: "
            f"{candidates!r}"
        )
    return {language_name(c) for c in candidates}


@dataclass(frozen=True)
class Rule:
    languages: frozenset[str]
    heuristic: Heuristic
    lookup: LanguageLookup = field(default=get_language, compare=False)
    name: str = ""

    def __post_init__(self) -> None:
        names = frozenset(self.languages)
        if not names:
            raise ValueError("Rule must declare at least one candidate language")
        if not callable(self.heuristic):
            raise ValueError(f"Rule heuristic must be callable, got: {self.heuristic!r}")
        object.__setattr__(self, "languages", names)
        if not self.name:
            object.__setattr__(self, "name", "/".join(sorted(names)))

    def matches(self, candidates: Iterable[Language | str]) -> bool:
        """True when *candidates* is non-empty and contained in this rule's set."""
        names = candidate_names(candidates)
        return bool(names) and names <= self.languages

    def evaluate(self, content: str | bytes | None) -> Language | None:
        result = self.heuristic(normalize_content(content))
        if result is None or isinstance(result, Language):
            return result
        return self.lookup(result)

    def __repr__(self) -> str:
        return f"Rule({self.name!r})"


__all__ = ["Heuristic", "LanguageLookup", "Rule", "candidate_names", "normalize_content"]
