"""Building blocks for heuristics: ordered condition → language branches.

A heuristic is usually a short ladder of tests::

    first_match(
        (contains("use v6"), "Perl6"),
        (regex(r"use strict|use\\s+v?5\\."), "Perl"),
        (contains(":-"), "Prolog"),
    )

Patterns are compiled with ``re.MULTILINE`` so ``^`` and ``$`` anchor on
lines, which is what content heuristics almost always mean.
"""

from __future__ import annotations

import re
from collections.abc import Callable

Condition = Callable[[str], bool]
Branch = tuple[Condition, str]


class _Regex:
    __slots__ = ("pattern",)

    def __init__(self, pattern: str | re.Pattern[str], flags: int = 0):
        if isinstance(pattern, re.Pattern):
            self.pattern = pattern
        else:
            self.pattern = re.compile(pattern, flags | re.MULTILINE)

    def __call__(self, text: str) -> bool:
        return self.pattern.search(text) is not None

    def __repr__(self) -> str:
        return f"regex({self.pattern.pattern!r})"


class _Contains:
    __slots__ = ("needle",)

    def __init__(self, needle: str):
        self.needle = needle

    def __call__(self, text: str) -> bool:
        return self.needle in text

    def __repr__(self) -> str:
        return f"contains({self.needle!r})"


def regex(pattern: str | re.Pattern[str], flags: int = 0) -> Condition:
    """Condition that holds when *pattern* is found anywhere in the text.

    Pre-compiled patterns are used as-is (their own flags apply).
    """
    return _Regex(pattern, flags)


def contains(needle: str) -> Condition:
    return _Contains(needle)


def any_of(*conditions: Condition) -> Condition:
    def _any(text: str) -> bool:
        return any(cond(text) for cond in conditions)

    return _any


def always(_text: str) -> bool:
    return True


def first_match(*branches: Branch, default: str | None = None) -> Callable[[str], str | None]:
    """Heuristic returning the language of the first branch whose condition holds."""
    ladder = tuple(branches)
    for idx, branch in enumerate(ladder):
        if len(branch) != 2 or not callable(branch[0]):
            raise ValueError(f"branch[{idx}] must be a (condition, language) pair")

    def _heuristic(text: str) -> str | None:
        for condition, language in ladder:
            if condition(text):
                return language
        return default

    return _heuristic


__all__ = ["Branch", "Condition", "always", "any_of", "contains", "first_match", "regex"]
