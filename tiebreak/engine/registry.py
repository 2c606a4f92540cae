"""Rule registry and dispatcher.

A ``RuleRegistryBuilder`` collects rules in one sequential startup pass and
``build()`` freezes them into a ``RuleRegistry``. Registration order is
precedence order: ``resolve`` evaluates only the first rule whose candidate
set contains the caller's candidates, and never falls through to another.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from typing import TypeVar

from tiebreak.engine.outcome import OutcomeKind, Resolution
from tiebreak.engine.rule import Heuristic, Rule, candidate_names, normalize_content
from tiebreak.languages import DEFAULT_CATALOG, Language, LanguageCatalog

logger = logging.getLogger(__name__)

H = TypeVar("H", bound=Callable)


class RuleRegistry:
    """Frozen, ordered bank of rules. Safe to share between threads."""

    __slots__ = ("_rules", "_max_content_chars")

    def __init__(self, rules: Iterable[Rule] = (), *, max_content_chars: int = 0):
        self._rules: tuple[Rule, ...] = tuple(rules)
        self._max_content_chars = max_content_chars

    @property
    def max_content_chars(self) -> int:
        return self._max_content_chars

    @property
    def rules(self) -> tuple[Rule, ...]:
        return self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def rule_for(self, candidates: Iterable[Language | str]) -> Rule | None:
        """Return the rule that would handle *candidates*, if any."""
        names = candidate_names(candidates)
        for rule in self._rules:
            if rule.matches(names):
                return rule
        return None

    def explain(
        self, content: str | bytes | None, candidates: Iterable[Language | str]
    ) -> Resolution:
        names = candidate_names(candidates)
        rule = self.rule_for(names)
        if rule is None:
            logger.debug("No heuristic for candidates %s", sorted(names))
            return Resolution(OutcomeKind.NO_RULE)
        language = rule.evaluate(normalize_content(content, self._max_content_chars))
        if language is None:
            logger.debug("Heuristic %s was inconclusive", rule.name)
            return Resolution(OutcomeKind.INCONCLUSIVE, rule=rule.name)
        logger.debug("Heuristic %s picked %s", rule.name, language.name)
        return Resolution(OutcomeKind.RESOLVED, language=language, rule=rule.name)

    def resolve(
        self, content: str | bytes | None, candidates: Iterable[Language | str]
    ) -> list[Language]:
        """Disambiguate *content* among *candidates*.

        Returns a one-element list with the chosen language, or an empty list
        when no rule applies or the applicable rule is inconclusive.
        """
        return self.explain(content, candidates).languages

    def __repr__(self) -> str:
        return f"RuleRegistry({len(self._rules)} rules)"


class RuleRegistryBuilder:
    """Append-only collector for rules, frozen by ``build()``."""

    def __init__(self, catalog: LanguageCatalog = DEFAULT_CATALOG):
        self.catalog = catalog
        self._rules: list[Rule] = []
        self._built = False

    def __len__(self) -> int:
        return len(self._rules)

    def _check_open(self) -> None:
        if self._built:
            raise RuntimeError("Rule registry already built; register rules during startup")

    def _check_known(self, names: Iterable[str]) -> None:
        unknown = sorted(n for n in names if n not in self.catalog)
        if unknown:
            raise ValueError(f"Rule names unknown languages: {', '.join(unknown)}")

    def add(self, rule: Rule) -> Rule:
        self._check_open()
        if not isinstance(rule, Rule):
            raise ValueError(f"Expected Rule, got: {type(rule).__name__}")
        self._check_known(rule.languages)
        self._rules.append(rule)
        return rule

    def extend(self, rules: Iterable[Rule]) -> None:
        for rule in rules:
            self.add(rule)

    def register(
        self, names: Iterable[str], heuristic: Heuristic, *, name: str = ""
    ) -> Rule:
        names = frozenset(names)
        self._check_known(names)
        return self.add(
            Rule(names, heuristic, lookup=self.catalog.get, name=name)
        )

    def disambiguate(self, *names: str, name: str = "") -> Callable[[H], H]:
        """Decorator registering a heuristic for the given candidate languages.

        Example::

            @builder.disambiguate("Perl", "Prolog")
            def perl_or_prolog(data):
                if "use strict" in data:
                    return "Perl"
                if ":-" in data:
                    return "Prolog"
                return None
        """

        def decorator(fn: H) -> H:
            self.register(names, fn, name=name)
            return fn

        return decorator

    def build(self, *, max_content_chars: int = 0) -> RuleRegistry:
        self._check_open()
        self._built = True
        logger.debug("Built rule registry with %d rules", len(self._rules))
        return RuleRegistry(self._rules, max_content_chars=max_content_chars)


__all__ = ["RuleRegistry", "RuleRegistryBuilder"]
