"""Tests for tiebreak.engine.registry: first-match dispatch and the builder."""

from __future__ import annotations

import pytest

from tiebreak.engine.outcome import OutcomeKind
from tiebreak.engine.registry import RuleRegistry, RuleRegistryBuilder
from tiebreak.engine.rule import Rule
from tiebreak.languages import Language, LanguageCatalog

CATALOG = LanguageCatalog(["Alpha", "Beta", "Gamma", "Delta"])


class _Recorder:
    """Heuristic that records calls and returns a fixed answer."""

    def __init__(self, answer):
        self.answer = answer
        self.calls: list[str] = []

    def __call__(self, text):
        self.calls.append(text)
        return self.answer


def _registry(*specs, max_content_chars=0):
    builder = RuleRegistryBuilder(CATALOG)
    for names, heuristic in specs:
        builder.register(names, heuristic)
    return builder.build(max_content_chars=max_content_chars)


# ── resolve ──────────────────────────────────────────────────────────


class TestResolve:
    def test_returns_single_language_from_matching_rule(self):
        registry = _registry((("Alpha", "Beta"), _Recorder("Beta")))
        assert registry.resolve("text", {"Alpha", "Beta"}) == [Language("Beta")]

    def test_empty_when_rule_inconclusive(self):
        registry = _registry((("Alpha", "Beta"), _Recorder(None)))
        assert registry.resolve("text", {"Alpha", "Beta"}) == []

    def test_empty_when_no_rule_matches(self):
        registry = _registry((("Alpha", "Beta"), _Recorder("Alpha")))
        assert registry.resolve("text", {"Gamma", "Delta"}) == []

    def test_empty_candidates_always_empty(self):
        first = _Recorder("Alpha")
        registry = _registry((("Alpha", "Beta"), first))
        assert registry.resolve("text", set()) == []
        assert first.calls == []

    def test_first_registered_rule_wins(self):
        first = _Recorder("Alpha")
        second = _Recorder("Beta")
        registry = _registry((("Alpha", "Beta"), first), (("Alpha", "Beta"), second))
        assert registry.resolve("text", {"Alpha", "Beta"}) == [Language("Alpha")]
        assert len(first.calls) == 1
        assert second.calls == []

    def test_does_not_fall_through_after_inconclusive_rule(self):
        first = _Recorder(None)
        second = _Recorder("Beta")
        registry = _registry((("Alpha", "Beta"), first), (("Alpha", "Beta", "Gamma"), second))
        assert registry.resolve("text", {"Alpha", "Beta"}) == []
        assert len(first.calls) == 1
        assert second.calls == []

    def test_skips_rules_whose_set_does_not_contain_candidates(self):
        first = _Recorder("Alpha")
        second = _Recorder("Gamma")
        registry = _registry((("Alpha", "Beta"), first), (("Beta", "Gamma"), second))
        assert registry.resolve("text", ["Gamma"]) == [Language("Gamma")]
        assert first.calls == []
        assert len(second.calls) == 1

    def test_accepts_language_values_and_generators(self):
        registry = _registry((("Alpha", "Beta"), _Recorder("Alpha")))
        candidates = (Language(n) for n in ("Alpha", "Beta"))
        assert registry.resolve("text", candidates) == [Language("Alpha")]

    def test_accepts_named_identities_from_other_providers(self):
        class ForeignLanguage:
            def __init__(self, name):
                self.name = name

        registry = _registry((("Alpha", "Beta"), _Recorder("Beta")))
        candidates = [ForeignLanguage("Alpha"), ForeignLanguage("Beta")]
        assert registry.resolve("text", candidates) == [Language("Beta")]

    def test_rejects_bare_string_candidates(self):
        recorder = _Recorder("Alpha")
        registry = _registry((("Alpha", "Beta"), recorder))
        with pytest.raises(TypeError, match="collection of languages"):
            registry.resolve("text", "Alpha")
        with pytest.raises(TypeError):
            registry.rule_for("Beta")
        assert recorder.calls == []

    def test_is_deterministic(self):
        registry = _registry((("Alpha", "Beta"), lambda t: "Alpha" if "a" in t else None))
        results = {tuple(registry.resolve("abc", {"Alpha", "Beta"})) for _ in range(5)}
        assert results == {(Language("Alpha"),)}

    def test_empty_registry_resolves_nothing(self):
        assert RuleRegistry().resolve("text", {"Alpha"}) == []

    def test_applies_content_window(self):
        recorder = _Recorder(None)
        registry = _registry((("Alpha",), recorder), max_content_chars=4)
        registry.resolve("abcdefgh", {"Alpha"})
        assert recorder.calls == ["abcd"]

    def test_binary_content_does_not_raise(self):
        registry = _registry((("Alpha", "Beta"), lambda t: "Alpha" if "MAGIC" in t else None))
        assert registry.resolve(b"\x00\xff\xfe\x80", {"Alpha", "Beta"}) == []
        assert registry.resolve(b"\x00\xffMAGIC", {"Alpha", "Beta"}) == [Language("Alpha")]


# ── explain ──────────────────────────────────────────────────────────


class TestExplain:
    def test_no_rule(self):
        outcome = _registry().explain("text", {"Alpha"})
        assert outcome.kind is OutcomeKind.NO_RULE
        assert outcome.rule is None
        assert outcome.languages == []
        assert outcome.resolved is False

    def test_inconclusive_names_the_rule(self):
        outcome = _registry((("Alpha", "Beta"), _Recorder(None))).explain("x", {"Alpha"})
        assert outcome.kind is OutcomeKind.INCONCLUSIVE
        assert outcome.rule == "Alpha/Beta"
        assert outcome.languages == []

    def test_resolved(self):
        outcome = _registry((("Alpha", "Beta"), _Recorder("Beta"))).explain("x", {"Beta"})
        assert outcome.resolved is True
        assert outcome.language == Language("Beta")
        assert outcome.to_dict() == {"kind": "resolved", "language": "Beta", "rule": "Alpha/Beta"}


def test_rule_for_returns_dispatched_rule():
    registry = _registry((("Alpha", "Beta"), _Recorder(None)), (("Gamma",), _Recorder(None)))
    assert registry.rule_for({"Gamma"}) is registry.rules[1]
    assert registry.rule_for({"Delta"}) is None


def test_registry_iterates_in_registration_order():
    registry = _registry((("Gamma",), _Recorder(None)), (("Alpha",), _Recorder(None)))
    assert [rule.name for rule in registry] == ["Gamma", "Alpha"]
    assert len(registry) == 2


# ── builder ──────────────────────────────────────────────────────────


class TestBuilder:
    def test_decorator_registers_and_returns_function(self):
        builder = RuleRegistryBuilder(CATALOG)

        @builder.disambiguate("Alpha", "Beta", name="alpha-beta")
        def heuristic(text):
            return "Alpha" if "alpha" in text else None

        registry = builder.build()
        assert callable(heuristic)
        assert registry.rules[0].name == "alpha-beta"
        assert registry.resolve("alpha", {"Alpha", "Beta"}) == [Language("Alpha")]

    def test_rejects_unknown_language_names(self):
        builder = RuleRegistryBuilder(CATALOG)
        with pytest.raises(ValueError, match="unknown languages: Omega"):
            builder.register(("Alpha", "Omega"), lambda _t: None)
        assert len(builder) == 0

    def test_add_rejects_non_rules(self):
        with pytest.raises(ValueError, match="Expected Rule"):
            RuleRegistryBuilder(CATALOG).add(object())

    def test_add_and_extend_keep_order(self):
        builder = RuleRegistryBuilder(CATALOG)
        a = Rule(frozenset({"Alpha"}), lambda _t: None)
        b = Rule(frozenset({"Beta"}), lambda _t: None)
        c = Rule(frozenset({"Gamma"}), lambda _t: None)
        builder.add(a)
        builder.extend([b, c])
        assert builder.build().rules == (a, b, c)

    def test_registration_closed_after_build(self):
        builder = RuleRegistryBuilder(CATALOG)
        builder.register(("Alpha",), lambda _t: None)
        registry = builder.build()
        with pytest.raises(RuntimeError, match="already built"):
            builder.register(("Beta",), lambda _t: None)
        with pytest.raises(RuntimeError, match="already built"):
            builder.build()
        assert len(registry) == 1

    def test_built_rules_look_up_in_builder_catalog(self):
        catalog = CATALOG.extended(["Omega"])
        builder = RuleRegistryBuilder(catalog)
        builder.register(("Omega", "Alpha"), lambda _t: "Omega")
        assert builder.build().resolve("", {"Omega"}) == [Language("Omega")]
