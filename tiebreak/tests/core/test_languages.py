"""Tests for tiebreak.languages: identities and the catalog."""

from __future__ import annotations

import pytest

from tiebreak.languages import (
    DEFAULT_CATALOG,
    Language,
    LanguageCatalog,
    get_language,
    language_name,
)


def test_language_equality_is_by_name():
    assert Language("Perl") == Language("Perl")
    assert Language("Perl") != Language("Prolog")
    assert len({Language("Perl"), Language("Perl")}) == 1
    assert str(Language("C#")) == "C#"


def test_catalog_get_returns_shared_instance():
    catalog = LanguageCatalog(["Perl", "Prolog"])
    assert catalog.get("Perl") is catalog.get("Perl")


def test_catalog_get_reports_unknown():
    catalog = LanguageCatalog(["zeta", "alpha"])
    with pytest.raises(ValueError, match="Unknown language") as exc:
        catalog.get("missing")
    assert "Available: alpha, zeta" in str(exc.value)


def test_catalog_rejects_blank_names():
    with pytest.raises(ValueError, match="non-empty string"):
        LanguageCatalog(["Perl", " "])


def test_catalog_collapses_duplicates():
    catalog = LanguageCatalog(["Perl", "Perl"])
    assert len(catalog) == 1
    assert list(catalog) == ["Perl"]


def test_extended_returns_new_catalog():
    base = LanguageCatalog(["Perl"])
    bigger = base.extended(["Raku"])
    assert "Raku" in bigger
    assert "Raku" not in base
    assert bigger.names() == ["Perl", "Raku"]


def test_default_catalog_lookup():
    assert get_language("Objective-C") == Language("Objective-C")
    assert "TypeScript" in DEFAULT_CATALOG
    with pytest.raises(ValueError):
        get_language("Brainfork")


def test_language_name_accepts_both_forms():
    assert language_name(Language("Perl")) == "Perl"
    assert language_name("Perl") == "Perl"


def test_language_name_accepts_any_named_identity():
    class ForeignLanguage:
        name = "Perl"

    assert language_name(ForeignLanguage()) == "Perl"
