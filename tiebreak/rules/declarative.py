"""Rules declared as data (project config or JSON rule files).

A declaration looks like::

    {
        "name": "pascal-or-puppet",
        "languages": ["Pascal", "Puppet"],
        "conditions": [
            {"pattern": "^class ", "flags": ["i"], "language": "Puppet"},
            {"contains": "begin", "language": "Pascal"}
        ],
        "default": null
    }

Each condition carries exactly one of ``pattern`` (regular expression) or
``contains`` (substring), plus the ``language`` it selects. Languages outside
the default catalog must be listed under the config key ``extra_languages``.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

from tiebreak.engine.conditions import contains, first_match, regex
from tiebreak.engine.rule import Rule
from tiebreak.languages import DEFAULT_CATALOG, LanguageCatalog

REGEX_FLAGS = {
    "i": re.IGNORECASE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
}


def _require_str(value: object, field: str) -> str:
    if not isinstance(value, str) or not value:
        raise ValueError(f"{field} must be a non-empty string, got: {value!r}")
    return value


def _parse_flags(raw: object, field: str) -> int:
    if raw is None:
        return 0
    if isinstance(raw, str):
        raw = list(raw)
    if not isinstance(raw, list):
        raise ValueError(f"{field} must be a list of flag letters, got: {raw!r}")
    flags = 0
    for letter in raw:
        if letter not in REGEX_FLAGS:
            allowed = ", ".join(sorted(REGEX_FLAGS))
            raise ValueError(f"{field} has unknown flag {letter!r} (allowed: {allowed})")
        flags |= REGEX_FLAGS[letter]
    return flags


def _parse_condition(raw: object, idx: int, languages: frozenset[str]):
    field = f"conditions[{idx}]"
    if not isinstance(raw, dict):
        raise ValueError(f"{field} must be an object, got: {type(raw).__name__}")
    language = _require_str(raw.get("language"), f"{field}.language")
    if language not in languages:
        raise ValueError(f"{field}.language {language!r} is not one of the rule's languages")

    has_pattern = "pattern" in raw
    has_contains = "contains" in raw
    if has_pattern == has_contains:
        raise ValueError(f"{field} needs exactly one of 'pattern' or 'contains'")
    if has_contains:
        return contains(_require_str(raw["contains"], f"{field}.contains")), language

    pattern = _require_str(raw["pattern"], f"{field}.pattern")
    flags = _parse_flags(raw.get("flags"), f"{field}.flags")
    try:
        return regex(pattern, flags), language
    except re.error as ex:
        raise ValueError(f"{field}.pattern is not a valid regular expression: {ex}") from ex


def rule_from_dict(data: dict[str, Any], catalog: LanguageCatalog = DEFAULT_CATALOG) -> Rule:
    """Build a Rule from its data declaration, validating every field."""
    if not isinstance(data, dict):
        raise ValueError(f"Rule declaration must be an object, got: {type(data).__name__}")

    raw_languages = data.get("languages")
    if not isinstance(raw_languages, list) or not raw_languages:
        raise ValueError("languages must be a non-empty list of language names")
    languages = frozenset(
        _require_str(name, f"languages[{i}]") for i, name in enumerate(raw_languages)
    )
    unknown = sorted(name for name in languages if name not in catalog)
    if unknown:
        raise ValueError(f"languages has unknown names: {', '.join(unknown)}")

    raw_conditions = data.get("conditions", [])
    if not isinstance(raw_conditions, list):
        raise ValueError("conditions must be a list")
    branches = [
        _parse_condition(raw, idx, languages) for idx, raw in enumerate(raw_conditions)
    ]

    default = data.get("default")
    if default is not None:
        _require_str(default, "default")
        if default not in languages:
            raise ValueError(f"default {default!r} is not one of the rule's languages")
    if not branches and default is None:
        raise ValueError("rule needs at least one condition or a default language")

    name = data.get("name") or ""
    if not isinstance(name, str):
        raise ValueError(f"name must be a string, got: {name!r}")
    return Rule(
        languages,
        first_match(*branches, default=default),
        lookup=catalog.get,
        name=name,
    )


def rules_from_list(
    items: list[dict[str, Any]], catalog: LanguageCatalog = DEFAULT_CATALOG
) -> list[Rule]:
    rules: list[Rule] = []
    for idx, item in enumerate(items):
        try:
            rules.append(rule_from_dict(item, catalog))
        except ValueError as ex:
            raise ValueError(f"Invalid rule #{idx}: {ex}") from ex
    return rules


def load_rules_file(path: Path, catalog: LanguageCatalog = DEFAULT_CATALOG) -> list[Rule]:
    """Load a JSON file holding a list of rule declarations."""
    try:
        items = json.loads(Path(path).read_text())
    except (json.JSONDecodeError, UnicodeDecodeError) as ex:
        raise ValueError(f"Rules file {path} is not valid JSON: {ex}") from ex
    if not isinstance(items, list):
        raise ValueError(f"Rules file {path} must contain a JSON list")
    return rules_from_list(items, catalog)


__all__ = ["REGEX_FLAGS", "load_rules_file", "rule_from_dict", "rules_from_list"]
