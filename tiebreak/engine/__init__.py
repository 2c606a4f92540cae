"""Rule engine: rules, authoring conditions, and the first-match dispatcher."""

from tiebreak.engine.conditions import (
    always,
    any_of,
    contains,
    first_match,
    regex,
)
from tiebreak.engine.outcome import OutcomeKind, Resolution
from tiebreak.engine.registry import RuleRegistry, RuleRegistryBuilder
from tiebreak.engine.rule import Rule, candidate_names, normalize_content

__all__ = [
    "OutcomeKind",
    "Resolution",
    "Rule",
    "RuleRegistry",
    "RuleRegistryBuilder",
    "always",
    "any_of",
    "candidate_names",
    "contains",
    "first_match",
    "normalize_content",
    "regex",
]
