"""tiebreak: content heuristics that pick one language among ambiguous candidates."""

from tiebreak.defaults import build_registry, default_registry, reset_default_registry, resolve
from tiebreak.engine import (
    OutcomeKind,
    Resolution,
    Rule,
    RuleRegistry,
    RuleRegistryBuilder,
)
from tiebreak.languages import DEFAULT_CATALOG, Language, LanguageCatalog, get_language

__all__ = [
    "DEFAULT_CATALOG",
    "Language",
    "LanguageCatalog",
    "OutcomeKind",
    "Resolution",
    "Rule",
    "RuleRegistry",
    "RuleRegistryBuilder",
    "build_registry",
    "default_registry",
    "get_language",
    "reset_default_registry",
    "resolve",
]
