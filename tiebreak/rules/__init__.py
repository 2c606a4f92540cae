"""Rule sources: built-in heuristics, data declarations, and user plugins."""

from tiebreak.rules.builtin import (
    BUILTIN_HEURISTICS,
    OBJECTIVE_C_RE,
    builtin_rules,
    register_builtin_rules,
)
from tiebreak.rules.declarative import load_rules_file, rule_from_dict, rules_from_list
from tiebreak.rules.discovery import load_plugins

__all__ = [
    "BUILTIN_HEURISTICS",
    "OBJECTIVE_C_RE",
    "builtin_rules",
    "load_plugins",
    "load_rules_file",
    "register_builtin_rules",
    "rule_from_dict",
    "rules_from_list",
]
