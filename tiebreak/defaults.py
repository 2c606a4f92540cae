"""Process-wide default registry, built once on first use."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from tiebreak import config as config_mod
from tiebreak.engine.registry import RuleRegistry, RuleRegistryBuilder
from tiebreak.languages import DEFAULT_CATALOG, Language
from tiebreak.rules.builtin import register_builtin_rules
from tiebreak.rules.declarative import rules_from_list
from tiebreak.rules.discovery import load_plugins

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_default_registry: RuleRegistry | None = None


def build_registry(
    config: dict[str, Any] | None = None, *, plugin_dir: Path | None = None
) -> RuleRegistry:
    """Build a registry from built-ins plus config rules and plugins.

    With no *config* only the built-in heuristics are registered.
    """
    if config is None:
        builder = RuleRegistryBuilder(DEFAULT_CATALOG)
        register_builtin_rules(builder)
        return builder.build()

    catalog = DEFAULT_CATALOG.extended(config.get("extra_languages") or [])
    builder = RuleRegistryBuilder(catalog)
    user_first = bool(config.get("user_rules_first"))

    if not user_first:
        register_builtin_rules(builder)
    builder.extend(rules_from_list(config.get("rules") or [], catalog))
    if config.get("load_plugins", True):
        loaded = load_plugins(plugin_dir or config_mod.PLUGIN_DIR, builder)
        if loaded:
            logger.debug("Loaded rule plugins: %s", ", ".join(loaded))
    if user_first:
        register_builtin_rules(builder)

    return builder.build(max_content_chars=int(config.get("max_content_chars") or 0))


def default_registry() -> RuleRegistry:
    """Return the shared registry, building it from the project config once."""
    global _default_registry
    if _default_registry is not None:
        return _default_registry
    with _lock:
        if _default_registry is None:
            _default_registry = build_registry(config_mod.load_config())
    return _default_registry


def reset_default_registry() -> None:
    """Drop the shared registry so the next call rebuilds it."""
    global _default_registry
    with _lock:
        _default_registry = None


def resolve(
    content: str | bytes | None, candidates: Iterable[Language | str]
) -> list[Language]:
    """Disambiguate *content* among *candidates* with the default registry."""
    return default_registry().resolve(content, candidates)


__all__ = ["build_registry", "default_registry", "reset_default_registry", "resolve"]
