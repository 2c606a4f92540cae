"""Project config (.tiebreak/config.json)."""

from __future__ import annotations

import copy
import json
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from tiebreak.fallbacks import log_best_effort_failure

PROJECT_ROOT = Path(os.environ.get("TIEBREAK_ROOT", Path.cwd())).resolve()
CONFIG_FILE = PROJECT_ROOT / ".tiebreak" / "config.json"
PLUGIN_DIR = PROJECT_ROOT / ".tiebreak" / "plugins"
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConfigKey:
    type: type
    default: object
    description: str


CONFIG_SCHEMA: dict[str, ConfigKey] = {
    "max_content_chars": ConfigKey(
        int,
        0,
        "Characters of content the heuristics inspect (0 = unlimited)",
    ),
    "rules": ConfigKey(
        list, [], "Declarative rules appended to the built-in heuristics"
    ),
    "extra_languages": ConfigKey(
        list, [], "Language names known in addition to the built-in catalog"
    ),
    "user_rules_first": ConfigKey(
        bool, False, "Give config and plugin rules precedence over built-ins"
    ),
    "load_plugins": ConfigKey(
        bool, True, "Import rule plugins from .tiebreak/plugins/"
    ),
}


def default_config() -> dict[str, Any]:
    """Return a config dict with all keys set to their defaults."""
    return {k: copy.deepcopy(v.default) for k, v in CONFIG_SCHEMA.items()}


def _valid_value(key: str, value: object) -> bool:
    expected = CONFIG_SCHEMA[key].type
    if expected is int:
        return isinstance(value, int) and not isinstance(value, bool) and value >= 0
    return isinstance(value, expected)


def load_config(path: Path | None = None) -> dict[str, Any]:
    """Load config from disk, filling missing or mistyped keys with defaults."""
    p = path or CONFIG_FILE
    config: dict[str, Any] = {}
    if p.exists():
        try:
            loaded = json.loads(p.read_text())
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as exc:
            logger.debug("Ignoring unreadable config %s: %s", p, exc)
            loaded = {}
        if isinstance(loaded, dict):
            config = loaded

    changed = False
    for key, schema in CONFIG_SCHEMA.items():
        if key not in config or not _valid_value(key, config[key]):
            config[key] = copy.deepcopy(schema.default)
            changed = True

    if changed and p.exists():
        try:
            save_config(config, p)
        except OSError as exc:
            log_best_effort_failure(logger, f"persist normalized config to {p}", exc)

    return config


def safe_write_text(filepath: str | Path, content: str) -> None:
    """Atomically write text to a file using temp+rename."""
    p = Path(filepath)
    p.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=p.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w") as f:
            f.write(content)
        os.replace(tmp, str(p))
    except BaseException:
        try:
            os.unlink(tmp)
        except OSError:
            pass
        raise


def save_config(config: dict, path: Path | None = None) -> None:
    """Save config to disk atomically."""
    p = path or CONFIG_FILE
    safe_write_text(p, json.dumps(config, indent=2) + "\n")


def set_config_value(config: dict, key: str, raw: str) -> None:
    """Parse and set a config value from a raw string.

    Handles special cases:
    - "unlimited" → 0 for int keys
    - "true"/"false" for bools
    - list keys append (rules must be edited in the config file)
    """
    if key not in CONFIG_SCHEMA:
        raise KeyError(f"Unknown config key: {key}")

    schema = CONFIG_SCHEMA[key]

    if schema.type is int:
        if raw.lower() == "unlimited":
            config[key] = 0
            return
        try:
            value = int(raw)
        except ValueError as ex:
            raise ValueError(f"Expected integer for {key}, got: {raw}") from ex
        if value < 0:
            raise ValueError(f"Expected non-negative integer for {key}, got: {raw}")
        config[key] = value
    elif schema.type is bool:
        if raw.lower() in ("true", "1", "yes"):
            config[key] = True
        elif raw.lower() in ("false", "0", "no"):
            config[key] = False
        else:
            raise ValueError(f"Expected true/false for {key}, got: {raw}")
    elif key == "rules":
        raise ValueError("Cannot set 'rules' via CLI; edit .tiebreak/config.json")
    elif schema.type is list:
        config.setdefault(key, [])
        if raw not in config[key]:
            config[key].append(raw)
    else:
        config[key] = raw


def unset_config_value(config: dict, key: str) -> None:
    """Reset a config key to its default value."""
    if key not in CONFIG_SCHEMA:
        raise KeyError(f"Unknown config key: {key}")
    config[key] = copy.deepcopy(CONFIG_SCHEMA[key].default)


__all__ = [
    "CONFIG_FILE",
    "CONFIG_SCHEMA",
    "ConfigKey",
    "PLUGIN_DIR",
    "PROJECT_ROOT",
    "default_config",
    "load_config",
    "safe_write_text",
    "save_config",
    "set_config_value",
    "unset_config_value",
]
