"""User rule plugins: PROJECT_ROOT/.tiebreak/plugins/*.py.

A plugin module defines ``register(builder)`` and adds its rules to the
builder it is handed. Failures are collected per module and surfaced
together once discovery finishes.
"""

from __future__ import annotations

import importlib.util
import logging
from pathlib import Path

from tiebreak.engine.registry import RuleRegistryBuilder

logger = logging.getLogger(__name__)

# Plugin imports may also raise SyntaxError/TypeError.
_PLUGIN_ERRORS: tuple[type[Exception], ...] = (
    ImportError, SyntaxError, ValueError, TypeError, RuntimeError, OSError, AttributeError,
)


def raise_load_errors(failures: dict[str, BaseException]) -> None:
    if not failures:
        return
    lines = ["Rule plugin failures:"]
    for module_name, ex in sorted(failures.items()):
        lines.append(f"  - {module_name}: {type(ex).__name__}: {ex}")
    raise ImportError("\n".join(lines))


def plugin_files(plugin_dir: Path) -> list[Path]:
    if not plugin_dir.is_dir():
        return []
    return sorted(f for f in plugin_dir.glob("*.py") if not f.name.startswith("_"))


def _load_plugin(path: Path, builder: RuleRegistryBuilder) -> None:
    spec = importlib.util.spec_from_file_location(f"tiebreak_user_plugin_{path.stem}", path)
    if spec is None or spec.loader is None:
        raise ImportError(f"cannot load plugin from {path}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    register = getattr(module, "register", None)
    if not callable(register):
        raise AttributeError("plugin does not define register(builder)")
    register(builder)


def load_plugins(plugin_dir: Path, builder: RuleRegistryBuilder) -> list[str]:
    """Import every plugin in *plugin_dir* and let it register rules.

    Returns the names of plugins loaded; raises ImportError listing every
    plugin that failed.
    """
    loaded: list[str] = []
    failures: dict[str, BaseException] = {}
    for path in plugin_files(plugin_dir):
        try:
            _load_plugin(path, builder)
        except _PLUGIN_ERRORS as ex:
            logger.debug("Rule plugin %s failed: %s", path.name, ex)
            failures[path.name] = ex
            continue
        loaded.append(path.name)
    raise_load_errors(failures)
    return loaded


__all__ = ["load_plugins", "plugin_files", "raise_load_errors"]
