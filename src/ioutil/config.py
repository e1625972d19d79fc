"""Configuration: default paths, constants, and config loading (defaults + global overrides)."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.json"

# Copy strategies selectable from the CLI and from copy.strategy
COPY_STRATEGIES = ("bytewise", "buffered", "own")
DEFAULT_STRATEGY = "own"


# Global config location
def _global_config_dir() -> Path:
    return Path.home() / ".ioutil"


def global_config_path() -> Path:
    """Path to global config file (~/.ioutil/config.json)."""
    return _global_config_dir() / CONFIG_FILENAME


def default_config() -> dict[str, Any]:
    """Built-in defaults; every key here can be overridden by the global config file."""
    return {
        "copy": {
            "strategy": DEFAULT_STRATEGY,
            "encoding": "utf-8",
        },
        "logging": {
            "level": "INFO",
            "file": None,
        },
    }


def _load_json(path: Path) -> dict[str, Any] | None:
    """Load JSON from path; return None if file missing or invalid."""
    if not path.is_file():
        return None
    try:
        text = path.read_text(encoding="utf-8")
        data = json.loads(text)
    except (json.JSONDecodeError, OSError):
        return None
    return data if isinstance(data, dict) else None


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge override into base recursively. Mutates base; returns base."""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
    return base


def load_config(path: Path | None = None) -> dict[str, Any]:
    """
    Load merged configuration: defaults + global (~/.ioutil/config.json).

    Pass path to read overrides from a different file (tests, alternate installs).
    A missing or unreadable file yields the defaults.
    """
    merged = default_config()
    data = _load_json(path if path is not None else global_config_path())
    if data is not None:
        _deep_merge(merged, data)
    return merged


def save_config(path: Path, data: dict[str, Any]) -> None:
    """Write config as pretty-printed JSON, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")


def copy_strategy(config: dict[str, Any]) -> str:
    """Return copy.strategy from config, falling back to 'own' when unset or unknown."""
    strategy = (config.get("copy") or {}).get("strategy") or DEFAULT_STRATEGY
    if strategy not in COPY_STRATEGIES:
        logger.warning("Unknown copy strategy %r in config; using %r", strategy, DEFAULT_STRATEGY)
        return DEFAULT_STRATEGY
    return strategy


def resolve_path(path: Path) -> Path:
    """Resolve path to absolute, normalized."""
    return path.resolve()
