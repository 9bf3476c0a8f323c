"""Config file discovery and loading.

The config file lives in the user's config directory
(``$XDG_CONFIG_HOME/theshit/config.toml``, ``~/.config`` by default).
``THESHIT_CONFIG`` and the ``--config`` CLI flag override the location.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from theshit.config.models import ShitConfig

APP_NAME = "theshit"
CONFIG_FILENAME = "config.toml"
CONFIG_ENV_VAR = "THESHIT_CONFIG"
RULES_DIRNAME = "fix_rules"


def config_dir() -> Path:
    """Return theshit's directory inside the user config directory."""
    base = os.environ.get("XDG_CONFIG_HOME")
    root = Path(base) if base else Path.home() / ".config"
    return root / APP_NAME


def default_rules_dir() -> Path:
    """Directory scanned for script rules when none is configured."""
    return config_dir() / RULES_DIRNAME


def find_config() -> Path | None:
    """Locate the config file.

    Returns the path to the config file, or None if not found.
    Checks THESHIT_CONFIG env var first.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        if p.is_file():
            return p
        return None

    candidate = config_dir() / CONFIG_FILENAME
    if candidate.is_file():
        return candidate
    return None


def load_config(path: Path | None = None) -> ShitConfig:
    """Load and validate config from a TOML file.

    If *path* is None, uses find_config() to discover the file.
    Returns default ShitConfig if no file is found.
    """
    if path is None:
        path = find_config()

    if path is None:
        return ShitConfig()

    raw = path.read_text(encoding="utf-8")
    data: dict[str, Any] = tomllib.loads(raw)
    return ShitConfig.model_validate(data)
