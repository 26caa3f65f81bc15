"""
Configuration loader — resolve ``Settings`` from file, env, and flags.

Precedence, highest first:
    CLI flags  >  ADDGEM_* env vars  >  .addgem.yml  >  defaults

The YAML file is optional. It is found by walking up from the current
directory, or given explicitly with ``--config``. Keys may sit at the
top level or under an ``addgem:`` key.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from addgem.core.models.settings import Settings

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = ".addgem.yml"

# Environment variable → settings key
_ENV_OVERRIDES = {
    "ADDGEM_GEMFILE": "gemfile",
    "ADDGEM_REGISTRY_URL": "registry_url",
}


class ConfigError(Exception):
    """Raised when the add-gem configuration is invalid or unreadable."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for .addgem.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to .addgem.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def _read_config_file(path: Path) -> dict[str, Any]:
    """Read and shape-check the YAML file. Relative ``gemfile`` resolves against it."""
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    if "addgem" in data:
        data = data["addgem"] or {}
        if not isinstance(data, dict):
            raise ConfigError(f"Expected a mapping under 'addgem' in {path}")

    gemfile = data.get("gemfile")
    if isinstance(gemfile, str) and not Path(gemfile).is_absolute():
        data["gemfile"] = str(path.parent.resolve() / gemfile)

    return data


def load_settings(
    path: Path | None = None,
    overrides: dict[str, Any] | None = None,
    env: dict[str, str] | None = None,
) -> Settings:
    """Resolve settings from all sources.

    Args:
        path: Explicit config file. If None, searches upward from cwd.
        overrides: Values from CLI flags; None entries are ignored.
        env: Environment mapping (default: ``os.environ``).

    Returns:
        Validated Settings.

    Raises:
        ConfigError: If an explicit file is missing, or any source is invalid.
    """
    if path is None:
        path = find_config_file()

    data: dict[str, Any] = _read_config_file(path) if path is not None else {}

    environ = os.environ if env is None else env
    for var, key in _ENV_OVERRIDES.items():
        value = environ.get(var)
        if value:
            data[key] = value

    for key, value in (overrides or {}).items():
        if value is not None:
            data[key] = value

    try:
        settings = Settings.model_validate(data)
    except ValidationError as e:
        source = f" in {path}" if path is not None else ""
        raise ConfigError(f"Invalid configuration{source}: {e}") from e

    logger.debug("Resolved settings: %s", settings.model_dump(mode="json"))
    return settings
