"""Parser settings loader.

Settings are read from a JSON file when one is named, either explicitly or via
the ``YARN_LOCKFILE_CONFIG`` environment variable; otherwise defaults apply.
Recognised keys are ``yaml_fallback`` (bool) and ``yaml_suffixes`` (list of
file name suffixes that are always parsed as YAML). ``YARN_LOCKFILE_YAML_FALLBACK``
overrides ``yaml_fallback`` regardless of where the rest came from.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any


CONFIG_PATH_ENV_VAR = "YARN_LOCKFILE_CONFIG"
YAML_FALLBACK_ENV_VAR = "YARN_LOCKFILE_YAML_FALLBACK"

_TRUTHY = {"1", "true", "yes", "y"}
_FALSY = {"0", "false", "no", "n"}


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be loaded or is invalid."""


@dataclass(slots=True, frozen=True)
class ParserSettings:
    """Options controlling how lockfile text is parsed."""

    yaml_fallback: bool = True
    yaml_suffixes: tuple[str, ...] = (".yml", ".yaml")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ParserSettings:
        """Create settings from a dictionary, validating known fields."""
        unknown = sorted(set(data) - {"yaml_fallback", "yaml_suffixes"})
        if unknown:
            raise ConfigError(f"Unknown setting(s): {', '.join(unknown)}")

        yaml_fallback = data.get("yaml_fallback", True)
        if not isinstance(yaml_fallback, bool):
            raise ConfigError("'yaml_fallback' must be a boolean")

        suffixes = data.get("yaml_suffixes", [".yml", ".yaml"])
        if not isinstance(suffixes, list) or not all(
            isinstance(s, str) and s for s in suffixes
        ):
            raise ConfigError("'yaml_suffixes' must be a list of non-empty strings")

        return cls(yaml_fallback=yaml_fallback, yaml_suffixes=tuple(suffixes))

    def is_yaml_file(self, file_loc: str) -> bool:
        return file_loc.endswith(self.yaml_suffixes)


def _resolve_config_path(path: Path | str | None = None) -> Path | None:
    """Resolve the configuration file path.

    Priority:
    1. Explicit path argument
    2. YARN_LOCKFILE_CONFIG environment variable
    3. None (use defaults)
    """
    if path is not None:
        return Path(path)

    env_path = os.environ.get(CONFIG_PATH_ENV_VAR)
    if env_path:
        return Path(env_path)

    return None


def _apply_env_overrides(settings: ParserSettings) -> ParserSettings:
    raw = os.environ.get(YAML_FALLBACK_ENV_VAR, "").strip().lower()
    if not raw:
        return settings
    if raw in _TRUTHY:
        return replace(settings, yaml_fallback=True)
    if raw in _FALSY:
        return replace(settings, yaml_fallback=False)
    raise ConfigError(f"{YAML_FALLBACK_ENV_VAR} has unrecognised value {raw!r}")


def load_settings(path: Path | str | None = None) -> ParserSettings:
    """Load and validate parser settings.

    Args:
        path: Optional path to a JSON settings file. If not provided, uses the
            YARN_LOCKFILE_CONFIG env var or falls back to defaults.

    Raises:
        ConfigError: If a named file cannot be read or contains invalid data.
    """
    config_path = _resolve_config_path(path)
    if config_path is None:
        return _apply_env_overrides(ParserSettings())

    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read configuration file: {exc}") from exc

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in configuration file: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a JSON object")

    return _apply_env_overrides(ParserSettings.from_dict(data))
