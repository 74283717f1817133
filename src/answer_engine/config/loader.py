"""
Settings loading for the Answer Engine.

Values are layered, later layers winning:
1. Model defaults (settings.py)
2. An optional YAML file
3. ANSWER_ENGINE__{SECTION}__{KEY} environment variables

Example:
    ANSWER_ENGINE__AGGREGATOR__MAX_SOURCES=6 answer-engine search "Mars"
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import ValidationError

from answer_engine.config.settings import Settings
from answer_engine.core.exceptions import ConfigurationError

ENV_PREFIX = "ANSWER_ENGINE"
ENV_SEPARATOR = "__"

CONFIG_FILE_NAME = "config.yaml"

_cached_settings: Settings | None = None


def _deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Recursively merge two mappings; values from `override` win."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def _parse_env_value(raw: str) -> Any:
    """
    Type an environment string the way YAML types a scalar.

    "6" -> 6, "2.5" -> 2.5, "true"/"off" -> bool, "" or "null" -> None.
    Anything YAML cannot read as a scalar stays a string.
    """
    try:
        value = yaml.safe_load(raw)
    except yaml.YAMLError:
        return raw
    if isinstance(value, (dict, list)):
        return raw
    return value


def _load_env_overrides(
    prefix: str = ENV_PREFIX,
    environ: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """
    Collect `{prefix}__SECTION__KEY` variables into a nested mapping.

    Variables naming only a section (no key) are ignored.
    """
    environ = os.environ if environ is None else environ
    marker = f"{prefix}{ENV_SEPARATOR}"
    overrides: dict[str, Any] = {}

    for name, raw in environ.items():
        if not name.startswith(marker):
            continue
        path = name[len(marker):].lower().split(ENV_SEPARATOR)
        if len(path) < 2 or not all(path):
            continue

        nested: Any = _parse_env_value(raw)
        for part in reversed(path):
            nested = {part: nested}
        overrides = _deep_merge(overrides, nested)

    return overrides


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Read a YAML settings file; an empty file is an empty mapping.

    Raises:
        FileNotFoundError: If the file doesn't exist
        yaml.YAMLError: If the file is not valid YAML
        ConfigurationError: If the top level is not a mapping
    """
    if not path.is_file():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    content = yaml.safe_load(path.read_text(encoding="utf-8"))
    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ConfigurationError(
            "Configuration file must contain a mapping",
            details={"path": str(path), "type": type(content).__name__},
        )
    return content


def load_config(
    config_path: Path | str | None = None,
    env_prefix: str = ENV_PREFIX,
) -> Settings:
    """
    Build validated Settings from defaults, a YAML file and the environment.

    Args:
        config_path: YAML file to read; None means defaults plus environment
        env_prefix: Prefix of override variables

    Returns:
        Settings instance

    Raises:
        FileNotFoundError: If config_path does not exist
        ConfigurationError: If a value fails validation
    """
    layers: dict[str, Any] = {}
    if config_path is not None:
        layers = _load_yaml_file(Path(config_path))
    layers = _deep_merge(layers, _load_env_overrides(env_prefix))

    try:
        return Settings.model_validate(layers)
    except ValidationError as e:
        fields = [".".join(str(part) for part in error["loc"]) for error in e.errors()]
        raise ConfigurationError(
            "Invalid configuration",
            details={"fields": fields},
        ) from e


def get_settings(
    config_path: Path | str | None = None,
    reload: bool = False,
) -> Settings:
    """Process-wide Settings, loaded on first use or when `reload` is set."""
    global _cached_settings

    if reload or _cached_settings is None:
        _cached_settings = load_config(config_path)
    return _cached_settings


def reset_settings() -> None:
    """Forget the cached Settings (used by tests)."""
    global _cached_settings
    _cached_settings = None


@lru_cache(maxsize=1)
def get_default_config_path() -> Path | None:
    """
    First existing settings file among:
    ./config.yaml, ./config/config.yaml, ~/.answer_engine/config.yaml
    """
    candidates = (
        Path.cwd() / CONFIG_FILE_NAME,
        Path.cwd() / "config" / CONFIG_FILE_NAME,
        Path.home() / ".answer_engine" / CONFIG_FILE_NAME,
    )
    return next((path for path in candidates if path.is_file()), None)
