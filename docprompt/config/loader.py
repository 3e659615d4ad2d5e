"""YAML configuration loader with environment variable overrides.

# ─── CONFIGURATION HIERARCHY ──────────────────────────────────────────
#
# Configuration is loaded in layers (later layers override earlier):
#
#   1. config/config.yaml  -- Static defaults checked into the repo
#   2. .env file           -- Local developer overrides (not committed)
#   3. Environment vars    -- Set per shell / per machine
#
# load_config() reads the YAML file first, then deep-merges the values
# from Settings on top.  build_settings() goes the other way: it turns
# the YAML "generation" and "logging" sections into Settings keyword
# arguments so a checked-in config file can pick the endpoint and model
# without exporting variables.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from docprompt.config.settings import Settings
from docprompt.utils.errors import ConfigurationError

# YAML key -> Settings field.  Only these sections are honoured.
_YAML_FIELD_MAP: dict[tuple[str, str], str] = {
    ("generation", "url"): "ollama_url",
    ("generation", "default_model"): "default_model",
    ("generation", "request_timeout"): "request_timeout",
    ("generation", "connect_timeout"): "connect_timeout",
    ("app", "env"): "app_env",
    ("logging", "level"): "log_level",
}


def _read_yaml(path: str | Path) -> dict[str, Any]:
    config_path = Path(path)
    if not config_path.exists():
        return {}
    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"Top level of {config_path} must be a mapping")
    return data


def load_config(path: str = "config/config.yaml", settings: Settings | None = None) -> dict:
    """Load YAML config and merge with environment-based Settings.

    Environment variables (via Settings) override YAML values where keys overlap.

    Args:
        path: Path to the YAML configuration file.
        settings: Pre-built settings; a fresh ``Settings()`` is used when omitted.

    Returns:
        Fully resolved configuration dictionary.
    """
    yaml_config = _read_yaml(path)

    if settings is None:
        settings = build_settings(path)
    env_overrides = {
        "app": {
            "env": settings.app_env,
        },
        "generation": {
            "url": settings.ollama_url,
            "default_model": settings.default_model,
            "request_timeout": settings.request_timeout,
            "connect_timeout": settings.connect_timeout,
        },
        "logging": {
            "level": settings.log_level,
        },
    }

    _deep_merge(yaml_config, env_overrides)
    return yaml_config


def build_settings(path: str | Path = "config/config.yaml", **overrides: Any) -> Settings:
    """Build :class:`Settings` with YAML values as the lowest-priority layer.

    Environment variables and ``.env`` entries still win over the YAML file,
    and explicit ``overrides`` win over everything.

    Raises:
        ConfigurationError: If the YAML is malformed or a value fails validation.
    """
    yaml_config = _read_yaml(path)
    known_fields = Settings.model_fields.keys()

    try:
        # pydantic-settings gives init kwargs the highest priority, so YAML
        # values are only passed for fields the environment leaves unset.
        from_env = Settings()
        from_yaml: dict[str, Any] = {}
        for (section, key), field_name in _YAML_FIELD_MAP.items():
            section_data = yaml_config.get(section)
            if not isinstance(section_data, dict) or key not in section_data:
                continue
            if field_name in from_env.model_fields_set:
                continue
            from_yaml[field_name] = section_data[key]

        kwargs = {k: v for k, v in {**from_yaml, **overrides}.items() if k in known_fields}
        return Settings(**kwargs)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration: {exc}") from exc


def _deep_merge(base: dict, overrides: dict) -> None:
    """Recursively merge overrides into base dict, mutating base in place."""
    for key, value in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
