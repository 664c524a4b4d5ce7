"""
Configuration utilities for aurorawake-core.

Provides configuration loading, saving, and management.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from aurorawake_core.models.config import AuroraConfig
from aurorawake_core.utils.exceptions import ConfigError


def load_config(
    config_path: Optional[str] = None,
    env_file: Optional[str] = None,
) -> AuroraConfig:
    """
    Load AuroraWake configuration from file.

    Supports YAML and JSON formats. Environment variables override file values.

    Args:
        config_path: Path to config file (YAML or JSON)
        env_file: Path to .env file for environment variables

    Returns:
        Loaded configuration

    Raises:
        ConfigError: If configuration cannot be loaded

    Example:
        >>> config = load_config("aurora.yaml")
        >>> config = load_config(env_file=".env")
    """
    if env_file:
        load_dotenv(env_file)
    else:
        load_dotenv()

    config_dict: Dict[str, Any] = {}

    if config_path:
        config_path_obj = Path(config_path)

        if not config_path_obj.exists():
            raise ConfigError(f"Configuration file not found: {config_path}")

        if not config_path.endswith((".yaml", ".yml", ".json")):
            raise ConfigError(f"Unsupported config file format: {config_path}")

        try:
            with open(config_path_obj, "r", encoding="utf-8") as f:
                if config_path.endswith(".json"):
                    config_dict = json.load(f)
                else:
                    config_dict = yaml.safe_load(f) or {}
        except Exception as e:
            raise ConfigError(
                f"Failed to load configuration from {config_path}",
                cause=e,
            )

    try:
        config_dict = _apply_env_overrides(config_dict)
    except ValueError as e:
        raise ConfigError("Invalid environment override", cause=e)

    try:
        return AuroraConfig(**config_dict)
    except Exception as e:
        raise ConfigError("Invalid configuration", details={"error": str(e)}, cause=e)


def save_config(config: AuroraConfig, config_path: str, format: str = "yaml") -> None:
    """
    Save configuration to file.

    Args:
        config: Configuration to save
        config_path: Path to save to
        format: Format ("yaml" or "json")

    Raises:
        ConfigError: If configuration cannot be saved

    Example:
        >>> save_config(config, "aurora.yaml", format="yaml")
    """
    if format not in ("yaml", "json"):
        raise ConfigError(f"Unsupported format: {format}")

    config_dict = config.model_dump(exclude_none=True)

    try:
        config_path_obj = Path(config_path)
        config_path_obj.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path_obj, "w", encoding="utf-8") as f:
            if format == "yaml":
                yaml.safe_dump(config_dict, f, default_flow_style=False, indent=2)
            else:
                json.dump(config_dict, f, indent=2)
    except Exception as e:
        raise ConfigError(f"Failed to save configuration to {config_path}", cause=e)


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge two configuration dictionaries.

    Override values take precedence over base values.

    Args:
        base: Base configuration
        override: Override configuration

    Returns:
        Merged configuration

    Example:
        >>> base = {"scheduler": {"snooze_minutes": 9}}
        >>> override = {"scheduler": {"timezone": "Europe/Paris"}}
        >>> merge_configs(base, override)
        {'scheduler': {'snooze_minutes': 9, 'timezone': 'Europe/Paris'}}
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value

    return result


# (section, key, env var, converter)
_ENV_OVERRIDES = [
    ("scheduler", "snooze_minutes", "AURORA_SNOOZE_MINUTES", int),
    ("scheduler", "ring_window_seconds", "AURORA_RING_WINDOW_SECONDS", float),
    ("scheduler", "notification_lead_seconds", "AURORA_NOTIFICATION_LEAD_SECONDS", int),
    ("scheduler", "io_timeout_seconds", "AURORA_IO_TIMEOUT_SECONDS", float),
    ("scheduler", "notification_retries", "AURORA_NOTIFICATION_RETRIES", int),
    ("scheduler", "timezone", "AURORA_TIMEZONE", str),
    ("storage", "backend", "AURORA_STORAGE_BACKEND", str),
    ("storage", "path", "AURORA_STORAGE_PATH", str),
]


def _apply_env_overrides(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Apply environment variable overrides to configuration.

    Environment variables are in format: AURORA_<KEY>
    e.g., AURORA_SNOOZE_MINUTES, AURORA_STORAGE_PATH

    Args:
        config: Base configuration

    Returns:
        Configuration with environment overrides
    """
    for section, key, env_var, convert in _ENV_OVERRIDES:
        raw = os.getenv(env_var)
        if raw:
            if not isinstance(config.get(section), dict):
                config[section] = {}
            config[section][key] = convert(raw)

    if os.getenv("AURORA_LOG_LEVEL"):
        config["log_level"] = os.getenv("AURORA_LOG_LEVEL")
    if os.getenv("AURORA_LOG_FORMAT"):
        config["log_format"] = os.getenv("AURORA_LOG_FORMAT")
    if os.getenv("AURORA_ENVIRONMENT"):
        config["environment"] = os.getenv("AURORA_ENVIRONMENT")

    return config
