import copy
import logging
from pathlib import Path
from typing import Any, Dict

import yaml

DEFAULT_CONFIG_PATH = Path("postboard.config.yaml")

DEFAULT_SOURCE_URL = "https://jsonplaceholder.typicode.com/posts"

DEFAULT_CONFIG: Dict[str, Any] = {
    "source": {
        "url": DEFAULT_SOURCE_URL,
        "timeout_seconds": 20,
        "user_agent": "postboard/0.1",
    },
    "logging": {
        "level": "WARNING",
    },
}

LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"}


def default_config() -> Dict[str, Any]:
    return copy.deepcopy(DEFAULT_CONFIG)


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    result = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = _merge(result[key], value)
        else:
            result[key] = value
    return result


def validate_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate a merged configuration dict.

    Args:
        config: Configuration with defaults already applied

    Returns:
        The same dict, for chaining

    Raises:
        ValueError: If a section or value has the wrong shape
    """
    source = config.get("source")
    if not isinstance(source, dict):
        raise ValueError("Config 'source' must be a dictionary")

    url = source.get("url")
    if not isinstance(url, str) or not url.strip():
        raise ValueError("Config 'source.url' must be a non-empty string")

    timeout = source.get("timeout_seconds")
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        raise ValueError("Config 'source.timeout_seconds' must be a positive number")

    logging_section = config.get("logging")
    if not isinstance(logging_section, dict):
        raise ValueError("Config 'logging' must be a dictionary")

    level = logging_section.get("level")
    if not isinstance(level, str) or level.upper() not in LOG_LEVELS:
        raise ValueError(f"Config 'logging.level' must be one of {sorted(LOG_LEVELS)}")

    return config


def load_config(path: Path | None = None) -> Dict[str, Any]:
    """
    Load postboard configuration from YAML, merged over built-in defaults.

    Args:
        path: Optional explicit config path. When omitted, postboard.config.yaml
            in the working directory is used if present.

    Returns:
        Validated configuration dictionary

    Raises:
        FileNotFoundError: If an explicit path does not exist
        ValueError: If config structure is invalid
    """
    cfg_path = path or DEFAULT_CONFIG_PATH
    if not cfg_path.exists():
        if path is not None:
            raise FileNotFoundError(f"Config file not found: {cfg_path}")
        return validate_config(default_config())

    with cfg_path.open("r", encoding="utf-8") as f:
        user_config = yaml.safe_load(f)

    if user_config is None:
        user_config = {}
    if not isinstance(user_config, dict):
        raise ValueError("Config must be a dictionary")

    return validate_config(_merge(default_config(), user_config))


def get_source_settings(config: Dict[str, Any] | None = None) -> Dict[str, Any]:
    """Return the ``source`` section (URL, timeout, user agent)."""
    if config is None:
        config = load_config()
    return config["source"]


def get_log_level(config: Dict[str, Any]) -> int:
    return logging.getLevelName(config["logging"]["level"].upper())
