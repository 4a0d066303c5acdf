import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ..retrieval.fetcher import DEFAULT_BASE_URL, DEFAULT_USER_AGENT

DEFAULT_CONFIG_PATH = Path("fellowship.config.yaml")
API_KEY_ENV_VAR = "FELLOWSHIP_API_KEY"

BASE_API_DEFAULTS: Dict[str, Any] = {
    "base_url": DEFAULT_BASE_URL,
    "api_key": None,
    "timeout_seconds": None,
    "user_agent": DEFAULT_USER_AGENT,
    "encode_query_values": True,
}


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load SDK configuration from a YAML file.

    Args:
        path: Optional path. Defaults to fellowship.config.yaml

    Returns:
        Parsed configuration dictionary (empty for an empty file)

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ValueError: If the file is not a YAML mapping
    """
    cfg_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    if not cfg_path.exists():
        raise FileNotFoundError(f"Config file not found: {cfg_path}")
    with cfg_path.open("r", encoding="utf-8") as f:
        config = yaml.safe_load(f)

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ValueError("Config must be a dictionary")
    return config


def get_api_settings(config: Optional[Dict[str, Any]] = None, env: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
    """
    Resolve the ``api`` section with built-in defaults.

    The FELLOWSHIP_API_KEY environment variable overrides the key from the file.

    Raises:
        ValueError: If the section is malformed or no API key is available
    """
    config = config or {}
    env = os.environ if env is None else env

    section = config.get("api") or {}
    if not isinstance(section, dict):
        raise ValueError("Config 'api' section must be a dictionary if provided")

    settings = {**BASE_API_DEFAULTS, **section}
    if env.get(API_KEY_ENV_VAR):
        settings["api_key"] = env[API_KEY_ENV_VAR]

    if not settings.get("api_key"):
        raise ValueError(f"No API key configured: set api.api_key or {API_KEY_ENV_VAR}")

    timeout = settings.get("timeout_seconds")
    if timeout is not None:
        try:
            settings["timeout_seconds"] = float(timeout)
        except (TypeError, ValueError) as e:
            raise ValueError(f"api.timeout_seconds must be a number, got {timeout!r}") from e

    settings["encode_query_values"] = bool(settings.get("encode_query_values", True))
    return settings


def get_log_level(config: Optional[Dict[str, Any]] = None, default: str = "WARNING") -> str:
    section = (config or {}).get("logging") or {}
    return str(section.get("level") or default).upper()
