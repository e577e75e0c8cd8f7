"""Configuration management using Pydantic BaseSettings with JSON file support."""
import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


def flatten_json_config(config: dict[str, Any]) -> dict[str, Any]:
    """Flatten nested JSON config into flat key-value pairs.

    Supports nested structures like:
    {
        "deals_api": {"deals_api_url": "https://...", "deals_api_timeout_seconds": 5},
        "server": {"server_port": 8080}
    }

    Becomes:
    {"deals_api_url": "https://...", "deals_api_timeout_seconds": 5, "server_port": 8080}

    Keys starting with "_" (like "_comment") are skipped.
    """
    result = {}

    for key, value in config.items():
        # Skip comment keys
        if key.startswith("_"):
            continue

        if isinstance(value, dict):
            result.update(flatten_json_config(value))
        else:
            result[key] = value

    return result


def load_json_config(config_file: Optional[str] = None) -> dict[str, Any]:
    """Load configuration from a JSON file.

    Args:
        config_file: Path to JSON config file. If None, checks CONFIG_FILE env var.

    Returns:
        Dictionary of configuration values (flattened), or empty dict if no file found.
    """
    file_path = config_file or os.getenv("CONFIG_FILE")

    if not file_path:
        return {}

    path = Path(file_path)
    if not path.exists():
        logger.warning(f"Config file not found: {file_path}")
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            config = json.load(f)
        logger.info(f"Loaded configuration from: {file_path}")
        return flatten_json_config(config)
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in config file {file_path}: {e}")
        return {}
    except OSError as e:
        logger.error(f"Error reading config file {file_path}: {e}")
        return {}


class Settings(BaseSettings):
    """Application configuration with JSON file and environment variable support.

    Configuration priority (highest to lowest):
    1. Explicit keyword arguments
    2. Environment variables
    3. JSON config file (specified via CONFIG_FILE env var)
    4. Default values
    """

    # Upstream deals feed
    deals_api_url: str = "https://eccdn.com.au/misc/challengedata.json"
    deals_api_timeout_seconds: float = 10.0

    # Snapshot cache
    snapshot_ttl_seconds: float = 60.0
    # Background warm-up interval; 0 disables the job
    snapshot_refresh_minutes: int = 5

    # Server Configuration
    server_port: int = 8080
    log_level: str = "INFO"

    # Startup Configuration
    # If False, the first request triggers the initial fetch
    refresh_on_startup: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def __init__(self, **kwargs):
        """Initialize settings from JSON file and environment variables."""
        json_config = load_json_config()

        # Environment variables win over the JSON file
        json_config = {
            key: value
            for key, value in json_config.items()
            if key.upper() not in os.environ
        }

        super().__init__(**{**json_config, **kwargs})
