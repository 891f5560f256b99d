"""
Configuration management for the appcast updater.

Provides centralized configuration using Pydantic for validation and
environment variable support. Supports updater.yaml for per-project settings.
"""

import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


logger = logging.getLogger(__name__)

# Project root directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Default data paths relative to project root
SETTINGS_PATH = PROJECT_ROOT / "data" / "settings.json"


def load_updater_yaml(search_dir: Optional[Path] = None) -> dict:
    """
    Load updater.yaml configuration file.

    Searches for updater.yaml starting from search_dir (or PROJECT_ROOT)
    and walking up to 3 parent directories.

    Args:
        search_dir: Directory to start searching from

    Returns:
        Dictionary with updater.yaml contents, or empty dict if not found
    """
    start = search_dir or PROJECT_ROOT
    for parent in [start] + list(start.parents)[:3]:
        candidate = parent / "updater.yaml"
        if candidate.exists():
            with open(candidate, "r", encoding="utf-8") as f:
                return yaml.safe_load(f) or {}
    return {}


class Config(BaseSettings):
    """
    Application configuration with environment variable support.

    Configuration can be provided via:
    1. Environment variables (prefixed with APPCAST_UPDATER_)
    2. .env file
    3. updater.yaml (appcast_url and app_version only)
    4. Default values

    Example:
        export APPCAST_UPDATER_APPCAST_URL="https://example.com/appcast.xml"
        export APPCAST_UPDATER_APP_VERSION="1.4.2"
    """

    model_config = SettingsConfigDict(
        env_prefix="APPCAST_UPDATER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Feed
    appcast_url: str = Field(
        default="",
        description="URL of the appcast feed to check"
    )
    app_version: str = Field(
        default="",
        description="Build version of the installed application"
    )

    # Storage
    settings_path: Path = Field(
        default=SETTINGS_PATH,
        description="JSON file holding last check time and skipped version"
    )

    # HTTP
    request_timeout: float = Field(
        default=30.0,
        description="Timeout in seconds for downloading the appcast"
    )
    user_agent: str = Field(
        default="appcast-updater",
        description="User-Agent header sent with appcast requests"
    )

    # Notifications
    notifier: str = Field(
        default="console",
        description="Notifier used to report check results (console/log)"
    )

    def ensure_directories(self) -> None:
        """Create necessary directories if they don't exist."""
        self.settings_path.parent.mkdir(parents=True, exist_ok=True)


def _yaml_string(section: dict, key: str) -> str:
    """
    Read a string setting from updater.yaml.

    Unquoted scalars such as ``1.10`` are loaded by YAML as numbers and
    lose their original text, so anything but a string is rejected.
    """
    value = section.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(
            f"updater.yaml: '{key}' must be a quoted string, "
            f"e.g. {key}: \"{value}\" (got {type(value).__name__})"
        )
    return value


def get_config() -> Config:
    """
    Get the application configuration instance.

    Merges settings from environment variables, .env file,
    and updater.yaml (if present). Environment variables win over
    updater.yaml.

    Returns:
        Config: Application configuration

    Raises:
        ValueError: If updater.yaml holds a non-string appcast_url or
            app_version
    """
    config = Config()

    yaml_config = load_updater_yaml()
    if not isinstance(yaml_config, dict):
        logger.warning("Ignoring updater.yaml: top level is not a mapping")
        yaml_config = {}
    updater_section = yaml_config.get("updater") or {}
    if not isinstance(updater_section, dict):
        logger.warning("Ignoring 'updater' section of updater.yaml: not a mapping")
        updater_section = {}

    if not config.appcast_url:
        config.appcast_url = (
            _yaml_string(updater_section, "appcast_url")
            or _yaml_string(yaml_config, "appcast_url")
        )
    if not config.app_version:
        config.app_version = (
            _yaml_string(updater_section, "app_version")
            or _yaml_string(yaml_config, "app_version")
        )

    config.ensure_directories()
    return config
