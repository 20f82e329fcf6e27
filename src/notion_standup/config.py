"""Configuration management for the daily standup generator."""

import copy
import os
import yaml
from dotenv import find_dotenv, load_dotenv
from pathlib import Path
from typing import Dict, Any, Optional


class ConfigurationError(ValueError):
    """Raised when required configuration is missing."""


class Config:
    """Configuration manager with support for YAML files and environment variables."""

    DEFAULT_CONFIG = {
        "notion": {
            "token": "",
            "api_version": "2022-06-28",
            "api_base_url": "https://api.notion.com/v1",
            "standup_database_id": "",
            "sotd_database_id": "",
        },
        "sotd": {
            "playlist_url": "",
        },
        "jira": {
            "project_id": "",
            "project_url": "",
        },
        "logging": {
            "level": "WARNING",
            "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        },
    }

    # (config key path, environment variable, required)
    ENV_SETTINGS = [
        ("notion.token", "NOTION_API_TOKEN", True),
        ("notion.api_version", "NOTION_API_VERSION", False),
        ("notion.api_base_url", "NOTION_API_BASE_URL", False),
        ("notion.standup_database_id", "STANDUP_DATABASE_ID", True),
        ("notion.sotd_database_id", "SOTD_DATABASE_ID", True),
        ("sotd.playlist_url", "SOTD_PLAYLIST_URL", True),
        ("jira.project_id", "JIRA_PROJECT_ID", True),
        ("jira.project_url", "JIRA_PROJECT_URL", True),
        ("logging.level", "LOG_LEVEL", False),
    ]

    def __init__(
        self,
        config_file: Optional[Path] = None,
        environ: Optional[Dict[str, str]] = None,
        search_default_locations: bool = True,
    ):
        """
        Initialize configuration.

        Args:
            config_file: Path to YAML config file. If None, looks for config.yaml
                        in current directory, then ~/.notion-standup/config.yaml
            environ: Environment mapping to read from (defaults to os.environ)
            search_default_locations: Whether to look for config.yaml in the
                        default locations when no config_file is given
        """
        self.config = copy.deepcopy(self.DEFAULT_CONFIG)
        self.environ = os.environ if environ is None else environ

        # Load from YAML file if available
        if config_file:
            self._load_yaml(config_file)
        elif search_default_locations:
            for path in [
                Path.cwd() / "config.yaml",
                Path.home() / ".notion-standup" / "config.yaml",
            ]:
                if path.exists():
                    self._load_yaml(path)
                    break

        # Override with environment variables
        self._load_from_env()

        # Validate required fields
        self._validate()

    def _load_yaml(self, config_file: Path) -> None:
        """Load configuration from YAML file."""
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")

        with open(config_file, "r") as f:
            yaml_config = yaml.safe_load(f)

        if yaml_config and not isinstance(yaml_config, dict):
            raise ConfigurationError(f"Config file must contain a mapping: {config_file}")

        if yaml_config:
            self._deep_update(self.config, yaml_config)

    def _load_from_env(self) -> None:
        """Load configuration from environment variables."""
        for key_path, env_var, _ in self.ENV_SETTINGS:
            value = self.environ.get(env_var)
            if value:
                section, key = key_path.split(".")
                self.config[section][key] = value

    def _deep_update(self, base: Dict, updates: Dict) -> None:
        """Recursively update nested dictionaries."""
        for key, value in updates.items():
            if (
                key in base
                and isinstance(base[key], dict)
                and isinstance(value, dict)
            ):
                self._deep_update(base[key], value)
            else:
                base[key] = value

    def _validate(self) -> None:
        """Validate that required configuration is present."""
        missing = [
            env_var
            for key_path, env_var, required in self.ENV_SETTINGS
            if required and not self.get(key_path)
        ]
        if missing:
            raise ConfigurationError(
                f"Missing required configuration: {', '.join(missing)}. "
                "Set these environment variables or add them to config.yaml"
            )

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation.

        Args:
            key_path: Dot-separated path (e.g., 'notion.token')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        keys = key_path.split(".")
        value = self.config

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    @property
    def notion_token(self) -> str:
        """Get Notion API token."""
        return self.config["notion"]["token"]

    @property
    def api_version(self) -> str:
        """Get Notion API version."""
        return self.config["notion"]["api_version"]

    @property
    def api_base_url(self) -> str:
        return self.config["notion"]["api_base_url"].rstrip("/")

    @property
    def standup_database_id(self) -> str:
        return self.config["notion"]["standup_database_id"]

    @property
    def sotd_database_id(self) -> str:
        return self.config["notion"]["sotd_database_id"]

    @property
    def sotd_playlist_url(self) -> str:
        """Get the song of the day playlist URL."""
        return self.config["sotd"]["playlist_url"]

    @property
    def jira_project_id(self) -> str:
        """Get the Jira project key used for issue links (e.g. 'PLS')."""
        return self.config["jira"]["project_id"]

    @property
    def jira_project_url(self) -> str:
        """Get the Jira browse URL prefix issue keys are appended to."""
        return self.config["jira"]["project_url"]

    @property
    def log_level(self) -> str:
        """Get logging level."""
        return str(self.config["logging"]["level"]).upper()

    @property
    def log_format(self) -> str:
        """Get logging format."""
        return self.config["logging"]["format"]


def load_config(config_file: Optional[Path] = None, load_env_file: bool = True) -> Config:
    """
    Load configuration from file or environment.

    Args:
        config_file: Optional path to YAML config file
        load_env_file: Load a .env file from the working directory first

    Returns:
        Config object

    Raises:
        ConfigurationError: If required configuration is missing
    """
    if load_env_file:
        load_dotenv(find_dotenv(usecwd=True), override=False)
    return Config(config_file)
