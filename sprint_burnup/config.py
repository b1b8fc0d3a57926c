"""
Configuration for Sprint Burn-Up Board

Values come from an optional yaml file, then a .env file, then the
environment (highest priority).
"""

import os
from typing import Optional

import yaml
from dotenv import find_dotenv, load_dotenv

from .chart import QUICKCHART_URL
from .exceptions import ConfigError
from .integrations.miro import MIRO_API_URL
from .selector import DEFAULT_CLOSED_SPRINTS

DEFAULT_CONFIG_PATH = "config/config.yaml"

ENV_MAPPING = {
    "JIRA_BASE_URL": ("jira", "url"),
    "JIRA_EMAIL": ("jira", "email"),
    "JIRA_TOKEN": ("jira", "token"),
    "JIRA_BOARD_ID": ("jira", "board_id"),
    "MIRO_TOKEN": ("miro", "token"),
    "MIRO_BOARD_ID": ("miro", "board_id"),
}


class Config:
    """Load configuration from config.yaml and environment."""

    def __init__(
        self,
        config_path: str = DEFAULT_CONFIG_PATH,
        env: Optional[dict] = None,
        load_env_file: bool = True
    ):
        self.config = {}

        if os.path.exists(config_path):
            try:
                with open(config_path) as f:
                    self.config = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigError(f"{config_path} is not valid yaml: {e}") from e
            if not isinstance(self.config, dict):
                raise ConfigError(f"{config_path} must contain a mapping")

        # .env never overrides variables already set in the process
        if env is None:
            env_file = find_dotenv(usecwd=True) if load_env_file else ""
            if env_file:
                load_dotenv(env_file, override=False)
            env = os.environ

        self._load_env(env)

    def _load_env(self, env):
        """Override file values with environment variables."""
        for env_var, (section, key) in ENV_MAPPING.items():
            value = env.get(env_var)
            if value:
                self.set(section, key, value)

    def section(self, name: str) -> dict:
        """Return a section, replacing an empty or non-mapping entry with {}."""
        if not isinstance(self.config.get(name), dict):
            self.config[name] = {}
        return self.config[name]

    def set(self, section: str, key: str, value):
        """Set configuration value."""
        self.section(section)[key] = value

    def get(self, section: str, key: str, default=None):
        """Get configuration value."""
        values = self.config.get(section)
        if not isinstance(values, dict):
            return default
        return values.get(key, default)

    def require(self) -> "Config":
        """Raise ConfigError naming every missing required value."""
        missing = [
            env_var
            for env_var, (section, key) in ENV_MAPPING.items()
            if not self.get(section, key)
        ]
        if missing:
            raise ConfigError(f"Missing required configuration: {', '.join(missing)}")

        if self.closed_sprints < 0:
            raise ConfigError("report.closed_sprints cannot be negative")
        return self

    @property
    def jira_url(self) -> Optional[str]:
        return self.get("jira", "url")

    @property
    def jira_email(self) -> Optional[str]:
        return self.get("jira", "email")

    @property
    def jira_token(self) -> Optional[str]:
        return self.get("jira", "token")

    @property
    def jira_board_id(self) -> Optional[str]:
        board_id = self.get("jira", "board_id")
        return str(board_id) if board_id is not None else None

    @property
    def miro_url(self) -> str:
        return self.get("miro", "url", MIRO_API_URL)

    @property
    def miro_token(self) -> Optional[str]:
        return self.get("miro", "token")

    @property
    def miro_board_id(self) -> Optional[str]:
        return self.get("miro", "board_id")

    @property
    def chart_url(self) -> str:
        return self.get("chart", "url", QUICKCHART_URL)

    @property
    def closed_sprints(self) -> int:
        try:
            return int(self.get("report", "closed_sprints", DEFAULT_CLOSED_SPRINTS))
        except (TypeError, ValueError) as e:
            raise ConfigError("report.closed_sprints must be an integer") from e

    @property
    def timeout(self) -> float:
        try:
            return float(self.get("http", "timeout", 30.0))
        except (TypeError, ValueError) as e:
            raise ConfigError("http.timeout must be a number") from e
