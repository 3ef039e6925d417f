"""
Configuration — Centralized settings management

Config hierarchy (highest to lowest priority):
  1. Environment variables (METALCLOUD_*)
  2. Project config (./.metalcloud/config.yaml)
  3. User config (~/.metalcloud/config.yaml)
  4. Defaults

API keys are NEVER stored in config files.
They must be provided via the METALCLOUD_API_KEY environment variable.
"""

import os
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigError
from .log import DEFAULT_LOG_LEVEL, LOG_LEVELS
from .output import VALID_FORMATS


API_KEY_ENV = "METALCLOUD_API_KEY"

# Environment variable -> (section, setting)
ENV_OVERRIDES = {
    "METALCLOUD_ENDPOINT": ("api", "endpoint"),
    "METALCLOUD_USER_EMAIL": ("api", "user_email"),
    "METALCLOUD_CLIENT_FACTORY": ("api", "client_factory"),
    "METALCLOUD_FORMAT": ("display", "format"),
    "METALCLOUD_LOG_LEVEL": ("logging", "level"),
}


@dataclass
class ApiConfig:
    """Provisioning API connection settings."""
    endpoint: str = ""
    user_email: str = ""
    client_factory: str = ""  # "module:callable"

    @property
    def api_key(self) -> Optional[str]:
        """Get API key from environment. Never stored."""
        return os.environ.get(API_KEY_ENV)

    @property
    def is_available(self) -> bool:
        return bool(self.api_key)

    def validate(self) -> Optional[str]:
        """Validate config. Returns error message or None if valid."""
        if self.client_factory and ":" not in self.client_factory:
            return f"Invalid client factory '{self.client_factory}'. Use 'module:callable'"
        return None


@dataclass
class DisplayConfig:
    """Display preferences."""
    format: str = ""  # "" (human readable) | "json"/"JSON" | "csv"/"CSV"

    def validate(self) -> Optional[str]:
        """Validate config. Returns error message or None if valid."""
        if self.format not in VALID_FORMATS:
            valid = ", ".join(repr(f) for f in VALID_FORMATS)
            return f"Unknown format '{self.format}'. Valid: {valid}"
        return None


@dataclass
class LoggingConfig:
    """Logging preferences."""
    level: str = DEFAULT_LOG_LEVEL

    def validate(self) -> Optional[str]:
        """Validate config. Returns error message or None if valid."""
        if self.level.lower() not in LOG_LEVELS:
            return f"Unknown log level '{self.level}'. Valid: {', '.join(LOG_LEVELS)}"
        return None


@dataclass
class Config:
    """Application configuration."""
    api: ApiConfig = field(default_factory=ApiConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "api": {
                "endpoint": self.api.endpoint,
                "user_email": self.api.user_email,
                "client_factory": self.api.client_factory,
            },
            "display": {
                "format": self.display.format,
            },
            "logging": {
                "level": self.logging.level,
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        """Create from dictionary."""
        api_data = data.get("api") or {}
        display_data = data.get("display") or {}
        logging_data = data.get("logging") or {}

        return cls(
            api=ApiConfig(
                endpoint=str(api_data.get("endpoint") or ""),
                user_email=str(api_data.get("user_email") or ""),
                client_factory=str(api_data.get("client_factory") or ""),
            ),
            display=DisplayConfig(
                format=str(display_data.get("format") or ""),
            ),
            logging=LoggingConfig(
                level=str(logging_data.get("level") or DEFAULT_LOG_LEVEL),
            ),
        )

    def validate(self) -> Optional[str]:
        """First validation error of any section, or None."""
        for section in (self.api, self.display, self.logging):
            error = section.validate()
            if error:
                return error
        return None


class ConfigManager:
    """
    Manages configuration loading.

    Hierarchy:
      1. Environment variables
      2. Project config (.metalcloud/config.yaml)
      3. User config (~/.metalcloud/config.yaml)
      4. Defaults
    """

    USER_CONFIG_DIR = Path.home() / ".metalcloud"
    USER_CONFIG_FILE = USER_CONFIG_DIR / "config.yaml"
    PROJECT_CONFIG_DIR = ".metalcloud"
    PROJECT_CONFIG_FILE = "config.yaml"

    def __init__(self, project_dir: Optional[Path] = None, user_config_path: Optional[Path] = None):
        self.project_dir = Path(project_dir) if project_dir else Path.cwd()
        self._user_config_path = Path(user_config_path) if user_config_path else self.USER_CONFIG_FILE
        self._config: Optional[Config] = None

    @property
    def project_config_path(self) -> Path:
        return self.project_dir / self.PROJECT_CONFIG_DIR / self.PROJECT_CONFIG_FILE

    @property
    def user_config_path(self) -> Path:
        return self._user_config_path

    def load(self) -> Config:
        """
        Load configuration from all sources.

        Raises:
            ConfigError: If a config file is not valid YAML or a value is invalid
        """
        if self._config is not None:
            return self._config

        # Start with defaults
        config_data: Dict[str, Any] = {}

        # Layer 1: User config
        config_data = self._merge(config_data, self._read(self.user_config_path))

        # Layer 2: Project config (higher priority)
        config_data = self._merge(config_data, self._read(self.project_config_path))

        # Layer 3: Environment overrides
        for env_name, (section, setting) in ENV_OVERRIDES.items():
            if os.environ.get(env_name):
                config_data.setdefault(section, {})[setting] = os.environ[env_name]

        config = Config.from_dict(config_data)

        error = config.validate()
        if error:
            raise ConfigError(error)

        self._config = config
        return self._config

    def _read(self, path: Path) -> Dict[str, Any]:
        if not path.exists():
            return {}

        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Malformed config file {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Malformed config file {path}: expected a mapping")
        return data

    def _merge(self, base: Dict, override: Dict) -> Dict:
        """Deep merge two dicts, override wins."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge(result[key], value)
            else:
                result[key] = value
        return result

    def display(self) -> str:
        """Format config for display."""
        config = self.load()

        api_key_status = "Set" if config.api.is_available else f"Missing (set {API_KEY_ENV})"
        lines = [
            "Configuration:",
            "",
            "API:",
            f"  Endpoint: {config.api.endpoint}",
            f"  User: {config.api.user_email}",
            f"  Client factory: {config.api.client_factory}",
            f"  API Key: {api_key_status}",
            "",
            "Display:",
            f"  Format: {config.display.format or 'text'}",
            "",
            "Logging:",
            f"  Level: {config.logging.level}",
            "",
            "Config files:",
            f"  User: {self.user_config_path}",
            f"  Project: {self.project_config_path}",
        ]

        return "\n".join(lines)


# =============================================================================
# Process Default
# =============================================================================

_config: Optional[Config] = None
_config_lock = threading.Lock()


def get_config(project_dir: Optional[Path] = None) -> Config:
    """
    Get the process-wide configuration, loading it on first use.
    """
    global _config

    if _config is None:
        with _config_lock:
            if _config is None:
                _config = ConfigManager(project_dir).load()

    return _config


def set_config(config: Optional[Config]) -> None:
    """Replace (or with None, drop) the process-wide configuration."""
    global _config

    with _config_lock:
        _config = config


def get_user_email() -> str:
    """User shown in default table titles."""
    return get_config().api.user_email
