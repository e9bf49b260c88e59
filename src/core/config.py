#!/usr/bin/env python3
"""
Centralized Configuration Manager

Provides a single source of truth for all application configuration,
including environment variables, defaults, and validation.
"""

import os
import sys
import logging
from dataclasses import dataclass, field
from typing import Optional, Dict
from pathlib import Path

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_HTTP_TIMEOUT = 30
DEFAULT_LISTEN_PORT = 33000
DEFAULT_SHOW_MAX_NEWS = 50
DEFAULT_USER_AGENT = 'MorningPost/0.1'


def user_state_dir() -> Path:
    """Per-user directory for application state."""
    if sys.platform.startswith('win'):
        app_data = os.getenv('AppData')
        return Path(app_data) if app_data else Path('./')
    if sys.platform == 'darwin':
        home = os.getenv('HOME')
        return Path(home) / 'Library' / 'Application Support' if home else Path('./')
    # Unix
    state_home = os.getenv('XDG_STATE_HOME')
    return Path(state_home) if state_home else Path('/var/lib')


def default_store_path() -> Path:
    return user_state_dir() / 'MorningPost' / 'morningpost.json'


@dataclass
class IntegrationConfig:
    """External integration configuration."""
    guardian_api_key: Optional[str] = None


@dataclass
class ApplicationConfig:
    """Core application configuration."""
    # HTTP settings
    http_timeout: int = DEFAULT_HTTP_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT

    # Web UI
    listen_port: int = DEFAULT_LISTEN_PORT
    show_max_news: int = DEFAULT_SHOW_MAX_NEWS

    # Feed store
    store_path: Path = field(default_factory=default_store_path)

    # Logging
    log_level: str = "INFO"
    verbose_logging: bool = False


@dataclass
class Config:
    """Master configuration container."""
    integrations: IntegrationConfig
    app: ApplicationConfig

    def has_guardian(self) -> bool:
        """Check if the Guardian API source can be built."""
        return bool(self.integrations.guardian_api_key)

    def source_config(self) -> Dict[str, object]:
        """Default configuration handed to built-in sources."""
        config = {'timeout': self.app.http_timeout}
        if self.integrations.guardian_api_key:
            config['api_key'] = self.integrations.guardian_api_key
        return config


class ConfigManager:
    """Manages application configuration with validation and environment loading."""

    def __init__(self, env_file_path: str = ".env"):
        """
        Initialize configuration manager.

        Args:
            env_file_path: Path to .env file relative to project root
        """
        self._config: Optional[Config] = None
        self._env_file_path = env_file_path
        self._load_environment()

    def _load_environment(self) -> None:
        """Load environment variables from .env file."""
        # Find project root (where .env should be)
        current_dir = Path(__file__).parent
        project_root = current_dir.parent.parent  # Go up to project root
        env_path = project_root / self._env_file_path

        if env_path.exists():
            self._load_env_file(env_path)
        else:
            logger.debug(f"No .env file found at {env_path}")

    def _load_env_file(self, env_path: Path) -> None:
        """Load variables from .env file."""
        try:
            with open(env_path, 'r', encoding='utf-8') as f:
                lines = f.readlines()
        except OSError as e:
            logger.error(f"Error loading .env file {env_path}: {e}")
            return

        loaded_count = 0
        for line_num, line in enumerate(lines, 1):
            line = line.strip()

            # Skip empty lines and comments
            if not line or line.startswith('#'):
                continue

            # Parse KEY=VALUE format
            if '=' not in line:
                logger.warning(f"Invalid .env format at line {line_num}: {line}")
                continue

            key, value = line.split('=', 1)
            key = key.strip()
            value = value.strip()

            # Remove quotes if present
            if value.startswith('"') and value.endswith('"'):
                value = value[1:-1]
            elif value.startswith("'") and value.endswith("'"):
                value = value[1:-1]

            # Only set if not already in environment (env vars take precedence)
            if key not in os.environ:
                os.environ[key] = value
                loaded_count += 1
                logger.debug(f"Loaded {key} from .env")
            else:
                logger.debug(f"Skipped {key} (already in environment)")

        logger.info(f"Loaded {loaded_count} variables from {env_path}")

    def get_config(self, force_reload: bool = False) -> Config:
        """
        Get application configuration.

        Args:
            force_reload: Force reloading configuration from environment

        Returns:
            Complete configuration object
        """
        if self._config is None or force_reload:
            self._config = self._build_config()
        return self._config

    def _build_config(self) -> Config:
        """Build configuration from environment variables."""
        integration_config = IntegrationConfig(
            guardian_api_key=os.getenv('GUARDIAN_API_KEY') or None
        )

        store_path = os.getenv('MORNINGPOST_STORE')
        app_config = ApplicationConfig(
            http_timeout=self._get_int_env('HTTP_TIMEOUT', DEFAULT_HTTP_TIMEOUT),
            user_agent=os.getenv('FEED_USER_AGENT', DEFAULT_USER_AGENT),
            listen_port=self._get_int_env('LISTEN_PORT', DEFAULT_LISTEN_PORT),
            show_max_news=self._get_int_env('SHOW_MAX_NEWS', DEFAULT_SHOW_MAX_NEWS),
            store_path=Path(store_path) if store_path else default_store_path(),
            log_level=os.getenv('LOG_LEVEL', 'INFO').upper(),
            verbose_logging=os.getenv('VERBOSE_LOGGING', 'false').lower() == 'true'
        )

        config = Config(
            integrations=integration_config,
            app=app_config
        )

        self._validate_config(config)
        return config

    def _get_int_env(self, key: str, default: int) -> int:
        """Get integer environment variable."""
        value = os.getenv(key)
        if value is None or value == '':
            return default
        try:
            return int(value)
        except ValueError as e:
            raise ConfigurationError(key, f"expected an integer, got {value!r}") from e

    def _validate_config(self, config: Config) -> None:
        """Validate configuration values."""
        errors = []

        if config.app.http_timeout < 1:
            errors.append("HTTP_TIMEOUT must be at least 1 second")

        if not 1 <= config.app.listen_port <= 65535:
            errors.append("LISTEN_PORT must be between 1 and 65535")

        if config.app.show_max_news < 1:
            errors.append("SHOW_MAX_NEWS must be at least 1")

        # Validate log level
        valid_log_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if config.app.log_level not in valid_log_levels:
            errors.append(f"LOG_LEVEL must be one of: {', '.join(valid_log_levels)}")

        if errors:
            raise ConfigurationError('environment', '; '.join(errors))

        logger.debug("Configuration validation passed")

    def update_logging(self) -> None:
        """Configure logging based on current configuration."""
        config = self.get_config()

        # Set log level
        numeric_level = getattr(logging, config.app.log_level)
        logging.getLogger().setLevel(numeric_level)

        # Configure format
        if config.app.verbose_logging:
            format_str = '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s'
        else:
            format_str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

        # Update existing handlers
        for handler in logging.getLogger().handlers:
            handler.setLevel(numeric_level)
            formatter = logging.Formatter(format_str, datefmt='%Y-%m-%d %H:%M:%S')
            handler.setFormatter(formatter)


# Global configuration manager instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """Get global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def get_config() -> Config:
    """Get application configuration."""
    return get_config_manager().get_config()


def reset_config() -> None:
    """Reset configuration manager (useful for testing)."""
    global _config_manager
    _config_manager = None
