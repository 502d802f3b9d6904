#!/usr/bin/env python3
"""
Settings for the summarizer.

Everything is read from the environment (optionally seeded from .env) into
dataclasses and validated once; bad values raise ConfigurationError.
"""

import os
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

import pytz

from .env_loader import load_env_file, get_env_var, get_env_bool, get_env_list
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_GATEWAY_URL = "https://api.allorigins.win/get?url={url}"
DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; BenSight/1.0)"
DEFAULT_TIMEZONE = "Asia/Shanghai"

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
VERBOSE_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s'


@dataclass
class GatewayConfig:
    """Where article pages are fetched through."""
    endpoint: str = DEFAULT_GATEWAY_URL
    user_agent: str = DEFAULT_USER_AGENT


@dataclass
class ApplicationConfig:
    allowed_hosts: List[str] = field(default_factory=lambda: ['mp.weixin.qq.com'])

    # Extraction
    min_content_length: int = 100
    extract_metadata: bool = False

    # Publish dates are "today" in this zone
    timezone: str = DEFAULT_TIMEZONE

    # Seconds a displayed temp document is kept before deletion
    artifact_release_delay: float = 5.0

    log_level: str = "INFO"
    verbose_logging: bool = False


@dataclass
class Config:
    gateway: GatewayConfig
    app: ApplicationConfig
    environment: str = field(default_factory=lambda: os.getenv('ENVIRONMENT', 'development'))

    def tzinfo(self):
        return pytz.timezone(self.app.timezone)


class ConfigManager:
    """Loads, validates and caches the application settings."""

    def __init__(self, env_file_path: str = ".env", load_env: bool = True):
        """
        Args:
            env_file_path: .env file name under the project root
            load_env: Read the .env file before looking at the environment
        """
        self._config: Optional[Config] = None
        if load_env:
            load_env_file(env_file_path)

    def get_config(self, force_reload: bool = False) -> Config:
        if force_reload or self._config is None:
            config = self._read_environment()
            self._check(config)
            self._config = config
        return self._config

    def _read_environment(self) -> Config:
        gateway = GatewayConfig(
            endpoint=get_env_var('FETCH_GATEWAY_URL', DEFAULT_GATEWAY_URL),
            user_agent=get_env_var('FETCH_USER_AGENT', DEFAULT_USER_AGENT)
        )
        app = ApplicationConfig(
            allowed_hosts=get_env_list('ALLOWED_HOSTS', ['mp.weixin.qq.com']),
            min_content_length=self._number('MIN_CONTENT_LENGTH', 100, int),
            extract_metadata=get_env_bool('EXTRACT_METADATA', False),
            timezone=get_env_var('TIMEZONE', DEFAULT_TIMEZONE),
            artifact_release_delay=self._number('ARTIFACT_RELEASE_DELAY', 5.0, float),
            log_level=get_env_var('LOG_LEVEL', 'INFO').upper(),
            verbose_logging=get_env_bool('VERBOSE_LOGGING', False)
        )
        return Config(gateway=gateway, app=app)

    @staticmethod
    def _number(key: str, default, cast: Callable):
        raw = get_env_var(key)
        if raw is None:
            return default
        try:
            return cast(raw)
        except ValueError:
            raise ConfigurationError(key, f"expected {cast.__name__}, got {raw!r}") from None

    @staticmethod
    def _check(config: Config) -> None:
        """Collect every problem, then raise once naming the first key."""
        problems: List[Tuple[str, str]] = []
        endpoint = config.gateway.endpoint
        app = config.app

        if not endpoint.startswith(('http://', 'https://')):
            problems.append(("FETCH_GATEWAY_URL", "must start with http:// or https://"))
        if '{url}' not in endpoint:
            problems.append(("FETCH_GATEWAY_URL", "must contain a {url} placeholder"))
        if not app.allowed_hosts:
            problems.append(("ALLOWED_HOSTS", "needs at least one host"))
        if app.min_content_length < 1:
            problems.append(("MIN_CONTENT_LENGTH", "must be at least 1"))
        if app.artifact_release_delay < 0:
            problems.append(("ARTIFACT_RELEASE_DELAY", "must not be negative"))
        if app.timezone not in pytz.all_timezones_set:
            problems.append(("TIMEZONE", f"unknown timezone {app.timezone!r}"))
        if app.log_level not in LOG_LEVELS:
            problems.append(("LOG_LEVEL", f"must be one of {', '.join(LOG_LEVELS)}"))

        if problems:
            raise ConfigurationError(problems[0][0], '; '.join(f"{key} {issue}" for key, issue in problems))

        logger.debug(f"Configuration accepted (environment={config.environment})")

    def update_logging(self) -> None:
        """Apply LOG_LEVEL and VERBOSE_LOGGING to the root logger and its handlers."""
        app = self.get_config().app
        level = getattr(logging, app.log_level)
        formatter = logging.Formatter(VERBOSE_LOG_FORMAT if app.verbose_logging else LOG_FORMAT,
                                      datefmt='%Y-%m-%d %H:%M:%S')

        root = logging.getLogger()
        root.setLevel(level)
        for handler in root.handlers:
            handler.setLevel(level)
            handler.setFormatter(formatter)


_config_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def get_config() -> Config:
    return get_config_manager().get_config()


def reset_config() -> None:
    """Drop the cached manager so the next lookup re-reads the environment."""
    global _config_manager
    _config_manager = None
