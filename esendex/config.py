"""
Configuration module for the Esendex client.

Loads configuration from environment variables with sensible defaults.
Uses python-dotenv to load a .env file from the working directory (or the
project root) if present. Environment variables already set take precedence.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv
from loguru import logger

from esendex.domain.interfaces import ConfigurationError
from esendex.domain.models import Credentials


# =============================================================================
# Environment Variable Names
# =============================================================================

ENV_USERNAME = "ESENDEX_USERNAME"
ENV_PASSWORD = "ESENDEX_PASSWORD"
ENV_BASE_URL = "ESENDEX_BASE_URL"
ENV_TIMEOUT = "ESENDEX_TIMEOUT"
ENV_LOG_LEVEL = "ESENDEX_LOG_LEVEL"

DEFAULT_BASE_URL = "https://api.esendex.com"
DEFAULT_TIMEOUT = 30
DEFAULT_LOG_LEVEL = "INFO"

_PROJECT_ROOT = Path(__file__).parent.parent


def load_environment() -> bool:
    """
    Load variables from a .env file into the process environment.

    Looks in the current working directory first, then at the project root.

    Returns:
        True if a .env file was found and loaded
    """
    env_file = find_dotenv(usecwd=True)
    if not env_file and (_PROJECT_ROOT / ".env").exists():
        env_file = str(_PROJECT_ROOT / ".env")

    if not env_file:
        return False

    logger.debug(f"Loading environment from {env_file}")
    return load_dotenv(env_file, override=False)


def get_env(key: str, default: Optional[str] = None) -> Optional[str]:
    """
    Get environment variable with optional default.

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        Environment variable value or default
    """
    return os.getenv(key, default)


@dataclass(frozen=True)
class EsendexSettings:
    """
    Client settings.

    Attributes:
        username: Esendex login
        password: Esendex password
        base_url: API base URL
        timeout: Request timeout in seconds
        log_level: loguru level name
    """

    username: str
    password: str
    base_url: str = DEFAULT_BASE_URL
    timeout: int = DEFAULT_TIMEOUT
    log_level: str = DEFAULT_LOG_LEVEL

    def __repr__(self) -> str:
        return (
            f"EsendexSettings(username={self.username!r}, base_url={self.base_url!r}, "
            f"timeout={self.timeout}, log_level={self.log_level!r})"
        )

    @property
    def credentials(self) -> Credentials:
        """Credentials built from these settings."""
        return Credentials(self.username, self.password)

    @classmethod
    def from_env(cls, load_dotenv_file: bool = True) -> "EsendexSettings":
        """
        Create settings from environment variables.

        Args:
            load_dotenv_file: Load a .env file before reading the environment

        Returns:
            EsendexSettings instance

        Raises:
            ConfigurationError: If credentials are missing or the timeout is
                not an integer
        """
        if load_dotenv_file:
            load_environment()

        missing_vars = [
            env_var for env_var in (ENV_USERNAME, ENV_PASSWORD) if not get_env(env_var)
        ]
        if missing_vars:
            raise ConfigurationError(
                f"Missing required environment variables: {', '.join(missing_vars)}",
                details={"missing": missing_vars},
            )

        raw_timeout = get_env(ENV_TIMEOUT, str(DEFAULT_TIMEOUT))
        try:
            timeout = int(raw_timeout)
        except ValueError:
            raise ConfigurationError(
                f"Invalid timeout: {raw_timeout}",
                details={"env_var": ENV_TIMEOUT},
            )
        if timeout <= 0:
            raise ConfigurationError(
                f"Timeout must be positive: {timeout}",
                details={"env_var": ENV_TIMEOUT},
            )

        return cls(
            username=get_env(ENV_USERNAME),
            password=get_env(ENV_PASSWORD),
            base_url=get_env(ENV_BASE_URL, DEFAULT_BASE_URL),
            timeout=timeout,
            log_level=get_env(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL).upper(),
        )
