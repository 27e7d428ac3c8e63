"""Configuration settings for the Megaport API client.

This module defines the configuration settings for the client, including
the target environment, API credentials, provisioning poll cadence and
logging. Settings are loaded from ``MEGAPORT_``-prefixed environment
variables and ``.env`` files.
"""

from typing import Literal, Optional

import httpx
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..exceptions import ConfigurationError
from .environments import EnvironmentConfig

LogLevelName = Literal[
    "TRACE", "DEBUG", "INFO", "WARN", "WARNING", "ERROR", "FATAL", "CRITICAL", "NONE"
]


class Settings(BaseSettings):
    """Client settings loaded from environment variables.

    :param environment: Megaport environment to talk to
    :type environment: Literal["production", "staging", "development"]
    :param url: Explicit API base URL, overrides ``environment``
    :type url: Optional[str]
    :param access_key: API access key used for the OAuth exchange
    :type access_key: Optional[str]
    :param secret_key: API secret key used for the OAuth exchange
    :type secret_key: Optional[str]
    :param log_level: Logging level, also read from ``LOG_LEVEL``
    :type log_level: str
    :param request_timeout: Per-request timeout in seconds
    :type request_timeout: float
    :param provisioning_poll_interval: Seconds between provisioning status reads
    :type provisioning_poll_interval: float
    :param provisioning_max_attempts: Status reads before giving up
    :type provisioning_max_attempts: int
    :param provisioning_deadline: Optional ceiling on total wait, in seconds
    :type provisioning_deadline: Optional[float]
    """

    model_config = SettingsConfigDict(
        env_prefix="MEGAPORT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: Literal["production", "staging", "development"] = Field(
        "production", description="Megaport environment"
    )
    url: Optional[str] = Field(
        None, description="Explicit API base URL (overrides environment)"
    )

    access_key: Optional[str] = Field(None, description="API access key")
    secret_key: Optional[str] = Field(None, description="API secret key")

    log_level: LogLevelName = Field(
        "INFO",
        validation_alias=AliasChoices("MEGAPORT_LOG_LEVEL", "LOG_LEVEL", "log_level"),
        description="Logging level",
    )

    request_timeout: float = Field(30.0, description="Request timeout in seconds")
    user_agent: str = Field("megaport-client", description="User-Agent header value")

    # Provisioning watcher cadence: 30 reads, 10s apart, ~5 minutes
    provisioning_poll_interval: float = Field(
        10.0, ge=0, description="Seconds between provisioning status reads"
    )
    provisioning_max_attempts: int = Field(
        30, ge=1, description="Maximum provisioning status reads"
    )
    provisioning_deadline: Optional[float] = Field(
        None, gt=0, description="Total provisioning wait ceiling in seconds"
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """Accept log level names in any case.

        :param v: Raw log level value
        :return: Upper-cased log level name
        """
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("environment", mode="before")
    @classmethod
    def normalize_environment(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @property
    def base_url(self) -> str:
        """Get the API base URL.

        Uses ``url`` when set, otherwise the endpoint of ``environment``.
        The result always ends with a slash so relative paths join onto it.

        :return: API base URL
        :rtype: str
        :raises ConfigurationError: If ``url`` is not an absolute http(s) URL
        """
        if not self.url:
            return EnvironmentConfig.get_api_endpoint(self.environment)

        try:
            parsed = httpx.URL(self.url)
        except httpx.InvalidURL as e:
            raise ConfigurationError(
                f"The megaport url {self.url!r} is not a valid URL: {e}",
                setting="url",
            ) from e
        if parsed.scheme not in ("http", "https") or not parsed.host:
            raise ConfigurationError(
                f"The megaport url {self.url!r} has not been set correctly",
                setting="url",
            )
        return self.url if self.url.endswith("/") else self.url + "/"

    @property
    def token_url(self) -> str:
        """Get the OAuth token endpoint for the configured environment.

        :return: OAuth token endpoint URL
        :rtype: str
        """
        return EnvironmentConfig.get_oauth_endpoint(self.environment)
