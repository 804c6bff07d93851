"""
Configuration for the Amplitude client.

ClientConfig is the immutable per-client configuration. ClientSettings
loads the same options from AMPLITUDE_* environment variables (or a .env
file) for callers that do not pass them explicitly.
"""

from functools import lru_cache
from typing import Any
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ENDPOINT = 'https://api.amplitude.com'
DEFAULT_MAX_RETRIES = 2
DEFAULT_TIMEOUT_MS = 5000


def _check_endpoint(value: str) -> str:
    parts = urlsplit(value)
    if parts.scheme not in ('http', 'https') or not parts.hostname:
        raise ValueError(f'endpoint must be an absolute http(s) URL, got {value!r}')
    try:
        parts.port
    except ValueError as e:
        raise ValueError(f'endpoint has an invalid port, got {value!r}: {e}') from e
    return value.rstrip('/')


class ClientConfig(BaseModel):
    """Options for one AmplitudeClient. Read-only after construction."""

    model_config = ConfigDict(frozen=True, extra='forbid')

    api_key: str = Field(..., min_length=1, description='Amplitude project API key')
    enabled: bool = Field(default=True, description='When false, no network calls are made')
    app_version: str | None = Field(
        default=None, description='Injected as app_version into every event'
    )
    set_time: bool = Field(
        default=False, description='Inject the current time into every event'
    )
    max_retries: int = Field(default=DEFAULT_MAX_RETRIES, ge=0)
    timeout_ms: int = Field(default=DEFAULT_TIMEOUT_MS, gt=0)
    endpoint: str = Field(default=DEFAULT_ENDPOINT)

    @field_validator('endpoint')
    @classmethod
    def _validate_endpoint(cls, value: str) -> str:
        return _check_endpoint(value)


class ClientSettings(BaseSettings):
    """Client options loaded from AMPLITUDE_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix='AMPLITUDE_',
        env_file='.env',
        extra='ignore',
    )

    API_KEY: str = ''
    ENABLED: bool = True
    APP_VERSION: str | None = None
    SET_TIME: bool = False
    MAX_RETRIES: int = Field(default=DEFAULT_MAX_RETRIES, ge=0)
    TIMEOUT_MS: int = Field(default=DEFAULT_TIMEOUT_MS, gt=0)
    ENDPOINT: str = DEFAULT_ENDPOINT
    LOG_LEVEL: str = 'INFO'

    def missing_required(self) -> list[str]:
        """
        List required settings that are not present.

        Returns:
            Environment variable names that still need a value
        """
        missing = []
        if not self.API_KEY:
            missing.append('AMPLITUDE_API_KEY')
        return missing

    def to_client_config(self, **overrides: Any) -> ClientConfig:
        """Build a ClientConfig from these settings, with explicit overrides winning."""
        values: dict[str, Any] = {
            'api_key': self.API_KEY,
            'enabled': self.ENABLED,
            'app_version': self.APP_VERSION,
            'set_time': self.SET_TIME,
            'max_retries': self.MAX_RETRIES,
            'timeout_ms': self.TIMEOUT_MS,
            'endpoint': self.ENDPOINT,
        }
        values.update(overrides)
        return ClientConfig(**values)


@lru_cache
def get_settings() -> ClientSettings:
    """Cached settings singleton."""
    return ClientSettings()
