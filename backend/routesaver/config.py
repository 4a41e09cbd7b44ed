"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded in production)
    - get_settings() / get_client_settings() are cached (lru_cache) — single instance per process
    - jwt_expires_in accepts "7d", "12h", "30m", "45s" or a bare number of seconds

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
    - Client settings separate from server settings: the editor never needs the DB or JWT secret
"""

import re
from datetime import timedelta
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")
_DURATION_UNITS = {"s": "seconds", "m": "minutes", "h": "hours", "d": "days", "": "seconds"}


def parse_duration(value: str | int | timedelta) -> timedelta:
    """Parse '7d' / '12h' / '30m' / '45s' / 3600 into a timedelta."""
    if isinstance(value, timedelta):
        return value
    if isinstance(value, int):
        return timedelta(seconds=value)
    match = _DURATION_RE.match(value)
    if not match:
        raise ValueError(f"invalid duration: {value!r}")
    amount, unit = match.groups()
    return timedelta(**{_DURATION_UNITS[unit]: int(amount)})


class Settings(BaseSettings):
    """Server settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://routesaver:routesaver@db:5432/routesaver"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting platforms provide postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Auth
    jwt_secret: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    jwt_expires_in: timedelta = timedelta(days=7)

    @field_validator("jwt_expires_in", mode="before")
    @classmethod
    def convert_duration(cls, v):
        return parse_duration(v)

    # API
    port: int = 3000
    cors_origins: list[str] = ["*"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


class ClientSettings(BaseSettings):
    """Editor/API client settings, prefixed ROUTESAVER_ in the environment."""

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="routesaver_", case_sensitive=False,
        extra="ignore",
    )

    api_base_url: str = "http://localhost:3000/api"
    storage_path: str = "~/.routesaver/storage.json"
    http_timeout_seconds: float = 10.0

    # Road routing (OSRM public demo server needs no API key)
    osrm_base_url: str = "https://router.project-osrm.org"
    osrm_profile: str = "driving"

    # Geocoding
    nominatim_base_url: str = "https://nominatim.openstreetmap.org"
    nominatim_language: str = "pt-BR"
    nominatim_limit: int = 5


@lru_cache
def get_settings() -> Settings:
    return Settings()


@lru_cache
def get_client_settings() -> ClientSettings:
    return ClientSettings()
