"""Centralized configuration using Pydantic Settings.

This module is the single source of truth for data locations, fare
rules that are not part of the ticket ladder, and logging.

Configuration can be overridden via environment variables:
- ANDANTE_DATA_DATA_DIR=/path/to/resources
- ANDANTE_FARE_MAX_SEGMENTS=5
- ANDANTE_LOG_LEVEL=DEBUG
- etc.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional, Tuple

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .domain.errors import ConfigurationError

RouteTypeName = Literal["tram", "metro", "rail", "bus"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class DataConfig(BaseSettings):
    """Reference data configuration.

    Environment variables prefixed with ANDANTE_DATA_.
    """

    model_config = SettingsConfigDict(env_prefix="ANDANTE_DATA_")

    data_dir: Path = Field(
        default_factory=lambda: Path(__file__).resolve().parent.parent / "data"
    )
    stops_file: str = "stops_min.txt"
    routes_file: str = "routes_min.txt"
    zone_edges_file: str = "zones_edges.txt"
    encoding: str = "utf-8-sig"  # also reads files without a BOM
    cache_ttl_seconds: Optional[float] = None  # None keeps data for the process lifetime

    @property
    def stops_path(self) -> Path:
        """Full path to the stops file."""
        return self.data_dir / self.stops_file

    @property
    def routes_path(self) -> Path:
        """Full path to the route directions file."""
        return self.data_dir / self.routes_file

    @property
    def zone_edges_path(self) -> Path:
        """Full path to the zone adjacency file."""
        return self.data_dir / self.zone_edges_file


class FareConfig(BaseSettings):
    """Fare and journey configuration.

    Environment variables prefixed with ANDANTE_FARE_.
    """

    model_config = SettingsConfigDict(env_prefix="ANDANTE_FARE_")

    max_segments: int = Field(default=10, ge=1)
    # Trams and trains use a different ticketing scheme.
    excluded_route_types: Tuple[RouteTypeName, ...] = ("tram", "rail")


class ObservabilityConfig(BaseSettings):
    """Logging and observability configuration.

    Environment variables prefixed with ANDANTE_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="ANDANTE_LOG_")

    level: LogLevel = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = False  # Set True for JSON logging

    @field_validator("level", mode="before")
    @classmethod
    def uppercase_level(cls, value: object) -> object:
        return value.strip().upper() if isinstance(value, str) else value


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

    Sub-configurations can be accessed via attributes:

        config = get_config()
        print(config.fare.max_segments)
        print(config.data.zone_edges_path)

    Environment variables prefixed with ANDANTE_.
    """

    model_config = SettingsConfigDict(env_prefix="ANDANTE_")

    data: DataConfig = Field(default_factory=DataConfig)
    fare: FareConfig = Field(default_factory=FareConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    @property
    def project_root(self) -> Path:
        """Return the project root directory."""
        return Path(__file__).resolve().parent.parent


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.

    Raises:
        ConfigurationError: If an environment override is invalid.
    """
    try:
        return AppConfig()
    except ValidationError as e:
        error = e.errors()[0]
        setting = ".".join(str(part) for part in error["loc"])
        raise ConfigurationError(
            f"Invalid setting {setting}: {error['msg']}",
            setting_name=setting,
            expected_type=error["type"],
            cause=e,
        ) from e


def reset_config() -> None:
    """Reset the configuration cache."""
    get_config.cache_clear()
