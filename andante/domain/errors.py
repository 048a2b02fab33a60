"""Typed domain errors for the Andante fare engine.

Single-segment operations (route matching, ticket calculation) raise
these errors directly. Only the multi-segment recommender turns them
into a fallback recommendation.

All errors inherit from AndanteError and can optionally wrap a root
cause exception for debugging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class AndanteError(Exception):
    """Base error for the fare engine.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class MissingZoneError(AndanteError):
    """A stop has no zone assignment.

    Attributes:
        stop_id: Identifier of the unzoned stop
    """

    stop_id: str = ""


@dataclass
class RouteNotFoundError(AndanteError):
    """No route direction visits both stops in forward order.

    Attributes:
        from_stop_id: Requested boarding stop
        to_stop_id: Requested alighting stop
    """

    from_stop_id: str = ""
    to_stop_id: str = ""


@dataclass
class NoDirectionCoversStopsError(AndanteError):
    """Neither direction of a route covers the stops in order.

    This is the expected outcome of picking two stops on incompatible
    directions, not a defect.

    Attributes:
        route_id: Route whose directions were examined
        start_stop_id: Boarding stop
        finish_stop_id: Alighting stop
    """

    route_id: str = ""
    start_stop_id: str = ""
    finish_stop_id: str = ""


@dataclass
class StopNotFoundError(AndanteError):
    """Stop id not present in the loaded route data.

    Attributes:
        stop_id: The stop id that was not found
    """

    stop_id: str = ""


@dataclass
class JourneyTooLongError(AndanteError):
    """A journey has more legs than the configured maximum.

    Attributes:
        max_segments: Configured maximum
        requested: Number of legs requested
    """

    max_segments: int = 0
    requested: int = 0


@dataclass
class DataSourceError(AndanteError):
    """A tabular resource could not be read.

    Attributes:
        file_path: Path to the resource
    """

    file_path: Optional[str] = None


@dataclass
class GraphLoadError(AndanteError):
    """Zone graph loading failed.

    Attributes:
        file_path: Path to the graph data file if relevant
    """

    file_path: Optional[str] = None


@dataclass
class RouteLoadError(AndanteError):
    """Route data loading failed.

    Attributes:
        file_path: Path to the route data file if relevant
    """

    file_path: Optional[str] = None


@dataclass
class ConfigurationError(AndanteError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
        expected_type: Expected type or format
    """

    setting_name: str = ""
    expected_type: Optional[str] = None
