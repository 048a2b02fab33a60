"""Domain layer - Core fare models and errors.

This module contains immutable domain models and typed errors
used throughout the application. No external dependencies.
"""

from .errors import (
    AndanteError,
    ConfigurationError,
    DataSourceError,
    GraphLoadError,
    JourneyTooLongError,
    MissingZoneError,
    NoDirectionCoversStopsError,
    RouteLoadError,
    RouteNotFoundError,
    StopNotFoundError,
)
from .models import (
    Direction,
    JourneySegment,
    MultiSegmentJourney,
    MultiSegmentTicketRecommendation,
    Recommendation,
    RecommendationType,
    RouteCollection,
    RouteDirection,
    RouteDirectionId,
    RouteGroup,
    RouteType,
    SeparateTicketsRequired,
    SingleTicketRecommended,
    SingleTicketWithOptions,
    Stop,
    StopId,
    TicketCalculationResult,
    TicketType,
    ZoneId,
)

__all__ = [
    # Models
    "StopId",
    "ZoneId",
    "Stop",
    "Direction",
    "RouteType",
    "RouteDirectionId",
    "RouteDirection",
    "RouteCollection",
    "RouteGroup",
    "TicketType",
    "JourneySegment",
    "MultiSegmentJourney",
    "TicketCalculationResult",
    "RecommendationType",
    "SingleTicketRecommended",
    "SingleTicketWithOptions",
    "SeparateTicketsRequired",
    "Recommendation",
    "MultiSegmentTicketRecommendation",
    # Errors
    "AndanteError",
    "MissingZoneError",
    "RouteNotFoundError",
    "NoDirectionCoversStopsError",
    "StopNotFoundError",
    "JourneyTooLongError",
    "DataSourceError",
    "GraphLoadError",
    "RouteLoadError",
    "ConfigurationError",
]
