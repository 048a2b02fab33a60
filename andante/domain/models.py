"""Immutable domain models for the Andante fare engine.

All models are frozen dataclasses with slots. Stops, route directions
and the zone graph are reference data loaded once by the repositories;
segments, ticket results and recommendations are built per query.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum, IntEnum
from typing import ClassVar, NewType, Optional, Union

StopId = NewType("StopId", str)
ZoneId = NewType("ZoneId", str)


class Direction(IntEnum):
    """One of the two opposite-travel variants of a route."""

    OUTBOUND = 0
    INBOUND = 1

    @classmethod
    def from_raw(cls, raw_value: int) -> Direction:
        """Map a raw GTFS direction id; anything but 0 is inbound."""
        return cls.OUTBOUND if raw_value == 0 else cls.INBOUND


class RouteType(IntEnum):
    """GTFS route type."""

    TRAM = 0
    METRO = 1
    RAIL = 2
    BUS = 3

    @classmethod
    def from_raw(cls, raw_value: int) -> RouteType:
        """Map a raw GTFS route type, defaulting to bus."""
        try:
            return cls(raw_value)
        except ValueError:
            return cls.BUS


@dataclass(frozen=True, slots=True)
class Stop:
    """A transport stop.

    Attributes:
        id: Unique stop identifier
        name: Human-readable stop name
        code: Short public code, if any
        zone_id: Fare zone of the stop; None for unzoned stops
    """

    id: StopId
    name: str
    code: Optional[str] = None
    zone_id: Optional[ZoneId] = None


@dataclass(frozen=True, slots=True)
class RouteDirectionId:
    """Composite key of a route direction."""

    route_id: str
    direction: Direction

    @property
    def string_value(self) -> str:
        return f"{self.route_id}_{self.direction.value}"

    def __str__(self) -> str:
        return self.string_value

    @classmethod
    def from_string(cls, value: str) -> Optional[RouteDirectionId]:
        """Parse ``"{route_id}_{direction}"``; None if malformed."""
        route_id, sep, raw_direction = value.rpartition("_")
        if not sep or not route_id:
            return None
        try:
            direction = int(raw_direction)
        except ValueError:
            return None
        return cls(route_id=route_id, direction=Direction.from_raw(direction))


@dataclass(frozen=True, slots=True)
class RouteDirection:
    """One direction of a route with its ordered stop sequence.

    The order of ``stops`` is the only ground truth for "A comes before
    B" queries.
    """

    id: RouteDirectionId
    route_short_name: str
    start_stop: Stop
    end_stop: Stop
    stops: tuple[Stop, ...]
    route_type: RouteType

    def index_of(self, stop_id: str) -> Optional[int]:
        """Return the first index of ``stop_id`` in the sequence."""
        for index, stop in enumerate(self.stops):
            if stop.id == stop_id:
                return index
        return None


class TicketType(Enum):
    """Occasional Andante ticket ladder.

    Each product covers a number of rings around the validation zone
    and stays valid for a fixed number of minutes.
    """

    Z2 = ("Z2", 2, 60)
    Z3 = ("Z3", 3, 60)
    Z4 = ("Z4", 4, 75)
    Z5 = ("Z5", 5, 90)
    Z6 = ("Z6", 6, 105)

    def __init__(self, code: str, rings: int, validity_minutes: int) -> None:
        self.code = code
        self.rings = rings
        self.validity_minutes = validity_minutes

    @property
    def validity(self) -> timedelta:
        return timedelta(minutes=self.validity_minutes)

    @classmethod
    def for_rings(cls, rings: int) -> TicketType:
        """Return the product for ``rings``, clamped to Z2..Z6.

        Requirements above six rings are priced as Z6.
        """
        clamped = min(max(rings, 2), 6)
        for ticket_type in cls:
            if ticket_type.rings == clamped:
                return ticket_type
        raise AssertionError(f"No ticket type for {clamped} rings")


@dataclass(frozen=True, slots=True)
class JourneySegment:
    """One leg of a journey.

    Attributes:
        start_stop: Boarding stop
        end_stop: Alighting stop
        route_zones: Zones actually crossed, in travel order, no duplicates
    """

    start_stop: Stop
    end_stop: Stop
    route_zones: tuple[ZoneId, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "route_zones", tuple(self.route_zones))

    @property
    def start_zone(self) -> Optional[ZoneId]:
        return self.start_stop.zone_id

    @property
    def end_zone(self) -> Optional[ZoneId]:
        return self.end_stop.zone_id


@dataclass(frozen=True, slots=True)
class MultiSegmentJourney:
    """Ordered journey made of one or more segments."""

    segments: tuple[JourneySegment, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "segments", tuple(self.segments))

    @property
    def first_segment(self) -> Optional[JourneySegment]:
        return self.segments[0] if self.segments else None

    @property
    def last_segment(self) -> Optional[JourneySegment]:
        return self.segments[-1] if self.segments else None

    @property
    def unique_covered_zones(self) -> tuple[ZoneId, ...]:
        """Union of every segment's zones, in first-seen order."""
        return tuple(
            dict.fromkeys(
                zone for segment in self.segments for zone in segment.route_zones
            )
        )


@dataclass(frozen=True, slots=True, eq=False)
class TicketCalculationResult:
    """Outcome of a ticket calculation.

    Two instances are equal only if they are the same computation.

    Attributes:
        covered_zones: Zones the rider passes through (deduplicated)
        ticket_type: Product that covers the journey
        allowed_zones: Every zone the ticket lets the rider enter,
            computed from the zone graph around the start zone
        zone_path: Crossed zones exactly as supplied by route matching
    """

    covered_zones: tuple[ZoneId, ...]
    ticket_type: TicketType
    allowed_zones: frozenset[ZoneId]
    zone_path: tuple[ZoneId, ...]

    @property
    def covered_zones_count(self) -> int:
        return len(self.covered_zones)


class RecommendationType(str, Enum):
    """Tag of a recommendation variant."""

    SINGLE_TICKET_RECOMMENDED = "singleTicketRecommended"
    SINGLE_TICKET_WITH_OPTIONS = "singleTicketWithOptions"
    SEPARATE_TICKETS_REQUIRED = "separateTicketsRequired"


@dataclass(frozen=True, slots=True)
class SingleTicketRecommended:
    """One ticket covers the journey."""

    type: ClassVar[RecommendationType] = RecommendationType.SINGLE_TICKET_RECOMMENDED

    ticket: TicketCalculationResult


@dataclass(frozen=True, slots=True)
class SingleTicketWithOptions:
    """One ticket is valid, separate tickets are offered as an alternative."""

    type: ClassVar[RecommendationType] = RecommendationType.SINGLE_TICKET_WITH_OPTIONS

    single_ticket: TicketCalculationResult
    separate_tickets: tuple[TicketCalculationResult, ...]


@dataclass(frozen=True, slots=True)
class SeparateTicketsRequired:
    """Each segment needs its own ticket."""

    type: ClassVar[RecommendationType] = RecommendationType.SEPARATE_TICKETS_REQUIRED

    tickets: tuple[TicketCalculationResult, ...] = field(default_factory=tuple)


Recommendation = Union[
    SingleTicketRecommended, SingleTicketWithOptions, SeparateTicketsRequired
]


@dataclass(frozen=True, slots=True)
class MultiSegmentTicketRecommendation:
    """Recommendation for a journey together with its disclaimers.

    Attributes:
        journey: The journey the recommendation was computed for
        recommendation: The chosen variant
        recommended_disclaimers: Notes attached to the recommended option
        alternative_disclaimers: Notes attached to the alternative option
    """

    journey: MultiSegmentJourney
    recommendation: Recommendation
    recommended_disclaimers: tuple[str, ...] = field(default_factory=tuple)
    alternative_disclaimers: tuple[str, ...] = field(default_factory=tuple)

    @property
    def can_use_single_ticket(self) -> bool:
        return isinstance(
            self.recommendation, (SingleTicketRecommended, SingleTicketWithOptions)
        )

    @property
    def has_multiple_options(self) -> bool:
        return isinstance(self.recommendation, SingleTicketWithOptions)


@dataclass(frozen=True, slots=True)
class RouteCollection:
    """Directions of one route, grouped by short name."""

    route_short_name: str
    route_type: RouteType
    directions: tuple[RouteDirection, ...]


@dataclass(frozen=True, slots=True)
class RouteGroup:
    """Route collections sharing a route type."""

    route_type: RouteType
    route_collections: tuple[RouteCollection, ...]
