"""Journey planner service - Main orchestrator.

Turns the stop pairs a rider picked into zone-resolved segments and asks
the recommender for tickets:

1. Route loading (from the route repository)
2. Direction matching per leg
3. Crossed-zone extraction per leg
4. Ticket recommendation for the whole journey
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, NamedTuple, Optional, Sequence

from ..domain.errors import (
    JourneyTooLongError,
    NoDirectionCoversStopsError,
    RouteNotFoundError,
    StopNotFoundError,
)
from ..domain.models import (
    JourneySegment,
    MultiSegmentJourney,
    MultiSegmentTicketRecommendation,
    RouteDirection,
    Stop,
)
from ..ports.routes import RouteRepositoryPort
from .recommender import MultiSegmentRecommenderService
from .route_matcher import RouteMatcherService


class JourneyLeg(NamedTuple):
    """Stop ids picked by the rider for one leg."""

    start_stop_id: str
    finish_stop_id: str


@dataclass
class JourneyPlannerService:
    """Builds journeys from stop ids and recommends tickets for them.

    Attributes:
        route_repository: Source of route directions
        route_matcher: Direction and zone resolution
        recommender: Ticket recommendation
        max_segments: Maximum number of legs per journey
    """

    route_repository: RouteRepositoryPort
    route_matcher: RouteMatcherService
    recommender: MultiSegmentRecommenderService
    max_segments: int = 10

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def stop_index(self) -> Dict[str, Stop]:
        """Every stop served by a loaded direction, keyed by id.

        Raises:
            RouteLoadError: If routes cannot be loaded.
        """
        return self._index(self.route_repository.fetch_all_routes())

    @staticmethod
    def _index(directions: Sequence[RouteDirection]) -> Dict[str, Stop]:
        stop_by_id: Dict[str, Stop] = {}
        for direction in directions:
            for stop in direction.stops:
                stop_by_id[stop.id] = stop
        return stop_by_id

    def build_journey(self, legs: Sequence[JourneyLeg]) -> MultiSegmentJourney:
        """Resolve legs into zone-resolved segments.

        Legs no route serves in the requested order are logged and left
        out of the journey.

        Args:
            legs: Stop id pairs, in travel order.

        Returns:
            The journey made of every leg that could be resolved.

        Raises:
            JourneyTooLongError: If there are more legs than allowed.
            StopNotFoundError: If a stop id is unknown.
            RouteLoadError: If routes cannot be loaded.
        """
        if len(legs) > self.max_segments:
            raise JourneyTooLongError(
                f"A journey can have at most {self.max_segments} segments",
                max_segments=self.max_segments,
                requested=len(legs),
            )

        directions = self.route_repository.fetch_all_routes()
        stop_by_id = self._index(directions)

        segments: List[JourneySegment] = []
        for index, leg in enumerate(legs):
            start = self._lookup(stop_by_id, leg.start_stop_id)
            finish = self._lookup(stop_by_id, leg.finish_stop_id)

            try:
                direction = self.route_matcher.find_direction(
                    start.id, finish.id, directions
                )
                zones = self.route_matcher.compute_zones(
                    start, finish, direction.id.route_id, directions
                )
            except (RouteNotFoundError, NoDirectionCoversStopsError) as e:
                self._logger.warning(
                    "Leg skipped",
                    extra={
                        "leg_index": index,
                        "start_stop": leg.start_stop_id,
                        "finish_stop": leg.finish_stop_id,
                        "error": str(e),
                    },
                )
                continue

            segments.append(JourneySegment(start_stop=start, end_stop=finish, route_zones=zones))

        self._logger.info(
            "Journey built",
            extra={"legs": len(legs), "segments": len(segments)},
        )
        return MultiSegmentJourney(segments=tuple(segments))

    def plan(self, legs: Sequence[JourneyLeg]) -> Optional[MultiSegmentTicketRecommendation]:
        """Build the journey and recommend tickets for it.

        Returns:
            The recommendation, or None when no leg could be resolved.
        """
        journey = self.build_journey(legs)
        if not journey.segments:
            return None
        return self.recommender.recommend(journey)

    @staticmethod
    def _lookup(stop_by_id: Dict[str, Stop], stop_id: str) -> Stop:
        stop = stop_by_id.get(stop_id)
        if stop is None:
            raise StopNotFoundError(f"Unknown stop: {stop_id}", stop_id=stop_id)
        return stop
