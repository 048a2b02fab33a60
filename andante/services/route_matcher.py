"""Route matching service.

Resolves which direction of a route a rider is travelling and extracts
the zones crossed between two stops.

Routes have two directions (0 and 1), each with its own stop sequence.
Terminal stops may share ids across directions while intermediate stops
usually differ (opposite platforms). A direction matches a stop pair
when it contains both stops and the boarding stop comes first; the
first matching direction in the supplied order wins, so callers never
have to name the direction explicitly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Iterable, List, Optional, Sequence, Tuple

from ..domain.errors import NoDirectionCoversStopsError, RouteNotFoundError
from ..domain.models import RouteDirection, Stop, ZoneId


def _forward_indices(
    direction: RouteDirection, from_stop_id: str, to_stop_id: str
) -> Optional[Tuple[int, int]]:
    from_index = direction.index_of(from_stop_id)
    to_index = direction.index_of(to_stop_id)
    if from_index is None or to_index is None or from_index >= to_index:
        return None
    return from_index, to_index


@dataclass
class RouteMatcherService:
    """Direction disambiguation and crossed-zone extraction.

    Stateless: every method works only on the directions it is given.
    """

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def find_direction(
        self,
        from_stop_id: str,
        to_stop_id: str,
        candidate_directions: Iterable[RouteDirection],
    ) -> RouteDirection:
        """Find the first direction that serves ``from`` before ``to``.

        Args:
            from_stop_id: Boarding stop id.
            to_stop_id: Alighting stop id.
            candidate_directions: Directions to examine, in priority order.

        Returns:
            The first matching direction.

        Raises:
            RouteNotFoundError: If no candidate serves the stops in order.
        """
        for direction in candidate_directions:
            if _forward_indices(direction, from_stop_id, to_stop_id) is not None:
                self._logger.debug(
                    "Direction found",
                    extra={
                        "from_stop": from_stop_id,
                        "to_stop": to_stop_id,
                        "direction": direction.id.string_value,
                    },
                )
                return direction

        raise RouteNotFoundError(
            f"No route found from {from_stop_id} to {to_stop_id}",
            from_stop_id=from_stop_id,
            to_stop_id=to_stop_id,
        )

    def compute_zones(
        self,
        start_stop: Stop,
        finish_stop: Stop,
        route_id: str,
        all_directions: Iterable[RouteDirection],
    ) -> Tuple[ZoneId, ...]:
        """Zones crossed between two stops on a route.

        Both directions of ``route_id`` are examined. On the first one
        that serves the stops in order, the stop slice from start to
        finish (inclusive) is walked and each zone is kept the first
        time it appears. Unzoned stops contribute nothing.

        Args:
            start_stop: Boarding stop.
            finish_stop: Alighting stop.
            route_id: Route the rider travels on.
            all_directions: Every known direction; filtered by route id.

        Returns:
            Crossed zones in travel order, without duplicates.

        Raises:
            NoDirectionCoversStopsError: If no direction of the route
                serves the stops in order.
        """
        directions = [d for d in all_directions if d.id.route_id == route_id]

        for direction in directions:
            indices = _forward_indices(direction, start_stop.id, finish_stop.id)
            if indices is None:
                continue

            start_index, finish_index = indices
            zones: List[ZoneId] = []
            for stop in direction.stops[start_index : finish_index + 1]:
                if stop.zone_id and stop.zone_id not in zones:
                    zones.append(stop.zone_id)

            self._logger.debug(
                "Zones computed",
                extra={
                    "route_id": route_id,
                    "direction": direction.id.string_value,
                    "zones": zones,
                },
            )
            return tuple(zones)

        raise NoDirectionCoversStopsError(
            f"No direction of route {route_id} covers "
            f"{start_stop.id} -> {finish_stop.id} in order",
            route_id=route_id,
            start_stop_id=start_stop.id,
            finish_stop_id=finish_stop.id,
        )

    def reachable_directions(
        self,
        from_stop_id: str,
        all_directions: Sequence[RouteDirection],
    ) -> List[RouteDirection]:
        """Directions through ``from_stop_id`` trimmed to the stops after it.

        Directions that do not contain the stop, or where it is the last
        stop, are left out. Used to offer finish-stop choices once a
        start stop is picked.
        """
        reachable: List[RouteDirection] = []
        for direction in all_directions:
            from_index = direction.index_of(from_stop_id)
            if from_index is None:
                continue
            remaining = direction.stops[from_index + 1 :]
            if not remaining:
                continue
            reachable.append(replace(direction, stops=remaining))
        return reachable
