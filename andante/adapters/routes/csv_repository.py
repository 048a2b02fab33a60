"""CSV Route Repository adapter.

Builds RouteDirection entities from two resources:

- stops file: ``stop_id, stop_name, stop_code, zone_id``
- routes file: ``route_id, route_short_name, direction_id,
  start_stop_id, end_stop_id, stop_sequence, route_type`` where
  ``stop_sequence`` is a ``|``-separated list of stop ids

Incomplete rows, routes of excluded types and routes whose terminal
stops are unknown are skipped. Unknown ids inside a stop sequence are
dropped from that sequence.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..cache import InMemoryCache
from ..datasource import CSVDataSource, Row
from ...config import DataConfig, FareConfig, get_config
from ...domain.errors import DataSourceError, RouteLoadError
from ...domain.models import (
    Direction,
    RouteDirection,
    RouteDirectionId,
    RouteType,
    Stop,
    StopId,
    ZoneId,
)
from ...ports.cache import CachePort
from ...sorting import natural_key

ROUTES_CACHE_KEY = "route_directions"

_REQUIRED_ROUTE_FIELDS = (
    "route_id",
    "route_short_name",
    "direction_id",
    "start_stop_id",
    "end_stop_id",
    "stop_sequence",
    "route_type",
)


def _parse_int(raw: Optional[str]) -> int:
    try:
        return int(raw or "")
    except ValueError:
        return 0


@dataclass
class CSVRouteRepository:
    """Route repository that loads from CSV files.

    This adapter implements RouteRepositoryPort.

    Attributes:
        config: Data configuration (paths, encoding)
        fare_config: Fare configuration (excluded route types)
        cache: Cache holding the parsed directions
        data_source: CSV reader
    """

    config: DataConfig = field(default_factory=lambda: get_config().data)
    fare_config: FareConfig = field(default_factory=lambda: get_config().fare)
    cache: CachePort[Any] = field(
        default_factory=lambda: InMemoryCache(name="route-directions")
    )
    data_source: CSVDataSource = field(default_factory=CSVDataSource)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def fetch_all_routes(self) -> Sequence[RouteDirection]:
        """Fetch every route direction, sorted by short name then direction.

        Raises:
            RouteLoadError: If a resource cannot be read.
        """
        return self.cache.get_or_compute(ROUTES_CACHE_KEY, self._load_from_csv)

    def _load_from_csv(self) -> Tuple[RouteDirection, ...]:
        try:
            stop_rows = self.data_source.rows(self.config.stops_path)
            route_rows = self.data_source.rows(self.config.routes_path)
        except DataSourceError as e:
            self._logger.error(
                "Route data load failed",
                extra={"path": e.file_path, "error": str(e)},
            )
            raise RouteLoadError(
                "Failed to load routes",
                file_path=e.file_path,
                cause=e,
            ) from e

        stop_by_id = self._build_stops(stop_rows)
        excluded = {
            RouteType[name.upper()] for name in self.fare_config.excluded_route_types
        }

        routes: List[RouteDirection] = []
        skipped = 0
        for row in route_rows:
            direction = self._build_direction(row, stop_by_id, excluded)
            if direction is None:
                skipped += 1
                continue
            routes.append(direction)

        routes.sort(
            key=lambda r: (natural_key(r.route_short_name), r.id.direction.value)
        )

        self._logger.info(
            "Routes loaded",
            extra={
                "stops": len(stop_by_id),
                "directions": len(routes),
                "skipped_rows": skipped,
            },
        )
        return tuple(routes)

    @staticmethod
    def _build_stops(rows: Sequence[Row]) -> Dict[str, Stop]:
        stop_by_id: Dict[str, Stop] = {}
        for row in rows:
            stop_id = row.get("stop_id")
            if not stop_id:
                continue
            zone_id = row.get("zone_id")
            stop_by_id[stop_id] = Stop(
                id=StopId(stop_id),
                name=row.get("stop_name") or "",
                code=row.get("stop_code"),
                zone_id=ZoneId(zone_id) if zone_id else None,
            )
        return stop_by_id

    @staticmethod
    def _build_direction(
        row: Row,
        stop_by_id: Dict[str, Stop],
        excluded: set[RouteType],
    ) -> Optional[RouteDirection]:
        if any(not row.get(name) for name in _REQUIRED_ROUTE_FIELDS):
            return None

        route_type = RouteType.from_raw(_parse_int(row["route_type"]))
        if route_type in excluded:
            return None

        start_stop = stop_by_id.get(row["start_stop_id"] or "")
        end_stop = stop_by_id.get(row["end_stop_id"] or "")
        if start_stop is None or end_stop is None:
            return None

        stops = tuple(
            stop_by_id[stop_id.strip()]
            for stop_id in (row["stop_sequence"] or "").split("|")
            if stop_id.strip() in stop_by_id
        )

        return RouteDirection(
            id=RouteDirectionId(
                route_id=row["route_id"] or "",
                direction=Direction.from_raw(_parse_int(row["direction_id"])),
            ),
            route_short_name=row["route_short_name"] or "",
            start_stop=start_stop,
            end_stop=end_stop,
            stops=stops,
            route_type=route_type,
        )

    def clear_cache(self) -> None:
        """Drop the cached route directions."""
        self.cache.invalidate(ROUTES_CACHE_KEY)
        self._logger.debug("Route cache cleared")
