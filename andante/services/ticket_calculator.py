"""Ticket calculation service.

Prices a journey from the zones it actually crosses and reports which
zones the resulting ticket lets the rider enter.

Two zone sets come out of a calculation and must not be confused:
``covered_zones`` are the zones the rider passes through, taken from the
route's stop sequence; ``allowed_zones`` are every zone within the
ticket's ring radius around the start zone, taken from the zone graph.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence, Set

from ..domain.errors import MissingZoneError
from ..domain.models import Stop, TicketCalculationResult, TicketType, ZoneId
from ..graph.zone_graph import ZoneGraph
from ..ports.graph import ZoneGraphRepositoryPort

# The cheapest product always covers two zones.
MIN_RINGS = 2


@dataclass
class TicketCalculatorService:
    """Maps crossed zones to a ticket product.

    Attributes:
        graph_repository: Source of the zone graph
    """

    graph_repository: ZoneGraphRepositoryPort

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def calculate_ticket(
        self,
        start: Stop,
        end: Stop,
        route_zones: Sequence[ZoneId],
        graph: Optional[ZoneGraph] = None,
    ) -> TicketCalculationResult:
        """Calculate the ticket for a journey between two stops.

        Args:
            start: Boarding stop.
            end: Alighting stop.
            route_zones: Zones crossed, in travel order.
            graph: Already loaded zone graph; loaded from the repository
                when omitted.

        Returns:
            TicketCalculationResult with the product and both zone sets.

        Raises:
            MissingZoneError: If either stop has no zone.
            GraphLoadError: If the graph has to be loaded and cannot be.
        """
        for stop in (start, end):
            if not stop.zone_id:
                raise MissingZoneError(
                    f"Stop {stop.id} has no zone",
                    stop_id=stop.id,
                )
        assert start.zone_id is not None

        if graph is None:
            graph = self.graph_repository.load_graph()

        zone_path = tuple(route_zones)
        required_rings = max(len(zone_path), MIN_RINGS)
        ticket_type = TicketType.for_rings(required_rings)
        allowed_zones = graph.zones_within_rings(required_rings, start.zone_id)

        self._logger.debug(
            "Ticket calculated",
            extra={
                "start_stop": start.id,
                "end_stop": end.id,
                "zones_count": len(zone_path),
                "ticket_type": ticket_type.code,
            },
        )

        return TicketCalculationResult(
            covered_zones=tuple(dict.fromkeys(zone_path)),
            ticket_type=ticket_type,
            allowed_zones=frozenset(allowed_zones),
            zone_path=zone_path,
        )

    def allowed_zones(self, start_zone: ZoneId, rings: int) -> Set[ZoneId]:
        """Zones reachable from ``start_zone`` with a ``rings``-ring ticket.

        Raises:
            GraphLoadError: If the graph cannot be loaded.
        """
        graph = self.graph_repository.load_graph()
        return graph.zones_within_rings(rings, start_zone)
