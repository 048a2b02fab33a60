"""Multi-segment ticket recommendation service.

Decides, for a journey made of one or more segments, whether a single
ticket covers everything, whether a single ticket is valid but separate
tickets are worth offering, or whether separate tickets are required.

This is the only service that absorbs failures: graph load errors and
per-segment errors degrade the recommendation to "separate tickets"
instead of propagating.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..domain.errors import AndanteError
from ..domain.models import (
    MultiSegmentJourney,
    MultiSegmentTicketRecommendation,
    Recommendation,
    SeparateTicketsRequired,
    SingleTicketRecommended,
    SingleTicketWithOptions,
    TicketCalculationResult,
)
from ..graph.zone_graph import ZoneGraph
from ..ports.graph import ZoneGraphRepositoryPort
from .ticket_calculator import TicketCalculatorService

GRAPH_UNAVAILABLE = "Unable to load zone graph"
CALCULATION_UNAVAILABLE = "Unable to calculate ticket recommendation"
LONG_BREAKS = "For long breaks between journeys, separate tickets may be more convenient."
ZONES_NOT_ACCESSIBLE = (
    "Separate tickets are required because some destinations are not "
    "accessible from your starting zone with a single ticket."
)
VALIDATE_EACH_SEGMENT = "Each journey segment requires its own ticket validation."


def validity_disclaimer(ticket: TicketCalculationResult) -> str:
    minutes = ticket.ticket_type.validity_minutes
    return f"Complete all journeys within {minutes} minutes from first validation."


def generate_disclaimers(
    journey: MultiSegmentJourney, recommendation: Recommendation
) -> Tuple[Tuple[str, ...], Tuple[str, ...]]:
    """Disclaimers for a recommendation.

    Returns:
        ``(recommended, alternative)`` disclaimer texts.
    """
    recommended: List[str] = []
    alternative: List[str] = []

    if isinstance(recommendation, SingleTicketRecommended):
        if len(journey.segments) > 1:
            recommended.append(validity_disclaimer(recommendation.ticket))
    elif isinstance(recommendation, SingleTicketWithOptions):
        recommended.append(validity_disclaimer(recommendation.single_ticket))
        alternative.append(LONG_BREAKS)
    elif isinstance(recommendation, SeparateTicketsRequired):
        alternative.append(ZONES_NOT_ACCESSIBLE)
        alternative.append(VALIDATE_EACH_SEGMENT)

    return tuple(recommended), tuple(alternative)


@dataclass
class MultiSegmentRecommenderService:
    """Chooses between single and separate tickets for a journey.

    Attributes:
        ticket_calculator: Prices individual segments and the whole journey
        graph_repository: Source of the zone graph
    """

    ticket_calculator: TicketCalculatorService
    graph_repository: ZoneGraphRepositoryPort

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def recommend(self, journey: MultiSegmentJourney) -> MultiSegmentTicketRecommendation:
        """Recommend tickets for a journey.

        Never raises for data problems: failures degrade to a
        SeparateTicketsRequired recommendation with an explanation.

        Args:
            journey: Segments already resolved to crossed zones.

        Returns:
            The recommendation together with its disclaimers.
        """
        try:
            graph = self.graph_repository.load_graph()
        except Exception as e:
            self._logger.warning(
                "Zone graph unavailable, falling back to separate tickets",
                extra={"error": str(e)},
            )
            return MultiSegmentTicketRecommendation(
                journey=journey,
                recommendation=SeparateTicketsRequired(tickets=()),
                alternative_disclaimers=(GRAPH_UNAVAILABLE,),
            )

        segment_results = self._calculate_segments(journey, graph)

        if journey.first_segment is None or not segment_results:
            self._logger.warning(
                "No segment could be priced",
                extra={"segments": len(journey.segments)},
            )
            return MultiSegmentTicketRecommendation(
                journey=journey,
                recommendation=SeparateTicketsRequired(tickets=()),
                alternative_disclaimers=(CALCULATION_UNAVAILABLE,),
            )

        recommendation = self._choose(journey, segment_results, graph)
        recommended, alternative = generate_disclaimers(journey, recommendation)

        self._logger.info(
            "Recommendation computed",
            extra={
                "segments": len(journey.segments),
                "priced_segments": len(segment_results),
                "recommendation": recommendation.type.value,
            },
        )

        return MultiSegmentTicketRecommendation(
            journey=journey,
            recommendation=recommendation,
            recommended_disclaimers=recommended,
            alternative_disclaimers=alternative,
        )

    def _calculate_segments(
        self, journey: MultiSegmentJourney, graph: ZoneGraph
    ) -> Tuple[TicketCalculationResult, ...]:
        results: List[TicketCalculationResult] = []
        for index, segment in enumerate(journey.segments):
            try:
                results.append(
                    self.ticket_calculator.calculate_ticket(
                        segment.start_stop,
                        segment.end_stop,
                        segment.route_zones,
                        graph=graph,
                    )
                )
            except AndanteError as e:
                self._logger.warning(
                    "Segment ticket calculation failed, segment skipped",
                    extra={"segment_index": index, "error": str(e)},
                )
        return tuple(results)

    def _calculate_single_ticket(
        self, journey: MultiSegmentJourney, graph: ZoneGraph
    ) -> Optional[TicketCalculationResult]:
        first_segment = journey.first_segment
        last_segment = journey.last_segment
        if first_segment is None or last_segment is None:
            return None
        if not first_segment.start_stop.zone_id:
            return None

        try:
            return self.ticket_calculator.calculate_ticket(
                first_segment.start_stop,
                last_segment.end_stop,
                journey.unique_covered_zones,
                graph=graph,
            )
        except AndanteError as e:
            self._logger.warning(
                "Combined ticket calculation failed",
                extra={"error": str(e)},
            )
            return None

    def _choose(
        self,
        journey: MultiSegmentJourney,
        segment_results: Tuple[TicketCalculationResult, ...],
        graph: ZoneGraph,
    ) -> Recommendation:
        single_ticket = self._calculate_single_ticket(journey, graph)
        if single_ticket is None:
            return SeparateTicketsRequired(tickets=segment_results)

        if len(journey.segments) == 1:
            return SingleTicketRecommended(ticket=single_ticket)

        start_zone = journey.segments[0].start_zone
        assert start_zone is not None
        accessible = graph.zones_within_rings(single_ticket.ticket_type.rings, start_zone)

        if all(
            segment.start_zone is not None and segment.start_zone in accessible
            for segment in journey.segments
        ):
            return SingleTicketWithOptions(
                single_ticket=single_ticket,
                separate_tickets=segment_results,
            )

        return SeparateTicketsRequired(tickets=segment_results)
