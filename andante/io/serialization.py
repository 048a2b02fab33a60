"""Plain-data rendering of fare results.

Front-ends (JSON APIs, the launcher script) consume dictionaries built
here. The recommendation variant is kept in a ``type`` field and every
ordered zone list keeps its order; ``allowed_zones`` is a set and is
emitted sorted.
"""

from __future__ import annotations

from typing import Any, Dict, List

from ..domain.models import (
    JourneySegment,
    MultiSegmentTicketRecommendation,
    Recommendation,
    SeparateTicketsRequired,
    SingleTicketRecommended,
    SingleTicketWithOptions,
    Stop,
    TicketCalculationResult,
)


def stop_to_dict(stop: Stop) -> Dict[str, Any]:
    return {
        "id": stop.id,
        "name": stop.name,
        "code": stop.code,
        "zone_id": stop.zone_id,
    }


def segment_to_dict(segment: JourneySegment) -> Dict[str, Any]:
    return {
        "start_stop": stop_to_dict(segment.start_stop),
        "end_stop": stop_to_dict(segment.end_stop),
        "route_zones": list(segment.route_zones),
    }


def ticket_result_to_dict(result: TicketCalculationResult) -> Dict[str, Any]:
    return {
        "ticket_type": result.ticket_type.code,
        "rings": result.ticket_type.rings,
        "validity_minutes": result.ticket_type.validity_minutes,
        "covered_zones": list(result.covered_zones),
        "covered_zones_count": result.covered_zones_count,
        "zone_path": list(result.zone_path),
        "allowed_zones": sorted(result.allowed_zones),
    }


def _tickets(results: tuple[TicketCalculationResult, ...]) -> List[Dict[str, Any]]:
    return [ticket_result_to_dict(result) for result in results]


def variant_to_dict(recommendation: Recommendation) -> Dict[str, Any]:
    """Render a recommendation variant with its ``type`` tag."""
    payload: Dict[str, Any] = {"type": recommendation.type.value}
    if isinstance(recommendation, SingleTicketRecommended):
        payload["ticket"] = ticket_result_to_dict(recommendation.ticket)
    elif isinstance(recommendation, SingleTicketWithOptions):
        payload["single_ticket"] = ticket_result_to_dict(recommendation.single_ticket)
        payload["separate_tickets"] = _tickets(recommendation.separate_tickets)
    elif isinstance(recommendation, SeparateTicketsRequired):
        payload["tickets"] = _tickets(recommendation.tickets)
    return payload


def recommendation_to_dict(result: MultiSegmentTicketRecommendation) -> Dict[str, Any]:
    """Render a full recommendation, journey and disclaimers included."""
    return {
        "journey": [segment_to_dict(segment) for segment in result.journey.segments],
        "recommendation": variant_to_dict(result.recommendation),
        "can_use_single_ticket": result.can_use_single_ticket,
        "has_multiple_options": result.has_multiple_options,
        "recommended_disclaimers": list(result.recommended_disclaimers),
        "alternative_disclaimers": list(result.alternative_disclaimers),
    }
