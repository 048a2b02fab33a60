import json

from andante.domain import (
    JourneySegment,
    MultiSegmentJourney,
    MultiSegmentTicketRecommendation,
    SeparateTicketsRequired,
)
from andante.io import recommendation_to_dict, ticket_result_to_dict, variant_to_dict


def test_ticket_result_keeps_zone_order(ticket_calculator, stops):
    result = ticket_calculator.calculate_ticket(stops["S6"], stops["S4"], ("E", "D", "C"))

    payload = ticket_result_to_dict(result)

    assert payload["ticket_type"] == "Z3"
    assert payload["rings"] == 3
    assert payload["validity_minutes"] == 60
    assert payload["covered_zones"] == ["E", "D", "C"]
    assert payload["zone_path"] == ["E", "D", "C"]
    assert payload["covered_zones_count"] == 3
    assert payload["allowed_zones"] == ["C", "D", "E"]


def test_variant_carries_type_tag(recommender, stops):
    journey = MultiSegmentJourney(
        (
            JourneySegment(stops["S1"], stops["S3"], ("A", "B")),
            JourneySegment(stops["S4"], stops["S5"], ("C", "D")),
        )
    )

    payload = variant_to_dict(recommender.recommend(journey).recommendation)

    assert payload["type"] == "singleTicketWithOptions"
    assert payload["single_ticket"]["ticket_type"] == "Z4"
    assert len(payload["separate_tickets"]) == 2


def test_recommendation_is_json_serializable(recommender, stops):
    journey = MultiSegmentJourney((JourneySegment(stops["S1"], stops["S4"], ("A", "B", "C")),))

    payload = recommendation_to_dict(recommender.recommend(journey))
    decoded = json.loads(json.dumps(payload))

    assert decoded["recommendation"]["type"] == "singleTicketRecommended"
    assert decoded["can_use_single_ticket"] is True
    assert decoded["has_multiple_options"] is False
    assert decoded["journey"][0]["start_stop"]["zone_id"] == "A"
    assert decoded["journey"][0]["route_zones"] == ["A", "B", "C"]


def test_empty_separate_tickets():
    result = MultiSegmentTicketRecommendation(
        journey=MultiSegmentJourney(),
        recommendation=SeparateTicketsRequired(),
        alternative_disclaimers=("Unable to load zone graph",),
    )

    assert recommendation_to_dict(result) == {
        "journey": [],
        "recommendation": {"type": "separateTicketsRequired", "tickets": []},
        "can_use_single_ticket": False,
        "has_multiple_options": False,
        "recommended_disclaimers": [],
        "alternative_disclaimers": ["Unable to load zone graph"],
    }
