"""Tests for the multi-segment ticket recommender."""

import pytest

from andante.domain import (
    JourneySegment,
    MultiSegmentJourney,
    RecommendationType,
    SeparateTicketsRequired,
    SingleTicketRecommended,
    SingleTicketWithOptions,
    TicketType,
)
from andante.io import recommendation_to_dict
from andante.services import MultiSegmentRecommenderService, generate_disclaimers
from andante.services.recommender import (
    CALCULATION_UNAVAILABLE,
    GRAPH_UNAVAILABLE,
    LONG_BREAKS,
    VALIDATE_EACH_SEGMENT,
    ZONES_NOT_ACCESSIBLE,
)

from .conftest import FakeZoneGraphRepository


@pytest.fixture
def segment(stops):
    def build(start, end, zones):
        return JourneySegment(stops[start], stops[end], tuple(zones))

    return build


def test_single_segment_gets_single_ticket(recommender, segment):
    journey = MultiSegmentJourney((segment("S1", "S4", "ABC"),))

    result = recommender.recommend(journey)

    assert isinstance(result.recommendation, SingleTicketRecommended)
    assert result.recommendation.ticket.ticket_type is TicketType.Z3
    assert result.can_use_single_ticket
    assert not result.has_multiple_options
    assert result.recommended_disclaimers == ()
    assert result.alternative_disclaimers == ()


def test_accessible_transfer_offers_both_options(recommender, segment):
    journey = MultiSegmentJourney(
        (segment("S1", "S3", "AB"), segment("S4", "S5", "CD"))
    )

    result = recommender.recommend(journey)
    recommendation = result.recommendation

    assert isinstance(recommendation, SingleTicketWithOptions)
    assert recommendation.single_ticket.ticket_type is TicketType.Z4
    assert recommendation.single_ticket.covered_zones == ("A", "B", "C", "D")
    assert [t.ticket_type for t in recommendation.separate_tickets] == [
        TicketType.Z2,
        TicketType.Z2,
    ]
    assert result.can_use_single_ticket
    assert result.has_multiple_options
    assert result.recommended_disclaimers == (
        "Complete all journeys within 75 minutes from first validation.",
    )
    assert result.alternative_disclaimers == (LONG_BREAKS,)


def test_unreachable_transfer_requires_separate_tickets(recommender, segment):
    journey = MultiSegmentJourney(
        (segment("S1", "S3", "AB"), segment("G1", "H1", "GH"))
    )

    result = recommender.recommend(journey)

    assert isinstance(result.recommendation, SeparateTicketsRequired)
    assert len(result.recommendation.tickets) == 2
    assert not result.can_use_single_ticket
    assert result.recommended_disclaimers == ()
    assert result.alternative_disclaimers == (ZONES_NOT_ACCESSIBLE, VALIDATE_EACH_SEGMENT)


def test_transfer_outside_combined_ticket_reach(recommender, segment):
    """Three crossed zones give a Z3, which does not reach the second boarding zone."""
    journey = MultiSegmentJourney(
        (segment("S1", "S2", "A"), segment("S5", "S6", "DE"))
    )

    result = recommender.recommend(journey)

    assert result.recommendation.type is RecommendationType.SEPARATE_TICKETS_REQUIRED


def test_graph_failure_degrades_to_empty_separate_tickets(ticket_calculator, segment):
    recommender = MultiSegmentRecommenderService(
        ticket_calculator=ticket_calculator,
        graph_repository=FakeZoneGraphRepository(fail=True),
    )
    journey = MultiSegmentJourney((segment("S1", "S4", "ABC"),))

    result = recommender.recommend(journey)

    assert isinstance(result.recommendation, SeparateTicketsRequired)
    assert result.recommendation.tickets == ()
    assert result.recommended_disclaimers == ()
    assert result.alternative_disclaimers == (GRAPH_UNAVAILABLE,)


def test_graph_is_loaded_once_per_recommendation(recommender, graph_repository, segment):
    journey = MultiSegmentJourney(
        (segment("S1", "S3", "AB"), segment("S4", "S5", "CD"), segment("S5", "S6", "DE"))
    )

    recommender.recommend(journey)

    assert graph_repository.calls == 1


def test_failed_segment_is_left_out(recommender, segment):
    """The unzoned alighting stop breaks both the segment and the combined ticket."""
    journey = MultiSegmentJourney(
        (segment("S1", "S3", "AB"), segment("S4", "U1", "C"))
    )

    result = recommender.recommend(journey)

    assert isinstance(result.recommendation, SeparateTicketsRequired)
    assert len(result.recommendation.tickets) == 1
    assert result.recommendation.tickets[0].covered_zones == ("A", "B")


def test_unzoned_first_boarding_stop_forces_separate_tickets(recommender, segment):
    journey = MultiSegmentJourney(
        (segment("U1", "S3", "AB"), segment("S3", "S4", "BC"))
    )

    result = recommender.recommend(journey)

    assert isinstance(result.recommendation, SeparateTicketsRequired)
    assert [t.covered_zones for t in result.recommendation.tickets] == [("B", "C")]


def test_every_segment_failing(recommender, segment):
    journey = MultiSegmentJourney(
        (segment("U1", "S3", "AB"), segment("S4", "U1", "C"))
    )

    result = recommender.recommend(journey)

    assert result.recommendation.tickets == ()
    assert result.alternative_disclaimers == (CALCULATION_UNAVAILABLE,)


def test_empty_journey(recommender):
    result = recommender.recommend(MultiSegmentJourney())

    assert isinstance(result.recommendation, SeparateTicketsRequired)
    assert result.alternative_disclaimers == (CALCULATION_UNAVAILABLE,)


def test_recommendation_is_repeatable(recommender, segment):
    journey = MultiSegmentJourney(
        (segment("S1", "S3", "AB"), segment("S4", "S5", "CD"))
    )

    first = recommendation_to_dict(recommender.recommend(journey))
    second = recommendation_to_dict(recommender.recommend(journey))

    assert first == second


class TestGenerateDisclaimers:
    def test_single_ticket_on_one_segment_has_none(self, ticket_calculator, segment):
        journey = MultiSegmentJourney((segment("S1", "S3", "AB"),))
        ticket = ticket_calculator.calculate_ticket(
            journey.segments[0].start_stop, journey.segments[0].end_stop, ("A", "B")
        )

        assert generate_disclaimers(journey, SingleTicketRecommended(ticket)) == ((), ())

    def test_single_ticket_on_several_segments_mentions_validity(
        self, ticket_calculator, segment
    ):
        journey = MultiSegmentJourney(
            (segment("S1", "S3", "AB"), segment("S3", "S6", "BCDE"))
        )
        ticket = ticket_calculator.calculate_ticket(
            journey.segments[0].start_stop, journey.segments[-1].end_stop, "ABCDE"
        )

        recommended, alternative = generate_disclaimers(
            journey, SingleTicketRecommended(ticket)
        )

        assert recommended == (
            "Complete all journeys within 90 minutes from first validation.",
        )
        assert alternative == ()

    def test_separate_tickets(self, segment):
        journey = MultiSegmentJourney((segment("S1", "S3", "AB"),))

        recommended, alternative = generate_disclaimers(journey, SeparateTicketsRequired())

        assert recommended == ()
        assert alternative == (ZONES_NOT_ACCESSIBLE, VALIDATE_EACH_SEGMENT)
