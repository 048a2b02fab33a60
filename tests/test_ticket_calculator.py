"""Tests for the ticket calculator."""

from unittest.mock import MagicMock

import pytest

from andante.domain import GraphLoadError, MissingZoneError, TicketType
from andante.services import TicketCalculatorService

from .conftest import FakeZoneGraphRepository


def test_three_crossed_zones_need_z3(ticket_calculator, stops):
    result = ticket_calculator.calculate_ticket(stops["S1"], stops["S4"], ("A", "B", "C"))

    assert result.ticket_type is TicketType.Z3
    assert result.covered_zones == ("A", "B", "C")
    assert result.covered_zones_count == 3
    assert result.zone_path == ("A", "B", "C")


def test_single_zone_journey_still_needs_z2(ticket_calculator, stops):
    result = ticket_calculator.calculate_ticket(stops["S1"], stops["S2"], ("A",))

    assert result.ticket_type is TicketType.Z2
    assert result.allowed_zones == frozenset({"A", "B", "F"})


def test_no_crossed_zones_is_priced_as_z2(ticket_calculator, stops):
    result = ticket_calculator.calculate_ticket(stops["S1"], stops["S2"], ())
    assert result.ticket_type is TicketType.Z2
    assert result.covered_zones_count == 0


def test_long_journey_is_capped_at_z6(ticket_calculator, stops):
    zones = ("A", "B", "C", "D", "E", "X", "Y")
    result = ticket_calculator.calculate_ticket(stops["S1"], stops["S6"], zones)
    assert result.ticket_type is TicketType.Z6


def test_allowed_zones_come_from_graph_not_route(ticket_calculator, stops):
    """A Z3 from A also opens F even though the route never goes there."""
    result = ticket_calculator.calculate_ticket(stops["S1"], stops["S4"], ("A", "B", "C"))

    assert result.allowed_zones == frozenset({"A", "B", "C", "F"})
    assert "F" not in result.covered_zones


def test_zone_path_keeps_supplied_duplicates(ticket_calculator, stops):
    result = ticket_calculator.calculate_ticket(stops["S1"], stops["S3"], ["A", "B", "A"])

    assert result.zone_path == ("A", "B", "A")
    assert result.covered_zones == ("A", "B")
    assert result.ticket_type is TicketType.Z3


@pytest.mark.parametrize("start, end", [("U1", "S1"), ("S1", "U1")])
def test_unzoned_stop_raises(ticket_calculator, stops, start, end):
    with pytest.raises(MissingZoneError) as exc_info:
        ticket_calculator.calculate_ticket(stops[start], stops[end], ("A",))
    assert exc_info.value.stop_id == "U1"


def test_missing_zone_is_checked_before_loading_graph(stops):
    repository = MagicMock()
    calculator = TicketCalculatorService(graph_repository=repository)

    with pytest.raises(MissingZoneError):
        calculator.calculate_ticket(stops["U1"], stops["S1"], ())

    repository.load_graph.assert_not_called()


def test_supplied_graph_skips_repository(zone_graph, stops):
    repository = FakeZoneGraphRepository(zone_graph)
    calculator = TicketCalculatorService(graph_repository=repository)

    calculator.calculate_ticket(stops["S1"], stops["S3"], ("A", "B"), graph=zone_graph)

    assert repository.calls == 0


def test_graph_failure_propagates(stops):
    calculator = TicketCalculatorService(graph_repository=FakeZoneGraphRepository(fail=True))

    with pytest.raises(GraphLoadError):
        calculator.calculate_ticket(stops["S1"], stops["S3"], ("A", "B"))


def test_results_compare_by_identity(ticket_calculator, stops):
    first = ticket_calculator.calculate_ticket(stops["S1"], stops["S3"], ("A", "B"))
    second = ticket_calculator.calculate_ticket(stops["S1"], stops["S3"], ("A", "B"))

    assert first == first
    assert first != second
    assert first.ticket_type is second.ticket_type
    assert first.allowed_zones == second.allowed_zones


def test_allowed_zones_for_start_zone(ticket_calculator):
    assert ticket_calculator.allowed_zones("C", 2) == {"B", "C", "D"}
    assert ticket_calculator.allowed_zones("H", 6) == {"G", "H"}
