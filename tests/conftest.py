"""Shared fixtures: a small zone network, stops and in-memory repositories."""

from __future__ import annotations

from typing import List, Optional, Sequence

import pytest

from andante.domain.errors import GraphLoadError, RouteLoadError
from andante.domain.models import (
    Direction,
    RouteDirection,
    RouteDirectionId,
    RouteType,
    Stop,
    StopId,
    ZoneId,
)
from andante.graph import ZoneGraph
from andante.services import (
    JourneyPlannerService,
    MultiSegmentRecommenderService,
    RouteMatcherService,
    TicketCalculatorService,
)

# A - B - C - D - E is a chain, F hangs off A, G - H is a separate island.
EDGES = [
    ("A", "B"),
    ("B", "C"),
    ("C", "D"),
    ("D", "E"),
    ("A", "F"),
    ("G", "H"),
]


def make_stop(stop_id: str, zone: Optional[str]) -> Stop:
    return Stop(
        id=StopId(stop_id),
        name=f"Stop {stop_id}",
        code=stop_id,
        zone_id=ZoneId(zone) if zone else None,
    )


def make_direction(
    route_id: str,
    direction: int,
    stops: Sequence[Stop],
    short_name: Optional[str] = None,
    route_type: RouteType = RouteType.BUS,
) -> RouteDirection:
    return RouteDirection(
        id=RouteDirectionId(route_id, Direction.from_raw(direction)),
        route_short_name=short_name or route_id,
        start_stop=stops[0],
        end_stop=stops[-1],
        stops=tuple(stops),
        route_type=route_type,
    )


class FakeZoneGraphRepository:
    """In-memory ZoneGraphRepositoryPort that counts loads."""

    def __init__(self, graph: Optional[ZoneGraph] = None, fail: bool = False) -> None:
        self.graph = graph
        self.fail = fail
        self.calls = 0

    def load_graph(self) -> ZoneGraph:
        self.calls += 1
        if self.fail or self.graph is None:
            raise GraphLoadError("zone graph unavailable")
        return self.graph


class FakeRouteRepository:
    """In-memory RouteRepositoryPort."""

    def __init__(self, routes: Sequence[RouteDirection] = (), fail: bool = False) -> None:
        self.routes: List[RouteDirection] = list(routes)
        self.fail = fail

    def fetch_all_routes(self) -> Sequence[RouteDirection]:
        if self.fail:
            raise RouteLoadError("routes unavailable")
        return self.routes


@pytest.fixture
def zone_graph() -> ZoneGraph:
    graph = ZoneGraph()
    for first, second in EDGES:
        graph.add_edge(ZoneId(first), ZoneId(second))
    return graph


@pytest.fixture
def stops() -> dict[str, Stop]:
    zones = {
        "S1": "A",
        "S2": "A",
        "S3": "B",
        "S4": "C",
        "S5": "D",
        "S6": "E",
        "F1": "F",
        "G1": "G",
        "H1": "H",
        "U1": None,
    }
    return {stop_id: make_stop(stop_id, zone) for stop_id, zone in zones.items()}


@pytest.fixture
def directions(stops: dict[str, Stop]) -> List[RouteDirection]:
    """Route 10 runs S1..S6 and back, route 20 runs on the G/H island."""
    line = [stops[s] for s in ("S1", "S2", "S3", "S4", "S5", "S6")]
    island = [stops["G1"], stops["H1"]]
    return [
        make_direction("10", 0, line),
        make_direction("10", 1, list(reversed(line))),
        make_direction("20", 0, island),
        make_direction("20", 1, list(reversed(island))),
    ]


@pytest.fixture
def graph_repository(zone_graph: ZoneGraph) -> FakeZoneGraphRepository:
    return FakeZoneGraphRepository(zone_graph)


@pytest.fixture
def route_repository(directions: List[RouteDirection]) -> FakeRouteRepository:
    return FakeRouteRepository(directions)


@pytest.fixture
def route_matcher() -> RouteMatcherService:
    return RouteMatcherService()


@pytest.fixture
def ticket_calculator(graph_repository: FakeZoneGraphRepository) -> TicketCalculatorService:
    return TicketCalculatorService(graph_repository=graph_repository)


@pytest.fixture
def recommender(
    ticket_calculator: TicketCalculatorService,
    graph_repository: FakeZoneGraphRepository,
) -> MultiSegmentRecommenderService:
    return MultiSegmentRecommenderService(
        ticket_calculator=ticket_calculator,
        graph_repository=graph_repository,
    )


@pytest.fixture
def planner(
    route_repository: FakeRouteRepository,
    route_matcher: RouteMatcherService,
    recommender: MultiSegmentRecommenderService,
) -> JourneyPlannerService:
    return JourneyPlannerService(
        route_repository=route_repository,
        route_matcher=route_matcher,
        recommender=recommender,
        max_segments=3,
    )
