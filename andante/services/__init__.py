"""Services layer - Fare computation and orchestration.

Available services:
- RouteMatcherService: Direction matching and crossed-zone extraction
- TicketCalculatorService: Ticket product and allowed zones for a journey
- MultiSegmentRecommenderService: Single vs separate ticket recommendation
- JourneyPlannerService: Main service turning stop ids into a recommendation
- RouteCatalogService: Grouping and search over route directions
"""

from .journey_planner import JourneyLeg, JourneyPlannerService
from .recommender import MultiSegmentRecommenderService, generate_disclaimers
from .route_catalog import RouteCatalogService
from .route_matcher import RouteMatcherService
from .ticket_calculator import TicketCalculatorService

__all__ = [
    "RouteMatcherService",
    "TicketCalculatorService",
    "MultiSegmentRecommenderService",
    "generate_disclaimers",
    "JourneyLeg",
    "JourneyPlannerService",
    "RouteCatalogService",
]
