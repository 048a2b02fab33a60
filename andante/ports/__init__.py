"""Ports layer - Abstract interfaces (Protocols) for the application.

Ports define the contracts between the fare services and the adapters
that load reference data. They enable dependency injection and make the
services testable with in-memory fakes.
"""

from .cache import CachePort
from .graph import ZoneGraphRepositoryPort
from .routes import RouteRepositoryPort

__all__ = [
    # Reference data
    "RouteRepositoryPort",
    "ZoneGraphRepositoryPort",
    # Cache
    "CachePort",
]
