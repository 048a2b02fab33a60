"""Dependency injection container.

Wires repositories, the shared reference-data cache and the fare
services together. Registrations are explicit and factories run lazily
on first resolution, so tests can swap any port for a fake.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Type, TypeVar, cast

from .config import AppConfig, get_config

T = TypeVar("T")


@dataclass
class Container:
    """Dependency injection container.

    Usage:
        # Production
        container = Container.create_default()
        planner = container.resolve(JourneyPlannerService)

        # Testing
        container = Container()
        container.register(ZoneGraphRepositoryPort, lambda: FakeGraphRepository())
        repository = container.resolve(ZoneGraphRepositoryPort)

    Attributes:
        config: Application configuration
    """

    config: AppConfig = field(default_factory=get_config)

    _factories: Dict[Any, Callable[[], Any]] = field(default_factory=dict, repr=False)
    _singletons: Dict[Any, Any] = field(default_factory=dict, repr=False)
    _singleton_types: set[Any] = field(default_factory=set, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def register(
        self,
        port_type: Any,
        factory: Callable[[], Any],
        singleton: bool = True,
    ) -> None:
        """Register a factory for a port type.

        Args:
            port_type: The type (usually a Protocol) to register.
            factory: A callable that creates instances of the type.
            singleton: If True, only one instance is created.
        """
        with self._lock:
            self._factories[port_type] = factory
            self._singletons.pop(port_type, None)
            if singleton:
                self._singleton_types.add(port_type)
            else:
                self._singleton_types.discard(port_type)

    def resolve(self, port_type: Type[T]) -> T:
        """Resolve an instance of a port type.

        Raises:
            KeyError: If the type is not registered.
        """
        with self._lock:
            if port_type not in self._factories:
                raise KeyError(f"Type not registered: {port_type}")

            if port_type in self._singleton_types:
                if port_type not in self._singletons:
                    self._singletons[port_type] = self._factories[port_type]()
                return cast(T, self._singletons[port_type])

            return cast(T, self._factories[port_type]())

    def is_registered(self, port_type: Any) -> bool:
        return port_type in self._factories

    def clear_singletons(self) -> None:
        """Clear all cached singletons."""
        with self._lock:
            self._singletons.clear()

    def clear_all(self) -> None:
        """Clear all registrations and singletons."""
        with self._lock:
            self._factories.clear()
            self._singletons.clear()
            self._singleton_types.clear()

    @classmethod
    def create_default(cls, config: Optional[AppConfig] = None) -> Container:
        """Create a container with the CSV-backed production bindings.

        Args:
            config: Optional configuration override.

        Returns:
            A configured Container instance.
        """
        from .adapters.cache import InMemoryCache
        from .adapters.datasource import CSVDataSource
        from .adapters.graph import CSVZoneGraphRepository
        from .adapters.routes import CSVRouteRepository
        from .ports.cache import CachePort
        from .ports.graph import ZoneGraphRepositoryPort
        from .ports.routes import RouteRepositoryPort
        from .services import (
            JourneyPlannerService,
            MultiSegmentRecommenderService,
            RouteCatalogService,
            RouteMatcherService,
            TicketCalculatorService,
        )

        config = config or get_config()
        container = cls(config=config)

        # Reference data cache (shared by both repositories)
        cache: InMemoryCache[Any] = InMemoryCache(
            name="reference-data",
            default_ttl_seconds=config.data.cache_ttl_seconds,
        )
        container.register(CachePort, lambda: cache)

        data_source = CSVDataSource(encoding=config.data.encoding)

        # Repositories
        container.register(
            RouteRepositoryPort,
            lambda: CSVRouteRepository(
                config=config.data,
                fare_config=config.fare,
                cache=container.resolve(CachePort),
                data_source=data_source,
            ),
        )
        container.register(
            ZoneGraphRepositoryPort,
            lambda: CSVZoneGraphRepository(
                config=config.data,
                cache=container.resolve(CachePort),
                data_source=data_source,
            ),
        )

        # Services
        container.register(RouteMatcherService, RouteMatcherService)
        container.register(RouteCatalogService, RouteCatalogService)
        container.register(
            TicketCalculatorService,
            lambda: TicketCalculatorService(
                graph_repository=container.resolve(ZoneGraphRepositoryPort),
            ),
        )
        container.register(
            MultiSegmentRecommenderService,
            lambda: MultiSegmentRecommenderService(
                ticket_calculator=container.resolve(TicketCalculatorService),
                graph_repository=container.resolve(ZoneGraphRepositoryPort),
            ),
        )

        def create_journey_planner() -> JourneyPlannerService:
            return JourneyPlannerService(
                route_repository=container.resolve(RouteRepositoryPort),
                route_matcher=container.resolve(RouteMatcherService),
                recommender=container.resolve(MultiSegmentRecommenderService),
                max_segments=config.fare.max_segments,
            )

        container.register(JourneyPlannerService, create_journey_planner)

        return container


# Global default container (lazy initialized)
_default_container: Optional[Container] = None
_container_lock = threading.Lock()


def get_container() -> Container:
    """Get the default application container, creating it if needed."""
    global _default_container
    if _default_container is None:
        with _container_lock:
            if _default_container is None:
                _default_container = Container.create_default()
    return _default_container


def reset_container() -> None:
    """Reset the default container."""
    global _default_container
    with _container_lock:
        if _default_container is not None:
            _default_container.clear_all()
        _default_container = None
