"""Route port - Abstraction for route direction loading."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Sequence

if TYPE_CHECKING:
    from ..domain.models import RouteDirection


class RouteRepositoryPort(Protocol):
    """Port for loading route directions with their stop sequences.

    Implementation: adapters/routes/csv_repository.py

    The order of the returned directions is stable; direction matching
    relies on it to stay deterministic.
    """

    def fetch_all_routes(self) -> Sequence[RouteDirection]:
        """Fetch every route direction.

        Returns:
            All route directions, each with its ordered stops.

        Raises:
            RouteLoadError: If the route data cannot be loaded.
        """
        ...
