"""Graph port - Abstraction for zone graph loading.

The fare services never read zone data themselves; they ask a
repository for an already built ZoneGraph.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..graph.zone_graph import ZoneGraph


class ZoneGraphRepositoryPort(Protocol):
    """Port for loading the zone adjacency graph.

    Implementation: adapters/graph/csv_repository.py

    Implementations may cache the graph. Callers must not assume they
    do, and must be ready for the load to fail.
    """

    def load_graph(self) -> ZoneGraph:
        """Load the zone graph.

        Returns:
            The zone adjacency graph.

        Raises:
            GraphLoadError: If the graph cannot be loaded.
        """
        ...
