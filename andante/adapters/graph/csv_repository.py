"""CSV Zone Graph Repository adapter.

Loads the zone adjacency file (``zone,neighbor`` rows) into a ZoneGraph
and keeps it in the injected cache, so the graph is read once per
process unless the cache says otherwise.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from ..cache import InMemoryCache
from ..datasource import CSVDataSource
from ...config import DataConfig, get_config
from ...domain.errors import DataSourceError, GraphLoadError
from ...graph import ZoneGraph, build_zone_graph
from ...ports.cache import CachePort

GRAPH_CACHE_KEY = "zone_graph"


@dataclass
class CSVZoneGraphRepository:
    """Zone graph repository that loads from a CSV file.

    This adapter implements ZoneGraphRepositoryPort.

    Attributes:
        config: Data configuration (paths, encoding)
        cache: Cache holding the built graph
        data_source: CSV reader
    """

    config: DataConfig = field(default_factory=lambda: get_config().data)
    cache: CachePort[Any] = field(
        default_factory=lambda: InMemoryCache(name="zone-graph")
    )
    data_source: CSVDataSource = field(default_factory=CSVDataSource)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def load_graph(self) -> ZoneGraph:
        """Load the zone graph, from cache when available.

        Raises:
            GraphLoadError: If the edge file cannot be read.
        """
        return self.cache.get_or_compute(GRAPH_CACHE_KEY, self._load_from_csv)

    def _load_from_csv(self) -> ZoneGraph:
        path = self.config.zone_edges_path
        self._logger.debug("Loading zone graph", extra={"path": str(path)})

        try:
            rows = self.data_source.rows(path)
        except DataSourceError as e:
            self._logger.error(
                "Zone graph load failed",
                extra={"path": str(path), "error": str(e)},
            )
            raise GraphLoadError(
                "Failed to load zone graph",
                file_path=str(path),
                cause=e,
            ) from e

        graph = build_zone_graph(rows)
        self._logger.info("Zone graph loaded", extra={"zones": len(graph)})
        return graph

    def clear_cache(self) -> None:
        """Drop the cached graph."""
        self.cache.invalidate(GRAPH_CACHE_KEY)
        self._logger.debug("Zone graph cache cleared")
