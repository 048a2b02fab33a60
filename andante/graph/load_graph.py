"""Zone graph construction from tabular edge data.

Edge rows carry a ``zone`` and a ``neighbor`` column. Each row adds one
undirected edge; rows with an empty cell are ignored. Reading the rows
from disk is the data source adapter's job.
"""

from typing import Iterable, Mapping, Optional

from ..domain.models import ZoneId
from .zone_graph import ZoneGraph


def build_zone_graph(rows: Iterable[Mapping[str, Optional[str]]]) -> ZoneGraph:
    """Build a ZoneGraph from edge rows, in row order."""
    graph = ZoneGraph()
    for row in rows:
        zone = (row.get("zone") or "").strip()
        neighbor = (row.get("neighbor") or "").strip()
        if zone and neighbor:
            graph.add_edge(ZoneId(zone), ZoneId(neighbor))
    return graph
