"""Graph utilities for the zone network.

This subpackage builds the in-memory zone adjacency graph from edge rows
and runs the breadth-first queries used for ticket pricing.
"""

from .load_graph import build_zone_graph
from .zone_graph import ZoneGraph

__all__ = ["ZoneGraph", "build_zone_graph"]
