"""Zone adjacency graph and breadth-first queries.

Zones are nodes, shared borders are undirected edges. Distances are hop
counts: a ticket valid for N rings reaches every zone at most N - 1 hops
away from the zone where it was validated.
"""

from collections import deque
from typing import Deque, Dict, Iterator, List, Optional, Set, Tuple

from ..domain.models import ZoneId


class ZoneGraph:
    """Undirected zone graph stored as insertion-ordered adjacency lists.

    Neighbour order follows edge insertion order, so every query returns
    the same answer for the same edge list. Zones that were never added
    behave as isolated nodes.
    """

    def __init__(self) -> None:
        self._edges: Dict[ZoneId, List[ZoneId]] = {}

    def add_edge(self, first_zone: ZoneId, second_zone: ZoneId) -> None:
        """Connect two zones in both directions.

        Repeated calls add duplicate adjacency entries; queries are not
        affected but degree counts are.
        """
        self._edges.setdefault(first_zone, []).append(second_zone)
        self._edges.setdefault(second_zone, []).append(first_zone)

    def neighbors(self, zone: ZoneId) -> List[ZoneId]:
        return list(self._edges.get(zone, ()))

    @property
    def zones(self) -> List[ZoneId]:
        return list(self._edges)

    def __contains__(self, zone: object) -> bool:
        return zone in self._edges

    def __len__(self) -> int:
        return len(self._edges)

    def __iter__(self) -> Iterator[ZoneId]:
        return iter(self._edges)

    def min_hops(self, start: ZoneId, finish: ZoneId) -> Optional[int]:
        """Minimum number of hops between two zones.

        Parameters
        ----------
        start:
            Zone where the search begins.
        finish:
            Zone to reach.

        Returns
        -------
        int or None
            Hop count, ``0`` when both zones are the same, ``None`` when
            the zones are not connected.
        """
        visited: Set[ZoneId] = {start}
        queue: Deque[Tuple[ZoneId, int]] = deque([(start, 0)])

        while queue:
            current, distance = queue.popleft()
            if current == finish:
                return distance

            for neighbor in self._edges.get(current, ()):
                if neighbor not in visited:
                    visited.add(neighbor)
                    queue.append((neighbor, distance + 1))

        return None

    def zones_within_rings(self, rings: int, start: ZoneId) -> Set[ZoneId]:
        """All zones reachable with a ticket of ``rings`` rings.

        Parameters
        ----------
        rings:
            Ticket reach. ``1`` returns only ``start``, ``2`` adds its
            neighbours, and so on.
        start:
            Validation zone.

        Returns
        -------
        set[str]
            ``start`` plus every zone at most ``rings - 1`` hops away.
        """
        visited: Set[ZoneId] = {start}
        frontier: List[ZoneId] = [start]

        for _ in range(1, rings):
            next_frontier: List[ZoneId] = []
            for zone in frontier:
                for neighbor in self._edges.get(zone, ()):
                    if neighbor not in visited:
                        visited.add(neighbor)
                        next_frontier.append(neighbor)
            if not next_frontier:
                break
            frontier = next_frontier

        return visited

    def path_between(self, start: ZoneId, end: ZoneId) -> List[ZoneId]:
        """Shortest zone path from ``start`` to ``end`` (inclusive).

        Returns an empty list when the zones are not connected.
        """
        queue: Deque[Tuple[ZoneId, List[ZoneId]]] = deque([(start, [start])])
        visited: Set[ZoneId] = {start}

        while queue:
            current, path = queue.popleft()
            if current == end:
                return path

            for neighbor in self._edges.get(current, ()):
                if neighbor not in visited:
                    visited.add(neighbor)
                    queue.append((neighbor, [*path, neighbor]))

        return []
