"""Route catalogue service.

Groups route directions for display (by transport type, then by route
short name) and filters them by a free-text search term.
"""

from __future__ import annotations

from typing import Dict, List, Sequence

from ..domain.models import RouteCollection, RouteDirection, RouteGroup, RouteType
from ..sorting import natural_key

# Display order of transport types.
ROUTE_TYPE_PRIORITY: Dict[RouteType, int] = {
    RouteType.METRO: 0,
    RouteType.TRAM: 1,
    RouteType.BUS: 2,
    RouteType.RAIL: 3,
}


class RouteCatalogService:
    """Grouping and filtering of route directions."""

    def group_and_sort(self, routes: Sequence[RouteDirection]) -> List[RouteGroup]:
        """Group routes by type, then by short name.

        Types follow ROUTE_TYPE_PRIORITY, collections are sorted by short
        name (numbers compared numerically) and the directions inside a
        collection by direction value.
        """
        routes_by_type: Dict[RouteType, List[RouteDirection]] = {}
        for route in routes:
            routes_by_type.setdefault(route.route_type, []).append(route)

        groups = [
            RouteGroup(
                route_type=route_type,
                route_collections=tuple(self.group_by_short_name(routes_of_type)),
            )
            for route_type, routes_of_type in routes_by_type.items()
        ]
        return sorted(groups, key=lambda g: ROUTE_TYPE_PRIORITY[g.route_type])

    def group_by_short_name(
        self, routes: Sequence[RouteDirection]
    ) -> List[RouteCollection]:
        routes_by_name: Dict[str, List[RouteDirection]] = {}
        for route in routes:
            routes_by_name.setdefault(route.route_short_name, []).append(route)

        collections = [
            RouteCollection(
                route_short_name=name,
                route_type=directions[0].route_type,
                directions=tuple(sorted(directions, key=lambda d: d.id.direction.value)),
            )
            for name, directions in routes_by_name.items()
        ]
        return sorted(collections, key=lambda c: natural_key(c.route_short_name))

    def filter_collections(
        self, route_groups: Sequence[RouteGroup], search_term: str
    ) -> List[RouteGroup]:
        """Keep directions matching ``search_term``.

        A direction matches when one of its stops has the term in its
        name or code, or when the route short name contains it. The
        comparison ignores case. A blank term returns the groups as-is.
        """
        if not search_term or not search_term.strip():
            return list(route_groups)

        term = search_term.casefold()
        filtered_groups: List[RouteGroup] = []

        for group in route_groups:
            filtered_collections: List[RouteCollection] = []
            for collection in group.route_collections:
                name_matches = term in collection.route_short_name.casefold()
                directions = tuple(
                    direction
                    for direction in collection.directions
                    if name_matches or self._has_matching_stop(direction, term)
                )
                if directions:
                    filtered_collections.append(
                        RouteCollection(
                            route_short_name=collection.route_short_name,
                            route_type=collection.route_type,
                            directions=directions,
                        )
                    )

            if filtered_collections:
                filtered_groups.append(
                    RouteGroup(
                        route_type=group.route_type,
                        route_collections=tuple(filtered_collections),
                    )
                )

        return filtered_groups

    @staticmethod
    def _has_matching_stop(direction: RouteDirection, term: str) -> bool:
        return any(
            term in stop.name.casefold()
            or (stop.code is not None and term in stop.code.casefold())
            for stop in direction.stops
        )
