# waypoint_nav/app/route_selection.py
import math
from dataclasses import dataclass
from typing import Literal

from waypoint_nav.domain.entities.geography import Node, Point, Projection
from waypoint_nav.domain.mechanics.mechanics_core import Mechanics

RouteKind = Literal["direct", "via_special", "none"]


@dataclass(frozen=True)
class RoutePlan:
    kind: RouteKind
    nodes: tuple[Node, ...]
    projection: Projection
    special_node: Node | None = None  # set when the chosen route passes it
    length: float = math.inf  # projection point -> last node

    @property
    def found(self) -> bool:
        return self.kind != "none" and len(self.nodes) > 0

    def polyline(self) -> list[Point]:
        if not self.found:
            return []
        return [self.projection.point, *(n.position for n in self.nodes)]


def route_length(projection: Projection, nodes) -> float:
    """Cost from the projected point along `nodes`; +inf when absent or not anchored on the edge."""
    if not nodes:
        return math.inf
    first = nodes[0]
    if projection.a is not None and first == projection.a:
        lead = projection.da
    elif projection.b is not None and first == projection.b:
        lead = projection.db
    else:
        return math.inf
    total = lead
    for i in range(1, len(nodes)):
        total += nodes[i - 1].position.distance_to(nodes[i].position)
    return total


class RouteSelector:
    """
    Picks between the direct route and the route through the nearest special node.
    With `force_via_special` the special route wins whenever it exists.
    """

    def __init__(self, mechanics: Mechanics, *, force_via_special: bool = False):
        self.mechanics = mechanics
        self.force_via_special = force_via_special

    def select(self, projection: Projection, goal: Node) -> RoutePlan:
        m = self.mechanics
        special = m.closest_special(goal)
        direct = m.path_from(projection, goal)

        via = None
        if special is not None:
            to_special = m.path_from(projection, special)
            to_goal = m.path(special, goal)
            if to_special and to_goal:
                via = m.combine(to_special, to_goal)

        len_direct = route_length(projection, direct)
        len_via = route_length(projection, via)

        if not direct and not via:
            return RoutePlan("none", (), projection)

        if self.force_via_special:
            if via:
                return RoutePlan("via_special", tuple(via), projection, special, len_via)
            return RoutePlan("direct", tuple(direct), projection, special, len_direct)

        if via and (not direct or len_via < len_direct):
            return RoutePlan("via_special", tuple(via), projection, special, len_via)
        on_route = special if special is not None and special in direct else None
        return RoutePlan("direct", tuple(direct), projection, on_route, len_direct)
