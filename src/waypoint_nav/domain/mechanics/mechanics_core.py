# waypoint_nav/domain/mechanics/mechanics_core.py
from dataclasses import dataclass, field

from waypoint_nav.domain.entities.geography import Node, Path, Point, Projection
from waypoint_nav.domain.graph.store import GraphStore
from waypoint_nav.domain.mechanics.mechanics_paths import (
    WATER_PREFIX,
    closest_special_node_by_path,
    combine_paths,
    path_length,
    special_nodes,
)
from waypoint_nav.domain.mechanics.mechanics_projection import (
    DEGENERATE_EPS,
    find_closest_projection,
)
from waypoint_nav.domain.mechanics.mechanics_search import AStarSearch


@dataclass
class Mechanics:
    """Bundles the store with projection, search and path helpers so call sites share one graph."""

    store: GraphStore
    special_prefix: str = WATER_PREFIX
    degenerate_eps: float = DEGENERATE_EPS
    search: AStarSearch = field(init=False)

    def __post_init__(self):
        self.search = AStarSearch(self.store)

    def refresh(self) -> None:
        self.store.refresh()

    def project(self, p: Point) -> Projection:
        return find_closest_projection(self.store, p, eps=self.degenerate_eps)

    def path(self, start: Node | None, goal: Node | None) -> list[Node] | None:
        return self.search.find_path(start, goal)

    def path_from(self, projection: Projection, goal: Node | None) -> list[Node] | None:
        return self.search.find_path_from_projection(projection, goal)

    def length(self, path: Path | None) -> float:
        return path_length(path)

    def combine(self, a: Path | None, b: Path | None) -> list[Node] | None:
        return combine_paths(a, b)

    def special_nodes(self) -> list[Node]:
        return special_nodes(self.store, self.special_prefix)

    def closest_special(self, goal: Node | None) -> Node | None:
        return closest_special_node_by_path(
            self.store, goal, self.special_prefix, search=self.search
        )
