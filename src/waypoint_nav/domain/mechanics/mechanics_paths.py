import math

from waypoint_nav.domain.entities.geography import Node, Path, distance
from waypoint_nav.domain.graph.store import GraphStore
from waypoint_nav.domain.mechanics.mechanics_search import AStarSearch

WATER_PREFIX = "W"


def path_length(path: Path | None) -> float:
    """Summed edge length; +inf for absent or single-node paths (not comparable)."""
    if path is None or len(path) < 2:
        return math.inf
    return sum(distance(path[i - 1], path[i]) for i in range(1, len(path)))


def combine_paths(a: Path | None, b: Path | None) -> list[Node] | None:
    if not a:
        return list(b) if b is not None else None
    if not b:
        return list(a)
    skip = 1 if a[-1] == b[0] else 0
    return [*a, *b[skip:]]


def special_nodes(store: GraphStore, prefix: str = WATER_PREFIX) -> list[Node]:
    return [n for n in store.nodes() if n.name.startswith(prefix)]


def closest_special_node_by_path(
    store: GraphStore,
    goal: Node | None,
    prefix: str = WATER_PREFIX,
    *,
    search: AStarSearch | None = None,
) -> Node | None:
    """One full A* per candidate; fine for the small graphs this runs on."""
    candidates = special_nodes(store, prefix)
    if not candidates:
        return None
    search = search or AStarSearch(store)

    best, best_len = None, math.inf
    for w in candidates:
        path = search.find_path(goal, w)
        if not path:
            continue
        L = path_length(path)
        if L < best_len:
            best, best_len = w, L
    return best
