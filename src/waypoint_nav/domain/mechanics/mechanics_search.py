import math
from dataclasses import dataclass, field

from waypoint_nav.domain.entities.geography import Node, NodeId, Projection, distance
from waypoint_nav.domain.graph.store import GraphSnapshot, GraphStore


@dataclass
class SearchWorkspace:
    """
    Scratch state for one A* run. A fresh one is allocated per call unless the caller
    passes one in; reusing it only saves allocations, every run starts from `reset`.
    Scores stay readable after the run (g is the cost-from-source accounting).
    """

    open_list: list[Node] = field(default_factory=list)
    open_ids: set[NodeId] = field(default_factory=set)
    came_from: dict[NodeId, Node] = field(default_factory=dict)
    g_score: dict[NodeId, float] = field(default_factory=dict)
    f_score: dict[NodeId, float] = field(default_factory=dict)
    expanded: int = 0

    def reset(self, snap: GraphSnapshot) -> None:
        self.open_list.clear()
        self.open_ids.clear()
        self.came_from.clear()
        self.expanded = 0
        self.g_score = dict.fromkeys(snap.by_id, math.inf)
        self.f_score = dict.fromkeys(snap.by_id, math.inf)

    def admit(self, n: Node) -> None:
        if n.id not in self.open_ids:
            self.open_list.append(n)
            self.open_ids.add(n.id)

    def pop_best(self) -> Node:
        # first minimum in insertion order wins
        best_i, best_f = 0, self.f_score[self.open_list[0].id]
        for i in range(1, len(self.open_list)):
            f = self.f_score[self.open_list[i].id]
            if f < best_f:
                best_i, best_f = i, f
        n = self.open_list.pop(best_i)
        self.open_ids.discard(n.id)
        return n


def heuristic(a: Node, b: Node) -> float:
    return distance(a, b)


class AStarSearch:
    """A* over the cached waypoint graph; edge cost and heuristic are both Euclidean."""

    def __init__(self, store: GraphStore):
        self.store = store

    def find_path(
        self, start: Node | None, goal: Node | None, *, workspace: SearchWorkspace | None = None
    ) -> list[Node] | None:
        snap = self.store.ensure_cache()
        if start is None or goal is None:
            return None
        ws = workspace or SearchWorkspace()
        ws.reset(snap)
        if start.id not in ws.g_score:
            return None
        self._seed(ws, start, 0.0, goal)
        return self._run(ws, snap, goal)

    def find_path_from_projection(
        self,
        projection: Projection,
        goal: Node | None,
        *,
        workspace: SearchWorkspace | None = None,
    ) -> list[Node] | None:
        """
        Search from the projected point, treated as a virtual source joined to both edge
        endpoints at costs da/db. The returned node list does not include the projected
        point itself; callers prepend `projection.point` when drawing.
        """
        snap = self.store.ensure_cache()
        if projection.a is None or projection.b is None or goal is None:
            return None
        ws = workspace or SearchWorkspace()
        ws.reset(snap)
        if projection.a.id not in ws.g_score or projection.b.id not in ws.g_score:
            return None
        self._seed(ws, projection.a, projection.da, goal)
        self._seed(ws, projection.b, projection.db, goal)
        return self._run(ws, snap, goal)

    # ----------------------------------------------------------------

    @staticmethod
    def _seed(ws: SearchWorkspace, n: Node, g: float, goal: Node) -> None:
        if g < ws.g_score[n.id]:
            ws.g_score[n.id] = g
            ws.f_score[n.id] = g + heuristic(n, goal)
        ws.admit(n)

    def _run(self, ws: SearchWorkspace, snap: GraphSnapshot, goal: Node) -> list[Node] | None:
        while ws.open_list:
            current = ws.pop_best()
            if current.id == goal.id:
                return self._reconstruct(ws, current)
            ws.expanded += 1

            g_cur = ws.g_score[current.id]
            for nid in current.iter_neighbors():
                neighbor = snap.get(nid)
                if neighbor is None:
                    continue  # dangling reference outside the cache
                tentative_g = g_cur + distance(current, neighbor)
                if tentative_g < ws.g_score[nid]:
                    ws.came_from[nid] = current
                    ws.g_score[nid] = tentative_g
                    ws.f_score[nid] = tentative_g + heuristic(neighbor, goal)
                    ws.admit(neighbor)
        return None

    @staticmethod
    def _reconstruct(ws: SearchWorkspace, current: Node) -> list[Node]:
        path = [current]
        while current.id in ws.came_from:
            current = ws.came_from[current.id]
            path.append(current)
        path.reverse()
        return path
