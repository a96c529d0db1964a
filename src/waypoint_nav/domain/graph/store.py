# waypoint_nav/domain/graph/store.py
import threading
from collections.abc import Iterator
from dataclasses import dataclass
from types import MappingProxyType

from waypoint_nav.app.protocols import NavHooks, NodeSource
from waypoint_nav.domain.entities.geography import Node, NodeId, Point


@dataclass(frozen=True)
class GraphSnapshot:
    """Immutable view of the cached node set, in enumeration order."""

    nodes: tuple[Node, ...]
    by_id: MappingProxyType

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    def get(self, node_id: NodeId) -> Node | None:
        return self.by_id.get(node_id)

    @classmethod
    def build(cls, nodes) -> "GraphSnapshot":
        ordered = tuple(n for n in nodes if n is not None)
        return cls(ordered, MappingProxyType({n.id: n for n in ordered}))


class GraphStore:
    """
    Owns the cached node set. `refresh()` is the only mutator; staleness is the caller's
    business (nothing here watches the world). Readers get whole snapshots, so a refresh
    that races a search never exposes a half-built cache.
    """

    def __init__(self, source: NodeSource, hooks: NavHooks | None = None):
        self.source = source
        self.hooks = hooks
        self._snapshot: GraphSnapshot | None = None
        self._lock = threading.Lock()

    def refresh(self) -> None:
        snap = GraphSnapshot.build(self.source.iter_nodes())
        with self._lock:
            self._snapshot = snap
        if self.hooks:
            self.hooks.graph_refreshed(nodes=len(snap))

    def ensure_cache(self) -> GraphSnapshot:
        with self._lock:
            snap = self._snapshot
        if snap is None:
            self.refresh()
            with self._lock:
                snap = self._snapshot
        return snap

    @property
    def cached(self) -> bool:
        return self._snapshot is not None

    # -------- lookups (all go through the cache) --------

    def nodes(self) -> tuple[Node, ...]:
        return self.ensure_cache().nodes

    def node(self, node_id: NodeId) -> Node | None:
        return self.ensure_cache().get(node_id)

    def by_name(self, name: str) -> Node | None:
        for n in self.ensure_cache():
            if n.name == name:
                return n
        return None

    def nearest_node(self, p: Point) -> Node | None:
        best, best_d = None, float("inf")
        for n in self.ensure_cache():
            d = n.position.distance_to(p)
            if d < best_d:
                best, best_d = n, d
        return best
