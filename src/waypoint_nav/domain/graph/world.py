# waypoint_nav/domain/graph/world.py
from collections.abc import Iterable

from waypoint_nav.app.protocols import NodeSource
from waypoint_nav.domain.entities.geography import Node, NodeId, Point


class InMemoryWorld(NodeSource):
    """
    Mutable waypoint population. Ids are handed out in creation order and never reused.
    Neighbor lists may be one-directional; `link(..., mutual=True)` writes both sides.
    """

    def __init__(self):
        self._nodes: dict[NodeId, Node] = {}
        self._next_id: NodeId = 0

    def __len__(self) -> int:
        return len(self._nodes)

    def iter_nodes(self) -> Iterable[Node]:
        return iter(list(self._nodes.values()))

    def add_node(self, name: str, position: Point, neighbors: Iterable[NodeId] = ()) -> Node:
        n = Node(id=self._next_id, name=name, position=position, neighbors=list(neighbors))
        self._nodes[n.id] = n
        self._next_id += 1
        return n

    def get(self, node_id: NodeId) -> Node | None:
        return self._nodes.get(node_id)

    def find(self, name: str) -> Node | None:
        for n in self._nodes.values():
            if n.name == name:
                return n
        return None

    def link(self, a: Node | NodeId, b: Node | NodeId, *, mutual: bool = True) -> None:
        na, nb = self._resolve(a), self._resolve(b)
        if nb.id not in na.neighbors:
            na.neighbors.append(nb.id)
        if mutual and na.id not in nb.neighbors:
            nb.neighbors.append(na.id)

    def unlink(self, a: Node | NodeId, b: Node | NodeId) -> None:
        na, nb = self._resolve(a), self._resolve(b)
        if nb.id in na.neighbors:
            na.neighbors.remove(nb.id)
        if na.id in nb.neighbors:
            nb.neighbors.remove(na.id)

    def remove_node(self, node_id: NodeId) -> None:
        self._nodes.pop(node_id, None)
        for n in self._nodes.values():
            if node_id in n.neighbors:
                n.neighbors = [m for m in n.neighbors if m != node_id]

    def _resolve(self, n: Node | NodeId) -> Node:
        nid = n.id if isinstance(n, Node) else n
        try:
            return self._nodes[nid]
        except KeyError:
            raise KeyError(f"Unknown node id {nid!r}")
