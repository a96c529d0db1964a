import math
from collections.abc import Sequence
from dataclasses import dataclass, field

import numpy as np

NodeId = int  # stable handle, totally ordered; assigned by the world


# Core geometry types used by mechanics
@dataclass(frozen=True)
class Point:
    x: float  # world units (meters in the localized map frame)
    y: float
    z: float = 0.0

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)

    @classmethod
    def from_array(cls, v) -> "Point":
        return cls(float(v[0]), float(v[1]), float(v[2]))

    def distance_to(self, other: "Point") -> float:
        return math.dist((self.x, self.y, self.z), (other.x, other.y, other.z))

    def offset(self, dx: float = 0.0, dy: float = 0.0, dz: float = 0.0) -> "Point":
        return Point(self.x + dx, self.y + dy, self.z + dz)


@dataclass(eq=False)
class Node:
    id: NodeId
    name: str
    position: Point
    neighbors: list[NodeId] = field(default_factory=list)

    def iter_neighbors(self):
        # a node listing itself is not an edge
        for n in self.neighbors:
            if n != self.id:
                yield n

    def __hash__(self) -> int:
        return hash(self.id)

    def __eq__(self, other) -> bool:
        return isinstance(other, Node) and other.id == self.id


def distance(a: Node, b: Node) -> float:
    return a.position.distance_to(b.position)


def edge_key(u: NodeId, v: NodeId) -> tuple[NodeId, NodeId]:
    """Canonical key of the undirected edge u-v (smaller id first)."""
    return (u, v) if u < v else (v, u)


@dataclass(frozen=True)
class Projection:
    a: Node | None
    b: Node | None
    point: Point
    da: float  # projection -> a
    db: float  # projection -> b
    dist: float  # query point -> projection

    @property
    def valid(self) -> bool:
        return self.a is not None and self.b is not None

    @classmethod
    def none(cls) -> "Projection":
        return cls(None, None, Point(0.0, 0.0, 0.0), 0.0, 0.0, math.inf)


Path = Sequence[Node]
