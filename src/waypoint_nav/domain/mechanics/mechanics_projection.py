import math
from collections.abc import Iterator

import numpy as np

from waypoint_nav.domain.entities.geography import Node, Point, Projection, edge_key
from waypoint_nav.domain.graph.store import GraphStore

DEGENERATE_EPS = 1e-8  # squared length below which an edge is treated as a point


def iter_edges(store: GraphStore) -> Iterator[tuple[Node, Node]]:
    """Yield each undirected edge once, oriented as first seen in neighbor order."""
    snap = store.ensure_cache()
    seen: set[tuple[int, int]] = set()
    for n in snap:
        for mid in n.iter_neighbors():
            m = snap.get(mid)
            if m is None:
                continue
            key = edge_key(n.id, m.id)
            if key in seen:
                continue
            seen.add(key)
            yield n, m


def project_on_segment(q: np.ndarray, a: np.ndarray, b: np.ndarray, eps: float = DEGENERATE_EPS):
    """
    Closest point to q on the closed segment a-b.
    Returns (point, t) or None when the segment is degenerate.
    """
    ab = b - a
    ab_len2 = float(np.dot(ab, ab))
    if ab_len2 < eps:
        return None
    t = float(np.dot(q - a, ab)) / ab_len2
    t = min(1.0, max(0.0, t))
    return a + t * ab, t


def find_closest_projection(
    store: GraphStore, query: Point, *, eps: float = DEGENERATE_EPS
) -> Projection:
    q = query.as_array()
    best = Projection.none()
    best_d2 = math.inf

    for a, b in iter_edges(store):
        pa, pb = a.position.as_array(), b.position.as_array()
        hit = project_on_segment(q, pa, pb, eps)
        if hit is None:
            continue
        proj, _ = hit
        d2 = float(np.dot(q - proj, q - proj))
        if d2 < best_d2:
            best_d2 = d2
            best = Projection(
                a=a,
                b=b,
                point=Point.from_array(proj),
                da=float(np.linalg.norm(proj - pa)),
                db=float(np.linalg.norm(proj - pb)),
                dist=math.sqrt(d2),
            )
    return best
