import pytest

from waypoint_nav.domain.entities.geography import Point
from waypoint_nav.domain.graph.store import GraphStore
from waypoint_nav.domain.graph.world import InMemoryWorld
from waypoint_nav.domain.mechanics.mechanics_core import Mechanics


def make_world(positions: dict, edges, *, mutual: bool = True) -> tuple[InMemoryWorld, dict]:
    """positions: name -> (x, y, z); edges: iterable of (name, name)."""
    world = InMemoryWorld()
    nodes = {name: world.add_node(name, Point(*xyz)) for name, xyz in positions.items()}
    for u, v in edges:
        world.link(nodes[u], nodes[v], mutual=mutual)
    return world, nodes


# ---------- Fixtures


@pytest.fixture
def graph_factory():
    return make_world


@pytest.fixture
def square():
    # unit square in the ground plane: A-B-C-D-A
    world, nodes = make_world(
        {"A": (0.0, 0.0, 0.0), "B": (1.0, 0.0, 0.0), "C": (1.0, 0.0, 1.0), "D": (0.0, 0.0, 1.0)},
        [("A", "B"), ("B", "C"), ("C", "D"), ("D", "A")],
    )
    return world, nodes


@pytest.fixture
def square_mechanics(square) -> tuple[Mechanics, dict]:
    world, nodes = square
    return Mechanics(GraphStore(world)), nodes


@pytest.fixture
def water_grid():
    """
    A corridor S-P-Q-F with a water spur: W1 hangs off P, W2 hangs off F far away.

        W1
        |
    S - P - Q - F - - - - W2
    """
    world, nodes = make_world(
        {
            "S": (0.0, 0.0, 0.0),
            "P": (2.0, 0.0, 0.0),
            "Q": (4.0, 0.0, 0.0),
            "F": (6.0, 0.0, 0.0),
            "W1": (2.0, 0.0, 1.0),
            "W2": (16.0, 0.0, 0.0),
        },
        [("S", "P"), ("P", "Q"), ("Q", "F"), ("P", "W1"), ("F", "W2")],
    )
    return world, nodes
