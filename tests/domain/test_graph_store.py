from waypoint_nav.domain.entities.geography import Point
from waypoint_nav.domain.graph.store import GraphStore
from waypoint_nav.domain.graph.world import InMemoryWorld
from waypoint_nav.io.nav_logging import NoopHooks


class _CountingWorld(InMemoryWorld):
    def __init__(self):
        super().__init__()
        self.enumerations = 0

    def iter_nodes(self):
        self.enumerations += 1
        return super().iter_nodes()


class _RefreshHooks(NoopHooks):
    def __init__(self):
        self.sizes = []

    def graph_refreshed(self, *, nodes):
        self.sizes.append(nodes)


def test_cache_is_lazy_and_reused():
    world = _CountingWorld()
    world.add_node("A", Point(0, 0, 0))
    store = GraphStore(world)
    assert not store.cached
    assert world.enumerations == 0

    store.nodes()
    store.by_name("A")
    store.nearest_node(Point(1, 1, 1))
    assert store.cached
    assert world.enumerations == 1


def test_cache_goes_stale_until_refresh():
    world = InMemoryWorld()
    world.add_node("A", Point(0, 0, 0))
    hooks = _RefreshHooks()
    store = GraphStore(world, hooks=hooks)
    assert [n.name for n in store.nodes()] == ["A"]

    b = world.add_node("B", Point(1, 0, 0))
    assert store.node(b.id) is None  # not yet visible

    store.refresh()
    assert store.node(b.id) is b
    assert hooks.sizes == [1, 2]


def test_empty_world_gives_empty_cache():
    store = GraphStore(InMemoryWorld())
    store.refresh()
    assert store.nodes() == ()
    assert store.nearest_node(Point(0, 0, 0)) is None
    assert store.by_name("A") is None


def test_nearest_node_and_lookup(water_grid):
    world, n = water_grid
    store = GraphStore(world)
    assert store.nearest_node(Point(3.9, 0.5, 0.0)) == n["Q"]
    assert store.by_name("W2") == n["W2"]
    assert store.node(n["F"].id) == n["F"]


def test_world_mutations(graph_factory):
    world, n = graph_factory({"A": (0, 0, 0), "B": (1, 0, 0), "C": (2, 0, 0)}, [("A", "B"), ("B", "C")])
    world.remove_node(n["B"].id)
    assert n["B"].id not in n["A"].neighbors and n["B"].id not in n["C"].neighbors
    assert world.find("B") is None

    world.link(n["A"], n["C"], mutual=False)
    assert n["C"].id in n["A"].neighbors and n["A"].id not in n["C"].neighbors
    world.unlink(n["A"], n["C"])
    assert n["A"].neighbors == [] and len(world) == 2
