import json
import pickle

import pytest

from waypoint_nav.config.models import GoalFeedHttpModel, GoalFeedStaticModel, GraphInline
from waypoint_nav.domain.entities.geography import Point
from waypoint_nav.domain.graph.world import InMemoryWorld
from waypoint_nav.io.goal_feed import HttpGoalFeed, StaticGoalFeed
from waypoint_nav.runtime.registries import make_goal_feed, make_world
from waypoint_nav.runtime.resources import GraphFormatError, load_graph_from_path


def _write(tmp_path, doc) -> str:
    p = tmp_path / "graph.json"
    p.write_text(json.dumps(doc))
    return str(p)


def test_json_graph_with_forward_refs_and_one_way_links(tmp_path):
    path = _write(
        tmp_path,
        {
            "nodes": [
                {"name": "A", "position": [0, 0, 0], "neighbors": ["B"]},
                {"name": "B", "position": [1, 0, 0]},
                {"name": "W1", "position": [1, 0, 1], "neighbors": ["B", "A"]},
            ]
        },
    )
    world = load_graph_from_path(path, "json")
    a, b, w = world.find("A"), world.find("B"), world.find("W1")
    assert b.position == Point(1.0, 0.0, 0.0)
    assert a.neighbors == [b.id]
    assert b.neighbors == []
    assert w.neighbors == [b.id, a.id]


@pytest.mark.parametrize(
    "doc",
    [
        {"nodes": [{"name": "A", "position": [0, 0, 0], "neighbors": ["ghost"]}]},
        {"nodes": [{"name": "A", "position": [0, 0, 0]}, {"name": "A", "position": [1, 0, 0]}]},
        {"nodes": [{"name": "A", "position": [0, 0]}]},
    ],
)
def test_malformed_graph_documents(tmp_path, doc):
    with pytest.raises(GraphFormatError):
        load_graph_from_path(_write(tmp_path, doc), "json")


def test_invalid_json_is_a_format_error(tmp_path):
    p = tmp_path / "broken.json"
    p.write_text("{nodes: ")
    with pytest.raises(GraphFormatError):
        load_graph_from_path(str(p), "json")


def test_pickle_graph(tmp_path):
    world = InMemoryWorld()
    a = world.add_node("A", Point(0, 0, 0))
    world.add_node("B", Point(0, 1, 0), neighbors=[a.id])
    p = tmp_path / "graph.pkl"
    p.write_bytes(pickle.dumps(world))

    loaded = load_graph_from_path(str(p), "pickle")
    assert loaded.find("B").neighbors == [loaded.find("A").id]

    p.write_bytes(pickle.dumps({"nodes": []}))
    with pytest.raises(GraphFormatError):
        load_graph_from_path(str(p), "pickle")


def test_unsupported_format(tmp_path):
    with pytest.raises(ValueError, match="Unsupported graph fmt"):
        load_graph_from_path(str(tmp_path / "x.graphml"), "graphml")


def test_registries_build_feeds_and_worlds():
    assert isinstance(make_goal_feed(GoalFeedStaticModel(node="F")), StaticGoalFeed)
    feed = make_goal_feed(GoalFeedHttpModel(url="http://h/goal", timeout_s=1.5))
    assert isinstance(feed, HttpGoalFeed) and feed.timeout_s == 1.5

    world = make_world(GraphInline(nodes=[{"name": "A", "position": (0, 0, 0)}]))
    assert len(world) == 1


def test_registries_reject_unknown_kinds():
    class _Odd:
        kind = "smoke-signal"
        by = "telepathy"

    with pytest.raises(ValueError):
        make_goal_feed(_Odd())
    with pytest.raises(ValueError):
        make_world(_Odd())
