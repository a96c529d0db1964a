# runtime/registries.py
from collections.abc import Callable
from typing import Any

from waypoint_nav.app.protocols import GoalFeed, NodeSource
from waypoint_nav.config.models import (
    GoalFeedHttpModel,
    GoalFeedStaticModel,
    GoalFeedUnion,
    GraphByPath,
    GraphInline,
    GraphRef,
)
from waypoint_nav.io.goal_feed import HttpGoalFeed, StaticGoalFeed
from waypoint_nav.runtime.resources import load_graph_from_path, world_from_specs

GoalFeedFactory = Callable[[GoalFeedUnion, dict], GoalFeed]
WorldFactory = Callable[[GraphRef, dict], NodeSource]

_feed_registry: dict[str, GoalFeedFactory] = {}
_world_registry: dict[str, WorldFactory] = {}


# ------------------- Goal feed registries ---------------------------


def register_feed(kind: str):
    def deco(fn: GoalFeedFactory):
        _feed_registry[kind] = fn
        return fn

    return deco


def make_goal_feed(cfg: GoalFeedUnion, *, hooks: Any = None) -> GoalFeed:
    try:
        factory = _feed_registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown goal feed kind {cfg.kind!r}")
    return factory(cfg, {"hooks": hooks})


@register_feed("http")
def _make_http(cfg: GoalFeedHttpModel, deps):
    return HttpGoalFeed(cfg.url, timeout_s=cfg.timeout_s, hooks=deps["hooks"])


@register_feed("static")
def _make_static(cfg: GoalFeedStaticModel, deps):
    return StaticGoalFeed(cfg.node)


# ------------------- World sources ---------------------------


def register_world(by: str):
    def deco(fn: WorldFactory):
        _world_registry[by] = fn
        return fn

    return deco


def make_world(cfg: GraphRef) -> NodeSource:
    try:
        factory = _world_registry[cfg.by]
    except KeyError:
        raise ValueError(f"Unknown graph source {cfg.by!r}")
    return factory(cfg, {})


@register_world("path")
def _make_world_from_path(cfg: GraphByPath, deps):
    return load_graph_from_path(cfg.file, cfg.fmt)


@register_world("inline")
def _make_world_inline(cfg: GraphInline, deps):
    return world_from_specs(cfg.nodes)
