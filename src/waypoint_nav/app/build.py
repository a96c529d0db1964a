# waypoint_nav/app/build.py
from collections.abc import Mapping
from dataclasses import dataclass

from waypoint_nav.app.navigator import Navigator
from waypoint_nav.app.protocols import GoalFeed, NodeSource
from waypoint_nav.app.route_selection import RouteSelector
from waypoint_nav.config.models import NavigatorModel
from waypoint_nav.domain.graph.store import GraphStore
from waypoint_nav.domain.mechanics.mechanics_core import Mechanics
from waypoint_nav.io.nav_logging import NavLogging, NoopHooks  # JSON logs
from waypoint_nav.io.recorder import JsonlSink, MemorySink, Recorder
from waypoint_nav.io.render import MarkerBoard, PolylineRecorder
from waypoint_nav.runtime.registries import make_goal_feed, make_world


@dataclass
class App:
    config: NavigatorModel
    world: NodeSource
    store: GraphStore
    mechanics: Mechanics
    feed: GoalFeed
    renderer: PolylineRecorder
    markers: MarkerBoard
    navigator: Navigator
    recorder: Recorder | None = None


def build(
    cfg: NavigatorModel | Mapping,
    *,
    world: NodeSource | None = None,
    feed: GoalFeed | None = None,
    use_logging: bool = True,
    record_in_memory: bool = False,
) -> App:
    # 0) Validate config
    model = cfg if isinstance(cfg, NavigatorModel) else NavigatorModel.model_validate(cfg)

    # 1) Hooks + recorder for analytics
    recorder = Recorder(MemorySink() if record_in_memory else JsonlSink())
    hooks = (
        NavLogging(
            run_id=model.run_id,
            level=model.log.level,
            debug=model.log.debug,
            recorder=recorder,
        )
        if use_logging
        else NoopHooks()
    )

    # 2) Graph
    world = world if world is not None else make_world(model.graph)
    store = GraphStore(world, hooks=hooks)
    mechanics = Mechanics(
        store,
        special_prefix=model.routing.special_prefix,
        degenerate_eps=model.routing.degenerate_eps,
    )

    # 3) External collaborators
    feed = feed if feed is not None else make_goal_feed(model.feed, hooks=hooks)
    renderer = PolylineRecorder()
    markers = MarkerBoard(y_offset=model.markers.y_offset)

    # 4) Controller
    selector = RouteSelector(mechanics, force_via_special=model.routing.force_via_special)
    navigator = Navigator(
        mechanics=mechanics,
        selector=selector,
        feed=feed,
        renderer=renderer,
        markers=markers,
        hooks=hooks,
        run_id=model.run_id,
    )

    return App(
        model,
        world,
        store,
        mechanics,
        feed,
        renderer,
        markers,
        navigator,
        recorder if use_logging else None,
    )
