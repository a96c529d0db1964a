# waypoint_nav/app/navigator.py
import time
from collections.abc import Callable

from waypoint_nav.app.protocols import GoalFeed, MarkerPlacer, NavHooks, PathRenderer
from waypoint_nav.app.route_selection import RoutePlan, RouteSelector
from waypoint_nav.domain.entities.geography import Point
from waypoint_nav.domain.mechanics.mechanics_core import Mechanics
from waypoint_nav.io.business_events import RouteComputedBiz, RouteUnavailableBiz
from waypoint_nav.io.nav_logging import NoopHooks

GOAL_MARKER = "goal"
SPECIAL_MARKER = "special"


class Navigator:
    """
    One polling cycle per `tick`: read the goal feed, project the current pose onto the
    graph, pick a route and hand it to the renderer and marker board.
    Failures end the cycle quietly (logged); the next tick retries.
    """

    def __init__(
        self,
        *,
        mechanics: Mechanics,
        selector: RouteSelector,
        feed: GoalFeed,
        renderer: PathRenderer,
        markers: MarkerPlacer,
        hooks: NavHooks | None = None,
        run_id: str = "local",
    ):
        self.mechanics = mechanics
        self.selector = selector
        self.feed = feed
        self.renderer = renderer
        self.markers = markers
        self.hooks = hooks or NoopHooks()
        self.run_id = run_id
        self.pose = Point(0.0, 0.0, 0.0)
        self.last_plan: RoutePlan | None = None
        self._seq = 0

    def update_pose(self, p: Point) -> None:
        """Localization callback."""
        self.pose = p

    def refresh_graph(self) -> None:
        self.mechanics.refresh()

    def tick(self, query: Point | None = None) -> RoutePlan | None:
        self._seq += 1
        goal_name = self.feed.poll()
        if not goal_name:
            return None

        goal = self.mechanics.store.by_name(goal_name)
        if goal is None:
            self.hooks.goal_unresolved(goal=goal_name)
            self._unavailable(goal_name, "goal_unresolved")
            return None

        q = query if query is not None else self.pose
        projection = self.mechanics.project(q)
        if not projection.valid:
            self.hooks.projection_failed(query=q)
            self._unavailable(goal_name, "projection_failed")
            return None

        plan = self.selector.select(projection, goal)
        if not plan.found:
            self.hooks.route_unavailable(goal=goal_name)
            self._unavailable(goal_name, "no_path")
            return None

        self.renderer.draw(plan.polyline())
        self.markers.place(GOAL_MARKER, goal.position)
        if plan.special_node is not None:
            self.markers.place(SPECIAL_MARKER, plan.special_node.position)
        else:
            self.markers.clear(SPECIAL_MARKER)

        self.hooks.route_selected(plan, goal=goal_name)
        self.hooks.biz(
            RouteComputedBiz(
                run_id=self.run_id,
                seq=self._seq,
                name="RouteComputed",
                goal=goal_name,
                kind=plan.kind,
                node_names=[n.name for n in plan.nodes],
                length=plan.length,
                projection=(projection.point.x, projection.point.y, projection.point.z),
                special=plan.special_node.name if plan.special_node else None,
            )
        )
        self.last_plan = plan
        return plan

    def run(
        self,
        max_ticks: int | None = None,
        interval_s: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> int:
        """Polling loop; returns the number of ticks performed."""
        n = 0
        while max_ticks is None or n < max_ticks:
            self.tick()
            n += 1
            if max_ticks is None or n < max_ticks:
                sleep(interval_s)
        return n

    def _unavailable(self, goal: str, reason: str) -> None:
        self.hooks.biz(
            RouteUnavailableBiz(
                run_id=self.run_id, seq=self._seq, name="RouteUnavailable", goal=goal, reason=reason
            )
        )
