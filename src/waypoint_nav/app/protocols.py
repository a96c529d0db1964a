from collections.abc import Iterable, Sequence
from typing import Protocol, runtime_checkable

from waypoint_nav.domain.entities.geography import Node, Point


# ------------- World graph --------------------
@runtime_checkable
class NodeSource(Protocol):
    """
    Responsibilities:
    • Enumerate the current population of waypoint nodes (position + neighbors + name).
    The core only reads nodes; authoring and placement belong to the world.
    """

    def iter_nodes(self) -> Iterable[Node]: ...


# ------------- External feeds --------------------
@runtime_checkable
class GoalFeed(Protocol):
    """
    Supplies the name of the currently selected goal node.
    Returns the latest known name, or None if no goal has ever been received.
    """

    def poll(self) -> str | None: ...


# ------------- Outputs --------------------
@runtime_checkable
class PathRenderer(Protocol):
    """
    Draws one connected polyline: projection point first, then node positions.
    """

    def draw(self, polyline: Sequence[Point]) -> None: ...
    def clear(self) -> None: ...


@runtime_checkable
class MarkerPlacer(Protocol):
    def place(self, label: str, at: Point) -> None: ...
    def clear(self, label: str) -> None: ...


# ------------- Hooks --------------------
@runtime_checkable
class NavHooks(Protocol):
    def graph_refreshed(self, *, nodes: int): ...
    def goal_updated(self, *, goal: str): ...
    def goal_unresolved(self, *, goal: str): ...
    def projection_failed(self, *, query: Point): ...
    def route_unavailable(self, *, goal: str): ...
    def route_selected(self, plan, *, goal: str): ...
    def feed_error(self, *, url: str, error: str): ...
    def biz(self, ev): ...
