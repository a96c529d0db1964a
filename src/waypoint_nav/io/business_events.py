# waypoint_nav/io/business_events.py

from dataclasses import dataclass
from typing import Literal


# Base type for analytics events
@dataclass
class BizEvent:
    run_id: str
    seq: int  # navigator tick counter (for total ordering)
    name: str  # stable event name


@dataclass
class RouteComputedBiz(BizEvent):
    goal: str
    kind: Literal["direct", "via_special"]
    node_names: list[str]
    length: float
    projection: tuple[float, float, float]
    special: str | None = None


@dataclass
class RouteUnavailableBiz(BizEvent):
    goal: str
    reason: Literal["goal_unresolved", "projection_failed", "no_path"]
