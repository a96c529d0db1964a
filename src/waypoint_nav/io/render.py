# waypoint_nav/io/render.py
from collections.abc import Sequence

from waypoint_nav.app.protocols import MarkerPlacer, PathRenderer
from waypoint_nav.domain.entities.geography import Point


class PolylineRecorder(PathRenderer):
    """Keeps the last drawn polyline; stands in for a line renderer."""

    def __init__(self):
        self.points: list[Point] = []
        self.draws = 0

    def draw(self, polyline: Sequence[Point]) -> None:
        if len(polyline) < 2:
            self.clear()
            return
        self.points = list(polyline)
        self.draws += 1

    def clear(self) -> None:
        self.points = []


class MarkerBoard(MarkerPlacer):
    """Place-or-replace markers by label; one marker per label."""

    def __init__(self, y_offset: float = 1.5):
        self.y_offset = y_offset
        self.markers: dict[str, Point] = {}

    def place(self, label: str, at: Point) -> None:
        self.markers[label] = at.offset(dy=self.y_offset)

    def clear(self, label: str) -> None:
        self.markers.pop(label, None)
