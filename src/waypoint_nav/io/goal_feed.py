# waypoint_nav/io/goal_feed.py
import requests
from pydantic import BaseModel, ValidationError

from waypoint_nav.app.protocols import GoalFeed, NavHooks


class GoalResponse(BaseModel):
    """Payload of the goal endpoint, e.g. {"node": "F12"}."""

    node: str | None = None


class StaticGoalFeed(GoalFeed):
    def __init__(self, node: str | None = None):
        self.node = node

    def poll(self) -> str | None:
        return self.node


class HttpGoalFeed(GoalFeed):
    """
    Polls a JSON endpoint for the current goal node name.
    Failures keep the last known goal; they are reported through hooks, never raised.
    """

    def __init__(
        self,
        url: str,
        *,
        timeout_s: float = 5.0,
        hooks: NavHooks | None = None,
        session: requests.Session | None = None,
    ):
        self.url, self.timeout_s, self.hooks = url, timeout_s, hooks
        self.http = session or requests
        self.latest: str | None = None

    def poll(self) -> str | None:
        try:
            response = self.http.get(self.url, timeout=self.timeout_s)
            response.raise_for_status()
            data = GoalResponse.model_validate(response.json())
        except requests.exceptions.RequestException as e:  # includes undecodable bodies
            self._error(e)
            return self.latest
        except ValidationError as e:
            self._error(e)
            return self.latest

        if data.node:
            if data.node != self.latest and self.hooks:
                self.hooks.goal_updated(goal=data.node)
            self.latest = data.node
        return self.latest

    def _error(self, exc: Exception) -> None:
        if self.hooks:
            self.hooks.feed_error(url=self.url, error=str(exc))
