import pytest
import requests

from waypoint_nav.io.goal_feed import HttpGoalFeed, StaticGoalFeed
from waypoint_nav.io.nav_logging import NoopHooks


class _Response:
    def __init__(self, payload=None, status=200, bad_json=False):
        self.payload, self.status_code, self.bad_json = payload, status, bad_json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} Server Error")

    def json(self):
        if self.bad_json:
            raise requests.exceptions.JSONDecodeError("Expecting value", "<html>", 0)
        return self.payload


class _Session:
    """Replays canned responses (or raises exceptions) in order."""

    def __init__(self, *replies):
        self.replies = list(replies)
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        r = self.replies.pop(0)
        if isinstance(r, Exception):
            raise r
        return r


class _FeedHooks(NoopHooks):
    def __init__(self):
        self.updates, self.errors = [], []

    def goal_updated(self, *, goal):
        self.updates.append(goal)

    def feed_error(self, *, url, error):
        self.errors.append(error)


URL = "http://nav.local:5050/fire-source"


def test_static_feed():
    assert StaticGoalFeed().poll() is None
    assert StaticGoalFeed("F3").poll() == "F3"


def test_http_feed_tracks_latest_goal():
    hooks = _FeedHooks()
    session = _Session(_Response({"node": "F1"}), _Response({"node": "F1"}), _Response({"node": "F2"}))
    feed = HttpGoalFeed(URL, timeout_s=2.0, hooks=hooks, session=session)
    assert [feed.poll() for _ in range(3)] == ["F1", "F1", "F2"]
    assert hooks.updates == ["F1", "F2"]
    assert session.calls[0] == (URL, 2.0)


def test_http_feed_keeps_last_goal_on_failure():
    hooks = _FeedHooks()
    session = _Session(
        _Response({"node": "F1"}),
        requests.exceptions.ConnectionError("wifi down"),
        _Response(status=503),
        _Response(bad_json=True),
        _Response({"node": ["not", "a", "name"]}),
        _Response({"node": None}),
        _Response({}),
    )
    feed = HttpGoalFeed(URL, hooks=hooks, session=session)
    assert [feed.poll() for _ in range(7)] == ["F1"] * 7
    assert len(hooks.errors) == 4
    assert "wifi down" in hooks.errors[0]


def test_http_feed_without_any_goal_yet():
    feed = HttpGoalFeed(URL, session=_Session(requests.exceptions.Timeout("slow")))
    assert feed.poll() is None


def test_http_feed_uses_requests_by_default(monkeypatch):
    calls = []

    def fake_get(url, timeout=None):
        calls.append(url)
        return _Response({"node": "F9"})

    monkeypatch.setattr(requests, "get", fake_get)
    assert HttpGoalFeed(URL).poll() == "F9"
    assert calls == [URL]


@pytest.mark.parametrize("payload", [{"node": ""}, {"node": None}])
def test_empty_goal_is_not_a_goal(payload):
    feed = HttpGoalFeed(URL, session=_Session(_Response(payload)))
    assert feed.poll() is None
