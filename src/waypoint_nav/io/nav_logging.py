# io/nav_logging.py
import json
import logging
import sys

from waypoint_nav.io.recorder import Recorder


def _default_json_logger(name="waypoint_nav", level="INFO"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stdout)

        class _JsonFormatter(logging.Formatter):
            def format(self, record: logging.LogRecord) -> str:
                payload = {
                    "level": record.levelname,
                    "msg": record.getMessage(),
                    "logger": record.name,
                }
                extra = getattr(record, "extra", None)
                if isinstance(extra, dict):
                    payload.update(extra)
                return json.dumps(payload)

        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
        logger.setLevel(level)
    return logger


class NoopHooks:
    def graph_refreshed(self, **_):
        pass

    def goal_updated(self, **_):
        pass

    def goal_unresolved(self, **_):
        pass

    def projection_failed(self, **_):
        pass

    def route_unavailable(self, **_):
        pass

    def route_selected(self, *_, **__):
        pass

    def feed_error(self, **_):
        pass

    def biz(self, ev):
        pass


class NavLogging(NoopHooks):
    """
    One place to shape and emit structured logs for the navigator and its collaborators.
    """

    def __init__(
        self,
        run_id: str = "local",
        level: str = "INFO",
        debug: bool = False,
        logger: logging.Logger | None = None,
        recorder: Recorder | None = None,
    ):
        self.run_id, self.debug = run_id, debug
        self.recorder = recorder
        self.log = logger or _default_json_logger(level=level)

    def _emit(self, level: str, msg: str, **extra):
        self.log.log(getattr(logging, level), msg, extra={"extra": {"run_id": self.run_id, **extra}})

    # graph

    def graph_refreshed(self, *, nodes: int):
        self._emit("INFO", "graph_refreshed", nodes=nodes)

    # goal feed

    def goal_updated(self, *, goal: str):
        self._emit("INFO", "goal_updated", goal=goal)

    def feed_error(self, *, url: str, error: str):
        self._emit("WARNING", "feed_error", url=url, error=error)

    # routing

    def goal_unresolved(self, *, goal: str):
        self._emit("ERROR", "goal_unresolved", goal=goal)

    def projection_failed(self, *, query):
        self._emit("ERROR", "projection_failed", query=[query.x, query.y, query.z])

    def route_unavailable(self, *, goal: str):
        self._emit("WARNING", "route_unavailable", goal=goal)

    def route_selected(self, plan, *, goal: str):
        extra = {"goal": goal, "kind": plan.kind, "nodes": len(plan.nodes), "length": plan.length}
        if self.debug:
            extra["path"] = [n.name for n in plan.nodes]
        self._emit("INFO", "route_selected", **extra)

    # ------------- Business Event Reporting --------------------------

    def biz(self, ev):
        if self.recorder:
            self.recorder.emit(ev)
