# main.py
import argparse
import json

from waypoint_nav.app.build import build
from waypoint_nav.config.models import NavigatorModel


def run(path: str, ticks: int | None = None):
    with open(path, encoding="utf-8") as f:
        cfg = NavigatorModel.model_validate(json.load(f))

    app = build(cfg)
    app.navigator.refresh_graph()
    # pose updates come from the localizer; without one the navigator routes from the origin
    return app.navigator.run(max_ticks=ticks, interval_s=cfg.update_interval_s)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Poll the goal feed and route over the waypoint graph.")
    parser.add_argument("scenario", help="JSON scenario file")
    parser.add_argument("--ticks", type=int, default=None, help="stop after N polling cycles")
    args = parser.parse_args()
    run(args.scenario, args.ticks)
