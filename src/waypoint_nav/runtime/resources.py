# waypoint_nav/runtime/resources.py
import json
import pickle
from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from waypoint_nav.config.models import NodeSpecModel
from waypoint_nav.domain.entities.geography import Point
from waypoint_nav.domain.graph.world import InMemoryWorld


class GraphFormatError(ValueError):
    pass


class GraphDocument(BaseModel):
    model_config = ConfigDict(extra="ignore")
    nodes: list[NodeSpecModel] = Field(default_factory=list)


def world_from_specs(specs: Iterable[NodeSpecModel]) -> InMemoryWorld:
    """Two passes: create every node, then resolve neighbor names (forward references allowed)."""
    specs = list(specs)
    world = InMemoryWorld()
    by_name = {}
    for s in specs:
        if s.name in by_name:
            raise GraphFormatError(f"Duplicate node name {s.name!r}")
        by_name[s.name] = world.add_node(s.name, Point(*s.position))
    for s in specs:
        node = by_name[s.name]
        for other in s.neighbors:
            if other not in by_name:
                raise GraphFormatError(f"Node {s.name!r} lists unknown neighbor {other!r}")
            # neighbor lists are taken as written; one-directional links stay one-directional
            world.link(node, by_name[other], mutual=False)
    return world


def load_graph_from_path(file: str, fmt: str = "json") -> InMemoryWorld:
    if fmt == "json":
        with open(file, encoding="utf-8") as f:
            try:
                doc = GraphDocument.model_validate(json.load(f))
            except (json.JSONDecodeError, ValidationError) as e:
                raise GraphFormatError(f"{file}: {e}") from e
        return world_from_specs(doc.nodes)
    if fmt == "pickle":
        with open(file, "rb") as f:
            world = pickle.load(f)
        if not isinstance(world, InMemoryWorld):
            raise GraphFormatError(f"{file}: expected a pickled InMemoryWorld")
        return world
    raise ValueError(f"Unsupported graph fmt {fmt!r}")
