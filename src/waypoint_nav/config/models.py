import os
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False


# ----------------- GRAPH SOURCES ---------------------


class NodeSpecModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str
    position: tuple[float, float, float]
    neighbors: list[str] = Field(default_factory=list)


class GraphByPath(BaseModel):
    model_config = ConfigDict(extra="forbid")
    by: Literal["path"] = "path"
    file: str
    fmt: Literal["json", "pickle"] = "json"

    @field_validator("file")
    @classmethod
    def _expand(cls, v: str) -> str:
        return os.path.expandvars(os.path.expanduser(v))


class GraphInline(BaseModel):
    model_config = ConfigDict(extra="forbid")
    by: Literal["inline"] = "inline"
    nodes: list[NodeSpecModel] = Field(default_factory=list)


GraphRef = Annotated[GraphByPath | GraphInline, Field(discriminator="by")]


# ----------------- GOAL FEEDS ---------------------


class GoalFeedHttpModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["http"] = "http"
    url: str = "http://localhost:5050/fire-source"
    timeout_s: float = 5.0

    @field_validator("timeout_s")
    def _positive(cls, v: float, info: ValidationInfo) -> float:
        if v <= 0:
            raise ValueError(f"{info.field_name} must be > 0")
        return v


class GoalFeedStaticModel(BaseModel):
    """Fixed goal; offline runs and tests."""

    model_config = ConfigDict(extra="forbid")
    kind: Literal["static"] = "static"
    node: str | None = None


GoalFeedUnion = Annotated[GoalFeedHttpModel | GoalFeedStaticModel, Field(discriminator="kind")]


# ----------------- ROUTING ---------------------


class RoutingModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    special_prefix: str = "W"  # water nodes
    force_via_special: bool = False
    degenerate_eps: float = 1e-8

    @field_validator("degenerate_eps")
    def _positive(cls, v: float, info: ValidationInfo) -> float:
        if v <= 0:
            raise ValueError(f"{info.field_name} must be > 0")
        return v

    @field_validator("special_prefix")
    @classmethod
    def _non_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("special_prefix must not be empty")
        return v


class MarkerModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    y_offset: float = 1.5


# ------------------------------------------------------------------


class NavigatorModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str
    run_id: str = "local"
    graph: GraphRef
    feed: GoalFeedUnion = Field(default_factory=GoalFeedStaticModel)
    routing: RoutingModel = RoutingModel()
    markers: MarkerModel = MarkerModel()
    log: LogModel = LogModel()
    update_interval_s: float = 1.0

    @field_validator("update_interval_s")
    def _positive(cls, v: float, info: ValidationInfo) -> float:
        if v <= 0:
            raise ValueError(f"{info.field_name} must be > 0")
        return v
