"""Layout types shared across layout strategies and renderers."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from erd_layout.ir.schema import Entity, Point
from erd_layout.types import LayoutType


@dataclass
class Size:
    width: float
    height: float


@dataclass
class LayoutNode:
    """A table node as seen by the layout strategies.

    Strategies never touch an input node; they return copies made with
    ``moved_to``.
    """

    id: str
    size: Size
    position: Point = field(default_factory=lambda: Point(0.0, 0.0))
    entity: Entity | None = None
    isolated: bool = False

    def moved_to(self, x: float, y: float) -> LayoutNode:
        return replace(self, position=Point(x=x, y=y))

    @property
    def width(self) -> float:
        return self.size.width

    @property
    def height(self) -> float:
        return self.size.height


@dataclass
class LayoutEdge:
    """A foreign-key reference drawn from the referenced row to the referencing row."""

    id: str
    source: str
    target: str
    source_handle: str
    target_handle: str


@dataclass
class LayoutResult:
    """Self-contained layout output — everything renderers need."""

    nodes: list[LayoutNode]
    edges: list[LayoutEdge]
    layout: LayoutType = LayoutType.Linear


# Edge id prefix for synthesized foreign-key edges
EDGE_PREFIX = "gen__"
