"""Layout strategies and shared layout types.

The dispatcher lives in ``erd_layout.layout.engine``; it builds on
``erd_layout.ir.graph``, which in turn uses the modules exported here.
"""

from __future__ import annotations

from erd_layout.layout.axis import x_layout, y_layout
from erd_layout.layout.box import box_layout, grid_shape
from erd_layout.layout.circular import circular_layout, circular_with_isolated, place_isolated_above
from erd_layout.layout.force import force_directed_layout
from erd_layout.layout.geometry import (
    DEFAULT_WIDTH,
    HEADER_HEIGHT,
    ROW_HEIGHT,
    coerce_dimension,
    handle_id,
    handle_offset,
    node_height,
)
from erd_layout.layout.hierarchical import assign_levels, graph_levels, hierarchical_layout
from erd_layout.layout.partition import (
    Partition,
    build_digraph,
    flag_isolated,
    internal_edges,
    partition_nodes,
    split_by_graph,
)
from erd_layout.layout.types import EDGE_PREFIX, LayoutEdge, LayoutNode, LayoutResult, Point, Size

__all__ = [
    "DEFAULT_WIDTH",
    "EDGE_PREFIX",
    "HEADER_HEIGHT",
    "ROW_HEIGHT",
    "LayoutEdge",
    "LayoutNode",
    "LayoutResult",
    "Partition",
    "Point",
    "Size",
    "assign_levels",
    "box_layout",
    "circular_layout",
    "circular_with_isolated",
    "coerce_dimension",
    "force_directed_layout",
    "graph_levels",
    "grid_shape",
    "handle_id",
    "handle_offset",
    "hierarchical_layout",
    "build_digraph",
    "flag_isolated",
    "internal_edges",
    "node_height",
    "partition_nodes",
    "place_isolated_above",
    "split_by_graph",
    "x_layout",
    "y_layout",
]
