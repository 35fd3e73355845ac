"""Circular layout, plus the variant that parks isolated tables above the ring."""

from __future__ import annotations

import math
from collections.abc import Sequence

from erd_layout.config import AxisOptions, BoxOptions, CircularOptions
from erd_layout.layout.axis import x_layout
from erd_layout.layout.box import box_layout
from erd_layout.layout.partition import partition_nodes
from erd_layout.layout.types import LayoutEdge, LayoutNode

# Isolated grid used by circular_with_isolated
ISOLATED_OFFSET_X: float = 220
ISOLATED_OFFSET_Y: float = 10
ISOLATED_LIFT: float = 220


def circular_layout(nodes: Sequence[LayoutNode], options: CircularOptions | None = None) -> list[LayoutNode]:
    """Evenly space nodes on a circle, first node at the top, clockwise."""
    opts = options or CircularOptions()
    if not nodes:
        return list(nodes)

    step = 2 * math.pi / len(nodes)
    placed: list[LayoutNode] = []
    for index, node in enumerate(nodes):
        angle = index * step - math.pi / 2
        placed.append(
            node.moved_to(
                opts.center_x + opts.radius * math.cos(angle),
                opts.center_y + opts.radius * math.sin(angle),
            )
        )
    return placed


def place_isolated_above(nodes: Sequence[LayoutNode], options: CircularOptions | None = None) -> list[LayoutNode]:
    """Lay out isolated nodes as a block that ends above the circle's top edge."""
    opts = options or CircularOptions()
    if not nodes:
        return list(nodes)

    block_center_y = opts.center_y - opts.radius - ISOLATED_LIFT
    if opts.isolated_strategy == "x":
        placed = x_layout(nodes, AxisOptions(center_x=opts.center_x, y=block_center_y))
    else:
        placed = box_layout(
            nodes,
            BoxOptions(
                offset_x=ISOLATED_OFFSET_X,
                offset_y=ISOLATED_OFFSET_Y,
                center_x=opts.center_x,
                center_y=block_center_y,
                compact=False,
            ),
        )

    circle_top = opts.center_y - abs(opts.radius)
    bottom = max(n.position.y + n.height for n in placed)
    lift = bottom - (circle_top - opts.isolated_gap)
    if lift <= 0:
        return placed
    return [n.moved_to(n.position.x, n.position.y - lift) for n in placed]


def circular_with_isolated(
    nodes: Sequence[LayoutNode],
    edges: Sequence[LayoutEdge],
    options: CircularOptions | None = None,
) -> list[LayoutNode]:
    """Linked nodes on the circle, isolated nodes above it; ring first, then the block."""
    parts = partition_nodes(nodes, edges)
    return circular_layout(parts.connected, options) + place_isolated_above(parts.isolated, options)
