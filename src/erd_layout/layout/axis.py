"""Single-axis layouts: a left-to-right line (X) and a top-to-bottom stack (Y)."""

from __future__ import annotations

from collections.abc import Sequence

from erd_layout.config import AxisOptions
from erd_layout.layout.types import LayoutNode


def x_layout(nodes: Sequence[LayoutNode], options: AxisOptions | None = None) -> list[LayoutNode]:
    """Line nodes up at a fixed y (``center_y`` unless ``y`` is set), centred on ``center_x``.

    The pitch is the first node's width plus the gap, for every node, so the
    spacing stays uniform whatever the other widths are.
    """
    opts = options or AxisOptions()
    if not nodes:
        return list(nodes)

    pitch = nodes[0].width + max(0.0, opts.offset)
    start_x = opts.center_x - pitch * (len(nodes) - 1) / 2
    y = opts.center_y if opts.y is None else opts.y
    return [node.moved_to(start_x + index * pitch, y) for index, node in enumerate(nodes)]


def y_layout(nodes: Sequence[LayoutNode], options: AxisOptions | None = None) -> list[LayoutNode]:
    """Stack nodes at a fixed x (``center_x`` unless ``x`` is set).

    Each node sits its own height plus the gap below the previous one.
    """
    opts = options or AxisOptions()
    if not nodes:
        return list(nodes)

    x = opts.center_x if opts.x is None else opts.x
    gap = max(0.0, opts.offset)
    total = sum(n.height for n in nodes) + gap * (len(nodes) - 1)
    y = opts.center_y - total / 2

    placed: list[LayoutNode] = []
    for node in nodes:
        placed.append(node.moved_to(x, y))
        y += node.height + gap
    return placed
