"""Box layout: pack nodes into the smallest roughly square grid.

Nodes fill a ``ceil(sqrt(n))``-wide grid row by row in input order. Each row
is centred horizontally on ``center_x`` using the nodes' own widths. Vertically
the plain mode gives every row the height of its tallest node; the compact
mode stacks each grid column on its own, so short nodes do not leave holes.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from erd_layout.config import BoxOptions
from erd_layout.layout.types import LayoutNode


def grid_shape(count: int) -> tuple[int, int]:
    """(columns, rows) for ``count`` nodes."""
    if count <= 0:
        return (0, 0)
    cols = math.ceil(math.sqrt(count))
    return cols, math.ceil(count / cols)


def _row_xs(row: Sequence[LayoutNode], center_x: float, offset_x: float) -> list[float]:
    row_width = sum(n.width for n in row) + max(0, len(row) - 1) * offset_x
    x = center_x - row_width / 2
    xs: list[float] = []
    for node in row:
        xs.append(x)
        x += node.width + offset_x
    return xs


def box_layout(nodes: Sequence[LayoutNode], options: BoxOptions | None = None) -> list[LayoutNode]:
    opts = options or BoxOptions()
    if not nodes:
        return list(nodes)

    cols, row_count = grid_shape(len(nodes))
    rows = [list(nodes[r * cols : (r + 1) * cols]) for r in range(row_count)]

    placed: list[LayoutNode] = []

    if not opts.compact:
        row_heights = [max(n.height for n in row) for row in rows]
        total = sum(row_heights) + opts.offset_y * (row_count - 1)
        y = opts.center_y - total / 2
        for row, height in zip(rows, row_heights):
            xs = _row_xs(row, opts.center_x, opts.offset_x)
            placed.extend(node.moved_to(x, y) for node, x in zip(row, xs))
            y += height + opts.offset_y
        return placed

    column_totals = [0.0] * cols
    column_counts = [0] * cols
    for i, node in enumerate(nodes):
        column_totals[i % cols] += node.height
        column_counts[i % cols] += 1
    tallest = max(
        (total + opts.offset_y * (count - 1) for total, count in zip(column_totals, column_counts) if count),
        default=0.0,
    )
    start_y = opts.center_y - tallest / 2

    column_y = [0.0] * cols
    for r, row in enumerate(rows):
        xs = _row_xs(row, opts.center_x, opts.offset_x)
        for c, (node, x) in enumerate(zip(row, xs)):
            col = (r * cols + c) % cols
            placed.append(node.moved_to(x, start_y + column_y[col]))
            column_y[col] += node.height + opts.offset_y
    return placed
