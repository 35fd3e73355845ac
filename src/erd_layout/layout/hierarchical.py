"""Hierarchical (layered) layout with isolated tables parked above the layers.

Phases:
  1. Partition into isolated / connected nodes
  2. Level assignment (longest predecessor chain, cycles cut at level 0)
  3. Row placement of connected nodes, one row per level
  4. Grid placement of isolated nodes above the topmost row
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

import networkx as nx

from erd_layout.config import HierarchicalOptions
from erd_layout.layout.partition import build_digraph, split_by_graph
from erd_layout.layout.types import LayoutEdge, LayoutNode

logger = logging.getLogger(__name__)

# y of the level-0 row; the layering never moves with center_y
CONNECTED_START_Y: float = 200


# ─── Level Assignment ────────────────────────────────────────────────────────


def assign_levels(node_ids: Sequence[str], edges: Sequence[LayoutEdge]) -> dict[str, int]:
    """Assign each node 1 + the max level of its direct predecessors, or 0.

    Edges touching an id outside ``node_ids`` are ignored.
    """
    return graph_levels(build_digraph(node_ids, edges), node_ids)


def graph_levels(graph: nx.MultiDiGraph, node_ids: Iterable[str]) -> dict[str, int]:
    """Levels for ``node_ids`` and all their ancestors in ``graph``.

    Iterative depth-first search over ``graph.predecessors``. A predecessor
    that is still on the current path (a cycle) contributes level 0 instead
    of being re-entered, so every call terminates.
    """
    levels: dict[str, int] = {}
    visiting: set[str] = set()

    for root in node_ids:
        if root in levels:
            continue
        # Each frame: (node, its predecessors, index of next predecessor, best level so far)
        stack: list[list] = [[root, list(graph.predecessors(root)), 0, 0]]
        visiting.add(root)
        while stack:
            frame = stack[-1]
            node_id, preds, idx, best = frame
            if idx < len(preds):
                frame[2] = idx + 1
                parent = preds[idx]
                if parent in levels:
                    frame[3] = max(best, levels[parent] + 1)
                elif parent in visiting:
                    logger.debug(f"Cycle through '{parent}' while levelling '{node_id}'")
                    # an unresolved predecessor counts as level 0
                    frame[3] = max(best, 1)
                else:
                    visiting.add(parent)
                    stack.append([parent, list(graph.predecessors(parent)), 0, 0])
                continue

            stack.pop()
            visiting.discard(node_id)
            levels[node_id] = best
            if stack:
                parent_frame = stack[-1]
                parent_frame[3] = max(parent_frame[3], best + 1)

    return levels


# ─── Placement ───────────────────────────────────────────────────────────────


def _row_start_x(center_x: float, count: int, spacing: float) -> float:
    return center_x - (max(count, 1) - 1) * spacing / 2


def hierarchical_layout(
    nodes: Sequence[LayoutNode],
    edges: Sequence[LayoutEdge],
    options: HierarchicalOptions | None = None,
) -> list[LayoutNode]:
    """Place connected nodes in rows by level and isolated nodes in a grid above them."""
    opts = options or HierarchicalOptions()
    if not nodes:
        return list(nodes)

    graph = build_digraph((n.id for n in nodes), edges)
    parts = split_by_graph(nodes, graph)
    levels = graph_levels(graph, [n.id for n in parts.connected])

    by_level: dict[int, list[LayoutNode]] = {}
    for node in parts.connected:
        by_level.setdefault(levels.get(node.id, 0), []).append(node)

    placed: dict[str, LayoutNode] = {}
    for level, level_nodes in by_level.items():
        start_x = _row_start_x(opts.center_x, len(level_nodes), opts.node_spacing)
        y = CONNECTED_START_Y + level * opts.level_spacing
        for index, node in enumerate(level_nodes):
            placed[node.id] = node.moved_to(start_x + index * opts.node_spacing, y)

    per_row = max(1, int(opts.isolated_nodes_per_row))
    spacing = opts.effective_isolated_node_spacing
    isolated = parts.isolated
    row_count = (len(isolated) + per_row - 1) // per_row
    # Bottom isolated row sits one level_spacing above the first connected row.
    top_y = CONNECTED_START_Y - opts.level_spacing - max(0, row_count - 1) * opts.isolated_row_spacing

    for index, node in enumerate(isolated):
        row, col = divmod(index, per_row)
        in_row = min(per_row, len(isolated) - row * per_row)
        start_x = _row_start_x(opts.center_x, in_row, spacing)
        placed[node.id] = node.moved_to(start_x + col * spacing, top_y + row * opts.isolated_row_spacing)

    return [placed[n.id] for n in nodes]
