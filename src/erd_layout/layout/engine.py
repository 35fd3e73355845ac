"""Layout dispatcher and the entity-to-result pipeline."""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Iterable, Sequence
from dataclasses import replace

from erd_layout.config import LayoutConfig
from erd_layout.ir.graph import SchemaGraph
from erd_layout.ir.schema import Entity, Point
from erd_layout.layout.axis import x_layout, y_layout
from erd_layout.layout.box import box_layout
from erd_layout.layout.circular import circular_layout, circular_with_isolated
from erd_layout.layout.force import force_directed_layout
from erd_layout.layout.hierarchical import hierarchical_layout
from erd_layout.layout.types import LayoutEdge, LayoutNode, LayoutResult
from erd_layout.types import LayoutType

logger = logging.getLogger(__name__)

# Stored positions for entities that never had one (linear layout)
LINEAR_START_X: float = 200
LINEAR_STEP_X: float = 250
LINEAR_Y: float = 500

Strategy = Callable[..., list[LayoutNode]]


def _linear(
    nodes: Sequence[LayoutNode],
    _edges: Sequence[LayoutEdge],
    _config: LayoutConfig,
    _rng: random.Random | None,
) -> list[LayoutNode]:
    return [n.moved_to(n.position.x, n.position.y) for n in nodes]


_STRATEGIES: dict[LayoutType, Strategy] = {
    LayoutType.Linear: _linear,
    LayoutType.Circular: lambda ns, _e, cfg, _r: circular_layout(ns, cfg.circular),
    LayoutType.Hierarchical: lambda ns, es, cfg, _r: hierarchical_layout(ns, es, cfg.hierarchical),
    LayoutType.ForceDirected: lambda ns, es, cfg, r: force_directed_layout(ns, es, cfg.force, rng=r),
    LayoutType.X: lambda ns, _e, cfg, _r: x_layout(ns, cfg.axis),
    LayoutType.Y: lambda ns, _e, cfg, _r: y_layout(ns, cfg.axis),
    LayoutType.Box: lambda ns, _e, cfg, _r: box_layout(ns, cfg.box),
}


def run_strategy(
    nodes: Sequence[LayoutNode],
    edges: Sequence[LayoutEdge],
    layout: LayoutType | str,
    config: LayoutConfig | None = None,
    rng: random.Random | None = None,
) -> list[LayoutNode]:
    """Run one strategy over all given nodes."""
    config = config or LayoutConfig()
    strategy = _STRATEGIES[LayoutType.parse(layout)]
    return strategy(nodes, edges, config, rng)


def place_nodes_by_rule(
    nodes: Sequence[LayoutNode],
    edges: Sequence[LayoutEdge],
    layout: LayoutType | str,
    config: LayoutConfig | None = None,
    rng: random.Random | None = None,
) -> list[LayoutNode]:
    """Lay out isolated and non-isolated nodes separately, then merge by id.

    The split reads each node's ``isolated`` flag (see ``SchemaGraph.flagged_nodes``).
    The isolated half is laid out without edges. Output keeps the input order.
    """
    isolated = [n for n in nodes if n.isolated]
    linked = [n for n in nodes if not n.isolated]

    positioned: dict[str, LayoutNode] = {}
    if isolated:
        for node in run_strategy(isolated, [], layout, config, rng):
            positioned[node.id] = node
    if linked:
        for node in run_strategy(linked, edges, layout, config, rng):
            positioned[node.id] = node
    return [positioned.get(n.id, n) for n in nodes]


def seed_positions(nodes: Sequence[LayoutNode]) -> list[LayoutNode]:
    """Give nodes without a stored entity position their linear slot."""
    seeded: list[LayoutNode] = []
    for index, node in enumerate(nodes):
        if node.entity is not None and node.entity.position is not None:
            seeded.append(node.moved_to(node.entity.position.x, node.entity.position.y))
        else:
            seeded.append(node.moved_to(LINEAR_START_X + index * LINEAR_STEP_X, LINEAR_Y))
    return seeded


def layout_entities(
    entities: Iterable[Entity],
    config: LayoutConfig | None = None,
    rng: random.Random | None = None,
) -> LayoutResult:
    """Run the full pipeline: extraction, isolation marking, dispatch.

    Never raises on data anomalies; dangling references are dropped with a
    warning while building the graph.
    """
    config = config or LayoutConfig()
    graph = SchemaGraph.from_entities(entities, config.pair_policy)
    nodes = seed_positions(graph.flagged_nodes())
    edges = graph.edges
    layout = config.layout
    logger.debug(f"Laying out {len(nodes)} node(s), {len(edges)} edge(s) with '{layout.value}'")

    if rng is None and layout is LayoutType.ForceDirected:
        rng = random.Random(config.force.seed if config.force.seed is not None else config.seed)

    if layout is LayoutType.Linear:
        positioned = nodes
    elif layout is LayoutType.Circular:
        by_id = {n.id: n for n in circular_with_isolated(nodes, edges, config.circular)}
        positioned = [by_id.get(n.id, n) for n in nodes]
    elif config.split_isolated:
        positioned = place_nodes_by_rule(nodes, edges, layout, config, rng)
    else:
        positioned = run_strategy(nodes, edges, layout, config, rng)

    return LayoutResult(nodes=_echo_positions(positioned), edges=edges, layout=layout)


def _echo_positions(nodes: Sequence[LayoutNode]) -> list[LayoutNode]:
    """Write each computed position back into a copy of its entity."""
    echoed: list[LayoutNode] = []
    for node in nodes:
        if node.entity is None:
            echoed.append(node)
            continue
        entity = replace(node.entity, position=Point(node.position.x, node.position.y))
        echoed.append(replace(node, entity=entity))
    return echoed