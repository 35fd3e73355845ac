"""Force-directed layout: inverse-square repulsion, spring attraction, hard collisions.

Each iteration runs, in order:
  1. Repulsion between every pair (velocity)
  2. Attraction along every edge (velocity)
  3. Collision resolution for pairs closer than the minimum distance (position)
  4. Damping, a weak pull toward the centre, Euler integration

Initial placement is random; pass ``rng`` (or ``options.seed``) to make it
reproducible.
"""

from __future__ import annotations

import logging
import math
import random
from collections.abc import Sequence

from erd_layout.config import ForceOptions
from erd_layout.layout.partition import internal_edges
from erd_layout.layout.types import LayoutEdge, LayoutNode

logger = logging.getLogger(__name__)

EPSILON: float = 0.0001
INITIAL_SPREAD: float = 400
# Post-loop collision passes; a handful of nodes settles in a few.
MAX_RELAX_PASSES: int = 500
# Rounding left after a push must not count as a new collision.
RELAX_SLACK: float = 1e-9


def _separation(ax: float, ay: float, bx: float, by: float) -> tuple[float, float, float]:
    """(dx, dy, distance) from a to b, distance floored to EPSILON."""
    dx = bx - ax
    dy = by - ay
    return dx, dy, math.hypot(dx, dy) or EPSILON


def _resolve_collisions(xs: list[float], ys: list[float], min_dist: float, slack: float = 0.0) -> bool:
    """Push every too-close pair apart by half the overlap each. Returns True if anything moved."""
    moved = False
    n = len(xs)
    for i in range(n):
        for j in range(i + 1, n):
            dx, dy, dist = _separation(xs[i], ys[i], xs[j], ys[j])
            if dist >= min_dist - slack:
                continue
            if dx == 0 and dy == 0:
                # coincident: no separating vector, split along x
                ux, uy = 1.0, 0.0
            else:
                ux, uy = dx / dist, dy / dist
            half = (min_dist - dist) / 2
            xs[i] -= ux * half
            ys[i] -= uy * half
            xs[j] += ux * half
            ys[j] += uy * half
            moved = True
    return moved


def force_directed_layout(
    nodes: Sequence[LayoutNode],
    edges: Sequence[LayoutEdge],
    options: ForceOptions | None = None,
    rng: random.Random | None = None,
) -> list[LayoutNode]:
    opts = options or ForceOptions()
    if not nodes:
        return list(nodes)
    if rng is None:
        rng = random.Random(opts.seed)

    n = len(nodes)
    xs = [opts.center_x + (rng.random() - 0.5) * INITIAL_SPREAD for _ in range(n)]
    ys = [opts.center_y + (rng.random() - 0.5) * INITIAL_SPREAD for _ in range(n)]
    vx = [0.0] * n
    vy = [0.0] * n

    index: dict[str, int] = {}
    for i, node in enumerate(nodes):
        index.setdefault(node.id, i)
    springs = [(index[e.source], index[e.target]) for e in internal_edges(nodes, edges)]

    multiplier = opts.repulsion_multiplier or 1
    repulsion = opts.repulsion_force * multiplier
    min_dist = opts.min_distance * multiplier

    for _iteration in range(max(0, int(opts.iterations))):
        for i in range(n):
            for j in range(i + 1, n):
                dx, dy, dist = _separation(xs[i], ys[i], xs[j], ys[j])
                force = repulsion / (dist * dist)
                fx = dx / dist * force
                fy = dy / dist * force
                vx[i] -= fx
                vy[i] -= fy
                vx[j] += fx
                vy[j] += fy

        for s, t in springs:
            if s == t:
                continue
            dx, dy, dist = _separation(xs[s], ys[s], xs[t], ys[t])
            force = opts.attraction_force * dist
            fx = dx / dist * force
            fy = dy / dist * force
            vx[s] += fx
            vy[s] += fy
            vx[t] -= fx
            vy[t] -= fy

        _resolve_collisions(xs, ys, min_dist)

        for i in range(n):
            vx[i] = vx[i] * opts.damping + (opts.center_x - xs[i]) * opts.center_pull
            vy[i] = vy[i] * opts.damping + (opts.center_y - ys[i]) * opts.center_pull
            xs[i] += vx[i]
            ys[i] += vy[i]

    for i in range(n):
        if not (math.isfinite(xs[i]) and math.isfinite(ys[i])):
            logger.warning(f"Non-finite position for '{nodes[i].id}'; reset to centre")
            xs[i], ys[i] = opts.center_x, opts.center_y

    # The last integration step can undo the in-loop separation.
    for _pass in range(MAX_RELAX_PASSES):
        if not _resolve_collisions(xs, ys, min_dist, slack=RELAX_SLACK):
            break
    else:
        logger.debug(f"Collision relaxation stopped after {MAX_RELAX_PASSES} passes")

    return [node.moved_to(xs[i], ys[i]) for i, node in enumerate(nodes)]
