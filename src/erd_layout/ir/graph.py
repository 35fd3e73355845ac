"""Schema graph — converts entities into nodes, foreign-key edges and a networkx MultiDiGraph.

This module owns the extraction stage used by every downstream phase
(layout, rendering). Nodes carry their size hint; edges are synthesized from
column metadata, one per foreign key, and pruned when an endpoint is unknown.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable, Sequence

import networkx as nx

from erd_layout.ir.schema import Entity, Point
from erd_layout.layout.geometry import handle_id, resolve_height, resolve_width
from erd_layout.layout.partition import Partition, build_digraph, flag_isolated, split_by_graph
from erd_layout.layout.types import EDGE_PREFIX, LayoutEdge, LayoutNode, Size
from erd_layout.types import HandleSide, PairPolicy

logger = logging.getLogger(__name__)


class SchemaGraph:
    """The graph built from an entity list.

    Wraps a networkx MultiDiGraph (two entities may be linked by several
    foreign keys) and keeps the node and edge lists in input order.
    """

    def __init__(self, nodes: list[LayoutNode], edges: list[LayoutEdge]) -> None:
        self.nodes = nodes
        self.edges = edges
        self.digraph: nx.MultiDiGraph = build_digraph((n.id for n in nodes), edges)

    @classmethod
    def from_entities(cls, entities: Iterable[Entity], pair_policy: PairPolicy = PairPolicy.Keep) -> SchemaGraph:
        """Build a SchemaGraph from an ordered entity list."""
        nodes: list[LayoutNode] = []
        edges: list[LayoutEdge] = []
        seen: set[str] = set()

        for entity in entities:
            if entity.name in seen:
                logger.warning(f"Duplicate entity '{entity.name}' ignored; the first definition wins")
                continue
            seen.add(entity.name)
            nodes.append(entity_to_node(entity))
            edges.extend(synthesize_edges(entity))

        edges = drop_duplicate_edges(prune_dangling_edges(nodes, edges))
        edges = apply_pair_policy(edges, pair_policy)
        return cls(nodes=nodes, edges=edges)

    def node_count(self) -> int:
        return self.digraph.number_of_nodes()

    def edge_count(self) -> int:
        return self.digraph.number_of_edges()

    def in_degree(self, node_id: str) -> int:
        if node_id not in self.digraph:
            return 0
        return self.digraph.in_degree(node_id)

    def out_degree(self, node_id: str) -> int:
        if node_id not in self.digraph:
            return 0
        return self.digraph.out_degree(node_id)

    def is_dag(self) -> bool:
        return nx.is_directed_acyclic_graph(self.digraph)

    def isolated_ids(self) -> set[str]:
        return self.partition().isolated_ids

    def partition(self) -> Partition:
        return split_by_graph(self.nodes, self.digraph)

    def flagged_nodes(self) -> list[LayoutNode]:
        """Copies of the nodes with ``isolated`` set from the graph's isolates."""
        return flag_isolated(self.nodes, self.partition())

    def adjacency_list(self) -> list[tuple[str, list[str]]]:
        result: list[tuple[str, list[str]]] = []
        for node_id in self.digraph.nodes:
            neighbors = sorted(set(self.digraph.successors(node_id)))
            result.append((node_id, neighbors))
        result.sort(key=lambda x: x[0])
        return result


def entity_to_node(entity: Entity) -> LayoutNode:
    size = Size(
        width=resolve_width(entity.width),
        height=resolve_height(entity.height, len(entity.columns)),
    )
    position = Point(entity.position.x, entity.position.y) if entity.position is not None else Point(0.0, 0.0)
    return LayoutNode(id=entity.name, size=size, position=position, entity=entity)


def synthesize_edges(entity: Entity) -> list[LayoutEdge]:
    """One edge per foreign-key column, in column order."""
    edges: list[LayoutEdge] = []
    for _row, column in entity.foreign_columns():
        ref = column.foreign_to
        source_handle = handle_id(ref.name, ref.column, HandleSide.Right)
        target_handle = handle_id(entity.name, column.name, HandleSide.Left)
        edges.append(
            LayoutEdge(
                id=f"{EDGE_PREFIX}{source_handle}_{target_handle}",
                source=ref.name,
                target=entity.name,
                source_handle=source_handle,
                target_handle=target_handle,
            )
        )
    return edges


def prune_dangling_edges(nodes: Sequence[LayoutNode], edges: Iterable[LayoutEdge]) -> list[LayoutEdge]:
    """Drop edges whose source or target has no node."""
    ids = {n.id for n in nodes}
    kept: list[LayoutEdge] = []
    for edge in edges:
        missing = [end for end in (edge.source, edge.target) if end not in ids]
        if missing:
            logger.warning(f"Dropping edge {edge.id}: unknown entity {', '.join(repr(m) for m in missing)}")
            continue
        kept.append(edge)
    return kept


def drop_duplicate_edges(edges: Iterable[LayoutEdge]) -> list[LayoutEdge]:
    """Keep the first edge for each id; a repeated column yields a repeated id."""
    seen: set[str] = set()
    kept: list[LayoutEdge] = []
    for edge in edges:
        if edge.id in seen:
            logger.warning(f"Duplicate edge {edge.id} ignored")
            continue
        seen.add(edge.id)
        kept.append(edge)
    return kept


def apply_pair_policy(edges: list[LayoutEdge], policy: PairPolicy) -> list[LayoutEdge]:
    """Filter edges that link the same unordered pair of entities."""
    if policy is PairPolicy.Keep:
        return list(edges)

    def pair(edge: LayoutEdge) -> frozenset[str]:
        return frozenset((edge.source, edge.target))

    if policy is PairPolicy.PairCount:
        counts = Counter(pair(e) for e in edges)
        kept = [e for e in edges if counts[pair(e)] in (0, 2)]
    else:
        seen: set[frozenset[str]] = set()
        kept = []
        for edge in edges:
            key = pair(edge)
            if key in seen:
                continue
            seen.add(key)
            kept.append(edge)

    if len(kept) != len(edges):
        logger.debug(f"Pair policy '{policy.value}' removed {len(edges) - len(kept)} edge(s)")
    return kept
