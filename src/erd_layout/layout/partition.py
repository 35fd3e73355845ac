"""Isolated / connected classification.

Every strategy and the dispatcher classify nodes by reading the isolates of a
networkx graph built with ``build_digraph``, so the two populations are
always computed the same way.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field, replace

import networkx as nx

from erd_layout.layout.types import LayoutEdge, LayoutNode


@dataclass
class Partition:
    isolated: list[LayoutNode] = field(default_factory=list)
    connected: list[LayoutNode] = field(default_factory=list)

    @property
    def isolated_ids(self) -> set[str]:
        return {n.id for n in self.isolated}


def build_digraph(node_ids: Iterable[str], edges: Iterable[LayoutEdge]) -> nx.MultiDiGraph:
    """MultiDiGraph over ``node_ids`` with every edge whose endpoints are both present.

    Parallel edges get their own integer keys; the edge id is kept as the
    ``id`` attribute.
    """
    graph = nx.MultiDiGraph()
    graph.add_nodes_from(node_ids)
    for edge in edges:
        if edge.source in graph and edge.target in graph:
            graph.add_edge(edge.source, edge.target, id=edge.id)
    return graph


def internal_edges(nodes: Sequence[LayoutNode], edges: Iterable[LayoutEdge]) -> list[LayoutEdge]:
    """Edges whose endpoints are both among ``nodes``."""
    ids = {n.id for n in nodes}
    return [e for e in edges if e.source in ids and e.target in ids]


def split_by_graph(nodes: Sequence[LayoutNode], graph: nx.MultiDiGraph) -> Partition:
    """Split nodes into the graph's isolates and the rest, keeping input order in both.

    A self-loop gives its node degree 2, so a self-reference counts as a
    connection.
    """
    isolated = set(nx.isolates(graph))
    result = Partition()
    for node in nodes:
        if node.id in isolated:
            result.isolated.append(node)
        else:
            result.connected.append(node)
    return result


def partition_nodes(nodes: Sequence[LayoutNode], edges: Iterable[LayoutEdge]) -> Partition:
    """Split nodes into isolated and connected.

    A node is isolated iff it is neither source nor target of an edge between
    two of the given nodes.
    """
    return split_by_graph(nodes, build_digraph((n.id for n in nodes), edges))


def flag_isolated(nodes: Sequence[LayoutNode], partition: Partition) -> list[LayoutNode]:
    """Copies of ``nodes`` with the ``isolated`` flag set from ``partition``."""
    isolated = partition.isolated_ids
    return [replace(n, isolated=n.id in isolated) for n in nodes]
