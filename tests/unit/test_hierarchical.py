"""Tests for layout.hierarchical — level assignment, row placement, isolated grid."""

from __future__ import annotations

from erd_layout.config import HierarchicalOptions
from erd_layout.layout.hierarchical import CONNECTED_START_Y, assign_levels, graph_levels, hierarchical_layout
from erd_layout.layout.partition import build_digraph
from erd_layout.layout.types import LayoutEdge, LayoutNode, Size

# ─── Helpers ──────────────────────────────────────────────────────────────────


def make_node(node_id: str, cols: int = 2) -> LayoutNode:
    return LayoutNode(id=node_id, size=Size(width=320, height=47 + cols * 28))


def make_edges(*pairs: tuple[str, str]) -> list[LayoutEdge]:
    return [LayoutEdge(id=f"{s}->{t}", source=s, target=t, source_handle="", target_handle="") for s, t in pairs]


def by_id(nodes: list[LayoutNode]) -> dict[str, LayoutNode]:
    return {n.id: n for n in nodes}


# ─── Level Assignment ─────────────────────────────────────────────────────────


class TestAssignLevels:
    def test_chain(self):
        levels = assign_levels(["A", "B", "C"], make_edges(("A", "B"), ("B", "C")))
        assert levels == {"A": 0, "B": 1, "C": 2}

    def test_longest_predecessor_chain_wins(self):
        """A → B → C plus A → C: C sits below B, not beside it."""
        levels = assign_levels(["A", "B", "C"], make_edges(("A", "B"), ("B", "C"), ("A", "C")))
        assert levels["C"] == 2

    def test_diamond(self):
        levels = assign_levels(["A", "B", "C", "D"], make_edges(("A", "B"), ("A", "C"), ("B", "D"), ("C", "D")))
        assert levels == {"A": 0, "B": 1, "C": 1, "D": 2}

    def test_two_cycle_terminates(self):
        """A ⇄ B: the node reached again mid-resolution counts as level 0."""
        levels = assign_levels(["A", "B"], make_edges(("A", "B"), ("B", "A")))
        assert levels == {"A": 2, "B": 1}

    def test_self_reference(self):
        levels = assign_levels(["A"], make_edges(("A", "A")))
        assert levels == {"A": 1}

    def test_three_cycle_terminates(self):
        levels = assign_levels(["A", "B", "C"], make_edges(("A", "B"), ("B", "C"), ("C", "A")))
        assert set(levels) == {"A", "B", "C"}
        assert all(level >= 0 for level in levels.values())

    def test_long_chain_does_not_hit_recursion_limit(self):
        ids = [f"T{i}" for i in range(3000)]
        edges = make_edges(*zip(ids, ids[1:]))
        levels = assign_levels(ids, edges)
        assert levels["T2999"] == 2999

    def test_edges_to_unknown_nodes_ignored(self):
        levels = assign_levels(["A"], make_edges(("Z", "A")))
        assert levels == {"A": 0}

    def test_parallel_edges_count_once(self):
        levels = assign_levels(["A", "B"], make_edges(("A", "B"), ("A", "B")))
        assert levels == {"A": 0, "B": 1}

    def test_levels_from_prebuilt_graph(self):
        graph = build_digraph(["A", "B", "C"], make_edges(("A", "B"), ("B", "C")))
        assert graph_levels(graph, ["C"]) == {"A": 0, "B": 1, "C": 2}


# ─── Layout ───────────────────────────────────────────────────────────────────


class TestHierarchicalLayout:
    def test_empty_input(self):
        assert hierarchical_layout([], make_edges(("A", "B"))) == []

    def test_isolated_above_connected(self):
        """A → B → C with D unlinked: D renders above the chain."""
        nodes = [make_node("A"), make_node("B"), make_node("C"), make_node("D")]
        out = by_id(
            hierarchical_layout(
                nodes,
                make_edges(("A", "B"), ("B", "C")),
                HierarchicalOptions(center_x=400, isolated_nodes_per_row=3),
            )
        )
        assert out["D"].position.y < min(out[n].position.y for n in ("A", "B", "C"))

    def test_rows_by_level(self):
        nodes = [make_node("A"), make_node("B"), make_node("C")]
        out = by_id(hierarchical_layout(nodes, make_edges(("A", "B"), ("B", "C"))))
        assert out["A"].position.y == CONNECTED_START_Y
        assert out["B"].position.y == CONNECTED_START_Y + 150
        assert out["C"].position.y == CONNECTED_START_Y + 300
        assert out["A"].position.x == 400

    def test_row_centered_on_center_x(self):
        nodes = [make_node("A"), make_node("B"), make_node("C")]
        out = by_id(hierarchical_layout(nodes, make_edges(("A", "B"), ("A", "C"))))
        assert out["B"].position.x == 300
        assert out["C"].position.x == 500
        assert out["B"].position.y == out["C"].position.y == 350

    def test_custom_spacing(self):
        nodes = [make_node("A"), make_node("B"), make_node("C")]
        opts = HierarchicalOptions(node_spacing=100, level_spacing=80, center_x=0)
        out = by_id(hierarchical_layout(nodes, make_edges(("A", "B"), ("A", "C")), opts))
        assert (out["B"].position.x, out["C"].position.x) == (-50, 50)
        assert out["B"].position.y == CONNECTED_START_Y + 80

    def test_isolated_rows_wrap_and_recenter(self):
        isolated = [make_node(f"I{i}") for i in range(7)]
        nodes = [make_node("X"), make_node("Y"), *isolated]
        out = by_id(hierarchical_layout(nodes, make_edges(("X", "Y"))))

        first_row = [out[f"I{i}"] for i in range(5)]
        second_row = [out[f"I{i}"] for i in range(5, 7)]
        assert [n.position.x for n in first_row] == [0, 200, 400, 600, 800]
        assert [n.position.x for n in second_row] == [300, 500]
        assert second_row[0].position.y - first_row[0].position.y == 120
        # bottom isolated row is one level_spacing above the first connected row
        assert second_row[0].position.y == CONNECTED_START_Y - 150

    def test_every_isolated_row_above_connected(self):
        isolated = [make_node(f"I{i}") for i in range(23)]
        nodes = [make_node("X"), make_node("Y"), make_node("Z"), *isolated]
        out = hierarchical_layout(nodes, make_edges(("X", "Y"), ("Y", "Z")))
        connected_top = min(n.position.y for n in out if n.id in {"X", "Y", "Z"})
        assert max(n.position.y for n in out if n.id.startswith("I")) < connected_top

    def test_isolated_node_spacing_override(self):
        nodes = [make_node("P"), make_node("Q")]
        out = by_id(hierarchical_layout(nodes, [], HierarchicalOptions(isolated_node_spacing=50)))
        assert out["Q"].position.x - out["P"].position.x == 50

    def test_single_node_is_isolated(self):
        out = hierarchical_layout([make_node("solo")], [])
        assert (out[0].position.x, out[0].position.y) == (400, CONNECTED_START_Y - 150)

    def test_cycle_places_every_node(self):
        nodes = [make_node("A"), make_node("B"), make_node("C")]
        out = hierarchical_layout(nodes, make_edges(("A", "B"), ("B", "C"), ("C", "A")))
        assert [n.id for n in out] == ["A", "B", "C"]

    def test_edge_to_missing_node_leaves_node_isolated(self):
        out = by_id(hierarchical_layout([make_node("A"), make_node("B")], make_edges(("A", "ghost"), ("A", "B"))))
        assert out["A"].position.y == CONNECTED_START_Y
        assert out["B"].position.y == CONNECTED_START_Y + 150

    def test_preserves_input_order(self):
        nodes = [make_node("D"), make_node("C"), make_node("B"), make_node("A")]
        out = hierarchical_layout(nodes, make_edges(("A", "B")))
        assert [n.id for n in out] == ["D", "C", "B", "A"]

    def test_does_not_mutate_input(self):
        nodes = [make_node("A"), make_node("B")]
        out = hierarchical_layout(nodes, make_edges(("A", "B")))
        assert all(n.position.x == 0 and n.position.y == 0 for n in nodes)
        assert all(a is not b for a, b in zip(nodes, out))

    def test_deterministic(self):
        nodes = [make_node(c) for c in "ABCDE"]
        edges = make_edges(("A", "B"), ("A", "C"), ("C", "D"))
        first = [(n.position.x, n.position.y) for n in hierarchical_layout(nodes, edges)]
        second = [(n.position.x, n.position.y) for n in hierarchical_layout(nodes, edges)]
        assert first == second
