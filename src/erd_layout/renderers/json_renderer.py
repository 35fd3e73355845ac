"""JSON renderer — serialises a LayoutResult for the diagram canvas.

Nodes carry ``id``, ``position``, their size, the original entity fields
under ``data`` (with the computed position echoed in), and one left/right
handle pair per column. Edges carry ids and handle ids only; the canvas
draws them between the handles.
"""

from __future__ import annotations

import json

from erd_layout.layout.geometry import handle_id, handle_offset
from erd_layout.layout.types import LayoutEdge, LayoutNode, LayoutResult
from erd_layout.types import HandleSide

NODE_TYPE = "textUpdater"
EDGE_TYPE = "custom"


def _round(value: float, digits: int | None) -> float:
    return value if digits is None else round(value, digits)


def node_to_dict(node: LayoutNode, digits: int | None = None) -> dict[str, object]:
    position = {"x": _round(node.position.x, digits), "y": _round(node.position.y, digits)}
    data: dict[str, object] = node.entity.to_dict() if node.entity is not None else {"name": node.id, "columns": []}
    data["position"] = position
    data["width"] = node.width

    handles: list[dict[str, object]] = []
    columns = node.entity.columns if node.entity is not None else []
    for row, column in enumerate(columns):
        for side in (HandleSide.Left, HandleSide.Right):
            handles.append(
                {
                    "id": handle_id(node.id, column.name, side),
                    "side": side.value,
                    "offset": handle_offset(row),
                }
            )

    return {
        "id": node.id,
        "type": NODE_TYPE,
        "position": position,
        "width": node.width,
        "height": node.height,
        "isolated": node.isolated,
        "data": data,
        "handles": handles,
    }


def edge_to_dict(edge: LayoutEdge) -> dict[str, object]:
    return {
        "id": edge.id,
        "source": edge.source,
        "target": edge.target,
        "sourceHandle": edge.source_handle,
        "targetHandle": edge.target_handle,
        "type": EDGE_TYPE,
    }


class JsonRenderer:
    """Render a LayoutResult as a ``{"nodes": [...], "edges": [...]}`` document."""

    def __init__(self, indent: int | None = 2, digits: int | None = 3) -> None:
        self.indent = indent
        self.digits = digits

    def to_dict(self, result: LayoutResult) -> dict[str, object]:
        return {
            "layout": result.layout.value,
            "nodes": [node_to_dict(n, self.digits) for n in result.nodes],
            "edges": [edge_to_dict(e) for e in result.edges],
        }

    def render(self, result: LayoutResult) -> str:
        return json.dumps(self.to_dict(result), indent=self.indent) + "\n"
