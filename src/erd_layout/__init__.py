"""erd-layout: position entity-relationship diagrams with pluggable layout strategies."""

from erd_layout.config import LayoutConfig
from erd_layout.ir.schema import Column, Entity, ForeignRef, SchemaError
from erd_layout.layout.engine import layout_entities, place_nodes_by_rule, run_strategy
from erd_layout.layout.types import LayoutEdge, LayoutNode, LayoutResult
from erd_layout.parsers import parse
from erd_layout.renderers.json_renderer import JsonRenderer
from erd_layout.types import LayoutType, PairPolicy

__all__ = [
    "Column",
    "Entity",
    "ForeignRef",
    "LayoutConfig",
    "LayoutEdge",
    "LayoutNode",
    "LayoutResult",
    "LayoutType",
    "PairPolicy",
    "SchemaError",
    "layout_entities",
    "layout_json",
    "place_nodes_by_rule",
    "run_strategy",
]


def layout_json(src: str, layout: str = "hierarchical", seed: int | None = None, indent: int | None = 2) -> str:
    """Parse an entity JSON document, lay it out, and render the result as JSON.

    Args:
        src: JSON array of entities, or an object with a ``tables`` array.
        layout: Strategy name ('linear', 'circular', 'hierarchical', 'force-directed', 'x', 'y', 'box').
        seed: Seed for the force-directed initial placement; None for a random start.
        indent: JSON indentation; None for a single line.

    Returns:
        The rendered ``{"layout", "nodes", "edges"}`` document.

    Raises:
        SchemaError: If the input cannot be parsed.
        ValueError: If the layout name is unknown.
    """
    entities = parse(src)
    config = LayoutConfig(layout=LayoutType.parse(layout), seed=seed)
    result = layout_entities(entities, config)
    return JsonRenderer(indent=indent).render(result)
