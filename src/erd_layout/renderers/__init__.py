"""Renderers turning a LayoutResult into output for the canvas."""

from erd_layout.renderers.base import Renderer
from erd_layout.renderers.json_renderer import JsonRenderer, edge_to_dict, node_to_dict

__all__ = ["JsonRenderer", "Renderer", "edge_to_dict", "node_to_dict"]
