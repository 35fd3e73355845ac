"""Intermediate representation: schema records and the SchemaGraph.

``erd_layout.ir.graph`` depends on the layout geometry, so it is imported
directly rather than re-exported here.
"""

from erd_layout.ir.schema import Column, Entity, ForeignRef, Point, SchemaError

__all__ = [
    "Column",
    "Entity",
    "ForeignRef",
    "Point",
    "SchemaError",
]
