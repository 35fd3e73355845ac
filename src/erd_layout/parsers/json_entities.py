"""JSON entity parser.

Accepts either a bare array of entity objects or a document wrapping that
array under ``tables`` or ``entities``::

    [{"name": "users", "columns": [{"name": "id", "dataType": "int", "isPrimaryKey": true}]},
     {"name": "posts", "columns": [{"name": "user_id", "foreignTo": {"name": "users", "column": "id"}}]}]
"""

from __future__ import annotations

import json
from collections.abc import Mapping

from erd_layout.ir.schema import Entity, SchemaError

_WRAPPER_KEYS = ("tables", "entities")


def entity_records(doc: object) -> list[object]:
    """The list of raw entity records inside a decoded JSON document."""
    if isinstance(doc, list):
        return doc
    if isinstance(doc, Mapping):
        for key in _WRAPPER_KEYS:
            if key in doc:
                records = doc[key]
                if not isinstance(records, list):
                    raise SchemaError(f"'{key}' must be a list, got {type(records).__name__}")
                return records
        raise SchemaError(f"expected a list of entities or an object with one of: {', '.join(_WRAPPER_KEYS)}")
    raise SchemaError(f"expected a list of entities, got {type(doc).__name__}")


class JsonEntityParser:
    """Parser for the entity-editor JSON export."""

    def parse(self, src: str) -> list[Entity]:
        try:
            doc = json.loads(src)
        except json.JSONDecodeError as e:
            raise SchemaError(f"invalid JSON at line {e.lineno}, column {e.colno}: {e.msg}") from e

        entities: list[Entity] = []
        for index, record in enumerate(entity_records(doc)):
            try:
                entities.append(Entity.from_dict(record))
            except SchemaError as e:
                raise SchemaError(f"entity #{index}: {e}") from e
        return entities
