"""Parser registry — detect the source format and dispatch to the right parser."""

from __future__ import annotations

from erd_layout.ir.schema import Entity, SchemaError
from erd_layout.parsers.json_entities import JsonEntityParser


def detect_type(src: str) -> str:
    """Detect the source format from its first meaningful character. Returns 'json' etc."""
    stripped = src.lstrip()
    if not stripped or stripped[0] in "[{":
        return "json"
    # Future: DBML, SQL DDL
    return "unknown"


_PARSERS = {
    "json": JsonEntityParser,
}


def parse(src: str) -> list[Entity]:
    """Auto-detect the source format and parse it to an entity list."""
    source_type = detect_type(src)
    parser_cls = _PARSERS.get(source_type)
    if parser_cls is None:
        raise SchemaError(f"Unsupported schema source: expected a JSON document, got {src.lstrip()[:20]!r}")
    return parser_cls().parse(src)
