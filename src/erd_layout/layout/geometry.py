"""Node geometry shared by every layout strategy and by edge handles.

A table node is a header followed by one row per column, so its height is
fixed by the column count. Consumers computing their own bounding boxes must
use the same numbers or handles drift off their rows.
"""

from __future__ import annotations

import math
import re

from erd_layout.types import HandleSide

# ─── Geometry constants ──────────────────────────────────────────────────────

HEADER_HEIGHT: int = 47
ROW_HEIGHT: int = 28
DEFAULT_WIDTH: int = 320

_NUMERIC_PREFIX = re.compile(r"^\s*[-+]?(\d+(\.\d*)?|\.\d+)([eE][-+]?\d+)?")


def node_height(column_count: int) -> int:
    return HEADER_HEIGHT + max(0, column_count) * ROW_HEIGHT


def handle_offset(row_index: int) -> int:
    """Vertical offset of a column's handles from the top of its node."""
    return HEADER_HEIGHT + row_index * ROW_HEIGHT


def handle_id(entity_name: str, column_name: str, side: HandleSide) -> str:
    return f"{entity_name}_{column_name}_{side.value}"


def coerce_dimension(value: object) -> float | None:
    """Read a size hint such as ``280``, ``"280"`` or ``"280px"``.

    Returns None for anything that does not start with a finite number.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        match = _NUMERIC_PREFIX.match(value)
        if match is None:
            return None
        number = float(match.group(0))
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


def resolve_width(hint: object) -> float:
    width = coerce_dimension(hint)
    return DEFAULT_WIDTH if width is None else width


def resolve_height(hint: object, column_count: int) -> float:
    height = coerce_dimension(hint)
    return node_height(column_count) if height is None else height
