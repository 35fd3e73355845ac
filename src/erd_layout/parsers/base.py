"""Base parser protocol."""

from __future__ import annotations

from typing import Protocol

from erd_layout.ir.schema import Entity


class Parser(Protocol):
    """Protocol that all schema parsers must implement."""

    def parse(self, src: str) -> list[Entity]:
        """Parse source text into an ordered entity list."""
        ...
