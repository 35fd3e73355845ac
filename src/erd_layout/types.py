"""Shared type definitions for erd-layout.

Enums used across parsers, IR, layout, and renderers.
"""

from __future__ import annotations

from enum import Enum


class LayoutType(Enum):
    Linear = "linear"  # keep stored positions
    Circular = "circular"
    Hierarchical = "hierarchical"
    ForceDirected = "force-directed"
    X = "x"
    Y = "y"
    Box = "box"

    @classmethod
    def default(cls) -> LayoutType:
        return cls.Linear

    @classmethod
    def parse(cls, name: str | LayoutType) -> LayoutType:
        if isinstance(name, LayoutType):
            return name
        key = name.strip().lower()
        if key in _LAYOUT_ALIASES:
            return _LAYOUT_ALIASES[key]
        for member in cls:
            if member.value == key:
                return member
        choices = ", ".join(m.value for m in cls)
        raise ValueError(f"Unknown layout '{name}'; use one of {choices}")


_LAYOUT_ALIASES: dict[str, LayoutType] = {
    "force": LayoutType.ForceDirected,
    "force_directed": LayoutType.ForceDirected,
    "grid": LayoutType.Box,
}


class PairPolicy(Enum):
    """What to do with several foreign keys linking the same two entities."""

    Keep = "keep"  # every edge survives
    PairCount = "pair-count"  # legacy: keep only pairs with exactly 2 edges
    Collapse = "collapse"  # first edge per unordered pair

    @classmethod
    def default(cls) -> PairPolicy:
        return cls.Keep

    @classmethod
    def parse(cls, name: str | PairPolicy) -> PairPolicy:
        if isinstance(name, PairPolicy):
            return name
        key = name.strip().lower().replace("_", "-")
        for member in cls:
            if member.value == key:
                return member
        choices = ", ".join(m.value for m in cls)
        raise ValueError(f"Unknown pair policy '{name}'; use one of {choices}")


class HandleSide(Enum):
    Left = "left"  # incoming references land here
    Right = "right"  # outgoing references leave from here
