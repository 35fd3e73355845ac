"""Centralized configuration for erd-layout.

One options dataclass per layout strategy plus ``LayoutConfig`` tying them
together. ``LayoutConfig.from_mapping`` accepts the flat camelCase option bag
the diagram UI sends (``nodeSpacing``, ``repulsionForce``, ``offsetX`` ...) as
well as snake_case keys; ``centerX``/``centerY`` apply to every strategy.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace

from erd_layout.types import LayoutType, PairPolicy


@dataclass
class HierarchicalOptions:
    node_spacing: float = 200
    level_spacing: float = 150
    center_x: float = 400
    isolated_nodes_per_row: int = 5
    isolated_node_spacing: float | None = None  # defaults to node_spacing
    isolated_row_spacing: float = 120

    @property
    def effective_isolated_node_spacing(self) -> float:
        if self.isolated_node_spacing is None:
            return self.node_spacing
        return self.isolated_node_spacing


@dataclass
class ForceOptions:
    iterations: int = 50
    repulsion_force: float = 1000
    repulsion_multiplier: float = 1
    attraction_force: float = 0.1
    min_distance: float = 150
    damping: float = 0.9
    center_x: float = 400
    center_y: float = 300
    center_pull: float = 0.01
    seed: int | None = None


@dataclass
class CircularOptions:
    radius: float = 300
    center_x: float = 400
    center_y: float = 300
    isolated_strategy: str = "box"  # "box" or "x"
    isolated_gap: float = 80


@dataclass
class AxisOptions:
    offset: float = 200
    center_x: float = 400
    center_y: float = 300
    x: float | None = None  # fixed column for the Y layout; center_x when unset
    y: float | None = None  # fixed row for the X layout; center_y when unset


@dataclass
class BoxOptions:
    offset_x: float = 200
    offset_y: float = 150
    center_x: float = 400
    center_y: float = 300
    compact: bool = False


@dataclass
class LayoutConfig:
    """Configuration for the layout pipeline."""

    layout: LayoutType = LayoutType.Linear
    hierarchical: HierarchicalOptions = field(default_factory=HierarchicalOptions)
    force: ForceOptions = field(default_factory=ForceOptions)
    circular: CircularOptions = field(default_factory=CircularOptions)
    axis: AxisOptions = field(default_factory=AxisOptions)
    box: BoxOptions = field(default_factory=BoxOptions)
    pair_policy: PairPolicy = PairPolicy.Keep
    split_isolated: bool = False
    seed: int | None = None

    @classmethod
    def from_mapping(cls, raw: Mapping[str, object]) -> LayoutConfig:
        """Build a config from a flat option mapping; unknown keys are ignored.

        Raises:
            ValueError: If ``layout`` or ``pairPolicy`` names an unknown value, or
                an option value has the wrong type.
        """
        flat = {_snake(k): v for k, v in raw.items()}
        config = cls()
        if "layout" in flat or "type" in flat:
            config.layout = LayoutType.parse(str(flat.get("layout", flat.get("type"))))
        if "pair_policy" in flat:
            config.pair_policy = PairPolicy.parse(str(flat["pair_policy"]))
        if flat.get("split_isolated") is not None:
            config.split_isolated = _as_bool("split_isolated", flat["split_isolated"])
        if "seed" in flat and flat["seed"] is not None:
            config.seed = _as_int("seed", flat["seed"])

        config.hierarchical = _apply(config.hierarchical, flat)
        config.force = _apply(config.force, flat)
        config.circular = _apply(config.circular, flat)
        config.axis = _apply(config.axis, flat)
        config.box = _apply(config.box, flat)
        if config.seed is not None:
            config.force = replace(config.force, seed=config.seed)
        return config

    def with_layout(self, layout: LayoutType | str) -> LayoutConfig:
        return replace(self, layout=LayoutType.parse(layout))


_CAMEL = re.compile(r"(?<!^)(?=[A-Z])")


def _snake(key: str) -> str:
    return _CAMEL.sub("_", key).lower()


def _apply(options, flat: dict[str, object]):
    """Copy of ``options`` with every field present in ``flat`` overridden.

    Raises:
        ValueError: If a value cannot be read as the field's type.
    """
    updates: dict[str, object] = {}
    for f in fields(options):
        if f.name not in flat or flat[f.name] is None or f.name == "seed":
            continue
        value = flat[f.name]
        if f.name in _BOOL_FIELDS:
            updates[f.name] = _as_bool(f.name, value)
        elif f.name in _INT_FIELDS:
            updates[f.name] = _as_int(f.name, value)
        elif f.name in _CHOICE_FIELDS:
            choices = _CHOICE_FIELDS[f.name]
            if value not in choices:
                raise ValueError(f"'{f.name}' must be one of {', '.join(choices)}, got {value!r}")
            updates[f.name] = value
        else:
            updates[f.name] = _as_number(f.name, value)
    return replace(options, **updates)


_BOOL_FIELDS = {"compact"}
_INT_FIELDS = {"iterations", "isolated_nodes_per_row"}
_CHOICE_FIELDS = {"isolated_strategy": ("box", "x")}
_TRUE = {"true", "yes", "on", "1"}
_FALSE = {"false", "no", "off", "0"}


def _as_number(name: str, value: object) -> float:
    if isinstance(value, bool):
        raise ValueError(f"'{name}' must be a number, got {value!r}")
    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            raise ValueError(f"'{name}' must be a number, got {value!r}") from None
    else:
        raise ValueError(f"'{name}' must be a number, got {type(value).__name__}")
    if not math.isfinite(number):
        raise ValueError(f"'{name}' must be finite, got {value!r}")
    return number


def _as_int(name: str, value: object) -> int:
    number = _as_number(name, value)
    if number != int(number):
        raise ValueError(f"'{name}' must be a whole number, got {value!r}")
    return int(number)


def _as_bool(name: str, value: object) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        key = value.strip().lower()
        if key in _TRUE:
            return True
        if key in _FALSE:
            return False
    raise ValueError(f"'{name}' must be true or false, got {value!r}")
