"""Schema records supplied by the entity-editing side.

Entities arrive as plain mappings using camelCase keys (``dataType``,
``isPrimaryKey``, ``foreignTo`` ...). ``Entity.from_dict`` turns them into the
dataclasses below and ``Entity.to_dict`` goes back the other way, so the
renderer can echo the original fields untouched.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field


class SchemaError(ValueError):
    """Raised when source data cannot be read as a list of entities."""


@dataclass
class Point:
    """A 2D point in canvas pixels."""

    x: float
    y: float

    @classmethod
    def from_dict(cls, raw: object) -> Point | None:
        if not isinstance(raw, Mapping):
            return None
        x, y = raw.get("x"), raw.get("y")
        if not _is_number(x) or not _is_number(y):
            return None
        return cls(x=float(x), y=float(y))

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y}


@dataclass
class ForeignRef:
    """The entity and column a foreign key points at."""

    name: str
    column: str


@dataclass
class Column:
    name: str
    data_type: str = ""
    is_primary_key: bool = False
    not_null: bool = False
    unique: bool = False
    foreign_to: ForeignRef | None = None

    @classmethod
    def from_dict(cls, raw: Mapping[str, object]) -> Column:
        if not isinstance(raw, Mapping):
            raise SchemaError(f"column must be an object, got {type(raw).__name__}")
        name = raw.get("name")
        if not isinstance(name, str) or not name:
            raise SchemaError("column is missing a name")
        return cls(
            name=name,
            data_type=str(raw.get("dataType") or raw.get("data_type") or ""),
            is_primary_key=bool(raw.get("isPrimaryKey") or raw.get("is_primary_key")),
            not_null=bool(raw.get("notNull") or raw.get("not_null")),
            unique=bool(raw.get("unique")),
            foreign_to=_foreign_ref(raw.get("foreignTo") or raw.get("foreign_to")),
        )

    def to_dict(self) -> dict[str, object]:
        out: dict[str, object] = {
            "name": self.name,
            "dataType": self.data_type,
            "isPrimaryKey": self.is_primary_key,
            "notNull": self.not_null,
            "unique": self.unique,
        }
        if self.foreign_to is not None:
            out["foreignTo"] = {"name": self.foreign_to.name, "column": self.foreign_to.column}
        return out


@dataclass
class Entity:
    """A table: unique name plus an ordered list of columns.

    ``width`` and ``height`` are optional size hints; they are kept as given and
    only interpreted by the layout geometry.
    """

    name: str
    columns: list[Column] = field(default_factory=list)
    position: Point | None = None
    width: object = None
    height: object = None

    @classmethod
    def from_dict(cls, raw: Mapping[str, object]) -> Entity:
        if not isinstance(raw, Mapping):
            raise SchemaError(f"entity must be an object, got {type(raw).__name__}")
        name = raw.get("name")
        if not isinstance(name, str) or not name:
            raise SchemaError("entity is missing a name")
        raw_columns = raw.get("columns") or []
        if isinstance(raw_columns, Mapping):
            raw_columns = list(raw_columns.values())
        if not isinstance(raw_columns, list):
            raise SchemaError(f"columns of '{name}' must be a list")
        try:
            columns = [Column.from_dict(c) for c in raw_columns]
        except SchemaError as e:
            raise SchemaError(f"entity '{name}': {e}") from e
        return cls(
            name=name,
            columns=columns,
            position=Point.from_dict(raw.get("position")),
            width=raw.get("width"),
            height=raw.get("height"),
        )

    def to_dict(self) -> dict[str, object]:
        out: dict[str, object] = {
            "name": self.name,
            "columns": [c.to_dict() for c in self.columns],
        }
        if self.position is not None:
            out["position"] = self.position.to_dict()
        if self.width is not None:
            out["width"] = self.width
        if self.height is not None:
            out["height"] = self.height
        return out

    def foreign_columns(self) -> list[tuple[int, Column]]:
        """(row index, column) for every column that references another entity."""
        return [(i, c) for i, c in enumerate(self.columns) if c.foreign_to is not None]


def _foreign_ref(raw: object) -> ForeignRef | None:
    if not isinstance(raw, Mapping):
        return None
    name, column = raw.get("name"), raw.get("column")
    if not isinstance(name, str) or not name:
        return None
    return ForeignRef(name=name, column=str(column) if column is not None else "")


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
