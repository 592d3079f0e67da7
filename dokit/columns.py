"""Map database rows onto dataclass instances by column name."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Callable, Generic, Sequence, TypeVar

__all__ = [
    "EntityWithTotal",
    "field_names_by_column",
    "row_mapper",
    "entity_with_total_mapper",
]

T = TypeVar("T")

RowMapper = Callable[[Sequence[Any], Sequence[Any]], Any]

_SCALARS = (str, bytes, bool, int, float)


@dataclass
class EntityWithTotal(Generic[T]):
    """A row's entity together with the total count selected as its last column."""

    inner: T
    total: int = 0


def _column_name(column: Any) -> str:
    return column if isinstance(column, str) else column[0]


def field_names_by_column(
    cls: type,
    columns: Sequence[Any],
    field_mapper: Callable[[str], str] | None = None,
) -> list[str | None]:
    """Return, for each column, the name of the dataclass field that receives it.

    A field's column name is ``field_mapper(field name)`` if a mapper is
    given, else its ``db`` metadata, else its lower-cased name. Columns are
    names or DB-API description entries; unmatched columns give ``None``.
    """
    if not (isinstance(cls, type) and dataclasses.is_dataclass(cls)):
        raise TypeError(f"cls must be a dataclass, but cls is {getattr(cls, '__name__', cls)!s}")
    wanted = {_column_name(column) for column in columns}
    by_column: dict[str, str] = {}
    for spec in dataclasses.fields(cls):
        if field_mapper is not None:
            column = field_mapper(spec.name)
        else:
            column = spec.metadata.get("db") or spec.name.lower()
        if column in wanted:
            by_column[column] = spec.name
    return [by_column.get(_column_name(column)) for column in columns]


def _scalar(cls: type, row: Sequence[Any]) -> Any:
    if len(row) != 1:
        raise ValueError(f"expected 1 column for {cls.__name__}, got {len(row)}")
    value = row[0]
    if isinstance(value, cls):
        return value
    if cls is bytes and isinstance(value, str):
        return value.encode("utf-8")
    return cls(value)


def row_mapper(
    cls: type, field_mapper: Callable[[str], str] | None = None
) -> RowMapper:
    """Return a function ``(columns, row)`` that builds a ``cls`` from one row.

    A class with a ``from_row(row)`` classmethod builds itself; ``str``,
    ``bytes``, ``bool``, ``int`` and ``float`` take the single column; a
    dataclass receives each column in the field it matches.
    """
    from_row = getattr(cls, "from_row", None)
    if callable(from_row):
        return lambda columns, row: from_row(row)

    if isinstance(cls, type) and issubclass(cls, _SCALARS):
        return lambda columns, row: _scalar(cls, row)

    def build(columns: Sequence[Any], row: Sequence[Any]) -> Any:
        names = field_names_by_column(cls, columns, field_mapper)
        if len(row) != len(names):
            raise ValueError(f"row has {len(row)} values for {len(names)} columns")
        kwargs: dict[str, Any] = {}
        for column, name, value in zip(columns, names, row):
            if name is None:
                raise ValueError(
                    f"column {_column_name(column)!r} matches no field of {cls.__name__}"
                )
            kwargs[name] = value
        return cls(**kwargs)

    if not (isinstance(cls, type) and dataclasses.is_dataclass(cls)):
        raise TypeError(f"cls must be a dataclass, but cls is {getattr(cls, '__name__', cls)!s}")
    return build


def entity_with_total_mapper(inner_mapper: RowMapper) -> RowMapper:
    """Return a mapper for rows whose last column is a total count.

    The other columns are mapped with ``inner_mapper``.
    """

    def build(columns: Sequence[Any], row: Sequence[Any]) -> EntityWithTotal[Any]:
        if not row:
            raise ValueError("row has no total column")
        inner = inner_mapper(list(columns)[:-1], list(row)[:-1])
        return EntityWithTotal(inner=inner, total=row[-1])

    return build