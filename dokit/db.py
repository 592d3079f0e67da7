"""Query and execute helpers for DB-API connections.

Rows are turned into objects by a :class:`Finder`, which pairs a query with
a row mapper such as :func:`dokit.columns.row_mapper`.
"""

from __future__ import annotations

from contextlib import closing
from typing import Any, Callable, Iterable, Iterator, Sequence

from dokit.columns import row_mapper

__all__ = [
    "Finder",
    "find_func_helper",
    "find_list",
    "find_first",
    "batch",
    "find_with_batch",
    "exec_with_batch",
    "handle_result",
    "wrap_tx",
    "wrap_tx_find_all",
]

RowMapper = Callable[[Sequence[Any], Sequence[Any]], Any]


class Finder:
    """A query with its arguments and the mapper that builds one object per row."""

    def __init__(
        self,
        sql: str,
        args: Sequence[Any] | dict[str, Any] = (),
        mapper: RowMapper | None = None,
    ) -> None:
        self.sql = sql
        self.args = args
        self.mapper = mapper

    def __repr__(self) -> str:
        return f"Finder(sql={self.sql!r}, args={self.args!r})"

    def query(self) -> tuple[str, Sequence[Any] | dict[str, Any]]:
        """Return the query text and its arguments."""
        return self.sql, self.args

    def map_row(self, columns: Sequence[Any], row: Sequence[Any]) -> Any:
        """Build the object for one row; ``columns`` is the cursor description."""
        if self.mapper is None:
            raise TypeError(f"{self!r} has no row mapper")
        return self.mapper(columns, row)


def find_func_helper(
    cls: type,
    query: str,
    args: Sequence[Any] | dict[str, Any] = (),
    field_mapper: Callable[[str], str] | None = None,
) -> Finder:
    """Return a :class:`Finder` that maps each row onto a ``cls``."""
    return Finder(query, args, row_mapper(cls, field_mapper))


def _query_of(queryer: Any) -> tuple[str, Any]:
    query = getattr(queryer, "query", None)
    if callable(query):
        return query()
    sql, args = queryer
    return sql, args


def _iter_rows(conn: Any, finder: Finder) -> Iterator[Any]:
    sql, args = finder.query()
    with closing(conn.cursor()) as cursor:
        cursor.execute(sql, args)
        columns = cursor.description or ()
        for row in cursor:
            yield finder.map_row(columns, row)


def find_list(conn: Any, finder: Finder) -> list[Any]:
    """Run the finder's query and return one object per row."""
    return list(_iter_rows(conn, finder))


def find_first(conn: Any, finder: Finder) -> Any:
    """Return the object built from the first row, or ``None`` if there is none."""
    return next(iter(find_list(conn, finder)), None)


def _call_handler(handler: Callable[[list[Any]], Any], items: list[Any]) -> None:
    try:
        handler(items)
    except Exception as exc:
        raise RuntimeError(f"batch handle failed {exc}") from exc


def batch(
    conn: Any,
    finder: Finder,
    batch_num: int,
    handler: Callable[[list[Any]], Any],
) -> None:
    """Pass the query's objects to ``handler`` in lists of ``batch_num``.

    The last list may be shorter; if ``batch_num`` is not positive every
    object goes to ``handler`` in one list. A failing handler stops the run
    with :class:`RuntimeError`.
    """
    current: list[Any] = []
    for item in _iter_rows(conn, finder):
        current.append(item)
        if batch_num > 0 and len(current) >= batch_num:
            _call_handler(handler, current)
            current = []
    if current:
        _call_handler(handler, current)


def find_with_batch(conn: Any, finders: Any) -> list[Any]:
    """Run several finders in turn and return all their objects in order.

    ``finders`` is an iterable of finders, or an object whose ``batch()``
    method returns one.
    """
    split = getattr(finders, "batch", None)
    sequence: Iterable[Finder] = split() if callable(split) else finders
    return [item for finder in sequence for item in _iter_rows(conn, finder)]


def exec_with_batch(conn: Any, queries: Iterable[Any]) -> tuple[int, int]:
    """Execute each query and return (total rows affected, last insert id).

    A query is an object with a ``query()`` method or a ``(sql, args)`` pair.
    """
    affected = 0
    last_id = 0
    for queryer in queries:
        sql, args = _query_of(queryer)
        with closing(conn.cursor()) as cursor:
            cursor.execute(sql, args)
            last_id = cursor.lastrowid or 0
            if cursor.rowcount > 0:
                affected += cursor.rowcount
    return affected, last_id


def handle_result(cursor: Any) -> tuple[int, int]:
    """Return (last insert id, rows affected) of an executed cursor.

    The id is read only when a row was affected, and is 0 otherwise.
    """
    affected = cursor.rowcount
    if affected is None or affected <= 0:
        return 0, max(affected or 0, 0)
    return cursor.lastrowid or 0, affected


def wrap_tx(conn: Any, func: Callable[[Any], Any]) -> Any:
    """Run ``func(conn)`` in a transaction and return its result.

    The transaction is committed if ``func`` returns and rolled back if it
    raises; the exception then propagates.
    """
    try:
        result = func(conn)
    except BaseException:
        conn.rollback()
        raise
    conn.commit()
    return result


def wrap_tx_find_all(conn: Any, finder: Finder) -> list[Any]:
    """Run :func:`find_list` inside :func:`wrap_tx`."""
    return wrap_tx(conn, lambda tx: find_list(tx, finder))