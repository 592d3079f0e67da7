"""Helpers for turning sequences into dictionaries and joining sequences."""

from __future__ import annotations

from typing import Any, Callable, Hashable, Iterable, Mapping, TypeVar

__all__ = [
    "key_value_group_by",
    "key_value_by",
    "key_by",
    "keys",
    "values",
    "merge_key_value",
    "map_from",
    "map_to",
    "nested_join",
    "hash_join",
]

K = TypeVar("K", bound=Hashable)
E = TypeVar("E")
V = TypeVar("V")
L = TypeVar("L")
R = TypeVar("R")
T = TypeVar("T")


def key_value_group_by(
    collection: Iterable[E], iteratee: Callable[[E], tuple[K, V]]
) -> dict[K, list[V]]:
    """Group values by key, both taken from each item by ``iteratee``."""
    result: dict[K, list[V]] = {}
    for item in collection:
        key, value = iteratee(item)
        result.setdefault(key, []).append(value)
    return result


def key_value_by(
    collection: Iterable[E], iteratee: Callable[[E], tuple[K, V]]
) -> dict[K, V]:
    """Build a dictionary from the key and value ``iteratee`` gives each item."""
    return dict(iteratee(item) for item in collection)


def key_by(collection: Iterable[E], iteratee: Callable[[E], K]) -> dict[K, E]:
    """Build a dictionary of items keyed by ``iteratee``; later items win."""
    return {iteratee(item): item for item in collection}


def keys(mapping: Mapping[K, Any]) -> list[K]:
    """Return the keys of ``mapping`` as a list."""
    return list(mapping)


def values(mapping: Mapping[Any, V]) -> list[V]:
    """Return the values of ``mapping`` as a list."""
    return list(mapping.values())


def merge_key_value(m1: dict[K, V], m2: Mapping[K, V]) -> dict[K, V]:
    """Merge ``m2`` into ``m1`` in place, overriding shared keys, and return ``m1``."""
    m1.update(m2)
    return m1


def map_from(items: Iterable[T], factory: Callable[[T], R]) -> list[R]:
    """Build a new object from each item with ``factory``."""
    return [factory(item) for item in items]


def map_to(items: Iterable[Any]) -> list[Any]:
    """Convert each item by calling its ``to()`` method."""
    return [item.to() for item in items]


def nested_join(
    left: Iterable[L],
    right: Iterable[R],
    match: Callable[[L, R], bool],
    mapper: Callable[[L, R], T],
) -> list[T]:
    """Join like a nested loop: map every matching (left, right) pair."""
    right_items = list(right)
    return [
        mapper(left_item, right_item)
        for left_item in left
        for right_item in right_items
        if match(left_item, right_item)
    ]


def hash_join(
    left: Iterable[L],
    right: Iterable[R],
    left_key: Callable[[L], K],
    right_key: Callable[[R], K],
    mapper: Callable[[L, R | None], T],
) -> list[T]:
    """Join like a hash join: one result per left item.

    Right items are indexed by key (the last one for a key wins); a left item
    with no matching right item is mapped with ``None``.
    """
    index = key_by(right, right_key)
    return [mapper(item, index.get(left_key(item))) for item in left]