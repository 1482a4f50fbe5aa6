"""Field-merge helpers used by the enricher managers.

These helpers know nothing about documentation fields. Each one takes the
current value of a field and a zero-argument *compute* callable that asks an
enricher for a fresh value, and returns the value to store:

* :func:`fill_if_empty` -- keep a populated value, otherwise compute. The
  enricher is not called at all when the value is already populated.
* :func:`union_or_fill` -- compute even when populated and keep the distinct
  union, existing elements first.
* :func:`apply_strategy` -- pick one of the two according to the active
  :class:`~introspec.models.EnrichmentStrategy`. Used for collections only;
  scalars always go through :func:`fill_if_empty`.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Optional, TypeVar

from introspec.models import DocumenterSettings
from introspec.settings import should_union

T = TypeVar("T")


def is_null_or_empty(value: Any) -> bool:  # noqa: ANN401
    """Return ``True`` for ``None``, empty strings and empty collections.

    ``False`` and ``0`` are values, not emptiness.
    """
    if value is None:
        return True
    if isinstance(value, (str, list, tuple, set, frozenset, dict)):
        return len(value) == 0
    return False


def distinct(values: Optional[Iterable[T]]) -> Optional[list[T]]:
    """Return *values* without duplicates, keeping first occurrences in order.

    Uses equality rather than hashing so unhashable models can be compared.
    ``None`` passes through unchanged.
    """
    if values is None:
        return None
    result: list[T] = []
    for value in values:
        if value not in result:
            result.append(value)
    return result


def fill_if_empty(existing: Optional[T], compute: Callable[[], Optional[T]]) -> Optional[T]:
    """Return *existing* if populated, otherwise the result of *compute*."""
    if not is_null_or_empty(existing):
        return existing
    return compute()


def union_or_fill(
    existing: Optional[list[T]], compute: Callable[[], Optional[Iterable[T]]]
) -> Optional[list[T]]:
    """Return the distinct union of *existing* and the result of *compute*.

    Behaves as :func:`fill_if_empty` when *existing* is empty. Existing
    elements are always retained, even when *compute* yields nothing.
    """
    if is_null_or_empty(existing):
        return distinct(compute())

    computed = compute()
    if is_null_or_empty(computed):
        return distinct(existing)

    return distinct([*existing, *computed])


def apply_strategy(
    existing: Optional[list[T]],
    compute: Callable[[], Optional[Iterable[T]]],
    settings: Optional[DocumenterSettings] = None,
) -> Optional[list[T]]:
    """Fill or merge a collection field according to the collection strategy.

    Args:
        existing: Current field value.
        compute: Callable returning freshly enriched values.
        settings: Explicit settings; the active settings are used when ``None``.
    """
    if should_union(settings):
        return union_or_fill(existing, compute)
    return distinct(fill_if_empty(existing, compute))
