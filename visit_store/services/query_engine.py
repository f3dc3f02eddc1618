"""
Query engine for visits.

Pure functions that filter and order a sequence of visits according to a
VisitsQuery. No I/O and no state.
"""

from typing import Callable, Dict, Iterable, List, Sequence, Union

from ..models.query import (
    FilterOperator,
    FilterPredicate,
    SortDirection,
    SortKey,
    VisitField,
    VisitsQuery,
)
from ..models.visit import Visit

# Recently-viewed order used when a query has no sort keys
DEFAULT_ORDER: Sequence[SortKey] = (
    SortKey(field=VisitField.TIMESTAMP, direction=SortDirection.DESC),
)

_Value = Union[int, float, str]

_OPERATORS: Dict[FilterOperator, Callable[[_Value, _Value], bool]] = {
    FilterOperator.GT: lambda actual, expected: actual > expected,
    FilterOperator.GTE: lambda actual, expected: actual >= expected,
    FilterOperator.LT: lambda actual, expected: actual < expected,
    FilterOperator.LTE: lambda actual, expected: actual <= expected,
    FilterOperator.EQ: lambda actual, expected: actual == expected,
    FilterOperator.CONTAINS: lambda actual, expected: expected in actual,
}


def matches(visit: Visit, predicate: FilterPredicate) -> bool:
    """Evaluate one predicate against a visit."""
    actual = predicate.field.value_of(visit)
    return _OPERATORS[predicate.operator](actual, predicate.value)


def filter_visits(
    visits: Iterable[Visit],
    predicates: Sequence[FilterPredicate]
) -> List[Visit]:
    """
    Keep the visits that satisfy every predicate.

    Args:
        visits: Visits to filter
        predicates: Predicates combined with logical AND

    Returns:
        Matching visits in their input order
    """
    return [
        visit for visit in visits
        if all(matches(visit, predicate) for predicate in predicates)
    ]


def sort_visits(
    visits: Iterable[Visit],
    sort_keys: Sequence[SortKey]
) -> List[Visit]:
    """
    Stable multi-key sort.

    The first key is the primary key; later keys only order visits that
    compare equal under every earlier key. Visits equal under all keys
    keep their input order.

    Args:
        visits: Visits to sort
        sort_keys: Sort keys in priority order

    Returns:
        New sorted list
    """
    ordered = list(visits)
    # list.sort is stable, so sorting by the least significant key first
    # leaves ties of each more significant key ordered by the keys after it
    for sort_key in reversed(sort_keys):
        ordered.sort(
            key=sort_key.field.value_of,
            reverse=sort_key.direction is SortDirection.DESC
        )
    return ordered


def run_query(visits: Iterable[Visit], query: VisitsQuery) -> List[Visit]:
    """
    Filter then sort visits.

    Args:
        visits: Working set snapshot
        query: Filter predicates and sort keys; no sort keys means
            timestamp descending

    Returns:
        Matching visits in query order
    """
    matched = filter_visits(visits, query.filter_by)
    return sort_visits(matched, query.order_by or DEFAULT_ORDER)
