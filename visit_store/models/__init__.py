"""
Data models for visits and visit queries.
"""
from .visit import Visit, VisitInput
from .query import (
    FieldKind,
    VisitField,
    SortDirection,
    FilterOperator,
    SortKey,
    FilterPredicate,
    VisitsQuery,
)
from .entity_ref import (
    CompoundEntityRef,
    stringify_entity_ref,
    parse_entity_ref,
    entity_ref_from_pathname,
    visit_for_pathname,
)

__all__ = [
    'Visit',
    'VisitInput',
    'FieldKind',
    'VisitField',
    'SortDirection',
    'FilterOperator',
    'SortKey',
    'FilterPredicate',
    'VisitsQuery',
    'CompoundEntityRef',
    'stringify_entity_ref',
    'parse_entity_ref',
    'entity_ref_from_pathname',
    'visit_for_pathname',
]
