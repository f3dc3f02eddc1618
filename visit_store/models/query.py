"""
Query model for listing visits.

Fields are a closed enumeration mapped to typed accessors, so a query can
only reference attributes that exist on Visit.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

from ..exceptions import QuerySpecError
from .visit import Visit


class FieldKind(Enum):
    """Value type of a queryable field."""
    NUMERIC = 'numeric'
    STRING = 'string'


class VisitField(Enum):
    """Queryable visit fields, keyed by their external name."""
    TIMESTAMP = 'timestamp'
    HITS = 'hits'
    ENTITY_REF = 'entityRef'
    NAME = 'name'
    PATHNAME = 'pathname'

    @property
    def kind(self) -> FieldKind:
        return _FIELD_KINDS[self]

    def value_of(self, visit: Visit) -> Union[int, str]:
        """Read this field from a visit."""
        return _FIELD_ACCESSORS[self](visit)

    @classmethod
    def parse(cls, name: Any) -> 'VisitField':
        """
        Resolve an external field name.

        Raises:
            QuerySpecError: If the name is not a queryable field
        """
        if isinstance(name, cls):
            return name
        try:
            return cls(name)
        except ValueError:
            valid = ', '.join(f.value for f in cls)
            raise QuerySpecError(
                f"Unknown field {name!r}, expected one of: {valid}",
                field=str(name)
            ) from None


_FIELD_KINDS: Dict[VisitField, FieldKind] = {
    VisitField.TIMESTAMP: FieldKind.NUMERIC,
    VisitField.HITS: FieldKind.NUMERIC,
    VisitField.ENTITY_REF: FieldKind.STRING,
    VisitField.NAME: FieldKind.STRING,
    VisitField.PATHNAME: FieldKind.STRING,
}

_FIELD_ACCESSORS: Dict[VisitField, Callable[[Visit], Union[int, str]]] = {
    VisitField.TIMESTAMP: lambda visit: visit.timestamp,
    VisitField.HITS: lambda visit: visit.hits,
    VisitField.ENTITY_REF: lambda visit: visit.entity_ref,
    VisitField.NAME: lambda visit: visit.name,
    VisitField.PATHNAME: lambda visit: visit.pathname,
}


class SortDirection(Enum):
    ASC = 'asc'
    DESC = 'desc'


class FilterOperator(Enum):
    GT = '>'
    GTE = '>='
    LT = '<'
    LTE = '<='
    EQ = '=='
    CONTAINS = 'contains'

    @property
    def is_ordinal(self) -> bool:
        return self in (FilterOperator.GT, FilterOperator.GTE, FilterOperator.LT, FilterOperator.LTE)


@dataclass(frozen=True)
class SortKey:
    """One sort key: a field and a direction."""
    field: VisitField
    direction: SortDirection = SortDirection.ASC

    def __post_init__(self):
        object.__setattr__(self, 'field', VisitField.parse(self.field))
        if not isinstance(self.direction, SortDirection):
            try:
                object.__setattr__(self, 'direction', SortDirection(self.direction))
            except ValueError:
                raise QuerySpecError(
                    f"Unknown sort direction {self.direction!r}, expected 'asc' or 'desc'",
                    field=self.field.value
                ) from None


@dataclass(frozen=True)
class FilterPredicate:
    """
    One filter predicate: field, operator and comparison value.

    Validated on construction:
    - ordinal operators (>, >=, <, <=) apply to numeric fields only
    - contains applies to string fields only
    - the value type must match the field type
    """
    field: VisitField
    operator: FilterOperator
    value: Union[int, float, str]

    def __post_init__(self):
        object.__setattr__(self, 'field', VisitField.parse(self.field))
        if not isinstance(self.operator, FilterOperator):
            try:
                object.__setattr__(self, 'operator', FilterOperator(self.operator))
            except ValueError:
                valid = ', '.join(op.value for op in FilterOperator)
                raise QuerySpecError(
                    f"Unknown operator {self.operator!r}, expected one of: {valid}",
                    field=self.field.value
                ) from None

        kind = self.field.kind
        if self.operator.is_ordinal and kind is not FieldKind.NUMERIC:
            raise QuerySpecError(
                f"Operator {self.operator.value!r} requires a numeric field, "
                f"{self.field.value!r} is a string field",
                field=self.field.value
            )
        if self.operator is FilterOperator.CONTAINS and kind is not FieldKind.STRING:
            raise QuerySpecError(
                f"Operator 'contains' requires a string field, "
                f"{self.field.value!r} is a numeric field",
                field=self.field.value
            )

        if kind is FieldKind.NUMERIC:
            # bool subclasses int but is not a numeric value here
            if isinstance(self.value, bool) or not isinstance(self.value, (int, float)):
                raise QuerySpecError(
                    f"Field {self.field.value!r} expects a number, got {type(self.value).__name__}",
                    field=self.field.value
                )
        elif not isinstance(self.value, str):
            raise QuerySpecError(
                f"Field {self.field.value!r} expects a string, got {type(self.value).__name__}",
                field=self.field.value
            )


@dataclass(frozen=True)
class VisitsQuery:
    """
    Filter predicates (AND-combined) and sort keys in priority order.

    An empty order_by means the default recently-viewed order.
    """
    order_by: Sequence[SortKey] = field(default_factory=tuple)
    filter_by: Sequence[FilterPredicate] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, 'order_by', tuple(self.order_by))
        object.__setattr__(self, 'filter_by', tuple(self.filter_by))

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> 'VisitsQuery':
        """
        Parse the external query shape.

        Example:
            >>> VisitsQuery.from_dict({
            ...     'orderBy': [{'field': 'name', 'direction': 'asc'}],
            ...     'filterBy': [{'field': 'name', 'operator': 'contains', 'value': 'Odd'}],
            ... })

        Raises:
            QuerySpecError: If the shape or any entry is invalid
        """
        if not data:
            return cls()
        if not isinstance(data, Mapping):
            raise QuerySpecError(f"Query must be a mapping, got {type(data).__name__}")

        unknown = set(data) - {'orderBy', 'filterBy'}
        if unknown:
            raise QuerySpecError(f"Unknown query keys: {', '.join(sorted(unknown))}")

        order_by = [
            SortKey(
                field=_required(entry, 'field'),
                direction=entry.get('direction', SortDirection.ASC.value)
            )
            for entry in _entries(data, 'orderBy')
        ]
        filter_by = [
            FilterPredicate(
                field=_required(entry, 'field'),
                operator=_required(entry, 'operator'),
                value=_required(entry, 'value')
            )
            for entry in _entries(data, 'filterBy')
        ]
        return cls(order_by=order_by, filter_by=filter_by)


def _entries(data: Mapping[str, Any], key: str) -> List[Mapping[str, Any]]:
    entries = data.get(key) or []
    if isinstance(entries, (str, bytes)) or not isinstance(entries, Sequence):
        raise QuerySpecError(f"{key} must be a list")
    for entry in entries:
        if not isinstance(entry, Mapping):
            raise QuerySpecError(f"{key} entries must be mappings, got {type(entry).__name__}")
    return list(entries)


def _required(entry: Mapping[str, Any], key: str) -> Any:
    if key not in entry:
        raise QuerySpecError(f"Query entry is missing {key!r}", field=entry.get('field'))
    return entry[key]
