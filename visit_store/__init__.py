"""
Visit store: recently viewed resources with dedup, capacity eviction and
sortable, filterable listing.
"""
from .exceptions import (
    VisitStoreError,
    StorageError,
    DynamoDBError,
    QuerySpecError,
    CatalogApiError,
)
from .models import Visit, VisitInput, VisitsQuery, SortKey, FilterPredicate
from .data_access import VisitsBackend, InMemoryVisitsBackend
from .services import VisitsStore, create_visits_store

__version__ = '1.0.0'

__all__ = [
    'VisitStoreError',
    'StorageError',
    'DynamoDBError',
    'QuerySpecError',
    'CatalogApiError',
    'Visit',
    'VisitInput',
    'VisitsQuery',
    'SortKey',
    'FilterPredicate',
    'VisitsBackend',
    'InMemoryVisitsBackend',
    'VisitsStore',
    'create_visits_store',
]
