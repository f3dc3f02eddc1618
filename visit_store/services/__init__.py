"""
Services for visit tracking and ownership lookups.
"""
from .query_engine import filter_visits, sort_visits, run_query
from .visits_store import VisitsStore
from .catalog_client import CatalogClient
from .ownership_service import OwnershipService, OwnershipCount
from .factory import build_visits_backend, create_visits_store, create_ownership_service

__all__ = [
    'filter_visits',
    'sort_visits',
    'run_query',
    'VisitsStore',
    'CatalogClient',
    'OwnershipService',
    'OwnershipCount',
    'build_visits_backend',
    'create_visits_store',
    'create_ownership_service',
]
