"""
Configuration module for visit persistence and catalog access.

Provides environment variable loading and table name resolution.
"""

from .settings import (
    Settings,
    get_settings,
    reload_settings,
    BACKEND_MEMORY,
    BACKEND_FILE,
    BACKEND_DYNAMODB,
    DEFAULT_VISITS_LIMIT,
)
from .table_names import VISITS_TABLE_NAME, get_table_name

__all__ = [
    'Settings',
    'get_settings',
    'reload_settings',
    'BACKEND_MEMORY',
    'BACKEND_FILE',
    'BACKEND_DYNAMODB',
    'DEFAULT_VISITS_LIMIT',
    'VISITS_TABLE_NAME',
    'get_table_name',
]
