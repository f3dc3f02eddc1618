"""
DynamoDB table name constants.

This module provides centralized table name constants so every backend
and deployment resolves the same table.
"""
import os
from typing import Optional

VISITS_TABLE_NAME = 'Visits'

# Table name mapping for environment variable overrides
TABLE_NAME_ENV_VARS = {
    'VISITS_TABLE_NAME': VISITS_TABLE_NAME,
}


def get_table_name(table_key: str, default: Optional[str] = None) -> str:
    """
    Get table name from environment variable or use default constant.

    Supports both the ``_TABLE_NAME`` naming convention and the legacy
    ``_TABLE`` suffix.

    Args:
        table_key: Environment variable key (e.g., 'VISITS_TABLE_NAME')
        default: Default table name if environment variable not set

    Returns:
        Table name from environment or default

    Example:
        >>> os.environ['VISITS_TABLE_NAME'] = 'Visits-Dev'
        >>> get_table_name('VISITS_TABLE_NAME')
        'Visits-Dev'
    """
    if default is None:
        default = TABLE_NAME_ENV_VARS.get(table_key, '')

    value = os.getenv(table_key)
    if value:
        return value

    legacy_key = table_key.replace('_TABLE_NAME', '_TABLE')
    value = os.getenv(legacy_key)
    if value:
        return value

    return default
