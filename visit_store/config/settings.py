"""
Configuration settings for the visit store.

Loads configuration from environment variables with sensible defaults.
"""

import os
from typing import Optional

from .table_names import get_table_name

BACKEND_MEMORY = 'memory'
BACKEND_FILE = 'file'
BACKEND_DYNAMODB = 'dynamodb'

DEFAULT_VISITS_LIMIT = 100


class Settings:
    """
    Configuration settings for visit persistence and catalog access.

    All settings are loaded from environment variables with defaults.
    """

    def __init__(self):
        """Initialize settings from environment variables."""
        # Store Configuration
        self.visits_limit: int = int(
            os.getenv('VISITS_LIMIT', str(DEFAULT_VISITS_LIMIT))
        )
        self.visits_backend: str = os.getenv('VISITS_BACKEND', BACKEND_MEMORY).lower()
        self.visits_file_path: str = os.getenv('VISITS_FILE_PATH', 'visits.json')

        # AWS Configuration
        self.aws_region: str = os.getenv('AWS_REGION', 'us-east-1')
        self.visits_table_name: str = get_table_name('VISITS_TABLE_NAME')

        # Catalog Configuration
        self.catalog_base_url: str = os.getenv(
            'CATALOG_BASE_URL', 'http://localhost:7007/api/catalog'
        )
        self.catalog_token: Optional[str] = os.getenv('CATALOG_TOKEN') or None
        self.catalog_timeout_seconds: float = float(
            os.getenv('CATALOG_TIMEOUT_SECONDS', '10')
        )

        # Logging Configuration
        self.log_level: str = os.getenv('LOG_LEVEL', 'INFO').upper()

        self._validate()

    def _validate(self):
        """Validate configuration values."""
        if self.visits_limit < 1:
            raise ValueError(
                f"VISITS_LIMIT must be a positive integer, got {self.visits_limit}"
            )

        valid_backends = {BACKEND_MEMORY, BACKEND_FILE, BACKEND_DYNAMODB}
        if self.visits_backend not in valid_backends:
            raise ValueError(
                f"Invalid VISITS_BACKEND: {self.visits_backend}. "
                f"Must be one of {sorted(valid_backends)}"
            )

        if self.visits_backend == BACKEND_FILE and not self.visits_file_path:
            raise ValueError("VISITS_FILE_PATH is required for the file backend")

        if self.visits_backend == BACKEND_DYNAMODB and not self.visits_table_name:
            raise ValueError("VISITS_TABLE_NAME is required for the dynamodb backend")

        if self.catalog_timeout_seconds <= 0:
            raise ValueError(
                f"CATALOG_TIMEOUT_SECONDS must be positive, got {self.catalog_timeout_seconds}"
            )

        valid_log_levels = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}
        if self.log_level not in valid_log_levels:
            raise ValueError(
                f"Invalid LOG_LEVEL: {self.log_level}. "
                f"Must be one of {sorted(valid_log_levels)}"
            )


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get the process-wide settings instance.

    Returns:
        Settings loaded on first use
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """
    Reload settings from the current environment.

    Returns:
        Freshly loaded Settings
    """
    global _settings
    _settings = Settings()
    return _settings
