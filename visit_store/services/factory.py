"""
Wiring of settings into backends and services.
"""
import logging
from typing import Optional

from ..config.settings import BACKEND_DYNAMODB, BACKEND_FILE, Settings, get_settings
from ..data_access.dynamodb_client import DynamoDBClient
from ..data_access.dynamodb_visits_backend import DynamoDBVisitsBackend
from ..data_access.file_visits_backend import LocalFileVisitsBackend
from ..data_access.visits_backend import InMemoryVisitsBackend, VisitsBackend
from .catalog_client import CatalogClient
from .ownership_service import OwnershipService
from .visits_store import VisitsStore

logger = logging.getLogger(__name__)


def build_visits_backend(
    user_entity_ref: str,
    settings: Optional[Settings] = None,
    dynamodb_client: Optional[DynamoDBClient] = None
) -> VisitsBackend:
    """
    Create the persistence backend selected by VISITS_BACKEND.

    Args:
        user_entity_ref: Entity reference of the user owning the visits
        settings: Settings, defaults to the process-wide instance
        dynamodb_client: Optional DynamoDB client for the dynamodb backend

    Returns:
        Configured backend
    """
    settings = settings or get_settings()

    if settings.visits_backend == BACKEND_DYNAMODB:
        backend: VisitsBackend = DynamoDBVisitsBackend(
            table_name=settings.visits_table_name,
            user_entity_ref=user_entity_ref,
            dynamodb_client=dynamodb_client or DynamoDBClient(region=settings.aws_region)
        )
    elif settings.visits_backend == BACKEND_FILE:
        backend = LocalFileVisitsBackend(settings.visits_file_path)
    else:
        backend = InMemoryVisitsBackend()

    logger.info(f"Using {settings.visits_backend} visits backend for {user_entity_ref}")
    return backend


def create_visits_store(
    user_entity_ref: str,
    settings: Optional[Settings] = None,
    backend: Optional[VisitsBackend] = None
) -> VisitsStore:
    """
    Create a visits store for a user.

    Args:
        user_entity_ref: Entity reference of the user owning the visits
        settings: Settings, defaults to the process-wide instance
        backend: Optional backend overriding VISITS_BACKEND

    Returns:
        VisitsStore limited to VISITS_LIMIT visits, logging at LOG_LEVEL
    """
    settings = settings or get_settings()
    return VisitsStore(
        backend=backend or build_visits_backend(user_entity_ref, settings),
        limit=settings.visits_limit,
        user_entity_ref=user_entity_ref,
        log_level=settings.log_level
    )


def create_ownership_service(settings: Optional[Settings] = None) -> OwnershipService:
    """
    Create an ownership service backed by the configured catalog.

    Args:
        settings: Settings, defaults to the process-wide instance

    Returns:
        OwnershipService
    """
    settings = settings or get_settings()
    client = CatalogClient(
        base_url=settings.catalog_base_url,
        token=settings.catalog_token,
        timeout=settings.catalog_timeout_seconds
    )
    return OwnershipService(client)
