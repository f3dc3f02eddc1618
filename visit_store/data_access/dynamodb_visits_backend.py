"""
DynamoDB persistence backend for visits.

Each user's working set is stored as a single item keyed by the user's
entity reference, so one put_item replaces the whole set atomically.
"""
import time
import logging
from typing import Any, Dict, List, Optional, Sequence

from .dynamodb_client import DynamoDBClient
from .visits_backend import VisitsBackend
from ..exceptions import StorageError
from ..models.visit import Visit

logger = logging.getLogger(__name__)

PARTITION_KEY = 'userEntityRef'


class DynamoDBVisitsBackend(VisitsBackend):
    """
    Backend storing visits in a DynamoDB table.

    Item layout:
        userEntityRef: partition key
        visits: list of serialized visits, most recently touched first
        updatedAt: epoch milliseconds of the last write
    """

    def __init__(
        self,
        table_name: str,
        user_entity_ref: str,
        dynamodb_client: Optional[DynamoDBClient] = None
    ):
        """
        Initialize DynamoDB visits backend.

        Args:
            table_name: Name of the Visits table
            user_entity_ref: Entity reference of the user owning the visits
            dynamodb_client: Optional DynamoDB client instance
        """
        if not user_entity_ref:
            raise ValueError("user_entity_ref is required")
        self.table_name = table_name
        self.user_entity_ref = user_entity_ref
        self.client = dynamodb_client or DynamoDBClient()

    def _key(self) -> Dict[str, Any]:
        return {PARTITION_KEY: self.user_entity_ref}

    async def retrieve_all(self) -> List[Visit]:
        """
        Read the user's visits.

        Raises:
            DynamoDBError: On DynamoDB errors
            StorageError: If the stored item holds malformed visits
        """
        item = self.client.get_item(
            table_name=self.table_name,
            key=self._key()
        )
        if not item:
            return []

        try:
            return [Visit.from_dict(data) for data in item.get('visits', [])]
        except ValueError as e:
            logger.error(
                f"Malformed visits stored for {self.user_entity_ref} in {self.table_name}: {e}"
            )
            raise StorageError(f"Malformed visits in {self.table_name}: {e}") from e

    async def persist_all(self, visits: Sequence[Visit]) -> None:
        """
        Replace the user's visits.

        Raises:
            DynamoDBError: On DynamoDB errors
        """
        item = {
            PARTITION_KEY: self.user_entity_ref,
            'visits': [visit.to_dict() for visit in visits],
            'updatedAt': int(time.time() * 1000)
        }
        self.client.put_item(table_name=self.table_name, item=item)
        logger.debug(
            f"Persisted {len(item['visits'])} visits for {self.user_entity_ref}"
        )
