"""
DynamoDB client with error translation for the visits table.
"""
import logging
from typing import Any, Dict, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..exceptions import DynamoDBError

logger = logging.getLogger(__name__)


class DynamoDBClient:
    """
    Thin wrapper around the boto3 DynamoDB resource.

    Translates botocore failures into DynamoDBError so callers only deal
    with the store's StorageError taxonomy.
    """

    def __init__(self, region: str = 'us-east-1'):
        """
        Initialize DynamoDB client.

        Args:
            region: AWS region for DynamoDB
        """
        self.region = region
        self.dynamodb = boto3.resource('dynamodb', region_name=region)

    def get_table(self, table_name: str):
        """
        Get DynamoDB table resource.

        Args:
            table_name: Name of the table

        Returns:
            DynamoDB table resource
        """
        return self.dynamodb.Table(table_name)

    def get_item(
        self,
        table_name: str,
        key: Dict[str, Any],
        consistent_read: bool = True
    ) -> Optional[Dict[str, Any]]:
        """
        Get item from DynamoDB table.

        Args:
            table_name: Name of the table
            key: Primary key of the item
            consistent_read: Whether to use consistent read

        Returns:
            Item dict or None if not found

        Raises:
            DynamoDBError: On DynamoDB errors
        """
        try:
            table = self.get_table(table_name)
            response = table.get_item(
                Key=key,
                ConsistentRead=consistent_read
            )
            return response.get('Item')
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Error getting item from {table_name}: {e}")
            raise DynamoDBError(f"Failed to get item: {e}") from e

    def put_item(
        self,
        table_name: str,
        item: Dict[str, Any]
    ) -> None:
        """
        Put item into DynamoDB table, replacing any existing item.

        Args:
            table_name: Name of the table
            item: Item to put

        Raises:
            DynamoDBError: On DynamoDB errors
        """
        try:
            table = self.get_table(table_name)
            table.put_item(Item=item)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Error putting item to {table_name}: {e}")
            raise DynamoDBError(f"Failed to put item: {e}") from e

