"""
DynamoDB-backed key-value store for the FitnessMedia application.

Each store key is one item in the table: a string partition key named
"key" and a binary attribute named "value".

Classes:
    DynamoDBStore: KeyValueStore implementation on a DynamoDB table
"""

import logging
import os
from typing import Optional

import boto3
from boto3.dynamodb.types import Binary
from botocore.exceptions import BotoCoreError, ClientError, NoCredentialsError

from ..exceptions import StoreError, StoreInitializationError
from .persistence import KeyValueStore

logger = logging.getLogger(__name__)


class DynamoDBStore(KeyValueStore):
    """
    Key-value store on a DynamoDB table.

    Attributes:
        table_name: Name of the DynamoDB table
        dynamodb: Boto3 DynamoDB resource
        table: DynamoDB table resource

    Example:
        >>> store = DynamoDBStore("fitnessmedia-store")
        >>> store.set("boxes", b"[]")
        >>> store.get("boxes")
        b'[]'
    """

    def __init__(self, table_name: Optional[str] = None, region_name: Optional[str] = None):
        """
        Initialize the DynamoDB store.

        Args:
            table_name: Optional table name override, uses FITNESSMEDIA_TABLE if not provided
            region_name: Optional AWS region, boto3's default resolution if omitted

        Raises:
            StoreInitializationError: If the table name is missing, the
                credentials are not configured or the table does not exist
        """
        self.table_name = table_name or os.getenv("FITNESSMEDIA_TABLE")

        if not self.table_name:
            raise StoreInitializationError(
                "Table name must be provided either as parameter or FITNESSMEDIA_TABLE environment variable"
            )

        try:
            self.dynamodb = boto3.resource("dynamodb", region_name=region_name)
            self.table = self.dynamodb.Table(self.table_name)

            # Verify table exists by getting its description
            self.table.load()

        except NoCredentialsError as e:
            raise StoreInitializationError(
                "AWS credentials not found. Please configure AWS credentials."
            ) from e
        except ClientError as e:
            if e.response["Error"]["Code"] == "ResourceNotFoundException":
                raise StoreInitializationError(
                    f"DynamoDB table '{self.table_name}' not found"
                ) from e
            raise StoreInitializationError(f"Cannot open DynamoDB table '{self.table_name}': {e}") from e
        except BotoCoreError as e:
            raise StoreInitializationError(f"Cannot open DynamoDB table '{self.table_name}': {e}") from e

        logger.info("Using DynamoDB table '%s'", self.table_name)

    def set(self, key: str, value: bytes) -> None:
        try:
            self.table.put_item(Item={"key": key, "value": bytes(value)})
        except (ClientError, BotoCoreError) as e:
            raise StoreError(f"Error writing key '{key}' to DynamoDB: {e}") from e

    def get(self, key: str) -> Optional[bytes]:
        try:
            response = self.table.get_item(Key={"key": key})
        except (ClientError, BotoCoreError) as e:
            raise StoreError(f"Error reading key '{key}' from DynamoDB: {e}") from e

        item = response.get("Item")
        if item is None:
            return None

        value = item.get("value")
        if isinstance(value, Binary):
            return value.value
        if isinstance(value, (bytes, bytearray)):
            return bytes(value)

        logger.warning("DynamoDB item '%s' has a non-binary value", key)
        return None
