"""
Thin wrapper over the boto3 DynamoDB client.

Every method is a single round trip. Store-side failures (``ClientError``)
are logged and collapse to ``None``/``False``/``[]``; anything else
(parameter validation, connection errors) propagates.
"""

import logging
from typing import Any, Dict, List, Optional

from botocore.exceptions import ClientError, WaiterError

from webdav_dynamo.aws.utils import get_dynamodb_client
from webdav_dynamo.config.settings import Settings, get_settings
from webdav_dynamo.db import attribute_keys as keys
from webdav_dynamo.db.mapper import Item, entity_to_item
from webdav_dynamo.models import Entity

try:
    from mypy_boto3_dynamodb import DynamoDBClient
except ImportError:
    ...

logger = logging.getLogger(__name__)

WAITER_CONFIG = {'Delay': 2, 'MaxAttempts': 30}


def _error_code(error: ClientError) -> str:
    return error.response.get('Error', {}).get('Code', 'Unknown')


def build_filter_expression(conditions: Dict[str, Dict[str, Any]]) -> Dict[str, Any]:
    """Turn {attribute: attribute_value} into an AND-ed equality FilterExpression.

    Placeholders are used for names and values so reserved words are safe.
    An empty condition set yields no filter at all.
    """
    if not conditions:
        return {}

    clauses = []
    names = {}
    values = {}
    for index, (attribute, value) in enumerate(conditions.items()):
        names[f"#c{index}"] = attribute
        values[f":c{index}"] = value
        clauses.append(f"#c{index} = :c{index}")

    return {
        'FilterExpression': " AND ".join(clauses),
        'ExpressionAttributeNames': names,
        'ExpressionAttributeValues': values,
    }


def build_update_expression(updates: Dict[str, Dict[str, Any]]) -> Dict[str, Any]:
    """Turn {attribute: attribute_value} into a SET UpdateExpression."""
    assignments = []
    names = {}
    values = {}
    for index, (attribute, value) in enumerate(updates.items()):
        names[f"#u{index}"] = attribute
        values[f":u{index}"] = value
        assignments.append(f"#u{index} = :u{index}")

    return {
        'UpdateExpression': "SET " + ", ".join(assignments),
        'ExpressionAttributeNames': names,
        'ExpressionAttributeValues': values,
    }


class DynamoDBService:
    """Item and table operations against a single DynamoDB endpoint"""

    def __init__(
        self,
        client: Optional["DynamoDBClient"] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or get_settings()
        self.client = client if client is not None else get_dynamodb_client()

    # ==========================================
    # Table lifecycle
    # ==========================================

    def is_table_exist(self, table_name: str) -> bool:
        try:
            self.client.describe_table(TableName=table_name)
            return True
        except self.client.exceptions.ResourceNotFoundException:
            return False

    def create_table(self, table_name: str) -> bool:
        """Create the entity table and wait until it is usable."""
        try:
            self.client.create_table(
                TableName=table_name,
                KeySchema=[{'AttributeName': keys.UUID, 'KeyType': 'HASH'}],
                AttributeDefinitions=[{'AttributeName': keys.UUID, 'AttributeType': 'S'}],
                ProvisionedThroughput=self.settings.provisioned_throughput,
            )
            self.client.get_waiter('table_exists').wait(
                TableName=table_name, WaiterConfig=WAITER_CONFIG
            )
            logger.info(f"Created DynamoDB table: {table_name}")
            return True
        except ClientError as e:
            logger.error(f"Error creating table {table_name}: {_error_code(e)} {e}")
            return False
        except WaiterError as e:
            logger.error(f"Table {table_name} did not become active: {e}")
            return False

    def delete_table(self, table_name: str) -> bool:
        try:
            self.client.delete_table(TableName=table_name)
            self.client.get_waiter('table_not_exists').wait(
                TableName=table_name, WaiterConfig=WAITER_CONFIG
            )
            logger.info(f"Deleted DynamoDB table: {table_name}")
            return True
        except ClientError as e:
            logger.error(f"Error deleting table {table_name}: {_error_code(e)} {e}")
            return False
        except WaiterError as e:
            logger.error(f"Table {table_name} was not removed: {e}")
            return False

    # ==========================================
    # Item operations
    # ==========================================

    def new_item(self, entity: Entity) -> Item:
        return entity_to_item(entity)

    def put_item(self, table_name: str, item: Item) -> Optional[Dict[str, Any]]:
        try:
            response = self.client.put_item(TableName=table_name, Item=item)
            logger.info(f"Put item {item[keys.UUID]['S']} into {table_name}")
            return response
        except ClientError as e:
            logger.error(f"Error putting item into {table_name}: {_error_code(e)} {e}")
            return None

    def get_item(self, table_name: str, key: Item) -> Optional[Item]:
        """Point lookup by primary key."""
        try:
            response = self.client.get_item(TableName=table_name, Key=key)
        except ClientError as e:
            logger.error(f"Error getting item from {table_name}: {_error_code(e)} {e}")
            return None

        item = response.get('Item')
        logger.debug(f"get_item {key} on {table_name}: {'hit' if item else 'miss'}")
        return item

    def scan_items(
        self,
        table_name: str,
        conditions: Dict[str, Dict[str, Any]],
        page_size: Optional[int] = None,
    ) -> List[Item]:
        """Scan the whole table, keeping rows that match every equality condition.

        Follows ``LastEvaluatedKey`` until the table is exhausted. ``page_size``
        caps the rows DynamoDB evaluates per request (before filtering).
        """
        items: List[Item] = []
        pagination = {'PageSize': page_size} if page_size else {}
        try:
            paginator = self.client.get_paginator('scan')
            pages = paginator.paginate(
                TableName=table_name,
                PaginationConfig=pagination,
                **build_filter_expression(conditions),
            )
            for page in pages:
                items.extend(page.get('Items', []))
        except ClientError as e:
            logger.error(f"Error scanning {table_name}: {_error_code(e)} {e}")
            return []

        logger.debug(f"scan on {table_name} with {list(conditions)} returned {len(items)} item(s)")
        return items

    def update_item(
        self,
        table_name: str,
        key: Item,
        updates: Dict[str, Dict[str, Any]],
    ) -> Optional[Dict[str, Any]]:
        """Overwrite the given attributes of an existing item."""
        expression = build_update_expression(updates)
        key_name = next(iter(key))
        expression['ExpressionAttributeNames']['#key'] = key_name
        try:
            response = self.client.update_item(
                TableName=table_name,
                Key=key,
                # Existing rows only; an unconditional update would create a partial item
                ConditionExpression="attribute_exists(#key)",
                **expression,
            )
            logger.info(f"Updated {sorted(updates)} on {key[key_name]} in {table_name}")
            return response
        except ClientError as e:
            logger.error(f"Error updating item in {table_name}: {_error_code(e)} {e}")
            return None

    def delete_item(self, table_name: str, key: Item) -> Optional[Dict[str, Any]]:
        try:
            response = self.client.delete_item(TableName=table_name, Key=key)
            logger.info(f"Deleted item {key} from {table_name}")
            return response
        except ClientError as e:
            logger.error(f"Error deleting item from {table_name}: {_error_code(e)} {e}")
            return None
