"""
Entity table manager.

Translates file and folder operations of the WebDAV layer into DynamoDB
item operations: point lookups by UUID and equality scans scoped to a
parent folder. Boolean results only say whether the store accepted the
call; there is no retry and no cache.
"""

import logging
from typing import Any, Dict, List, Optional, Union
from uuid import UUID

from webdav_dynamo.db import attribute_keys as keys
from webdav_dynamo.db.date_utils import date_to_string
from webdav_dynamo.db.mapper import (
    item_to_entity,
    items_to_entities,
    number_value,
    parent_key,
    string_value,
)
from webdav_dynamo.db.service import DynamoDBService
from webdav_dynamo.models import Entity, Folder, utcnow
from webdav_dynamo.utils.decorators import log_execution_time

logger = logging.getLogger(__name__)


def _primary_key(unique_id: Union[str, UUID]) -> Dict[str, Dict[str, Any]]:
    return {keys.UUID: string_value(str(unique_id))}


class DynamoDBManager:
    """File and folder operations over one DynamoDB service"""

    def __init__(self, service: Optional[DynamoDBService] = None):
        self.service = service or DynamoDBService()

    # ==========================================
    # Tables
    # ==========================================

    @log_execution_time
    def create_table(self, table_name: str) -> bool:
        """Create the table unless it already exists; True if it exists afterwards."""
        if self.service.is_table_exist(table_name):
            logger.debug(f"Table {table_name} already exists")
            return True
        return self.service.create_table(table_name)

    @log_execution_time
    def delete_table(self, table_name: str) -> bool:
        return self.service.delete_table(table_name)

    # ==========================================
    # Writes
    # ==========================================

    @log_execution_time
    def put_entity(self, table_name: str, entity: Entity) -> bool:
        """Store an entity; True when the store accepted the write."""
        item = self.service.new_item(entity)
        return self.service.put_item(table_name, item) is not None

    @log_execution_time
    def update_entity_by_unique_id(
        self,
        table_name: str,
        entity: Entity,
        new_parent: Optional[Folder],
        new_entity_name: str,
        is_renaming: bool,
    ) -> bool:
        """Rename and/or move an entity.

        Name and modification time are always written. The parent link is
        only rewritten when this is a move (``is_renaming`` is False); a
        ``None`` new parent moves the entity to the root. Unknown ids give
        False: the store only updates rows that already exist, so no partial
        row is ever created.
        """
        updates = {
            keys.ENTITY_NAME: string_value(new_entity_name),
            keys.MODIFIED_DATE: string_value(date_to_string(utcnow())),
        }
        if not is_renaming:
            updates[keys.PARENT_UUID] = string_value(parent_key(new_parent))

        response = self.service.update_item(table_name, _primary_key(entity.id), updates)
        return response is not None

    @log_execution_time
    def delete_entity_by_unique_id(self, table_name: str, unique_id: Union[str, UUID, None]) -> bool:
        if not unique_id:
            return False
        return self.service.delete_item(table_name, _primary_key(unique_id)) is not None

    # ==========================================
    # Reads
    # ==========================================

    @log_execution_time
    def is_exist_entity(self, table_name: str, entity_name: str, parent: Optional[Folder]) -> bool:
        """True if ``parent`` (the root when None) already has a child called ``entity_name``."""
        if not entity_name:
            return False

        conditions = {
            keys.PARENT_UUID: string_value(parent_key(parent)),
            keys.ENTITY_NAME: string_value(entity_name),
        }
        items = self.service.scan_items(table_name, conditions)
        return len(items_to_entities(parent, items)) > 0

    @log_execution_time
    def find_root_folder(self, table_name: str) -> Optional[Folder]:
        conditions = {keys.PARENT_UUID: string_value(keys.NOT_EXIST)}
        children = items_to_entities(None, self.service.scan_items(table_name, conditions))
        if not children:
            return None

        root = children[0]
        if not isinstance(root, Folder):
            logger.warning(f"Root entity {root.id} in {table_name} is not a folder")
            return None
        return root

    @log_execution_time
    def find_entity_by_unique_id(
        self,
        table_name: str,
        unique_id: Union[str, UUID, None],
        parent: Optional[Folder] = None,
    ) -> Optional[Entity]:
        if not unique_id:
            return None

        item = self.service.get_item(table_name, _primary_key(unique_id))
        return item_to_entity(parent, item)

    def find_entity(self, table_name: str, entity: Optional[Entity]) -> Optional[Entity]:
        """Reload an entity by its id, keeping its parent object."""
        if entity is None:
            return None
        return self.find_entity_by_unique_id(table_name, entity.id, entity.parent)

    @log_execution_time
    def find_entity_by_parent(self, table_name: str, parent: Optional[Folder]) -> List[Entity]:
        if parent is None:
            return []

        conditions = {keys.PARENT_UUID: string_value(str(parent.id))}
        return items_to_entities(parent, self.service.scan_items(table_name, conditions))

    @log_execution_time
    def find_entity_by_parent_and_type(
        self,
        table_name: str,
        parent: Optional[Folder],
        is_directory: bool,
    ) -> List[Entity]:
        if parent is None:
            return []

        conditions = {
            keys.PARENT_UUID: string_value(str(parent.id)),
            keys.IS_DIRECTORY: number_value(1 if is_directory else 0),
        }
        return items_to_entities(parent, self.service.scan_items(table_name, conditions))

    @log_execution_time
    def find_entity_by_parent_and_name(
        self,
        table_name: str,
        parent: Optional[Folder],
        entity_name: str,
    ) -> Optional[Entity]:
        """Child of ``parent`` (the root when None) with the given name, if any."""
        if not entity_name:
            return None

        conditions = {
            keys.PARENT_UUID: string_value(parent_key(parent)),
            keys.ENTITY_NAME: string_value(entity_name),
        }
        children = items_to_entities(parent, self.service.scan_items(table_name, conditions))
        return children[0] if children else None


# Global manager instance
_dynamodb_manager = None

def get_dynamodb_manager() -> DynamoDBManager:
    """Get or create the process-wide manager"""
    global _dynamodb_manager
    if _dynamodb_manager is None:
        _dynamodb_manager = DynamoDBManager()
    return _dynamodb_manager
