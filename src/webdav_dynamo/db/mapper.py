"""
Conversion between DynamoDB attribute rows and typed entities.

Rows use the low-level client format, e.g. ``{"EntityName": {"S": "docs"}}``.
"""

import logging
from typing import Any, Dict, List, Optional
from uuid import UUID

from webdav_dynamo.db import attribute_keys as keys
from webdav_dynamo.db.date_utils import date_to_string, string_to_date
from webdav_dynamo.models import Entity, File, Folder

logger = logging.getLogger(__name__)

Item = Dict[str, Dict[str, Any]]


def string_value(value: str) -> Dict[str, str]:
    return {'S': value}


def number_value(value: int) -> Dict[str, str]:
    return {'N': str(value)}


def parent_key(parent: Optional[Entity]) -> str:
    """Value stored in ParentUUID for the given parent (sentinel for the root)."""
    if parent is None:
        return keys.NOT_EXIST
    return str(parent.id)


def entity_to_item(entity: Entity) -> Item:
    """Build the attribute row for an entity."""
    parent_uuid = keys.NOT_EXIST if entity.parent_id is None else str(entity.parent_id)
    item = {
        keys.UUID: string_value(str(entity.id)),
        keys.ENTITY_NAME: string_value(entity.name),
        keys.PARENT_UUID: string_value(parent_uuid),
        keys.IS_DIRECTORY: number_value(1 if entity.is_directory else 0),
        keys.CREATED_DATE: string_value(date_to_string(entity.created_date)),
        keys.MODIFIED_DATE: string_value(date_to_string(entity.modified_date)),
    }

    if isinstance(entity, File):
        if entity.content_type:
            item[keys.CONTENT_TYPE] = string_value(entity.content_type)
        if entity.content_length is not None:
            item[keys.CONTENT_LENGTH] = number_value(entity.content_length)

    return item


def _get_string(item: Item, key: str) -> Optional[str]:
    value = item.get(key)
    if not value:
        return None
    return value.get('S')


def _get_number(item: Item, key: str) -> Optional[int]:
    value = item.get(key)
    if not value or 'N' not in value:
        return None
    return int(value['N'])


def item_to_entity(parent: Optional[Folder], item: Optional[Item]) -> Optional[Entity]:
    """Convert one stored row to a Folder or File, attaching the given parent.

    ``parent_id`` always reflects the row, even when the caller's parent
    object is stale (e.g. after a move).
    """
    if not item:
        return None

    fields: Dict[str, Any] = {
        'id': UUID(_get_string(item, keys.UUID)),
        'name': _get_string(item, keys.ENTITY_NAME) or "",
    }

    stored_parent = _get_string(item, keys.PARENT_UUID)
    if stored_parent and stored_parent != keys.NOT_EXIST:
        fields['parent_id'] = UUID(stored_parent)

    # Unparseable timestamps are left to the model default (load time)
    created = string_to_date(_get_string(item, keys.CREATED_DATE))
    if created is not None:
        fields['created_date'] = created
    modified = string_to_date(_get_string(item, keys.MODIFIED_DATE))
    if modified is not None:
        fields['modified_date'] = modified

    if _get_number(item, keys.IS_DIRECTORY) == 1:
        entity = Folder(**fields)
    else:
        entity = File(
            content_type=_get_string(item, keys.CONTENT_TYPE),
            content_length=_get_number(item, keys.CONTENT_LENGTH),
            **fields,
        )

    # Plain assignment skips link_parent_id, so the stored parent_id survives
    entity.parent = parent
    return entity


def items_to_entities(parent: Optional[Folder], items: Optional[List[Item]]) -> List[Entity]:
    """Convert a list of stored rows, dropping rows that map to nothing."""
    if not items:
        return []

    entities = []
    for item in items:
        entity = item_to_entity(parent, item)
        if entity is not None:
            entities.append(entity)
    return entities
