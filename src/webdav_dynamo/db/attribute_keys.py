"""Attribute names used in the entity table."""

UUID = "UUID"
ENTITY_NAME = "EntityName"
PARENT_UUID = "ParentUUID"
IS_DIRECTORY = "isDirectory"
CREATED_DATE = "CreatedDate"
MODIFIED_DATE = "ModifiedDate"
CONTENT_TYPE = "ContentType"
CONTENT_LENGTH = "ContentLength"

# Stored in ParentUUID for the root folder so it can be matched by equality
NOT_EXIST = "NotExist"
