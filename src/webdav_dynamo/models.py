"""
Typed file and folder entities.

An entity is one node of the WebDAV hierarchy. Folders may own children,
files carry optional content metadata. Each entity is stored as a single
DynamoDB item (see ``webdav_dynamo.db.mapper``).
"""

from datetime import datetime, timezone
from typing import ClassVar, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, model_validator


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Entity(BaseModel):
    """Base record shared by files and folders"""
    is_directory: ClassVar[bool] = False

    id: UUID = Field(default_factory=uuid4, description="Unique entity identifier")
    name: str = Field(..., description="Entity name within its parent folder")
    parent: Optional["Folder"] = Field(None, repr=False, description="Parent folder, None for the root")
    parent_id: Optional[UUID] = Field(None, description="Stored parent identifier, None for the root")
    created_date: datetime = Field(default_factory=utcnow, description="Creation timestamp")
    modified_date: datetime = Field(default_factory=utcnow, description="Last modification timestamp")

    @model_validator(mode='after')
    def link_parent_id(self):
        """Keep parent_id in step with the parent object when one is given."""
        if self.parent is not None:
            self.parent_id = self.parent.id
        return self

    @property
    def is_root(self) -> bool:
        return self.parent_id is None


class Folder(Entity):
    """Directory entity that may own children"""
    is_directory: ClassVar[bool] = True

    def new_folder(self, name: str) -> "Folder":
        """Build a child folder linked to this folder."""
        return Folder(name=name, parent=self)

    def new_file(
        self,
        name: str,
        content_type: Optional[str] = None,
        content_length: Optional[int] = None,
    ) -> "File":
        """Build a child file linked to this folder."""
        return File(
            name=name,
            parent=self,
            content_type=content_type,
            content_length=content_length,
        )


class File(Entity):
    """Leaf entity holding content metadata"""
    content_type: Optional[str] = Field(None, description="MIME type of the content")
    content_length: Optional[int] = Field(None, ge=0, description="Content size in bytes")


Entity.model_rebuild()
Folder.model_rebuild()
File.model_rebuild()
