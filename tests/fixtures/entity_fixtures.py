"""
Entity Test Fixtures for DynamoDB-backed operations.
Provides a small reusable folder tree for manager and CLI tests.
"""

from datetime import datetime, timezone
from typing import Dict, List

from webdav_dynamo.db.manager import DynamoDBManager
from webdav_dynamo.models import Entity, File, Folder


class EntityTestFixtures:
    """Builds and stores a sample hierarchy:

    /
    ├── docs/
    │   ├── report.pdf
    │   └── notes.txt
    ├── photos/
    │   └── 2024/
    └── readme.md
    """

    def __init__(self):
        self.root = Folder(
            name="/",
            created_date=datetime(2024, 1, 1, tzinfo=timezone.utc),
            modified_date=datetime(2024, 1, 1, tzinfo=timezone.utc),
        )
        self.docs = self.root.new_folder("docs")
        self.photos = self.root.new_folder("photos")
        self.photos_2024 = self.photos.new_folder("2024")
        self.readme = self.root.new_file("readme.md", "text/markdown", 120)
        self.report = self.docs.new_file("report.pdf", "application/pdf", 52_431)
        self.notes = self.docs.new_file("notes.txt", "text/plain", 0)

    @property
    def entities(self) -> List[Entity]:
        return [
            self.root,
            self.docs,
            self.photos,
            self.photos_2024,
            self.readme,
            self.report,
            self.notes,
        ]

    @property
    def by_name(self) -> Dict[str, Entity]:
        return {entity.name: entity for entity in self.entities}

    def populate(self, manager: DynamoDBManager, table_name: str) -> None:
        """Put every sample entity into the table"""
        for entity in self.entities:
            assert manager.put_entity(table_name, entity) is True


def get_entity_fixtures() -> EntityTestFixtures:
    """Get a fresh fixture tree"""
    return EntityTestFixtures()


def make_file(parent: Folder, name: str) -> File:
    return parent.new_file(name, "application/octet-stream", 1)
