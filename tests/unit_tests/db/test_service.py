"""
Unit Tests for the DynamoDB service wrapper.
Runs against moto's in-process DynamoDB.
"""

import pytest

from webdav_dynamo.db import attribute_keys as keys
from webdav_dynamo.db.service import build_filter_expression, build_update_expression
from webdav_dynamo.models import Folder
from tests.consts import TEST_TABLE_NAME


def test_build_filter_expression_joins_equality_clauses():
    expression = build_filter_expression({
        keys.PARENT_UUID: {'S': "p-1"},
        keys.IS_DIRECTORY: {'N': "1"},
    })

    assert expression['FilterExpression'] == "#c0 = :c0 AND #c1 = :c1"
    assert expression['ExpressionAttributeNames'] == {
        "#c0": keys.PARENT_UUID,
        "#c1": keys.IS_DIRECTORY,
    }
    assert expression['ExpressionAttributeValues'] == {
        ":c0": {'S': "p-1"},
        ":c1": {'N': "1"},
    }


def test_build_filter_expression_without_conditions():
    assert build_filter_expression({}) == {}


def test_build_update_expression():
    expression = build_update_expression({keys.ENTITY_NAME: {'S': "renamed"}})

    assert expression['UpdateExpression'] == "SET #u0 = :u0"
    assert expression['ExpressionAttributeNames'] == {"#u0": keys.ENTITY_NAME}


class TestTableLifecycle:
    """Table create/describe/delete through the service"""

    def test_create_and_delete(self, service):
        assert service.is_table_exist(TEST_TABLE_NAME) is False

        assert service.create_table(TEST_TABLE_NAME) is True
        assert service.is_table_exist(TEST_TABLE_NAME) is True

        assert service.delete_table(TEST_TABLE_NAME) is True
        assert service.is_table_exist(TEST_TABLE_NAME) is False

    def test_create_existing_table_fails_softly(self, service):
        assert service.create_table(TEST_TABLE_NAME) is True
        assert service.create_table(TEST_TABLE_NAME) is False

    def test_delete_missing_table_fails_softly(self, service):
        assert service.delete_table("no-such-table") is False

    def test_table_uses_configured_throughput(self, service, dynamodb_client):
        service.create_table(TEST_TABLE_NAME)
        table = dynamodb_client.describe_table(TableName=TEST_TABLE_NAME)['Table']

        assert table['KeySchema'] == [{'AttributeName': keys.UUID, 'KeyType': 'HASH'}]
        assert table['ProvisionedThroughput']['ReadCapacityUnits'] == 10
        assert table['ProvisionedThroughput']['WriteCapacityUnits'] == 10


class TestItemOperations:
    """Item CRUD through the service"""

    @pytest.fixture(autouse=True)
    def setup_table(self, service):
        service.create_table(TEST_TABLE_NAME)
        self.service = service
        self.root = Folder(name="/")
        self.docs = self.root.new_folder("docs")

    def _key(self, entity):
        return {keys.UUID: {'S': str(entity.id)}}

    def test_put_and_get(self):
        assert self.service.put_item(TEST_TABLE_NAME, self.service.new_item(self.docs)) is not None

        item = self.service.get_item(TEST_TABLE_NAME, self._key(self.docs))
        assert item[keys.ENTITY_NAME] == {'S': "docs"}

    def test_get_missing_item(self):
        assert self.service.get_item(TEST_TABLE_NAME, self._key(self.docs)) is None

    def test_put_into_missing_table_returns_none(self):
        assert self.service.put_item("no-such-table", self.service.new_item(self.docs)) is None

    def test_scan_filters_on_every_condition(self):
        for entity in (self.root, self.docs, self.root.new_file("a.txt"), self.docs.new_file("b.txt")):
            self.service.put_item(TEST_TABLE_NAME, self.service.new_item(entity))

        children = self.service.scan_items(TEST_TABLE_NAME, {keys.PARENT_UUID: {'S': str(self.root.id)}})
        assert sorted(i[keys.ENTITY_NAME]['S'] for i in children) == ["a.txt", "docs"]

        folders = self.service.scan_items(TEST_TABLE_NAME, {
            keys.PARENT_UUID: {'S': str(self.root.id)},
            keys.IS_DIRECTORY: {'N': "1"},
        })
        assert [i[keys.ENTITY_NAME]['S'] for i in folders] == ["docs"]

        everything = self.service.scan_items(TEST_TABLE_NAME, {})
        assert len(everything) == 4

    def test_scan_follows_every_page(self):
        names = [f"file-{i:02d}.txt" for i in range(12)]
        for name in names:
            self.service.put_item(TEST_TABLE_NAME, self.service.new_item(self.docs.new_file(name)))
        self.service.put_item(TEST_TABLE_NAME, self.service.new_item(self.root.new_file("other.txt")))

        children = self.service.scan_items(
            TEST_TABLE_NAME, {keys.PARENT_UUID: {'S': str(self.docs.id)}}, page_size=1
        )

        assert sorted(i[keys.ENTITY_NAME]['S'] for i in children) == names

    def test_scan_with_small_pages_issues_several_requests(self, dynamodb_client):
        for i in range(5):
            self.service.put_item(TEST_TABLE_NAME, self.service.new_item(self.docs.new_file(f"{i}.txt")))

        calls = []
        dynamodb_client.meta.events.register(
            'provide-client-params.dynamodb.Scan', lambda params, **kwargs: calls.append(dict(params))
        )

        items = self.service.scan_items(TEST_TABLE_NAME, {}, page_size=2)

        assert len(items) == 5
        assert len(calls) >= 3
        assert all(c['Limit'] == 2 for c in calls)

    def test_scan_missing_table_returns_empty(self):
        assert self.service.scan_items("no-such-table", {keys.PARENT_UUID: {'S': "x"}}) == []

    def test_update_existing_item(self):
        self.service.put_item(TEST_TABLE_NAME, self.service.new_item(self.docs))

        response = self.service.update_item(
            TEST_TABLE_NAME, self._key(self.docs), {keys.ENTITY_NAME: {'S': "papers"}}
        )

        assert response is not None
        item = self.service.get_item(TEST_TABLE_NAME, self._key(self.docs))
        assert item[keys.ENTITY_NAME] == {'S': "papers"}
        assert item[keys.PARENT_UUID] == {'S': str(self.root.id)}

    def test_update_missing_item_does_not_create_it(self):
        response = self.service.update_item(
            TEST_TABLE_NAME, self._key(self.docs), {keys.ENTITY_NAME: {'S': "ghost"}}
        )

        assert response is None
        assert self.service.get_item(TEST_TABLE_NAME, self._key(self.docs)) is None

    def test_delete_item(self):
        self.service.put_item(TEST_TABLE_NAME, self.service.new_item(self.docs))

        assert self.service.delete_item(TEST_TABLE_NAME, self._key(self.docs)) is not None
        assert self.service.get_item(TEST_TABLE_NAME, self._key(self.docs)) is None
