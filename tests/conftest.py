"""Pytest fixtures shared by all test modules."""
import boto3
import pytest
from moto import mock_aws

from webdav_dynamo.aws.utils import AWSClientManager
from webdav_dynamo.config.settings import Settings, get_settings
from webdav_dynamo.db import manager as manager_module
from webdav_dynamo.db.manager import DynamoDBManager
from webdav_dynamo.db.service import DynamoDBService
from tests.consts import TEST_REGION, TEST_TABLE_NAME


@pytest.fixture(autouse=True)
def aws_environment(monkeypatch):
    """Point boto3 at fake credentials and drop every cached client/settings object."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", TEST_REGION)
    monkeypatch.setenv("DEPLOYMENT_MODE", "aws-prod")
    monkeypatch.delenv("AWS_ENDPOINT_URL", raising=False)
    monkeypatch.delenv("DYNAMODB_TABLE_NAME", raising=False)

    get_settings.cache_clear()
    AWSClientManager.reset()
    monkeypatch.setattr(manager_module, "_dynamodb_manager", None)
    yield
    get_settings.cache_clear()
    AWSClientManager.reset()


@pytest.fixture
def mocked_aws():
    with mock_aws():
        yield


@pytest.fixture
def dynamodb_client(mocked_aws):
    return boto3.client("dynamodb", region_name=TEST_REGION)


@pytest.fixture
def service(dynamodb_client) -> DynamoDBService:
    return DynamoDBService(client=dynamodb_client, settings=Settings())


@pytest.fixture
def manager(service) -> DynamoDBManager:
    return DynamoDBManager(service)


@pytest.fixture
def table(manager) -> str:
    """An empty entity table"""
    assert manager.create_table(TEST_TABLE_NAME) is True
    return TEST_TABLE_NAME
