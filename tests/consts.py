"""Shared constants for tests."""

TEST_TABLE_NAME = "test-webdav-entities"
TEST_REGION = "us-east-1"
