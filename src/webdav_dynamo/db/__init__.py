"""
Entity Database Layer

This module maps WebDAV files and folders onto DynamoDB items and exposes
the table manager used by the server.
"""

from .service import DynamoDBService
from .manager import DynamoDBManager, get_dynamodb_manager

__all__ = [
    'DynamoDBService',
    'DynamoDBManager', 'get_dynamodb_manager',
]
