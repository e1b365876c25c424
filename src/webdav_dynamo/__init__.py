"""
WebDAV entity storage on Amazon DynamoDB.

Maps the file and folder hierarchy of a WebDAV server onto items of a
single DynamoDB table.
"""

from .models import Entity, File, Folder
from .db.manager import DynamoDBManager

__all__ = ['Entity', 'File', 'Folder', 'DynamoDBManager']
