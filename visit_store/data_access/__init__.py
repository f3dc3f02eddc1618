"""
Data access layer for visit persistence.
"""
from .visits_backend import VisitsBackend, InMemoryVisitsBackend
from .file_visits_backend import LocalFileVisitsBackend
from .dynamodb_client import DynamoDBClient
from .dynamodb_visits_backend import DynamoDBVisitsBackend

__all__ = [
    'VisitsBackend',
    'InMemoryVisitsBackend',
    'LocalFileVisitsBackend',
    'DynamoDBClient',
    'DynamoDBVisitsBackend',
]
