"""
Service layer for the FitnessMedia application.

This module contains the persistence backends and the services that own
the application's observable state.

Classes:
    KeyValueStore: Abstract key-value store
    InMemoryStore: Process-local store
    FileStore: JSON file store
    DynamoDBStore: DynamoDB table store
    BoxRepository: Box list management with write-through persistence
    ProfileService: User display name persistence
    HealthDataSource: Abstract health data provider
    InMemoryHealthSource: Health provider over in-memory samples
    AppleHealthExportSource: Health provider over an Apple Health export
    HealthDataService: Asynchronous health queries
"""

from .box_repository import BoxRepository
from .dynamodb_store import DynamoDBStore
from .health_service import HealthDataService, today_range
from .health_sources import AppleHealthExportSource, HealthDataSource, InMemoryHealthSource
from .persistence import FileStore, InMemoryStore, KeyValueStore
from .profile_service import ProfileService

__all__ = [
    "KeyValueStore",
    "InMemoryStore",
    "FileStore",
    "DynamoDBStore",
    "BoxRepository",
    "ProfileService",
    "HealthDataSource",
    "InMemoryHealthSource",
    "AppleHealthExportSource",
    "HealthDataService",
    "today_range",
]
