"""
Pytest configuration and shared fixtures for FitnessMedia tests.

This module contains shared fixtures for the stores, services and health
data used across the unit tests. DynamoDB is mocked with moto.

Fixtures:
    memory_store: Empty in-memory key-value store
    file_store: File store in a temporary directory
    mock_dynamodb_table: Mocked DynamoDB table for the store
    repository: BoxRepository over the in-memory store
    main_queue: UI-thread delivery queue
    health_source: Authorized in-memory health source with today's samples
    health_service: HealthDataService over health_source
"""

import os
import random
from datetime import date, datetime, time, timedelta
from typing import List

import boto3
import pytest
from moto import mock_aws

from fitnessmedia.models.health import HealthDataType, HealthSample
from fitnessmedia.services.box_repository import BoxRepository
from fitnessmedia.services.health_service import HealthDataService
from fitnessmedia.services.health_sources import InMemoryHealthSource
from fitnessmedia.services.persistence import FileStore, InMemoryStore
from fitnessmedia.services.profile_service import ProfileService
from fitnessmedia.utils.dispatch import MainThreadQueue

# Test configuration constants
TEST_TABLE_NAME = "test-fitnessmedia-store"
TEST_DATE_OF_BIRTH = date(1990, 5, 17)

# Fixed clock at 15:30 local time
FIXED_NOW = datetime.combine(date.today(), time(15, 30)).astimezone()
START_OF_DAY = datetime.combine(date.today(), time.min).astimezone()


@pytest.fixture(scope="session")
def aws_credentials():
    """
    Fixture to set up AWS credentials for testing.

    These are fake credentials used by moto.
    """
    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_SECURITY_TOKEN"] = "testing"
    os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = "us-east-1"


@pytest.fixture
def mock_dynamodb_table(aws_credentials):
    """
    Fixture that creates a mocked key-value table.

    Returns:
        boto3.resource.Table: Mocked DynamoDB table resource
    """
    with mock_aws():
        dynamodb = boto3.resource("dynamodb", region_name="us-east-1")
        table = dynamodb.create_table(
            TableName=TEST_TABLE_NAME,
            KeySchema=[{"AttributeName": "key", "KeyType": "HASH"}],
            AttributeDefinitions=[{"AttributeName": "key", "AttributeType": "S"}],
            BillingMode="PAY_PER_REQUEST",
        )
        table.wait_until_exists()
        yield table


@pytest.fixture
def memory_store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def file_store(tmp_path) -> FileStore:
    return FileStore(tmp_path / "store.json")


@pytest.fixture
def repository(memory_store) -> BoxRepository:
    return BoxRepository(memory_store, rng=random.Random(42))


@pytest.fixture
def profile_service(memory_store) -> ProfileService:
    return ProfileService(memory_store)


@pytest.fixture
def main_queue() -> MainThreadQueue:
    return MainThreadQueue()


def make_sample(data_type: HealthDataType, value: float, start: datetime, minutes: int = 10) -> HealthSample:
    """Create a sample lasting the given number of minutes."""
    return HealthSample(
        data_type=data_type,
        value=value,
        start_date=start,
        end_date=start + timedelta(minutes=minutes),
    )


@pytest.fixture
def today_samples() -> List[HealthSample]:
    """
    Samples around today's window.

    Today: 3000 + 1200.6 steps and 150.25 + 100.0 kcal. One step sample
    from yesterday evening and one after FIXED_NOW fall outside the window.
    """
    return [
        make_sample(HealthDataType.STEP_COUNT, 3000, START_OF_DAY + timedelta(hours=8)),
        make_sample(HealthDataType.STEP_COUNT, 1200.6, START_OF_DAY + timedelta(hours=12)),
        make_sample(HealthDataType.STEP_COUNT, 999, START_OF_DAY - timedelta(hours=2)),
        make_sample(HealthDataType.STEP_COUNT, 500, FIXED_NOW + timedelta(minutes=5)),
        make_sample(HealthDataType.ACTIVE_ENERGY_BURNED, 150.25, START_OF_DAY + timedelta(hours=9)),
        make_sample(HealthDataType.ACTIVE_ENERGY_BURNED, 100.0, START_OF_DAY + timedelta(hours=13)),
    ]


@pytest.fixture
def health_source(today_samples) -> InMemoryHealthSource:
    return InMemoryHealthSource(samples=today_samples, date_of_birth=TEST_DATE_OF_BIRTH)


@pytest.fixture
def health_service(health_source, main_queue):
    service = HealthDataService(health_source, main_queue, clock=lambda: FIXED_NOW)
    yield service
    service.shutdown()


# Pytest configuration
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "aws: mark test as requiring mocked AWS services")
