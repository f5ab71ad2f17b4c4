"""Shared test fixtures for junkyard."""

import random
from datetime import datetime, timezone

import pytest

from junkyard.core.service import VehicleService
from junkyard.core.storage import MemoryKeyValueStore, StorageRepository
from junkyard.models.registration import RegisteredRegistration
from junkyard.models.vehicle import (
    DoorConfigItem,
    MiniVan,
    Motorcycle,
    Sedan,
)

FIXED_NOW = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def temp_config_dir(tmp_path):
    """Provide isolated config directory for tests."""
    config_dir = tmp_path / ".config" / "junkyard"
    config_dir.mkdir(parents=True)
    return config_dir


@pytest.fixture
def memory_store():
    return MemoryKeyValueStore()


@pytest.fixture
def repository(memory_store):
    return StorageRepository(memory_store)


@pytest.fixture
def service():
    """Service with a fixed clock and seeded registration ids."""
    return VehicleService(clock=lambda: FIXED_NOW, rng=random.Random(42))


@pytest.fixture
def sedan():
    return Sedan(
        id="123e4567-e89b-12d3-a456-426614174000",
        nickname="Test Sedan",
        mileage=50000,
        wheels=4,
        doors=4,
        engine_status="works",
        registration=RegisteredRegistration(registration_id="SEDAN-ABC12"),
        created_at="2024-01-01T00:00:00.000Z",
        updated_at="2024-01-01T00:00:00.000Z",
    )


@pytest.fixture
def motorcycle():
    return Motorcycle(
        id="223e4567-e89b-12d3-a456-426614174000",
        nickname="Bike",
        mileage=10000,
        wheels=2,
        seat_status="fixable",
        engine_status="junk",
        registration={"status": "failed", "registrationError": "Too many miles"},
        created_at="2024-01-02T00:00:00.000Z",
        updated_at="2024-01-02T00:00:00.000Z",
    )


@pytest.fixture
def minivan():
    return MiniVan(
        id="323e4567-e89b-12d3-a456-426614174000",
        nickname="Family Van",
        mileage=75000,
        wheels=4,
        doors=3,
        door_config=[
            DoorConfigItem(sliding=False),
            DoorConfigItem(sliding=False),
            DoorConfigItem(sliding=True),
        ],
        engine_status="fixable",
        registration=RegisteredRegistration(registration_id="MINIVAN-Q1W2E"),
        created_at="2024-01-03T00:00:00.000Z",
        updated_at="2024-01-03T00:00:00.000Z",
    )


@pytest.fixture
def fleet(sedan, motorcycle, minivan):
    return [sedan, motorcycle, minivan]
