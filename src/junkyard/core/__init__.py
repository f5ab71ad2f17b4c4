"""Core services for junkyard."""

from junkyard.core.config import SettingsManager, build_inventory
from junkyard.core.inventory import (
    HydrationStatus,
    Inventory,
    inventory_scope,
    use_inventory,
)
from junkyard.core.registration import attempt_registration, generate_registration_id
from junkyard.core.service import VehicleService, normalize_nickname
from junkyard.core.storage import (
    FileKeyValueStore,
    MemoryKeyValueStore,
    StorageRepository,
)

__all__ = [
    "SettingsManager",
    "build_inventory",
    "HydrationStatus",
    "Inventory",
    "inventory_scope",
    "use_inventory",
    "attempt_registration",
    "generate_registration_id",
    "VehicleService",
    "normalize_nickname",
    "FileKeyValueStore",
    "MemoryKeyValueStore",
    "StorageRepository",
]
