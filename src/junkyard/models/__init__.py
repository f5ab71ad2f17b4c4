"""Data models for junkyard."""

from junkyard.models.inputs import (
    CoupeInput,
    MiniVanInput,
    MotorcycleInput,
    SedanInput,
    VehicleInput,
    parse_vehicle_input,
)
from junkyard.models.persisted import STORAGE_VERSION, StorageEnvelope
from junkyard.models.registration import (
    FailedRegistration,
    RegisteredRegistration,
    Registration,
    RegistrationState,
    is_failed,
    is_registered,
)
from junkyard.models.results import DomainError, ErrorCode, Result
from junkyard.models.settings import RegistrationPolicy, Settings
from junkyard.models.vehicle import (
    Coupe,
    DoorConfigItem,
    EngineStatus,
    MiniVan,
    Motorcycle,
    SeatStatus,
    Sedan,
    Vehicle,
    VehicleType,
    vehicle_adapter,
)

__all__ = [
    # Vehicle
    "Vehicle",
    "VehicleType",
    "EngineStatus",
    "SeatStatus",
    "DoorConfigItem",
    "Sedan",
    "Coupe",
    "MiniVan",
    "Motorcycle",
    "vehicle_adapter",
    # Inputs
    "VehicleInput",
    "SedanInput",
    "CoupeInput",
    "MiniVanInput",
    "MotorcycleInput",
    "parse_vehicle_input",
    # Registration
    "Registration",
    "RegistrationState",
    "RegisteredRegistration",
    "FailedRegistration",
    "is_registered",
    "is_failed",
    # Results
    "Result",
    "DomainError",
    "ErrorCode",
    # Storage
    "StorageEnvelope",
    "STORAGE_VERSION",
    # Settings
    "Settings",
    "RegistrationPolicy",
]
