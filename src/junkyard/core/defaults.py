"""Default values for vehicle fields."""

from junkyard.models.vehicle import DoorConfigItem, EngineStatus, SeatStatus, VehicleType

DEFAULT_ENGINE_STATUS = EngineStatus.WORKS
DEFAULT_SEAT_STATUS = SeatStatus.WORKS

# Doors before this index are regular, the rest slide
FIRST_SLIDING_DOOR = 2

_DEFAULT_WHEELS = {
    VehicleType.SEDAN: 4,
    VehicleType.COUPE: 4,
    VehicleType.MINI_VAN: 4,
    VehicleType.MOTORCYCLE: 2,
}

# Motorcycles have no doors field; 0 keeps the table total
_DEFAULT_DOORS = {
    VehicleType.SEDAN: 4,
    VehicleType.COUPE: 2,
    VehicleType.MINI_VAN: 4,
    VehicleType.MOTORCYCLE: 0,
}


def default_wheels(vehicle_type: VehicleType) -> int:
    """Default number of wheels for a vehicle type."""
    return _DEFAULT_WHEELS[VehicleType(vehicle_type)]


def default_doors(vehicle_type: VehicleType) -> int:
    """Default number of doors for a vehicle type."""
    return _DEFAULT_DOORS[VehicleType(vehicle_type)]


def default_door_config(doors: int) -> list[DoorConfigItem]:
    """Door configuration for a mini-van with the given number of doors."""
    return [
        DoorConfigItem(sliding=index >= FIRST_SLIDING_DOOR) for index in range(doors)
    ]
