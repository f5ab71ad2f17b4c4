"""Vehicle form input models (before defaults are applied)."""

from collections.abc import Mapping
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import Field, TypeAdapter

from junkyard.models.fields import (
    CarWheels,
    CoupeDoors,
    Mileage,
    MotorcycleWheels,
    Nickname,
    SedanDoors,
)
from junkyard.models.vehicle import (
    DoorConfigItem,
    EngineStatus,
    SeatStatus,
    VehicleModel,
)


class VehicleInputBase(VehicleModel):
    """Fields the user supplies for every vehicle type."""

    nickname: Nickname
    mileage: Mileage
    engine_status: Optional[EngineStatus] = None


class SedanInput(VehicleInputBase):
    type: Literal["sedan"] = "sedan"
    wheels: Optional[CarWheels] = None
    doors: Optional[SedanDoors] = None


class CoupeInput(VehicleInputBase):
    type: Literal["coupe"] = "coupe"
    wheels: Optional[CarWheels] = None
    doors: Optional[CoupeDoors] = None


class MiniVanInput(VehicleInputBase):
    type: Literal["mini-van"] = "mini-van"
    wheels: Optional[CarWheels] = None
    doors: Optional[SedanDoors] = None
    door_config: Optional[list[DoorConfigItem]] = None


class MotorcycleInput(VehicleInputBase):
    type: Literal["motorcycle"] = "motorcycle"
    wheels: Optional[MotorcycleWheels] = None
    seat_status: Optional[SeatStatus] = None


VehicleInput = Annotated[
    Union[SedanInput, CoupeInput, MiniVanInput, MotorcycleInput],
    Field(discriminator="type"),
]

_input_adapter = TypeAdapter(VehicleInput)


def parse_vehicle_input(data: Mapping[str, Any]) -> VehicleInput:
    """Validate a raw mapping into a typed vehicle input.

    Raises:
        pydantic.ValidationError: If the mapping is not a valid input
    """
    return _input_adapter.validate_python(dict(data))
