"""Persisted storage schema.

This is the structural check applied at the storage boundary. It is kept
apart from the in-memory models: stored data crosses a serialization
boundary where anything can appear, so every field is required and every
per-type rule (including the mini-van door count) is checked here.
"""

from typing import Annotated, Literal, Union

from pydantic import (
    AwareDatetime,
    BaseModel,
    ConfigDict,
    Field,
    model_validator,
)
from pydantic.alias_generators import to_camel

from junkyard.models.fields import (
    CarWheels,
    CoupeDoors,
    Mileage,
    MotorcycleWheels,
    Nickname,
    SedanDoors,
    VehicleId,
)
from junkyard.models.registration import Registration
from junkyard.models.vehicle import (
    EngineStatus,
    SeatStatus,
    check_door_config,
)

STORAGE_VERSION = 1


class PersistedModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        strict=True,
    )


class PersistedDoorConfigItem(PersistedModel):
    sliding: bool


class PersistedVehicleBase(PersistedModel):
    id: VehicleId
    nickname: Nickname
    mileage: Mileage
    engine_status: EngineStatus
    registration: Registration
    created_at: AwareDatetime
    updated_at: AwareDatetime


class PersistedSedan(PersistedVehicleBase):
    type: Literal["sedan"]
    wheels: CarWheels
    doors: SedanDoors


class PersistedCoupe(PersistedVehicleBase):
    type: Literal["coupe"]
    wheels: CarWheels
    doors: CoupeDoors


class PersistedMiniVan(PersistedVehicleBase):
    type: Literal["mini-van"]
    wheels: CarWheels
    doors: SedanDoors
    door_config: list[PersistedDoorConfigItem]

    @model_validator(mode="after")
    def validate_door_config(self) -> "PersistedMiniVan":
        check_door_config(self.doors, self.door_config)
        return self


class PersistedMotorcycle(PersistedVehicleBase):
    type: Literal["motorcycle"]
    wheels: MotorcycleWheels
    seat_status: SeatStatus


PersistedVehicle = Annotated[
    Union[PersistedSedan, PersistedCoupe, PersistedMiniVan, PersistedMotorcycle],
    Field(discriminator="type"),
]


class StorageEnvelope(PersistedModel):
    """Top-level stored document (v1 schema)."""

    version: Literal[1]
    vehicles: list[PersistedVehicle]
