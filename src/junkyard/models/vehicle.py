"""Vehicle data model."""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import (
    AwareDatetime,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
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


class VehicleType(str, Enum):
    """Supported vehicle subtypes."""

    SEDAN = "sedan"
    COUPE = "coupe"
    MINI_VAN = "mini-van"
    MOTORCYCLE = "motorcycle"

    @property
    def label(self) -> str:
        """Return formatted type name for display."""
        labels = {
            VehicleType.SEDAN: "Sedan",
            VehicleType.COUPE: "Coupe",
            VehicleType.MINI_VAN: "Mini-Van",
            VehicleType.MOTORCYCLE: "Motorcycle",
        }
        return labels[self]


class EngineStatus(str, Enum):
    """Engine condition."""

    WORKS = "works"
    FIXABLE = "fixable"
    JUNK = "junk"


class SeatStatus(str, Enum):
    """Motorcycle seat condition."""

    WORKS = "works"
    FIXABLE = "fixable"
    JUNK = "junk"


class VehicleModel(BaseModel):
    """Base for vehicle models.

    Attributes are snake_case; serialized keys are camelCase
    (``engineStatus``, ``doorConfig``, ``createdAt``) to match the stored
    format. Both spellings are accepted on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class DoorConfigItem(VehicleModel):
    """Configuration of a single mini-van door."""

    sliding: bool


def check_door_config(doors: int, door_config: list[DoorConfigItem]) -> None:
    """Raise ValueError unless there is exactly one door config per door."""
    if len(door_config) != doors:
        raise ValueError(
            f"doorConfig length ({len(door_config)}) must equal doors ({doors})"
        )


class VehicleBase(VehicleModel):
    """Fields shared by every vehicle type."""

    id: VehicleId
    nickname: Nickname
    mileage: Mileage
    engine_status: EngineStatus
    registration: Registration
    created_at: AwareDatetime
    updated_at: AwareDatetime

    @property
    def vehicle_type(self) -> VehicleType:
        """Return the type discriminator as an enum member."""
        return VehicleType(self.type)

    @property
    def short_id(self) -> str:
        """First block of the id, for display."""
        return self.id.split("-", 1)[0]


class Sedan(VehicleBase):
    type: Literal["sedan"] = "sedan"
    wheels: CarWheels
    doors: SedanDoors


class Coupe(VehicleBase):
    type: Literal["coupe"] = "coupe"
    wheels: CarWheels
    doors: CoupeDoors


class MiniVan(VehicleBase):
    type: Literal["mini-van"] = "mini-van"
    wheels: CarWheels
    doors: SedanDoors
    door_config: list[DoorConfigItem]

    @model_validator(mode="after")
    def validate_door_config(self) -> "MiniVan":
        """Ensure one door config entry per door."""
        check_door_config(self.doors, self.door_config)
        return self


class Motorcycle(VehicleBase):
    type: Literal["motorcycle"] = "motorcycle"
    wheels: MotorcycleWheels
    seat_status: SeatStatus


Vehicle = Annotated[
    Union[Sedan, Coupe, MiniVan, Motorcycle],
    Field(discriminator="type"),
]

vehicle_adapter = TypeAdapter(Vehicle)
