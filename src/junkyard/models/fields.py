"""Shared field types for vehicle models."""

from typing import Annotated

from pydantic import AfterValidator, Field, StrictInt

NICKNAME_MAX_LENGTH = 50

UUID_PATTERN = (
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
)


def _check_nickname(v: str) -> str:
    """Trim a nickname and enforce its length after trimming."""
    if not v:
        raise ValueError("Nickname is required")
    stripped = v.strip()
    if not stripped:
        raise ValueError("Nickname cannot be only whitespace")
    if len(stripped) > NICKNAME_MAX_LENGTH:
        raise ValueError(
            f"Nickname must be {NICKNAME_MAX_LENGTH} characters or fewer"
        )
    return stripped


Nickname = Annotated[str, AfterValidator(_check_nickname)]

VehicleId = Annotated[str, Field(pattern=UUID_PATTERN)]

Mileage = Annotated[StrictInt, Field(ge=0)]

# Wheels: 0-4 for cars, 0-2 for motorcycles
CarWheels = Annotated[StrictInt, Field(ge=0, le=4)]
MotorcycleWheels = Annotated[StrictInt, Field(ge=0, le=2)]

# Doors: 0-4 for sedans/mini-vans, 0-2 for coupes
SedanDoors = Annotated[StrictInt, Field(ge=0, le=4)]
CoupeDoors = Annotated[StrictInt, Field(ge=0, le=2)]
