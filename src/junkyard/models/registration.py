"""Registration outcome models."""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class RegistrationState(str, Enum):
    """Registration outcome states."""

    REGISTERED = "registered"
    FAILED = "failed"


class _RegistrationModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class RegisteredRegistration(_RegistrationModel):
    """Successful registration carrying the issued id."""

    status: Literal["registered"] = "registered"
    registration_id: str = Field(..., min_length=1)


class FailedRegistration(_RegistrationModel):
    """Rejected registration carrying a human-readable reason."""

    status: Literal["failed"] = "failed"
    registration_error: str = Field(..., min_length=1)


Registration = Annotated[
    Union[RegisteredRegistration, FailedRegistration],
    Field(discriminator="status"),
]


def is_registered(registration: Registration) -> bool:
    """Check if a registration represents a successful registration."""
    return registration.status == RegistrationState.REGISTERED


def is_failed(registration: Registration) -> bool:
    """Check if a registration represents a failed registration."""
    return registration.status == RegistrationState.FAILED
