"""User settings model."""

from pathlib import Path
from typing import Optional

import platformdirs
from pydantic import BaseModel, Field, field_validator

from junkyard.models.vehicle import VehicleType

DEFAULT_STORAGE_KEY = "junkyard-tracker-v1"

# Mileage caps from the first registration rule set
LEGACY_MILEAGE_LIMITS = {
    VehicleType.SEDAN: 100_000,
    VehicleType.MOTORCYCLE: 50_000,
}


class RegistrationPolicy(BaseModel):
    """Which vehicles fail registration at creation time.

    An empty policy registers every vehicle.
    """

    mileage_limits: dict[VehicleType, int] = Field(
        default_factory=dict,
        description="Maximum mileage per type; above it registration fails",
    )

    @field_validator("mileage_limits")
    @classmethod
    def validate_limits(cls, v: dict[VehicleType, int]) -> dict[VehicleType, int]:
        """Reject negative caps."""
        for vehicle_type, limit in v.items():
            if limit < 0:
                raise ValueError(
                    f"Mileage limit for {vehicle_type.value} cannot be negative"
                )
        return v

    @classmethod
    def legacy(cls) -> "RegistrationPolicy":
        """Policy with the historical sedan/motorcycle mileage caps."""
        return cls(mileage_limits=dict(LEGACY_MILEAGE_LIMITS))

    def limit_for(self, vehicle_type: VehicleType) -> Optional[int]:
        """Return the mileage cap for a type, if any."""
        return self.mileage_limits.get(VehicleType(vehicle_type))


class Settings(BaseModel):
    """Application settings (v1 schema)."""

    version: int = Field(default=1, description="Settings schema version")

    # Where vehicle data lives; platform data dir when unset
    data_dir: Optional[Path] = None

    storage_key: str = Field(default=DEFAULT_STORAGE_KEY, min_length=1)

    registration: RegistrationPolicy = Field(default_factory=RegistrationPolicy)

    @property
    def storage_dir(self) -> Path:
        """Resolved directory for the vehicle store."""
        if self.data_dir:
            return Path(self.data_dir).expanduser()
        return Path(platformdirs.user_data_dir("junkyard"))
