"""Vehicle domain service.

Create, update and delete rules over a caller-owned snapshot. The service
keeps no vehicle state between calls: each operation takes the current list
and returns a ``Result`` holding the new record (or list) or a domain error.
Nothing here touches storage.
"""

import logging
import random
import uuid
from collections.abc import Callable, Mapping, Sequence
from datetime import datetime, timezone
from typing import Any, Optional, Union

from pydantic import ValidationError

from junkyard.core.defaults import (
    DEFAULT_ENGINE_STATUS,
    DEFAULT_SEAT_STATUS,
    default_door_config,
    default_doors,
    default_wheels,
)
from junkyard.core.registration import attempt_registration
from junkyard.models.inputs import VehicleInput, parse_vehicle_input
from junkyard.models.results import ErrorCode, Result, field_errors_from
from junkyard.models.settings import RegistrationPolicy
from junkyard.models.vehicle import Vehicle, VehicleType, vehicle_adapter

logger = logging.getLogger(__name__)

# Per-type fields that an update may leave out
TYPE_FIELDS: dict[VehicleType, tuple[str, ...]] = {
    VehicleType.SEDAN: ("wheels", "doors"),
    VehicleType.COUPE: ("wheels", "doors"),
    VehicleType.MINI_VAN: ("wheels", "doors", "door_config"),
    VehicleType.MOTORCYCLE: ("wheels", "seat_status"),
}

InputLike = Union[VehicleInput, Mapping[str, Any]]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


def normalize_nickname(nickname: str) -> str:
    """Comparison key for nicknames: trimmed and case-folded."""
    return nickname.strip().casefold()


def find_vehicle(vehicle_id: str, vehicles: Sequence[Vehicle]) -> Optional[Vehicle]:
    """Find a vehicle by id."""
    for vehicle in vehicles:
        if vehicle.id == vehicle_id:
            return vehicle
    return None


def nickname_taken(
    nickname: str,
    vehicles: Sequence[Vehicle],
    exclude_id: Optional[str] = None,
) -> bool:
    """Check whether any other vehicle already uses the nickname."""
    wanted = normalize_nickname(nickname)
    return any(
        v.id != exclude_id and normalize_nickname(v.nickname) == wanted
        for v in vehicles
    )


def _nickname_taken_failure(nickname: str) -> Result:
    return Result.failure(
        ErrorCode.NICKNAME_TAKEN,
        f'A vehicle with nickname "{nickname}" already exists',
        field_errors={"nickname": "This nickname is already in use"},
    )


def _not_found_failure(vehicle_id: str) -> Result:
    return Result.failure(
        ErrorCode.VEHICLE_NOT_FOUND,
        f'Vehicle with id "{vehicle_id}" not found',
    )


def _door_config_failure(doors: int, door_config: list) -> Optional[Result]:
    if len(door_config) == doors:
        return None
    return Result.failure(
        ErrorCode.VALIDATION_ERROR,
        "Door configuration does not match the number of doors",
        field_errors={
            "doorConfig": (
                f"doorConfig length ({len(door_config)}) must equal doors ({doors})"
            )
        },
    )


class VehicleService:
    """Business rules for creating, updating and deleting vehicles."""

    def __init__(
        self,
        policy: Optional[RegistrationPolicy] = None,
        clock: Optional[Callable[[], datetime]] = None,
        id_factory: Optional[Callable[[], str]] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """Initialize the service.

        Args:
            policy: Registration policy applied at creation
            clock: Source of "now" (for testing)
            id_factory: Source of new vehicle ids (for testing)
            rng: Random source for registration ids (for testing)
        """
        self.policy = policy or RegistrationPolicy()
        self._clock = clock or _utcnow
        self._id_factory = id_factory or _new_id
        self._rng = rng

    # --- Operations ---

    def create_vehicle(
        self,
        vehicle_input: InputLike,
        existing: Sequence[Vehicle],
    ) -> "Result[Vehicle]":
        """Create a new vehicle, applying per-type defaults and registration.

        Args:
            vehicle_input: Typed input or raw mapping
            existing: Current vehicles (not modified)

        Returns:
            Result holding the new vehicle, or VALIDATION_ERROR / NICKNAME_TAKEN
        """
        parsed = self._coerce_input(vehicle_input)
        if not parsed.ok:
            return parsed
        data = parsed.value

        if nickname_taken(data.nickname, existing):
            logger.debug("Create rejected, nickname in use: %r", data.nickname)
            return _nickname_taken_failure(data.nickname)

        vehicle_type = VehicleType(data.type)
        fields = self._type_defaults(vehicle_type, data)

        if vehicle_type == VehicleType.MINI_VAN:
            failure = _door_config_failure(fields["doors"], fields["door_config"])
            if failure:
                return failure

        now = self._clock()
        fields.update(
            id=self._id_factory(),
            nickname=data.nickname,
            mileage=data.mileage,
            engine_status=(
                data.engine_status
                if data.engine_status is not None
                else DEFAULT_ENGINE_STATUS
            ),
            created_at=now,
            updated_at=now,
            registration=attempt_registration(
                vehicle_type,
                mileage=data.mileage,
                policy=self.policy,
                rng=self._rng,
            ),
        )

        result = self._build(fields)
        if result.ok:
            vehicle = result.value
            logger.info(
                "Vehicle created: id=%s type=%s registration=%s",
                vehicle.id,
                vehicle.type,
                vehicle.registration.status,
            )
        return result

    def update_vehicle(
        self,
        vehicle_id: str,
        vehicle_input: InputLike,
        existing: Sequence[Vehicle],
    ) -> "Result[Vehicle]":
        """Update an existing vehicle.

        Omitted optional fields keep the vehicle's current values. The id,
        registration and creation time never change.

        Returns:
            Result holding the updated vehicle, or VEHICLE_NOT_FOUND /
            VALIDATION_ERROR / CANNOT_CHANGE_TYPE / NICKNAME_TAKEN
        """
        current = find_vehicle(vehicle_id, existing)
        if current is None:
            return _not_found_failure(vehicle_id)

        parsed = self._coerce_input(vehicle_input)
        if not parsed.ok:
            return parsed
        data = parsed.value

        if data.type != current.type:
            return Result.failure(
                ErrorCode.CANNOT_CHANGE_TYPE,
                f'Cannot change vehicle type from "{current.type}" to "{data.type}"',
            )

        if nickname_taken(data.nickname, existing, exclude_id=vehicle_id):
            logger.debug("Update rejected, nickname in use: %r", data.nickname)
            return _nickname_taken_failure(data.nickname)

        fields = current.model_dump()
        fields.update(
            nickname=data.nickname,
            mileage=data.mileage,
            updated_at=self._clock(),
        )
        if data.engine_status is not None:
            fields["engine_status"] = data.engine_status

        vehicle_type = VehicleType(current.type)
        for name in TYPE_FIELDS[vehicle_type]:
            value = getattr(data, name)
            if value is not None:
                fields[name] = value

        if vehicle_type == VehicleType.MINI_VAN:
            failure = _door_config_failure(fields["doors"], fields["door_config"])
            if failure:
                return failure

        result = self._build(fields)
        if result.ok:
            logger.info("Vehicle updated: id=%s", vehicle_id)
        return result

    def delete_vehicle(
        self,
        vehicle_id: str,
        existing: Sequence[Vehicle],
    ) -> "Result[list[Vehicle]]":
        """Remove a vehicle.

        Returns:
            Result holding a new list without the vehicle, or VEHICLE_NOT_FOUND.
            ``existing`` is left unchanged.
        """
        if find_vehicle(vehicle_id, existing) is None:
            return _not_found_failure(vehicle_id)

        remaining = [v for v in existing if v.id != vehicle_id]
        logger.info("Vehicle deleted: id=%s", vehicle_id)
        return Result.success(remaining)

    # --- Helpers ---

    @staticmethod
    def _coerce_input(vehicle_input: InputLike) -> Result:
        """Accept a typed input as-is; validate a raw mapping."""
        if not isinstance(vehicle_input, Mapping):
            return Result.success(vehicle_input)
        try:
            return Result.success(parse_vehicle_input(vehicle_input))
        except ValidationError as e:
            return Result.failure(
                ErrorCode.VALIDATION_ERROR,
                "Invalid vehicle input",
                field_errors=field_errors_from(e),
            )

    @staticmethod
    def _type_defaults(vehicle_type: VehicleType, data: VehicleInput) -> dict:
        """Per-type fields from the input, falling back to type defaults."""
        fields: dict[str, Any] = {"type": vehicle_type.value}
        fields["wheels"] = (
            data.wheels if data.wheels is not None else default_wheels(vehicle_type)
        )

        if vehicle_type == VehicleType.MOTORCYCLE:
            fields["seat_status"] = (
                data.seat_status
                if data.seat_status is not None
                else DEFAULT_SEAT_STATUS
            )
            return fields

        fields["doors"] = (
            data.doors if data.doors is not None else default_doors(vehicle_type)
        )
        if vehicle_type == VehicleType.MINI_VAN:
            fields["door_config"] = (
                data.door_config
                if data.door_config is not None
                else default_door_config(fields["doors"])
            )
        return fields

    @staticmethod
    def _build(fields: dict) -> Result:
        """Validate assembled fields into a vehicle model."""
        try:
            return Result.success(vehicle_adapter.validate_python(fields))
        except ValidationError as e:
            return Result.failure(
                ErrorCode.VALIDATION_ERROR,
                "Invalid vehicle data",
                field_errors=field_errors_from(e),
            )
