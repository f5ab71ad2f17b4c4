"""Filtering, sorting and summaries over a vehicle snapshot."""

from collections.abc import Sequence
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from junkyard.models.registration import RegistrationState
from junkyard.models.vehicle import EngineStatus, Vehicle, VehicleType


class SortKey(str, Enum):
    """Fields the vehicle list can be sorted by."""

    CREATED_AT = "createdAt"
    NICKNAME = "nickname"
    MILEAGE = "mileage"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class VehicleFilters(BaseModel):
    """List filters. Empty lists mean "any"."""

    query: str = ""
    types: list[VehicleType] = Field(default_factory=list)
    registration_statuses: list[RegistrationState] = Field(default_factory=list)
    engine_statuses: list[EngineStatus] = Field(default_factory=list)

    @property
    def is_active(self) -> bool:
        """True if any filter narrows the list."""
        return bool(
            self.query.strip()
            or self.types
            or self.registration_statuses
            or self.engine_statuses
        )


class VehicleSorting(BaseModel):
    """List ordering; newest first by default."""

    key: SortKey = SortKey.CREATED_AT
    direction: SortDirection = SortDirection.DESC


class RegistrationSummary(BaseModel):
    """Registration counts for the registration log."""

    total: int = 0
    registered: int = 0
    failed: int = 0


def _registration_id(vehicle: Vehicle) -> str:
    return getattr(vehicle.registration, "registration_id", "")


def matches_query(vehicle: Vehicle, query: str, include_type: bool = True) -> bool:
    """Case-insensitive match on nickname, type or registration id."""
    needle = query.strip().lower()
    if not needle:
        return True
    haystacks = [vehicle.nickname.lower(), _registration_id(vehicle).lower()]
    if include_type:
        haystacks.append(vehicle.type.lower())
    return any(needle in h for h in haystacks)


def filter_vehicles(
    vehicles: Sequence[Vehicle],
    filters: Optional[VehicleFilters] = None,
) -> list[Vehicle]:
    """Return the vehicles matching every active filter."""
    filters = filters or VehicleFilters()
    result = list(vehicles)

    if filters.query.strip():
        result = [v for v in result if matches_query(v, filters.query)]

    if filters.types:
        result = [v for v in result if v.type in filters.types]

    if filters.registration_statuses:
        result = [
            v for v in result
            if v.registration.status in filters.registration_statuses
        ]

    if filters.engine_statuses:
        result = [v for v in result if v.engine_status in filters.engine_statuses]

    return result


def sort_vehicles(
    vehicles: Sequence[Vehicle],
    sorting: Optional[VehicleSorting] = None,
) -> list[Vehicle]:
    """Return a new list ordered by the sort key. Ties keep their order."""
    sorting = sorting or VehicleSorting()
    sort_keys = {
        SortKey.CREATED_AT: lambda v: v.created_at,
        SortKey.NICKNAME: lambda v: v.nickname.lower(),
        SortKey.MILEAGE: lambda v: v.mileage,
    }
    return sorted(
        vehicles,
        key=sort_keys[sorting.key],
        reverse=sorting.direction == SortDirection.DESC,
    )


def apply_view(
    vehicles: Sequence[Vehicle],
    filters: Optional[VehicleFilters] = None,
    sorting: Optional[VehicleSorting] = None,
) -> list[Vehicle]:
    """Filter then sort."""
    return sort_vehicles(filter_vehicles(vehicles, filters), sorting)


def registration_summary(vehicles: Sequence[Vehicle]) -> RegistrationSummary:
    """Count vehicles by registration outcome."""
    registered = sum(
        1 for v in vehicles if v.registration.status == RegistrationState.REGISTERED
    )
    return RegistrationSummary(
        total=len(vehicles),
        registered=registered,
        failed=len(vehicles) - registered,
    )


def registration_log(
    vehicles: Sequence[Vehicle],
    query: str = "",
    status: Optional[RegistrationState] = None,
) -> list[Vehicle]:
    """Vehicles for the registration log, newest first.

    The search matches nickname or registration id only.
    """
    result = [v for v in vehicles if matches_query(v, query, include_type=False)]
    if status is not None:
        result = [v for v in result if v.registration.status == status]
    return sort_vehicles(result, VehicleSorting())
