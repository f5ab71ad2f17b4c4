"""Inventory session: the current vehicle snapshot plus persistence.

The session loads vehicles once, routes every change through the
``VehicleService`` and writes the resulting list back through the
``StorageRepository``. The snapshot only moves forward when the write
succeeds.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from enum import Enum
from typing import Optional

from junkyard.core.query import VehicleFilters, VehicleSorting, apply_view
from junkyard.core.service import InputLike, VehicleService, find_vehicle
from junkyard.core.storage import StorageRepository
from junkyard.exceptions import InventoryContextError
from junkyard.models.results import Result
from junkyard.models.vehicle import Vehicle

logger = logging.getLogger(__name__)


class HydrationStatus(str, Enum):
    """Lifecycle of the initial load."""

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class Inventory:
    """Holds the current vehicles and keeps storage in sync."""

    def __init__(
        self,
        repository: StorageRepository,
        service: Optional[VehicleService] = None,
    ) -> None:
        self.repository = repository
        self.service = service or VehicleService()
        self._vehicles: list[Vehicle] = []
        self.hydration_status = HydrationStatus.IDLE
        self.hydration_error: Optional[str] = None

    @property
    def vehicles(self) -> tuple[Vehicle, ...]:
        """Current snapshot."""
        return tuple(self._vehicles)

    @property
    def is_ready(self) -> bool:
        return self.hydration_status == HydrationStatus.READY

    def hydrate(self) -> "Result[list[Vehicle]]":
        """Load vehicles from storage into the snapshot."""
        self.hydration_status = HydrationStatus.LOADING
        self.hydration_error = None

        result = self.repository.load()
        if result.ok:
            self._vehicles = list(result.value)
            self.hydration_status = HydrationStatus.READY
            logger.info("Inventory loaded: %d vehicles", len(self._vehicles))
        else:
            self._vehicles = []
            self.hydration_status = HydrationStatus.ERROR
            self.hydration_error = result.error.message
            logger.error("Inventory load failed: %s", result.error.message)
        return result

    def get(self, vehicle_id: str) -> Optional[Vehicle]:
        """Find a vehicle by id."""
        return find_vehicle(vehicle_id, self._vehicles)

    def view(
        self,
        filters: Optional[VehicleFilters] = None,
        sorting: Optional[VehicleSorting] = None,
    ) -> list[Vehicle]:
        """Filtered and sorted copy of the snapshot."""
        return apply_view(self._vehicles, filters, sorting)

    # --- Mutations ---

    def create(self, vehicle_input: InputLike) -> "Result[Vehicle]":
        """Create a vehicle and persist it."""
        result = self.service.create_vehicle(vehicle_input, self._vehicles)
        if not result.ok:
            return result
        return self._commit([*self._vehicles, result.value], result)

    def update(self, vehicle_id: str, vehicle_input: InputLike) -> "Result[Vehicle]":
        """Update a vehicle and persist the change."""
        result = self.service.update_vehicle(vehicle_id, vehicle_input, self._vehicles)
        if not result.ok:
            return result
        updated = result.value
        vehicles = [updated if v.id == vehicle_id else v for v in self._vehicles]
        return self._commit(vehicles, result)

    def delete(self, vehicle_id: str) -> "Result[list[Vehicle]]":
        """Delete a vehicle and persist the change."""
        result = self.service.delete_vehicle(vehicle_id, self._vehicles)
        if not result.ok:
            return result
        return self._commit(result.value, result)

    def reset(self) -> None:
        """Remove all stored vehicles."""
        self.repository.clear()
        self._vehicles = []
        logger.info("Inventory reset")

    def _commit(self, vehicles: list[Vehicle], result: Result) -> Result:
        saved = self.repository.save(vehicles)
        if not saved.ok:
            logger.error("Inventory save failed: %s", saved.error.message)
            return Result.from_error(saved.error)
        self._vehicles = list(vehicles)
        return result


# ─────────────────────────────────────────────────────────────────────────────
# Scoped lookup
# ─────────────────────────────────────────────────────────────────────────────

_current_inventory: ContextVar[Optional[Inventory]] = ContextVar(
    "junkyard_inventory", default=None
)


@contextmanager
def inventory_scope(inventory: Inventory) -> Iterator[Inventory]:
    """Make an inventory available to use_inventory() within the block."""
    token = _current_inventory.set(inventory)
    try:
        yield inventory
    finally:
        _current_inventory.reset(token)


def use_inventory() -> Inventory:
    """Return the inventory of the enclosing scope.

    Raises:
        InventoryContextError: If called outside inventory_scope()
    """
    inventory = _current_inventory.get()
    if inventory is None:
        raise InventoryContextError()
    return inventory
