"""Vehicle management command implementations."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Optional

import typer
from rich.console import Console
from rich.prompt import Confirm

from junkyard.cli.ui import (
    create_vehicle_details,
    create_vehicle_table,
    error_panel,
    success_panel,
    warning_panel,
)
from junkyard.core.config import SettingsManager, build_inventory
from junkyard.core.inventory import Inventory, inventory_scope, use_inventory
from junkyard.core.query import SortDirection, SortKey, VehicleFilters, VehicleSorting
from junkyard.core.service import normalize_nickname
from junkyard.exceptions import JunkyardError, SettingsError
from junkyard.models.registration import RegistrationState, is_registered
from junkyard.models.results import Result
from junkyard.models.vehicle import (
    EngineStatus,
    SeatStatus,
    Vehicle,
    VehicleType,
)

logger = logging.getLogger(__name__)
console = Console()

# Options that only make sense for some vehicle types
_OPTION_TYPES = {
    "doors": {VehicleType.SEDAN, VehicleType.COUPE, VehicleType.MINI_VAN},
    "door_config": {VehicleType.MINI_VAN},
    "seat_status": {VehicleType.MOTORCYCLE},
}

_OPTION_FLAGS = {
    "doors": "--doors",
    "door_config": "--door-config",
    "seat_status": "--seat",
}


# --- Shared helpers ---


@contextmanager
def open_inventory() -> Iterator[Inventory]:
    """Load settings and vehicles, and scope the inventory to the block."""
    try:
        settings = SettingsManager().load()
    except SettingsError as e:
        console.print(error_panel(e.message, e.details))
        raise typer.Exit(1)

    inventory = build_inventory(settings)
    loaded = inventory.hydrate()
    if not loaded.ok:
        console.print(error_panel("Failed to load vehicles.", loaded.error.message))
        raise typer.Exit(1)

    with inventory_scope(inventory):
        yield inventory


def unwrap_or_exit(result: Result) -> Any:
    """Return the result value, or print the error and exit 1."""
    try:
        return result.unwrap()
    except JunkyardError as e:
        logger.debug("Command failed: %s", e.message)
        console.print()
        console.print(error_panel(e.message, e.details))
        raise typer.Exit(1)


def resolve_vehicle(inventory: Inventory, ref: str) -> Optional[Vehicle]:
    """Find a vehicle by id, unique id prefix or nickname."""
    vehicle = inventory.get(ref)
    if vehicle:
        return vehicle

    prefix = ref.strip().lower()
    matches = [v for v in inventory.vehicles if prefix and v.id.startswith(prefix)]
    if len(matches) == 1:
        return matches[0]

    wanted = normalize_nickname(ref)
    for v in inventory.vehicles:
        if normalize_nickname(v.nickname) == wanted:
            return v

    if len(matches) > 1:
        console.print()
        console.print(
            error_panel(
                f"'{ref}' matches {len(matches)} vehicles.",
                "Use a longer id prefix.",
            )
        )
        raise typer.Exit(1)
    return None


def parse_door_config(value: str) -> list[dict]:
    """Parse ``rrss`` style door configuration."""
    letters = value.strip().lower()
    invalid = sorted(set(letters) - {"r", "s"})
    if invalid:
        console.print()
        console.print(
            error_panel(
                f"Invalid door config '{value}'.",
                "Use one letter per door: r = regular, s = sliding.",
            )
        )
        raise typer.Exit(1)
    return [{"sliding": letter == "s"} for letter in letters]


def build_input(
    vehicle_type: Optional[VehicleType],
    nickname: Optional[str] = None,
    mileage: Optional[int] = None,
    wheels: Optional[int] = None,
    doors: Optional[int] = None,
    door_config: Optional[str] = None,
    engine: Optional[EngineStatus] = None,
    seat: Optional[SeatStatus] = None,
) -> dict[str, Any]:
    """Assemble a raw input mapping from CLI options, skipping unset ones."""
    fields: dict[str, Any] = {
        "type": vehicle_type.value if vehicle_type else None,
        "nickname": nickname,
        "mileage": mileage,
        "wheels": wheels,
        "doors": doors,
        "door_config": parse_door_config(door_config) if door_config is not None else None,
        "engine_status": engine,
        "seat_status": seat,
    }

    if vehicle_type is not None:
        for name, allowed in _OPTION_TYPES.items():
            if fields[name] is not None and vehicle_type not in allowed:
                console.print(
                    warning_panel(
                        f"{_OPTION_FLAGS[name]} does not apply to "
                        f"{vehicle_type.label.lower()}s and was ignored."
                    )
                )
                fields[name] = None

    return {k: v for k, v in fields.items() if v is not None}


# --- Commands ---


def run_add(
    vehicle_type: VehicleType,
    nickname: str,
    mileage: int,
    wheels: Optional[int] = None,
    doors: Optional[int] = None,
    door_config: Optional[str] = None,
    engine: Optional[EngineStatus] = None,
    seat: Optional[SeatStatus] = None,
) -> None:
    """Run the add command."""
    data = build_input(
        vehicle_type,
        nickname=nickname,
        mileage=mileage,
        wheels=wheels,
        doors=doors,
        door_config=door_config,
        engine=engine,
        seat=seat,
    )

    with open_inventory():
        inventory = use_inventory()
        logger.info("Add: type=%s nickname=%r", vehicle_type.value, nickname)
        vehicle = unwrap_or_exit(inventory.create(data))

    console.print()
    if is_registered(vehicle.registration):
        console.print(
            success_panel(
                f"{vehicle.nickname} added and registered as "
                f"{vehicle.registration.registration_id}."
            )
        )
    else:
        console.print(
            warning_panel(
                f"{vehicle.nickname} added, but registration failed: "
                f"{vehicle.registration.registration_error}"
            )
        )
    console.print(create_vehicle_details(vehicle))


def run_list(
    query: str = "",
    types: Optional[list[VehicleType]] = None,
    statuses: Optional[list[RegistrationState]] = None,
    engines: Optional[list[EngineStatus]] = None,
    sort: SortKey = SortKey.CREATED_AT,
    ascending: bool = False,
) -> None:
    """Run the list command."""
    filters = VehicleFilters(
        query=query,
        types=types or [],
        registration_statuses=statuses or [],
        engine_statuses=engines or [],
    )
    sorting = VehicleSorting(
        key=sort,
        direction=SortDirection.ASC if ascending else SortDirection.DESC,
    )

    with open_inventory():
        inventory = use_inventory()
        vehicles = inventory.view(filters, sorting)
        total = len(inventory.vehicles)

    console.print()
    if total == 0:
        console.print("[dim]  No vehicles yet. Add one with 'junkyard add'.[/dim]")
        return
    if not vehicles:
        console.print("[dim]  No vehicles match the current filters.[/dim]")
        return

    console.print(create_vehicle_table(vehicles))
    console.print()
    if filters.is_active:
        console.print(f"[dim]  Showing {len(vehicles)} of {total} vehicle(s).[/dim]")
    else:
        console.print(f"[dim]  {total} vehicle(s).[/dim]")


def run_show(ref: str) -> None:
    """Run the show command."""
    with open_inventory():
        inventory = use_inventory()
        vehicle = resolve_vehicle(inventory, ref)

    if vehicle is None:
        console.print()
        console.print(
            error_panel(
                f"Vehicle '{ref}' not found.",
                "Run 'junkyard list' to see your vehicles.",
            )
        )
        raise typer.Exit(1)

    console.print()
    console.print(create_vehicle_details(vehicle))


def run_edit(
    ref: str,
    vehicle_type: Optional[VehicleType] = None,
    nickname: Optional[str] = None,
    mileage: Optional[int] = None,
    wheels: Optional[int] = None,
    doors: Optional[int] = None,
    door_config: Optional[str] = None,
    engine: Optional[EngineStatus] = None,
    seat: Optional[SeatStatus] = None,
) -> None:
    """Run the edit command.

    Nickname and mileage default to the vehicle's current values; the
    type defaults to the current type.
    """
    with open_inventory():
        inventory = use_inventory()
        vehicle = resolve_vehicle(inventory, ref)
        vehicle_id = vehicle.id if vehicle else ref

        if vehicle is not None:
            vehicle_type = vehicle_type or vehicle.vehicle_type
            nickname = nickname if nickname is not None else vehicle.nickname
            mileage = mileage if mileage is not None else vehicle.mileage

        data = build_input(
            vehicle_type,
            nickname=nickname,
            mileage=mileage,
            wheels=wheels,
            doors=doors,
            door_config=door_config,
            engine=engine,
            seat=seat,
        )
        logger.info("Edit: id=%s fields=%s", vehicle_id, sorted(data))
        updated = unwrap_or_exit(inventory.update(vehicle_id, data))

    console.print()
    console.print(success_panel(f"{updated.nickname} updated."))
    console.print(create_vehicle_details(updated))


def run_delete(ref: str, yes: bool = False) -> None:
    """Run the delete command."""
    with open_inventory():
        inventory = use_inventory()
        vehicle = resolve_vehicle(inventory, ref)
        vehicle_id = vehicle.id if vehicle else ref

        if vehicle is not None and not yes:
            console.print()
            if not Confirm.ask(
                f"  Delete [bold]{vehicle.nickname}[/bold] ({vehicle.short_id})?",
                default=False,
            ):
                console.print("[dim]  Cancelled.[/dim]")
                return

        unwrap_or_exit(inventory.delete(vehicle_id))

    console.print()
    console.print(success_panel(f"{vehicle.nickname} deleted."))


def run_reset(yes: bool = False) -> None:
    """Run the reset command."""
    with open_inventory():
        inventory = use_inventory()
        count = len(inventory.vehicles)

        if not yes:
            console.print()
            if not Confirm.ask(
                f"  Delete all {count} stored vehicle(s)? This cannot be undone.",
                default=False,
            ):
                console.print("[dim]  Cancelled.[/dim]")
                return

        inventory.reset()

    console.print()
    console.print(success_panel(f"Removed {count} vehicle(s)."))
