"""Rich console UI helpers."""

from collections.abc import Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from junkyard.core.query import RegistrationSummary
from junkyard.models.registration import Registration, is_registered
from junkyard.models.settings import Settings
from junkyard.models.vehicle import DoorConfigItem, Vehicle, VehicleType

console = Console()

_STATUS_STYLES = {
    "works": "green",
    "fixable": "yellow",
    "junk": "red",
}


def success_panel(message: str) -> Panel:
    """Create a success message panel."""
    return Panel(
        f"[green]✓[/green] {message}",
        border_style="green",
        padding=(0, 1),
    )


def error_panel(message: str, details: str | None = None) -> Panel:
    """Create an error message panel."""
    content = f"[red]✗[/red] {message}"
    if details:
        content += f"\n\n[dim]{details}[/dim]"
    return Panel(
        content,
        title="Error",
        border_style="red",
        padding=(0, 1),
    )


def warning_panel(message: str) -> Panel:
    """Create a warning message panel."""
    return Panel(
        f"[yellow]⚠[/yellow] {message}",
        border_style="yellow",
        padding=(0, 1),
    )


def format_mileage(mileage: int) -> str:
    """Format mileage for display."""
    return f"{mileage:,} mi"


def format_type(vehicle_type: str) -> str:
    """Display name for a vehicle type value."""
    return VehicleType(vehicle_type).label


def format_status(status: str) -> str:
    """Color an engine/seat status for display."""
    value = getattr(status, "value", status)
    style = _STATUS_STYLES.get(value, "white")
    return f"[{style}]{value.capitalize()}[/{style}]"


def format_registration(registration: Registration) -> str:
    """Registration badge text."""
    if is_registered(registration):
        return f"[green]✓[/green] {registration.registration_id}"
    return "[red]✗ Failed[/red]"


def format_door_config(door_config: Sequence[DoorConfigItem]) -> str:
    """Summarize mini-van doors, e.g. ``2 regular, 2 sliding``."""
    if not door_config:
        return "No doors"
    sliding = sum(1 for door in door_config if door.sliding)
    return f"{len(door_config) - sliding} regular, {sliding} sliding"


def create_vehicle_table(
    vehicles: Sequence[Vehicle],
    title: str = "Vehicles",
) -> Table:
    """Create a table listing vehicles."""
    table = Table(title=title, show_lines=False)
    table.add_column("ID", style="dim")
    table.add_column("Nickname", style="bold")
    table.add_column("Type")
    table.add_column("Mileage", justify="right")
    table.add_column("Engine")
    table.add_column("Registration")

    for vehicle in vehicles:
        table.add_row(
            vehicle.short_id,
            vehicle.nickname,
            format_type(vehicle.type),
            format_mileage(vehicle.mileage),
            format_status(vehicle.engine_status),
            format_registration(vehicle.registration),
        )

    return table


def create_vehicle_details(vehicle: Vehicle) -> Table:
    """Create a two-column table with every field of a vehicle."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Field", style="dim")
    table.add_column("Value")

    table.add_row("ID", vehicle.id)
    table.add_row("Nickname", vehicle.nickname)
    table.add_row("Type", format_type(vehicle.type))
    table.add_row("Mileage", format_mileage(vehicle.mileage))
    table.add_row("Engine", format_status(vehicle.engine_status))
    table.add_row("Wheels", str(vehicle.wheels))

    if vehicle.type == VehicleType.MOTORCYCLE:
        table.add_row("Seat", format_status(vehicle.seat_status))
    else:
        table.add_row("Doors", str(vehicle.doors))
    if vehicle.type == VehicleType.MINI_VAN:
        table.add_row("Door config", format_door_config(vehicle.door_config))

    if is_registered(vehicle.registration):
        table.add_row("Registration", f"[green]{vehicle.registration.registration_id}[/green]")
    else:
        table.add_row("Registration", f"[red]{vehicle.registration.registration_error}[/red]")

    table.add_row("Created", vehicle.created_at.strftime("%Y-%m-%d %H:%M"))
    table.add_row("Updated", vehicle.updated_at.strftime("%Y-%m-%d %H:%M"))

    return table


def create_registration_log_table(vehicles: Sequence[Vehicle]) -> Table:
    """Create the registration log table."""
    table = Table(title="Registration Log", show_lines=False)
    table.add_column("Date", style="dim")
    table.add_column("Nickname", style="bold")
    table.add_column("Type")
    table.add_column("Status")
    table.add_column("ID / Reason")

    for vehicle in vehicles:
        registration = vehicle.registration
        if is_registered(registration):
            status = "[green]Registered[/green]"
            detail = registration.registration_id
        else:
            status = "[red]Failed[/red]"
            detail = f"[dim]{registration.registration_error}[/dim]"
        table.add_row(
            vehicle.created_at.strftime("%Y-%m-%d"),
            vehicle.nickname,
            format_type(vehicle.type),
            status,
            detail,
        )

    return table


def format_summary(summary: RegistrationSummary) -> str:
    """One-line registration totals."""
    return (
        f"{summary.total} total  "
        f"[green]{summary.registered} registered[/green]  "
        f"[red]{summary.failed} failed[/red]"
    )


def create_settings_table(settings: Settings) -> Table:
    """Create a table displaying settings."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Setting", style="dim")
    table.add_column("Value")

    table.add_row("Data directory", str(settings.storage_dir))
    table.add_row("Storage key", settings.storage_key)

    limits = settings.registration.mileage_limits
    if limits:
        policy = ", ".join(
            f"{VehicleType(t).label} > {limit:,} mi fails"
            for t, limit in sorted(limits.items(), key=lambda item: item[0].value)
        )
    else:
        policy = "Always register"
    table.add_row("Registration", policy)

    return table
