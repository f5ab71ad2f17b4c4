"""Main CLI application."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from junkyard import __version__
from junkyard.core.query import SortKey
from junkyard.logging import setup_logging
from junkyard.models.registration import RegistrationState
from junkyard.models.vehicle import EngineStatus, SeatStatus, VehicleType

app = typer.Typer(
    name="junkyard",
    help="Track the vehicles in your junkyard from the command line.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

DOOR_CONFIG_HELP = "One letter per door: r = regular, s = sliding (e.g. rrss)"


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Echo log messages to stderr.",
    ),
) -> None:
    """junkyard - vehicle inventory and registration tracker."""
    if version:
        console.print(f"junkyard v{__version__}")
        raise typer.Exit()
    setup_logging(verbose=verbose)


@app.command()
def add(
    vehicle_type: VehicleType = typer.Argument(..., help="Vehicle type"),
    nickname: str = typer.Option(..., "--nickname", "-n", prompt=True, help="Unique nickname"),
    mileage: int = typer.Option(..., "--mileage", "-m", prompt=True, help="Current mileage"),
    wheels: Optional[int] = typer.Option(None, "--wheels", help="Number of wheels"),
    doors: Optional[int] = typer.Option(None, "--doors", help="Number of doors"),
    door_config: Optional[str] = typer.Option(None, "--door-config", help=DOOR_CONFIG_HELP),
    engine: Optional[EngineStatus] = typer.Option(None, "--engine", help="Engine status"),
    seat: Optional[SeatStatus] = typer.Option(None, "--seat", help="Seat status (motorcycles)"),
) -> None:
    """Add a vehicle and register it."""
    from junkyard.cli.commands.vehicles import run_add

    run_add(
        vehicle_type=vehicle_type,
        nickname=nickname,
        mileage=mileage,
        wheels=wheels,
        doors=doors,
        door_config=door_config,
        engine=engine,
        seat=seat,
    )


@app.command("list")
def list_vehicles(
    query: str = typer.Option("", "--query", "-q", help="Search nickname, type or registration id"),
    types: Optional[list[VehicleType]] = typer.Option(None, "--type", "-t", help="Only these types"),
    statuses: Optional[list[RegistrationState]] = typer.Option(
        None, "--status", help="Only these registration outcomes"
    ),
    engines: Optional[list[EngineStatus]] = typer.Option(None, "--engine", help="Only these engine statuses"),
    sort: SortKey = typer.Option(SortKey.CREATED_AT, "--sort", help="Sort key"),
    ascending: bool = typer.Option(False, "--asc/--desc", help="Sort direction"),
) -> None:
    """List vehicles."""
    from junkyard.cli.commands.vehicles import run_list

    run_list(
        query=query,
        types=types or [],
        statuses=statuses or [],
        engines=engines or [],
        sort=sort,
        ascending=ascending,
    )


@app.command()
def show(
    ref: str = typer.Argument(..., help="Vehicle id, id prefix or nickname"),
) -> None:
    """Show a single vehicle."""
    from junkyard.cli.commands.vehicles import run_show

    run_show(ref)


@app.command()
def edit(
    ref: str = typer.Argument(..., help="Vehicle id, id prefix or nickname"),
    vehicle_type: Optional[VehicleType] = typer.Option(None, "--type", help="Vehicle type (cannot change)"),
    nickname: Optional[str] = typer.Option(None, "--nickname", "-n", help="New nickname"),
    mileage: Optional[int] = typer.Option(None, "--mileage", "-m", help="New mileage"),
    wheels: Optional[int] = typer.Option(None, "--wheels", help="Number of wheels"),
    doors: Optional[int] = typer.Option(None, "--doors", help="Number of doors"),
    door_config: Optional[str] = typer.Option(None, "--door-config", help=DOOR_CONFIG_HELP),
    engine: Optional[EngineStatus] = typer.Option(None, "--engine", help="Engine status"),
    seat: Optional[SeatStatus] = typer.Option(None, "--seat", help="Seat status (motorcycles)"),
) -> None:
    """Edit a vehicle. Registration is never changed."""
    from junkyard.cli.commands.vehicles import run_edit

    run_edit(
        ref,
        vehicle_type=vehicle_type,
        nickname=nickname,
        mileage=mileage,
        wheels=wheels,
        doors=doors,
        door_config=door_config,
        engine=engine,
        seat=seat,
    )


@app.command()
def delete(
    ref: str = typer.Argument(..., help="Vehicle id, id prefix or nickname"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a vehicle."""
    from junkyard.cli.commands.vehicles import run_delete

    run_delete(ref, yes=yes)


@app.command()
def log(
    query: str = typer.Option("", "--query", "-q", help="Search nickname or registration id"),
    status: Optional[RegistrationState] = typer.Option(None, "--status", help="Only this outcome"),
) -> None:
    """Show the registration log."""
    from junkyard.cli.commands.registration_log import run_log

    run_log(query=query, status=status)


@app.command()
def reset(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete all stored vehicles."""
    from junkyard.cli.commands.vehicles import run_reset

    run_reset(yes=yes)


@app.command()
def settings(
    data_dir: Optional[Path] = typer.Option(None, "--data-dir", help="Directory for vehicle data"),
    legacy_limits: bool = typer.Option(
        False, "--legacy-limits", help="Fail registration for high-mileage sedans and motorcycles"
    ),
    clear_limits: bool = typer.Option(False, "--clear-limits", help="Always register vehicles"),
    reset_settings: bool = typer.Option(False, "--reset", help="Restore default settings"),
) -> None:
    """Show or change settings."""
    from junkyard.cli.commands.settings import run_settings

    run_settings(
        data_dir=data_dir,
        legacy_limits=legacy_limits,
        clear_limits=clear_limits,
        reset_settings=reset_settings,
    )


if __name__ == "__main__":
    app()
