"""Registration log command implementation."""

from typing import Optional

from rich.console import Console

from junkyard.cli.commands.vehicles import open_inventory
from junkyard.cli.ui import create_registration_log_table, format_summary
from junkyard.core.inventory import use_inventory
from junkyard.core.query import registration_log, registration_summary
from junkyard.models.registration import RegistrationState

console = Console()


def run_log(query: str = "", status: Optional[RegistrationState] = None) -> None:
    """Run the registration log command."""
    with open_inventory():
        inventory = use_inventory()
        summary = registration_summary(inventory.vehicles)
        entries = registration_log(inventory.vehicles, query=query, status=status)

    console.print()
    console.print(f"  {format_summary(summary)}")
    console.print()

    if not entries:
        if summary.total:
            console.print("[dim]  No registrations match your search.[/dim]")
        else:
            console.print("[dim]  No registrations yet.[/dim]")
        return

    console.print(create_registration_log_table(entries))
