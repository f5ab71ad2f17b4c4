"""Settings command implementation."""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from junkyard.cli.ui import create_settings_table, error_panel, success_panel
from junkyard.core.config import SettingsManager
from junkyard.exceptions import SettingsError
from junkyard.models.settings import RegistrationPolicy, Settings

logger = logging.getLogger(__name__)
console = Console()


def run_settings(
    data_dir: Optional[Path] = None,
    legacy_limits: bool = False,
    clear_limits: bool = False,
    reset_settings: bool = False,
) -> None:
    """Run the settings command."""
    console.print()

    if legacy_limits and clear_limits:
        console.print(
            error_panel("Choose either --legacy-limits or --clear-limits, not both.")
        )
        raise typer.Exit(1)

    manager = SettingsManager()

    if reset_settings:
        manager.delete()
        console.print(success_panel("Settings restored to defaults."))
        console.print(create_settings_table(Settings()))
        return

    try:
        settings = manager.load()
    except SettingsError as e:
        console.print(error_panel(e.message, e.details))
        console.print("[dim]  Run 'junkyard settings --reset' to start over.[/dim]")
        raise typer.Exit(1)

    updates = {}
    if data_dir is not None:
        updates["data_dir"] = data_dir.expanduser()
    if legacy_limits:
        updates["registration"] = RegistrationPolicy.legacy()
    if clear_limits:
        updates["registration"] = RegistrationPolicy()

    if updates:
        settings = settings.model_copy(update=updates)
        manager.save(settings)
        logger.info("Settings updated: %s", sorted(updates))
        console.print(success_panel("Settings saved."))

    console.print(create_settings_table(settings))
