"""Settings management."""

import logging
from pathlib import Path
from typing import Optional

import platformdirs
import tomli
import tomli_w
from pydantic import ValidationError

from junkyard.core.inventory import Inventory
from junkyard.core.service import VehicleService
from junkyard.core.storage import FileKeyValueStore, StorageRepository
from junkyard.exceptions import SettingsValidationError
from junkyard.models.settings import Settings

logger = logging.getLogger(__name__)

# Current settings schema version
CURRENT_VERSION = 1


class SettingsManager:
    """Manages the TOML settings file."""

    SETTINGS_FILENAME = "settings.toml"

    def __init__(self, config_dir: Optional[Path] = None) -> None:
        """Initialize settings manager.

        Args:
            config_dir: Override config directory (for testing)
        """
        if config_dir:
            self._config_dir = Path(config_dir)
        else:
            self._config_dir = Path(platformdirs.user_config_dir("junkyard"))

    @property
    def settings_path(self) -> Path:
        """Path to the settings file."""
        return self._config_dir / self.SETTINGS_FILENAME

    @property
    def exists(self) -> bool:
        """Check if settings file exists."""
        return self.settings_path.exists()

    def save(self, settings: Settings) -> None:
        """Write settings to the TOML file.

        Args:
            settings: Settings to save
        """
        self._config_dir.mkdir(parents=True, exist_ok=True)

        settings_dict = settings.model_dump(mode="json", exclude_none=True)
        self.settings_path.write_text(tomli_w.dumps(settings_dict), encoding="utf-8")
        logger.debug("Settings saved → %s", self.settings_path)

    def load(self) -> Settings:
        """Load settings, falling back to defaults when no file exists.

        Returns:
            Loaded and validated Settings

        Raises:
            SettingsValidationError: If the file cannot be read, is not
                valid TOML, or does not match the settings schema
        """
        if not self.exists:
            return Settings()

        try:
            settings_dict = tomli.loads(self.settings_path.read_text(encoding="utf-8"))
        except (tomli.TOMLDecodeError, UnicodeDecodeError) as e:
            raise SettingsValidationError(str(e))
        except OSError as e:
            raise SettingsValidationError(f"Cannot read {self.settings_path}: {e}")

        version = settings_dict.get("version", CURRENT_VERSION)
        if version != CURRENT_VERSION:
            raise SettingsValidationError(
                f"Unsupported settings version {version} (expected {CURRENT_VERSION})"
            )

        try:
            return Settings.model_validate(settings_dict)
        except ValidationError as e:
            raise SettingsValidationError(str(e))

    def delete(self) -> bool:
        """Delete settings file.

        Returns:
            True if file was deleted, False if it didn't exist
        """
        if self.exists:
            self.settings_path.unlink()
            return True
        return False


def build_inventory(settings: Settings) -> Inventory:
    """Wire storage and service from settings. The inventory is not loaded yet."""
    repository = StorageRepository(
        FileKeyValueStore(settings.storage_dir),
        key=settings.storage_key,
    )
    service = VehicleService(policy=settings.registration)
    return Inventory(repository, service)
