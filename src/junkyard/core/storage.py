"""Vehicle storage.

Vehicles are kept as one versioned JSON document under a single key of a
key-value store. Loading validates the whole document; anything unreadable
or invalid is wiped so the app never gets stuck on bad local data.
"""

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Optional, Protocol, Union

import platformdirs
from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic_core import to_json

from junkyard.models.persisted import STORAGE_VERSION, PersistedVehicle, StorageEnvelope
from junkyard.models.results import ErrorCode, Result, field_errors_from
from junkyard.models.settings import DEFAULT_STORAGE_KEY
from junkyard.models.vehicle import Vehicle, vehicle_adapter

logger = logging.getLogger(__name__)

STORAGE_KEY = DEFAULT_STORAGE_KEY

_persisted_adapter = TypeAdapter(PersistedVehicle)

RecordLike = Union[Vehicle, Mapping[str, Any]]


class KeyValueStore(Protocol):
    """Minimal string key-value store.

    Implementations signal access failures (quota, permissions, I/O) by
    raising OSError.
    """

    def get_item(self, key: str) -> Optional[str]:
        """Return the stored value, or None if the key is absent."""
        ...

    def set_item(self, key: str, value: str) -> None:
        """Store a value under a key."""
        ...

    def remove_item(self, key: str) -> None:
        """Remove a key; absent keys are ignored."""
        ...


class MemoryKeyValueStore:
    """In-memory store (for testing and ephemeral sessions)."""

    def __init__(self, items: Optional[dict[str, str]] = None) -> None:
        self.items: dict[str, str] = dict(items or {})

    def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)


class FileKeyValueStore:
    """Store each key as a JSON file in a directory."""

    def __init__(self, data_dir: Optional[Path] = None) -> None:
        """Initialize file store.

        Args:
            data_dir: Override data directory (for testing)
        """
        if data_dir:
            self._data_dir = Path(data_dir)
        else:
            self._data_dir = Path(platformdirs.user_data_dir("junkyard"))

    @property
    def data_dir(self) -> Path:
        """Directory holding the key files."""
        return self._data_dir

    def path_for(self, key: str) -> Path:
        """File path backing a key."""
        return self._data_dir / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.exists():
            return None
        # Undecodable bytes surface as invalid JSON and get wiped
        return path.read_bytes().decode("utf-8", errors="replace")

    def set_item(self, key: str, value: str) -> None:
        self._data_dir.mkdir(parents=True, exist_ok=True)
        path = self.path_for(key)
        tmp_path = path.with_suffix(".tmp")
        tmp_path.write_text(value, encoding="utf-8")
        tmp_path.replace(path)

    def remove_item(self, key: str) -> None:
        self.path_for(key).unlink(missing_ok=True)


def _to_json(record: RecordLike) -> Union[str, bytes]:
    """Serialize a record the way it will be stored."""
    if isinstance(record, BaseModel):
        return record.model_dump_json(by_alias=True)
    return to_json(record, fallback=str)


class StorageRepository:
    """Persists the vehicle list under one key of a key-value store."""

    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        key: str = STORAGE_KEY,
    ) -> None:
        """Initialize repository.

        Args:
            store: Backing store; a FileKeyValueStore in the platform data dir
                when omitted
            key: Storage key for the vehicle document
        """
        self.store = store if store is not None else FileKeyValueStore()
        self.key = key

    def save(self, vehicles: Sequence[RecordLike]) -> "Result[None]":
        """Validate and write all vehicles.

        Nothing is written unless every record is valid.

        Returns:
            Empty success, VALIDATION_ERROR for the first invalid record, or
            STORAGE_ERROR if the store write fails
        """
        records = []
        for index, vehicle in enumerate(vehicles):
            try:
                records.append(
                    _persisted_adapter.validate_json(_to_json(vehicle))
                )
            except ValidationError as e:
                logger.warning("Refusing to save invalid vehicle at index %d", index)
                return Result.failure(
                    ErrorCode.VALIDATION_ERROR,
                    "Invalid vehicle data cannot be saved",
                    field_errors=field_errors_from(e),
                )

        envelope = StorageEnvelope(version=STORAGE_VERSION, vehicles=records)
        serialized = envelope.model_dump_json(by_alias=True)

        try:
            self.store.set_item(self.key, serialized)
        except OSError as e:
            logger.exception("Failed to write vehicle data")
            return Result.failure(ErrorCode.STORAGE_ERROR, str(e) or "Failed to save data")

        logger.debug("Saved %d vehicles under %s", len(records), self.key)
        return Result.success()

    def load(self) -> "Result[list[Vehicle]]":
        """Read and validate stored vehicles.

        A missing key is the first-run state and yields an empty list.
        Corrupt or invalid data is removed and also yields an empty list.

        Returns:
            Result holding the vehicles, or STORAGE_ERROR if the store
            read fails
        """
        try:
            raw = self.store.get_item(self.key)
        except OSError as e:
            logger.exception("Failed to read vehicle data")
            return Result.failure(ErrorCode.STORAGE_ERROR, str(e) or "Failed to load data")

        if not raw:
            return Result.success([])

        # Strict JSON validation: no coercion of stored values
        try:
            envelope = StorageEnvelope.model_validate_json(raw)
        except ValidationError as e:
            logger.warning(
                "Stored vehicle data is invalid (%s); discarding it",
                e.errors()[0]["type"],
            )
            return self._discard()

        vehicles = [
            vehicle_adapter.validate_python(record.model_dump())
            for record in envelope.vehicles
        ]
        logger.debug("Loaded %d vehicles from %s", len(vehicles), self.key)
        return Result.success(vehicles)

    def clear(self) -> None:
        """Remove stored vehicle data. Never raises."""
        try:
            self.store.remove_item(self.key)
        except OSError:
            logger.exception("Failed to clear vehicle data")

    def _discard(self) -> Result:
        self.clear()
        return Result.success([])
