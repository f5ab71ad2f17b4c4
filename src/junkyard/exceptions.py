"""Custom exceptions for junkyard.

Core operations report failures as ``Result`` values. These exceptions are
what ``Result.unwrap()`` raises, and what the CLI catches.
"""

from typing import Optional

from junkyard.models.results import DomainError, ErrorCode


class JunkyardError(Exception):
    """Base exception for all junkyard errors."""

    def __init__(self, message: str, details: Optional[str] = None) -> None:
        self.message = message
        self.details = details
        super().__init__(message)


# ─────────────────────────────────────────────────────────────────────────────
# Vehicle Errors
# ─────────────────────────────────────────────────────────────────────────────


class VehicleError(JunkyardError):
    """Base class for errors carrying a domain error code."""

    code: ErrorCode = ErrorCode.VALIDATION_ERROR

    def __init__(
        self,
        message: str,
        details: Optional[str] = None,
        field_errors: Optional[dict[str, str]] = None,
    ) -> None:
        super().__init__(message, details)
        self.field_errors = field_errors or {}


class VehicleValidationError(VehicleError):
    """Vehicle data failed validation."""

    code = ErrorCode.VALIDATION_ERROR


class NicknameTakenError(VehicleError):
    """Another vehicle already uses the nickname."""

    code = ErrorCode.NICKNAME_TAKEN


class VehicleNotFoundError(VehicleError):
    """No vehicle with the given id."""

    code = ErrorCode.VEHICLE_NOT_FOUND


class VehicleTypeChangeError(VehicleError):
    """An update tried to change the vehicle type."""

    code = ErrorCode.CANNOT_CHANGE_TYPE


# ─────────────────────────────────────────────────────────────────────────────
# Storage Errors
# ─────────────────────────────────────────────────────────────────────────────


class StorageError(VehicleError):
    """The underlying key-value store could not be read or written."""

    code = ErrorCode.STORAGE_ERROR


# ─────────────────────────────────────────────────────────────────────────────
# Settings Errors
# ─────────────────────────────────────────────────────────────────────────────


class SettingsError(JunkyardError):
    """Base class for settings errors."""


class SettingsValidationError(SettingsError):
    """Settings file could not be parsed or validated."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            "Invalid settings file",
            reason,
        )


# ─────────────────────────────────────────────────────────────────────────────
# Usage Errors
# ─────────────────────────────────────────────────────────────────────────────


class InventoryContextError(JunkyardError):
    """Inventory looked up outside of an inventory scope."""

    def __init__(self) -> None:
        super().__init__(
            "use_inventory() called outside of an inventory scope",
            "Wrap the caller in 'with inventory_scope(inventory):'.",
        )


_ERRORS_BY_CODE: dict[ErrorCode, type[VehicleError]] = {
    ErrorCode.VALIDATION_ERROR: VehicleValidationError,
    ErrorCode.NICKNAME_TAKEN: NicknameTakenError,
    ErrorCode.VEHICLE_NOT_FOUND: VehicleNotFoundError,
    ErrorCode.CANNOT_CHANGE_TYPE: VehicleTypeChangeError,
    ErrorCode.STORAGE_ERROR: StorageError,
}


def error_for(error: DomainError) -> VehicleError:
    """Build the exception matching a domain error."""
    details = None
    if error.field_errors:
        details = "; ".join(
            f"{field}: {reason}" for field, reason in error.field_errors.items()
        )
    return _ERRORS_BY_CODE[error.code](
        error.message,
        details,
        field_errors=error.field_errors,
    )
