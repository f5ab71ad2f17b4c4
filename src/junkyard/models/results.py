"""Result models for vehicle operations."""

from enum import Enum
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError

from junkyard.models.registration import RegistrationState
from junkyard.models.vehicle import VehicleType

T = TypeVar("T")

# Union tags pydantic inserts into error locations
_UNION_TAGS = frozenset(
    [t.value for t in VehicleType] + [s.value for s in RegistrationState]
)


class ErrorCode(str, Enum):
    """Domain error categories."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    NICKNAME_TAKEN = "NICKNAME_TAKEN"
    VEHICLE_NOT_FOUND = "VEHICLE_NOT_FOUND"
    CANNOT_CHANGE_TYPE = "CANNOT_CHANGE_TYPE"
    STORAGE_ERROR = "STORAGE_ERROR"


class DomainError(BaseModel):
    """Failure returned by a service or storage operation."""

    model_config = ConfigDict(frozen=True)

    code: ErrorCode
    message: str
    field_errors: Optional[dict[str, str]] = None


class Result(BaseModel, Generic[T]):
    """Success/failure value returned instead of raising.

    Exactly one of ``value`` (when ``ok``) or ``error`` is meaningful.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    ok: bool
    value: Optional[T] = None
    error: Optional[DomainError] = None

    @classmethod
    def success(cls, value: Any = None) -> "Result":
        """Build a successful result."""
        return cls(ok=True, value=value)

    @classmethod
    def failure(
        cls,
        code: ErrorCode,
        message: str,
        field_errors: Optional[dict[str, str]] = None,
    ) -> "Result":
        """Build a failed result."""
        return cls(
            ok=False,
            error=DomainError(code=code, message=message, field_errors=field_errors),
        )

    @classmethod
    def from_error(cls, error: DomainError) -> "Result":
        """Re-wrap an existing error, e.g. to pass it up a layer."""
        return cls(ok=False, error=error)

    def unwrap(self) -> T:
        """Return the value or raise the matching JunkyardError.

        Raises:
            VehicleError: For domain failures
            StorageError: For storage failures
        """
        if self.ok:
            return self.value

        # Lazy import to avoid circular dependencies
        from junkyard.exceptions import error_for

        raise error_for(self.error)


def field_errors_from(exc: ValidationError) -> dict[str, str]:
    """Flatten a pydantic ValidationError into ``{field: message}``.

    Keys are dotted camelCase paths with list indexes and union tags
    dropped; the first message per field wins.
    """
    errors: dict[str, str] = {}
    for error in exc.errors():
        parts = [
            str(part)
            for part in error["loc"]
            if not isinstance(part, int) and part not in _UNION_TAGS
        ]
        field = ".".join(parts) or "vehicle"
        errors.setdefault(field, error["msg"])
    return errors
