"""Registration business rules.

Every vehicle is registered when it is created, and the outcome never
changes afterwards. By default registration always succeeds; a
``RegistrationPolicy`` with mileage caps makes it fail for vehicles above
the cap for their type.
"""

import logging
import random
import secrets
import string
from typing import Optional

from junkyard.models.registration import (
    FailedRegistration,
    RegisteredRegistration,
    Registration,
)
from junkyard.models.settings import RegistrationPolicy
from junkyard.models.vehicle import VehicleType

logger = logging.getLogger(__name__)

REGISTRATION_ID_ALPHABET = string.ascii_uppercase + string.digits
REGISTRATION_SUFFIX_LENGTH = 5


def registration_prefix(vehicle_type: VehicleType) -> str:
    """Uppercase type name without hyphens, e.g. ``MINIVAN``."""
    return VehicleType(vehicle_type).value.upper().replace("-", "")


def generate_registration_id(
    vehicle_type: VehicleType,
    rng: Optional[random.Random] = None,
) -> str:
    """Generate a registration id in the format ``TYPE-XXXXX``.

    The suffix is drawn uniformly from A-Z and 0-9. Ids are only
    probabilistically unique; collisions are not checked.

    Args:
        vehicle_type: Type of the vehicle being registered
        rng: Random source override (for testing)
    """
    choice = rng.choice if rng is not None else secrets.choice
    suffix = "".join(
        choice(REGISTRATION_ID_ALPHABET) for _ in range(REGISTRATION_SUFFIX_LENGTH)
    )
    return f"{registration_prefix(vehicle_type)}-{suffix}"


def attempt_registration(
    vehicle_type: VehicleType,
    mileage: Optional[int] = None,
    policy: Optional[RegistrationPolicy] = None,
    rng: Optional[random.Random] = None,
) -> Registration:
    """Register a vehicle.

    Args:
        vehicle_type: Type of the vehicle
        mileage: Current mileage; only consulted when the policy caps it
        policy: Registration policy (defaults to always registering)
        rng: Random source override for the id suffix

    Returns:
        RegisteredRegistration, or FailedRegistration if a mileage cap applies
    """
    vehicle_type = VehicleType(vehicle_type)
    limit = policy.limit_for(vehicle_type) if policy else None

    if limit is not None and mileage is not None and mileage > limit:
        logger.info(
            "Registration refused: type=%s mileage=%d limit=%d",
            vehicle_type.value,
            mileage,
            limit,
        )
        return FailedRegistration(
            registration_error=(
                f"{vehicle_type.label} mileage ({mileage:,}) exceeds "
                f"maximum allowed ({limit:,})"
            ),
        )

    return RegisteredRegistration(
        registration_id=generate_registration_id(vehicle_type, rng=rng),
    )
