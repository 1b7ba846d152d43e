"""User profile: contact details, delivery address, GCash details and seller delivery options."""

from __future__ import annotations

import logging
from typing import Any

from craftly.application.services.order_validation import seller_allows
from craftly.core.constants import DEFAULT_CITY, DEFAULT_COUNTRY, DEFAULT_POSTAL_CODE
from craftly.domain.barangays import canonical_barangay
from craftly.domain.enums import ShippingMethod
from craftly.domain.exceptions import (
    AuthorizationException,
    ResourceNotFoundException,
    ValidationException,
)
from craftly.domain.roles import primary_role, roles_of
from craftly.domain.validators import is_valid_phone_number, validate_profile_data
from craftly.infrastructure.security.recovery_codes import codes_remaining
from craftly.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)

TEXT_FIELDS = (
    "fullName",
    "contactNumber",
    "streetAddress",
    "barangay",
    "city",
    "postalCode",
    "country",
    "gcashName",
    "gcashNumber",
)
FLAG_FIELDS = ("allowShipping", "allowPickup")


def profile_view(uid: str, user: dict[str, Any]) -> dict[str, Any]:
    """Public profile shape; missing address fields fall back to the Dagupan defaults."""
    roles = roles_of(user) or ["buyer"]
    return {
        "uid": uid,
        "email": user.get("email"),
        "fullName": user.get("fullName"),
        "role": user.get("role") or primary_role(roles),
        "roles": roles,
        "contactNumber": user.get("contactNumber") or None,
        "streetAddress": user.get("streetAddress") or None,
        "barangay": user.get("barangay") or None,
        "city": user.get("city") or DEFAULT_CITY,
        "postalCode": user.get("postalCode") or DEFAULT_POSTAL_CODE,
        "country": user.get("country") or DEFAULT_COUNTRY,
        "gcashName": user.get("gcashName") or None,
        "gcashNumber": user.get("gcashNumber") or None,
        "allowShipping": seller_allows(user, ShippingMethod.LOCAL_DELIVERY.value),
        "allowPickup": seller_allows(user, ShippingMethod.STORE_PICKUP.value),
        "codesRemaining": codes_remaining(user.get("recoveryCodes")),
    }


class ProfileService:
    def __init__(self, user_repo: Any) -> None:
        self._users = user_repo

    async def get_profile(self, uid: str) -> dict[str, Any]:
        user = await self._users.get_by_id(uid)
        if user is None:
            raise ResourceNotFoundException("User", uid)
        return profile_view(uid, user)

    async def update_profile(self, caller: str, uid: str, data: dict[str, Any]) -> dict[str, Any]:
        """Update the provided (non-empty) fields of the caller's own profile."""
        if caller != uid:
            raise AuthorizationException("Unauthorized to update this profile", resource="profile")
        contact = data.get("contactNumber")
        if contact and not is_valid_phone_number(contact):
            raise ValidationException("Invalid phone number format", field="contactNumber")
        gcash = data.get("gcashNumber")
        if gcash and not is_valid_phone_number(gcash):
            raise ValidationException("Invalid GCash number format", field="gcashNumber")
        errors = validate_profile_data(data)
        if errors:
            exc = ValidationException(errors[0])
            exc.details["errors"] = errors
            raise exc

        if await self._users.get_by_id(uid) is None:
            raise ResourceNotFoundException("User", uid)

        updates: dict[str, Any] = {}
        for name in TEXT_FIELDS:
            value = data.get(name)
            if isinstance(value, str) and value.strip():
                updates[name] = value.strip()
        if "barangay" in updates:
            updates["barangay"] = canonical_barangay(updates["barangay"]) or updates["barangay"]
        for name in FLAG_FIELDS:
            if isinstance(data.get(name), bool):
                updates[name] = data[name]
        updates["updatedAt"] = utc_now()
        await self._users.update(uid, updates)
        logger.info("Profile updated: %s (%s)", uid, ", ".join(sorted(updates)))
        return await self.get_profile(uid)
