"""Profile API schemas."""

from craftly.schemas.common import CamelModel


class ProfileUpdateRequest(CamelModel):
    full_name: str | None = None
    contact_number: str | None = None
    street_address: str | None = None
    barangay: str | None = None
    city: str | None = None
    postal_code: str | None = None
    country: str | None = None
    gcash_name: str | None = None
    gcash_number: str | None = None
    allow_shipping: bool | None = None
    allow_pickup: bool | None = None
