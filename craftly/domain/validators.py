"""Validation predicates shared by the API and the client SDK.

Predicates (is_*) return bool. validate_* helpers return a user-facing error
message, or None when the value is acceptable, so view models can show the
message next to the field.
"""

import re
from collections.abc import Mapping
from typing import Any

from craftly.domain.barangays import is_valid_barangay

EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
FULL_NAME_PATTERN = re.compile(r"[a-zA-Z\s'-]+")
POSTAL_CODE_PATTERN = re.compile(r"\d{4}")

ALLOWED_EMAIL_DOMAINS: frozenset[str] = frozenset(
    {
        "gmail.com",
        "yahoo.com",
        "outlook.com",
        "hotmail.com",
        "aol.com",
        "protonmail.com",
        "icloud.com",
        "mail.com",
        "zoho.com",
    }
)

MIN_PASSWORD_LENGTH = 6
STRONG_PASSWORD_SCORE = 3
MIN_FULL_NAME_LENGTH = 2
MIN_PHONE_DIGITS = 10
MIN_ADDRESS_LENGTH = 5
MIN_RATING = 1
MAX_RATING = 5
MIN_COMMENT_LENGTH = 10
MAX_COMMENT_LENGTH = 500

UNSUPPORTED_DOMAIN_MESSAGE = (
    "Email domain not supported. Please use gmail.com, yahoo.com, outlook.com, "
    "or other common providers"
)


def is_valid_email(email: str | None) -> bool:
    return bool(email) and EMAIL_PATTERN.fullmatch(email) is not None


def is_allowed_email_domain(email: str | None) -> bool:
    """True if the part after '@' is one of the common providers accepted at sign-up."""
    if not email or "@" not in email:
        return False
    return email.lower().split("@")[1] in ALLOWED_EMAIL_DOMAINS


def validate_email(email: str | None) -> str | None:
    if not email:
        return "Email is required"
    if not is_valid_email(email):
        return "Please enter a valid email"
    return None


def validate_password(password: str | None) -> str | None:
    if not password:
        return "Password is required"
    if len(password) < MIN_PASSWORD_LENGTH:
        return f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
    return None


def password_strength(password: str) -> int:
    """Score 0-5: one point each for length >= 8, an uppercase letter, a lowercase
    letter, a digit and a character that is neither letter nor digit."""
    score = 0
    if len(password) >= 8:
        score += 1
    if any(c.isupper() for c in password):
        score += 1
    if any(c.islower() for c in password):
        score += 1
    if any(c.isdigit() for c in password):
        score += 1
    if any(not c.isalnum() for c in password):
        score += 1
    return score


def validate_password_strength(password: str) -> str | None:
    if password_strength(password) >= STRONG_PASSWORD_SCORE:
        return None
    return "Password is too weak"


def is_valid_full_name(name: str | None) -> bool:
    """Letters, spaces, apostrophes and hyphens only; at least two characters."""
    if not name or len(name) < MIN_FULL_NAME_LENGTH:
        return False
    return FULL_NAME_PATTERN.fullmatch(name) is not None


def validate_name(name: str | None, label: str = "Name") -> str | None:
    if not name:
        return f"{label} is required"
    if len(name) < MIN_FULL_NAME_LENGTH:
        return f"{label} must be at least {MIN_FULL_NAME_LENGTH} characters"
    if not is_valid_full_name(name):
        return f"{label} contains invalid characters"
    return None


def phone_digits(phone: str) -> str:
    return re.sub(r"\D", "", phone)


def is_valid_phone_number(phone: str | None) -> bool:
    """At least ten digits once spaces, dashes and the leading + are stripped."""
    if not phone or not isinstance(phone, str):
        return False
    return len(phone_digits(phone)) >= MIN_PHONE_DIGITS


def is_valid_postal_code(postal_code: str | None) -> bool:
    """Philippine postal codes are exactly four digits."""
    if not postal_code or not isinstance(postal_code, str):
        return False
    return POSTAL_CODE_PATTERN.fullmatch(postal_code.strip()) is not None


def has_number_and_letter(value: str) -> bool:
    return re.search(r"\d", value) is not None and re.search(r"[a-zA-Z]", value) is not None


def is_valid_address(address: str | None) -> bool:
    """House/building number plus street name, e.g. "123 Main Street"."""
    if not address or not isinstance(address, str):
        return False
    if len(address.strip()) < MIN_ADDRESS_LENGTH:
        return False
    return has_number_and_letter(address)


def is_valid_rating(rating: Any) -> bool:
    if isinstance(rating, bool) or not isinstance(rating, (int, float)):
        return False
    return MIN_RATING <= rating <= MAX_RATING and float(rating).is_integer()


def validate_rating(rating: Any) -> str | None:
    if not is_valid_rating(rating):
        return f"Rating must be between {MIN_RATING} and {MAX_RATING}"
    return None


def is_valid_review_comment(comment: str | None) -> bool:
    if not isinstance(comment, str):
        return False
    return MIN_COMMENT_LENGTH <= len(comment) <= MAX_COMMENT_LENGTH


def validate_review_comment(comment: str | None) -> str | None:
    if not is_valid_review_comment(comment):
        return (
            f"Comment must be between {MIN_COMMENT_LENGTH} and "
            f"{MAX_COMMENT_LENGTH} characters"
        )
    return None


def _has_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def validate_profile_data(data: Mapping[str, Any]) -> list[str]:
    """Validate the optional fields of a profile update.

    Fields that are absent or empty are skipped; a whitespace-only value is
    checked like any other, except for the two address fields, which skip
    blank text. Returns every failure, in field order, so the client can
    show them together.
    """
    errors: list[str] = []
    if data.get("barangay") and not is_valid_barangay(data["barangay"]):
        errors.append("Invalid barangay. Please select a valid Dagupan barangay.")
    if data.get("shopBarangay") and not is_valid_barangay(data["shopBarangay"]):
        errors.append("Invalid shop barangay. Please select a valid Dagupan barangay.")
    if data.get("contactNumber") and not is_valid_phone_number(data["contactNumber"]):
        errors.append("Invalid contact number. Must be a valid Philippine phone number.")
    if data.get("gcashNumber") and not is_valid_phone_number(data["gcashNumber"]):
        errors.append("Invalid GCash number. Must be a valid Philippine phone number.")
    if data.get("postalCode") and not is_valid_postal_code(data["postalCode"]):
        errors.append("Invalid postal code. Please use a 4-digit Philippine postal code.")
    if _has_text(data.get("streetAddress")) and not is_valid_address(data["streetAddress"]):
        errors.append("Street address must include house/building number and street name.")
    if _has_text(data.get("shopAddress")) and not is_valid_address(data["shopAddress"]):
        errors.append("Shop address must include house/building number and street name.")
    return errors


DOCUMENT_ID_PATTERN = re.compile(r"[A-Za-z0-9_-]{1,128}")


def is_valid_document_id(value: Any) -> bool:
    """IDs used in Firestore paths and cache keys: letters, digits, '_' and '-'."""
    return isinstance(value, str) and DOCUMENT_ID_PATTERN.fullmatch(value) is not None
