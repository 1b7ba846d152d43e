"""Checkout payload validation.

Checks run in a fixed order and the first failure is reported, so the
client always sees the most basic problem first (items, then totals, then
shipping, then payment).
"""

import math
from collections.abc import Mapping
from typing import Any

from craftly.core.constants import DEFAULT_ALLOW_PICKUP, DEFAULT_ALLOW_SHIPPING
from craftly.domain.enums import PaymentMethod, ShippingMethod
from craftly.domain.exceptions import ValidationException
from craftly.domain.validators import (
    UNSUPPORTED_DOMAIN_MESSAGE,
    has_number_and_letter,
    is_allowed_email_domain,
    is_valid_document_id,
    is_valid_email,
    is_valid_phone_number,
)


def is_number(value: Any) -> bool:
    """Finite int or float; JSON bodies may carry NaN and Infinity."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def seller_allows(seller: Mapping[str, Any] | None, method: str) -> bool:
    """Whether a seller accepts the shipping method (unknown sellers use the defaults)."""
    seller = seller or {}
    if method == ShippingMethod.LOCAL_DELIVERY.value:
        allow = seller.get("allowShipping")
        return DEFAULT_ALLOW_SHIPPING if allow is None else bool(allow)
    allow = seller.get("allowPickup")
    return DEFAULT_ALLOW_PICKUP if allow is None else bool(allow)


def _validate_items(items: Any) -> None:
    if not isinstance(items, list) or not items:
        raise ValidationException("Order must contain at least one item", field="items")
    for item in items:
        if (
            not isinstance(item, Mapping)
            or not item.get("productId")
            or not item.get("productName")
            or not is_number(item.get("quantity"))
            or not is_number(item.get("price"))
        ):
            raise ValidationException(
                "Each item must have productId, productName, quantity, and price",
                field="items",
            )
        seller_id = item.get("sellerId")
        if not is_valid_document_id(item["productId"]) or (
            seller_id and not is_valid_document_id(seller_id)
        ):
            raise ValidationException("Invalid productId or sellerId in items", field="items")
        if item["quantity"] <= 0:
            raise ValidationException("Item quantity must be greater than 0", field="items")
        if item["price"] < 0:
            raise ValidationException("Item price cannot be negative", field="items")


def _validate_sellers(
    items: list[Mapping[str, Any]],
    method: str,
    sellers: Mapping[str, Mapping[str, Any] | None],
) -> None:
    for item in items:
        seller_id = item.get("sellerId")
        if not seller_id or sellers.get(seller_id) is None:
            continue
        if seller_allows(sellers[seller_id], method):
            continue
        name = item["productName"]
        if method == ShippingMethod.LOCAL_DELIVERY.value:
            raise ValidationException(
                f'The seller of "{name}" does not allow local delivery. Please select '
                "store pickup or choose items from a seller who offers delivery.",
                field="shippingMethod",
            )
        raise ValidationException(
            f'The seller of "{name}" does not allow store pickup. Please select '
            "local delivery or choose items from a seller who offers pickup.",
            field="shippingMethod",
        )


def _validate_address(address: Any, method: str) -> None:
    if not isinstance(address, Mapping):
        raise ValidationException("Shipping address is required", field="shippingAddress")
    email = address.get("email")
    contact = address.get("contactNumber")
    if not address.get("fullName") or not email or not contact:
        raise ValidationException(
            "Shipping address must include fullName, email, and contactNumber",
            field="shippingAddress",
        )
    if method == ShippingMethod.LOCAL_DELIVERY.value:
        street = address.get("streetAddress")
        if not isinstance(street, str) or not street.strip():
            raise ValidationException(
                "Street address is required for local delivery", field="streetAddress"
            )
        if not has_number_and_letter(street):
            raise ValidationException(
                "Street address must include both house/building number and street name "
                '(e.g., "123 Main Street")',
                field="streetAddress",
            )
        barangay = address.get("barangay")
        if not isinstance(barangay, str) or not barangay.strip():
            raise ValidationException("Barangay is required for local delivery", field="barangay")
    if not isinstance(email, str) or not is_valid_email(email):
        raise ValidationException("Invalid email address in shipping address", field="email")
    if not is_allowed_email_domain(email):
        raise ValidationException(UNSUPPORTED_DOMAIN_MESSAGE, field="email")
    if not is_valid_phone_number(str(contact)):
        raise ValidationException(
            "Invalid phone number in shipping address", field="contactNumber"
        )


def validate_order_request(
    data: Mapping[str, Any],
    sellers: Mapping[str, Mapping[str, Any] | None] | None = None,
) -> None:
    """Raise ValidationException for the first problem in a checkout payload.

    Args:
        data: Request body (items, totalAmount, shippingMethod, shippingAddress,
            deliveryFee, paymentMethod).
        sellers: Seller user documents keyed by uid; sellers that are absent or
            None are not checked for delivery settings.
    """
    items = data.get("items")
    _validate_items(items)

    total = data.get("totalAmount")
    if not is_number(total) or total <= 0:
        raise ValidationException("Total amount must be a positive number", field="totalAmount")

    method = data.get("shippingMethod")
    if not ShippingMethod.has_value(method):
        raise ValidationException(
            f"Shipping method must be one of: {', '.join(ShippingMethod.values())}",
            field="shippingMethod",
        )
    _validate_sellers(items, method, sellers or {})
    _validate_address(data.get("shippingAddress"), method)

    fee = data.get("deliveryFee")
    if not is_number(fee) or fee < 0:
        raise ValidationException("Delivery fee must be a non-negative number", field="deliveryFee")

    if not PaymentMethod.has_value(data.get("paymentMethod")):
        raise ValidationException(
            f"Payment method must be one of: {', '.join(PaymentMethod.values())}",
            field="paymentMethod",
        )
