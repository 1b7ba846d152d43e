"""Tests for checkout payload validation (first failure wins)."""

import copy

import pytest

from craftly.application.services.order_validation import seller_allows, validate_order_request
from craftly.domain.exceptions import ValidationException
from craftly.domain.validators import UNSUPPORTED_DOMAIN_MESSAGE

VALID_ORDER = {
    "items": [
        {
            "productId": "p1",
            "productName": "Woven Basket",
            "quantity": 2,
            "price": 150.0,
            "sellerId": "seller1",
        }
    ],
    "totalAmount": 350.0,
    "shippingMethod": "local-delivery",
    "shippingAddress": {
        "fullName": "Juan Dela Cruz",
        "email": "juan@gmail.com",
        "contactNumber": "09171234567",
        "streetAddress": "123 Rizal Street",
        "barangay": "Bonuan",
    },
    "deliveryFee": 50,
    "paymentMethod": "cod",
}


def order(**changes) -> dict:
    data = copy.deepcopy(VALID_ORDER)
    data.update(changes)
    return data


def address(**changes) -> dict:
    data = copy.deepcopy(VALID_ORDER["shippingAddress"])
    data.update(changes)
    return data


def error_of(data, sellers=None) -> str:
    with pytest.raises(ValidationException) as exc_info:
        validate_order_request(data, sellers)
    return exc_info.value.message


def test_valid_order_passes() -> None:
    validate_order_request(VALID_ORDER)


@pytest.mark.parametrize("items", [None, [], "basket"])
def test_items_required(items) -> None:
    assert error_of(order(items=items)) == "Order must contain at least one item"


def test_item_fields_required() -> None:
    item = {"productId": "p1", "quantity": 1, "price": 10}
    assert error_of(order(items=[item])) == (
        "Each item must have productId, productName, quantity, and price"
    )


def test_item_quantity_and_price_bounds() -> None:
    base = VALID_ORDER["items"][0]
    assert error_of(order(items=[{**base, "quantity": 0}])) == "Item quantity must be greater than 0"
    assert error_of(order(items=[{**base, "price": -1}])) == "Item price cannot be negative"


@pytest.mark.parametrize("field", ["quantity", "price"])
@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf"), True])
def test_item_numbers_must_be_finite(field, value) -> None:
    item = {**VALID_ORDER["items"][0], field: value}
    assert error_of(order(items=[item])) == (
        "Each item must have productId, productName, quantity, and price"
    )


@pytest.mark.parametrize(
    "changes",
    [
        {"productId": ["p1"]},
        {"productId": "p1/reviews/x"},
        {"sellerId": ["seller1"]},
        {"sellerId": "seller1/notifications/x"},
    ],
)
def test_item_ids_must_be_document_ids(changes) -> None:
    item = {**VALID_ORDER["items"][0], **changes}
    assert error_of(order(items=[item])) == "Invalid productId or sellerId in items"


def test_item_without_seller_is_accepted() -> None:
    item = {**VALID_ORDER["items"][0], "sellerId": None}
    validate_order_request(order(items=[item]))


@pytest.mark.parametrize("total", [0, -5, "100", None, float("nan"), float("inf")])
def test_total_must_be_positive_number(total) -> None:
    assert error_of(order(totalAmount=total)) == "Total amount must be a positive number"


def test_shipping_method_must_be_known() -> None:
    assert error_of(order(shippingMethod="drone")) == (
        "Shipping method must be one of: local-delivery, store-pickup"
    )


def test_items_are_checked_before_total() -> None:
    assert error_of(order(items=[], totalAmount=0)) == "Order must contain at least one item"


def test_address_required_fields() -> None:
    assert error_of(order(shippingAddress=None)) == "Shipping address is required"
    assert error_of(order(shippingAddress=address(email=""))) == (
        "Shipping address must include fullName, email, and contactNumber"
    )


def test_local_delivery_needs_street_and_barangay() -> None:
    assert error_of(order(shippingAddress=address(streetAddress=" "))) == (
        "Street address is required for local delivery"
    )
    assert "house/building number" in error_of(
        order(shippingAddress=address(streetAddress="Rizal Street"))
    )
    assert error_of(order(shippingAddress=address(barangay=""))) == (
        "Barangay is required for local delivery"
    )


def test_store_pickup_does_not_need_street() -> None:
    validate_order_request(
        order(shippingMethod="store-pickup", shippingAddress=address(streetAddress="", barangay="")),
        {"seller1": {"allowPickup": True}},
    )


def test_address_email_and_phone() -> None:
    assert error_of(order(shippingAddress=address(email="bad"))) == (
        "Invalid email address in shipping address"
    )
    assert error_of(order(shippingAddress=address(email="juan@company.ph"))) == (
        UNSUPPORTED_DOMAIN_MESSAGE
    )
    assert error_of(order(shippingAddress=address(contactNumber="12345"))) == (
        "Invalid phone number in shipping address"
    )


def test_delivery_fee_and_payment_method() -> None:
    assert error_of(order(deliveryFee=-1)) == "Delivery fee must be a non-negative number"
    assert error_of(order(paymentMethod="card")) == "Payment method must be one of: cod, gcash"


def test_seller_that_disallows_delivery_is_reported_by_product() -> None:
    message = error_of(VALID_ORDER, {"seller1": {"allowShipping": False}})
    assert message.startswith('The seller of "Woven Basket" does not allow local delivery.')


def test_seller_pickup_defaults_to_not_allowed() -> None:
    data = order(shippingMethod="store-pickup")
    message = error_of(data, {"seller1": {"fullName": "Shop"}})
    assert "does not allow store pickup" in message


def test_unknown_sellers_are_not_checked() -> None:
    validate_order_request(order(shippingMethod="store-pickup"), {"seller1": None})


def test_seller_allows_defaults() -> None:
    assert seller_allows(None, "local-delivery") is True
    assert seller_allows(None, "store-pickup") is False
    assert seller_allows({"allowPickup": True}, "store-pickup") is True
