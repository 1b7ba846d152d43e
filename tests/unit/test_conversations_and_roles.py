"""Tests for conversation identity and role helpers."""

import pytest

from craftly.domain.conversations import (
    build_conversation_id,
    other_participant,
    total_unread,
    unread_for,
)
from craftly.domain.enums import OrderStatus, PaymentMethod, Role, ShippingMethod
from craftly.domain.roles import (
    can_buy,
    can_sell,
    has_role,
    is_admin,
    is_seller,
    primary_role,
    roles_of,
)


def test_conversation_id_is_order_independent() -> None:
    assert build_conversation_id("bob", "alice") == "alice_bob"
    assert build_conversation_id("alice", "bob") == "alice_bob"


@pytest.mark.parametrize("a,b", [("", "bob"), ("alice", ""), ("alice", "alice")])
def test_conversation_id_needs_two_distinct_users(a: str, b: str) -> None:
    with pytest.raises(ValueError):
        build_conversation_id(a, b)


def test_other_participant() -> None:
    assert other_participant(["alice", "bob"], "alice") == "bob"
    assert other_participant(["alice"], "alice") is None


def test_unread_counts() -> None:
    conversations = [
        {"unreadCount": {"alice": 2, "bob": 0}},
        {"unreadCount": {"alice": 3}},
        {"unreadCount": {"alice": "x"}},
        {},
    ]
    assert unread_for(conversations[0], "alice") == 2
    assert unread_for(conversations[2], "alice") == 0
    assert total_unread(conversations, "alice") == 5


def test_roles_of_prefers_list_over_legacy_field() -> None:
    assert roles_of({"roles": ["buyer", "seller"], "role": "admin"}) == ["buyer", "seller"]
    assert roles_of({"role": "seller"}) == ["seller"]
    assert roles_of({"roles": []}) == []
    assert roles_of(None) == []


def test_primary_role_precedence() -> None:
    assert primary_role(["buyer", "seller"]) == "seller"
    assert primary_role(["seller", "admin"]) == "admin"
    assert primary_role([]) == "buyer"


def test_role_checks() -> None:
    seller = {"roles": ["buyer", "seller"]}
    admin = {"role": "admin"}
    assert is_seller(seller) and not is_admin(seller)
    assert is_admin(admin)
    assert has_role(seller, Role.BUYER)
    assert has_role(seller, "seller")
    assert can_sell(admin) and can_sell(seller)
    assert not can_sell({"roles": ["buyer"]})
    assert can_buy({})


def test_enum_values_match_client_strings() -> None:
    assert OrderStatus.values() == ["pending", "processing", "shipped", "delivered", "cancelled"]
    assert ShippingMethod.has_value("local-delivery")
    assert not ShippingMethod.has_value("drone")
    assert not PaymentMethod.has_value(None)
