"""Role helpers for user documents.

Accounts created before multi-role support carry a single ``role`` string;
newer accounts carry a ``roles`` list. Every check goes through roles_of()
so both shapes behave the same.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from craftly.domain.enums import Role


def roles_of(user: Mapping[str, Any] | None) -> list[str]:
    """Return the role names on a user document (``roles`` list, else legacy ``role``)."""
    if not user:
        return []
    roles = user.get("roles")
    if isinstance(roles, list) and roles:
        return [str(r) for r in roles]
    legacy = user.get("role")
    return [str(legacy)] if legacy else []


def primary_role(roles: Iterable[str]) -> str:
    """Highest-privilege role for display (admin > seller > buyer)."""
    found = set(roles)
    for role in (Role.ADMIN, Role.SELLER, Role.BUYER):
        if role.value in found:
            return role.value
    return Role.BUYER.value


def has_role(user: Mapping[str, Any] | None, role: Role | str) -> bool:
    value = role.value if isinstance(role, Role) else role
    return value in roles_of(user)


def is_admin(user: Mapping[str, Any] | None) -> bool:
    return has_role(user, Role.ADMIN)


def is_seller(user: Mapping[str, Any] | None) -> bool:
    return has_role(user, Role.SELLER)


def is_buyer(user: Mapping[str, Any] | None) -> bool:
    return has_role(user, Role.BUYER)


def can_sell(user: Mapping[str, Any] | None) -> bool:
    """Sellers and admins may list products."""
    return is_seller(user) or is_admin(user)


def can_buy(user: Mapping[str, Any] | None) -> bool:
    """Every signed-in account can buy; a user with no roles is treated as a buyer."""
    return is_buyer(user) or not roles_of(user) or can_sell(user)
