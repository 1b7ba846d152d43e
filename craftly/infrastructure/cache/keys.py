"""Cache key builders. Single place for key format.

Key components (user IDs, product IDs) must not contain CACHE_KEY_SEP to
avoid ambiguous or colliding keys.
"""

from craftly.core.constants import (
    CACHE_KEY_SEP,
    CACHE_PREFIX_BUYER_ORDERS,
    CACHE_PREFIX_PRODUCT_STATS,
    CACHE_PREFIX_SELLER_ORDERS,
)


def _validate_key_component(value: str, name: str) -> None:
    """Raise ValueError if value is empty or contains the cache key separator."""
    if not value:
        raise ValueError(f"Cache key component {name!r} must be non-empty")
    if CACHE_KEY_SEP in value:
        raise ValueError(
            f"Cache key component {name!r} must not contain separator {CACHE_KEY_SEP!r}"
        )


def buyer_orders_key(user_id: str) -> str:
    """Cache key for a buyer's full order list."""
    _validate_key_component(user_id, "user_id")
    return f"{CACHE_PREFIX_BUYER_ORDERS}{CACHE_KEY_SEP}{user_id}"


def seller_orders_key(seller_id: str) -> str:
    """Cache key for the orders containing a seller's items."""
    _validate_key_component(seller_id, "seller_id")
    return f"{CACHE_PREFIX_SELLER_ORDERS}{CACHE_KEY_SEP}{seller_id}"


def product_stats_key(product_id: str) -> str:
    """Cache key for a product's rating/review/sales stats."""
    _validate_key_component(product_id, "product_id")
    return f"{CACHE_PREFIX_PRODUCT_STATS}{CACHE_KEY_SEP}{product_id}"
