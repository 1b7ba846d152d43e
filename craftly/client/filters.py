"""Client-side product search, filtering and sorting for the marketplace list."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

SORT_NEWEST = "newest"
SORT_PRICE_ASC = "price-asc"
SORT_PRICE_DESC = "price-desc"
SORT_NAME = "name"
ALL_CATEGORIES = "all"


def _price(product: dict[str, Any]) -> float:
    try:
        return float(product.get("price") or 0)
    except (TypeError, ValueError):
        return 0.0


def search_products(products: Iterable[dict[str, Any]], query: str) -> list[dict[str, Any]]:
    """Products whose name, description or category contains query (case-insensitive)."""
    query = (query or "").strip().lower()
    products = list(products)
    if not query:
        return products
    return [
        p
        for p in products
        if query in str(p.get("name") or "").lower()
        or query in str(p.get("description") or "").lower()
        or query in str(p.get("category") or "").lower()
    ]


def filter_by_category(products: Iterable[dict[str, Any]], category: str) -> list[dict[str, Any]]:
    products = list(products)
    if not category or category.lower() == ALL_CATEGORIES:
        return products
    return [p for p in products if str(p.get("category") or "").lower() == category.lower()]


def filter_by_price(
    products: Iterable[dict[str, Any]],
    min_price: float | None = None,
    max_price: float | None = None,
) -> list[dict[str, Any]]:
    return [
        p
        for p in products
        if (min_price is None or _price(p) >= min_price)
        and (max_price is None or _price(p) <= max_price)
    ]


def sort_products(products: Iterable[dict[str, Any]], sort_by: str) -> list[dict[str, Any]]:
    """Sort by newest (createdAt desc), price or name; unknown keys keep the order."""
    products = list(products)
    if sort_by == SORT_NEWEST:
        # ISO-8601 timestamps order correctly as strings.
        return sorted(products, key=lambda p: str(p.get("createdAt") or ""), reverse=True)
    if sort_by == SORT_PRICE_ASC:
        return sorted(products, key=_price)
    if sort_by == SORT_PRICE_DESC:
        return sorted(products, key=_price, reverse=True)
    if sort_by == SORT_NAME:
        return sorted(products, key=lambda p: str(p.get("name") or "").lower())
    return products


def apply_filters(
    products: Iterable[dict[str, Any]],
    *,
    query: str = "",
    category: str = ALL_CATEGORIES,
    sort_by: str = SORT_NEWEST,
    min_price: float | None = None,
    max_price: float | None = None,
    in_stock_only: bool = False,
) -> list[dict[str, Any]]:
    result = filter_by_category(search_products(products, query), category)
    result = filter_by_price(result, min_price, max_price)
    if in_stock_only:
        result = [p for p in result if (p.get("stock") or 0) > 0]
    return sort_products(result, sort_by)
