"""Product catalogue use cases and per-product statistics.

Statistics (average rating, review count, units sold) are cached per
product under ``product_stats:{id}``; review and order writes invalidate
them through invalidate_stats().
"""

from __future__ import annotations

import asyncio
import logging
import math
from collections.abc import Iterable
from typing import Any

from craftly.application.dtos.product import ProductStats
from craftly.domain.enums import OrderStatus, ProductStatus
from craftly.domain.exceptions import (
    AuthorizationException,
    ResourceNotFoundException,
    ValidationException,
)
from craftly.domain.roles import is_admin
from craftly.domain.validators import is_valid_document_id
from craftly.infrastructure.cache.keys import product_stats_key
from craftly.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset(
    {"name", "description", "category", "price", "stock", "images", "status"}
)


def _as_price(value: Any) -> float:
    if isinstance(value, bool):
        raise ValidationException("Price must be a number", field="price")
    try:
        price = float(value)
    except (TypeError, ValueError) as e:
        raise ValidationException("Price must be a number", field="price") from e
    if not math.isfinite(price):
        raise ValidationException("Price must be a number", field="price")
    if price < 0:
        raise ValidationException("Price cannot be negative", field="price")
    return price


def _as_stock(value: Any) -> int:
    if isinstance(value, bool):
        raise ValidationException("Stock must be a whole number", field="stock")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValidationException("Stock must be a whole number", field="stock")
        value = int(value)
    try:
        stock = int(value)
    except (TypeError, ValueError) as e:
        raise ValidationException("Stock must be a whole number", field="stock") from e
    if stock < 0:
        raise ValidationException("Stock cannot be negative", field="stock")
    return stock


def sales_count(orders: Iterable[dict[str, Any]], product_id: str) -> int:
    """Units of product_id sold across orders that were not cancelled."""
    total = 0
    for order in orders:
        if order.get("orderStatus") == OrderStatus.CANCELLED.value:
            continue
        for item in order.get("items") or []:
            if item.get("productId") == product_id:
                total += int(item.get("quantity") or 0)
    return total


class ProductService:
    def __init__(
        self,
        product_repo: Any,
        review_repo: Any,
        order_repo: Any,
        user_repo: Any,
        cache: Any,
        stats_ttl: int = 300,
    ) -> None:
        self._products = product_repo
        self._reviews = review_repo
        self._orders = order_repo
        self._users = user_repo
        self._cache = cache
        self._stats_ttl = stats_ttl

    async def list_products(
        self,
        status: str | None = ProductStatus.ACTIVE.value,
        created_by: str | None = None,
    ) -> list[dict[str, Any]]:
        products = await self._products.find(status=status, created_by=created_by)
        logger.debug("Found %s products (status=%s, createdBy=%s)", len(products), status, created_by)
        return products

    async def get_product(self, product_id: str) -> dict[str, Any]:
        product = await self._products.get_by_id(product_id)
        if product is None:
            raise ResourceNotFoundException("Product", product_id)
        return product

    async def create_product(self, uid: str, data: dict[str, Any]) -> dict[str, Any]:
        name, description, category = (data.get(k) for k in ("name", "description", "category"))
        if not name or not description or not category or data.get("price") is None or data.get("stock") is None:
            raise ValidationException(
                "Missing required fields: name, description, category, price, stock"
            )
        now = utc_now()
        product = {
            "name": name,
            "description": description,
            "category": category,
            "price": _as_price(data["price"]),
            "stock": _as_stock(data["stock"]),
            "images": list(data.get("images") or []),
            "createdBy": uid,
            "status": ProductStatus.ACTIVE.value,
            "rating": 0,
            "reviewCount": 0,
            "createdAt": now,
            "updatedAt": now,
        }
        product_id = await self._products.create(product)
        logger.info("Product created: %s by %s", product_id, uid)
        return {**product, "id": product_id}

    async def _require_owner(self, uid: str, product_id: str, action: str) -> dict[str, Any]:
        product = await self.get_product(product_id)
        if product.get("createdBy") == uid:
            return product
        if is_admin(await self._users.get_by_id(uid)):
            return product
        raise AuthorizationException(
            f"You do not have permission to {action} this product", resource="product"
        )

    async def update_product(self, uid: str, product_id: str, data: dict[str, Any]) -> dict[str, Any]:
        """Apply the given catalogue fields. Only the owner or an admin may update."""
        await self._require_owner(uid, product_id, "update")
        fields = {k: v for k, v in data.items() if k in UPDATABLE_FIELDS}
        if "price" in fields:
            fields["price"] = _as_price(fields["price"])
        if "stock" in fields:
            fields["stock"] = _as_stock(fields["stock"])
        if "status" in fields and not ProductStatus.has_value(fields["status"]):
            raise ValidationException(
                f"Invalid status. Must be one of: {', '.join(ProductStatus.values())}",
                field="status",
            )
        fields["updatedAt"] = utc_now()
        await self._products.update(product_id, fields)
        logger.info("Product %s updated by %s", product_id, uid)
        return {**fields, "id": product_id}

    async def delete_product(self, uid: str, product_id: str) -> None:
        await self._require_owner(uid, product_id, "delete")
        await self._products.delete(product_id)
        await self.invalidate_stats([product_id])
        logger.info("Product %s deleted by %s", product_id, uid)

    async def _compute_stats(self, product_id: str) -> ProductStats:
        reviews, orders = await asyncio.gather(
            self._reviews.list_for_product(product_id),
            self._orders.list_by_product(product_id),
        )
        ratings = [float(r.get("rating") or 0) for r in reviews]
        average = round(sum(ratings) / len(ratings), 1) if ratings else 0.0
        return ProductStats(
            average_rating=average,
            review_count=len(ratings),
            sales_count=sales_count(orders, product_id),
        )

    async def get_stats(self, product_id: str) -> ProductStats:
        key = product_stats_key(product_id)
        cached = await self._cache.get(key)
        if cached is not None:
            return ProductStats.from_dict(cached)
        stats = await self._compute_stats(product_id)
        await self._cache.set(key, stats.to_dict(), ttl=self._stats_ttl)
        return stats

    async def get_stats_batch(self, product_ids: list[str]) -> dict[str, ProductStats]:
        """Stats for several products; duplicates are computed once."""
        if not all(is_valid_document_id(pid) for pid in product_ids):
            raise ValidationException("productIds must be a list of product IDs", field="productIds")
        unique = list(dict.fromkeys(product_ids))
        results = await asyncio.gather(*(self.get_stats(pid) for pid in unique))
        return dict(zip(unique, results, strict=True))

    async def invalidate_stats(self, product_ids: Iterable[str]) -> None:
        for product_id in set(product_ids):
            if is_valid_document_id(product_id):
                await self._cache.delete(product_stats_key(product_id))
