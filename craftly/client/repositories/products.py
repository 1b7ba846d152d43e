"""Product catalogue with a five-minute list cache and per-product stats cache."""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from craftly.client.api_client import ApiClient
from craftly.client.cache import Clock, KeyedTtlCache, TtlCache
from craftly.client.config import get_client_settings
from craftly.client.errors import ApiError
from craftly.client.filters import apply_filters
from craftly.client.models import ProductStats
from craftly.client.repositories.base import BaseRepository
from craftly.client.result import Result
from craftly.client.session import SessionStore

logger = logging.getLogger(__name__)


class ProductRepository(BaseRepository):
    def __init__(
        self,
        api: ApiClient,
        session: SessionStore | None = None,
        *,
        products_ttl: float | None = None,
        stats_ttl: float | None = None,
        clock: Clock = time.monotonic,
    ) -> None:
        super().__init__(api, session)
        settings = get_client_settings()
        self._products: TtlCache[list[dict[str, Any]]] = TtlCache(
            products_ttl if products_ttl is not None else settings.products_cache_ttl_seconds,
            clock,
        )
        self._stats: KeyedTtlCache[str, ProductStats] = KeyedTtlCache(
            stats_ttl if stats_ttl is not None else settings.stats_cache_ttl_seconds,
            clock,
        )

    async def get_all_products(self, force_refresh: bool = False) -> Result[list[dict[str, Any]]]:
        """Active products, served from cache while fresh."""
        if not force_refresh:
            cached = self._products.get()
            if cached is not None:
                return Result.success(cached)

        async def call() -> list[dict[str, Any]]:
            products = [p for p in await self._api.get("/products") if p]
            self._products.put(products)
            return products

        return await self._run("loading products", call)

    async def get_product(self, product_id: str) -> Result[dict[str, Any]]:
        return await self._run(
            f"loading product {product_id}", lambda: self._api.get(f"/products/{product_id}")
        )

    async def get_seller_products(self, seller_id: str) -> Result[list[dict[str, Any]]]:
        """The seller's active products, bypassing the shared list cache."""
        return await self._run(
            f"loading products of seller {seller_id}",
            lambda: self._api.get("/products", createdBy=seller_id, status="active"),
        )

    async def get_products_stats(self, product_ids: list[str]) -> dict[str, ProductStats]:
        """Stats for each product; only ids without fresh stats are requested.

        Never fails: when the request errors, the last known stats (or
        zeros) are returned.
        """
        missing = self._stats.missing(product_ids)
        if missing:
            try:
                data = await self._api.post("/products/batch/stats", {"productIds": missing})
                for pid, stats in (data or {}).items():
                    self._stats.put(pid, ProductStats.model_validate(stats))
            except (ApiError, httpx.HTTPError) as e:
                logger.warning("Error fetching stats: %s", e)
        return {pid: self._stats.peek(pid) or ProductStats() for pid in product_ids}

    async def get_product_stats(self, product_id: str) -> ProductStats:
        return (await self.get_products_stats([product_id]))[product_id]

    async def create_product(self, data: dict[str, Any]) -> Result[dict[str, Any]]:
        async def call() -> dict[str, Any]:
            self._require_user()
            product = await self._api.post("/products", data)
            self._products.clear()
            return product

        return await self._run("creating product", call)

    async def update_product(self, product_id: str, data: dict[str, Any]) -> Result[dict[str, Any]]:
        async def call() -> dict[str, Any]:
            self._require_user()
            product = await self._api.put(f"/products/{product_id}", data)
            self._products.clear()
            return product

        return await self._run(f"updating product {product_id}", call)

    async def delete_product(self, product_id: str) -> Result[None]:
        async def call() -> None:
            self._require_user()
            await self._api.delete(f"/products/{product_id}")
            self._products.clear()
            self._stats.invalidate(product_id)

        return await self._run(f"deleting product {product_id}", call)

    def apply_filters_and_sort(
        self,
        products: list[dict[str, Any]],
        query: str = "",
        category: str = "all",
        sort_by: str = "newest",
    ) -> list[dict[str, Any]]:
        return apply_filters(products, query=query, category=category, sort_by=sort_by)

    def clear_cache(self) -> None:
        self._products.clear()
        self._stats.clear()
