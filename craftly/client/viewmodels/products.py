"""Marketplace list with search, category and sort."""

from __future__ import annotations

from typing import Any

from craftly.client.filters import ALL_CATEGORIES, SORT_NEWEST, apply_filters
from craftly.client.models import ProductStats
from craftly.client.repositories.products import ProductRepository
from craftly.client.viewmodels.state import Loading, Success, UiState, ViewModel


class ProductsViewModel(ViewModel):
    """Success holds the filtered products; the full list is kept for re-filtering."""

    def __init__(self, repository: ProductRepository) -> None:
        super().__init__()
        self._repository = repository
        self._all: list[dict[str, Any]] = []
        self.query = ""
        self.category = ALL_CATEGORIES
        self.sort_by = SORT_NEWEST
        self.stats: dict[str, ProductStats] = {}

    async def load(self, force_refresh: bool = False) -> UiState:
        self._set_state(Loading())
        result = await self._repository.get_all_products(force_refresh=force_refresh)
        if result.is_success:
            self._all = result.value or []
            ids = [p["id"] for p in self._all if p.get("id")]
            self.stats = await self._repository.get_products_stats(ids)
        return self._apply(result, self._filtered)

    def _filtered(self, products: list[dict[str, Any]] | None = None) -> list[dict[str, Any]]:
        return apply_filters(
            self._all if products is None else products,
            query=self.query,
            category=self.category,
            sort_by=self.sort_by,
        )

    def _refilter(self) -> None:
        if isinstance(self.state, Success):
            self._set_state(Success(self._filtered()))

    def update_search(self, query: str) -> None:
        self.query = query
        self._refilter()

    def update_category(self, category: str) -> None:
        self.category = category
        self._refilter()

    def update_sort(self, sort_by: str) -> None:
        self.sort_by = sort_by
        self._refilter()

    @property
    def categories(self) -> list[str]:
        """Distinct categories of the loaded products, sorted."""
        return sorted({str(p.get("category")) for p in self._all if p.get("category")})
