from __future__ import annotations

from craftly.client.repositories.favorites import FavoritesRepository
from craftly.client.viewmodels.state import Loading, Success, UiState, ViewModel


class FavoritesViewModel(ViewModel):
    """Success holds the favorited product ids."""

    def __init__(self, repository: FavoritesRepository) -> None:
        super().__init__()
        self._repository = repository

    def is_favorite(self, product_id: str) -> bool:
        return isinstance(self.state, Success) and product_id in self.state.data

    async def load(self) -> UiState:
        self._set_state(Loading())
        return self._apply(await self._repository.get_favorites())

    async def toggle(self, product_id: str) -> UiState:
        current = self.is_favorite(product_id)
        result = await self._repository.toggle_favorite(product_id, current)
        if result.is_failure:
            return self._apply(result)
        previous = self.state.data if isinstance(self.state, Success) else []
        ids = [i for i in previous if i != product_id]
        if result.value:
            ids.append(product_id)
        self._set_state(Success(ids))
        return self.state
