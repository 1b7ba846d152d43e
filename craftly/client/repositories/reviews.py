"""Product reviews. Rating and comment are checked before the request is sent."""

from __future__ import annotations

from typing import Any

from craftly.client.errors import ClientError
from craftly.client.repositories.base import BaseRepository
from craftly.client.result import Result
from craftly.domain.validators import validate_rating, validate_review_comment


class ReviewRepository(BaseRepository):
    async def get_reviews(self, product_id: str) -> Result[list[dict[str, Any]]]:
        async def call() -> list[dict[str, Any]]:
            data = await self._api.get(f"/reviews/{product_id}")
            return list(data.get("reviews") or [])

        return await self._run(f"loading reviews of product {product_id}", call)

    async def submit_review(
        self,
        product_id: str,
        rating: int,
        comment: str,
        *,
        product_name: str | None = None,
        product_creator_id: str | None = None,
    ) -> Result[dict[str, Any]]:
        async def call() -> dict[str, Any]:
            user = self._require_user()
            error = validate_rating(rating) or validate_review_comment(comment)
            if error:
                raise ClientError(error)
            payload = {
                "productId": product_id,
                "userId": user.uid,
                "userName": user.display_name or None,
                "rating": rating,
                "comment": comment.strip(),
                "productName": product_name,
                "productCreatorId": product_creator_id,
            }
            data = await self._api.post(
                "/reviews/submit", {k: v for k, v in payload.items() if v is not None}
            )
            return data.get("review") or {}

        return await self._run(f"submitting review for product {product_id}", call)
