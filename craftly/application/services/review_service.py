"""Product reviews: one per user per product, with a notification to the seller."""

from __future__ import annotations

import logging
from typing import Any

from craftly.domain.enums import NotificationType
from craftly.domain.exceptions import (
    AuthorizationException,
    ConflictException,
    ValidationException,
)
from craftly.domain.validators import (
    is_valid_document_id,
    validate_rating,
    validate_review_comment,
)
from craftly.infrastructure.firebase._rest_client import DocumentExistsError
from craftly.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)


class ReviewService:
    def __init__(self, review_repo: Any, product_repo: Any, product_service: Any) -> None:
        self._reviews = review_repo
        self._products = product_repo
        self._product_service = product_service

    async def list_reviews(self, product_id: str) -> list[dict[str, Any]]:
        return await self._reviews.list_for_product(product_id)

    async def submit_review(self, uid: str, data: dict[str, Any]) -> dict[str, Any]:
        """Store a review and notify the product's creator in one batch.

        Raises:
            ValidationException: Missing fields, rating outside 1-5 or comment length.
            AuthorizationException: userId in the body is not the caller.
            ConflictException: The user already reviewed this product.
        """
        product_id = data.get("productId")
        user_id = data.get("userId") or uid
        rating = data.get("rating")
        comment = data.get("comment")
        if not product_id or not user_id or not rating or not comment:
            raise ValidationException("Missing required fields: productId, userId, rating, comment")
        if user_id != uid:
            raise AuthorizationException("You can only submit reviews as yourself", resource="review")
        creator_id = data.get("productCreatorId")
        if not is_valid_document_id(product_id):
            raise ValidationException("Invalid productId", field="productId")
        if creator_id and not is_valid_document_id(creator_id):
            raise ValidationException("Invalid productCreatorId", field="productCreatorId")
        error = validate_rating(rating) or validate_review_comment(comment)
        if error:
            raise ValidationException(error)

        product_name = data.get("productName")
        if not creator_id or not product_name:
            product = await self._products.get_by_id(product_id) or {}
            creator_id = creator_id or product.get("createdBy")
            product_name = product_name or product.get("name")

        user_name = data.get("userName")
        now = utc_now()
        review = {
            "userId": uid,
            "userName": user_name or "Anonymous",
            "rating": int(rating),
            "comment": comment,
            "createdAt": now,
        }
        notify = None
        if creator_id and creator_id != uid:
            notify = (
                creator_id,
                {
                    "userId": creator_id,
                    "type": NotificationType.NEW_REVIEW.value,
                    "message": (
                        f"{user_name or 'Someone'} left a {int(rating)}-star review "
                        f'on your product: "{product_name}".'
                    ),
                    "link": f"/products/{product_id}",
                    "isRead": False,
                    "createdAt": now,
                },
            )
        try:
            await self._reviews.create(product_id, uid, review, notify=notify)
        except DocumentExistsError as e:
            raise ConflictException(
                "You have already reviewed this product", resource="review"
            ) from e
        await self._product_service.invalidate_stats([product_id])
        logger.info("Review submitted for product %s by %s", product_id, uid)
        return review
