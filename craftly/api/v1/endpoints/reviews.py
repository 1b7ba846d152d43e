"""Review API: one review per user per product."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from craftly.api.v1.dependencies import CurrentUserId, DocId, get_review_service
from craftly.application.services.review_service import ReviewService
from craftly.core.limiter import limit_writes
from craftly.schemas.common import success_response
from craftly.schemas.review import ReviewSubmitRequest

router = APIRouter()

ReviewServiceDep = Annotated[ReviewService, Depends(get_review_service)]


@router.post("/submit", status_code=201)
@limit_writes
async def submit_review(
    request: Request,
    body: ReviewSubmitRequest,
    uid: CurrentUserId,
    review_service: ReviewServiceDep,
):
    review = await review_service.submit_review(uid, body.to_payload())
    return success_response({"review": review}, "Review submitted successfully")


@router.get("/{product_id}")
async def get_product_reviews(product_id: DocId, review_service: ReviewServiceDep):
    reviews = await review_service.list_reviews(product_id)
    return success_response({"reviews": reviews, "count": len(reviews)})
