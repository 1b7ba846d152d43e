"""Favorites API (users/{uid}/favorites)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from craftly.api.v1.dependencies import (
    CurrentUserId,
    DocId,
    ensure_same_user,
    get_favorite_service,
)
from craftly.application.services.favorite_service import FavoriteService
from craftly.core.limiter import limit_writes
from craftly.schemas.common import success_response
from craftly.schemas.favorite import FavoriteAddRequest

router = APIRouter()

FavoriteServiceDep = Annotated[FavoriteService, Depends(get_favorite_service)]


@router.get("/{user_id}")
async def get_favorites(
    user_id: DocId, uid: CurrentUserId, favorite_service: FavoriteServiceDep
):
    ensure_same_user(uid, user_id, "favorites")
    favorites = await favorite_service.list_product_ids(user_id)
    return success_response({"userId": user_id, "favorites": favorites, "count": len(favorites)})


@router.post("", status_code=201)
@limit_writes
async def add_favorite(
    request: Request,
    body: FavoriteAddRequest,
    uid: CurrentUserId,
    favorite_service: FavoriteServiceDep,
):
    await favorite_service.add(uid, body.product_id)
    return success_response(
        {"userId": uid, "productId": body.product_id, "message": "Product added to favorites"}
    )


@router.delete("/{product_id}")
@limit_writes
async def remove_favorite(
    request: Request,
    product_id: DocId,
    uid: CurrentUserId,
    favorite_service: FavoriteServiceDep,
):
    await favorite_service.remove(uid, product_id)
    return success_response(
        {"userId": uid, "productId": product_id, "message": "Product removed from favorites"}
    )
