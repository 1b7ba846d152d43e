"""Product API: catalogue CRUD and per-product statistics.

/batch/stats is declared before /{product_id} so "batch" is never taken
for a product ID.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from craftly.api.v1.dependencies import CurrentUserId, DocId, get_product_service
from craftly.application.services.product_service import ProductService
from craftly.core.limiter import limit_writes
from craftly.schemas.common import success_response
from craftly.schemas.product import (
    ProductCreateRequest,
    ProductUpdateRequest,
    StatsBatchRequest,
)

router = APIRouter()

ProductServiceDep = Annotated[ProductService, Depends(get_product_service)]


@router.post("/batch/stats")
async def get_product_stats_batch(body: StatsBatchRequest, product_service: ProductServiceDep):
    """Stats for several products keyed by product ID."""
    stats = await product_service.get_stats_batch(body.product_ids)
    return success_response({pid: s.to_dict() for pid, s in stats.items()})


@router.get("/{product_id}/stats")
async def get_product_stats(product_id: DocId, product_service: ProductServiceDep):
    stats = await product_service.get_stats(product_id)
    return success_response(stats.to_dict())


@router.get("/{product_id}")
async def get_product(product_id: DocId, product_service: ProductServiceDep):
    return success_response(await product_service.get_product(product_id))


@router.get("")
async def list_products(
    product_service: ProductServiceDep,
    created_by: Annotated[str | None, Query(alias="createdBy")] = None,
    status: str = "active",
):
    """Products with the given status (default active), optionally by one seller."""
    products = await product_service.list_products(status=status, created_by=created_by)
    return success_response(products)


@router.post("", status_code=201)
@limit_writes
async def create_product(
    request: Request,
    body: ProductCreateRequest,
    uid: CurrentUserId,
    product_service: ProductServiceDep,
):
    product = await product_service.create_product(uid, body.to_payload())
    return success_response(product)


@router.put("/{product_id}")
@limit_writes
async def update_product(
    request: Request,
    product_id: DocId,
    body: ProductUpdateRequest,
    uid: CurrentUserId,
    product_service: ProductServiceDep,
):
    updated = await product_service.update_product(uid, product_id, body.to_payload())
    return success_response(updated)


@router.delete("/{product_id}")
@limit_writes
async def delete_product(
    request: Request,
    product_id: DocId,
    uid: CurrentUserId,
    product_service: ProductServiceDep,
):
    await product_service.delete_product(uid, product_id)
    return success_response({"id": product_id}, "Product deleted successfully")
