"""Error envelope and cross-cutting HTTP behaviour of the assembled app."""

from httpx import AsyncClient

from tests.helpers import user_headers


async def test_unknown_route(client: AsyncClient) -> None:
    response = await client.get("/api/unknown")
    assert response.status_code == 404
    assert response.json() == {
        "success": False,
        "error": "Route not found: GET /api/unknown",
        "code": "NOT_FOUND",
    }


async def test_request_validation_error(client: AsyncClient) -> None:
    response = await client.post("/api/products/batch/stats", json={"productIds": "p1"})
    assert response.status_code == 422
    body = response.json()
    assert body["error"] == "Request validation failed"
    assert body["code"] == "VALIDATION_ERROR"
    assert body["details"]


async def test_path_ids_are_restricted(client: AsyncClient) -> None:
    response = await client.get("/api/cart/bad.id", headers=user_headers("buyer1"))
    assert response.status_code == 422


async def test_invalid_user_header(client: AsyncClient) -> None:
    response = await client.get("/api/favorites/u1", headers=user_headers("a/b"))
    assert response.status_code == 401
    assert response.json()["error"] == "Invalid user ID"


async def test_responses_carry_request_id_and_security_headers(client: AsyncClient) -> None:
    response = await client.get("/api/products", headers={"X-Request-ID": "req-42"})
    assert response.status_code == 200
    assert response.headers["X-Request-ID"] == "req-42"
    assert response.headers["X-Content-Type-Options"] == "nosniff"
