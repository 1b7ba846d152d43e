"""User-facing error messages."""

import httpx
import pytest

from craftly.client.errors import (
    CONNECTION_ERROR,
    FORBIDDEN,
    GENERIC_ERROR,
    LOGIN_REQUIRED,
    NO_CONNECTION,
    NOT_FOUND,
    SERVER_ERROR,
    TIMED_OUT,
    UPLOAD_FAILED,
    ApiError,
    ClientError,
    NotLoggedInError,
    friendly_message,
)
from craftly.client.viewmodels.state import error_text


@pytest.mark.parametrize(
    ("error", "expected"),
    [
        (httpx.ReadTimeout("read timed out"), TIMED_OUT),
        (httpx.ConnectError("refused"), NO_CONNECTION),
        (httpx.ReadError("reset"), CONNECTION_ERROR),
        (Exception("Unable to resolve host api.craftly"), NO_CONNECTION),
        (NotLoggedInError(), LOGIN_REQUIRED),
        (ApiError(403, "Nope"), FORBIDDEN),
        (ApiError(404, "Missing"), NOT_FOUND),
        (ApiError(503, "Firestore down"), SERVER_ERROR),
        (Exception("image too big to upload"), UPLOAD_FAILED),
        (Exception("weird"), GENERIC_ERROR),
        (None, GENERIC_ERROR),
    ],
)
def test_friendly_message(error, expected: str) -> None:
    assert friendly_message(error) == expected


def test_error_text_prefers_server_message_for_client_errors() -> None:
    assert error_text(ApiError(401, "Invalid email or password")) == "Invalid email or password"
    assert error_text(ApiError(500, "Traceback...")) == SERVER_ERROR
    assert error_text(ClientError("Quantity must be at least 1")) == "Quantity must be at least 1"
    assert error_text(httpx.ConnectError("refused")) == NO_CONNECTION
