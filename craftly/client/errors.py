"""Client exceptions and user-facing error messages."""

from __future__ import annotations

from typing import Any

import httpx

NO_CONNECTION = "No internet connection. Please check your network."
TIMED_OUT = "Request timed out. Please try again."
CONNECTION_ERROR = "Connection error. Please check your internet."
LOGIN_REQUIRED = "Please log in to continue."
FORBIDDEN = "You don't have permission to do this."
NOT_FOUND = "The item you're looking for doesn't exist."
SERVER_ERROR = "Something went wrong on our end. Please try again."
UPLOAD_FAILED = "Failed to upload image. Please try a different file."
GENERIC_ERROR = "Something went wrong. Please try again."


class ClientError(Exception):
    """Base class for errors raised by the client before or after a request."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ApiError(ClientError):
    """The API answered with an error envelope or a non-2xx status."""

    def __init__(
        self,
        status: int,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.code = code
        self.details = details or {}

    def __repr__(self) -> str:
        return f"ApiError(status={self.status}, message={self.message!r}, code={self.code!r})"


class NotLoggedInError(ClientError):
    def __init__(self) -> None:
        super().__init__("User not logged in")


def friendly_message(error: BaseException | str | None) -> str:
    """Short text suitable for showing to the user in place of a raw error."""
    if error is None:
        return GENERIC_ERROR
    if isinstance(error, httpx.TimeoutException):
        return TIMED_OUT
    if isinstance(error, httpx.ConnectError):
        return NO_CONNECTION
    if isinstance(error, httpx.NetworkError):
        return CONNECTION_ERROR

    text = str(error).lower()
    if isinstance(error, ApiError):
        text = f"{text} {error.status}"

    if "unable to resolve host" in text or "no address associated" in text:
        return NO_CONNECTION
    if "timeout" in text or "timed out" in text:
        return TIMED_OUT
    if "connect" in text or "network" in text:
        return CONNECTION_ERROR
    if "401" in text or "unauthorized" in text or "not logged in" in text:
        return LOGIN_REQUIRED
    if "403" in text or "forbidden" in text:
        return FORBIDDEN
    if "404" in text or "not found" in text:
        return NOT_FOUND
    if "500" in text or "502" in text or "503" in text:
        return SERVER_ERROR
    if "upload" in text or "image" in text:
        return UPLOAD_FAILED
    return GENERIC_ERROR
