"""UI states and the observable base for view models."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from craftly.client.errors import ApiError, ClientError, friendly_message
from craftly.client.result import Result

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Loading:
    pass


@dataclass(frozen=True)
class Success(Generic[T]):
    data: T


@dataclass(frozen=True)
class Error:
    message: str


UiState = Idle | Loading | Success | Error

StateListener = Callable[[UiState], None]


def error_text(error: Exception | None) -> str:
    """Message to show for a failed result.

    Client-side rule violations and 4xx API errors already carry readable
    messages; everything else goes through friendly_message().
    """
    if isinstance(error, ApiError):
        if 400 <= error.status < 500:
            return error.message
        return friendly_message(error)
    if isinstance(error, ClientError):
        return error.message
    return friendly_message(error)


class ViewModel:
    """Holds a UiState and notifies listeners when it changes."""

    def __init__(self) -> None:
        self._state: UiState = Idle()
        self._listeners: list[StateListener] = []

    @property
    def state(self) -> UiState:
        return self._state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register listener and call it with the current state. Returns an unsubscribe function."""
        self._listeners.append(listener)
        listener(self._state)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_state(self, state: UiState) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)

    def _apply(self, result: Result[Any], transform: Callable[[Any], Any] | None = None) -> UiState:
        if result.is_success:
            value = result.value if transform is None else transform(result.value)
            self._set_state(Success(value))
        else:
            self._set_state(Error(error_text(result.error)))
        return self._state

    def reset(self) -> None:
        self._set_state(Idle())
