"""Persisted login session (the signed-in user and their access token)."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from pydantic import ValidationError

from craftly.client.models import SessionUser

logger = logging.getLogger(__name__)


class SessionStore:
    """Stores the current user as JSON in a single file."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path).expanduser()
        self._user: SessionUser | None = None
        self._loaded = False

    @property
    def path(self) -> Path:
        return self._path

    def save_user(self, user: SessionUser) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp.write_text(user.model_dump_json(by_alias=True), encoding="utf-8")
        os.replace(tmp, self._path)
        self._user = user
        self._loaded = True

    def get_user(self) -> SessionUser | None:
        if not self._loaded:
            self._user = self._read()
            self._loaded = True
        return self._user

    def _read(self) -> SessionUser | None:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        try:
            return SessionUser.model_validate_json(raw)
        except ValidationError as e:
            logger.warning("Ignoring unreadable session file %s: %s", self._path, e)
            return None

    def clear(self) -> None:
        self._path.unlink(missing_ok=True)
        self._user = None
        self._loaded = True

    def is_logged_in(self) -> bool:
        return self.get_user() is not None
