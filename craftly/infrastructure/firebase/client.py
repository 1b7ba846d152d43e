"""Process-wide Firestore client.

The service account comes from FIREBASE_SERVICE_ACCOUNT_KEY (the JSON
itself) or FIREBASE_SERVICE_ACCOUNT_PATH (a file); the key wins when both
are set. Without either, the API still starts: data routes answer 503 and
/health reports Firestore as not configured.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from craftly.core.config import Settings, get_settings
from craftly.infrastructure.firebase._rest_client import (
    FirestoreRESTClient,
    _get_credentials,
)

logger = logging.getLogger(__name__)

_firestore_client: FirestoreRESTClient | None = None


def read_service_account(settings: Settings) -> dict[str, Any] | None:
    """Service account info from settings, or None when none is configured.

    Raises:
        ValueError: FIREBASE_SERVICE_ACCOUNT_KEY is set but is not JSON.
    """
    if settings.firebase_service_account_key is not None:
        raw = settings.firebase_service_account_key.get_secret_value().strip()
        if raw:
            try:
                return json.loads(raw)
            except json.JSONDecodeError as e:
                raise ValueError("FIREBASE_SERVICE_ACCOUNT_KEY is not valid JSON") from e

    if not settings.firebase_service_account_path:
        return None
    key_file = Path(settings.firebase_service_account_path).expanduser()
    if not key_file.is_file():
        logger.warning("Service account file not found: %s", key_file.resolve())
        return None
    return json.loads(key_file.read_text(encoding="utf-8"))


def init_firebase(settings: Settings | None = None) -> bool:
    """Create the shared client; True when Firestore is ready.

    Any credential problem is logged and reported as False so startup
    continues in degraded mode.
    """
    global _firestore_client
    if _firestore_client is not None:
        return True
    settings = settings or get_settings()
    try:
        info = read_service_account(settings)
        if info is None:
            logger.warning("Firestore credentials not configured; data endpoints will return 503")
            return False
        project_id = settings.firebase_project_id or info.get("project_id")
        if not project_id:
            logger.error("No Firestore project: set FIREBASE_PROJECT_ID or use a key with project_id")
            return False
        _firestore_client = FirestoreRESTClient(project_id, _get_credentials(info))
    except Exception:
        logger.exception("Firestore initialization failed")
        return False
    logger.info("Firestore client initialized for project %s", project_id)
    return True


def get_firestore_client() -> FirestoreRESTClient | None:
    return _firestore_client


async def close_firebase() -> None:
    """Release the client's connection pool (app shutdown)."""
    global _firestore_client
    client, _firestore_client = _firestore_client, None
    if client is not None:
        await client.aclose()
        logger.info("Firestore HTTP client closed")
