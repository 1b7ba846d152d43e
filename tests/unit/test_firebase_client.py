"""Service account loading and degraded startup of the Firestore client."""

import json

import pytest

from craftly.core.config import Settings
from craftly.infrastructure.firebase import client as firebase_client


def make_settings(**overrides) -> Settings:
    values = {
        "secret_key": "test-secret",
        "firebase_service_account_key": None,
        "firebase_service_account_path": None,
    }
    values.update(overrides)
    return Settings(**values)


def test_no_credentials_configured() -> None:
    assert firebase_client.read_service_account(make_settings()) is None


def test_key_json_wins_over_path(tmp_path) -> None:
    key_file = tmp_path / "sa.json"
    key_file.write_text(json.dumps({"project_id": "from-file"}), encoding="utf-8")
    settings = make_settings(
        firebase_service_account_key=json.dumps({"project_id": "from-env"}),
        firebase_service_account_path=str(key_file),
    )
    assert firebase_client.read_service_account(settings) == {"project_id": "from-env"}


def test_path_is_read_when_key_is_blank(tmp_path) -> None:
    key_file = tmp_path / "sa.json"
    key_file.write_text(json.dumps({"project_id": "craftly-dev"}), encoding="utf-8")
    settings = make_settings(
        firebase_service_account_key="  ", firebase_service_account_path=str(key_file)
    )
    assert firebase_client.read_service_account(settings) == {"project_id": "craftly-dev"}


def test_missing_file_is_not_configured(tmp_path) -> None:
    settings = make_settings(firebase_service_account_path=str(tmp_path / "nope.json"))
    assert firebase_client.read_service_account(settings) is None


def test_malformed_key_json() -> None:
    with pytest.raises(ValueError, match="not valid JSON"):
        firebase_client.read_service_account(make_settings(firebase_service_account_key="{oops"))


def test_init_firebase_degrades_instead_of_raising(monkeypatch) -> None:
    monkeypatch.setattr(firebase_client, "_firestore_client", None)
    assert firebase_client.init_firebase(make_settings()) is False
    assert firebase_client.init_firebase(
        make_settings(firebase_service_account_key="{oops")
    ) is False
    assert firebase_client.init_firebase(
        make_settings(firebase_service_account_key=json.dumps({"type": "service_account"}))
    ) is False
    assert firebase_client.get_firestore_client() is None
