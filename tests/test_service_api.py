import json

import pytest

pytest.importorskip("fastapi")

from fastapi.testclient import TestClient

from charcard.config import Settings
from charcard.service.api import app, get_settings
from charcard.transforms import OBSOLESCENCE_NOTICE


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_validate_endpoint_reports_in_sync(client, backfilled_card):
    response = client.post("/validate", json={"text": json.dumps(backfilled_card)})

    assert response.status_code == 200
    body = response.json()
    assert body["kind"] == "CanonicalWithLegacy"
    assert body["in_sync"] is True
    assert "card" not in body


def test_validate_endpoint_returns_errors_as_values(client, legacy_card):
    response = client.post("/validate", json={"text": json.dumps(legacy_card)})

    assert response.status_code == 200
    body = response.json()
    assert body["kind"] == "InvalidStructure"
    assert ["spec"] in [err["loc"] for err in body["errors"]]


def test_validate_endpoint_invalid_json(client):
    response = client.post("/validate", json={"text": "{"})

    assert response.status_code == 200
    assert response.json()["kind"] == "InvalidSyntax"
    assert response.json()["error"]


def test_backfill_endpoint_mirrors_fields(client, canonical_card):
    response = client.post("/backfill", json={"text": json.dumps(canonical_card)})

    assert response.status_code == 200
    card = response.json()["card"]
    assert card["name"] == card["data"]["name"] == "Sui"
    assert "character_book" not in card["data"]


def test_backfill_endpoint_uses_settings_dependency(client, canonical_card):
    app.dependency_overrides[get_settings] = lambda: Settings(obsolescence_notice="Use V2")

    response = client.post("/backfill", json={"text": json.dumps(canonical_card), "notice": True})

    assert response.status_code == 200
    assert response.json()["card"]["first_mes"] == "Use V2"


def test_backfill_endpoint_default_notice(client, canonical_card):
    app.dependency_overrides[get_settings] = lambda: Settings()

    response = client.post("/backfill", json={"text": json.dumps(canonical_card), "notice": True})

    assert response.json()["card"]["scenario"] == OBSOLESCENCE_NOTICE


def test_upgrade_endpoint(client, legacy_card, canonical_card):
    upgraded = client.post("/upgrade", json={"text": json.dumps(legacy_card)}).json()
    assert upgraded["kind"] == "Legacy"
    assert upgraded["card"]["data"]["tags"] == []

    already = client.post("/upgrade", json={"text": json.dumps(canonical_card)}).json()
    assert already["kind"] == "AlreadyMigrated"
    assert already["card"] is None


def test_examples_endpoint(client):
    response = client.get("/examples")

    assert response.status_code == 200
    examples = response.json()
    assert examples["Valid V1 card"]["name"] == "Sui the card test"
    assert examples["Valid V2 card"]["data"]["character_book"]["name"] == "the dummy book"


def test_malformed_request_body_is_rejected(client):
    response = client.post("/validate", json={"payload": "{}"})

    assert response.status_code == 422


def test_backfill_endpoint_rejects_unpaired_surrogate(client, canonical_card):
    canonical_card["data"]["name"] = "NAME_SLOT"
    text = json.dumps(canonical_card).replace("NAME_SLOT", "\\ud800")

    response = client.post("/backfill", json={"text": text})

    assert response.status_code == 200
    assert response.json()["kind"] == "InvalidSyntax"
    assert "surrogate" in response.json()["error"]
