"""Tests for the continuing-education endpoints."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from credential_registry.services.registry import Registry
from tests.conftest import CERT_ID, GENESIS_TIME, OWNER, PROVIDER, RECIPIENT, auth


@pytest.fixture
def providing(issued: Registry) -> Registry:
    issued.education.add_authorized_provider(OWNER, PROVIDER)
    return issued


def _add(client: TestClient, caller: str, credits: int, activity: str, **overrides):
    body = {
        "recipient": RECIPIENT,
        "credential_id": CERT_ID,
        "credits": credits,
        "activity_type": activity,
        "metadata_uri": f"ipfs://QmXoypizjW3WknFiJnKLwHCnL72vedxjQkDDP1mXWo6uco/{activity.lower()}1",
    }
    body.update(overrides)
    return client.post("/v1/education-credits", json=body, headers=auth(caller))


def test_add_provider(client: TestClient) -> None:
    resp = client.post("/v1/providers", json={"principal": PROVIDER}, headers=auth(OWNER))
    assert resp.status_code == 200
    assert client.get(f"/v1/providers/{PROVIDER}").json()["authorized"] is True


def test_add_provider_rejected_for_non_owner(client: TestClient) -> None:
    resp = client.post(
        "/v1/providers", json={"principal": PROVIDER}, headers=auth(PROVIDER)
    )
    assert resp.status_code == 403
    assert resp.json()["error"] == 102
    assert resp.json()["contract"] == "continuing-education"


def test_remove_provider(client: TestClient, providing: Registry) -> None:
    resp = client.delete(f"/v1/providers/{PROVIDER}", headers=auth(OWNER))
    assert resp.status_code == 200
    assert _add(client, PROVIDER, 1, "Workshop").json()["error"] == 400


def test_credits_accumulate(client: TestClient, providing: Registry) -> None:
    resp = _add(client, PROVIDER, 10, "Workshop")
    assert resp.status_code == 201
    assert resp.json() == {
        "entry_index": 0,
        "balance": {
            "recipient": RECIPIENT,
            "credential_id": CERT_ID,
            "total_credits": 10,
            "last_updated": GENESIS_TIME,
            "entry_count": 1,
        },
    }

    resp = _add(client, PROVIDER, 5, "Conference")
    assert resp.json()["entry_index"] == 1

    resp = client.get(f"/v1/education-credits/{RECIPIENT}/{CERT_ID}")
    assert resp.status_code == 200
    assert resp.json()["total_credits"] == 15
    assert resp.json()["entry_count"] == 2

    resp = client.get(f"/v1/education-credits/{RECIPIENT}/{CERT_ID}/history/0")
    assert resp.json()["credits"] == 10
    assert resp.json()["activity_type"] == "Workshop"
    assert resp.json()["provider"] == PROVIDER

    resp = client.get(f"/v1/education-credits/{RECIPIENT}/{CERT_ID}/history/1")
    assert resp.json()["credits"] == 5
    assert resp.json()["activity_type"] == "Conference"

    resp = client.get(f"/v1/education-credits/{RECIPIENT}/{CERT_ID}/history")
    assert [e["index"] for e in resp.json()] == [0, 1]


def test_history_entry_out_of_range(client: TestClient, providing: Registry) -> None:
    _add(client, PROVIDER, 10, "Workshop")
    resp = client.get(f"/v1/education-credits/{RECIPIENT}/{CERT_ID}/history/1")
    assert resp.status_code == 404


def test_unauthorized_provider(client: TestClient, issued: Registry) -> None:
    resp = _add(client, RECIPIENT, 10, "Workshop")
    assert resp.status_code == 403
    assert resp.json()["error"] == 400


def test_credits_for_missing_credential(client: TestClient, providing: Registry) -> None:
    resp = _add(client, PROVIDER, 10, "Workshop", credential_id="CERT-456")
    assert resp.status_code == 404
    assert resp.json()["error"] == 401

    resp = client.get(f"/v1/education-credits/{RECIPIENT}/CERT-456")
    assert resp.status_code == 404
    resp = client.get(f"/v1/education-credits/{RECIPIENT}/CERT-456/history")
    assert resp.json() == []


def test_negative_credits_rejected(client: TestClient, providing: Registry) -> None:
    resp = _add(client, PROVIDER, -5, "Workshop")
    assert resp.status_code == 422


def test_boolean_credits_rejected(client: TestClient, providing: Registry) -> None:
    resp = _add(client, PROVIDER, True, "Workshop")  # type: ignore[arg-type]
    assert resp.status_code == 422
    assert providing.education.get_entry_count(RECIPIENT, CERT_ID) == 0


def test_slash_in_credential_id_rejected(client: TestClient, providing: Registry) -> None:
    resp = _add(client, PROVIDER, 10, "Workshop", credential_id="CERT/1")
    assert resp.status_code == 422
