from __future__ import annotations

from dataclasses import replace

import pytest
from fastapi.testclient import TestClient

from credential_registry.api import chain as chain_module
from credential_registry.services.registry import Registry
from tests.conftest import CERT_ID, GENESIS_HEIGHT, GENESIS_TIME, OWNER, RECIPIENT, auth


def test_get_block_info(client: TestClient) -> None:
    resp = client.get("/v1/chain")
    assert resp.status_code == 200
    assert resp.json() == {"block_height": GENESIS_HEIGHT, "block_time": GENESIS_TIME}


def test_mine_blocks(client: TestClient) -> None:
    resp = client.post("/v1/chain/blocks", json={"count": 3}, headers=auth(OWNER))
    assert resp.status_code == 200
    assert resp.json() == {
        "block_height": GENESIS_HEIGHT + 3,
        "block_time": GENESIS_TIME + 3 * 600,
    }


def test_mine_with_custom_interval(client: TestClient) -> None:
    resp = client.post(
        "/v1/chain/blocks",
        json={"count": 2, "interval_seconds": 5},
        headers=auth(RECIPIENT),
    )
    assert resp.json()["block_time"] == GENESIS_TIME + 10


def test_advance_past_expiry(client: TestClient, issued: Registry) -> None:
    resp = client.post(
        "/v1/chain/blocks", json={"block_time": 1690000000}, headers=auth(OWNER)
    )
    assert resp.status_code == 200
    assert resp.json() == {"block_height": GENESIS_HEIGHT + 1, "block_time": 1690000000}

    resp = client.get(f"/v1/credentials/{CERT_ID}/{RECIPIENT}/verify")
    assert resp.json()["error"] == 202


def test_advance_backwards_conflicts(client: TestClient) -> None:
    resp = client.post(
        "/v1/chain/blocks", json={"block_time": GENESIS_TIME - 1}, headers=auth(OWNER)
    )
    assert resp.status_code == 409
    assert client.get("/v1/chain").json()["block_height"] == GENESIS_HEIGHT


def test_block_time_is_exclusive_with_count(client: TestClient) -> None:
    resp = client.post(
        "/v1/chain/blocks",
        json={"block_time": GENESIS_TIME + 1, "count": 2},
        headers=auth(OWNER),
    )
    assert resp.status_code == 422


def test_mine_requires_token(client: TestClient) -> None:
    assert client.post("/v1/chain/blocks", json={}).status_code == 401


def test_mine_hidden_in_prod(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        chain_module, "SETTINGS", replace(chain_module.SETTINGS, app_env="prod")
    )
    resp = client.post("/v1/chain/blocks", json={}, headers=auth(OWNER))
    assert resp.status_code == 404
    assert client.get("/v1/chain").json()["block_height"] == GENESIS_HEIGHT
