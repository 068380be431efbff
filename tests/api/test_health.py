from __future__ import annotations

from fastapi.testclient import TestClient

from credential_registry.services.registry import Registry
from tests.conftest import GENESIS_HEIGHT, GENESIS_TIME


def test_health_returns_ok(client: TestClient) -> None:
    resp = client.get("/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "ok"
    assert data["checks"]["storage"] == "in_memory"


def test_health_reports_chain_and_credentials(
    client: TestClient, issued: Registry
) -> None:
    data = client.get("/health").json()
    assert data["chain"] == {"block_height": GENESIS_HEIGHT, "block_time": GENESIS_TIME}
    assert data["credentials"] == 1


def test_ready_returns_200(client: TestClient) -> None:
    resp = client.get("/ready")
    assert resp.status_code == 200
