"""Tests for Prometheus metrics middleware and registry counters.

Counters in the global registry cannot be reset between tests, so every
assertion is on the delta across the action under test.
"""

from __future__ import annotations

from fastapi.testclient import TestClient
from prometheus_client import REGISTRY

from credential_registry.services.registry import Registry
from tests.conftest import CERT_ID, OWNER, PROVIDER, RECIPIENT, auth


def _get_sample(name: str, labels: dict | None = None) -> float:
    """Read a metric sample's current value from the global registry."""
    value = REGISTRY.get_sample_value(name, labels=labels or {})
    return value if value is not None else 0.0


def test_request_counter_increments(client: TestClient) -> None:
    labels = {"method": "GET", "endpoint": "/health", "status_code": "200"}
    before = _get_sample("http_requests_total", labels)
    client.get("/health")
    assert _get_sample("http_requests_total", labels) - before >= 1


def test_request_duration_histogram_observes(client: TestClient) -> None:
    labels = {"method": "GET", "endpoint": "/health"}
    before = _get_sample("http_request_duration_seconds_count", labels)
    client.get("/health")
    assert _get_sample("http_request_duration_seconds_count", labels) - before >= 1


def test_endpoint_label_is_route_template(client: TestClient, issued: Registry) -> None:
    labels = {
        "method": "GET",
        "endpoint": "/v1/credentials/{credential_id}/{recipient}/verify",
        "status_code": "200",
    }
    before = _get_sample("http_requests_total", labels)
    client.get(f"/v1/credentials/{CERT_ID}/{RECIPIENT}/verify")
    assert _get_sample("http_requests_total", labels) - before == 1

    raw = dict(labels, endpoint=f"/v1/credentials/{CERT_ID}/{RECIPIENT}/verify")
    assert _get_sample("http_requests_total", raw) == 0.0


def test_unknown_path_is_unmatched(client: TestClient) -> None:
    labels = {"method": "GET", "endpoint": "unmatched", "status_code": "404"}
    before = _get_sample("http_requests_total", labels)
    client.get("/no/such/route")
    assert _get_sample("http_requests_total", labels) - before == 1


def test_metrics_endpoint_returns_prometheus_format(client: TestClient) -> None:
    client.get("/health")
    resp = client.get("/metrics")
    assert resp.status_code == 200
    assert "http_requests_total" in resp.text
    assert "credential_verifications_total" in resp.text


def test_metrics_endpoint_not_self_instrumented(client: TestClient) -> None:
    labels = {"method": "GET", "endpoint": "/metrics", "status_code": "200"}
    before = _get_sample("http_requests_total", labels)
    client.get("/metrics")
    client.get("/metrics")
    assert _get_sample("http_requests_total", labels) == before


def test_registry_counters(client: TestClient, issued: Registry) -> None:
    issued.education.add_authorized_provider(OWNER, PROVIDER)

    credits_before = _get_sample("education_credits_awarded_total")
    revoked_before = _get_sample("credential_revocations_total", {"outcome": "revoked"})
    again_before = _get_sample(
        "credential_revocations_total", {"outcome": "already_revoked"}
    )

    client.post(
        "/v1/education-credits",
        json={
            "recipient": RECIPIENT,
            "credential_id": CERT_ID,
            "credits": 7,
            "activity_type": "Workshop",
        },
        headers=auth(PROVIDER),
    )
    body = {"credential_id": CERT_ID, "recipient": RECIPIENT}
    client.post("/v1/revocations", json=body, headers=auth(OWNER))
    client.post("/v1/revocations", json=body, headers=auth(OWNER))

    assert _get_sample("education_credits_awarded_total") - credits_before == 7
    assert (
        _get_sample("credential_revocations_total", {"outcome": "revoked"})
        - revoked_before
        == 1
    )
    assert (
        _get_sample("credential_revocations_total", {"outcome": "already_revoked"})
        - again_before
        == 1
    )
