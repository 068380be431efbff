"""Demo: walk issue → verify → credits → revoke using FastAPI TestClient.

Run with:
    python scripts/demo_credential_flow.py
"""

from __future__ import annotations

from fastapi.testclient import TestClient

from credential_registry.main import app
from credential_registry.services import token_service
from credential_registry.services.registry import registry

ISSUER = "ST2CY5V39NHDPWSXMW9QDT3HC3GD6Q6XX4CFRK9AG"
PROVIDER = "ST2NEB84ASENDXKYGJPQW86YXQCEFEX2ZQPG87ND"
RECIPIENT = "ST3AM1A56AK2C1XAFJ4115ZSV26EB49BVQ10MGCS0"
CREDENTIAL_ID = "CERT-123"


def _auth(principal: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token_service.create_access_token(sub=principal)}"}


def main() -> None:
    client = TestClient(app)
    owner = registry.issuance.get_contract_owner()
    now = registry.clock.block_time

    # ── Step 1: owner authorizes an issuer and a provider ───────────
    r = client.post("/v1/issuers", json={"principal": ISSUER}, headers=_auth(owner))
    print(f"1. POST /v1/issuers            → {r.status_code}")
    r = client.post("/v1/providers", json={"principal": PROVIDER}, headers=_auth(owner))
    print(f"   POST /v1/providers          → {r.status_code}")

    # ── Step 2: issue a credential valid for ~30 days ───────────────
    r = client.post(
        "/v1/credentials",
        json={
            "credential_id": CREDENTIAL_ID,
            "recipient": RECIPIENT,
            "credential_type": "Professional Engineer",
            "expiry_date": now + 30 * 24 * 3600,
            "metadata_uri": "ipfs://QmXoypizjW3WknFiJnKLwHCnL72vedxjQkDDP1mXWo6uco",
        },
        headers=_auth(ISSUER),
    )
    print(f"2. POST /v1/credentials        → {r.status_code}")

    # ── Step 3: verify ──────────────────────────────────────────────
    r = client.get(f"/v1/credentials/{CREDENTIAL_ID}/{RECIPIENT}/verify")
    print(f"3. GET  .../verify             → {r.status_code}  valid={r.json().get('valid')}")

    # ── Step 4: two rounds of continuing-education credits ──────────
    for credits, activity in ((10, "Workshop"), (5, "Conference")):
        r = client.post(
            "/v1/education-credits",
            json={
                "recipient": RECIPIENT,
                "credential_id": CREDENTIAL_ID,
                "credits": credits,
                "activity_type": activity,
            },
            headers=_auth(PROVIDER),
        )
        total = r.json()["balance"]["total_credits"]
        print(f"4. POST /v1/education-credits  → {r.status_code}  total={total}")

    # ── Step 5: owner revokes, verification now fails with 201 ──────
    r = client.post(
        "/v1/revocations",
        json={"credential_id": CREDENTIAL_ID, "recipient": RECIPIENT},
        headers=_auth(owner),
    )
    print(f"5. POST /v1/revocations        → {r.status_code}")
    r = client.get(f"/v1/credentials/{CREDENTIAL_ID}/{RECIPIENT}/verify")
    print(f"   GET  .../verify             → {r.status_code}  error={r.json().get('error')}")


if __name__ == "__main__":
    main()
