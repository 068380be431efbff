"""Health and readiness endpoints.

  /health (liveness): is the process alive?  Also reports the current
    chain position and how many credentials the registry holds.
  /ready (readiness): can this instance take traffic?  The registry is
    in-process memory with no backing services, so if the process can
    respond it is ready.
"""

from __future__ import annotations

from fastapi import APIRouter, Response

from credential_registry.api.dependencies import RegistryDep

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(registry: RegistryDep) -> dict:
    info = registry.clock.info()
    return {
        "status": "ok",
        "checks": {"storage": "in_memory"},
        "chain": {
            "block_height": info.block_height,
            "block_time": info.block_time,
        },
        "credentials": registry.credentials.count(),
    }


@router.get("/ready")
async def ready() -> Response:
    return Response(status_code=200)
