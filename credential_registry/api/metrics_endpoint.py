"""Prometheus scrape endpoint.

Returns every metric in core/metrics.py in text exposition format (not
JSON), e.g.

  credential_verifications_total{result="expired"} 3.0

Metric data reveals request rates and error patterns; restrict access to
the scraper in production.
"""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

router = APIRouter(tags=["observability"])


@router.get("/metrics", include_in_schema=False)
async def metrics() -> Response:
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST,
    )
