"""Application metrics using the Prometheus client library.

All metrics are defined here, one inventory for the whole service.  Other
modules import specific metrics and increment/observe them at the point
of action.

Counters only go up, gauges go up and down, histograms bucket
observations so Prometheus can compute percentiles:

  histogram_quantile(0.99, rate(http_request_duration_seconds_bucket[5m]))
"""

from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram

# ---------------------------------------------------------------------------
# HTTP metrics (populated by the MetricsMiddleware)
# ---------------------------------------------------------------------------

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests by method, endpoint, and status code",
    ["method", "endpoint", "status_code"],
)

REQUEST_DURATION = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

ACTIVE_REQUESTS = Gauge(
    "http_active_requests",
    "Number of HTTP requests currently being processed",
)

# ---------------------------------------------------------------------------
# Registry metrics
# ---------------------------------------------------------------------------
# Principals and credential ids are unbounded, so they never become labels.

CREDENTIALS_ISSUED = Counter(
    "credentials_issued_total",
    "Credentials successfully issued",
)

CREDENTIAL_REVOCATIONS = Counter(
    "credential_revocations_total",
    "Revocations applied, including idempotent re-revocations",
    ["outcome"],  # "revoked" or "already_revoked"
)

VERIFICATIONS = Counter(
    "credential_verifications_total",
    "Credential verifications by result",
    ["result"],  # "valid", "not_found", "revoked", "expired"
)

EDUCATION_CREDITS_AWARDED = Counter(
    "education_credits_awarded_total",
    "Sum of continuing-education credits added across all credentials",
)

AUTHORIZATION_DENIALS = Counter(
    "authorization_denials_total",
    "Operations rejected by the authorization gate",
    ["action"],  # "issue", "revoke", "provide", "admin"
)
