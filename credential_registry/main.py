from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from credential_registry.api.chain import router as chain_router
from credential_registry.api.education import router as education_router
from credential_registry.api.health import router as health_router
from credential_registry.api.issuance import router as issuance_router
from credential_registry.api.metrics_endpoint import router as metrics_router
from credential_registry.api.revocation import router as revocation_router
from credential_registry.api.verification import router as verification_router
from credential_registry.core.config import SETTINGS
from credential_registry.core.errors import (
    CredentialExpiredError,
    CredentialNotFoundError,
    CredentialRevokedError,
    CreditValidationError,
    DuplicateCredentialError,
    NotAuthorizedError,
    NotOwnerError,
    RegistryError,
)
from credential_registry.core.logging import setup_logging
from credential_registry.middleware.metrics import MetricsMiddleware
from credential_registry.middleware.request_context import (
    RequestContextMiddleware,
    install_request_context_filter,
)

# Configure logging before anything else runs.
install_request_context_filter(
    setup_logging(SETTINGS.log_level, json_format=SETTINGS.log_json)
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: tuple[tuple[type[RegistryError], int], ...] = (
    (NotOwnerError, status.HTTP_403_FORBIDDEN),
    (NotAuthorizedError, status.HTTP_403_FORBIDDEN),
    (CredentialNotFoundError, status.HTTP_404_NOT_FOUND),
    (DuplicateCredentialError, status.HTTP_409_CONFLICT),
    (CredentialRevokedError, status.HTTP_409_CONFLICT),
    (CredentialExpiredError, status.HTTP_409_CONFLICT),
)


def _status_for(exc: RegistryError) -> int:
    for exc_type, code in _STATUS_BY_ERROR:
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_400_BAD_REQUEST


async def registry_error_handler(_request: Request, exc: RegistryError) -> JSONResponse:
    """Render a tagged registry failure: HTTP status plus the contract's code."""
    return JSONResponse(
        status_code=_status_for(exc),
        content={
            "detail": exc.detail,
            "contract": exc.contract,
            "error": int(exc.code),
        },
    )


async def validation_error_handler(
    _request: Request, exc: CreditValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={"detail": str(exc)},
    )


app = FastAPI(
    title="credential-registry",
    docs_url="/docs" if SETTINGS.is_dev else None,
    redoc_url="/redoc" if SETTINGS.is_dev else None,
)

app.add_exception_handler(RegistryError, registry_error_handler)
app.add_exception_handler(CreditValidationError, validation_error_handler)

# Middleware execution order: last-added runs first (outermost layer).
# RequestContext (outermost) → Metrics → route handler
app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestContextMiddleware)

app.include_router(metrics_router)
app.include_router(health_router)
app.include_router(chain_router)
app.include_router(issuance_router)
app.include_router(verification_router)
app.include_router(revocation_router)
app.include_router(education_router)

logger.info(
    "credential-registry started  env=%s log_level=%s port=%d owner=%s",
    SETTINGS.app_env,
    SETTINGS.log_level,
    SETTINGS.port,
    SETTINGS.contract_owner,
)
