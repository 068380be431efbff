from __future__ import annotations

import logging
from typing import Annotated

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from credential_registry.models.principal import Principal
from credential_registry.services import token_service
from credential_registry.services.registry import Registry, get_registry

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

RegistryDep = Annotated[Registry, Depends(get_registry)]


def require_caller(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ],
) -> Principal:
    """Extract and validate the bearer token. Returns the calling Principal.

    Used on every endpoint that mutates registry state.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        principal = token_service.caller_principal(credentials.credentials)
    except jwt.ExpiredSignatureError:
        logger.warning("Expired token rejected")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token expired",
            headers={"WWW-Authenticate": "Bearer"},
        ) from None
    except jwt.InvalidTokenError as e:
        logger.warning("Invalid token rejected: %s", e)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        ) from None

    logger.debug("Token validated for caller=%s", principal.address)
    return principal


CallerDep = Annotated[Principal, Depends(require_caller)]
