"""Caller tokens (ES256 JWT).

A token proves which principal is calling: its `sub` claim is the
principal string, for example a deployer address or a
`<deployer>.<contract>` contract principal.  What that principal may do
is decided by the registry's authorization gate, so tokens carry no roles.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime, timedelta

import jwt
from cryptography.hazmat.primitives.asymmetric import ec

from credential_registry.models.principal import Principal

# Ephemeral per-process key: tokens do not survive a restart, and neither
# does the in-memory registry they authorize against.
_private_key = ec.generate_private_key(ec.SECP256R1())
_public_key = _private_key.public_key()

ALGORITHM = "ES256"
ISSUER = "credential-registry"
AUDIENCE = "credential-registry"
CALLER_TOKEN_TTL_MIN = 15


def create_access_token(*, sub: str, ttl_minutes: int = CALLER_TOKEN_TTL_MIN) -> str:
    """Sign a caller token for principal `sub`."""
    if not sub:
        raise ValueError("token subject must be a non-empty principal")

    now = datetime.now(UTC)
    return jwt.encode(
        {
            "sub": sub,
            "iss": ISSUER,
            "aud": AUDIENCE,
            "iat": now,
            "exp": now + timedelta(minutes=ttl_minutes),
            "jti": str(uuid.uuid4()),
        },
        _private_key,
        algorithm=ALGORITHM,
    )


def decode_access_token(token: str) -> dict:
    """Verify signature, issuer, audience and expiry; return the claims.

    The algorithm list is pinned, so `alg: none` and HS256-with-public-key
    tokens are rejected.  Raises jwt.ExpiredSignatureError or
    jwt.InvalidTokenError.
    """
    return jwt.decode(
        token,
        _public_key,
        algorithms=[ALGORITHM],
        issuer=ISSUER,
        audience=AUDIENCE,
        options={"require": ["sub", "exp", "iat", "jti"]},
    )


def caller_principal(token: str) -> Principal:
    """Decode `token` and return the principal it speaks for."""
    claims = decode_access_token(token)
    sub = claims["sub"]
    if not isinstance(sub, str) or not sub:
        raise jwt.InvalidTokenError("subject is not a principal")
    return Principal(address=sub)
