"""Bearer-token gate in front of the write endpoints."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, Request

from echomatch.errors import Unauthenticated
from echomatch.identity import IdentityProvider, get_identity_provider

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def extract_bearer_token(header: Optional[str]) -> str:
    """Return the token from an `Authorization: Bearer <token>` header value."""
    if not header or not header.startswith(BEARER_PREFIX):
        raise Unauthenticated()
    return header[len(BEARER_PREFIX):]


def authenticate_request(request: Request, identity: IdentityProvider) -> str:
    """Verify the request's bearer token and return the actor uid.

    Raises Unauthenticated when the header is missing or malformed and
    InvalidCredential when the token does not verify.
    """
    token = extract_bearer_token(request.headers.get("authorization"))
    claims = identity.verify_id_token(token)
    logger.debug("Authenticated actor uid=%s", claims["uid"])
    return claims["uid"]


def require_actor(request: Request, identity: IdentityProvider = Depends(get_identity_provider)) -> str:
    """Dependency form of `authenticate_request` for routes without a method check."""
    return authenticate_request(request, identity)


__all__ = ["extract_bearer_token", "authenticate_request", "require_actor"]
