"""Authentication API routes: ID token issuance and current-actor endpoint."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from echomatch import config, schemas
from echomatch.auth import require_actor
from echomatch.identity import IdentityProvider, get_identity_provider

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


@router.post("/token", response_model=schemas.TokenResponse)
async def issue_token(
    credentials: schemas.TokenRequest,
    identity: IdentityProvider = Depends(get_identity_provider),
) -> schemas.TokenResponse:
    """Exchange email + password for an ID token usable on the seed endpoint."""
    account = identity.authenticate(credentials.email, credentials.password)
    if account is None:
        logger.info("Token request rejected for %s", credentials.email)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    if account.disabled:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Account disabled")

    return schemas.TokenResponse(
        id_token=identity.issue_id_token(account),
        expires_in=config.ID_TOKEN_EXPIRE_MINUTES * 60,
        uid=account.uid,
    )


@router.get("/me", response_model=schemas.ActorResponse)
async def me(
    actor_uid: str = Depends(require_actor),
    identity: IdentityProvider = Depends(get_identity_provider),
) -> schemas.ActorResponse:
    """Return the verified caller."""
    account = identity.get_account(actor_uid)
    return schemas.ActorResponse(uid=account.uid, email=account.email)
