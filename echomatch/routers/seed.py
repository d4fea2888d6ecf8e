"""Seed routes: populate the document store with the NYC demo data.

- `/api/seed_nyc_demo` (POST, bearer token required) writes the users,
  questions, rooms, live game session and participants. Idempotent: records
  that already exist are left untouched.
- `/api/seed_user_doc` (any method, no auth) merge-writes one fixed profile
  for the configured seed account.

OPTIONS requests never get here; the app middleware answers them.
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse

from echomatch.auth import authenticate_request
from echomatch.config import DemoKeys
from echomatch.dependencies import Clock, get_clock, get_demo_keys, get_seed_user_uid, get_store
from echomatch.errors import MethodNotAllowed, SeedError
from echomatch.identity import IdentityProvider, get_identity_provider
from echomatch.responses import error_response, json_response
from echomatch.schemas import SeedResponse, SeedUserResponse
from echomatch.seed import Scenario, seed_demo, seed_user_profile
from echomatch.store import DocumentStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Seed"])

# Every method but OPTIONS, which the app middleware answers
ANY_METHOD = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "TRACE", "CONNECT"]


@router.api_route("/seed_nyc_demo", methods=ANY_METHOD)
async def seed_nyc_demo(
    request: Request,
    scenario: Scenario = Query(Scenario.ALL, description="Which demo scenario to seed"),
    identity: IdentityProvider = Depends(get_identity_provider),
    store: DocumentStore = Depends(get_store),
    clock: Clock = Depends(get_clock),
    keys: DemoKeys = Depends(get_demo_keys),
) -> JSONResponse:
    """Seed the NYC demo scenario(s). Requires `Authorization: Bearer <id token>`."""
    try:
        if request.method != "POST":
            raise MethodNotAllowed()
        actor_uid = authenticate_request(request, identity)
        report = seed_demo(store, scenario, now=clock(), keys=keys)
    except SeedError as exc:
        if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error("seed_nyc_demo failed: %s", exc.message)
        else:
            logger.info("seed_nyc_demo rejected (%s): %s", exc.status_code, exc.message)
        return error_response(exc)

    logger.info("seed_nyc_demo completed for actor=%s", actor_uid)
    body = SeedResponse(actorUid=actor_uid, summary=report.as_dict())
    return json_response(status.HTTP_200_OK, body.model_dump())


@router.api_route("/seed_user_doc", methods=ANY_METHOD)
async def seed_user_doc(
    identity: IdentityProvider = Depends(get_identity_provider),
    store: DocumentStore = Depends(get_store),
    clock: Clock = Depends(get_clock),
    uid: str = Depends(get_seed_user_uid),
) -> JSONResponse:
    """Merge-write the demo profile for the configured seed account."""
    try:
        identity.get_account(uid)
        path, data = seed_user_profile(store, uid, now=clock())
    except SeedError as exc:
        if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error("seed_user_doc failed: %s", exc.message)
        else:
            logger.info("seed_user_doc rejected (%s): %s", exc.status_code, exc.message)
        return error_response(exc, with_ok_flag=True)

    return json_response(status.HTTP_200_OK, SeedUserResponse(path=path, data=data).model_dump())
