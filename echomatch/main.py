"""FastAPI application factory and app configuration for the EchoMatch seeder.

This module creates the FastAPI `app`, configures middleware (cross-origin
headers, rate limiting), registers routers under `echomatch.routers.*` and
initializes the DB on startup (calls `echomatch.database.init_db`).
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
from starlette.exceptions import HTTPException as StarletteHTTPException

from echomatch import config
from echomatch.database import init_db
from echomatch.errors import MethodNotAllowed, SeedError, make_validation_error_response
from echomatch.responses import apply_cors_headers, error_response, preflight_response

logger = logging.getLogger(__name__)
logging.basicConfig(level=config.LOG_LEVEL)


limiter = Limiter(key_func=get_remote_address, default_limits=[config.RATE_LIMIT])


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Lifespan startup: initializing database")
    init_db()
    yield
    logger.info("Lifespan shutdown")

app = FastAPI(title="EchoMatch Seeder", version="1.0.0", lifespan=lifespan)
app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)


@app.middleware("http")
async def cross_origin_headers(request: Request, call_next):
    # Preflight is answered before routing, auth or rate limiting
    if request.method == "OPTIONS":
        return preflight_response()
    response = await call_next(request)
    return apply_cors_headers(response)


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(status_code=429, content={"error": {"code": "rate_limited", "message": "Rate limit exceeded"}})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Return a standardized validation error payload
    return JSONResponse(status_code=422, content=make_validation_error_response(exc.errors()))


@app.exception_handler(StarletteHTTPException)
async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 405:
        return error_response(MethodNotAllowed())
    return await http_exception_handler(request, exc)


@app.exception_handler(SeedError)
async def seed_error_handler(request: Request, exc: SeedError):
    return error_response(exc)


from echomatch.routers import auth as auth_routes
from echomatch.routers import seed as seed_routes
from echomatch.routers import system as system_routes

for _module in (system_routes, auth_routes, seed_routes):
    app.include_router(_module.router)
    logger.info("Included router: %s", _module.__name__)


__all__ = ["app"]
