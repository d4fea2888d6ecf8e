"""Error taxonomy for the seed endpoints and the validation error payload.

Every request-terminating failure is a `SeedError` subclass carrying the HTTP
status it maps to and the message shown to the caller. The reporter in
`echomatch.responses` turns them into JSON bodies.
"""
from __future__ import annotations

from typing import Any

from fastapi import status
from fastapi.encoders import jsonable_encoder


class SeedError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(SeedError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Missing bearer token"


class InvalidCredential(SeedError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid token"


class AccountNotFound(SeedError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, uid: str) -> None:
        self.uid = uid
        super().__init__(f"Auth user not found for UID {uid}")


class MethodNotAllowed(SeedError):
    status_code = status.HTTP_405_METHOD_NOT_ALLOWED
    default_message = "Method not allowed"


class StoreUnavailable(SeedError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Document store unavailable"


def make_validation_error_response(errors: Any) -> dict:
    # Use FastAPI's jsonable_encoder to safely convert potential exception objects
    payload = {"error": {"code": "validation_error", "message": "Validation error", "details": errors}}
    return jsonable_encoder(payload)


__all__ = [
    "SeedError",
    "Unauthenticated",
    "InvalidCredential",
    "AccountNotFound",
    "MethodNotAllowed",
    "StoreUnavailable",
    "make_validation_error_response",
]
