"""Response helpers: fixed cross-origin headers, preflight and error bodies."""

from __future__ import annotations

from typing import Any, Dict, Mapping

from fastapi import Response, status
from fastapi.responses import JSONResponse

from echomatch.errors import SeedError

CORS_HEADERS: Dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}


def apply_cors_headers(response: Response) -> Response:
    for name, value in CORS_HEADERS.items():
        response.headers[name] = value
    return response


def preflight_response() -> Response:
    return apply_cors_headers(Response(status_code=status.HTTP_204_NO_CONTENT))


def json_response(status_code: int, body: Mapping[str, Any]) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=dict(body), headers=CORS_HEADERS)


def error_response(exc: SeedError, with_ok_flag: bool = False) -> JSONResponse:
    """Body is `{"error": message}`, or `{"ok": false, "error": message}` with `with_ok_flag`."""
    body: Dict[str, Any] = {"error": exc.message}
    if with_ok_flag:
        body = {"ok": False, **body}
    return json_response(exc.status_code, body)


__all__ = ["CORS_HEADERS", "apply_cors_headers", "preflight_response", "json_response", "error_response"]
