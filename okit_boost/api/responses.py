"""JSON envelopes shared by the route handlers."""

from typing import Any

from fastapi.responses import JSONResponse

from okit_boost.constants import NOT_AUTHENTICATED


def success(**payload: Any) -> dict[str, Any]:
    return {"success": True, **payload}


def failure(message: str, status_code: int = 500) -> JSONResponse:
    """Admin-style envelope: {"success": false, "error": ...}."""
    return JSONResponse({"success": False, "error": message}, status_code=status_code)


def error(message: str, status_code: int = 500) -> JSONResponse:
    """Public-style envelope: {"error": ...}."""
    return JSONResponse({"error": message}, status_code=status_code)


def unauthenticated() -> JSONResponse:
    return error(NOT_AUTHENTICATED, status_code=401)
