from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, cast

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status

from ...engine.errors import ChessError, TurnViolation


logger = logging.getLogger(__name__)

# starlette renamed its 422 constant; the number itself is stable
UNPROCESSABLE = 422

_CODES: Dict[int, str] = {
    status.HTTP_400_BAD_REQUEST: "bad_request",
    status.HTTP_404_NOT_FOUND: "not_found",
    status.HTTP_409_CONFLICT: "conflict",
    UNPROCESSABLE: "unprocessable_entity",
}


def error_envelope(
    *,
    code: str,
    message: str,
    err_type: str,
    request_id: str,
    field_errors: Optional[List[Dict[str, str]]] = None,
) -> Dict[str, Any]:
    body: Dict[str, Any] = {
        "code": code,
        "message": message,
        "type": err_type,
        "request_id": request_id,
    }
    if field_errors:
        body["field_errors"] = field_errors
    return {"error": body}


def _code_for(status_code: int) -> str:
    if status_code in _CODES:
        return _CODES[status_code]
    return "internal_error" if status_code >= 500 else "error"


def _respond(
    request: Request,
    status_code: int,
    message: str,
    field_errors: Optional[List[Dict[str, str]]] = None,
) -> JSONResponse:
    payload = error_envelope(
        code=_code_for(status_code),
        message=message,
        err_type="server_error" if status_code >= 500 else "client_error",
        request_id=getattr(request.state, "request_id", ""),
        field_errors=field_errors,
    )
    return JSONResponse(status_code=status_code, content=payload)


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    http_exc = cast(HTTPException, exc)
    detail = http_exc.detail if isinstance(http_exc.detail, str) else str(http_exc.detail)
    return _respond(request, http_exc.status_code, detail)


async def chess_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Engine errors that escape a route: turn-order breaks are conflicts, the rest bad input."""
    if isinstance(exc, TurnViolation):
        return _respond(request, status.HTTP_409_CONFLICT, str(exc))
    return _respond(request, status.HTTP_400_BAD_REQUEST, str(exc))


async def request_validation_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    rve = cast(RequestValidationError, exc)
    fields = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ()) if part is not None),
            "code": err.get("type", "value_error"),
            "message": err.get("msg", "invalid value"),
        }
        for err in rve.errors()
    ]
    return _respond(request, UNPROCESSABLE, "Validation error", fields or None)


async def exception_handler(request: Request, exc: Exception) -> JSONResponse:
    if isinstance(exc, HTTPException):
        return await http_exception_handler(request, exc)
    if isinstance(exc, ChessError):
        return await chess_error_handler(request, exc)
    logger.exception(
        "unhandled error on %s", request.url.path,
        extra={"request_id": getattr(request.state, "request_id", "")},
    )
    return _respond(request, status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error")
