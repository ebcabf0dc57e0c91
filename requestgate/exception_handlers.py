from typing import Any

from fastapi import Request, status
from fastapi.responses import JSONResponse

from requestgate.errors import (
    ConfigurationError,
    InvalidAddressError,
    LocalAddressError,
    RemoteError,
    RequestGateError,
    UpstreamError,
)
from requestgate.logger import logger

# Most specific classes first; the first isinstance match wins.
ERROR_RESPONSES: list[tuple[type[RequestGateError], int, str]] = [
    (LocalAddressError, status.HTTP_400_BAD_REQUEST, "local_ip"),
    (InvalidAddressError, status.HTTP_400_BAD_REQUEST, "invalid_ip"),
    (RemoteError, status.HTTP_502_BAD_GATEWAY, "remote_error"),
    (UpstreamError, status.HTTP_502_BAD_GATEWAY, "upstream_error"),
    (ConfigurationError, status.HTTP_500_INTERNAL_SERVER_ERROR, "configuration_error"),
]


def _classify(exc: RequestGateError) -> tuple[int, str]:
    for error_cls, status_code, code in ERROR_RESPONSES:
        if isinstance(exc, error_cls):
            return status_code, code
    return status.HTTP_500_INTERNAL_SERVER_ERROR, "internal_error"


async def request_gate_exception_handler(request: Request, exc: RequestGateError) -> JSONResponse:
    """Translate gate errors into a structured JSON error response.

    Address refusals are the visitor's problem (4xx); anything that went wrong
    talking to KillBot.to is reported as a bad gateway.
    """
    status_code, code = _classify(exc)
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(
            "Bot check failed "
            f"path={request.url.path} method={request.method} code={code} error={exc!r}"
        )
    else:
        logger.info(
            "Bot check refused "
            f"path={request.url.path} method={request.method} code={code} error={exc}"
        )
    return JSONResponse(status_code=status_code, content={"code": code, "message": str(exc)})


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all handler for unexpected errors to return a structured 500 response."""
    logger.exception(
        "Unhandled exception while processing request: "
        f"{repr(exc)} path={request.url.path} method={request.method}"
    )
    content: dict[str, Any] = {
        "code": "internal_error",
        "message": "An unexpected error occurred while processing the request.",
    }
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=content,
    )
