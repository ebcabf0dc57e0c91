import os
from functools import lru_cache
from typing import Annotated, Any

from fastapi import Depends, FastAPI, Request, status
from fastapi.responses import JSONResponse

from requestgate.adapters import StarletteRequest
from requestgate.clients.base import BaseRequestGate
from requestgate.clients.killbot_client import RequestGate
from requestgate.errors import RequestGateError
from requestgate.exception_handlers import (
    request_gate_exception_handler,
    unhandled_exception_handler,
)
from requestgate.logger import configure_logging, logger
from requestgate.models.response_models import ErrorResponse, GateResponse, HealthResponse

configure_logging()

app = FastAPI(
    title="RequestGate Demo",
    version="0.1.0",
    description="Demo app that lets visitors in only when KillBot.to does not flag them as bots.",
)
logger.info("Started RequestGate demo")


@lru_cache(maxsize=1)
def get_request_gate() -> BaseRequestGate:
    """Dependency providing the shared gate client.

    Configured from KILLBOT_API_KEY and KILLBOT_CONFIG; the client is
    read-only after construction, so one instance serves every request.
    """
    return RequestGate(
        api_key=os.getenv("KILLBOT_API_KEY", ""),
        config_profile=os.getenv("KILLBOT_CONFIG", "default"),
    )


app.add_exception_handler(RequestGateError, request_gate_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)


@app.get(
    "/health",
    tags=["health"],
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check",
)
async def health() -> HealthResponse:
    """Basic health check endpoint."""
    return HealthResponse(status="ok")


@app.get(
    "/",
    response_model=GateResponse,
    status_code=status.HTTP_200_OK,
    tags=["gate"],
    summary="Welcome the visitor unless KillBot.to says to block them.",
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_403_FORBIDDEN: {"description": "Visitor blocked"},
        status.HTTP_502_BAD_GATEWAY: {"model": ErrorResponse},
    },
)
async def index(
    request: Request,
    gate: Annotated[BaseRequestGate, Depends(get_request_gate)],
) -> Any:
    """Check the calling visitor and either welcome or refuse them.

    The visitor IP comes from `X-Forwarded-For` when the app sits behind a
    proxy, otherwise from the connection peer.
    """
    decision = await gate.check_request(StarletteRequest(request))
    logger.info(
        "Bot check decided "
        f"path={request.url.path} method={request.method} block={decision.block} "
        f"location={decision.ip_location}"
    )
    if decision.block:
        return JSONResponse(status_code=status.HTTP_403_FORBIDDEN, content={"message": "Access denied"})
    return GateResponse(message="Welcome", location=decision.ip_location)


@app.get(
    "/usage",
    status_code=status.HTTP_200_OK,
    tags=["gate"],
    summary="Usage/quota of the configured KillBot.to API key.",
    responses={status.HTTP_502_BAD_GATEWAY: {"model": ErrorResponse}},
)
async def usage(gate: Annotated[BaseRequestGate, Depends(get_request_gate)]) -> dict[str, Any]:
    stats = await gate.get_usage()
    return stats.raw
