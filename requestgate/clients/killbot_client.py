from http import HTTPStatus
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from requestgate.address import validate_ip
from requestgate.clients.base import BaseRequestGate
from requestgate.errors import (
    AddressError,
    ConfigurationError,
    ProtocolError,
    RemoteError,
    TransportError,
)
from requestgate.logger import logger
from requestgate.models.common import Decision, UsageStats
from requestgate.models.config import DEFAULT_BASE_URL, DEFAULT_CONFIG_PROFILE, GateConfig

CLIENT_USER_AGENT = "KillBot.to Blocker-Python"


class RequestGate(BaseRequestGate):
    """Client for the https://killbot.to/ bot-detection API.

    Every check is a single outbound request:

        GET {base_url}/{api_key}/check?config={profile}&ip={ip}&ua={user_agent}

    The API key travels as a path segment; query parameters are URL-encoded by
    httpx. Failures are never turned into "allow" here: they surface as the
    typed errors from `requestgate.errors` and the caller decides whether to
    fail open or closed (see `requestgate.fallback`). No retries are made.
    """

    def __init__(
        self,
        api_key: str,
        config_profile: str = DEFAULT_CONFIG_PROFILE,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        try:
            self._config = GateConfig(
                api_key=api_key,
                config_profile=config_profile,
                base_url=base_url,
                timeout_seconds=timeout_seconds,
            )
        except ValidationError as exc:
            fields = ", ".join(str(error["loc"][-1]) for error in exc.errors() if error.get("loc"))
            raise ConfigurationError(f"Invalid RequestGate configuration: {fields}") from exc
        self._transport = transport

    @property
    def config(self) -> GateConfig:
        return self._config

    async def check(self, ip: str, user_agent: str) -> Decision:
        """Ask KillBot.to whether the visitor should be blocked.

        Raises LocalAddressError / InvalidAddressError before any network
        activity, then TransportError, ProtocolError or RemoteError for
        failures of the exchange itself.
        """
        try:
            ip = validate_ip(ip)
        except AddressError as exc:
            logger.info(f"Refusing bot check ip={ip!r} config={self._config.config_profile} error={exc}")
            raise

        params = {
            "config": self._config.config_profile,
            "ip": ip,
            "ua": user_agent or "",
        }
        logger.debug(f"Dispatching bot check ip={ip} config={self._config.config_profile}")
        data = await self._request(self._endpoint("check"), params=params)

        try:
            decision = Decision.from_payload(data)
        except ValidationError as exc:
            raise ProtocolError(f"Unexpected verdict in KillBot.to response: {exc}") from exc

        logger.debug(f"Bot check finished ip={ip} block={decision.block} location={decision.ip_location}")
        return decision

    async def get_usage(self) -> UsageStats:
        """Fetch usage/quota information for the configured API key."""
        data = await self._request(self._endpoint("usage"))
        return UsageStats.from_payload(data)

    def _endpoint(self, action: str) -> str:
        api_key = quote(self._config.api_key, safe="")
        return f"{self._config.base_url}/{api_key}/{action}"

    async def _request(self, url: str, params: dict[str, str] | None = None) -> dict[str, Any]:
        """Perform the HTTP request and return the decoded JSON object.

        KillBot.to reports business failures in the body as
        ``{"success": false, "error": "..."}``, sometimes with HTTP 200; both
        that and HTTP error statuses are normalized into RemoteError.
        """
        headers = {"User-Agent": CLIENT_USER_AGENT, "Accept": "application/json"}
        try:
            async with httpx.AsyncClient(
                timeout=self._config.timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.get(url, params=params, headers=headers)
        except httpx.RequestError as exc:
            logger.warning(f"Request to KillBot.to failed error={exc!r}")
            raise TransportError(f"Request to KillBot.to failed: {exc!r}") from exc

        data = self._parse_json(response)
        self._handle_remote_error(response, data)
        return data

    @staticmethod
    def _parse_json(response: httpx.Response) -> dict[str, Any]:
        try:
            data = response.json()
        except ValueError as exc:
            if response.status_code >= HTTPStatus.BAD_REQUEST:
                # Error pages (e.g. from a proxy in front of the API) are not JSON.
                raise RemoteError(
                    f"KillBot.to returned HTTP {response.status_code}",
                    status_code=response.status_code,
                ) from exc
            raise ProtocolError(f"Failed to decode KillBot.to response as JSON: {exc}") from exc

        if not isinstance(data, dict):
            raise ProtocolError(f"Expected a JSON object from KillBot.to, got {type(data).__name__}")
        return data

    @staticmethod
    def _handle_remote_error(response: httpx.Response, data: dict[str, Any]) -> None:
        """Map `success: false` payloads and HTTP error statuses to RemoteError."""
        status_code = response.status_code

        if data.get("success") is False:
            message = str(data.get("error") or "Unknown error from KillBot.to")
            logger.warning(f"KillBot.to reported an error status={status_code} error={message}")
            raise RemoteError(message, status_code=status_code)

        if status_code >= HTTPStatus.BAD_REQUEST:
            message = str(data.get("error") or f"KillBot.to returned HTTP {status_code}")
            logger.warning(f"KillBot.to returned an HTTP error status={status_code} error={message}")
            raise RemoteError(message, status_code=status_code)
