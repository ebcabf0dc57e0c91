from collections.abc import Mapping

from fastapi import Request


class HeadersRequest:
    """RequestLike over a plain header mapping and an optional peer address.

    Header lookup is case-insensitive, matching HTTP semantics.
    """

    def __init__(self, headers: Mapping[str, str], peer: str | None = None) -> None:
        self._headers = {name.lower(): value for name, value in headers.items()}
        self._peer = peer

    def get_header(self, name: str) -> str | None:
        return self._headers.get(name.lower())

    def peer_address(self) -> str | None:
        return self._peer


class StarletteRequest:
    """RequestLike over a FastAPI (Starlette) `Request`."""

    def __init__(self, request: Request) -> None:
        self._request = request

    def get_header(self, name: str) -> str | None:
        return self._request.headers.get(name)

    def peer_address(self) -> str | None:
        # `client` is None when the ASGI server does not report the peer (e.g. some test transports).
        return self._request.client.host if self._request.client else None
