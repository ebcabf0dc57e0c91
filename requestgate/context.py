from typing import Protocol, runtime_checkable

from requestgate.address import normalize_ip
from requestgate.models.common import ClientContext

FORWARDED_FOR_HEADER = "x-forwarded-for"
USER_AGENT_HEADER = "user-agent"


@runtime_checkable
class RequestLike(Protocol):
    """The narrow view of an inbound request needed to identify the visitor.

    Framework requests are wrapped by the adapters in `requestgate.adapters`
    rather than depended on directly.
    """

    def get_header(self, name: str) -> str | None: ...

    def peer_address(self) -> str | None: ...


def extract_context(request: RequestLike) -> ClientContext:
    """Read the visitor IP and User-Agent from an inbound request.

    - The IP is taken from `X-Forwarded-For` when present (first hop of a
      proxy chain), otherwise from the transport-level peer address.
    - IPv4-mapped IPv6 forms are reduced to plain IPv4.
    - A missing User-Agent becomes an empty string.

    No validation happens here; `RequestGate.check` refuses bad addresses.
    """
    forwarded_for = request.get_header(FORWARDED_FOR_HEADER)
    if forwarded_for and forwarded_for.strip():
        raw_ip = forwarded_for.split(",", 1)[0]
    else:
        raw_ip = request.peer_address()

    user_agent = request.get_header(USER_AGENT_HEADER) or ""
    return ClientContext(ip=normalize_ip(raw_ip), user_agent=user_agent)
