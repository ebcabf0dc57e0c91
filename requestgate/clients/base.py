from abc import ABC, abstractmethod

from requestgate.context import RequestLike, extract_context
from requestgate.models.common import ClientContext, Decision, UsageStats


class BaseRequestGate(ABC):
    """Abstract base for bot-detection gate clients.

    Concrete implementations talk to a remote service and map its responses
    into a normalized `Decision`, raising the typed errors from
    `requestgate.errors` on failure. The request-level convenience methods are
    shared.
    """

    @abstractmethod
    async def check(self, ip: str, user_agent: str) -> Decision:
        """Ask the remote service whether a visitor should be blocked."""
        raise NotImplementedError

    @abstractmethod
    async def get_usage(self) -> UsageStats:
        """Fetch usage/quota information for the configured API key."""
        raise NotImplementedError

    def extract_context(self, request: RequestLike) -> ClientContext:
        return extract_context(request)

    async def check_request(self, request: RequestLike) -> Decision:
        """Extract the visitor from an inbound request and check it."""
        context = self.extract_context(request)
        return await self.check(context.ip, context.user_agent)
