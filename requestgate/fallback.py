from collections.abc import Awaitable

from requestgate.errors import RequestGateError
from requestgate.logger import logger
from requestgate.models.common import Decision


async def with_fallback(check: Awaitable[Decision], *, block_on_error: bool = False) -> Decision:
    """Await a gate check, turning any gate error into a default verdict.

    The client itself always raises; this wrapper is where an application
    chooses its policy. ``block_on_error=False`` fails open (allow the visitor
    when the check cannot be made), ``True`` fails closed. The error message is
    kept in ``raw["error"]`` and logged so failures stay visible.

    Usage::

        decision = await with_fallback(gate.check_request(request))
    """
    try:
        return await check
    except RequestGateError as exc:
        logger.warning(
            f"Bot check failed, falling back to block={block_on_error} "
            f"error_type={type(exc).__name__} error={exc}"
        )
        return Decision(block=block_on_error, raw={"block": block_on_error, "error": str(exc)})
