import pytest

from requestgate.errors import LocalAddressError, TransportError
from requestgate.fallback import with_fallback
from requestgate.models.common import Decision


async def _decide(decision: Decision) -> Decision:
    return decision


async def _fail(exc: Exception) -> Decision:
    raise exc


@pytest.mark.asyncio
async def test_with_fallback_passes_decision_through() -> None:
    decision = Decision(block=True, ip_location="US", raw={"block": True, "IPlocation": "US"})

    assert await with_fallback(_decide(decision)) is decision


@pytest.mark.asyncio
async def test_with_fallback_fails_open_by_default() -> None:
    result = await with_fallback(_fail(TransportError("connection refused")))

    assert result.block is False
    assert result.raw == {"block": False, "error": "connection refused"}


@pytest.mark.asyncio
async def test_with_fallback_can_fail_closed() -> None:
    result = await with_fallback(_fail(LocalAddressError("Local IP addresses are not processed")), block_on_error=True)

    assert result.block is True
    assert result.raw["error"] == "Local IP addresses are not processed"


@pytest.mark.asyncio
async def test_with_fallback_does_not_swallow_unrelated_errors() -> None:
    with pytest.raises(RuntimeError):
        await with_fallback(_fail(RuntimeError("bug")))
