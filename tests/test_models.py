import pytest
from pydantic import ValidationError

from requestgate.models.common import Decision, UsageStats
from requestgate.models.config import DEFAULT_BASE_URL, GateConfig


def test_decision_from_payload() -> None:
    payload = {"success": True, "block": True, "IPlocation": "US"}

    decision = Decision.from_payload(payload)

    assert decision.block is True
    assert decision.ip_location == "US"
    assert decision.raw == payload


@pytest.mark.parametrize("payload", [{"success": True}, {"success": True, "block": None}])
def test_decision_without_verdict_does_not_block(payload: dict) -> None:
    assert Decision.from_payload(payload).block is False


@pytest.mark.parametrize("value, expected", [(None, None), ("", None), ("FR", "FR"), (250, "250")])
def test_decision_location_is_optional(value: object, expected: str | None) -> None:
    assert Decision.from_payload({"block": False, "IPlocation": value}).ip_location == expected


def test_decision_rejects_unparseable_verdict() -> None:
    with pytest.raises(ValidationError):
        Decision.from_payload({"block": "maybe"})


def test_decision_raw_is_a_copy() -> None:
    payload = {"block": False}
    decision = Decision.from_payload(payload)
    payload["block"] = True

    assert decision.raw == {"block": False}


def test_usage_stats_passes_fields_through() -> None:
    stats = UsageStats.from_payload({"success": True, "used": 10, "quota": 100})

    assert stats.used == 10
    assert stats.quota == 100
    assert stats.raw == {"success": True, "used": 10, "quota": 100}


def test_gate_config_defaults() -> None:
    config = GateConfig(api_key="key")

    assert config.config_profile == "default"
    assert config.base_url == DEFAULT_BASE_URL
    assert config.timeout_seconds == 5.0


def test_gate_config_rejects_blank_api_key() -> None:
    with pytest.raises(ValidationError):
        GateConfig(api_key="  ")


def test_gate_config_is_frozen() -> None:
    config = GateConfig(api_key="key")

    with pytest.raises(ValidationError):
        config.config_profile = "strict"  # type: ignore[misc]
