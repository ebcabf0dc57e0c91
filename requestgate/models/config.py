from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_BASE_URL = "https://killbot.to/api/antiBots"
DEFAULT_CONFIG_PROFILE = "default"


class GateConfig(BaseModel):
    """Immutable configuration of a RequestGate client.

    Set once at construction and shared read-only by every call, so a single
    client may be used concurrently without synchronization.
    """

    model_config = ConfigDict(frozen=True)

    api_key: str = Field(description="KillBot.to API key, sent as a path segment.")
    config_profile: str = Field(
        default=DEFAULT_CONFIG_PROFILE,
        description="Named configuration profile evaluated by the remote service.",
        examples=["default"],
    )
    base_url: str = Field(default=DEFAULT_BASE_URL, description="Root of the remote antiBots API.")
    timeout_seconds: float = Field(default=5.0, gt=0, description="Bound on each outbound HTTP exchange.")

    @field_validator("api_key", mode="before")
    @classmethod
    def _validate_api_key(cls, value: str | None) -> str:
        value_str = str(value or "").strip()
        if not value_str:
            raise ValueError("api_key must be a non-empty string")
        return value_str

    @field_validator("config_profile", mode="before")
    @classmethod
    def _default_profile(cls, value: str | None) -> str:
        """None or blank -> the "default" profile."""
        value_str = str(value or "").strip()
        return value_str or DEFAULT_CONFIG_PROFILE

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")
