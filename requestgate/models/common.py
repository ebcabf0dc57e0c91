from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ClientContext(BaseModel):
    """IP address and User-Agent extracted from one inbound request."""

    model_config = ConfigDict(frozen=True)

    ip: str
    user_agent: str = ""


class Decision(BaseModel):
    """Normalized block/allow verdict returned by the bot-detection service.

    The service answers with a JSON object shaped like
    ``{"success": true, "block": false, "IPlocation": "US", ...}``. Only
    ``block`` is interpreted; everything the service sent is kept verbatim in
    ``raw``. A response without a ``block`` field is treated as "do not block".
    """

    model_config = ConfigDict(populate_by_name=True)

    block: bool = False
    ip_location: str | None = Field(default=None, alias="IPlocation")
    raw: dict[str, Any] = Field(default_factory=dict)

    @field_validator("block", mode="before")
    @classmethod
    def _coerce_null_block(cls, value: Any) -> Any:
        """A null verdict is no verdict; anything else goes through normal bool parsing."""
        if value is None:
            return False
        return value

    @field_validator("ip_location", mode="before")
    @classmethod
    def _coerce_location(cls, value: Any) -> str | None:
        """The location may be missing, null or a non-string value depending on the service revision."""
        if value is None or value == "":
            return None
        return str(value)

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "Decision":
        return cls(
            block=data.get("block"),
            ip_location=data.get("IPlocation"),
            raw=dict(data),
        )


class UsageStats(BaseModel):
    """Usage/quota information for the configured API key.

    The payload is passed through as-is: every remote field is available as an
    attribute and the original object is kept in ``raw``.
    """

    model_config = ConfigDict(extra="allow")

    raw: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "UsageStats":
        fields = {key: value for key, value in data.items() if key != "raw"}
        return cls(raw=dict(data), **fields)
