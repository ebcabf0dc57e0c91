class RequestGateError(Exception):
    """Base error for the request gate client."""


class ConfigurationError(RequestGateError, ValueError):
    """Raised when the client is constructed with an invalid configuration (e.g. an empty API key)."""


class AddressError(RequestGateError):
    """Base error for visitor addresses refused before any outbound call."""


class LocalAddressError(AddressError):
    """Raised when the visitor IP is loopback, private, link-local or unique-local."""


class InvalidAddressError(AddressError):
    """Raised when the visitor IP is not a syntactically valid IPv4 or IPv6 address."""


class UpstreamError(RequestGateError):
    """Base error for failures talking to the remote bot-detection service."""


class TransportError(UpstreamError):
    """Raised when the outbound HTTP exchange fails at the network level."""


class ProtocolError(UpstreamError):
    """Raised when the remote response is not the JSON object we expect."""


class RemoteError(UpstreamError):
    """Raised when the remote service reports a business-level failure."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
