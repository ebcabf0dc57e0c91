from ipaddress import IPv4Address, IPv6Address, ip_address, ip_network

from requestgate.errors import InvalidAddressError, LocalAddressError

# Ranges the remote service has no meaningful signal for.
LOCAL_NETWORKS = (
    ip_network("127.0.0.0/8"),
    ip_network("10.0.0.0/8"),
    ip_network("172.16.0.0/12"),
    ip_network("192.168.0.0/16"),
    ip_network("::1/128"),
    ip_network("fe80::/10"),
    ip_network("fc00::/7"),
)


def normalize_ip(value: str | None) -> str:
    """Canonicalize a raw address taken from a request.

    IPv4-mapped IPv6 forms such as ``::ffff:203.0.113.5`` are reduced to the
    plain IPv4 literal by dropping everything up to and including the last
    colon. Genuine IPv6 addresses are returned unchanged.
    """
    if not value:
        return ""
    ip = value.strip()
    if ":" in ip and "." in ip:
        ip = ip.rsplit(":", 1)[1]
    return ip


def parse_ip(value: str) -> IPv4Address | IPv6Address:
    """Parse an IPv4/IPv6 literal, raising InvalidAddressError on malformed input."""
    try:
        return ip_address(value)
    except ValueError as exc:
        raise InvalidAddressError(f"Invalid IP address provided: {value!r}") from exc


def is_local_address(address: IPv4Address | IPv6Address) -> bool:
    if isinstance(address, IPv6Address) and address.ipv4_mapped is not None:
        address = address.ipv4_mapped
    return any(address in network for network in LOCAL_NETWORKS)


def validate_ip(value: str) -> str:
    """Return the address to send upstream, or raise if it must not be checked.

    - Malformed literals raise InvalidAddressError.
    - Loopback, RFC1918, link-local and unique-local addresses raise
      LocalAddressError.

    The returned value is the stripped input, not a re-serialized form, so the
    caller's literal reaches the remote service verbatim.
    """
    ip = str(value or "").strip()
    address = parse_ip(ip)
    if is_local_address(address):
        raise LocalAddressError(f"Local IP addresses are not processed: {ip}")
    return ip
