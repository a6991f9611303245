import socket
from ipaddress import ip_address

from geoattr.errors import InvalidAddressError


def resolve_address(ip: str) -> str:
    """Return `ip` as an address literal, resolving host names through the system resolver.

    IPv4/IPv6 literals are returned unchanged. A name that does not resolve
    raises InvalidAddressError.
    """
    try:
        return str(ip_address(ip))
    except ValueError:
        pass

    if not ip or not ip.strip():
        raise InvalidAddressError("The IP address is empty")
    try:
        addresses = socket.getaddrinfo(ip, None)
    except (socket.gaierror, UnicodeError) as exc:
        raise InvalidAddressError(f"{ip!r} is not a valid IP address or resolvable host name") from exc
    if not addresses:
        raise InvalidAddressError(f"{ip!r} did not resolve to any address")
    # sockaddr is (host, port) for IPv4 and (host, port, flowinfo, scope_id) for IPv6.
    return addresses[0][4][0]
