"""
Address resolution for stream and datagram sockets.

Resolution turns a host/port pair into concrete socket addresses via the
system resolver. Hosts may be numeric ("192.168.0.1", "::1") or names
("www.example.com"); ports may be numeric or service names ("http").

Only the first candidate returned by the resolver is used. A host with
several addresses (e.g. IPv6 and IPv4) is not tried address by address.
"""

import logging
import socket
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .errors import ResolveErrorKind
from .exceptions import ResolveError

FAMILIES: dict[str, int] = {
    "any": socket.AF_UNSPEC,
    "ipv4": socket.AF_INET,
    "ipv6": socket.AF_INET6,
}


def family_from_name(name: str) -> int:
    """
    Map a family name ("any", "ipv4", "ipv6") to its AF_* constant.

    Raises:
        ValueError: If the name is unknown
    """
    try:
        return FAMILIES[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown address family '{name}', expected one of: {', '.join(FAMILIES)}"
        ) from None


class Protocol(Enum):
    """Transport protocol, valued by the matching socket type."""

    TCP = socket.SOCK_STREAM
    UDP = socket.SOCK_DGRAM


@dataclass(frozen=True)
class Endpoint:
    """
    A host/port pair identifying a network location.

    ``host=None`` means all local interfaces and is only meaningful for
    passive (server-side) resolution.
    """

    host: str | None
    port: str | int
    protocol: Protocol = Protocol.TCP

    @property
    def is_wildcard(self) -> bool:
        return self.host is None

    def __str__(self) -> str:
        host = "*" if self.host is None else self.host
        return f"{self.protocol.name.lower()}://{host}:{self.port}"


@dataclass(frozen=True)
class ResolvedAddress:
    """One resolver candidate: everything needed to create, connect or bind."""

    family: int
    type: int
    proto: int
    sockaddr: tuple[Any, ...]

    @classmethod
    def from_addrinfo(cls, info: tuple) -> "ResolvedAddress":
        family, type_, proto, _canonname, sockaddr = info
        return cls(family=int(family), type=int(type_), proto=proto, sockaddr=sockaddr)

    @property
    def host(self) -> str:
        return str(self.sockaddr[0])

    @property
    def port(self) -> int:
        return int(self.sockaddr[1])

    @property
    def protocol(self) -> Protocol:
        return Protocol(self.type)

    def __str__(self) -> str:
        if self.family == socket.AF_INET6:
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"


def resolve(
    host: str | None,
    port: str | int,
    protocol: Protocol = Protocol.TCP,
    passive: bool = False,
    family: int = socket.AF_UNSPEC,
    lg: Any | None = None,
) -> ResolvedAddress:
    """
    Resolve a host/port pair into its first candidate address.

    Args:
        host: Numeric or textual host, or None for all local interfaces
        port: Port number or service name
        protocol: Stream (TCP) or datagram (UDP) semantics
        passive: Resolve for binding a server socket
        family: AF_UNSPEC, AF_INET or AF_INET6
        lg: Logger (defaults to this module's logger)

    Returns:
        ResolvedAddress: First candidate returned by the resolver

    Raises:
        ResolveError: ADDRESS_RESOLUTION when the lookup fails for any reason
    """
    lg = lg or logging.getLogger(__name__)
    flags = socket.AI_PASSIVE if passive else 0
    try:
        infos = socket.getaddrinfo(host, port, family, protocol.value, 0, flags)
    except (OSError, UnicodeError) as e:
        lg.debug(
            "address resolution failed",
            extra={"host": host, "port": port, "exception": e},
        )
        raise ResolveError(
            ResolveErrorKind.ADDRESS_RESOLUTION, host=host, port=port
        ) from e

    if not infos:
        raise ResolveError(ResolveErrorKind.ADDRESS_RESOLUTION, host=host, port=port)

    address = ResolvedAddress.from_addrinfo(infos[0])
    lg.debug(
        "resolved",
        extra={
            "host": host,
            "port": port,
            "address": address,
            "candidates": len(infos),
        },
    )
    return address


def resolve_endpoint(
    endpoint: Endpoint,
    passive: bool = False,
    family: int = socket.AF_UNSPEC,
    lg: Any | None = None,
) -> ResolvedAddress:
    """Resolve an Endpoint. See resolve()."""
    return resolve(
        endpoint.host,
        endpoint.port,
        protocol=endpoint.protocol,
        passive=passive,
        family=family,
        lg=lg,
    )
