"""
TCP connection establishment and acceptance.

Outbound:
    handle = connect("www.example.com", "80")
    ...
    disconnect(handle)
    handle.close()

Inbound (one accept per call; a server loop calls accept_once repeatedly):
    with create_host("8080") as host:
        while True:
            client, peer = accept_once(host, backlog=128)
            ...

Every operation that creates a socket closes it again before raising.
Operations never close a handle the caller passed in.
"""

import logging
import socket
from typing import Any, NamedTuple

from ._common import bind_host, open_as, resolve_as
from .address import Protocol
from .errors import AcceptErrorKind, ConnectErrorKind
from .exceptions import AcceptError, ConnectError, CreateHostError, HandleError
from .handle import Handle

DEFAULT_BACKLOG = 128


class Accepted(NamedTuple):
    """An accepted connection and the address of the connecting peer."""

    handle: Handle
    peer: tuple[Any, ...]


def connect(
    host: str,
    port: str | int,
    family: int = socket.AF_UNSPEC,
    lg: Any | None = None,
) -> Handle:
    """
    Open an outbound TCP connection.

    Args:
        host: IP or name of the host to connect to (e.g. "192.168.0.1")
        port: Port or service name (e.g. "80", "http")
        family: AF_UNSPEC, AF_INET or AF_INET6
        lg: Logger (defaults to this module's logger)

    Returns:
        Handle: Connected handle, owned by the caller

    Raises:
        ConnectError: ADDRESS_RESOLUTION, SOCKET_CREATION or CONNECT, checked
            in that order. On CONNECT the socket has already been closed.
    """
    lg = lg or logging.getLogger(__name__)
    address = resolve_as(ConnectError, host, port, Protocol.TCP, False, family, lg)
    handle = open_as(ConnectError, address, lg)

    try:
        handle.sock.connect(address.sockaddr)
    except OSError as e:
        handle.close()
        lg.debug(
            "connect failed",
            extra={"host": host, "port": port, "address": address, "exception": e},
        )
        raise ConnectError(
            ConnectErrorKind.CONNECT, host=host, port=port, errno=e.errno
        ) from e

    lg.debug("connected", extra={"address": address, "fd": handle.fileno()})
    return handle


def disconnect(handle: Handle) -> None:
    """
    Shut down both directions of a TCP connection.

    Best-effort: failures are ignored and nothing is reported. The handle
    stays owned by the caller and must still be closed.
    """
    handle.shutdown(socket.SHUT_RDWR)


def create_host(
    port: str | int,
    family: int = socket.AF_UNSPEC,
    lg: Any | None = None,
) -> Handle:
    """
    Create a TCP host bound to a port on all local interfaces.

    Address reuse is enabled so a restarted server can rebind the port
    immediately.

    Args:
        port: Port or service name to bind
        family: AF_UNSPEC, AF_INET or AF_INET6
        lg: Logger (defaults to this module's logger)

    Returns:
        Handle: Bound handle, ready for accept_once()

    Raises:
        CreateHostError: ADDRESS_RESOLUTION, SOCKET_CREATION, REUSE_OPTION or
            BIND, checked in that order.
    """
    lg = lg or logging.getLogger(__name__)
    return bind_host(CreateHostError, port, Protocol.TCP, family, lg)


def accept_once(
    handle: Handle, backlog: int = DEFAULT_BACKLOG, lg: Any | None = None
) -> Accepted:
    """
    Listen on a bound handle and accept exactly one connection.

    Blocks until a peer connects or the operation fails. Closing the
    listening handle from another thread makes a blocked call fail with
    ACCEPT.

    Args:
        handle: Handle returned by create_host()
        backlog: Number of pending connections the kernel may queue
        lg: Logger (defaults to this module's logger)

    Returns:
        Accepted: (handle, peer) for the new connection

    Raises:
        AcceptError: LISTEN or ACCEPT
    """
    lg = lg or logging.getLogger(__name__)
    try:
        handle.sock.listen(backlog)
    except (OSError, HandleError) as e:
        lg.debug("listen failed", extra={"fd": handle.fileno(), "exception": e})
        raise AcceptError(AcceptErrorKind.LISTEN, backlog=backlog) from e

    try:
        sock, peer = handle.sock.accept()
    except (OSError, HandleError) as e:
        lg.debug("accept failed", extra={"fd": handle.fileno(), "exception": e})
        raise AcceptError(AcceptErrorKind.ACCEPT) from e

    lg.debug("accepted", extra={"peer": peer, "fd": sock.fileno()})
    return Accepted(Handle(sock), peer)
