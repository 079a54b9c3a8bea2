"""
UDP sockets for sending and receiving datagrams.

Sending through a session (the resolved peer address travels with the
handle, since every datagram send needs the destination):

    with open_udp_socket("192.168.0.10", "9000") as session:
        session.send(b"hello")

One-shot send without keeping a socket:

    send_once("192.168.0.10", "9000", b"hello")

Receiving:

    with create_udp_host("9000") as host:
        payload, peer = recv_from(host)

Datagram sends are not retried or split: the returned byte count is what
the kernel accepted for that single call.
"""

import logging
import socket
from types import TracebackType
from typing import Any, NamedTuple

from ._common import bind_host, open_as, resolve_as
from .address import Protocol, ResolvedAddress
from .errors import RecvFromErrorKind, SendOnceErrorKind, SendToErrorKind
from .exceptions import (
    HandleError,
    RecvFromError,
    SendOnceError,
    SendToError,
    UdpHostError,
    UdpSocketError,
)
from .handle import Handle

MAX_DATAGRAM_SIZE = 65535


class UdpSession(NamedTuple):
    """A UDP handle paired with the peer address its sends go to."""

    handle: Handle
    address: ResolvedAddress

    def send(self, data: bytes, lg: Any | None = None) -> int:
        """Send one datagram to the remembered address. See send_to()."""
        return send_to(self.handle, self.address, data, lg=lg)

    def close(self) -> None:
        self.handle.close()

    def __enter__(self) -> "UdpSession":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()


def open_udp_socket(
    host: str,
    port: str | int,
    family: int = socket.AF_UNSPEC,
    lg: Any | None = None,
) -> UdpSession:
    """
    Resolve a peer and create a datagram socket for sending to it.

    The socket is bound to a transient local port on its first send.

    Returns:
        UdpSession: (handle, address); keep both together for later sends

    Raises:
        UdpSocketError: ADDRESS_RESOLUTION or SOCKET_CREATION
    """
    lg = lg or logging.getLogger(__name__)
    address = resolve_as(UdpSocketError, host, port, Protocol.UDP, False, family, lg)
    handle = open_as(UdpSocketError, address, lg)
    return UdpSession(handle, address)


def send_to(
    handle: Handle, address: ResolvedAddress, data: bytes, lg: Any | None = None
) -> int:
    """
    Send one datagram. Best-effort, single attempt.

    Returns:
        int: Bytes accepted by the kernel, possibly fewer than len(data)

    Raises:
        SendToError: SEND
    """
    lg = lg or logging.getLogger(__name__)
    try:
        sent = handle.sock.sendto(data, address.sockaddr)
    except (OSError, HandleError) as e:
        lg.debug("sendto failed", extra={"address": address, "exception": e})
        raise SendToError(SendToErrorKind.SEND, address=address) from e
    lg.debug("datagram sent", extra={"address": address, "sent": sent})
    return sent


def send_once(
    host: str,
    port: str | int,
    data: bytes,
    family: int = socket.AF_UNSPEC,
    lg: Any | None = None,
) -> int:
    """
    Resolve, open a throwaway socket, send one datagram and release it.

    Returns:
        int: Bytes accepted by the kernel

    Raises:
        SendOnceError: ADDRESS_RESOLUTION, SOCKET_CREATION or SEND, checked in
            that order. The socket is released on every path.
    """
    lg = lg or logging.getLogger(__name__)
    address = resolve_as(SendOnceError, host, port, Protocol.UDP, False, family, lg)
    with open_as(SendOnceError, address, lg) as handle:
        try:
            return send_to(handle, address, data, lg=lg)
        except SendToError as e:
            raise SendOnceError(SendOnceErrorKind.SEND, host=host, port=port) from e


def create_udp_host(
    port: str | int,
    family: int = socket.AF_UNSPEC,
    lg: Any | None = None,
) -> Handle:
    """
    Create a datagram receiver bound to a port on all local interfaces.

    Raises:
        UdpHostError: ADDRESS_RESOLUTION, SOCKET_CREATION, REUSE_OPTION or
            BIND, checked in that order.
    """
    lg = lg or logging.getLogger(__name__)
    return bind_host(UdpHostError, port, Protocol.UDP, family, lg)


def recv_from(
    handle: Handle, max_bytes: int = MAX_DATAGRAM_SIZE, lg: Any | None = None
) -> tuple[bytes, tuple[Any, ...]]:
    """
    Receive one datagram.

    A datagram longer than max_bytes is truncated. Empty datagrams are
    returned as b"".

    Returns:
        tuple: (payload, peer address)

    Raises:
        ValueError: If max_bytes is not positive
        RecvFromError: RECV
    """
    if max_bytes < 1:
        raise ValueError(f"max_bytes must be positive, got: {max_bytes}")
    lg = lg or logging.getLogger(__name__)
    try:
        data, peer = handle.sock.recvfrom(max_bytes)
    except (OSError, HandleError) as e:
        lg.debug("recvfrom failed", extra={"fd": handle.fileno(), "exception": e})
        raise RecvFromError(RecvFromErrorKind.RECV) from e
    lg.debug("datagram received", extra={"peer": peer, "size": len(data)})
    return data, peer
