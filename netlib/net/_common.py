"""Shared resolve/create/bind steps for the TCP and UDP operations."""

import socket
from typing import Any

from .address import Protocol, ResolvedAddress, resolve
from .errors import ErrorKind
from .exceptions import NetError, ResolveError
from .handle import Handle


def resolve_as(
    error_cls: type[NetError],
    host: str | None,
    port: str | int,
    protocol: Protocol,
    passive: bool,
    family: int,
    lg: Any,
) -> ResolvedAddress:
    """Resolve, reporting failure as error_cls's ADDRESS_RESOLUTION kind."""
    try:
        return resolve(host, port, protocol, passive=passive, family=family, lg=lg)
    except ResolveError as e:
        raise error_cls(
            error_cls.Kind["ADDRESS_RESOLUTION"], host=host, port=port
        ) from e


def open_as(
    error_cls: type[NetError], address: ResolvedAddress, lg: Any
) -> Handle:
    """Create a socket, reporting failure as error_cls's SOCKET_CREATION kind."""
    try:
        return Handle().open(address)
    except OSError as e:
        lg.debug(
            "socket creation failed",
            extra={"address": address, "exception": e},
        )
        raise error_cls(
            error_cls.Kind["SOCKET_CREATION"], address=address, errno=e.errno
        ) from e


def _fail_and_close(
    handle: Handle,
    error_cls: type[NetError],
    kind: ErrorKind,
    address: ResolvedAddress,
    e: OSError,
    lg: Any,
) -> NetError:
    handle.close()
    lg.debug(
        "host setup failed",
        extra={"kind": kind, "address": address, "exception": e},
    )
    return error_cls(kind, address=address, errno=e.errno)


def bind_host(
    error_cls: type[NetError],
    port: str | int,
    protocol: Protocol,
    family: int,
    lg: Any,
) -> Handle:
    """
    Resolve the wildcard address, create a socket, enable reuse, then bind.

    Address reuse is enabled before binding, so REUSE_OPTION is reported
    without bind having been attempted. The socket is closed on any failure
    after it was created.
    """
    address = resolve_as(error_cls, None, port, protocol, True, family, lg)
    handle = open_as(error_cls, address, lg)

    try:
        handle.sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    except OSError as e:
        raise _fail_and_close(
            handle, error_cls, error_cls.Kind["REUSE_OPTION"], address, e, lg
        ) from e

    try:
        handle.sock.bind(address.sockaddr)
    except OSError as e:
        raise _fail_and_close(
            handle, error_cls, error_cls.Kind["BIND"], address, e, lg
        ) from e

    lg.debug("bound", extra={"address": address, "fd": handle.fileno()})
    return handle
