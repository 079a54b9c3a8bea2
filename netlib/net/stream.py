"""
Reliable full-buffer send and single-call receive on connected handles.

send_all() keeps submitting the unsent remainder of a buffer until the
kernel has accepted all of it, because one send may accept fewer bytes than
requested. recv_once() performs one receive and treats "zero bytes" and
"receive error" alike: both mean no data or the peer disconnected.

Example:
    reply = send_then_recv(handle, b"ping")
"""

import logging
from typing import Any

from ..log.constants import LogConstants
from .errors import RecvErrorKind, SendErrorKind, SendRecvErrorKind
from .exceptions import HandleError, RecvError, SendError, SendRecvError
from .handle import Handle

DEFAULT_RECV_SIZE = 4096

_TRACE = LogConstants.CUSTOM_LEVELS["TRACE"]


def send_all(handle: Handle, data: bytes, lg: Any | None = None) -> int:
    """
    Send a whole buffer.

    Args:
        handle: Connected handle
        data: Bytes-like payload; an empty payload succeeds without a send
        lg: Logger (defaults to this module's logger)

    Returns:
        int: Number of bytes sent, always len(data)

    Raises:
        SendError: SEND when a submission fails or the kernel accepts nothing
    """
    lg = lg or logging.getLogger(__name__)
    view = memoryview(data).cast("B")
    size = len(view)
    total = 0
    while total < size:
        try:
            sent = handle.sock.send(view[total:])
        except (OSError, HandleError) as e:
            lg.debug(
                "send failed",
                extra={
                    "fd": handle.fileno(),
                    "sent": total,
                    "size": size,
                    "exception": e,
                },
            )
            raise SendError(SendErrorKind.SEND, sent=total, size=size) from e
        if sent == 0:
            raise SendError(SendErrorKind.SEND, sent=total, size=size)
        total += sent
        if total < size:
            lg.log(_TRACE, "partial send", extra={"sent": total, "size": size})
    return total


def recv_once(
    handle: Handle, max_bytes: int = DEFAULT_RECV_SIZE, lg: Any | None = None
) -> bytes:
    """
    Receive once, up to max_bytes.

    Args:
        handle: Connected handle
        max_bytes: Upper bound on the bytes returned
        lg: Logger (defaults to this module's logger)

    Returns:
        bytes: At least one byte

    Raises:
        ValueError: If max_bytes is not positive
        RecvError: NO_DATA on zero bytes, peer close or receive error
    """
    if max_bytes < 1:
        raise ValueError(f"max_bytes must be positive, got: {max_bytes}")
    lg = lg or logging.getLogger(__name__)
    try:
        data = handle.sock.recv(max_bytes)
    except (OSError, HandleError) as e:
        lg.debug("recv failed", extra={"fd": handle.fileno(), "exception": e})
        raise RecvError(RecvErrorKind.NO_DATA) from e
    if not data:
        lg.debug("peer disconnected", extra={"fd": handle.fileno()})
        raise RecvError(RecvErrorKind.NO_DATA)
    return data


def recv_into(handle: Handle, buffer: Any, lg: Any | None = None) -> int:
    """
    Receive once into a writable buffer.

    Returns:
        int: Number of bytes written to the start of buffer, at least one

    Raises:
        ValueError: If the buffer is empty
        RecvError: NO_DATA on zero bytes, peer close or receive error
    """
    view = memoryview(buffer).cast("B")
    if len(view) == 0:
        raise ValueError("buffer must not be empty")
    lg = lg or logging.getLogger(__name__)
    try:
        count = handle.sock.recv_into(view)
    except (OSError, HandleError) as e:
        lg.debug("recv failed", extra={"fd": handle.fileno(), "exception": e})
        raise RecvError(RecvErrorKind.NO_DATA) from e
    if count == 0:
        lg.debug("peer disconnected", extra={"fd": handle.fileno()})
        raise RecvError(RecvErrorKind.NO_DATA)
    return count


def send_then_recv(
    handle: Handle,
    data: bytes,
    max_bytes: int = DEFAULT_RECV_SIZE,
    lg: Any | None = None,
) -> bytes:
    """
    Send a whole request, then receive one response.

    Raises:
        SendRecvError: SEND if the send fails (nothing is received), else
            NO_DATA if the receive yields nothing
    """
    try:
        send_all(handle, data, lg=lg)
    except SendError as e:
        raise SendRecvError(SendRecvErrorKind.SEND, **e.context) from e

    try:
        return recv_once(handle, max_bytes, lg=lg)
    except RecvError as e:
        raise SendRecvError(SendRecvErrorKind.NO_DATA) from e
