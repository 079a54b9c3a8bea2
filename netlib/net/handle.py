"""
Owned socket handles.

A Handle is the exclusive owner of one operating-system socket. It is
never retained or shared by the library; whoever holds it releases it.

Lifecycle:
    UNOPENED -> OPEN -> HALF_CLOSED (after a shutdown of one or both
                                     directions succeeds) -> CLOSED
    UNOPENED -> OPEN -> CLOSED

Cancellation:
    A thread blocked in recv_once() or accept_once() can be released by
    closing the handle from another thread. close() shuts the socket down
    in both directions first, which wakes the blocked call; that call then
    fails with its own operation's failure kind (NO_DATA or ACCEPT). No
    other cancellation primitive and no timeout exist.

Handles are not internally synchronized. Use one reader and one writer per
handle, or lock externally.
"""

import socket
from enum import Enum
from types import TracebackType

from .address import ResolvedAddress
from .exceptions import HandleError


class HandleState(Enum):
    UNOPENED = "unopened"
    OPEN = "open"
    HALF_CLOSED = "half_closed"
    CLOSED = "closed"


class Handle:
    """
    Owned reference to an open socket.

    Example:
        with connect("localhost", "8080") as handle:
            send_all(handle, b"ping")
    """

    def __init__(self, sock: socket.socket | None = None) -> None:
        """
        Initialize the handle.

        Args:
            sock: Already-open socket to take ownership of. When omitted the
                  handle starts UNOPENED and open() creates the socket.
        """
        self._sock = sock
        self._state = HandleState.UNOPENED if sock is None else HandleState.OPEN

    def open(self, address: ResolvedAddress) -> "Handle":
        """
        Create the socket for a resolved address.

        Returns:
            Handle: self, for chaining

        Raises:
            HandleError: If the handle was already opened
            OSError: If the operating system refuses to create the socket
        """
        if self._state is not HandleState.UNOPENED:
            raise HandleError("Handle already opened", state=self._state.value)
        self._sock = socket.socket(address.family, address.type, address.proto)
        self._state = HandleState.OPEN
        return self

    @property
    def state(self) -> HandleState:
        return self._state

    @property
    def closed(self) -> bool:
        return self._state is HandleState.CLOSED

    @property
    def sock(self) -> socket.socket:
        """
        The underlying socket.

        Raises:
            HandleError: If the handle is unopened or closed
        """
        if self._sock is None or self._state is HandleState.CLOSED:
            raise HandleError("Handle is not open", state=self._state.value)
        return self._sock

    def fileno(self) -> int:
        """Operating-system descriptor, or -1 when not open."""
        if self._sock is None or self._state is HandleState.CLOSED:
            return -1
        return self._sock.fileno()

    def shutdown(self, how: int = socket.SHUT_RDWR) -> bool:
        """
        Shut down one or both directions. Best-effort: never raises.

        The handle becomes HALF_CLOSED only when the operating system
        accepted the shutdown; it stays usable (and must still be closed)
        either way.

        Args:
            how: socket.SHUT_RD, socket.SHUT_WR or socket.SHUT_RDWR

        Returns:
            bool: True if the socket was shut down
        """
        if self._sock is None or self._state is HandleState.CLOSED:
            return False
        try:
            self._sock.shutdown(how)
        except OSError:
            # not connected, listening, or peer already gone
            return False
        self._state = HandleState.HALF_CLOSED
        return True

    def close(self) -> None:
        """Release the socket. Idempotent."""
        if self._sock is None or self._state is HandleState.CLOSED:
            self._state = HandleState.CLOSED
            return
        self.shutdown()
        self._sock.close()
        self._state = HandleState.CLOSED

    def detach(self) -> socket.socket:
        """
        Give up ownership and return the underlying socket.

        The handle becomes CLOSED without closing the socket.
        """
        sock = self.sock
        self._sock = None
        self._state = HandleState.CLOSED
        return sock

    def __enter__(self) -> "Handle":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"Handle(fd={self.fileno()}, state={self._state.value})"
