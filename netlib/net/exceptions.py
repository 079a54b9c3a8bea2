"""
Custom exceptions for the netlib.net package.

Each socket operation raises exactly one exception class. The failure kind
is carried in ``.kind`` and always belongs to that class's ``Kind`` enum,
so a caller can recover a stable, operation-scoped code and message.
"""

from typing import Any

from ..exceptions import NetlibError
from .errors import (
    AcceptErrorKind,
    ConnectErrorKind,
    CreateHostErrorKind,
    ErrorKind,
    RecvErrorKind,
    RecvFromErrorKind,
    ResolveErrorKind,
    SendErrorKind,
    SendOnceErrorKind,
    SendRecvErrorKind,
    SendToErrorKind,
    UdpHostErrorKind,
    UdpSocketErrorKind,
)


class NetError(NetlibError):
    """
    Base exception for socket operation failures.

    Subclasses set ``Kind`` to the operation's ErrorKind enum. Passing a kind
    from another operation is a programming error and raises TypeError.
    """

    Kind: type[ErrorKind] = ErrorKind

    def __init__(self, kind: ErrorKind, **context: Any) -> None:
        if not isinstance(kind, self.Kind):
            raise TypeError(
                f"{type(self).__name__} expects a {self.Kind.__name__}, got {kind!r}"
            )
        super().__init__(kind.message, **context)
        self.kind = kind

    @property
    def code(self) -> int:
        """Negative integer code of the failure kind."""
        return self.kind.code


class HandleError(NetlibError):
    """Raised when a handle is used in a state that does not allow it."""

    pass


class ResolveError(NetError):
    Kind = ResolveErrorKind


class ConnectError(NetError):
    Kind = ConnectErrorKind


class CreateHostError(NetError):
    Kind = CreateHostErrorKind


class AcceptError(NetError):
    Kind = AcceptErrorKind


class SendError(NetError):
    Kind = SendErrorKind


class RecvError(NetError):
    Kind = RecvErrorKind


class SendRecvError(NetError):
    Kind = SendRecvErrorKind


class UdpSocketError(NetError):
    Kind = UdpSocketErrorKind


class SendToError(NetError):
    Kind = SendToErrorKind


class SendOnceError(NetError):
    Kind = SendOnceErrorKind


class UdpHostError(NetError):
    Kind = UdpHostErrorKind


class RecvFromError(NetError):
    Kind = RecvFromErrorKind
