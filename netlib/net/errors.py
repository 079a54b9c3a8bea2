"""
Per-operation failure kinds.

Every socket operation has its own closed set of failure kinds. A kind
carries a stable negative integer code and a human-readable message. Codes
are unique within one operation and are not comparable across operations:
SEND is -1 for send_all but -3 for send_once.

Example:
    try:
        handle = connect("localhost", "8080")
    except ConnectError as e:
        print(f"ERROR ({e.kind.code}): {e.kind.message}")
"""

from enum import Enum

_ADDRESS = "Unable to resolve address"
_SOCKET = "Unable to set up socket"
_DESCRIPTOR = "Unable to set up file descriptor"
_BIND = "Unable to bind to port"
_REUSE = "Unable to force bind to port"
_SEND = "Unable to send data"
_NO_DATA = "Received no data or target disconnected"


class ErrorKind(Enum):
    """
    Base class for operation-scoped failure kinds.

    Members are declared as (code, message) tuples and expose both as
    attributes.
    """

    def __init__(self, code: int, message: str) -> None:
        self.code = code
        self.message = message

    def __int__(self) -> int:
        return self.code

    def __str__(self) -> str:
        return f"{self.name}({self.code}): {self.message}"

    @classmethod
    def from_code(cls, code: int) -> "ErrorKind":
        """
        Look up the kind for a numeric code.

        Raises:
            ValueError: If the code does not belong to this operation
        """
        for kind in cls:
            if kind.code == code:
                return kind
        raise ValueError(f"{cls.__name__} has no error code {code}")


class ResolveErrorKind(ErrorKind):
    ADDRESS_RESOLUTION = (-1, _ADDRESS)


class ConnectErrorKind(ErrorKind):
    ADDRESS_RESOLUTION = (-1, _ADDRESS)
    SOCKET_CREATION = (-2, _SOCKET)
    CONNECT = (-3, "Unable to connect to server")


class CreateHostErrorKind(ErrorKind):
    ADDRESS_RESOLUTION = (-1, _ADDRESS)
    SOCKET_CREATION = (-2, _DESCRIPTOR)
    BIND = (-3, _BIND)
    REUSE_OPTION = (-4, _REUSE)


class AcceptErrorKind(ErrorKind):
    LISTEN = (-1, "Unable to listen for incoming connection")
    ACCEPT = (-2, "Unable to accept incoming connection")


class SendErrorKind(ErrorKind):
    SEND = (-1, _SEND)


class RecvErrorKind(ErrorKind):
    NO_DATA = (-1, _NO_DATA)


class SendRecvErrorKind(ErrorKind):
    SEND = (-1, _SEND)
    NO_DATA = (-2, _NO_DATA)


class UdpSocketErrorKind(ErrorKind):
    ADDRESS_RESOLUTION = (-1, _ADDRESS)
    SOCKET_CREATION = (-2, _SOCKET)


class SendToErrorKind(ErrorKind):
    SEND = (-1, _SEND)


class SendOnceErrorKind(ErrorKind):
    ADDRESS_RESOLUTION = (-1, _ADDRESS)
    SOCKET_CREATION = (-2, _SOCKET)
    SEND = (-3, _SEND)


class UdpHostErrorKind(ErrorKind):
    ADDRESS_RESOLUTION = (-1, _ADDRESS)
    SOCKET_CREATION = (-2, _DESCRIPTOR)
    BIND = (-3, _BIND)
    REUSE_OPTION = (-4, _REUSE)


class RecvFromErrorKind(ErrorKind):
    RECV = (-1, "Unable to receive data")
