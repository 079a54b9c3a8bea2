"""Socket operations for TCP and UDP with per-operation error kinds."""

from .address import (
    FAMILIES,
    Endpoint,
    Protocol,
    ResolvedAddress,
    family_from_name,
    resolve,
    resolve_endpoint,
)
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
from .exceptions import (
    AcceptError,
    ConnectError,
    CreateHostError,
    HandleError,
    NetError,
    RecvError,
    RecvFromError,
    ResolveError,
    SendError,
    SendOnceError,
    SendRecvError,
    SendToError,
    UdpHostError,
    UdpSocketError,
)
from .handle import Handle, HandleState
from .stream import DEFAULT_RECV_SIZE, recv_into, recv_once, send_all, send_then_recv
from .tcp import (
    DEFAULT_BACKLOG,
    Accepted,
    accept_once,
    connect,
    create_host,
    disconnect,
)
from .udp import (
    MAX_DATAGRAM_SIZE,
    UdpSession,
    create_udp_host,
    open_udp_socket,
    recv_from,
    send_once,
    send_to,
)

__all__ = [
    # Addresses
    "FAMILIES",
    "Endpoint",
    "Protocol",
    "ResolvedAddress",
    "family_from_name",
    "resolve",
    "resolve_endpoint",
    # Handles
    "Handle",
    "HandleState",
    # TCP
    "DEFAULT_BACKLOG",
    "Accepted",
    "connect",
    "disconnect",
    "create_host",
    "accept_once",
    # Streams
    "DEFAULT_RECV_SIZE",
    "send_all",
    "recv_once",
    "recv_into",
    "send_then_recv",
    # UDP
    "MAX_DATAGRAM_SIZE",
    "UdpSession",
    "open_udp_socket",
    "send_to",
    "send_once",
    "create_udp_host",
    "recv_from",
    # Error kinds
    "ErrorKind",
    "ResolveErrorKind",
    "ConnectErrorKind",
    "CreateHostErrorKind",
    "AcceptErrorKind",
    "SendErrorKind",
    "RecvErrorKind",
    "SendRecvErrorKind",
    "UdpSocketErrorKind",
    "SendToErrorKind",
    "SendOnceErrorKind",
    "UdpHostErrorKind",
    "RecvFromErrorKind",
    # Exceptions
    "NetError",
    "HandleError",
    "ResolveError",
    "ConnectError",
    "CreateHostError",
    "AcceptError",
    "SendError",
    "RecvError",
    "SendRecvError",
    "UdpSocketError",
    "SendToError",
    "SendOnceError",
    "UdpHostError",
    "RecvFromError",
]
