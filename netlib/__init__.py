from importlib.metadata import PackageNotFoundError, version

from .exceptions import ConfigError, LoggingError, NetlibError
from .net import (
    Accepted,
    Endpoint,
    Handle,
    NetError,
    Protocol,
    ResolvedAddress,
    UdpSession,
    accept_once,
    connect,
    create_host,
    create_udp_host,
    disconnect,
    open_udp_socket,
    recv_from,
    recv_into,
    recv_once,
    resolve,
    send_all,
    send_once,
    send_then_recv,
    send_to,
)
from .config import NetConfig, load_config
from .log import Logger, create_lg

# Version is read from package metadata (pyproject.toml)
try:
    __version__ = version("netlib")
except PackageNotFoundError:
    # Package not installed, use fallback (development mode)
    __version__ = "0.1.0-dev"

# Explicit public API
__all__ = [
    # Version
    "__version__",
    # Addresses and handles
    "Endpoint",
    "Protocol",
    "ResolvedAddress",
    "Handle",
    "Accepted",
    "UdpSession",
    # Operations
    "resolve",
    "connect",
    "disconnect",
    "create_host",
    "accept_once",
    "send_all",
    "recv_once",
    "recv_into",
    "send_then_recv",
    "open_udp_socket",
    "send_to",
    "send_once",
    "create_udp_host",
    "recv_from",
    # Config and logging
    "NetConfig",
    "load_config",
    "Logger",
    "create_lg",
    # Exceptions
    "NetlibError",
    "NetError",
    "ConfigError",
    "LoggingError",
]
