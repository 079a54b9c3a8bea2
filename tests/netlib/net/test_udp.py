"""
Tests for UDP sockets: sessions, one-shot sends and receivers.
"""

import errno
import socket
from unittest.mock import patch

import pytest

from netlib.net.address import ResolvedAddress
from netlib.net.errors import (
    RecvFromErrorKind,
    SendOnceErrorKind,
    SendToErrorKind,
    UdpHostErrorKind,
    UdpSocketErrorKind,
)
from netlib.net.exceptions import (
    RecvFromError,
    SendOnceError,
    SendToError,
    UdpHostError,
    UdpSocketError,
)
from netlib.net.handle import Handle
from netlib.net.udp import (
    UdpSession,
    create_udp_host,
    open_udp_socket,
    recv_from,
    send_once,
    send_to,
)

LOOPBACK = ResolvedAddress(
    socket.AF_INET, socket.SOCK_DGRAM, socket.IPPROTO_UDP, ("127.0.0.1", 9000)
)


def gaierror():
    return socket.gaierror(socket.EAI_NONAME, "Name or service not known")


@pytest.fixture
def receiver():
    """Bound IPv4 UDP receiver as (handle, port)."""
    with create_udp_host("0", family=socket.AF_INET) as host:
        host.sock.settimeout(5)
        yield host, host.sock.getsockname()[1]


@pytest.fixture
def opened_with(mock_socket):
    """Make Handle.open() hand out a handle around mock_socket."""

    def fake_open(self, address):
        return Handle(mock_socket)

    with patch.object(Handle, "open", autospec=True, side_effect=fake_open):
        yield mock_socket


# =============================================================================
# open_udp_socket / UdpSession
# =============================================================================


@pytest.mark.unit
class TestOpenUdpSocket:
    """Test open_udp_socket()."""

    def test_resolution_failure(self):
        with patch("socket.getaddrinfo", side_effect=gaierror()):
            with pytest.raises(UdpSocketError) as exc_info:
                open_udp_socket("nowhere.invalid", "9000")
        assert exc_info.value.kind is UdpSocketErrorKind.ADDRESS_RESOLUTION

    def test_socket_creation_failure(self):
        with patch.object(Handle, "open", side_effect=OSError(errno.EMFILE, "")):
            with pytest.raises(UdpSocketError) as exc_info:
                open_udp_socket("127.0.0.1", "9000")
        assert exc_info.value.kind is UdpSocketErrorKind.SOCKET_CREATION
        assert exc_info.value.code == -2

    def test_session_carries_address(self):
        with open_udp_socket("127.0.0.1", "9000") as session:
            assert isinstance(session, UdpSession)
            assert session.address.sockaddr == ("127.0.0.1", 9000)
            assert session.address.type == socket.SOCK_DGRAM
            assert not session.handle.closed
        assert session.handle.closed

    def test_session_send(self, receiver):
        host, port = receiver
        with open_udp_socket("127.0.0.1", port) as session:
            assert session.send(b"hello") == 5
        data, _ = recv_from(host)
        assert data == b"hello"

    def test_unpacks_as_pair(self):
        handle, address = open_udp_socket("127.0.0.1", "9000")
        try:
            assert address.port == 9000
        finally:
            handle.close()


# =============================================================================
# send_to
# =============================================================================


@pytest.mark.unit
class TestSendTo:
    """Test send_to()."""

    def test_sends_to_address(self, mock_socket):
        mock_socket.sendto.return_value = 3
        assert send_to(Handle(mock_socket), LOOPBACK, b"abc") == 3
        mock_socket.sendto.assert_called_once_with(b"abc", ("127.0.0.1", 9000))

    def test_single_attempt_reports_short_send(self, mock_socket):
        mock_socket.sendto.return_value = 2
        assert send_to(Handle(mock_socket), LOOPBACK, b"abc") == 2
        assert mock_socket.sendto.call_count == 1

    def test_failure(self, mock_socket):
        mock_socket.sendto.side_effect = OSError(errno.EMSGSIZE, "Message too long")
        with pytest.raises(SendToError) as exc_info:
            send_to(Handle(mock_socket), LOOPBACK, b"x")
        assert exc_info.value.kind is SendToErrorKind.SEND
        assert exc_info.value.context["address"] == LOOPBACK
        mock_socket.close.assert_not_called()

    def test_closed_handle(self, mock_socket):
        handle = Handle(mock_socket)
        handle.close()
        with pytest.raises(SendToError):
            send_to(handle, LOOPBACK, b"x")


# =============================================================================
# send_once
# =============================================================================


@pytest.mark.unit
class TestSendOnce:
    """Test send_once()."""

    def test_resolution_failure(self):
        with patch("socket.getaddrinfo", side_effect=gaierror()):
            with pytest.raises(SendOnceError) as exc_info:
                send_once("nowhere.invalid", "9000", b"x")
        assert exc_info.value.kind is SendOnceErrorKind.ADDRESS_RESOLUTION

    def test_socket_creation_failure(self):
        with patch.object(Handle, "open", side_effect=OSError(errno.EMFILE, "")):
            with pytest.raises(SendOnceError) as exc_info:
                send_once("127.0.0.1", "9000", b"x")
        assert exc_info.value.kind is SendOnceErrorKind.SOCKET_CREATION

    def test_send_failure_releases_socket(self, opened_with):
        opened_with.sendto.side_effect = OSError(errno.ENETUNREACH, "")
        with pytest.raises(SendOnceError) as exc_info:
            send_once("127.0.0.1", "9000", b"x")
        assert exc_info.value.kind is SendOnceErrorKind.SEND
        assert exc_info.value.code == -3
        opened_with.close.assert_called_once()

    def test_success_releases_socket(self, opened_with):
        opened_with.sendto.return_value = 1
        assert send_once("127.0.0.1", "9000", b"x") == 1
        opened_with.close.assert_called_once()

    def test_delivers_datagram(self, receiver):
        host, port = receiver
        assert send_once("127.0.0.1", str(port), b"datagram") == 8
        data, peer = recv_from(host)
        assert data == b"datagram"
        assert peer[0] == "127.0.0.1"

    def test_empty_datagram(self, receiver):
        host, port = receiver
        assert send_once("127.0.0.1", port, b"") == 0
        data, _ = recv_from(host)
        assert data == b""


# =============================================================================
# create_udp_host / recv_from
# =============================================================================


@pytest.mark.unit
class TestCreateUdpHost:
    """Test create_udp_host()."""

    def test_resolution_failure(self):
        with patch("socket.getaddrinfo", side_effect=gaierror()):
            with pytest.raises(UdpHostError) as exc_info:
                create_udp_host("no-such-service")
        assert exc_info.value.kind is UdpHostErrorKind.ADDRESS_RESOLUTION

    def test_reuse_failure(self, opened_with):
        opened_with.setsockopt.side_effect = OSError(errno.ENOPROTOOPT, "")
        with pytest.raises(UdpHostError) as exc_info:
            create_udp_host("0", family=socket.AF_INET)
        assert exc_info.value.kind is UdpHostErrorKind.REUSE_OPTION
        opened_with.bind.assert_not_called()
        opened_with.close.assert_called_once()

    def test_bind_failure(self, opened_with):
        opened_with.bind.side_effect = OSError(errno.EACCES, "Permission denied")
        with pytest.raises(UdpHostError) as exc_info:
            create_udp_host("0", family=socket.AF_INET)
        assert exc_info.value.kind is UdpHostErrorKind.BIND
        opened_with.close.assert_called_once()

    def test_datagram_socket(self, receiver):
        host, _ = receiver
        assert host.sock.type == socket.SOCK_DGRAM


@pytest.mark.unit
class TestRecvFrom:
    """Test recv_from()."""

    def test_truncates_to_max_bytes(self, receiver):
        host, port = receiver
        send_once("127.0.0.1", port, b"abcdef")
        data, _ = recv_from(host, max_bytes=3)
        assert data == b"abc"

    def test_failure(self, mock_socket):
        mock_socket.recvfrom.side_effect = OSError(errno.EBADF, "")
        with pytest.raises(RecvFromError) as exc_info:
            recv_from(Handle(mock_socket))
        assert exc_info.value.kind is RecvFromErrorKind.RECV

    def test_rejects_non_positive_size(self, mock_socket):
        with pytest.raises(ValueError):
            recv_from(Handle(mock_socket), 0)
