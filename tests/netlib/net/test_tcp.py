"""
Tests for TCP connect, disconnect, host creation and accept.

Tests:
- Error precedence and kinds for connect and create_host
- Socket release on every failure path
- Reuse option set before bind
- Listen/accept failures
- Real loopback behaviour
"""

import errno
import socket
import threading
import time
from unittest.mock import Mock, call, patch

import pytest

from netlib.net.errors import AcceptErrorKind, ConnectErrorKind, CreateHostErrorKind
from netlib.net.exceptions import AcceptError, ConnectError, CreateHostError
from netlib.net.handle import Handle, HandleState
from netlib.net.tcp import Accepted, accept_once, connect, create_host, disconnect
from tests.fixtures.network import connect_with_retry

# =============================================================================
# Fixtures
# =============================================================================


def accept_in_thread(host, backlog=128):
    """Run accept_once() on host in a thread; the result lands in a dict."""
    result = {}

    def serve():
        result["accepted"] = accept_once(host, backlog)

    thread = threading.Thread(target=serve, daemon=True)
    thread.start()
    return thread, result


@pytest.fixture
def opened_with(mock_socket):
    """Make Handle.open() hand out a handle around mock_socket."""

    def fake_open(self, address):
        return Handle(mock_socket)

    with patch.object(Handle, "open", autospec=True, side_effect=fake_open) as opener:
        yield opener


# =============================================================================
# connect
# =============================================================================


@pytest.mark.unit
class TestConnect:
    """Test connect()."""

    def test_resolution_failure(self):
        """Test an unresolvable host yields ADDRESS_RESOLUTION."""
        gai = socket.gaierror(socket.EAI_NONAME, "Name or service not known")
        with patch("socket.getaddrinfo", side_effect=gai):
            with pytest.raises(ConnectError) as exc_info:
                connect("nowhere.invalid", "80")
        assert exc_info.value.kind is ConnectErrorKind.ADDRESS_RESOLUTION
        assert exc_info.value.code == -1

    def test_socket_creation_failure(self):
        """Test socket creation failure yields SOCKET_CREATION."""
        with patch.object(
            Handle, "open", side_effect=OSError(errno.EMFILE, "Too many open files")
        ):
            with pytest.raises(ConnectError) as exc_info:
                connect("127.0.0.1", "80")
        assert exc_info.value.kind is ConnectErrorKind.SOCKET_CREATION
        assert exc_info.value.context["errno"] == errno.EMFILE

    def test_connect_failure_closes_socket(self, mock_socket, opened_with):
        """Test CONNECT is raised and the created socket is released."""
        mock_socket.connect.side_effect = ConnectionRefusedError(
            errno.ECONNREFUSED, "Connection refused"
        )
        with pytest.raises(ConnectError) as exc_info:
            connect("127.0.0.1", "80")
        assert exc_info.value.kind is ConnectErrorKind.CONNECT
        assert isinstance(exc_info.value.__cause__, ConnectionRefusedError)
        mock_socket.close.assert_called_once()

    def test_success_connects_to_resolved_address(self, mock_socket, opened_with):
        """Test the socket connects to the first resolved address."""
        handle = connect("127.0.0.1", "8080")
        mock_socket.connect.assert_called_once_with(("127.0.0.1", 8080))
        assert handle.sock is mock_socket
        mock_socket.close.assert_not_called()

    def test_refused_on_loopback(self, available_port):
        """Test connecting to a port nobody listens on yields CONNECT."""
        with pytest.raises(ConnectError) as exc_info:
            connect("127.0.0.1", str(available_port))
        assert exc_info.value.kind is ConnectErrorKind.CONNECT


# =============================================================================
# disconnect
# =============================================================================


@pytest.mark.unit
class TestDisconnect:
    """Test disconnect()."""

    def test_shuts_down_both_directions(self, mock_socket):
        handle = Handle(mock_socket)
        disconnect(handle)
        mock_socket.shutdown.assert_called_once_with(socket.SHUT_RDWR)
        assert handle.state is HandleState.HALF_CLOSED
        mock_socket.close.assert_not_called()

    def test_never_raises(self, mock_socket):
        mock_socket.shutdown.side_effect = OSError(errno.ENOTCONN, "not connected")
        disconnect(Handle(mock_socket))

    def test_closed_handle_ignored(self, mock_socket):
        handle = Handle(mock_socket)
        handle.close()
        disconnect(handle)


# =============================================================================
# create_host
# =============================================================================


@pytest.mark.unit
class TestCreateHost:
    """Test create_host()."""

    def test_resolution_failure(self):
        """Test an unknown service yields ADDRESS_RESOLUTION."""
        gai = socket.gaierror(socket.EAI_SERVICE, "Servname not supported")
        with patch("socket.getaddrinfo", side_effect=gai):
            with pytest.raises(CreateHostError) as exc_info:
                create_host("no-such-service")
        assert exc_info.value.kind is CreateHostErrorKind.ADDRESS_RESOLUTION

    def test_resolves_passive_wildcard(self):
        """Test the bind address comes from a passive lookup without host."""
        info = (socket.AF_INET, socket.SOCK_STREAM, 6, "", ("0.0.0.0", 8080))
        with patch("socket.getaddrinfo", return_value=[info]) as gai:
            with patch.object(Handle, "open", side_effect=OSError(errno.EMFILE, "")):
                with pytest.raises(CreateHostError):
                    create_host("8080")
        gai.assert_called_once_with(
            None, "8080", socket.AF_UNSPEC, socket.SOCK_STREAM, 0, socket.AI_PASSIVE
        )

    def test_socket_creation_failure(self):
        with patch.object(Handle, "open", side_effect=OSError(errno.ENFILE, "")):
            with pytest.raises(CreateHostError) as exc_info:
                create_host("0", family=socket.AF_INET)
        assert exc_info.value.kind is CreateHostErrorKind.SOCKET_CREATION

    def test_reuse_failure_reported_before_bind(self, mock_socket, opened_with):
        """Test reuse option failure wins; bind is never attempted."""
        mock_socket.setsockopt.side_effect = OSError(errno.ENOPROTOOPT, "")
        with pytest.raises(CreateHostError) as exc_info:
            create_host("0", family=socket.AF_INET)
        assert exc_info.value.kind is CreateHostErrorKind.REUSE_OPTION
        assert exc_info.value.code == -4
        mock_socket.bind.assert_not_called()
        mock_socket.close.assert_called_once()

    def test_bind_failure_closes_socket(self, mock_socket, opened_with):
        mock_socket.bind.side_effect = OSError(errno.EADDRINUSE, "in use")
        with pytest.raises(CreateHostError) as exc_info:
            create_host("0", family=socket.AF_INET)
        assert exc_info.value.kind is CreateHostErrorKind.BIND
        assert exc_info.value.context["errno"] == errno.EADDRINUSE
        mock_socket.close.assert_called_once()

    def test_reuse_enabled_then_bind(self, mock_socket, opened_with):
        """Test SO_REUSEADDR is set and bind follows."""
        handle = create_host("0", family=socket.AF_INET)
        assert mock_socket.mock_calls[:2] == [
            call.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1),
            call.bind(("0.0.0.0", 0)),
        ]
        assert handle.state is HandleState.OPEN

    def test_real_bind(self):
        """Test a real host socket has address reuse enabled."""
        with create_host("0", family=socket.AF_INET) as host:
            sock = host.sock
            assert sock.getsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR) != 0
            assert sock.getsockname()[1] > 0


# =============================================================================
# accept_once
# =============================================================================


@pytest.mark.unit
class TestAcceptOnce:
    """Test accept_once()."""

    def test_listen_failure(self, mock_socket):
        mock_socket.listen.side_effect = OSError(errno.EOPNOTSUPP, "")
        with pytest.raises(AcceptError) as exc_info:
            accept_once(Handle(mock_socket), backlog=5)
        assert exc_info.value.kind is AcceptErrorKind.LISTEN
        mock_socket.accept.assert_not_called()
        mock_socket.close.assert_not_called()

    def test_accept_failure(self, mock_socket):
        mock_socket.accept.side_effect = OSError(errno.EINVAL, "")
        with pytest.raises(AcceptError) as exc_info:
            accept_once(Handle(mock_socket))
        assert exc_info.value.kind is AcceptErrorKind.ACCEPT
        mock_socket.close.assert_not_called()

    def test_closed_handle_fails_listen(self, mock_socket):
        handle = Handle(mock_socket)
        handle.close()
        with pytest.raises(AcceptError) as exc_info:
            accept_once(handle)
        assert exc_info.value.kind is AcceptErrorKind.LISTEN

    def test_returns_handle_and_peer(self, mock_socket):
        client = Mock()
        mock_socket.accept.return_value = (client, ("127.0.0.1", 50000))
        accepted = accept_once(Handle(mock_socket), backlog=7)
        mock_socket.listen.assert_called_once_with(7)
        assert isinstance(accepted, Accepted)
        assert accepted.handle.sock is client
        assert accepted.peer == ("127.0.0.1", 50000)

    def test_one_accept_per_call(self):
        """Test each call accepts exactly one connection."""
        with create_host("0", family=socket.AF_INET) as host:
            port = host.sock.getsockname()[1]
            thread, result = accept_in_thread(host, backlog=4)
            first_client = connect_with_retry(port)
            thread.join(timeout=5)
            # Still listening, so the next peer waits in the backlog
            second_client = socket.create_connection(("127.0.0.1", port))
            try:
                first = result["accepted"]
                second = accept_once(host, backlog=4)
                assert first.peer == first_client.getsockname()
                assert second.peer == second_client.getsockname()
                first.handle.close()
                second.handle.close()
            finally:
                first_client.close()
                second_client.close()

    def test_blocks_until_peer_connects(self):
        with create_host("0", family=socket.AF_INET) as host:
            port = host.sock.getsockname()[1]
            thread, result = accept_in_thread(host)
            time.sleep(0.1)
            assert thread.is_alive()
            client = connect_with_retry(port)
            thread.join(timeout=5)
            try:
                assert result["accepted"].peer == client.getsockname()
            finally:
                result["accepted"].handle.close()
                client.close()

    def test_refused_before_first_accept(self):
        """Test a bound host does not listen until accept_once() runs."""
        with create_host("0", family=socket.AF_INET) as host:
            port = host.sock.getsockname()[1]
            with pytest.raises(ConnectError) as exc_info:
                connect("127.0.0.1", port)
        assert exc_info.value.kind is ConnectErrorKind.CONNECT
