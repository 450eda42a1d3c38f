import socket

import pytest

from sockcraft.errors import ExitCode, NetworkError
from sockcraft.tcpsocket import TcpSocket


def _free_port():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as probe:
        probe.bind(("127.0.0.1", 0))
        return probe.getsockname()[1]


@pytest.fixture
def listener():
    server = TcpSocket()
    server.init_server(0)
    yield server
    server.close()


def test_connect_accept_and_exchange(listener):
    port = listener.address.port
    with TcpSocket() as client:
        client.create()
        client.connect("127.0.0.1", port)
        conn, addr = listener.accept()
        with conn:
            sent = client.send("hello")
            assert conn.recv() == "hello"
            assert sent == len("hello")
            assert addr.ip == "127.0.0.1"
            conn.send("back")
            assert client.recv() == "back"


def test_recv_returns_empty_after_peer_closes(listener):
    client = TcpSocket()
    client.create()
    client.connect("127.0.0.1", listener.address.port)
    conn, _ = listener.accept()
    client.close()
    with conn:
        assert conn.recv() == ""


def test_connect_refused_raises_con_error():
    port = _free_port()
    with TcpSocket() as client:
        client.create()
        with pytest.raises(NetworkError) as info:
            client.connect("127.0.0.1", port)
    assert info.value.code is ExitCode.CON_ERROR


def test_bind_to_busy_port_raises_bind_error(listener):
    other = TcpSocket()
    with pytest.raises(NetworkError) as info:
        other.init_server(listener.address.port)
    assert info.value.code is ExitCode.BIND_ERROR


def test_use_before_create_raises():
    with pytest.raises(RuntimeError):
        TcpSocket().send("x")


def test_wraps_existing_socket():
    a, b = socket.socketpair()
    left, right = TcpSocket(a), TcpSocket(b)
    with left, right:
        left.send("ping")
        assert right.recv() == "ping"