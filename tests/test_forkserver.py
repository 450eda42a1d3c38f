import socket
import threading

import pytest

from sockcraft.errors import ExitCode, NetworkError
from sockcraft.forkserver import ForkingTcpServer


def _echo_upper(sock, addr):
    sock.send(sock.recv().upper())


def test_serves_client_in_child_process():
    server = ForkingTcpServer(0)
    port = server.address.port
    thread = threading.Thread(target=server.serve_forever, args=(_echo_upper,), daemon=True)
    thread.start()
    try:
        with socket.create_connection(("127.0.0.1", port), timeout=5) as client:
            client.sendall(b"ping")
            reply = client.recv(1024)
    finally:
        server.stop()
        thread.join(timeout=5)
        server.close()
    assert reply == b"PING"
    assert not thread.is_alive()


def test_busy_port_raises_bind_error():
    with ForkingTcpServer(0) as first:
        with pytest.raises(NetworkError) as info:
            ForkingTcpServer(first.address.port)
    assert info.value.code is ExitCode.BIND_ERROR


def test_address_unavailable_after_close():
    server = ForkingTcpServer(0)
    port = server.address.port
    assert 0 < port < 65536
    server.close()
    with pytest.raises(RuntimeError):
        server.address