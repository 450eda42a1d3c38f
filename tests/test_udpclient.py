import io
import socket

import pytest

from sockcraft.errors import ExitCode
from sockcraft.inetaddr import InetAddr
from sockcraft.udpclient import main, recv_loop, send_loop


@pytest.fixture
def pair():
    a = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    b = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    a.bind(("127.0.0.1", 0))
    b.bind(("127.0.0.1", 0))
    a.settimeout(1)
    b.settimeout(1)
    yield a, b
    a.close()
    b.close()


def test_send_loop_strips_newlines(pair):
    sender, receiver = pair
    server = InetAddr.from_sockaddr(receiver.getsockname())
    assert send_loop(sender, server, ["hi\n", "there\n"]) == 2
    assert receiver.recvfrom(1024)[0] == b"hi"
    assert receiver.recvfrom(1024)[0] == b"there"


def test_recv_loop_prints_each_datagram(pair):
    sender, receiver = pair
    target = receiver.getsockname()
    sender.sendto(b"a", target)
    sender.sendto(b"b", target)
    out = io.StringIO()
    assert recv_loop(receiver, out) == 2
    assert out.getvalue() == "a\nb\n"


def test_round_trip_through_both_loops(pair):
    sender, receiver = pair
    lines = ["x\n", "yz\n", "\n"]
    send_loop(sender, InetAddr.from_sockaddr(receiver.getsockname()), lines)
    out = io.StringIO()
    count = recv_loop(receiver, out)
    assert count == 2
    assert out.getvalue().splitlines() == ["x", "yz"]


@pytest.mark.parametrize("argv", [[], ["127.0.0.1"], ["127.0.0.1", "abc"], ["nohost", "80"]])
def test_main_rejects_bad_arguments(argv):
    assert main(argv) == ExitCode.USE_ERROR