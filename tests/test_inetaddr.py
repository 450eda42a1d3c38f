import dataclasses

import pytest

from sockcraft.inetaddr import InetAddr


def test_from_sockaddr_reads_ip_and_port():
    addr = InetAddr.from_sockaddr(("127.0.0.1", 8080))
    assert addr.ip == "127.0.0.1"
    assert addr.port == 8080


def test_any_uses_wildcard_address():
    addr = InetAddr.any(9000)
    assert addr.ip == "0.0.0.0"
    assert addr.port == 9000


def test_sockaddr_round_trip():
    addr = InetAddr("10.1.2.3", 4321)
    assert InetAddr.from_sockaddr(addr.sockaddr()) == addr


def test_str_is_ip():
    assert str(InetAddr("192.168.1.1", 80)) == "192.168.1.1"


def test_equality_needs_ip_and_port():
    assert InetAddr("1.2.3.4", 5) == InetAddr("1.2.3.4", 5)
    assert not InetAddr("1.2.3.4", 5) == InetAddr("1.2.3.4", 6)
    assert not InetAddr("1.2.3.4", 5) == InetAddr("1.2.3.5", 5)


def test_usable_as_dict_key():
    peers = {InetAddr("1.2.3.4", 5): "a"}
    assert peers[InetAddr("1.2.3.4", 5)] == "a"


@pytest.mark.parametrize("port", [-1, 65536])
def test_bad_port_rejected(port):
    with pytest.raises(ValueError):
        InetAddr("127.0.0.1", port)


def test_bad_ip_rejected():
    with pytest.raises(ValueError):
        InetAddr("not-an-ip", 80)


def test_frozen():
    addr = InetAddr("127.0.0.1", 1)
    with pytest.raises(dataclasses.FrozenInstanceError):
        addr.port = 2
    assert addr.port == 1
    assert addr.sockaddr() == ("127.0.0.1", 1)