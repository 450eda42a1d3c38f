import socket
import threading

import pytest

from sockcraft.errors import ExitCode
from sockcraft.inetaddr import InetAddr
from sockcraft.protocol import Protocol, Request, Response, decode, encode
from sockcraft.tcpsocket import TcpSocket


def test_request_wire_format():
    assert Request(1, 2, "+").serialize() == '{"oper":43,"x":1,"y":2}\n'


def test_request_round_trip():
    req = Request(-7, 19, "%")
    assert Request.deserialize(req.serialize()) == req


def test_response_round_trip():
    resp = Response(42, 1)
    assert Response.deserialize(resp.serialize()) == resp


def test_response_missing_fields_default_to_zero():
    assert Response.deserialize("{}") == Response(0, 0)


def test_deserialize_rejects_garbage():
    with pytest.raises(ValueError):
        Request.deserialize("not json")


def test_request_rejects_long_operator():
    with pytest.raises(ValueError):
        Request(1, 2, "++")


def test_encode_frames_payload():
    assert encode("abc") == "3\r\nabc\r\n"


def test_decode_round_trip_and_rest():
    framed = encode("hello") + encode("world")
    first, rest = decode(framed)
    second, rest = decode(rest)
    assert (first, second, rest) == ("hello", "world", "")


def test_decode_incomplete_leaves_buffer():
    partial = encode("hello")[:-1]
    assert decode(partial) == (None, partial)
    assert decode("12") == (None, "12")


def test_decode_bad_length_raises():
    with pytest.raises(ValueError):
        decode("xx\r\nabc\r\n")


def test_build_request_decodes_to_request():
    package, rest = decode(Protocol().build_request(5, 6, "*"))
    assert rest == ""
    assert Request.deserialize(package) == Request(5, 6, "*")


def test_handle_requests_and_get_response():
    a, b = socket.socketpair()
    server, client = TcpSocket(a), TcpSocket(b)
    outcome = []
    proto = Protocol(lambda req: Response(req.x, req.y))
    worker = threading.Thread(
        target=lambda: outcome.append(proto.handle_requests(server, InetAddr("127.0.0.1", 0)))
    )
    worker.start()
    reader = Protocol()
    client.send(reader.build_request(3, 4, "+"))
    response = reader.get_response(client)
    client.close()
    worker.join(timeout=5)
    server.close()
    assert response == Response(3, 4)
    assert outcome == [ExitCode.QUIT]


def test_get_response_buffers_extra_packages():
    a, b = socket.socketpair()
    writer, reader_sock = TcpSocket(a), TcpSocket(b)
    writer.send(encode(Response(1, 0).serialize()) + encode(Response(2, 0).serialize()))
    writer.close()
    reader = Protocol()
    first = reader.get_response(reader_sock)
    second = reader.get_response(reader_sock)
    third = reader.get_response(reader_sock)
    reader_sock.close()
    assert [first.result, second.result] == [1, 2]
    assert third is None