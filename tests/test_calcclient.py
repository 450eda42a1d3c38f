import io
import socket
import sys
import threading

import pytest

from sockcraft.calcclient import main, prompt_request
from sockcraft.errors import ExitCode
from sockcraft.netcal import Calculator
from sockcraft.protocol import Protocol
from sockcraft.tcpsocket import TcpSocket


def test_prompt_request_reads_tokens():
    out = io.StringIO()
    assert prompt_request(iter(["4", "5", "*"]), out) == (4, 5, "*")
    assert out.getvalue().splitlines() == ["enter x", "enter y", "enter oper"]


def test_prompt_request_consumes_in_order():
    tokens = iter(["1", "2", "+", "3", "4", "-"])
    out = io.StringIO()
    assert prompt_request(tokens, out) == (1, 2, "+")
    assert prompt_request(tokens, out) == (3, 4, "-")


def test_prompt_request_end_of_input():
    with pytest.raises(EOFError):
        prompt_request(iter(["1"]), io.StringIO())


def test_prompt_request_bad_operand():
    with pytest.raises(ValueError):
        prompt_request(iter(["one", "2", "+"]), io.StringIO())


@pytest.mark.parametrize("argv", [[], ["127.0.0.1"], ["127.0.0.1", "port"], ["host", "80"]])
def test_main_rejects_bad_arguments(argv):
    assert main(argv) == ExitCode.USE_ERROR


def test_main_reports_refused_connection():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as probe:
        probe.bind(("127.0.0.1", 0))
        port = probe.getsockname()[1]
    assert main(["127.0.0.1", str(port)]) == ExitCode.CON_ERROR


def test_main_round_trip_with_server(monkeypatch, capsys):
    listener = TcpSocket()
    listener.init_server(0)
    port = listener.address.port

    def serve():
        conn, addr = listener.accept()
        with conn:
            Protocol(Calculator().solve).handle_requests(conn, addr)

    worker = threading.Thread(target=serve, daemon=True)
    worker.start()
    monkeypatch.setattr(sys, "stdin", io.StringIO("40 2 +\n"))
    code = main(["127.0.0.1", str(port)])
    worker.join(timeout=5)
    listener.close()
    out = capsys.readouterr().out
    assert code == ExitCode.OK
    assert "42" in out.splitlines()