import socket
import threading
import time

import pytest

from pipekit.tcp_native import UsageError, establish, main, parse_arguments


def test_parse_client_mode():
    assert parse_arguments(["example.com", "80"]) == (False, "example.com", "80")


def test_parse_server_mode():
    assert parse_arguments(["-l", "0", "9090"]) == (True, "0", "9090")


def test_parse_ignores_extra_arguments():
    assert parse_arguments(["host", "22", "more"]) == (False, "host", "22")


@pytest.mark.parametrize("args", [[], ["host"], ["-l", "host"]])
def test_parse_missing_arguments(args):
    with pytest.raises(UsageError):
        parse_arguments(args)


def test_main_prints_usage(capsys):
    assert main(["-l", "only"]) == 1
    err = capsys.readouterr().err
    assert "[-l] <host> <port>" in err


def test_establish_client(capsys):
    with socket.socket() as listener:
        listener.bind(("127.0.0.1", 0))
        listener.listen(1)
        port = listener.getsockname()[1]
        sock = establish(False, "127.0.0.1", str(port))
        accepted, _ = listener.accept()
        with sock, accepted:
            assert sock.getpeername() == ("127.0.0.1", port)
            sock.sendall(b"ping")
            assert accepted.recv(4) == b"ping"
    err = capsys.readouterr().err
    assert f"DEBUG: Successfully connected to 127.0.0.1:{port}." in err


def test_establish_server(capsys):
    with socket.socket() as probe:
        probe.bind(("127.0.0.1", 0))
        port = probe.getsockname()[1]

    result = {}

    def client() -> None:
        deadline = time.monotonic() + 5
        while time.monotonic() < deadline:
            conn = socket.socket()
            try:
                conn.connect(("127.0.0.1", port))
            except OSError:
                conn.close()
                time.sleep(0.02)
                continue
            result["local"] = conn.getsockname()
            conn.sendall(b"pong")
            conn.close()
            return

    thread = threading.Thread(target=client)
    thread.start()
    sock = establish(True, "127.0.0.1", str(port))
    with sock:
        assert sock.recv(4) == b"pong"
        assert sock.getpeername() == result.get("local", sock.getpeername())
    thread.join(timeout=10)
    err = capsys.readouterr().err
    assert "DEBUG: Listening for incoming connection..." in err
    assert "DEBUG: New connection from 127.0.0.1:" in err


def test_establish_client_refused():
    with socket.socket() as probe:
        probe.bind(("127.0.0.1", 0))
        port = probe.getsockname()[1]
    with pytest.raises(ConnectionRefusedError):
        establish(False, "127.0.0.1", str(port))