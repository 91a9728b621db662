import io
import socket
import threading

import pytest

from syslabs import echo


def _listener():
    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    listener.bind(("127.0.0.1", 0))
    listener.listen(1)
    return listener


def test_handle_echo_returns_data():
    a, b = socket.socketpair()
    result = []
    log = io.StringIO()
    worker = threading.Thread(target=lambda: result.append(echo.handle_echo(b, log)))
    worker.start()
    a.sendall(b"ping\n")
    assert a.recv(1024) == b"ping\n"
    a.shutdown(socket.SHUT_WR)
    worker.join(5)
    a.close()
    b.close()
    assert result == [len(b"ping\n")]
    assert "ping\n" in log.getvalue()


def test_handle_echo_nothing_received():
    a, b = socket.socketpair()
    a.close()
    assert echo.handle_echo(b, io.StringIO()) == 0
    b.close()


def test_run_client_against_echo_server():
    listener = _listener()
    port = listener.getsockname()[1]

    def serve():
        conn, _ = listener.accept()
        with conn:
            echo.handle_echo(conn, io.StringIO())

    worker = threading.Thread(target=serve)
    worker.start()
    out = io.StringIO()
    echo.run_client("127.0.0.1", port, io.StringIO("one\ntwo\n"), out)
    worker.join(5)
    listener.close()
    text = out.getvalue()
    assert "echo from server: one\n" in text
    assert text.index("one\n") < text.index("two\n")


def test_run_client_stops_when_server_closes():
    listener = _listener()
    port = listener.getsockname()[1]
    received = []

    def serve():
        conn, _ = listener.accept()
        with conn:
            received.append(conn.recv(1024))

    worker = threading.Thread(target=serve)
    worker.start()
    out = io.StringIO()
    echo.run_client("127.0.0.1", port, io.StringIO("first\nsecond\n"), out)
    worker.join(5)
    listener.close()
    assert received == [b"first\n"]
    assert "second" not in out.getvalue()


def test_run_client_connection_refused():
    probe = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    probe.bind(("127.0.0.1", 0))
    port = probe.getsockname()[1]
    probe.close()
    with pytest.raises(OSError):
        echo.run_client("127.0.0.1", port, io.StringIO("x\n"), io.StringIO())