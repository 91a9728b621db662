import io
import socket
import threading

import pytest

from syslabs import chat


def _poll_until(server, predicate, attempts=50):
    for _ in range(attempts):
        if predicate():
            return True
        server.poll(0.1)
    return predicate()


def _connect(server):
    return socket.create_connection(("127.0.0.1", server.address[1]))


@pytest.fixture
def server():
    srv = chat.ChatServer("127.0.0.1", 0, io.StringIO())
    yield srv
    srv.close()


def test_accepts_clients(server):
    a, b = _connect(server), _connect(server)
    assert _poll_until(server, lambda: len(server.clients) == 2)
    a.sendall(b"first\n")
    assert _poll_until(server, lambda: "first" in server.out.getvalue())
    b.settimeout(2)
    assert b.recv(1024) == b"first\n"
    a.close()
    b.close()


def test_broadcast_reaches_others_not_sender(server):
    a, b, c = _connect(server), _connect(server), _connect(server)
    assert _poll_until(server, lambda: len(server.clients) == 3)
    a.sendall(b"hello\n")
    assert _poll_until(server, lambda: "hello" in server.out.getvalue())
    for peer in (b, c):
        peer.settimeout(2)
        assert peer.recv(1024) == b"hello\n"
    a.settimeout(0.2)
    with pytest.raises(socket.timeout):
        a.recv(1024)
    for sock in (a, b, c):
        sock.close()


def test_disconnect_removes_client(server):
    a, b = _connect(server), _connect(server)
    assert _poll_until(server, lambda: len(server.clients) == 2)
    a.close()
    assert _poll_until(server, lambda: len(server.clients) == 1)
    c = _connect(server)
    assert _poll_until(server, lambda: len(server.clients) == 2)
    b.sendall(b"ping\n")
    assert _poll_until(server, lambda: "ping" in server.out.getvalue())
    c.settimeout(2)
    assert c.recv(1024) == b"ping\n"
    b.close()
    c.close()


def test_poll_timeout_without_activity(server):
    assert server.poll(0.05) == 0


def test_close_stops_listening():
    srv = chat.ChatServer("127.0.0.1", 0, io.StringIO())
    port = srv.address[1]
    srv.close()
    assert srv.clients == []
    with pytest.raises(OSError):
        socket.create_connection(("127.0.0.1", port), timeout=2)


def test_run_client_sends_and_receives():
    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    listener.bind(("127.0.0.1", 0))
    listener.listen(1)
    port = listener.getsockname()[1]
    received = []

    def serve():
        conn, _ = listener.accept()
        with conn:
            conn.sendall(b"welcome\n")
            chunks = []
            while data := conn.recv(1024):
                chunks.append(data)
            received.append(b"".join(chunks))

    worker = threading.Thread(target=serve)
    worker.start()
    out = io.StringIO()
    chat.run_client("127.0.0.1", port, io.StringIO("hi\n"), out)
    worker.join(5)
    listener.close()
    assert received == [b"hi\n"]
    assert "[recv] welcome\n" in out.getvalue()