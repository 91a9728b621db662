"""A multi-client chat server that relays messages, and a chat client."""

from __future__ import annotations

import argparse
import select
import socket
import sys
import threading
from typing import List, Optional, TextIO

BUF_SIZE = 1024
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 12345
MAX_CLIENTS = 1024


class ChatServer:
    """Relays every message a client sends to all other connected clients."""

    def __init__(
        self, host: str = "", port: int = DEFAULT_PORT, out: Optional[TextIO] = None
    ) -> None:
        self.out = sys.stdout if out is None else out
        self._server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._server.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            self._server.bind((host, port))
            self._server.listen(5)
        except OSError:
            self._server.close()
            raise
        self.address = self._server.getsockname()
        self._clients: List[socket.socket] = []
        print(
            f"=== multi-client chat server started (port {self.address[1]}) ===",
            file=self.out,
        )

    @property
    def clients(self) -> List[socket.socket]:
        return list(self._clients)

    def __enter__(self) -> "ChatServer":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def poll(self, timeout: Optional[float] = None) -> int:
        """Wait for activity once and handle it; return how many sockets were ready."""
        readable, _, _ = select.select([self._server, *self._clients], [], [], timeout)
        for sock in readable:
            if sock is self._server:
                self._accept()
            elif sock in self._clients:
                self._receive(sock)
        return len(readable)

    def serve_forever(self) -> None:
        """Handle connections until select fails, then close everything."""
        try:
            while True:
                self.poll()
        except OSError as exc:
            print(f"select: {exc}", file=sys.stderr)
        finally:
            self.close()

    def close(self) -> None:
        for client in self._clients:
            client.close()
        self._clients.clear()
        self._server.close()

    def _accept(self) -> None:
        try:
            conn, (host, port) = self._server.accept()
        except OSError as exc:
            print(f"accept: {exc}", file=sys.stderr)
            return
        if len(self._clients) >= MAX_CLIENTS:
            print("[server] too many clients, connection refused", file=self.out)
            conn.close()
            return
        self._clients.append(conn)
        print(f"[server] new client: fd={conn.fileno()} ({host}:{port})", file=self.out)

    def _receive(self, sock: socket.socket) -> None:
        fd = sock.fileno()
        try:
            data = sock.recv(BUF_SIZE - 1)
        except OSError:
            data = b""
        if not data:
            print(f"[server] client(fd={fd}) disconnected", file=self.out)
            self._clients.remove(sock)
            sock.close()
            return
        print(
            f"[server] received(fd={fd}): {data.decode(errors='replace')}",
            end="",
            file=self.out,
        )
        for other in self._clients:
            if other is not sock:
                try:
                    other.sendall(data)
                except OSError:
                    pass


def _receive_loop(sock: socket.socket, out: TextIO) -> None:
    while True:
        try:
            data = sock.recv(BUF_SIZE - 1)
        except OSError:
            data = b""
        if not data:
            print("connection to the server closed", file=out)
            return
        print(f"[recv] {data.decode(errors='replace')}", end="", file=out)


def run_client(
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
    infile: Optional[TextIO] = None,
    out: Optional[TextIO] = None,
) -> None:
    """Send input lines to the chat server while printing what others say."""
    infile = sys.stdin if infile is None else infile
    out = sys.stdout if out is None else out
    with socket.create_connection((host, port)) as sock:
        print(f"=== chat client started (server {host}:{port}) ===", file=out)
        print("messages you type go to the other clients (end of input quits)", file=out)
        receiver = threading.Thread(target=_receive_loop, args=(sock, out), daemon=True)
        receiver.start()
        for line in infile:
            try:
                sock.sendall(line.encode())
            except OSError:
                break
        try:
            sock.shutdown(socket.SHUT_WR)
        except OSError:
            pass
        print("client quitting, waiting for the receiver to finish...", file=out)
        receiver.join()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="chat server and client")
    parser.add_argument("role", choices=["server", "client"])
    parser.add_argument("--host", default=None)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    args = parser.parse_args(argv)
    try:
        if args.role == "server":
            ChatServer(args.host if args.host is not None else "", args.port).serve_forever()
        else:
            run_client(args.host or DEFAULT_HOST, args.port)
    except KeyboardInterrupt:
        return 0
    except OSError as exc:
        print(f"{args.role}: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())