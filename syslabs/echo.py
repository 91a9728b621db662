"""A TCP echo server and an interactive client for it."""

from __future__ import annotations

import argparse
import socket
import sys
from typing import Optional, TextIO

BUF_SIZE = 1024
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 12345


def handle_echo(conn: socket.socket, out: Optional[TextIO] = None) -> int:
    """Send back everything received on conn until the peer closes.

    Returns the number of bytes echoed.
    """
    out = sys.stdout if out is None else out
    total = 0
    while True:
        try:
            data = conn.recv(BUF_SIZE - 1)
        except OSError:
            data = b""
        if not data:
            print("client disconnected", file=out)
            return total
        print(f"received: {data.decode(errors='replace')}", end="", file=out)
        conn.sendall(data)
        total += len(data)


def run_server(
    host: str = "", port: int = DEFAULT_PORT, out: Optional[TextIO] = None
) -> None:
    """Accept clients one after another and echo their data."""
    out = sys.stdout if out is None else out
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as server:
        server.bind((host, port))
        server.listen(5)
        print(f"=== TCP echo server started (port {port}) ===", file=out)
        while True:
            try:
                conn, (client_host, client_port) = server.accept()
            except OSError as exc:
                print(f"accept: {exc}", file=sys.stderr)
                continue
            print(f"client connected: {client_host}:{client_port}", file=out)
            with conn:
                handle_echo(conn, out)


def run_client(
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
    infile: Optional[TextIO] = None,
    out: Optional[TextIO] = None,
) -> None:
    """Send each input line to the server and print what comes back."""
    infile = sys.stdin if infile is None else infile
    out = sys.stdout if out is None else out
    with socket.create_connection((host, port)) as sock:
        print(f"=== TCP client started (server {host}:{port}) ===", file=out)
        print("type a message to send (end of input quits)", file=out)
        for line in infile:
            try:
                sock.sendall(line.encode())
                data = sock.recv(BUF_SIZE - 1)
            except OSError:
                data = b""
            if not data:
                print("server closed the connection", file=out)
                break
            print(f"echo from server: {data.decode(errors='replace')}", end="", file=out)
    print("client finished", file=out)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="TCP echo server and client")
    parser.add_argument("role", choices=["server", "client"])
    parser.add_argument("--host", default=None)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    args = parser.parse_args(argv)
    try:
        if args.role == "server":
            run_server(args.host if args.host is not None else "", args.port)
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