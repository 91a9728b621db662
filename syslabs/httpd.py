"""A small HTTP/1.0 server that serves static files and runs CGI programs."""

from __future__ import annotations

import os
import re
import shutil
import socketserver
import stat
import subprocess
import sys
from dataclasses import dataclass
from typing import BinaryIO, Optional

BUF_SIZE = 4096
DEFAULT_PORT = 8080
SERVER_NAME = "mini_httpd"
MAX_METHOD_LEN = 15
MAX_URL_LEN = 255

NOT_FOUND_BODY = (
    b"<html><head><title>404 Not Found</title></head>"
    b"<body><h1>404 Not Found</h1></body></html>"
)
SERVER_ERROR_BODY = (
    b"<html><head><title>500 Internal</title></head>"
    b"<body><h1>500 Internal Server Error</h1></body></html>"
)
NOT_IMPLEMENTED_BODY = b"<h1>501 Not Implemented</h1>"

_CONTENT_TYPES = {
    ".html": "text/html",
    ".htm": "text/html",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
}
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass
class Request:
    """The parts of an HTTP request the server acts on."""

    method: str
    url: str
    query_string: Optional[str] = None
    content_length: int = 0
    request_line: str = ""

    @property
    def is_get(self) -> bool:
        return self.method.upper() == "GET"

    @property
    def is_post(self) -> bool:
        return self.method.upper() == "POST"


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def read_line(stream: BinaryIO) -> str:
    """Read one line, dropping a CRLF terminator; a bare LF is kept."""
    chars = bytearray()
    c = b""
    while len(chars) < BUF_SIZE - 1 and c != b"\n":
        c = stream.read(1)
        if not c:
            break
        if c == b"\r":
            c = stream.read(1)
            if c and c != b"\n":
                chars += c
            else:
                break
        else:
            chars += c
    return chars.decode("latin-1")


def content_type_for(path: str) -> str:
    """Guess a content type from the text after the last dot of the path."""
    dot = path.rfind(".")
    if dot < 0:
        return "text/plain"
    return _CONTENT_TYPES.get(path[dot:], "text/plain")


def format_headers(status: str, content_type: str) -> bytes:
    """Build the status line and headers of a response."""
    return (
        f"HTTP/1.0 {status}\r\n"
        f"Server: {SERVER_NAME}\r\n"
        f"Content-Type: {content_type}\r\n"
        "\r\n"
    ).encode("latin-1")


def _is_supported(method: str) -> bool:
    return method.upper() in ("GET", "POST")


def read_request(stream: BinaryIO) -> Optional[Request]:
    """Read the request line and, for GET and POST, the headers.

    Returns None when the connection delivered no request line.
    """
    line = read_line(stream)
    if not line:
        return None

    fields = line.split()
    method = fields[0][:MAX_METHOD_LEN] if fields else ""
    url = fields[1][:MAX_URL_LEN] if len(fields) > 1 else ""
    request = Request(method=method, url=url, request_line=line)

    if not _is_supported(method):
        return request

    if request.is_get and "?" in url:
        request.url, _, request.query_string = url.partition("?")

    while header := read_line(stream):
        if header[:15].lower() == "content-length:":
            request.content_length = _atoi(header[15:])

    return request


def _not_found(wfile: BinaryIO) -> None:
    wfile.write(format_headers("404 NOT FOUND", "text/html") + NOT_FOUND_BODY)


def _server_error(wfile: BinaryIO) -> None:
    wfile.write(
        format_headers("500 Internal Server Error", "text/html") + SERVER_ERROR_BODY
    )


def serve_file(wfile: BinaryIO, path: str) -> None:
    """Send a file with a 200 response, or a 404 if it cannot be opened."""
    try:
        source = open(path, "rb")
    except OSError:
        _not_found(wfile)
        return
    with source:
        wfile.write(format_headers("200 OK", content_type_for(path)))
        shutil.copyfileobj(source, wfile, BUF_SIZE)


def execute_cgi(
    rfile: BinaryIO, wfile: BinaryIO, path: str, request: Request
) -> None:
    """Run a CGI program and pass its output to the client.

    Only the status line is sent by the server; the program writes its own
    headers. A POST body is read from the client and fed to its stdin.
    """
    wfile.write(b"HTTP/1.0 200 OK\r\n")

    env = dict(os.environ)
    env["REQUEST_METHOD"] = request.method
    if request.is_get and request.query_string is not None:
        env["QUERY_STRING"] = request.query_string
    elif request.is_post:
        env["CONTENT_LENGTH"] = str(request.content_length)

    body = b""
    if request.is_post and request.content_length > 0:
        body = rfile.read(request.content_length) or b""

    try:
        process = subprocess.Popen(
            [path], stdin=subprocess.PIPE, stdout=subprocess.PIPE, env=env
        )
    except (OSError, ValueError) as exc:
        print(f"exec {path}: {exc}", file=sys.stderr)
        return

    output, _ = process.communicate(body)
    wfile.write(output)


def handle_client(rfile: BinaryIO, wfile: BinaryIO, root: str = ".") -> None:
    """Answer one HTTP request read from rfile, writing the reply to wfile."""
    request = read_request(rfile)
    if request is None:
        return

    print(f"[request] {request.request_line}")

    if not _is_supported(request.method):
        wfile.write(
            format_headers("501 Not Implemented", "text/html") + NOT_IMPLEMENTED_BODY
        )
        return

    path = root.rstrip("/") + request.url
    if path.endswith("/"):
        path += "index.html"

    cgi = request.query_string is not None or request.url.startswith("/cgi-bin/")

    try:
        info = os.stat(path)
    except OSError:
        _not_found(wfile)
        return

    if stat.S_ISDIR(info.st_mode):
        path += "/index.html"
        try:
            os.stat(path)
        except OSError:
            _not_found(wfile)
            return

    if cgi:
        execute_cgi(rfile, wfile, path, request)
    else:
        serve_file(wfile, path)


class _Handler(socketserver.StreamRequestHandler):
    def handle(self) -> None:
        host, port = self.client_address[:2]
        print(f"client connected: {host}:{port}")
        handle_client(self.rfile, self.wfile, self.server.root)


class _HTTPServer(socketserver.TCPServer):
    allow_reuse_address = True

    def __init__(self, address, root: str) -> None:
        self.root = root
        super().__init__(address, _Handler)


def serve(port: int = DEFAULT_PORT, root: str = ".") -> None:
    """Serve requests one at a time on the given port until interrupted."""
    with _HTTPServer(("", port), root) as server:
        print(f"=== {SERVER_NAME} running (port {port}) ===")
        print(f"static files: relative to {root}")
        print("CGI: executables under ./cgi-bin/ (e.g. /cgi-bin/test.cgi)")
        server.serve_forever()


def main(argv=None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    port = _atoi(args[0]) if len(args) == 1 else DEFAULT_PORT
    try:
        serve(port)
    except KeyboardInterrupt:
        return 0
    except OSError as exc:
        print(f"server: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())