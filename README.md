# syslabs

A handful of small systems programs, each usable as a command or as a
library module:

| Command                  | Module                    | What it does |
|--------------------------|---------------------------|--------------|
| `syslabs-httpd`          | `syslabs.httpd`           | Minimal HTTP/1.0 server: static files from the current directory, CGI programs |
| `syslabs-echo`           | `syslabs.echo`            | TCP echo server and line-by-line client |
| `syslabs-chat`           | `syslabs.chat`            | Multi-client chat server that relays each message to the other clients, plus a client |
| `syslabs-bounded-buffer` | `syslabs.bounded_buffer`  | Producers and consumers sharing a fixed-capacity buffer |
| `syslabs-threads`        | `syslabs.threads`         | Worker threads, a shared counter with and without a lock, two threads taking turns |
| `syslabs-calculator`     | `syslabs.calculator`      | Tk window that adds, subtracts, multiplies and divides two numbers |
| `syslabs-widgets`        | `syslabs.widgets`         | Tk window with an entry, a check box, a slider and a progress bar |

Python 3.10 or later is needed and nothing outside the standard library.
The two window programs need Tk to be available to Python.

## Installing

```
pip install .
```

## The HTTP server

```
syslabs-httpd 8080
```

Without a port it listens on 8080, on all interfaces, and answers one
connection at a time. Files are served from the current directory; a path
ending in `/` or naming a directory gets its `index.html`. The content type
comes from the extension (`.html`/`.htm`, `.jpg`/`.jpeg`, `.png`; anything
else is `text/plain`). Only `GET` and `POST` are accepted; other methods get
`501 Not Implemented`, missing files `404 NOT FOUND`.

A request under `/cgi-bin/`, or a `GET` with a query string, runs the file
as a program. It sees `REQUEST_METHOD`, plus `QUERY_STRING` for `GET` or
`CONTENT_LENGTH` for `POST` (the request body, `Content-Length` bytes of
it, is passed on its standard input). Whatever it prints goes back to the
client after the `HTTP/1.0 200 OK` status line, so it writes its own
headers.

From code:

- `serve(port, root)` runs the server with files taken from `root`;
- `handle_client(rfile, wfile, root)` answers one request read from a
  binary stream and writes the reply to another;
- `read_request(stream)` returns a `Request` (method, url, query string,
  content length, request line), or `None` when no request line arrived;
- `read_line`, `content_type_for`, `format_headers`, `serve_file` and
  `execute_cgi` are the pieces it is built from.

## Echo and chat

```
syslabs-echo server [--host HOST] [--port PORT]
syslabs-echo client [--host HOST] [--port PORT]
syslabs-chat server [--host HOST] [--port PORT]
syslabs-chat client [--host HOST] [--port PORT]
```

The port defaults to 12345; servers listen on all interfaces and clients
connect to 127.0.0.1 unless `--host` is given.

The echo server takes clients one after another and sends every message
straight back; the client reads lines from standard input, sends each one
and prints the reply. `syslabs.echo` offers `run_server`, `run_client` and
`handle_echo(conn, out)` for serving a single connected socket.

The chat server watches all its clients at once and forwards each message
to every other connected client; the chat client sends what you type and
prints what arrives until input ends (Ctrl+D). `syslabs.chat.ChatServer`
can be driven step by step with `poll(timeout)`, left to run with
`serve_forever()`, and shut down with `close()`; it is also a context
manager.

## Thread exercises

```
syslabs-bounded-buffer [--producers N] [--consumers N] [--items N] [--capacity N] [--delay SECONDS]
syslabs-threads workers [--threads N] [--delay SECONDS]
syslabs-threads counter [--threads N] [--loops N]
syslabs-threads alternate [--rounds N] [--delay SECONDS]
```

`syslabs.bounded_buffer.BoundedBuffer(capacity)` is a blocking FIFO ring:
`put` waits while it is full and returns the slot used, `get` waits while
it is empty and returns `(item, slot)`, and either takes an `on_wait`
callback called each time it has to wait. `run(...)` starts producers and
consumers over one buffer, reports what each does and returns the items in
the order they were consumed; the total number of items must divide
evenly among the consumers.

`syslabs.threads` has `run_workers`, `count_with_threads` (compare the
total with and without `use_lock`) and `alternate_greetings`, where the
calling thread and a child thread strictly take turns printing, parent
first.

## Window programs

```
syslabs-calculator [--basic]
syslabs-widgets
```

The calculator reads the leading number of each field (text that does not
parse counts as 0) and shows `Result: ` followed by the result to two
decimals; dividing by zero shows `Error: cannot divide by zero` instead.
`--basic` offers only addition and subtraction. Without a window,
`syslabs.calculator.calculate(Operation.ADD, "1", "2")` gives the same
text, and `parse_number` the number read from a field.

The widget demo copies the entry text to the label when the button is
clicked, moves the progress bar with the slider, and advances the bar a
little every 50 ms, wrapping back to empty once full. `advance_fraction`,
`scale_to_fraction` and `label_text_for` hold that logic.

## Limits

The HTTP server speaks only HTTP/1.0 without keep-alive, handles one
request per connection and one connection at a time, and does no
path sanitising beyond what the file system does.

## Running the tests

```
pip install .[test]
pytest
```