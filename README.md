# pipekit

Small command-line TCP tools built on the standard library alone.

## Installation

```
pip install .
```

## Commands

### `pipekit-webget`

Connects to `HOST` on the `http` port (IPv4), sends a GET request for `PATH`
and writes the raw response, headers included, to standard output until the
server closes the connection.

```
pipekit-webget HOST PATH
pipekit-webget example.com /index.html
```

Anything other than exactly two arguments prints a usage message on standard
error and exits with status 1. Network errors are printed on standard error;
the command still exits with status 0.

### `pipekit-tcp`

A netcat-style tool. In client mode it connects to `<host>:<port>`; with `-l`
it binds to `<host>:<port>` (with `SO_REUSEADDR`), accepts exactly one
connection and serves it. Once connected, everything read from standard input
is sent to the peer and everything received from the peer is written to
standard output, until both directions have finished. When standard input
reaches end of file, the sending half of the socket is shut down.

```
pipekit-tcp <host> <port>
pipekit-tcp -l <host> <port>
```

Progress messages (`DEBUG: ...`) go to standard error. Missing arguments print
a usage message and exit with status 1; any error while connecting or copying
is printed as `Exception: ...` and also exits with status 1.

## Library use

```python
from pipekit.webget import build_request, get_url
from pipekit.tcp_native import parse_arguments, establish, UsageError
from pipekit.stream_copy import bidirectional_stream_copy
```

- `build_request(host, path)` returns, as a string, the request text that
  `get_url` sends:

  ```
  GET <path> HTTP/1.1\r\n
  Host: <host>\r\n
  Connection: closer\r\n
  \r\n
  ```

- `get_url(host, path, port="http", out=None)` sends that request and copies
  the whole response to the binary stream `out` (standard output by default).
  `OSError`s are printed on standard error instead of being raised.
- `parse_arguments(argv)` takes the arguments after the program name and
  returns `(server_mode, host, port)`, raising `UsageError` when too few are
  given.
- `establish(server_mode, host, port)` returns a connected IPv4 socket, either
  by connecting to the address or by listening on it and accepting one
  connection.
- `bidirectional_stream_copy(sock, peer_name, source=None, sink=None)` copies
  data between a connected socket and a pair of binary streams (standard input
  and output by default) until both directions are done, through buffers of
  1 MiB each. It puts the socket and both streams into non-blocking mode and
  closes `sink` when the inbound direction finishes.

## What it does not do

- `pipekit-webget` speaks plain HTTP only: there is no HTTPS, no redirect
  following and no parsing of the response.
- `pipekit-tcp` uses the operating system's TCP sockets; it carries no TCP
  implementation of its own and has no options beyond `-l`.
- Both tools use IPv4 only and rely on POSIX non-blocking file descriptors.

## Running the tests

```
pip install .[test]
pytest
```