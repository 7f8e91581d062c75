"""Fetch a page over HTTP/1.1 and print the raw response."""

from __future__ import annotations

import os
import socket
import sys
from typing import BinaryIO, Optional, Sequence, Union


def build_request(host: str, path: str) -> str:
    """Return the request text sent for the given host and path."""
    return (
        "GET " + path + " HTTP/1.1\r\n"
        "Host: " + host + "\r\n"
        "Connection: closer\r\n"
        "\r\n"
    )


def _connect(host: str, port: Union[int, str]) -> socket.socket:
    family, kind, proto, _, address = socket.getaddrinfo(
        host, port, socket.AF_INET, socket.SOCK_STREAM
    )[0]
    sock = socket.socket(family, kind, proto)
    try:
        sock.connect(address)
    except OSError:
        sock.close()
        raise
    return sock


def get_url(
    host: str,
    path: str,
    port: Union[int, str] = "http",
    out: Optional[BinaryIO] = None,
) -> None:
    """Send a GET request and copy the whole response to out.

    Network errors are reported on standard error rather than raised.
    """
    if out is None:
        out = sys.stdout.buffer
    try:
        with _connect(host, port) as sock:
            sock.sendall(build_request(host, path).encode())
            while chunk := sock.recv(65536):
                out.write(chunk)
            out.flush()
    except OSError as error:
        print(error, file=sys.stderr)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the command with HOST and PATH arguments; return the exit status."""
    prog = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "webget"
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 2:
        print(f"Usage: {prog} HOST PATH", file=sys.stderr)
        print(f"\tExample: {prog} stanford.edu /class/cs144", file=sys.stderr)
        return 1
    host, path = args
    get_url(host, path)
    return 0


if __name__ == "__main__":
    sys.exit(main())