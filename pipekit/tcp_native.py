"""Connect to or accept one TCP connection and copy it to standard input and output."""

from __future__ import annotations

import os
import socket
import sys
from typing import Optional, Sequence

from pipekit.stream_copy import bidirectional_stream_copy


class UsageError(Exception):
    """The command line does not have the required arguments."""


def _format_address(address: tuple) -> str:
    return f"{address[0]}:{address[1]}"


def _resolve(host: str, port: str) -> tuple:
    return socket.getaddrinfo(host, port, socket.AF_INET, socket.SOCK_STREAM)[0][4]


def parse_arguments(argv: Sequence[str]) -> tuple[bool, str, str]:
    """Return (server_mode, host, port) from the arguments after the program name."""
    args = list(argv)
    if len(args) < 2:
        raise UsageError("required arguments are missing")
    server_mode = args[0] == "-l"
    if server_mode:
        if len(args) < 3:
            raise UsageError("required arguments are missing")
        return True, args[1], args[2]
    return False, args[0], args[1]


def _debug(message: str) -> None:
    print(message, end="", file=sys.stderr, flush=True)


def establish(server_mode: bool, host: str, port: str) -> socket.socket:
    """Accept exactly one connection in server mode, otherwise connect; return it."""
    if server_mode:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as listening:
            listening.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            listening.bind(_resolve(host, port))
            listening.listen()
            _debug("DEBUG: Listening for incoming connection...\n")
            connected, peer = listening.accept()
        _debug(f"DEBUG: New connection from {_format_address(peer)}.\n")
        return connected

    peer = _resolve(host, port)
    connecting = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    _debug(f"DEBUG: Connecting to {_format_address(peer)}... ")
    try:
        connecting.connect(peer)
    except OSError:
        connecting.close()
        raise
    _debug(
        "DEBUG: Successfully connected to "
        f"{_format_address(connecting.getpeername())}.\n"
    )
    return connecting


def _show_usage(prog: str) -> None:
    print(
        f"Usage: {prog} [-l] <host> <port>\n\n"
        "  -l specifies listen mode; <host>:<port> is the listening address.",
        file=sys.stderr,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the command; return the exit status."""
    prog = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "tcp_native"
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        server_mode, host, port = parse_arguments(args)
    except UsageError:
        _show_usage(prog)
        return 1
    try:
        with establish(server_mode, host, port) as sock:
            bidirectional_stream_copy(
                sock,
                _format_address(sock.getpeername()),
                sys.stdin.buffer,
                sys.stdout.buffer,
            )
    except Exception as error:  # noqa: BLE001 - reported as the exit status
        print(f"Exception: {error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())