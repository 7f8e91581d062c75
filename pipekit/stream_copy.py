"""Copy bytes both ways between a connected socket and a local source and sink."""

from __future__ import annotations

import os
import selectors
import socket
import sys
from dataclasses import dataclass
from typing import BinaryIO, Callable, Optional

BUFFER_SIZE = 1_048_576

_Selector = getattr(selectors, "PollSelector", selectors.SelectSelector)


class _Pipe:
    """A bounded in-memory byte buffer with a writing and a reading end."""

    def __init__(self, capacity: int) -> None:
        self.capacity = capacity
        self._buffer = bytearray()
        self.closed = False
        self.error = False

    @property
    def available_capacity(self) -> int:
        return self.capacity - len(self._buffer)

    @property
    def bytes_buffered(self) -> int:
        return len(self._buffer)

    @property
    def finished(self) -> bool:
        return self.closed and not self._buffer

    def push(self, data: bytes) -> None:
        if self.closed:
            return
        self._buffer += data[: self.available_capacity]

    def close(self) -> None:
        self.closed = True

    def peek(self) -> bytes:
        return bytes(self._buffer)

    def pop(self, count: int) -> None:
        del self._buffer[:count]


@dataclass
class _Rule:
    name: str
    fd: int
    events: int
    callback: Callable[[], None]
    interest: Callable[[], bool]
    on_error: Callable[[], None]
    active: bool = True


def _run(rules: list[_Rule]) -> None:
    """Dispatch ready rules until none of them is interested any longer."""
    while True:
        wanted = [rule for rule in rules if rule.active and rule.interest()]
        if not wanted:
            return
        masks: dict[int, int] = {}
        for rule in wanted:
            masks[rule.fd] = masks.get(rule.fd, 0) | rule.events
        with _Selector() as selector:
            for fd, mask in masks.items():
                selector.register(fd, mask)
            ready = {key.fd: events for key, events in selector.select()}
        for rule in wanted:
            if not ready.get(rule.fd, 0) & rule.events:
                continue
            if not (rule.active and rule.interest()):
                continue
            try:
                rule.callback()
            except OSError:
                rule.active = False
                rule.on_error()


def _debug(message: str) -> None:
    print(message, end="", file=sys.stderr, flush=True)


def bidirectional_stream_copy(
    sock: socket.socket,
    peer_name: str,
    source: Optional[BinaryIO] = None,
    sink: Optional[BinaryIO] = None,
) -> None:
    """Copy source to the socket and the socket to sink until both directions end."""
    if source is None:
        source = sys.stdin.buffer
    if sink is None:
        sink = sys.stdout.buffer

    outbound = _Pipe(BUFFER_SIZE)
    inbound = _Pipe(BUFFER_SIZE)
    state = {"outbound_shutdown": False, "inbound_shutdown": False}

    source_fd = source.fileno()
    sink_fd = sink.fileno()
    sock_fd = sock.fileno()

    sock.setblocking(False)
    os.set_blocking(source_fd, False)
    os.set_blocking(sink_fd, False)

    def fail(message: str) -> Callable[[], None]:
        def handler() -> None:
            _debug(message)
            outbound.error = True
            inbound.error = True

        return handler

    def read_source() -> None:
        try:
            data = os.read(source_fd, outbound.available_capacity)
        except BlockingIOError:
            return
        outbound.push(data)
        if not data:
            outbound.close()

    def source_interest() -> bool:
        return (
            not outbound.error
            and not inbound.error
            and outbound.available_capacity > 0
            and not outbound.closed
        )

    def write_socket() -> None:
        if outbound.bytes_buffered:
            try:
                outbound.pop(sock.send(outbound.peek()))
            except BlockingIOError:
                pass
        if outbound.finished:
            sock.shutdown(socket.SHUT_WR)
            state["outbound_shutdown"] = True
            _debug(f"DEBUG: Outbound stream to {peer_name} finished.\n")

    def socket_out_interest() -> bool:
        return bool(outbound.bytes_buffered) or (
            outbound.finished and not state["outbound_shutdown"]
        )

    def read_socket() -> None:
        try:
            data = sock.recv(inbound.available_capacity)
        except BlockingIOError:
            return
        inbound.push(data)
        if not data:
            inbound.close()

    def socket_in_interest() -> bool:
        return (
            not inbound.error
            and not outbound.error
            and inbound.available_capacity > 0
            and not inbound.closed
        )

    def write_sink() -> None:
        if inbound.bytes_buffered:
            try:
                inbound.pop(os.write(sink_fd, inbound.peek()))
            except BlockingIOError:
                pass
        if inbound.finished:
            sink.close()
            state["inbound_shutdown"] = True
            ending = " uncleanly.\n" if inbound.error else ".\n"
            _debug(f"DEBUG: Inbound stream from {peer_name} finished{ending}")

    def sink_interest() -> bool:
        return bool(inbound.bytes_buffered) or (
            inbound.finished and not state["inbound_shutdown"]
        )

    rules = [
        _Rule(
            "read from stdin into outbound byte stream",
            source_fd,
            selectors.EVENT_READ,
            read_source,
            source_interest,
            fail("DEBUG: Outbound stream had error from source.\n"),
        ),
        _Rule(
            "read from outbound byte stream into socket",
            sock_fd,
            selectors.EVENT_WRITE,
            write_socket,
            socket_out_interest,
            fail("DEBUG: Outbound stream had error from destination.\n"),
        ),
        _Rule(
            "read from socket into inbound byte stream",
            sock_fd,
            selectors.EVENT_READ,
            read_socket,
            socket_in_interest,
            fail("DEBUG: Inbound stream had error from source.\n"),
        ),
        _Rule(
            "read from inbound byte stream into stdout",
            sink_fd,
            selectors.EVENT_WRITE,
            write_sink,
            sink_interest,
            fail("DEBUG: Inbound stream had error from destination.\n"),
        ),
    ]
    _run(rules)