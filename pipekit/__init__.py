"""Small TCP tools: a socket/stdio copier, a minimal HTTP fetcher and a netcat-style client/server."""

__version__ = "0.1.0"
__all__ = ["stream_copy", "webget", "tcp_native"]