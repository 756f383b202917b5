"""Traced TCP/UDP clients and servers, fixed-capacity containers and a minimal HTTP/1.1 codec."""

__version__ = "0.1.0"

__all__ = ["array", "ring", "heading", "http_message", "trace", "sockets", "tcp", "udp"]