"""Incremental writers and readers for HTTP/1.1 start lines, headers and bodies.

A *session* is any object with ``write(data) -> int | None`` and
``read(size) -> bytes`` methods, such as a connected TCP socket wrapper.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple, Union

from paxnet.array import CapacityError
from paxnet.heading import (
    COLON,
    CRLF,
    HTTP_MESSAGE,
    HTTP_METHOD,
    HTTP_RESOURCE,
    HTTP_STATUS,
    HTTP_VERSION,
    SPACE,
)

DEFAULT_CAPACITY = 4 * 1024

_CRLF_BYTES = CRLF.encode("ascii")


class HttpStateError(RuntimeError):
    """Raised when a message part is written or read out of order."""


def _check_capacity(capacity: int) -> None:
    if capacity <= 0:
        raise ValueError(f"capacity must be positive, got {capacity}")


def _as_bytes(data: Union[bytes, bytearray, memoryview, str]) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


class MessageWriter:
    """Builds an outgoing HTTP message in a buffer of fixed capacity.

    The message is written in order: start line, headers, then content.
    The buffer is handed to a session with :meth:`send`, which drains it
    but keeps the writer's position, so content can be streamed in pieces.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        _check_capacity(capacity)
        self._capacity = capacity
        self._buffer = bytearray()
        self._lines = 0
        self._in_body = False

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def lines(self) -> int:
        """Number of lines (start, headers, blank separator) written so far."""
        return self._lines

    @property
    def in_body(self) -> bool:
        """Whether the blank line before the content has been written."""
        return self._in_body

    @property
    def data(self) -> bytes:
        """The bytes waiting in the buffer."""
        return bytes(self._buffer)

    @property
    def free(self) -> int:
        return self._capacity - len(self._buffer)

    def clear(self) -> None:
        """Empty the buffer and start a new message."""
        self._buffer.clear()
        self._lines = 0
        self._in_body = False

    def _put_line(self, text: str) -> None:
        encoded = text.encode("utf-8") + _CRLF_BYTES
        if len(encoded) > self.free:
            raise CapacityError(
                f"line of {len(encoded)} bytes does not fit in {self.free} free bytes"
            )
        self._buffer += encoded
        self._lines += 1

    def _write_start(self, first: object, second: object, third: object) -> None:
        if self._lines:
            raise HttpStateError("start line already written")
        self._put_line(f"{first}{SPACE}{second}{SPACE}{third}")

    def header(self, key: str, value: object) -> None:
        """Append a ``key: value`` header line."""
        if self._in_body:
            raise HttpStateError("headers cannot follow content")
        self._put_line(f"{key}{COLON}{SPACE}{value}")

    def content(self, data: Union[bytes, bytearray, memoryview, str]) -> int:
        """Append content, ending the headers first if needed.

        Returns the number of bytes added, which is 0 when the content does
        not fit in the free space; send the buffer and try again.
        """
        if not self._in_body:
            self._put_line("")
            self._in_body = True
        payload = _as_bytes(data)
        if len(payload) > self.free:
            return 0
        self._buffer += payload
        return len(payload)

    def send(self, session: Any) -> bool:
        """Write the buffer to ``session`` and drop what was sent.

        Returns True when the whole buffer was sent.
        """
        payload = bytes(self._buffer)
        if not payload:
            return True
        sent = session.write(payload)
        if sent is None:
            sent = len(payload)
        sent = max(0, min(sent, len(payload)))
        del self._buffer[:sent]
        return sent == len(payload)


class RequestWriter(MessageWriter):
    """Writer for HTTP requests."""

    def start(self, method: str, resource: str, version: str) -> None:
        """Write the request line ``METHOD resource VERSION``."""
        self._write_start(method, resource, version)


class ResponseWriter(MessageWriter):
    """Writer for HTTP responses."""

    def start(self, version: str, status: Union[str, int], message: str) -> None:
        """Write the status line ``VERSION status message``."""
        self._write_start(version, status, message)


class MessageReader:
    """Parses an incoming HTTP message from a buffer of fixed capacity.

    Bytes arrive with :meth:`feed` or :meth:`receive`; the start line and
    headers are then taken off the front of the buffer one line at a time.
    """

    START_KEYS: Tuple[str, ...] = ()

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        _check_capacity(capacity)
        self._capacity = capacity
        self._buffer = bytearray()
        self._lines = 0
        self._in_body = False

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def lines(self) -> int:
        """Number of lines consumed so far."""
        return self._lines

    @property
    def in_body(self) -> bool:
        """Whether the blank line ending the headers has been read."""
        return self._in_body

    @property
    def pending(self) -> bytes:
        """Bytes received but not yet consumed."""
        return bytes(self._buffer)

    def clear(self) -> None:
        self._buffer.clear()
        self._lines = 0
        self._in_body = False

    def feed(self, data: Union[bytes, bytearray, memoryview, str]) -> int:
        """Add received bytes; returns how many fitted in the free space."""
        payload = _as_bytes(data)
        accepted = payload[: self._capacity - len(self._buffer)]
        self._buffer += accepted
        return len(accepted)

    def receive(self, session: Any) -> bool:
        """Read from ``session`` into the free space; False when nothing came."""
        free = self._capacity - len(self._buffer)
        if free <= 0:
            return False
        chunk = session.read(free)
        if not chunk:
            return False
        self.feed(chunk)
        return True

    def _take_line(self) -> Optional[str]:
        index = self._buffer.find(_CRLF_BYTES)
        if index < 0:
            return None
        line = bytes(self._buffer[:index])
        del self._buffer[: index + len(_CRLF_BYTES)]
        self._lines += 1
        return line.decode("utf-8", errors="replace")

    def read_start(self) -> Optional[Tuple[str, str, str]]:
        """Consume the start line and return its three space-separated parts.

        Returns None while no complete line has arrived.
        """
        if self._lines:
            raise HttpStateError("start line already read")
        line = self._take_line()
        if line is None:
            return None
        left, _, rest = line.partition(SPACE)
        center, _, right = rest.partition(SPACE)
        return left.strip(), center.strip(), right.strip()

    def read_header(self) -> Optional[Tuple[str, str]]:
        """Consume one header line and return ``(key, value)``.

        Returns None while no complete line has arrived, and on the blank
        line that ends the headers, after which :attr:`in_body` is True.
        """
        if self._in_body:
            raise HttpStateError("headers already read")
        line = self._take_line()
        if line is None:
            return None
        if not line:
            self._in_body = True
            return None
        key, _, value = line.partition(COLON)
        return key.strip(), value.strip()

    def heading(self, session: Any = None) -> Dict[str, str]:
        """Read the start line and all headers into a heading mapping.

        Buffered bytes are parsed first; more are read from ``session``
        until the headers end or the session yields nothing.
        """
        result: Dict[str, str] = {}
        while True:
            if self._lines == 0:
                start = self.read_start()
                if start is not None:
                    result.update(zip(self.START_KEYS, start))
            while self._lines > 0 and not self._in_body:
                pair = self.read_header()
                if pair is None:
                    break
                key, value = pair
                result[key] = value
            if self._in_body or session is None or not self.receive(session):
                break
        return result

    def _take(self, amount: int) -> bytes:
        chunk = bytes(self._buffer[:amount])
        del self._buffer[:amount]
        return chunk

    def content(self, length: int, session: Any = None) -> bytes:
        """Return up to ``length`` bytes of content, reading more from ``session``.

        The result is shorter than ``length`` if the session runs dry.
        """
        if length <= 0:
            return b""
        result = bytearray(self._take(length))
        while len(result) < length and session is not None and self.receive(session):
            result += self._take(length - len(result))
        return bytes(result)


class RequestReader(MessageReader):
    """Reader for HTTP requests; the start line fills Method, Resource, Version."""

    START_KEYS = (HTTP_METHOD, HTTP_RESOURCE, HTTP_VERSION)


class ResponseReader(MessageReader):
    """Reader for HTTP responses; the start line fills Version, Status, Message."""

    START_KEYS = (HTTP_VERSION, HTTP_STATUS, HTTP_MESSAGE)