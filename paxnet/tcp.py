"""TCP clients, servers and server-side sessions that trace every step."""

from __future__ import annotations

import sys
from typing import Any, Optional, TextIO, Union

from paxnet.sockets import AddressLike, AddressType, IPAddress, TcpSocket, to_address
from paxnet.trace import FAIL, SUCC, TRACE, format_endpoint, outcome, yellow

DEFAULT_PORT = 8000
DEFAULT_READ_SIZE = 1024

Data = Union[bytes, bytearray, memoryview]


class _Traced:
    """Base for objects that print trace lines to a text stream."""

    def __init__(self, out: Optional[TextIO]) -> None:
        self._out = out

    def _emit(self, text: str) -> None:
        stream = self._out if self._out is not None else sys.stdout
        print(text, end="", file=stream, flush=True)


class _TracedStream(_Traced):
    """A traced wrapper around a connected stream socket."""

    _WRITE_LABEL = "Scrittura"
    _READ_LABEL = "Lettura"

    def __init__(self, sock: TcpSocket, out: Optional[TextIO]) -> None:
        super().__init__(out)
        self._socket = sock

    @property
    def socket(self) -> TcpSocket:
        return self._socket

    def address(self) -> Optional[IPAddress]:
        return self._socket.address()

    def _send(self, data: Data) -> int:
        payload = bytes(data)
        self._emit(f"{TRACE} {self._WRITE_LABEL} di {yellow(f'{len(payload)}B')}: ")
        try:
            sent = self._socket.write(payload)
        except OSError:
            self._emit(f"{FAIL}\n")
            raise
        self._emit(f"{outcome(sent == len(payload))}\n")
        return sent

    def _receive(self, size: int) -> bytes:
        self._emit(f"{TRACE} {self._READ_LABEL} ")
        try:
            data = self._socket.read(size)
        except OSError:
            self._emit(f"di {yellow('0B')}: {FAIL}\n")
            raise
        self._emit(f"di {yellow(f'{len(data)}B')}: {outcome(data)}\n")
        return data

    def write(self, data: Data) -> int:
        """Send all of ``data``; returns the number of bytes sent."""
        return self._send(data)

    def read(self, size: int = DEFAULT_READ_SIZE) -> bytes:
        """Receive up to ``size`` bytes; empty when the peer has closed."""
        return self._receive(size)

    def close(self) -> None:
        self._socket.close()

    def __enter__(self):
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


class TcpClient(_TracedStream):
    """A client that connects to a server and exchanges requests and responses."""

    _WRITE_LABEL = "Scrittura richiesta"
    _READ_LABEL = "Lettura risposta"

    def __init__(self, kind: AddressType = AddressType.IP4, out: Optional[TextIO] = None) -> None:
        super().__init__(TcpSocket(kind), out)

    def port(self) -> int:
        return self._socket.port()

    def connect(self, address: AddressLike, port: int) -> None:
        """Open a session with the server at ``address`` and ``port``."""
        target = to_address(address)
        self._emit(f"{TRACE} Apertura sessione con {format_endpoint(target, port)}: ")
        try:
            self._socket.connect(target, port)
        except OSError:
            self._emit(f"{FAIL}\n")
            raise
        self._emit(f"{SUCC}\n")

    def write(self, data: Data) -> int:
        """Send a request; returns the number of bytes sent."""
        return self._send(data)

    def read(self, size: int = DEFAULT_READ_SIZE) -> bytes:
        """Receive a response of at most ``size`` bytes."""
        return self._receive(size)

    def close(self) -> None:
        self._socket.close()

    def __enter__(self):
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


class TcpSession(_TracedStream):
    """The server side of one accepted connection."""

    _WRITE_LABEL = "Scrittura risposta"
    _READ_LABEL = "Lettura richiesta"

    def __init__(self, sock: TcpSocket, out: Optional[TextIO] = None) -> None:
        super().__init__(sock, out)

    def port(self) -> int:
        """The peer's port."""
        return self._socket.port()

    def write(self, data: Data) -> int:
        """Send a response; returns the number of bytes sent."""
        return self._send(data)

    def read(self, size: int = DEFAULT_READ_SIZE) -> bytes:
        """Receive a request of at most ``size`` bytes."""
        return self._receive(size)

    def close(self) -> None:
        self._socket.close()

    def __enter__(self):
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


class TcpServer(_Traced):
    """A listening socket bound to an address and port."""

    def __init__(
        self,
        address: AddressLike = "0.0.0.0",
        port: int = DEFAULT_PORT,
        out: Optional[TextIO] = None,
    ) -> None:
        super().__init__(out)
        target = to_address(address)
        self._socket = TcpSocket(AddressType.of(target))
        try:
            self._emit(f"{TRACE} Attivazione porta {yellow(port)}: ")
            self._step(lambda: self._socket.bind(target, port))
            self._emit(f"{TRACE} Attivazione porta in ascolto: ")
            self._step(self._socket.listen)
        except (OSError, ValueError):
            self._socket.close()
            raise

    def _step(self, action) -> None:
        try:
            action()
        except (OSError, ValueError):
            self._emit(f"{FAIL}\n")
            raise
        self._emit(f"{SUCC}\n")

    def address(self) -> Optional[IPAddress]:
        return self._socket.address()

    def port(self) -> int:
        """The port the server is bound to."""
        return self._socket.port()

    def accept(self) -> TcpSession:
        """Wait for a client and return the session with it."""
        self._emit(f"{TRACE} Apertura sessione ")
        try:
            conn = self._socket.accept()
        except OSError:
            self._emit(f"con {format_endpoint(None, 0)}: {FAIL}\n")
            raise
        self._emit(f"con {format_endpoint(conn.address(), conn.port())}: {SUCC}\n")
        return TcpSession(conn, self._out)

    def close(self) -> None:
        self._socket.close()

    def __enter__(self):
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()