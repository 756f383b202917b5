"""UDP clients and servers that trace every datagram they send and receive."""

from __future__ import annotations

import sys
from typing import Any, Optional, TextIO, Tuple, Union

from paxnet.sockets import AddressLike, AddressType, IPAddress, UdpSocket, to_address
from paxnet.trace import FAIL, SUCC, TRACE, format_endpoint, outcome, yellow

DEFAULT_PORT = 8000
DEFAULT_READ_SIZE = 1024

Data = Union[bytes, bytearray, memoryview]


class _TracedDatagram:
    """Base for traced datagram endpoints."""

    _WRITE_LABEL = "Scrittura"
    _READ_LABEL = "Lettura"

    def __init__(self, sock: UdpSocket, out: Optional[TextIO]) -> None:
        self._socket = sock
        self._out = out

    @property
    def socket(self) -> UdpSocket:
        return self._socket

    def _emit(self, text: str) -> None:
        stream = self._out if self._out is not None else sys.stdout
        print(text, end="", file=stream, flush=True)

    def _send(self, data: Data, address: AddressLike, port: int) -> int:
        payload = bytes(data)
        target = to_address(address)
        self._emit(
            f"{TRACE} {self._WRITE_LABEL} di {yellow(f'{len(payload)}B')} "
            f"a {format_endpoint(target, port)}: "
        )
        try:
            sent = self._socket.write_to(payload, target, port)
        except OSError:
            self._emit(f"{FAIL}\n")
            raise
        self._emit(f"{outcome(sent == len(payload))}\n")
        return sent

    def _receive(self, size: int) -> Tuple[bytes, IPAddress, int]:
        self._emit(f"{TRACE} {self._READ_LABEL} ")
        try:
            data, address, port = self._socket.read_from(size)
        except OSError:
            self._emit(f"di {yellow('0B')} da {format_endpoint(None, 0)}: {FAIL}\n")
            raise
        shown = address if data else None
        self._emit(
            f"di {yellow(f'{len(data)}B')} da {format_endpoint(shown, port)}: "
            f"{outcome(data)}\n"
        )
        return data, address, port

    def address(self) -> Optional[IPAddress]:
        return self._socket.address()

    def port(self) -> int:
        return self._socket.port()

    def write(self, data: Data, address: AddressLike, port: int) -> int:
        """Send ``data`` to ``address`` and ``port``; returns the bytes sent."""
        return self._send(data, address, port)

    def read(self, size: int = DEFAULT_READ_SIZE) -> Tuple[bytes, IPAddress, int]:
        """Receive one datagram; returns its data, sender address and port."""
        return self._receive(size)

    def close(self) -> None:
        self._socket.close()

    def __enter__(self):
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


class UdpClient(_TracedDatagram):
    """An unbound datagram socket that sends requests and reads responses."""

    _WRITE_LABEL = "Scrittura richiesta"
    _READ_LABEL = "Lettura risposta"

    def __init__(self, kind: AddressType = AddressType.IP4, out: Optional[TextIO] = None) -> None:
        super().__init__(UdpSocket(kind), out)

    def write(self, data: Data, address: AddressLike, port: int) -> int:
        """Send a request to ``address`` and ``port``; returns the bytes sent."""
        return self._send(data, address, port)

    def read(self, size: int = DEFAULT_READ_SIZE) -> Tuple[bytes, IPAddress, int]:
        """Receive a response; returns its data, sender address and port."""
        return self._receive(size)

    def close(self) -> None:
        self._socket.close()

    def __enter__(self):
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


class UdpServer(_TracedDatagram):
    """A datagram socket bound to an address and port."""

    _WRITE_LABEL = "Scrittura risposta"
    _READ_LABEL = "Lettura richiesta"

    def __init__(
        self,
        address: AddressLike = "0.0.0.0",
        port: int = DEFAULT_PORT,
        out: Optional[TextIO] = None,
    ) -> None:
        target = to_address(address)
        super().__init__(UdpSocket(AddressType.of(target)), out)
        self._emit(f"{TRACE} Attivazione porta {yellow(port)}: ")
        try:
            self._socket.bind(target, port)
        except (OSError, ValueError):
            self._emit(f"{FAIL}\n")
            self._socket.close()
            raise
        self._emit(f"{SUCC}\n")

    def port(self) -> int:
        """The port the server is bound to."""
        return self._socket.port()

    def write(self, data: Data, address: AddressLike, port: int) -> int:
        """Send a response to ``address`` and ``port``; returns the bytes sent."""
        return self._send(data, address, port)

    def read(self, size: int = DEFAULT_READ_SIZE) -> Tuple[bytes, IPAddress, int]:
        """Receive a request; returns its data, sender address and port."""
        return self._receive(size)

    def close(self) -> None:
        self._socket.close()

    def __enter__(self):
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()