"""TCP and UDP sockets addressed by IP address objects and port numbers."""

from __future__ import annotations

import socket
from enum import Enum
from ipaddress import IPv4Address, IPv6Address, ip_address
from typing import Any, Optional, Tuple, Union

IPAddress = Union[IPv4Address, IPv6Address]
AddressLike = Union[IPv4Address, IPv6Address, str]
BytesLike = Union[bytes, bytearray, memoryview]


class AddressType(Enum):
    """Address family of a socket or address."""

    NONE = 0
    IP4 = 1
    IP6 = 2

    @property
    def family(self) -> int:
        if self is AddressType.IP4:
            return socket.AF_INET
        if self is AddressType.IP6:
            return socket.AF_INET6
        raise ValueError("address type NONE has no socket family")

    @classmethod
    def of(cls, address: Optional[AddressLike]) -> "AddressType":
        """Return the type of ``address``; ``None`` gives NONE."""
        if address is None:
            return cls.NONE
        version = to_address(address).version
        return cls.IP4 if version == 4 else cls.IP6


def to_address(value: AddressLike) -> IPAddress:
    """Convert a string or address object into an address object."""
    if isinstance(value, (IPv4Address, IPv6Address)):
        return value
    return ip_address(value)


def _unspecified(kind: AddressType) -> IPAddress:
    return IPv4Address(0) if kind is AddressType.IP4 else IPv6Address(0)


def _sockaddr(address: IPAddress, port: int) -> tuple:
    if address.version == 4:
        return (str(address), port)
    return (str(address), port, 0, 0)


def _from_sockaddr(sockaddr: Any) -> Tuple[IPAddress, int]:
    host = str(sockaddr[0]).split("%", 1)[0]
    return ip_address(host), int(sockaddr[1])


class _Socket:
    """Shared state and helpers of the stream and datagram sockets."""

    _kind: AddressType
    _sock: Optional[socket.socket]
    _address: Optional[IPAddress]
    _port: int

    def _open(self, kind: AddressType, sock_type: int) -> None:
        kind = AddressType(kind)
        if kind is AddressType.NONE:
            raise ValueError("a socket needs an IPv4 or IPv6 address type")
        self._kind = kind
        self._sock = socket.socket(kind.family, sock_type)
        self._address = _unspecified(kind)
        self._port = 0

    @property
    def kind(self) -> AddressType:
        return self._kind

    @property
    def closed(self) -> bool:
        return self._sock is None

    def _handle(self) -> socket.socket:
        if self._sock is None:
            raise ValueError("operation on a closed socket")
        return self._sock

    def _close(self) -> None:
        if self._sock is not None:
            self._sock.close()
        self._sock = None
        self._address = None
        self._port = 0

    def _bind(self, address: AddressLike, port: int) -> None:
        target = to_address(address)
        if AddressType.of(target) is not self._kind:
            raise ValueError(f"cannot bind a {self._kind.name} socket to {target}")
        handle = self._handle()
        handle.bind(_sockaddr(target, port))
        self._address, self._port = _from_sockaddr(handle.getsockname())

    def __repr__(self) -> str:
        state = "closed" if self.closed else f"{self._address}:{self._port}"
        return f"{type(self).__name__}({self._kind.name}, {state})"


class TcpSocket(_Socket):
    """A stream socket."""

    def __init__(self, kind: AddressType) -> None:
        self._open(kind, socket.SOCK_STREAM)

    @classmethod
    def _adopt(
        cls, kind: AddressType, sock: socket.socket, address: IPAddress, port: int
    ) -> "TcpSocket":
        result = cls.__new__(cls)
        result._kind = kind
        result._sock = sock
        result._address = address
        result._port = port
        return result

    def close(self) -> None:
        """Close the socket; closing twice is harmless."""
        self._close()

    def address(self) -> Optional[IPAddress]:
        """The address last bound, connected or accepted from; None once closed."""
        return self._address

    def port(self) -> int:
        """The port that goes with :meth:`address`; 0 once closed."""
        return self._port

    def bind(self, address: AddressLike, port: int) -> None:
        """Bind to ``address`` and ``port``; the address must match the socket type."""
        self._bind(address, port)

    def listen(self) -> None:
        self._handle().listen(socket.SOMAXCONN)

    def connect(self, address: AddressLike, port: int) -> None:
        """Connect to a remote ``address`` and ``port``."""
        target = to_address(address)
        self._handle().connect(_sockaddr(target, port))
        self._address, self._port = target, port

    def accept(self) -> "TcpSocket":
        """Wait for a connection and return a socket for it, addressed by the peer."""
        conn, sockaddr = self._handle().accept()
        address, port = _from_sockaddr(sockaddr)
        return TcpSocket._adopt(self._kind, conn, address, port)

    def write(self, data: BytesLike) -> int:
        """Send all of ``data``; returns the number of bytes sent."""
        handle = self._handle()
        view = memoryview(bytes(data))
        total = 0
        while total < len(view):
            sent = handle.send(view[total:])
            if sent <= 0:
                break
            total += sent
        return total

    def read(self, size: int) -> bytes:
        """Receive up to ``size`` bytes; empty when the peer has closed."""
        if size <= 0:
            raise ValueError(f"size must be positive, got {size}")
        return self._handle().recv(size)

    def __enter__(self) -> "TcpSocket":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


class UdpSocket(_Socket):
    """A datagram socket."""

    def __init__(self, kind: AddressType) -> None:
        self._open(kind, socket.SOCK_DGRAM)

    def close(self) -> None:
        """Close the socket; closing twice is harmless."""
        self._close()

    def address(self) -> Optional[IPAddress]:
        """The address last bound; None once closed."""
        return self._address

    def port(self) -> int:
        """The port that goes with :meth:`address`; 0 once closed."""
        return self._port

    def bind(self, address: AddressLike, port: int) -> None:
        """Bind to ``address`` and ``port``; the address must match the socket type."""
        self._bind(address, port)

    def write_to(self, data: BytesLike, address: AddressLike, port: int) -> int:
        """Send ``data`` to ``address`` and ``port``; returns the number of bytes sent."""
        target = to_address(address)
        handle = self._handle()
        payload = bytes(data)
        return handle.sendto(payload, _sockaddr(target, port))

    def read_from(self, size: int) -> Tuple[bytes, IPAddress, int]:
        """Receive one datagram of at most ``size`` bytes with its sender."""
        if size <= 0:
            raise ValueError(f"size must be positive, got {size}")
        data, sockaddr = self._handle().recvfrom(size)
        address, port = _from_sockaddr(sockaddr)
        return data, address, port

    def __enter__(self) -> "UdpSocket":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()