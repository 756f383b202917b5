"""Coloured trace output: ANSI colour helpers, outcome labels and address text."""

from __future__ import annotations

import struct
from ipaddress import IPv4Address, IPv6Address, ip_address
from typing import Optional, Union

RESET = "\x1b[0m"

AddressLike = Union[IPv4Address, IPv6Address, str, bytes]


def _paint(code: int, text: object) -> str:
    return f"\x1b[{code}m{text}{RESET}"


def red(text: object) -> str:
    return _paint(31, text)


def green(text: object) -> str:
    return _paint(32, text)


def yellow(text: object) -> str:
    return _paint(33, text)


def blue(text: object) -> str:
    return _paint(34, text)


def purple(text: object) -> str:
    return _paint(35, text)


SUCC = green("SUCCESSO")
FAIL = red("FALLIMENTO")

FATAL = "[" + purple("FATAL") + "]"
ERROR = "[" + red("ERROR") + "]"
WARN = "[" + yellow("WARN") + "]"
INFO = "[" + blue("INFO") + "]"
DEBUG = "[" + green("DEBUG") + "]"
TRACE = "[" + purple("TRACE") + "]"


def outcome(state: object) -> str:
    """Return the success label for a truthy ``state``, the failure label otherwise."""
    return SUCC if state else FAIL


def format_address(address: Optional[AddressLike]) -> str:
    """Render an address group by group, each group and separator in yellow.

    IPv4 groups are decimal bytes joined by dots; IPv6 groups are the eight
    16-bit words in lower-case hexadecimal joined by colons. ``None`` gives
    an empty string.
    """
    if address is None:
        return ""
    if isinstance(address, (str, bytes)):
        address = ip_address(address)
    if isinstance(address, IPv4Address):
        groups = [str(byte) for byte in address.packed]
        separator = "."
    elif isinstance(address, IPv6Address):
        groups = [format(word, "x") for word in struct.unpack("!8H", address.packed)]
        separator = ":"
    else:
        raise TypeError(f"not an IP address: {address!r}")
    return yellow(separator).join(yellow(group) for group in groups)


def format_endpoint(address: Optional[AddressLike], port: Optional[int]) -> str:
    """Render ``{addr = [...], port = N}``; the port part is left out when ``port`` is None."""
    text = "{addr = [" + format_address(address) + "]"
    if port is not None:
        text += ", port = " + yellow(port)
    return text + "}"