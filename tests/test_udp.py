import io
import struct
from ipaddress import IPv4Address

import pytest

from paxnet.trace import FAIL, SUCC, TRACE, yellow
from paxnet.udp import UdpClient, UdpServer

CLIENT_MSG = b"Ciao, sono il client!"
SERVER_MSG = b"Ciao, sono il server!"
LOCALHOST = "127.0.0.1"

_DOT = "\x1b[33m.\x1b[0m"
_LOCAL_TEXT = _DOT.join(f"\x1b[33m{g}\x1b[0m" for g in ("127", "0", "0", "1"))


def test_first_exchange():
    with UdpServer(LOCALHOST, 0, out=io.StringIO()) as server:
        with UdpClient(out=io.StringIO()) as client:
            client.write(CLIENT_MSG, LOCALHOST, server.port())
            request, addr, port = server.read()
            server.write(SERVER_MSG, addr, port)
            reply, reply_addr, reply_port = client.read()

    assert request == CLIENT_MSG
    assert addr == IPv4Address(LOCALHOST)
    assert reply == SERVER_MSG
    assert reply_addr == IPv4Address(LOCALHOST)
    assert reply_port == server.port() or reply_port > 0


def test_reply_comes_from_server_port():
    with UdpServer(LOCALHOST, 0, out=io.StringIO()) as server:
        server_port = server.port()
        with UdpClient(out=io.StringIO()) as client:
            client.write(CLIENT_MSG, LOCALHOST, server_port)
            _, addr, port = server.read()
            server.write(SERVER_MSG, addr, port)
            _, _, reply_port = client.read()
    assert reply_port == server_port


def test_add_accumulates_numbers():
    numbers = [3, 4, 10, 0]
    replies = []
    total = 0
    with UdpServer(LOCALHOST, 0, out=io.StringIO()) as server:
        with UdpClient(out=io.StringIO()) as client:
            for number in numbers:
                client.write(struct.pack("!I", number), LOCALHOST, server.port())
                data, addr, port = server.read()
                (received,) = struct.unpack("!I", data[:4])
                total = (total + received) & 0xFFFFFFFF
                server.write(struct.pack("!I", total), addr, port)
                reply, _, _ = client.read()
                replies.append(struct.unpack("!I", reply[:4])[0])
    assert replies == [3, 7, 17, 17]


def test_server_start_trace():
    out = io.StringIO()
    with UdpServer(LOCALHOST, 0, out=out):
        pass
    assert out.getvalue() == f"{TRACE} Attivazione porta {yellow(0)}: {SUCC}\n"


def test_trace_lines():
    server_out = io.StringIO()
    client_out = io.StringIO()
    with UdpServer(LOCALHOST, 0, out=server_out) as server:
        server_port = server.port()
        with UdpClient(out=client_out) as client:
            client.write(CLIENT_MSG, LOCALHOST, server_port)
            _, addr, port = server.read()
            server.write(SERVER_MSG, addr, port)
            client.read()

    client_text = client_out.getvalue()
    assert (
        f"{TRACE} Scrittura richiesta di \x1b[33m21B\x1b[0m a "
        f"{{addr = [{_LOCAL_TEXT}], port = \x1b[33m{server_port}\x1b[0m}}: {SUCC}\n"
    ) in client_text
    assert (
        f"{TRACE} Lettura risposta di \x1b[33m21B\x1b[0m da "
        f"{{addr = [{_LOCAL_TEXT}], port = \x1b[33m{server_port}\x1b[0m}}: {SUCC}\n"
    ) in client_text
    server_text = server_out.getvalue()
    assert (
        f"{TRACE} Lettura richiesta di \x1b[33m21B\x1b[0m da "
        f"{{addr = [{_LOCAL_TEXT}], port = \x1b[33m{port}\x1b[0m}}: {SUCC}\n"
    ) in server_text
    assert f"{TRACE} Scrittura risposta di \x1b[33m21B\x1b[0m a " in server_text


def test_empty_datagram_reads_as_failure():
    out = io.StringIO()
    with UdpServer(LOCALHOST, 0, out=out) as server:
        with UdpClient(out=io.StringIO()) as client:
            client.write(b"", LOCALHOST, server.port())
            data, _, port = server.read()
    assert data == b""
    assert out.getvalue().endswith(
        f"di \x1b[33m0B\x1b[0m da {{addr = [], port = \x1b[33m{port}\x1b[0m}}: {FAIL}\n"
    )


def test_bind_conflict_raises():
    with UdpServer(LOCALHOST, 0, out=io.StringIO()) as server:
        out = io.StringIO()
        with pytest.raises(OSError):
            UdpServer(LOCALHOST, server.port(), out=out)
    assert out.getvalue().endswith(f"{FAIL}\n")


def test_read_size_must_be_positive():
    with UdpClient(out=io.StringIO()) as client:
        with pytest.raises(ValueError):
            client.read(0)


def test_closed_server_rejects_write():
    server = UdpServer(LOCALHOST, 0, out=io.StringIO())
    server.close()
    with pytest.raises(ValueError):
        server.write(b"x", LOCALHOST, 9)