from ipaddress import IPv4Address, IPv6Address

import pytest

from paxnet.sockets import AddressType, TcpSocket, UdpSocket, to_address

LOCAL = IPv4Address("127.0.0.1")
CLIENT_MSG = b"Ciao, sono il client!"
SERVER_MSG = b"Ciao, sono il server!"


def test_address_type_of():
    assert AddressType.of("127.0.0.1") is AddressType.IP4
    assert AddressType.of("::1") is AddressType.IP6
    assert AddressType.of(None) is AddressType.NONE


def test_to_address_converts_and_rejects():
    assert to_address("::1") == IPv6Address("::1")
    assert to_address(LOCAL) is LOCAL
    with pytest.raises(ValueError):
        to_address("nowhere")


def test_none_kind_is_rejected():
    with pytest.raises(ValueError):
        TcpSocket(AddressType.NONE)
    with pytest.raises(ValueError):
        UdpSocket(AddressType.NONE)


def test_fresh_socket_has_unspecified_address():
    with TcpSocket(AddressType.IP4) as sock:
        assert sock.address() == IPv4Address("0.0.0.0")
        assert sock.port() == 0


def test_bind_rejects_other_family():
    with TcpSocket(AddressType.IP4) as sock:
        with pytest.raises(ValueError):
            sock.bind("::1", 0)


def test_close_resets_and_blocks_use():
    sock = UdpSocket(AddressType.IP4)
    sock.close()
    sock.close()
    assert sock.address() is None
    assert sock.port() == 0
    with pytest.raises(ValueError):
        sock.read_from(16)


def test_context_manager_closes():
    with TcpSocket(AddressType.IP4) as sock:
        pass
    assert sock.closed is True


def test_read_size_must_be_positive():
    with TcpSocket(AddressType.IP4) as sock:
        with pytest.raises(ValueError):
            sock.read(0)


def test_tcp_round_trip():
    with TcpSocket(AddressType.IP4) as server:
        server.bind(LOCAL, 0)
        server.listen()
        assert server.address() == LOCAL
        assert server.port() > 0
        with TcpSocket(AddressType.IP4) as client:
            client.connect("127.0.0.1", server.port())
            assert client.address() == LOCAL
            assert client.port() == server.port()
            with server.accept() as session:
                assert session.address() == LOCAL
                assert client.write(CLIENT_MSG) == len(CLIENT_MSG)
                assert session.read(1024) == CLIENT_MSG
                assert session.write(SERVER_MSG) == len(SERVER_MSG)
                assert client.read(1024) == SERVER_MSG
            assert client.read(1024) == b""


def test_udp_round_trip():
    with UdpSocket(AddressType.IP4) as server, UdpSocket(AddressType.IP4) as client:
        server.bind(LOCAL, 0)
        assert client.write_to(CLIENT_MSG, LOCAL, server.port()) == len(CLIENT_MSG)
        data, address, port = server.read_from(1024)
        assert data == CLIENT_MSG
        assert address == LOCAL
        assert server.write_to(SERVER_MSG, address, port) == len(SERVER_MSG)
        reply, reply_address, reply_port = client.read_from(1024)
        assert reply == SERVER_MSG
        assert reply_address == LOCAL
        assert reply_port == server.port()