# paxnet

Small building blocks for network exercises in plain Python, with no
dependencies outside the standard library.

- `paxnet.tcp` — `TcpServer`, `TcpSession` and `TcpClient`. Every bind,
  listen, accept, connect, read and write prints a coloured trace line.
- `paxnet.udp` — `UdpServer` and `UdpClient` with the same tracing; each
  read returns the datagram together with the sender's address and port.
- `paxnet.sockets` — `TcpSocket`, `UdpSocket` and the `AddressType` enum
  (`NONE`, `IP4`, `IP6`): thin IPv4/IPv6 wrappers over `socket` that take
  `ipaddress` objects or strings.
- `paxnet.trace` — ANSI colour helpers (`red`, `green`, `yellow`, `blue`,
  `purple`), the labels `SUCC`, `FAIL`, `TRACE`, `INFO`, `DEBUG`, `WARN`,
  `ERROR`, `FATAL`, plus `outcome`, `format_address` and `format_endpoint`.
- `paxnet.http_message` — `RequestWriter` and `ResponseWriter` build an
  HTTP/1.1 message in a fixed-size buffer; `RequestReader` and
  `ResponseReader` parse one incrementally.
- `paxnet.heading` — well-known header names, status codes and MIME types;
  lookups over a heading dict (`get_method`, `get_resource`, `get_version`,
  `get_status`, `get_message`, `get_content_type`, `get_content_length`);
  parsers `parse_resource`, `parse_content_type`,
  `parse_content_disposition`, `parse_multipart`, `parse_url_encoded`; and
  the rolling hash `http_hash`.
- `paxnet.array` and `paxnet.ring` — `BoundedArray` and `RingQueue`,
  fixed-capacity containers that raise `CapacityError` when full and
  `IndexError` on a bad position.

## Install

```
pip install .
```

## TCP: one request, one response

```python
import threading
from paxnet.tcp import TcpServer, TcpClient
from paxnet.sockets import AddressType

with TcpServer("127.0.0.1", 0) as server:
    port = server.port()

    def serve():
        with server.accept() as session:
            session.read(1024)
            session.write(b"Ciao, sono il server!")

    thread = threading.Thread(target=serve)
    thread.start()

    with TcpClient(AddressType.IP4) as client:
        client.connect("127.0.0.1", port)
        client.write(b"Ciao, sono il client!")
        print(client.read(1024))

    thread.join()
```

Each step prints a line such as `[TRACE] Scrittura richiesta di 21B: SUCCESSO`
(with ANSI colours) to the text stream passed as `out`, or to standard output
when `out` is not given. Socket errors are raised as `OSError` after the
failure label has been printed.

## UDP

```python
from paxnet.udp import UdpServer, UdpClient

with UdpServer("127.0.0.1", 0) as server, UdpClient() as client:
    client.write(b"ping", "127.0.0.1", server.port())
    data, address, port = server.read(1024)
    server.write(b"pong", address, port)
    print(client.read(1024))  # (b'pong', IPv4Address('127.0.0.1'), <port>)
```

## HTTP messages

```python
from paxnet.http_message import ResponseWriter, RequestReader
from paxnet.heading import get_content_length, parse_resource

writer = ResponseWriter(4096)
writer.start("HTTP/1.1", "200", "OK")
writer.header("Content-Type", "application/json")
writer.content(b'{"x":1}')
print(writer.data)  # b'HTTP/1.1 200 OK\r\nContent-Type: application/json\r\n\r\n{"x":1}'

reader = RequestReader()
reader.feed(b"GET /add?x=1&y=2 HTTP/1.1\r\nContent-Length: 0\r\n\r\n")
heading = reader.heading()
path, params = parse_resource(heading["Resource"])  # '/add', {'x': '1', 'y': '2'}
print(get_content_length(heading))  # 0
```

`MessageWriter.send(session)` and `MessageReader.receive(session)`,
`heading(session)` and `content(length, session)` work with any object that
has `write(data)` and `read(size)`, such as `TcpClient` or `TcpSession`.
Writing or reading parts out of order raises `HttpStateError`; a line that
does not fit in the writer's buffer raises `CapacityError`, while
`content` returns 0 when the data does not fit.

## Containers

```python
from paxnet.ring import RingQueue

queue = RingQueue(8, default=0)
queue.insert_head(5)
queue.create_head()
queue.create_head()
queue.create_head()
print(list(queue))          # [0, 0, 0, 5]
print(queue.remove_tail())  # 5
```

`BoundedArray` offers the same operations plus insertion, creation and
removal at any position.

## What it does not do

paxnet is a library only: it installs no commands. It has no ready-made HTTP
server that serves or stores files, no file transfer protocol and no
chunked transfer decoding; the HTTP pieces build and parse messages and
leave routing and storage to the caller. Query strings and URL-encoded forms
are split on `&` and `=` but not percent-decoded.

## Tests

```
pip install .[test]
pytest
```