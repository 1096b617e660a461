import pytest

from utilkit.sockets import Socket, set_read_max_buffer_size
from utilkit.text import Text


@pytest.fixture
def pair():
    server = Socket("127.0.0.1", 0).bind().listen(1)
    client = Socket("127.0.0.1", server.port).connect()
    conn = server.accept()
    yield server, client, conn
    conn.close()
    client.close()
    server.close()


def test_bind_assigns_port():
    with Socket("127.0.0.1", 0) as server:
        server.bind()
        assert server.port > 0


def test_host_may_be_text():
    with Socket(Text("127.0.0.1"), 0) as sock:
        assert sock.ip == "127.0.0.1"


def test_write_then_read(pair):
    _, client, conn = pair
    assert client.write("hello") is True
    received = conn.read()
    assert str(received) == "hello"


def test_write_accepts_text_and_bytes(pair):
    _, client, conn = pair
    client.write(Text("ab"))
    client.write(b"cd")
    collected = ""
    while len(collected) < 4:
        collected += str(conn.read())
    assert collected == "abcd"


def test_accepted_socket_records_peer(pair):
    _, client, conn = pair
    assert conn.ip == "127.0.0.1"
    assert conn.client_address() == (conn.ip, conn.port)


def test_read_returns_none_after_peer_closes(pair):
    _, client, conn = pair
    client.close()
    assert conn.read() is None


def test_read_returns_none_on_timeout(pair):
    _, _, conn = pair
    conn.set_timeout(0.05)
    assert conn.read() is None


def test_read_respects_max_buffer(pair):
    _, client, conn = pair
    client.write("hello")
    set_read_max_buffer_size(4)
    try:
        first = conn.read()
        second = conn.read()
    finally:
        set_read_max_buffer_size(1024)
    assert str(first) == "hell"
    assert str(second) == "o"


def test_invalid_buffer_size_raises():
    with pytest.raises(ValueError):
        set_read_max_buffer_size(0)


def test_closed_socket_raises():
    sock = Socket("127.0.0.1", 0)
    sock.close()
    sock.close()
    with pytest.raises(ValueError):
        sock.read()


def test_connect_refused_raises():
    with Socket("127.0.0.1", 0) as probe:
        probe.bind()
        port = probe.port
    client = Socket("127.0.0.1", port)
    with pytest.raises(OSError):
        client.connect()
    client.close()