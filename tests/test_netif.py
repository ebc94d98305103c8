import socket

import pytest

from robsock.netif import NetworkError, Port, parse_host


@pytest.fixture
def server():
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", 0))
    sock.settimeout(2.0)
    yield sock
    sock.close()


def test_parse_host_without_port_uses_default():
    assert parse_host("localhost", 6000) == ("localhost", 6000)


def test_parse_host_with_port_overrides_default():
    assert parse_host("localhost:7001", 6000) == ("localhost", 7001)


def test_parse_host_with_bad_port_keeps_whole_text():
    assert parse_host("localhost:abc", 6000) == ("localhost:abc", 6000)


def test_parse_host_empty_name_before_colon():
    assert parse_host(":7001", 6000) == (":7001", 6000)


def test_parse_host_truncates_long_name():
    host, port = parse_host("a" * 400, 6000)
    assert host == "a" * 255
    assert port == 6000


def test_port_takes_host_and_port_from_remote():
    port = Port(6000, "localhost:7001")
    assert (port.host, port.port) == ("localhost", 7001)
    assert not port.is_open


def test_send_and_receive_round_trip(server):
    server_port = server.getsockname()[1]
    with Port(server_port, "127.0.0.1") as port:
        port.send(b"<Robot/>\0")
        data, client_addr = server.recvfrom(4096)
        assert data == b"<Robot/>\0"

        server.sendto(b"<Reply Status=\"Ok\"/>", client_addr)
        port.set_receive_timeout(2.0)
        assert port.receive() == b"<Reply Status=\"Ok\"/>"
        assert port.last_sender == ("127.0.0.1", server_port)


def test_reply_to_last_sender(server):
    server_port = server.getsockname()[1]
    other = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    other.bind(("127.0.0.1", 0))
    other.settimeout(2.0)
    try:
        with Port(server_port, "127.0.0.1") as port:
            port.send(b"hello")
            _, client_addr = server.recvfrom(4096)
            other.sendto(b"from other", client_addr)
            port.set_receive_timeout(2.0)
            assert port.receive() == b"from other"
            assert port.last_sender == other.getsockname()
            port.remote = port.last_sender
            assert port.remote == other.getsockname()
            port.send(b"answer")
            assert other.recvfrom(4096)[0] == b"answer"
    finally:
        other.close()


def test_receive_timeout_raises(server):
    with Port(server.getsockname()[1], "127.0.0.1") as port:
        port.set_receive_timeout(0.05)
        with pytest.raises(NetworkError):
            port.receive()


def test_non_blocking_receive_without_data_raises(server):
    port = Port(server.getsockname()[1], "127.0.0.1").open(blocking=False)
    try:
        with pytest.raises(NetworkError):
            port.receive()
    finally:
        port.close()


def test_send_before_open_raises():
    with pytest.raises(NetworkError):
        Port(6000, "127.0.0.1").send(b"x")


def test_timeout_before_open_raises():
    with pytest.raises(NetworkError):
        Port(6000, "127.0.0.1").set_receive_timeout(1.0)


def test_send_without_remote_raises():
    with Port(6000, "") as port:
        with pytest.raises(NetworkError):
            port.send(b"x")


def test_unresolvable_host_raises():
    port = Port(6000, "no-such-host.invalid")
    with pytest.raises(NetworkError):
        port.open()
    assert not port.is_open


def test_context_manager_closes_and_close_is_idempotent():
    with Port(6000, "127.0.0.1") as port:
        assert port.is_open
    assert not port.is_open
    port.close()
    assert not port.is_open


def test_open_resolves_host_to_address():
    port = Port(6000, "127.0.0.1").open()
    try:
        assert port.remote == ("127.0.0.1", 6000)
    finally:
        port.close()