import socket
import threading

import pytest

from netbench import forwarder


def _read_all(sock):
    data = b""
    while chunk := sock.recv(1024):
        data += chunk
    return data


def _upper_server():
    server = socket.create_server(("127.0.0.1", 0))

    def run():
        conn, _ = server.accept()
        with conn:
            conn.settimeout(5)
            conn.sendall(_read_all(conn).upper())

    threading.Thread(target=run, daemon=True).start()
    return server, server.getsockname()[1]


def test_forward_port_defaults_to_listen_port():
    config = forwarder.parse_arguments(["8000", "localhost"])
    assert config == forwarder.ForwardConfig(8000, "localhost", 8000)


def test_explicit_forward_port():
    config = forwarder.parse_arguments(["8000", "example.com", "9000"])
    assert config.forward_port == 9000
    assert config.forward_host == "example.com"


@pytest.mark.parametrize(
    "argv",
    [["8000"], [], ["0", "localhost"], ["abc", "localhost"], ["8000", "localhost", "-3"]],
)
def test_invalid_arguments(argv):
    with pytest.raises(ValueError):
        forwarder.parse_arguments(argv)


def test_pump_copies_and_half_closes():
    src_writer, src = socket.socketpair()
    dst, dst_reader = socket.socketpair()
    with src_writer, src, dst, dst_reader:
        dst_reader.settimeout(5)
        src_writer.sendall(b"payload" * 1000)
        src_writer.shutdown(socket.SHUT_WR)
        copied = forwarder.pump(src, dst)
        received = _read_all(dst_reader)
    assert received == b"payload" * 1000
    assert copied == len(received)


def test_forward_connection_relays_both_ways():
    server, port = _upper_server()
    near, far = socket.socketpair()
    replies = []

    def client():
        near.sendall(b"hello")
        near.shutdown(socket.SHUT_WR)
        replies.append(_read_all(near))

    with server, near:
        near.settimeout(5)
        worker = threading.Thread(target=client, daemon=True)
        worker.start()
        forwarder.forward_connection(far, "127.0.0.1", port)
        worker.join(5)
    assert replies == [b"HELLO"]
    assert far.fileno() == -1


def test_forward_connection_fails_without_upstream():
    probe = socket.create_server(("127.0.0.1", 0))
    port = probe.getsockname()[1]
    probe.close()
    near, far = socket.socketpair()
    with near:
        with pytest.raises(OSError):
            forwarder.forward_connection(far, "127.0.0.1", port)
    assert far.fileno() == -1


def test_serve_forwards_accepted_connections():
    server, port = _upper_server()
    listener = forwarder.open_listening_port(0)
    listen_port = listener.getsockname()[1]
    config = forwarder.ForwardConfig(listen_port, "127.0.0.1", port)
    threading.Thread(target=forwarder.serve, args=(listener, config), daemon=True).start()
    with server, socket.create_connection(("127.0.0.1", listen_port), timeout=5) as client:
        client.sendall(b"abc")
        client.shutdown(socket.SHUT_WR)
        assert _read_all(client) == b"ABC"
    listener.close()


def test_main_reports_bad_arguments(capsys):
    assert forwarder.main(["0", "localhost"]) == 1
    assert "Listen port is invalid" in capsys.readouterr().err