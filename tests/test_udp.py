import socket
import threading
import time

from netbench.udp import GREETING, PAYLOAD_SIZE, client_main, receive_one, send_greeting, server_main


def _receiver():
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", 0))
    sock.settimeout(5)
    return sock


def test_send_greeting_pads_to_payload_size():
    with _receiver() as sock:
        payload = send_greeting(sock.getsockname()[1])
        data, _ = sock.recvfrom(4096)
    assert len(payload) == PAYLOAD_SIZE
    assert data == payload
    assert data.startswith(GREETING.encode())


def test_receive_one_strips_padding():
    with _receiver() as sock:
        send_greeting(sock.getsockname()[1], "127.0.0.1")
        text, address = receive_one(sock)
    assert text == "Hello Server\n"
    assert address[0] == "127.0.0.1"


def test_client_main_sends_and_reports(capsys):
    with _receiver() as sock:
        assert client_main([str(sock.getsockname()[1])]) == 0
        text, _ = receive_one(sock)
    assert text == GREETING
    assert capsys.readouterr().out == "[+]Data Send: Hello Server\n"


def test_server_main_prints_received(capsys):
    probe = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    probe.bind(("127.0.0.1", 0))
    port = probe.getsockname()[1]
    probe.close()
    results = []
    thread = threading.Thread(target=lambda: results.append(server_main([str(port)])), daemon=True)
    thread.start()
    deadline = time.monotonic() + 5
    while thread.is_alive() and time.monotonic() < deadline:
        send_greeting(port)
        thread.join(0.05)
    assert results == [0]
    assert "[+]Data Received: Hello Server\n" in capsys.readouterr().out


def test_wrong_argument_count_prints_usage(capsys):
    assert server_main([]) == 0
    assert client_main(["1", "2"]) == 0
    out = capsys.readouterr().out
    assert out.count("Usage:") == 2
    assert "<port>" in out