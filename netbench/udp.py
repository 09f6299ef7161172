"""A one-shot UDP greeting sender and receiver."""

from __future__ import annotations

import re
import socket
import sys
from pathlib import Path

HOST = "127.0.0.1"
PAYLOAD_SIZE = 1024
GREETING = "Hello Server\n"


def _atoi(text: str) -> int:
    match = re.match(r"\s*([+-]?\d+)", text)
    return int(match.group(1)) if match else 0


def send_greeting(port: int, host: str = HOST) -> bytes:
    """Send the greeting in a fixed-size, NUL-padded datagram and return it."""
    payload = GREETING.encode().ljust(PAYLOAD_SIZE, b"\0")
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        sock.sendto(payload, (host, port))
    return payload


def receive_one(sock: socket.socket) -> tuple[str, tuple]:
    """Receive one datagram; return its text up to the first NUL and the sender."""
    data, address = sock.recvfrom(PAYLOAD_SIZE)
    return data.split(b"\0", 1)[0].decode(errors="replace"), address


def _port_argument(argv: list[str] | None) -> int | None:
    args = sys.argv[1:] if argv is None else argv
    if len(args) != 1:
        print(f"Usage: {Path(sys.argv[0]).name} <port>")
        return None
    return _atoi(args[0])


def server_main(argv: list[str] | None = None) -> int:
    """Wait for one datagram on the given port and print it."""
    port = _port_argument(argv)
    if port is None:
        return 0
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            sock.bind((HOST, port))
            text, _ = receive_one(sock)
    except (OSError, OverflowError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print(f"[+]Data Received: {text}", end="")
    return 0


def client_main(argv: list[str] | None = None) -> int:
    """Send the greeting to the given port on the local host."""
    port = _port_argument(argv)
    if port is None:
        return 0
    try:
        send_greeting(port)
    except (OSError, OverflowError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print(f"[+]Data Send: {GREETING}", end="")
    return 0


if __name__ == "__main__":
    sys.exit(server_main())