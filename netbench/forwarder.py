"""A TCP port forwarder: relays each accepted connection to another host."""

from __future__ import annotations

import contextlib
import re
import socket
import sys
import threading
from dataclasses import dataclass
from pathlib import Path

BUFFER_SIZE = 4096
BACKLOG = 40


@dataclass(frozen=True)
class ForwardConfig:
    listen_port: int
    forward_host: str
    forward_port: int


def _atoi(text: str) -> int:
    match = re.match(r"\s*([+-]?\d+)", text)
    return int(match.group(1)) if match else 0


def parse_arguments(argv: list[str]) -> ForwardConfig:
    """Read listen_port forward_host [forward_port]; raises ValueError when invalid."""
    if len(argv) < 2:
        raise ValueError(
            "Not enough arguments\n"
            f"Syntax:  {Path(sys.argv[0]).name} listen_port forward_host [forward_port]"
        )
    listen_port = _atoi(argv[0])
    if listen_port < 1:
        raise ValueError("Listen port is invalid")
    forward_port = listen_port
    if len(argv) > 2:
        forward_port = _atoi(argv[2])
        if forward_port < 1:
            raise ValueError("Forwarding port is invalid")
    return ForwardConfig(listen_port, argv[1], forward_port)


def pump(src: socket.socket, dst: socket.socket) -> int:
    """Copy from src to dst until end of stream, then half-close both; return bytes copied."""
    total = 0
    while data := src.recv(BUFFER_SIZE):
        dst.sendall(data)
        total += len(data)
    with contextlib.suppress(OSError):
        src.shutdown(socket.SHUT_RD)
    with contextlib.suppress(OSError):
        dst.shutdown(socket.SHUT_WR)
    return total


def _abort(*socks: socket.socket) -> None:
    for sock in socks:
        with contextlib.suppress(OSError):
            sock.shutdown(socket.SHUT_RDWR)


def _pump_quietly(src: socket.socket, dst: socket.socket) -> None:
    try:
        pump(src, dst)
    except OSError as exc:
        print(f"forward: {exc}", file=sys.stderr)
        _abort(src, dst)


def forward_connection(client: socket.socket, host: str, port: int) -> None:
    """Relay traffic both ways between the client and host:port, then close both."""
    with client:
        upstream = socket.create_connection((host, port))
        with upstream:
            downstream = threading.Thread(target=_pump_quietly, args=(upstream, client), daemon=True)
            downstream.start()
            try:
                pump(client, upstream)
            except OSError:
                _abort(client, upstream)
                raise
            finally:
                downstream.join()


def open_listening_port(port: int) -> socket.socket:
    """Bind a TCP listener on all interfaces."""
    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        listener.bind(("0.0.0.0", port))
        listener.listen(BACKLOG)
    except OSError:
        listener.close()
        raise
    return listener


def _handle(client: socket.socket, config: ForwardConfig) -> None:
    try:
        forward_connection(client, config.forward_host, config.forward_port)
    except OSError as exc:
        print(f"forward: {exc}", file=sys.stderr)


def serve(listener: socket.socket, config: ForwardConfig) -> None:
    """Forward every accepted connection on its own thread; returns when the listener closes."""
    while True:
        try:
            client, _ = listener.accept()
        except OSError:
            if listener.fileno() == -1:
                return
            raise
        threading.Thread(target=_handle, args=(client, config), daemon=True).start()


def main(argv: list[str] | None = None) -> int:
    """Listen on a port and forward connections to another host."""
    args = sys.argv[1:] if argv is None else argv
    try:
        config = parse_arguments(args)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1
    try:
        listener = open_listening_port(config.listen_port)
    except OSError as exc:
        print(f"bind: {exc}", file=sys.stderr)
        return 1
    with listener:
        try:
            serve(listener, config)
        except KeyboardInterrupt:
            pass
        except OSError as exc:
            print(f"accept: {exc}", file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())