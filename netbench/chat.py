"""A broadcast chat server and its interactive client."""

from __future__ import annotations

import argparse
import select
import socket
import sys
import threading
from typing import Callable, TextIO

HOST = "127.0.0.1"
PORT = 8888
MAX_CLIENTS = 10
BUFFER_SIZE = 1024
BACKLOG = 3


class ChatServer:
    """Relays every message a client sends to all other connected clients."""

    def __init__(
        self,
        host: str = "0.0.0.0",
        port: int = PORT,
        max_clients: int = MAX_CLIENTS,
        log: Callable[[str], object] = print,
    ) -> None:
        self.log = log
        self._listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            self._listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            self._listener.bind((host, port))
            self._listener.listen(BACKLOG)
        except OSError:
            self._listener.close()
            raise
        self.address = self._listener.getsockname()
        self.clients: list[socket.socket | None] = [None] * max_clients
        self._wake_reader, self._wake_writer = socket.socketpair()
        self._running = False

    @property
    def client_count(self) -> int:
        return sum(client is not None for client in self.clients)

    def serve_forever(self) -> None:
        """Accept clients and relay messages until shutdown() is called."""
        self._running = True
        try:
            while self._running:
                watched = [self._listener, self._wake_reader]
                watched.extend(client for client in self.clients if client is not None)
                readable, _, _ = select.select(watched, [], [])
                if self._wake_reader in readable:
                    break
                if self._listener in readable:
                    self._accept()
                for index, client in enumerate(self.clients):
                    if client is not None and client in readable:
                        self._relay(index, client)
        finally:
            self._close_all()

    def shutdown(self) -> None:
        """Stop a running serve_forever loop."""
        self._running = False
        try:
            self._wake_writer.send(b"x")
        except OSError:
            pass

    def _accept(self) -> None:
        conn, _ = self._listener.accept()
        for index, client in enumerate(self.clients):
            if client is None:
                self.clients[index] = conn
                self.log("New client connected")
                return
        conn.close()

    def _relay(self, index: int, client: socket.socket) -> None:
        try:
            data = client.recv(BUFFER_SIZE)
        except OSError:
            data = b""
        if not data:
            client.close()
            self.clients[index] = None
            self.log("Client disconnected")
            return
        payload = data.split(b"\0", 1)[0]
        for other_index, other in enumerate(self.clients):
            if other is not None and other_index != index:
                try:
                    other.sendall(payload)
                except OSError:
                    pass

    def _close_all(self) -> None:
        for index, client in enumerate(self.clients):
            if client is not None:
                client.close()
                self.clients[index] = None
        for sock in (self._listener, self._wake_reader, self._wake_writer):
            sock.close()


def receive_messages(sock: socket.socket, out: TextIO) -> None:
    """Print everything received on the socket until the peer goes away."""
    while True:
        try:
            data = sock.recv(BUFFER_SIZE)
        except OSError:
            return
        if not data:
            return
        text = data.split(b"\0", 1)[0].decode(errors="replace")
        out.write(f"Received: {text}")
        out.flush()


def run_client(host: str = HOST, port: int = PORT) -> int:
    """Connect, print incoming messages and send each line typed."""
    sock = socket.create_connection((host, port))
    try:
        print("Connected to server")
        reader = threading.Thread(target=receive_messages, args=(sock, sys.stdout), daemon=True)
        reader.start()
        while True:
            try:
                line = input("Enter message: ")
            except EOFError:
                break
            sock.sendall((line + "\n").encode())
    finally:
        try:
            sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass
        sock.close()
    return 0


def _parser(description: str, host: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("--host", default=host)
    parser.add_argument("--port", type=int, default=PORT)
    return parser


def server_main(argv: list[str] | None = None) -> int:
    """Run the chat server."""
    args = _parser("Chat server", "0.0.0.0").parse_args(argv)
    try:
        server = ChatServer(args.host, args.port)
    except OSError as exc:
        print(f"Bind failed: {exc}", file=sys.stderr)
        return 1
    print(f"Server listening on port {args.port}...")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        pass
    return 0


def client_main(argv: list[str] | None = None) -> int:
    """Run the interactive chat client."""
    args = _parser("Chat client", HOST).parse_args(argv)
    try:
        return run_client(args.host, args.port)
    except OSError as exc:
        print(f"Connection failed: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 0


if __name__ == "__main__":
    sys.exit(server_main())