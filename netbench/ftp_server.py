"""A threaded file-transfer server that serves the current directory."""

from __future__ import annotations

import os
import re
import socket
import sys
import threading

from netbench.ftp_protocol import (
    BUFFER_SIZE,
    CMD_GET,
    CMD_LIST,
    CMD_PUT,
    CMD_QUIT,
    DEFAULT_PORT,
    MAX_CLIENTS,
    MAX_FILENAME,
    RESP_ERROR,
    RESP_NOT_FOUND,
    RESP_OK,
    FtpError,
    list_directory,
    receive_file,
    send_file,
    send_response,
)

MAX_COMMAND = 63


def _atoi(text: str) -> int:
    match = re.match(r"\s*([+-]?\d+)", text)
    return int(match.group(1)) if match else 0


def _split_request(data: bytes) -> tuple[str, str] | None:
    words = data.split(b"\0", 1)[0].decode(errors="replace").split()
    if not words:
        return None
    filename = words[1][: MAX_FILENAME - 1] if len(words) > 1 else ""
    return words[0][:MAX_COMMAND], filename


def _list(conn: socket.socket) -> None:
    try:
        listing = list_directory(".")
    except FtpError:
        send_response(conn, RESP_ERROR, "Cannot list directory")
        return
    send_response(conn, RESP_OK, "File list follows")
    conn.sendall(listing.encode())


def _retrieve(conn: socket.socket, filename: str) -> None:
    if not filename or not os.path.exists(filename):
        send_response(conn, RESP_NOT_FOUND, "File not found")
        return
    send_response(conn, RESP_OK, "Sending file")
    try:
        sent = send_file(conn, filename)
    except FtpError as exc:
        print(exc, file=sys.stderr)
        return
    print(f"Sent {sent} bytes")


def _store(conn: socket.socket, filename: str) -> None:
    send_response(conn, RESP_OK, "Ready to receive")
    try:
        received = receive_file(conn, filename)
    except FtpError as exc:
        print(exc, file=sys.stderr)
        return
    print(f"Received {received} bytes")
    print(f"File {filename} uploaded successfully")


def _session(conn: socket.socket) -> None:
    send_response(conn, RESP_OK, "FTP Server Ready")
    while True:
        try:
            data = conn.recv(BUFFER_SIZE - 1)
        except OSError:
            return
        if not data:
            return
        request = _split_request(data)
        if request is None:
            send_response(conn, RESP_ERROR, "Invalid command")
            continue
        command, filename = request
        print(f"Command: {command}")
        if command == CMD_LIST:
            _list(conn)
        elif command == CMD_GET:
            _retrieve(conn, filename)
        elif command == CMD_PUT:
            _store(conn, filename)
        elif command == CMD_QUIT:
            send_response(conn, RESP_OK, "Goodbye")
            return
        else:
            send_response(conn, RESP_ERROR, "Unknown command")


def handle_client(conn: socket.socket, address: tuple) -> None:
    """Serve one client's commands until it quits or disconnects, then close it."""
    with conn:
        print(f"Client connected from {address[0]}")
        try:
            _session(conn)
        except (FtpError, OSError) as exc:
            print(f"Error: {exc}", file=sys.stderr)
        print("Client disconnected")


def serve(listener: socket.socket) -> None:
    """Handle each accepted client on its own thread; returns when the listener closes."""
    while True:
        try:
            conn, address = listener.accept()
        except OSError as exc:
            if listener.fileno() == -1:
                return
            print(f"accept: {exc}", file=sys.stderr)
            continue
        threading.Thread(target=handle_client, args=(conn, address), daemon=True).start()


def main(argv: list[str] | None = None) -> int:
    """Serve the current directory on the given port (default 8080)."""
    args = sys.argv[1:] if argv is None else argv
    port = _atoi(args[0]) if args else DEFAULT_PORT
    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        listener.bind(("0.0.0.0", port))
        listener.listen(MAX_CLIENTS)
    except (OSError, OverflowError) as exc:
        print(f"bind: {exc}", file=sys.stderr)
        listener.close()
        return 1
    print(f"FTP Server listening on port {port}")
    with listener:
        try:
            serve(listener)
        except KeyboardInterrupt:
            pass
    return 0


if __name__ == "__main__":
    sys.exit(main())