"""Wire protocol shared by the file-transfer server and client."""

from __future__ import annotations

import os
import socket
import struct

DEFAULT_PORT = 8080
BUFFER_SIZE = 4096
MAX_FILENAME = 256
MAX_CLIENTS = 10

CMD_LIST = "LIST"
CMD_GET = "RETR"
CMD_PUT = "STOR"
CMD_QUIT = "QUIT"

RESP_OK = "200"
RESP_ERROR = "500"
RESP_NOT_FOUND = "404"

SIZE_HEADER = struct.Struct("<q")


class FtpError(Exception):
    """Raised when a transfer or exchange on the control connection fails."""


def send_response(sock: socket.socket, code: str, message: str) -> None:
    """Send a status line of the form '<code> <message>\\n'."""
    response = f"{code} {message}\n".encode()[: BUFFER_SIZE - 1]
    try:
        sock.sendall(response)
    except OSError as exc:
        raise FtpError(f"send_response: {exc}") from exc


def receive_response(sock: socket.socket) -> str:
    """Receive one read's worth of data and return it up to the first newline."""
    try:
        data = sock.recv(BUFFER_SIZE - 1)
    except OSError as exc:
        raise FtpError(f"receive_response: {exc}") from exc
    if not data:
        raise FtpError("connection closed")
    text = data.split(b"\0", 1)[0].decode(errors="replace")
    return text.split("\n", 1)[0]


def _recv_exact(sock: socket.socket, size: int) -> bytes:
    data = b""
    while len(data) < size:
        chunk = sock.recv(size - len(data))
        if not chunk:
            raise FtpError("connection closed")
        data += chunk
    return data


def send_file(sock: socket.socket, path: str | os.PathLike[str]) -> int:
    """Send the file's size then its contents; return the number of bytes sent.

    If the file cannot be opened a 404 response is sent and FtpError raised.
    """
    try:
        handle = open(path, "rb")
    except OSError as exc:
        send_response(sock, RESP_NOT_FOUND, "File not found")
        raise FtpError(f"cannot open {os.fspath(path)}: {exc}") from exc
    total = 0
    with handle:
        try:
            sock.sendall(SIZE_HEADER.pack(os.fstat(handle.fileno()).st_size))
            while chunk := handle.read(BUFFER_SIZE):
                sock.sendall(chunk)
                total += len(chunk)
        except OSError as exc:
            raise FtpError(f"send file: {exc}") from exc
    return total


def receive_file(sock: socket.socket, path: str | os.PathLike[str]) -> int:
    """Receive a size-prefixed file into path; return the number of bytes written."""
    try:
        (size,) = SIZE_HEADER.unpack(_recv_exact(sock, SIZE_HEADER.size))
    except OSError as exc:
        raise FtpError(f"receive file size: {exc}") from exc
    try:
        handle = open(path, "wb")
    except OSError as exc:
        raise FtpError(f"create file: {exc}") from exc
    total = 0
    with handle:
        while total < size:
            try:
                chunk = sock.recv(min(size - total, BUFFER_SIZE))
            except OSError as exc:
                raise FtpError(f"receive file content: {exc}") from exc
            if not chunk:
                raise FtpError("connection closed during transfer")
            handle.write(chunk)
            total += len(chunk)
    return total


def _is_regular(entry: os.DirEntry) -> bool:
    try:
        return entry.is_file()
    except OSError:
        return False


def list_directory(directory: str | os.PathLike[str] = ".") -> str:
    """List visible regular files, one per line, within one buffer's worth of text."""
    try:
        with os.scandir(directory) as entries:
            names = sorted(
                entry.name for entry in entries
                if not entry.name.startswith(".") and _is_regular(entry)
            )
    except OSError as exc:
        raise FtpError(f"cannot list directory: {exc}") from exc
    lines: list[str] = []
    used = 0
    for name in names:
        line = f"{name}\n"
        width = len(line.encode())
        if used + width >= BUFFER_SIZE:
            break
        lines.append(line)
        used += width
    return "".join(lines)