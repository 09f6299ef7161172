"""Interactive client for the file-transfer server."""

from __future__ import annotations

import os
import re
import socket
import sys
from pathlib import Path

from netbench.ftp_protocol import (
    BUFFER_SIZE,
    CMD_GET,
    CMD_LIST,
    CMD_PUT,
    CMD_QUIT,
    DEFAULT_PORT,
    MAX_FILENAME,
    RESP_OK,
    SIZE_HEADER,
    FtpError,
    list_directory,
    send_file,
)

MAX_COMMAND = 63

HELP_TEXT = (
    "\nAvailable commands:\n"
    "  ls          - List server files\n"
    "  lls         - List local files\n"
    "  get <file>  - Download file from server\n"
    "  put <file>  - Upload file to server\n"
    "  help        - Show this help\n"
    "  quit        - Exit client\n\n"
)


def _atoi(text: str) -> int:
    match = re.match(r"\s*([+-]?\d+)", text)
    return int(match.group(1)) if match else 0


def print_help() -> None:
    sys.stdout.write(HELP_TEXT)


def list_local_files() -> None:
    """Print the regular files of the current directory."""
    try:
        listing = list_directory(".")
    except FtpError:
        print("Error listing local directory")
        return
    print(f"Local files:\n{listing}", end="")


class FtpClient:
    """A session on a connected control socket; the greeting is read on creation."""

    def __init__(self, sock: socket.socket) -> None:
        self._sock = sock
        self._reader = sock.makefile("rb")
        try:
            self.greeting = self._read_status()
        except FtpError:
            self.greeting = ""

    def __enter__(self) -> "FtpClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self._reader.close()
        self._sock.close()

    def _send(self, command: str) -> None:
        try:
            self._sock.sendall(command.encode()[: BUFFER_SIZE - 1])
        except OSError as exc:
            raise FtpError(f"send: {exc}") from exc

    def _read_status(self) -> str:
        try:
            line = self._reader.readline(BUFFER_SIZE - 1)
        except OSError as exc:
            raise FtpError(f"receive_response: {exc}") from exc
        if not line:
            raise FtpError("connection closed")
        return line.split(b"\0", 1)[0].decode(errors="replace").split("\n", 1)[0]

    def _expect_ok(self, command: str) -> None:
        self._send(command)
        status = self._read_status()
        if not status.startswith(RESP_OK):
            raise FtpError(status)

    def _download(self, filename: str) -> int:
        try:
            header = self._reader.read(SIZE_HEADER.size)
        except OSError as exc:
            raise FtpError(f"receive file size: {exc}") from exc
        if len(header) < SIZE_HEADER.size:
            raise FtpError("connection closed")
        (size,) = SIZE_HEADER.unpack(header)
        try:
            handle = open(filename, "wb")
        except OSError as exc:
            raise FtpError(f"create file: {exc}") from exc
        total = 0
        with handle:
            while total < size:
                try:
                    chunk = self._reader.read1(min(size - total, BUFFER_SIZE))
                except OSError as exc:
                    raise FtpError(f"receive file content: {exc}") from exc
                if not chunk:
                    raise FtpError("connection closed during transfer")
                handle.write(chunk)
                total += len(chunk)
        return total

    def list_remote(self) -> str:
        """Return the server's file listing; raises FtpError with the status on refusal."""
        self._expect_ok(CMD_LIST)
        try:
            data = self._reader.read1(BUFFER_SIZE - 1)
        except OSError as exc:
            raise FtpError(f"receive listing: {exc}") from exc
        return data.split(b"\0", 1)[0].decode(errors="replace")

    def get(self, filename: str) -> int:
        """Download a file into the current directory; return the bytes received."""
        self._expect_ok(f"{CMD_GET} {filename}")
        return self._download(filename)

    def put(self, filename: str) -> int:
        """Upload a local file; return the bytes sent."""
        if not os.path.exists(filename):
            raise FileNotFoundError(f"Local file '{filename}' not found")
        self._expect_ok(f"{CMD_PUT} {filename}")
        return send_file(self._sock, filename)

    def quit(self) -> str:
        """Say goodbye to the server and return its answer."""
        self._send(CMD_QUIT)
        try:
            return self._read_status()
        except FtpError:
            return ""

    def run_command(self, line: str) -> bool:
        """Carry out one typed command; return False when the session should end."""
        words = line.split()
        if not words:
            return True
        command = words[0][:MAX_COMMAND]
        filename = words[1][: MAX_FILENAME - 1] if len(words) > 1 else ""
        try:
            if command == "quit":
                print(self.quit())
                return False
            if command == "help":
                print_help()
            elif command == "lls":
                list_local_files()
            elif command == "ls":
                listing = self.list_remote()
                print(f"Server files:\n{listing}", end="")
            elif command in ("get", "put"):
                if not filename:
                    print(f"Usage: {command} <filename>")
                elif command == "get":
                    print(f"Received {self.get(filename)} bytes")
                    print(f"File '{filename}' downloaded successfully")
                else:
                    print(f"Sent {self.put(filename)} bytes")
                    print(f"File '{filename}' uploaded successfully")
            else:
                print("Unknown command. Type 'help' for available commands.")
        except FileNotFoundError as exc:
            print(exc)
        except (FtpError, OSError) as exc:
            print(f"Error: {exc}")
        return True


def main(argv: list[str] | None = None) -> int:
    """Connect to a server and run commands typed on standard input."""
    args = sys.argv[1:] if argv is None else argv
    if not args:
        print(f"Usage: {Path(sys.argv[0]).name} <server_ip> [port]")
        return 1
    server_ip = args[0]
    port = _atoi(args[1]) if len(args) > 1 else DEFAULT_PORT
    try:
        socket.inet_pton(socket.AF_INET, server_ip)
    except OSError:
        print("Invalid server IP address")
        return 1
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.connect((server_ip, port))
    except (OSError, OverflowError) as exc:
        print(f"connect: {exc}", file=sys.stderr)
        sock.close()
        return 1
    with FtpClient(sock) as client:
        if client.greeting:
            print(client.greeting)
        print("Connected to FTP server. Type 'help' for commands.")
        while True:
            try:
                line = input("ftp> ")
            except EOFError:
                break
            if not client.run_command(line):
                break
    print("Connection closed.")
    return 0


if __name__ == "__main__":
    sys.exit(main())