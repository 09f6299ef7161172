"""Terminal client for the tic-tac-toe game server."""

from __future__ import annotations

import re
import socket
import struct
import sys
from typing import Callable

from netbench.tictactoe_board import Board, mark_for

INT = struct.Struct("<i")
MESSAGE_SIZE = 3


class ServerGone(Exception):
    """Raised when the server shuts down, misbehaves, or the opponent leaves."""


def _recv_exact(sock: socket.socket, size: int, what: str) -> bytes:
    data = b""
    while len(data) < size:
        try:
            chunk = sock.recv(size - len(data))
        except OSError as exc:
            raise ServerGone(f"ERROR reading {what} from server socket: {exc}") from exc
        if not chunk:
            raise ServerGone(f"ERROR reading {what} from server socket.")
        data += chunk
    return data


def recv_msg(sock: socket.socket) -> str:
    """Read one three-letter message."""
    return _recv_exact(sock, MESSAGE_SIZE, "message").decode(errors="replace")


def recv_int(sock: socket.socket) -> int:
    return INT.unpack(_recv_exact(sock, INT.size, "int"))[0]


def read_move(input_func: Callable[[str], str] = input) -> int:
    """Prompt until the first character typed is a digit; return it."""
    while True:
        line = input_func("Enter 0-8 to make a move, or 9 for number of active players: ")
        if line[:1].isdigit() and line[:1] in "0123456789":
            print()
            return int(line[0])
        print("\nInvalid input. Try again.")


def _send_int(sock: socket.socket, value: int) -> None:
    try:
        sock.sendall(INT.pack(value))
    except OSError as exc:
        raise ServerGone(f"ERROR writing int to server socket: {exc}") from exc


def play(sock: socket.socket, input_func: Callable[[str], str] = input) -> str:
    """Play one game; return the final message: 'WIN', 'LSE' or 'DRW'."""
    player_id = recv_int(sock)
    board = Board()
    print("Tic-Tac-Toe\n------------")

    while (msg := recv_msg(sock)) != "SRT":
        if msg == "HLD":
            print("Waiting for a second player...")

    print("Game on!")
    print(f"You are {mark_for(player_id)}'s")
    print(board.render(), end="")

    while True:
        msg = recv_msg(sock)
        if msg == "TRN":
            print("Your move...")
            _send_int(sock, read_move(input_func))
        elif msg == "INV":
            print("That position has already been played. Try again.")
        elif msg == "CNT":
            print(f"There are currently {recv_int(sock)} active players.")
        elif msg == "UPD":
            mover = recv_int(sock)
            move = recv_int(sock)
            try:
                board.place(move, mover)
            except ValueError as exc:
                raise ServerGone(str(exc)) from exc
            print(board.render(), end="")
        elif msg == "WAT":
            print("Waiting for other players move...")
        elif msg == "WIN":
            print("You win!")
            return msg
        elif msg == "LSE":
            print("You lost.")
            return msg
        elif msg == "DRW":
            print("Draw.")
            return msg
        else:
            raise ServerGone("Unknown message.")


def _atoi(text: str) -> int:
    match = re.match(r"\s*([+-]?\d+)", text)
    return int(match.group(1)) if match else 0


def _report(exc: Exception) -> None:
    print(exc, file=sys.stderr)
    print("Either the server shut down or the other player disconnected.\nGame over.")


def main(argv: list[str] | None = None) -> int:
    """Connect to hostname:port and play one game."""
    args = sys.argv[1:] if argv is None else argv
    if len(args) < 2:
        print("usage: tictactoe-client hostname port", file=sys.stderr)
        return 0
    try:
        sock = socket.create_connection((args[0], _atoi(args[1])))
    except socket.gaierror:
        print("ERROR, no such host", file=sys.stderr)
        return 0
    except (OSError, OverflowError) as exc:
        _report(ServerGone(f"ERROR connecting to server: {exc}"))
        return 0
    with sock:
        try:
            play(sock)
        except (ServerGone, EOFError) as exc:
            _report(exc)
            return 0
        except KeyboardInterrupt:
            return 0
    print("Game over.")
    return 0


if __name__ == "__main__":
    sys.exit(main())