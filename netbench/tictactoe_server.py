"""Tic-tac-toe game server: pairs clients and referees their games."""

from __future__ import annotations

import re
import socket
import struct
import sys
import threading
import time
from typing import Sequence

from netbench.tictactoe_board import COUNT_REQUEST, Board

INT = struct.Struct("<i")
MAX_PLAYERS = 252
BACKLOG_LIMIT = 253


class PlayerCounter:
    """Thread-safe count of connected players."""

    def __init__(self, value: int = 0) -> None:
        self._value = value
        self._lock = threading.Lock()

    @property
    def value(self) -> int:
        with self._lock:
            return self._value

    def increment(self) -> int:
        with self._lock:
            self._value += 1
            return self._value

    def decrement(self) -> int:
        with self._lock:
            self._value -= 1
            return self._value


def write_int(conn: socket.socket, value: int) -> None:
    conn.sendall(INT.pack(value))


def read_int(conn: socket.socket) -> int:
    """Read one int; -1 if the peer went away or the read failed."""
    data = b""
    while len(data) < INT.size:
        try:
            chunk = conn.recv(INT.size - len(data))
        except OSError:
            return -1
        if not chunk:
            return -1
        data += chunk
    return INT.unpack(data)[0]


def _write_msg(conn: socket.socket, msg: str) -> None:
    conn.sendall(msg.encode())


def _write_all_msg(conns: Sequence[socket.socket], msg: str) -> None:
    for conn in conns:
        _write_msg(conn, msg)


def _write_all_int(conns: Sequence[socket.socket], value: int) -> None:
    for conn in conns:
        write_int(conn, value)


def _get_player_move(conn: socket.socket) -> int:
    _write_msg(conn, "TRN")
    return read_int(conn)


def _play(conns: Sequence[socket.socket], counter: PlayerCounter) -> int | None:
    board = Board()
    _write_all_msg(conns, "SRT")
    print(board.render(), end="")

    prev_turn, turn, turn_count = 1, 0, 0
    while True:
        if prev_turn != turn:
            _write_msg(conns[(turn + 1) % 2], "WAT")

        while True:
            move = _get_player_move(conns[turn])
            if move == -1:
                break
            print(f"Player {turn} played position {move}")
            if board.check_move(move):
                break
            print("Move was invalid. Let's try this again...")
            _write_msg(conns[turn], "INV")

        if move == -1:
            print("Player disconnected.")
            return None
        if move == COUNT_REQUEST:
            prev_turn = turn
            _write_msg(conns[turn], "CNT")
            write_int(conns[turn], counter.value)
            continue

        board.place(move, turn)
        _write_all_msg(conns, "UPD")
        _write_all_int(conns, turn)
        _write_all_int(conns, move)
        print(board.render(), end="")

        if board.check_win(move):
            _write_msg(conns[turn], "WIN")
            _write_msg(conns[(turn + 1) % 2], "LSE")
            print(f"Player {turn} won.")
            return turn
        if turn_count == 8:
            print("Draw.")
            _write_all_msg(conns, "DRW")
            return None

        prev_turn, turn = turn, (turn + 1) % 2
        turn_count += 1


def run_game(conns: Sequence[socket.socket], counter: PlayerCounter) -> int | None:
    """Referee one game; return the winner's id, or None on a draw or disconnect.

    Both connections are closed and both players removed from the counter.
    """
    print("Game on!")
    winner = None
    try:
        winner = _play(conns, counter)
    except OSError as exc:
        print(f"ERROR writing to client socket: {exc}", file=sys.stderr)
    finally:
        print("Game over.")
        for conn in conns:
            conn.close()
        for _ in conns:
            print(f"Number of players is now {counter.decrement()}.")
    return winner


class GameServer:
    """Accepts players two at a time and runs each game on its own thread."""

    def __init__(self, host: str = "0.0.0.0", port: int = 0,
                 counter: PlayerCounter | None = None) -> None:
        self.counter = PlayerCounter() if counter is None else counter
        self._listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            self._listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            self._listener.bind((host, port))
            self._listener.listen(BACKLOG_LIMIT)
        except OSError:
            self._listener.close()
            raise
        self.address = self._listener.getsockname()

    def __enter__(self) -> "GameServer":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._listener.close()

    def get_clients(self) -> list[socket.socket]:
        """Accept two players, telling each its id; the first is told to hold."""
        conns: list[socket.socket] = []
        try:
            while len(conns) < 2:
                self._listener.listen(max(BACKLOG_LIMIT - self.counter.value, 0))
                conn, _ = self._listener.accept()
                conns.append(conn)
                write_int(conn, len(conns) - 1)
                print(f"Number of players is now {self.counter.increment()}.")
                if len(conns) == 1:
                    _write_msg(conn, "HLD")
        except OSError:
            for conn in conns:
                conn.close()
            raise
        return conns

    def serve_forever(self) -> None:
        """Pair players and start games until the listener is closed."""
        while True:
            if self.counter.value > MAX_PLAYERS:
                time.sleep(0.1)
                continue
            try:
                conns = self.get_clients()
            except OSError:
                if self._listener.fileno() == -1:
                    return
                raise
            threading.Thread(target=run_game, args=(conns, self.counter), daemon=True).start()


def _atoi(text: str) -> int:
    match = re.match(r"\s*([+-]?\d+)", text)
    return int(match.group(1)) if match else 0


def main(argv: list[str] | None = None) -> int:
    """Run the game server on the port given as the only argument."""
    args = sys.argv[1:] if argv is None else argv
    if not args:
        print("ERROR, no port provided", file=sys.stderr)
        return 1
    try:
        server = GameServer("0.0.0.0", _atoi(args[0]))
    except (OSError, OverflowError) as exc:
        print(f"ERROR binding listener socket: {exc}", file=sys.stderr)
        return 1
    with server:
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            pass
        except OSError as exc:
            print(f"ERROR accepting a connection from a client: {exc}", file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())