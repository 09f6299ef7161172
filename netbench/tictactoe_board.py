"""The 3x3 tic-tac-toe board shared by the game server and client."""

from __future__ import annotations

EMPTY = " "
COUNT_REQUEST = 9
SEPARATOR = "-----------"
MARKS = ("O", "X")


def mark_for(player_id: int) -> str:
    """Player 0 plays 'O'; any other id plays 'X'."""
    return MARKS[bool(player_id)]


def _index(move: int) -> int:
    if not 0 <= move < 9:
        raise ValueError(f"board position must be in 0..8, got {move}")
    return move


class Board:
    """Cells are numbered 0..8, row by row."""

    def __init__(self) -> None:
        self._cells = [EMPTY] * 9

    def __getitem__(self, move: int) -> str:
        return self._cells[_index(move)]

    def check_move(self, move: int) -> bool:
        """True for a free cell, or for the player-count request (9)."""
        if move == COUNT_REQUEST:
            return True
        return 0 <= move < 9 and self._cells[move] == EMPTY

    def place(self, move: int, player_id: int) -> None:
        self._cells[_index(move)] = mark_for(player_id)

    def check_win(self, last_move: int) -> bool:
        """True if the line through the last move is complete."""
        row, col = divmod(_index(last_move), 3)
        cells = self._cells

        def same(a: int, b: int, c: int) -> bool:
            return cells[a] == cells[b] == cells[c]

        if same(row * 3, row * 3 + 1, row * 3 + 2):
            return True
        if same(col, col + 3, col + 6):
            return True
        if last_move % 2 == 0:
            if last_move in (0, 4, 8) and same(0, 4, 8):
                return True
            if last_move in (2, 4, 6) and same(2, 4, 6):
                return True
        return False

    def render(self) -> str:
        rows = (" " + " | ".join(self._cells[start:start + 3]) + " " for start in (0, 3, 6))
        return f"\n{SEPARATOR}\n".join(rows) + "\n"