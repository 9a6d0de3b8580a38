"""
Game basics: players, board representation, terminal detection, validity.
Notes:
- A board is a tuple of 3 rows, each a tuple of 3 cells: None, Player.X or Player.O.
- Squares are addressed as (column, row), both 0-2, so a cell is board[row][column].
- Boards are never mutated; placing a mark returns a new board.
"""
from __future__ import annotations

from enum import Enum
from typing import List, Optional, Tuple


class Player(str, Enum):
    X = "X"
    O = "O"

    def switch(self) -> "Player":
        return Player.O if self is Player.X else Player.X


Cell = Optional[Player]
Row = Tuple[Cell, Cell, Cell]
Board = Tuple[Row, Row, Row]
Square = Tuple[int, int]

COLUMN_LETTERS = "ABC"

# Flat indices (row * 3 + column). Diagonals first, then row i / column i pairs.
WIN_PATTERNS = [
    [0, 4, 8], [6, 4, 2],
    [0, 1, 2], [0, 3, 6],
    [3, 4, 5], [1, 4, 7],
    [6, 7, 8], [2, 5, 8],
]


class GameStatus(Enum):
    WON = "won"
    DREW = "drew"
    LOST = "lost"
    ONGOING = "ongoing"

    @property
    def is_terminal(self) -> bool:
        return self is not GameStatus.ONGOING


def empty_board() -> Board:
    return ((None, None, None), (None, None, None), (None, None, None))


def flatten(board: Board) -> List[Cell]:
    return [cell for row in board for cell in row]


def get_empty_squares(board: Board) -> List[Square]:
    """Empty squares in row-major order, as (column, row) pairs."""
    return [(c, r) for r, row in enumerate(board) for c, cell in enumerate(row) if cell is None]


def place(board: Board, square: Square, player: Player) -> Board:
    c, r = square
    rows = [list(row) for row in board]
    rows[r][c] = player
    return tuple(tuple(row) for row in rows)  # type: ignore[return-value]


def get_winner(board: Board) -> Cell:
    """Owner of the first completed line in WIN_PATTERNS order, or None."""
    b = flatten(board)
    for a, m, z in WIN_PATTERNS:
        v = b[a]
        if v is not None and v == b[m] and v == b[z]:
            return v
    return None


def check_status(board: Board, player: Player) -> GameStatus:
    """Terminal status of ``board`` from ``player``'s point of view."""
    winner = get_winner(board)
    if winner is not None:
        return GameStatus.WON if winner == player else GameStatus.LOST
    if any(cell is None for row in board for cell in row):
        return GameStatus.ONGOING
    return GameStatus.DREW


def square_annotation(square: Square) -> str:
    c, r = square
    return f"{COLUMN_LETTERS[c]}{r + 1}"


def get_piece_counts(board: Board) -> Tuple[int, int]:
    b = flatten(board)
    return b.count(Player.X), b.count(Player.O)


def is_valid_state(board: Board) -> bool:
    """True when ``board`` can arise from legal play with X moving first."""
    x_count, o_count = get_piece_counts(board)
    if not (x_count == o_count or x_count == o_count + 1):
        return False
    b = flatten(board)

    def count_wins(p: Player) -> int:
        return sum(1 for pat in WIN_PATTERNS if all(b[i] == p for i in pat))

    x_wins, o_wins = count_wins(Player.X), count_wins(Player.O)
    # no double winners
    if x_wins > 0 and o_wins > 0:
        return False
    if x_wins and x_count != o_count + 1:
        return False
    if o_wins and x_count != o_count:
        return False
    return True


def current_player(board: Board) -> Player:
    x, o = get_piece_counts(board)
    return Player.X if x == o else Player.O
