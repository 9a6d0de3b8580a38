"""
Exhaustive game-tree analysis from the side-to-move perspective.
Every legal move is classified Win/Draw/Lose under optimal play by plain
recursion; no pruning, no memoization. The reply statistics for a move are
the shares of the opponent's replies one ply deeper, seen from the mover.
Ordering policy:
- Prefer Win over Draw over Lose.
- Within a classification, order by win, then draw, then lose chance, each
  highest first. A higher lose chance therefore ranks ahead when win and
  draw chances tie; kept so output order stays compatible with earlier releases.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from functools import total_ordering
from typing import List, Optional, Tuple

from .errors import InvalidPositionError
from .game_basics import (
    Board,
    GameStatus,
    Player,
    Square,
    check_status,
    current_player,
    get_empty_squares,
    get_piece_counts,
    is_valid_state,
    place,
    square_annotation,
)


class Evaluation(str, Enum):
    X_WINS = "XWins"
    O_WINS = "OWins"
    DRAW = "Draw"

    @classmethod
    def win_for(cls, player: Player) -> "Evaluation":
        return cls.X_WINS if player is Player.X else cls.O_WINS


@total_ordering
class MoveAnalysis(Enum):
    LOSE = "Lose"
    DRAW = "Draw"
    WIN = "Win"

    @property
    def rank(self) -> int:
        return _RANK[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, MoveAnalysis):
            return NotImplemented
        return self.rank < other.rank

    def flip(self) -> "MoveAnalysis":
        if self is MoveAnalysis.WIN:
            return MoveAnalysis.LOSE
        if self is MoveAnalysis.LOSE:
            return MoveAnalysis.WIN
        return MoveAnalysis.DRAW

    def evaluation(self, mover: Player) -> Evaluation:
        """Absolute evaluation when ``mover`` can force this result."""
        if self is MoveAnalysis.WIN:
            return Evaluation.win_for(mover)
        if self is MoveAnalysis.LOSE:
            return Evaluation.win_for(mover.switch())
        return Evaluation.DRAW


_RANK = {MoveAnalysis.LOSE: 0, MoveAnalysis.DRAW: 1, MoveAnalysis.WIN: 2}

_STATUS_TO_ANALYSIS = {
    GameStatus.WON: MoveAnalysis.WIN,
    GameStatus.DREW: MoveAnalysis.DRAW,
    GameStatus.LOST: MoveAnalysis.LOSE,
}


@dataclass(frozen=True)
class Chances:
    win: int
    draw: int
    lose: int

    @classmethod
    def certain(cls, analysis: MoveAnalysis) -> "Chances":
        """All-or-nothing chances for a move that ends the game."""
        if analysis is MoveAnalysis.WIN:
            return cls(100, 0, 0)
        if analysis is MoveAnalysis.LOSE:
            return cls(0, 0, 100)
        return cls(0, 100, 0)

    @property
    def total(self) -> int:
        return self.win + self.draw + self.lose


def _percent(count: int, total: int) -> int:
    # round half away from zero; values are never negative
    return int(math.floor(count / total * 100.0 + 0.5))


@dataclass(frozen=True)
class Move:
    square: Square
    analysis: MoveAnalysis
    chances: Chances

    @property
    def annotation(self) -> str:
        return square_annotation(self.square)

    def sort_key(self) -> Tuple[int, int, int, int]:
        return (self.analysis.rank, self.chances.win, self.chances.draw, self.chances.lose)


@dataclass
class AnalysisResult:
    moves: List[Move] = field(default_factory=list)
    eval: Optional[Evaluation] = None

    @property
    def best_move(self) -> Optional[Move]:
        return self.moves[0] if self.moves else None


def best_analysis(moves: List[Move]) -> MoveAnalysis:
    """Highest classification among ``moves``; first one wins ties."""
    best = moves[0].analysis
    for m in moves[1:]:
        if m.analysis > best:
            best = m.analysis
    return best


def _reply_chances(replies: List[Move]) -> Chances:
    # replies are classified from the opponent's side; swap win and lose
    n = len(replies)
    win_count = sum(1 for m in replies if m.analysis is MoveAnalysis.WIN)
    draw_count = sum(1 for m in replies if m.analysis is MoveAnalysis.DRAW)
    lose_count = sum(1 for m in replies if m.analysis is MoveAnalysis.LOSE)
    return Chances(
        win=_percent(lose_count, n),
        draw=_percent(draw_count, n),
        lose=_percent(win_count, n),
    )


@dataclass(frozen=True)
class Position:
    turn: Player
    board: Board

    def analyze(self) -> AnalysisResult:
        result = AnalysisResult()
        status = check_status(self.board, self.turn)
        if status.is_terminal:
            result.eval = _STATUS_TO_ANALYSIS[status].evaluation(self.turn)
            return result

        for square in get_empty_squares(self.board):
            child_board = place(self.board, square, self.turn)
            child_status = check_status(child_board, self.turn)
            if child_status.is_terminal:
                analysis = _STATUS_TO_ANALYSIS[child_status]
                result.moves.append(Move(square, analysis, Chances.certain(analysis)))
                continue
            child = Position(self.turn.switch(), child_board).analyze()
            result.moves.append(Move(
                square,
                best_analysis(child.moves).flip(),
                _reply_chances(child.moves),
            ))

        if not result.moves:
            raise InvalidPositionError(
                "Position is not terminal but has no legal moves; the board is inconsistent"
            )
        best = max(result.moves, key=Move.sort_key)
        result.eval = best.analysis.evaluation(self.turn)
        result.moves.sort(key=Move.sort_key, reverse=True)
        return result


def analyze(position: Position) -> AnalysisResult:
    return position.analyze()


def validate_position(position: Position) -> None:
    """Raise InvalidPositionError if the board cannot arise from legal play."""
    if not is_valid_state(position.board):
        x, o = get_piece_counts(position.board)
        raise InvalidPositionError(
            f"Board is not a valid reachable state (X={x}, O={o})"
        )
    if not check_status(position.board, position.turn).is_terminal:
        expected = current_player(position.board)
        if position.turn is not expected:
            raise InvalidPositionError(
                f"It is {expected.value}'s turn on this board, not {position.turn.value}'s"
            )
