"""ttt_analyzer package.

Exhaustive move analysis for tic-tac-toe positions, JSON records and a
small CLI.

Convenience imports are exposed for common workflows.
"""

from .analysis import AnalysisResult, Evaluation, Move, MoveAnalysis, Position, analyze
from .game_basics import Player, check_status
from .records import load_position, write_result

__all__ = [
    "analyze",
    "check_status",
    "load_position",
    "write_result",
    "AnalysisResult",
    "Evaluation",
    "Move",
    "MoveAnalysis",
    "Player",
    "Position",
]
