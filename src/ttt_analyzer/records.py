"""
JSON records for positions and analysis results.

Input:  {"turn": "X" | "O", "board": [[null | "X" | "O", ...] x3] x3}  (row-major)
Output: {"moves": [{"square": "B2", "analysis": "Win", "chances": {...}}, ...],
         "eval": "XWins" | "OWins" | "Draw" | null}
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from .analysis import AnalysisResult, Move, Position
from .errors import InputReadError, OutputWriteError, PositionFormatError
from .game_basics import Board, Cell, Player
from .paths import ensure_parent_dir

_PLAYER_TAGS = {p.value: p for p in Player}


def _parse_player(raw: Any, where: str) -> Player:
    if not isinstance(raw, str) or raw not in _PLAYER_TAGS:
        raise PositionFormatError(f"{where}: expected \"X\" or \"O\", got {json.dumps(raw)}")
    return _PLAYER_TAGS[raw]


def _parse_board(raw: Any) -> Board:
    if not isinstance(raw, list) or len(raw) != 3:
        raise PositionFormatError("board: expected an array of 3 rows")
    rows: List[tuple] = []
    for r, row in enumerate(raw):
        if not isinstance(row, list) or len(row) != 3:
            raise PositionFormatError(f"board[{r}]: expected an array of 3 cells")
        cells: List[Cell] = []
        for c, cell in enumerate(row):
            cells.append(None if cell is None else _parse_player(cell, f"board[{r}][{c}]"))
        rows.append(tuple(cells))
    return tuple(rows)  # type: ignore[return-value]


def parse_position(data: Any) -> Position:
    if not isinstance(data, dict):
        raise PositionFormatError("expected a JSON object with `turn` and `board`")
    for key in ("turn", "board"):
        if key not in data:
            raise PositionFormatError(f"missing field `{key}`")
    return Position(turn=_parse_player(data["turn"], "turn"), board=_parse_board(data["board"]))


def load_position(path: Path) -> Position:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise InputReadError(path, e) from e
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise PositionFormatError(f"Invalid JSON format ({e})") from e
    position = parse_position(data)
    logging.debug("Loaded position from %s (turn=%s)", path, position.turn.value)
    return position


def move_to_dict(move: Move) -> Dict[str, Any]:
    return {
        "square": move.annotation,
        "analysis": move.analysis.value,
        "chances": {
            "win": move.chances.win,
            "draw": move.chances.draw,
            "lose": move.chances.lose,
        },
    }


def result_to_dict(result: AnalysisResult) -> Dict[str, Any]:
    return {
        "moves": [move_to_dict(m) for m in result.moves],
        "eval": result.eval.value if result.eval is not None else None,
    }


def dumps_result(result: AnalysisResult) -> str:
    return json.dumps(result_to_dict(result), indent=2) + "\n"


def write_result(result: AnalysisResult, path: Path) -> Path:
    payload = dumps_result(result)
    try:
        ensure_parent_dir(path)
        path.write_text(payload, encoding="utf-8")
    except OSError as e:
        raise OutputWriteError(path, e) from e
    logging.info("Wrote analysis to %s (%d moves)", path, len(result.moves))
    return path
