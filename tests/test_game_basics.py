import itertools

import pytest

from ttt_analyzer.game_basics import (
    WIN_PATTERNS,
    GameStatus,
    Player,
    check_status,
    current_player,
    empty_board,
    get_empty_squares,
    is_valid_state,
    place,
    square_annotation,
)

X, O, _ = Player.X, Player.O, None


def _board(flat):
    return tuple(tuple(flat[r * 3:(r + 1) * 3]) for r in range(3))


def _completed_lines(flat):
    return [pat for pat in WIN_PATTERNS if flat[pat[0]] is not None and all(flat[i] == flat[pat[0]] for i in pat)]


ALL_BOARDS = [list(cells) for cells in itertools.product([None, X, O], repeat=9)]


def test_switch_is_an_involution():
    for p in Player:
        assert p.switch() is not p
        assert p.switch().switch() is p


def test_check_status_known_boards():
    assert check_status(((X, X, X), (_, _, _), (_, _, _)), X) is GameStatus.WON
    assert check_status(((X, X, X), (_, _, _), (_, _, _)), O) is GameStatus.LOST
    assert check_status(((_, O, _), (_, O, _), (_, O, _)), O) is GameStatus.WON
    assert check_status(((_, O, _), (_, O, _), (_, O, _)), X) is GameStatus.LOST
    assert check_status(((X, _, _), (_, X, _), (_, _, X)), O) is GameStatus.LOST
    assert check_status(((_, _, O), (_, O, _), (O, _, _)), O) is GameStatus.WON
    assert check_status(((_, _, _), (_, X, _), (O, _, _)), X) is GameStatus.ONGOING
    assert check_status(((_, O, X), (O, X, X), (O, X, O)), X) is GameStatus.ONGOING
    assert check_status(((X, O, X), (O, X, X), (O, X, O)), X) is GameStatus.DREW


def test_single_completed_line_is_won_for_owner_and_lost_for_other():
    checked = 0
    for flat in ALL_BOARDS:
        lines = _completed_lines(flat)
        if len(lines) != 1:
            continue
        owner = flat[lines[0][0]]
        b = _board(flat)
        assert check_status(b, owner) is GameStatus.WON
        assert check_status(b, owner.switch()) is GameStatus.LOST
        checked += 1
    assert checked > 0


def test_full_board_without_line_is_drawn_from_both_sides():
    for flat in ALL_BOARDS:
        if None in flat or _completed_lines(flat):
            continue
        b = _board(flat)
        assert check_status(b, X) is GameStatus.DREW
        assert check_status(b, O) is GameStatus.DREW


def test_open_board_without_line_is_ongoing():
    for flat in ALL_BOARDS:
        if None not in flat or _completed_lines(flat):
            continue
        b = _board(flat)
        assert check_status(b, X) is GameStatus.ONGOING
        assert check_status(b, O) is GameStatus.ONGOING


def test_empty_squares_are_row_major_column_row_pairs():
    b = ((X, _, O), (_, X, _), (O, _, _))
    assert get_empty_squares(b) == [(1, 0), (0, 1), (2, 1), (1, 2), (2, 2)]
    assert len(get_empty_squares(empty_board())) == 9


def test_place_returns_new_board():
    b = empty_board()
    b2 = place(b, (2, 0), X)
    assert b == empty_board()
    assert b2[0][2] is X
    assert sum(cell is not None for row in b2 for cell in row) == 1


@pytest.mark.parametrize("square,expected", [((0, 0), "A1"), ((2, 0), "C1"), ((0, 2), "A3"), ((1, 1), "B2")])
def test_square_annotation(square, expected):
    assert square_annotation(square) == expected


def test_is_valid_state():
    assert is_valid_state(empty_board())
    assert is_valid_state(((X, X, X), (O, O, _), (_, _, _)))
    # too many X
    assert not is_valid_state(((X, X, _), (_, _, _), (_, _, _)))
    # O cannot win after X has moved again
    assert not is_valid_state(((O, O, O), (X, X, _), (X, X, _)))
    # both sides completed a line
    assert not is_valid_state(((X, X, X), (O, O, O), (_, _, _)))


def test_current_player_follows_counts():
    assert current_player(empty_board()) is X
    assert current_player(((X, _, _), (_, _, _), (_, _, _))) is O
