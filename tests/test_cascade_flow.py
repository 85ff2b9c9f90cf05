from itertools import repeat

import pytest

from match3.components.effect import MatchEffect, RefillEffect
from match3.systems.board_ops import positions
from match3.systems.match import MatchDirection, any_matching_at
from match3.systems.match_resolution import CascadeLimitExceeded, move, settle
from tests.helpers import board_from_rows, rows_of


def _assert_quiescent(board):
    for pos in positions(board):
        assert any_matching_at(board.grid, pos) is MatchDirection.NONE, pos


def _cascade_board(refills):
    return board_from_rows(
        [
            [1, 2, 3, 4],
            [5, 6, 7, 8],
            [9, 10, 11, 12],
            ["A", "A", "B", "A"],
        ],
        refills,
    )


def test_illegal_move_is_noop():
    board = board_from_rows([["A", "B", "C"], [1, 2, 3]])
    result = move(board.generator, board, (0, 0), (0, 1))
    assert result.board is board
    assert result.effects == ()


def test_single_match_clears_drops_and_refills():
    board = _cascade_board(["x", "y", "z"])
    result = move(board.generator, board, (3, 2), (3, 3))
    assert [e.kind for e in result.effects] == ["Match", "Refill"]
    match = result.effects[0].match
    assert match.matched == "A"
    assert match.positions == ((3, 0), (3, 1), (3, 2))
    assert rows_of(result.board) == [
        ["x", "y", "z", 4],
        [1, 2, 3, 8],
        [5, 6, 7, 12],
        [9, 10, 11, "B"],
    ]
    # Original board is untouched
    assert rows_of(board)[3] == ["A", "A", "B", "A"]
    _assert_quiescent(result.board)


def test_both_match_emits_two_effects_before_refill():
    board = board_from_rows(
        [
            [1, 2, "X", 3, 4],
            [5, 6, "X", 7, 8],
            ["X", "X", "Y", "X", 9],
            [10, 11, 12, 13, 14],
            [15, 16, 17, 18, 19],
        ],
        range(100, 105),
    )
    result = move(board.generator, board, (2, 2), (2, 3))
    effects = result.effects
    assert [e.kind for e in effects] == ["Match", "Match", "Refill"]
    assert effects[0].match.positions == ((2, 0), (2, 1), (2, 2))
    assert effects[1].match.positions == ((0, 2), (1, 2), (2, 2))
    flat = [tile for row in rows_of(result.board) for tile in row]
    assert "X" not in flat
    assert rows_of(result.board) == [
        [102, 103, 104, 3, 4],
        [1, 2, 101, 7, 8],
        [5, 6, 100, "Y", 9],
        [10, 11, 12, 13, 14],
        [15, 16, 17, 18, 19],
    ]
    _assert_quiescent(result.board)


def test_refill_that_lines_up_triggers_second_pass():
    board = _cascade_board(["C", "C", "C", "D", "E", "F"])
    result = move(board.generator, board, (3, 2), (3, 3))
    effects = result.effects
    assert [type(e) for e in effects] == [MatchEffect, RefillEffect, MatchEffect, RefillEffect]
    assert effects[2].match.matched == "C"
    assert effects[2].match.positions == ((0, 0), (0, 1), (0, 2))
    assert rows_of(result.board)[0] == ["D", "E", "F", 4]
    _assert_quiescent(result.board)


def test_cascade_cap_counts_passes():
    board = _cascade_board(["C", "C", "C", "D", "E", "F"])
    assert len(move(board.generator, board, (3, 2), (3, 3), max_cascades=2).effects) == 4

    board = _cascade_board(["C", "C", "C", "D", "E", "F"])
    with pytest.raises(CascadeLimitExceeded) as excinfo:
        move(board.generator, board, (3, 2), (3, 3), max_cascades=1)
    assert excinfo.value.depth == 1


def test_generator_that_always_rematches_hits_cap():
    board = _cascade_board(repeat("Z"))
    with pytest.raises(CascadeLimitExceeded):
        move(board.generator, board, (3, 2), (3, 3), max_cascades=5)


def test_settle_scrubs_initial_layout():
    board = board_from_rows(
        [
            ["A", "A", "A"],
            [1, 2, 3],
            [4, 5, 6],
        ],
        [7, 8, 9],
    )
    result = settle(board)
    assert [e.kind for e in result.effects] == ["Match", "Refill"]
    assert rows_of(result.board) == [[7, 8, 9], [1, 2, 3], [4, 5, 6]]


def test_settle_leaves_quiescent_board_alone():
    board = board_from_rows([[1, 2, 3], [4, 5, 6]])
    result = settle(board)
    assert result.board is board
    assert result.effects == ()


def test_settle_cap_stops_generator_that_keeps_matching():
    board = board_from_rows([["A", "A", "A"], [1, 2, 3]], repeat("A"))
    with pytest.raises(CascadeLimitExceeded) as excinfo:
        settle(board, max_cascades=3)
    assert excinfo.value.depth == 3
