from __future__ import annotations

from enum import Enum
from typing import List, Optional, Tuple

from match3.components.board import Board, Grid, Tile
from match3.components.effect import Match
from match3.components.position import Position, PositionLike, as_position
from match3.constants import MIN_MATCH_LENGTH
from match3.systems.board_ops import get_piece, piece, positions, swap_pieces


class MatchDirection(Enum):
    NONE = "None"
    HORIZONTAL = "Horizontal"
    VERTICAL = "Vertical"
    BOTH = "Both"


NORTH = Position(-1, 0)
EAST = Position(0, 1)
SOUTH = Position(1, 0)
WEST = Position(0, -1)


def _step(position: Position, vector: Position) -> Position:
    return Position(position.row + vector.row, position.col + vector.col)


def _count_run(grid: Grid, reference: Tile, start: Position, vector: Position) -> int:
    """Count cells equal to ``reference`` from ``start`` (inclusive) along ``vector``."""
    count = 0
    current = start
    while True:
        tile = get_piece(grid, current)
        if tile is None or tile != reference:
            return count
        count += 1
        current = _step(current, vector)


def any_matching_at(grid: Grid, position: PositionLike) -> MatchDirection:
    """Report which lines through ``position`` hold a run of MIN_MATCH_LENGTH or more."""
    origin = as_position(position)
    reference = get_piece(grid, origin)
    if reference is None:
        return MatchDirection.NONE
    # The origin is counted by both walks, hence the -1.
    horizontal = _count_run(grid, reference, origin, WEST) + _count_run(grid, reference, origin, EAST) - 1
    vertical = _count_run(grid, reference, origin, NORTH) + _count_run(grid, reference, origin, SOUTH) - 1
    if horizontal >= MIN_MATCH_LENGTH and vertical >= MIN_MATCH_LENGTH:
        return MatchDirection.BOTH
    if horizontal >= MIN_MATCH_LENGTH:
        return MatchDirection.HORIZONTAL
    if vertical >= MIN_MATCH_LENGTH:
        return MatchDirection.VERTICAL
    return MatchDirection.NONE


def direction_to_vector(direction: MatchDirection, reverse: bool = False) -> Position:
    scale = -1 if reverse else 1
    if direction is MatchDirection.HORIZONTAL:
        return Position(0, scale)
    if direction is MatchDirection.VERTICAL:
        return Position(scale, 0)
    raise AssertionError(f"Direction ({direction}) neither Horizontal nor Vertical")


def get_match_positions(grid: Grid, direction: MatchDirection, reference_position: PositionLike) -> List[Position]:
    """Return the maximal run through ``reference_position`` along ``direction``.

    Positions come back in forward order (west to east, north to south).
    """
    forward = direction_to_vector(direction)
    backward = direction_to_vector(direction, reverse=True)
    start = as_position(reference_position)
    reference = get_piece(grid, start)
    if reference is None:
        return []
    while get_piece(grid, _step(start, backward)) == reference:
        start = _step(start, backward)
    run: List[Position] = []
    current = start
    while get_piece(grid, current) == reference:
        run.append(current)
        current = _step(current, forward)
    return run


def match_at(grid: Grid, direction: MatchDirection, position: PositionLike) -> Match:
    return Match(
        matched=get_piece(grid, position),
        positions=tuple(get_match_positions(grid, direction, position)),
    )


def can_move(board: Board, first: PositionLike, second: PositionLike) -> bool:
    """True when swapping ``first`` and ``second`` is legal.

    Both cells must hold tiles, share a row or a column without being the same
    cell, and the swap must leave a run through at least one of them. Same-line
    pairs need not be neighbours.
    """
    a = as_position(first)
    b = as_position(second)
    if piece(board, a) is None or piece(board, b) is None:
        return False
    if a.row != b.row and a.col != b.col:
        return False
    if a == b:
        return False
    swapped = swap_pieces(board.grid, a, b)
    return (
        any_matching_at(swapped, a) is not MatchDirection.NONE
        or any_matching_at(swapped, b) is not MatchDirection.NONE
    )


def first_matching_position(board: Board) -> Optional[Position]:
    for position in positions(board):
        if any_matching_at(board.grid, position) is not MatchDirection.NONE:
            return position
    return None


def _line_runs(grid: Grid, cells: List[Position]) -> List[Match]:
    runs: List[Match] = []
    run: List[Position] = []
    last = None
    for cell in cells:
        tile = get_piece(grid, cell)
        if tile is not None and run and tile == last:
            run.append(cell)
            continue
        if len(run) >= MIN_MATCH_LENGTH:
            runs.append(Match(matched=last, positions=tuple(run)))
        run = [cell] if tile is not None else []
        last = tile
    if len(run) >= MIN_MATCH_LENGTH:
        runs.append(Match(matched=last, positions=tuple(run)))
    return runs


def find_all_matches(board: Board) -> List[Match]:
    """Detect every maximal horizontal or vertical run on the board.

    Horizontal runs are listed row by row, then vertical runs column by column.
    """
    matches: List[Match] = []
    for row in range(board.height):
        matches.extend(_line_runs(board.grid, [Position(row, col) for col in range(board.width)]))
    for col in range(board.width):
        matches.extend(_line_runs(board.grid, [Position(row, col) for row in range(board.height)]))
    return matches


def find_valid_moves(board: Board) -> List[Tuple[Position, Position]]:
    """Enumerate directly adjacent swaps that would produce a match."""
    moves: List[Tuple[Position, Position]] = []
    for position in positions(board):
        right = Position(position.row, position.col + 1)
        if right.col < board.width and can_move(board, position, right):
            moves.append((position, right))
        down = Position(position.row + 1, position.col)
        if down.row < board.height and can_move(board, position, down):
            moves.append((position, down))
    return moves
