from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Iterator, List, Optional, Sequence

from match3.components.board import Board, Grid, Tile
from match3.components.position import Position, PositionLike, as_position


class TileGeneratorExhausted(RuntimeError):
    """Raised when a finite tile generator runs out while cells still need filling."""


def next_tile(generator: Iterator[Tile]) -> Tile:
    try:
        tile = next(generator)
    except StopIteration:
        raise TileGeneratorExhausted("Tile generator ran out of values") from None
    if tile is None:
        raise ValueError("Tile generator produced None, which marks an empty cell")
    return tile


def _thaw(grid: Grid) -> List[List[Optional[Tile]]]:
    return [list(column) for column in grid]


def _freeze(columns: Sequence[Sequence[Optional[Tile]]]) -> Grid:
    return tuple(tuple(column) for column in columns)


def empty_grid(width: int, height: int) -> Grid:
    return tuple((None,) * height for _ in range(width))


def grid_from_rows(rows: Sequence[Sequence[Optional[Tile]]]) -> Grid:
    """Convert a row-major literal layout into a column-major grid."""
    if not rows:
        return ()
    width = len(rows[0])
    for index, row in enumerate(rows):
        if len(row) != width:
            raise ValueError(f"row {index} has {len(row)} cells, expected {width}")
    return tuple(tuple(row[col] for row in rows) for col in range(width))


def grid_to_rows(grid: Grid) -> List[List[Optional[Tile]]]:
    if not grid:
        return []
    return [[column[row] for column in grid] for row in range(len(grid[0]))]


def populate(grid: Grid, generator: Iterator[Tile]) -> Grid:
    """Fill every empty cell, row by row from the top, left to right within a row."""
    columns = _thaw(grid)
    height = len(columns[0]) if columns else 0
    for row in range(height):
        for column in columns:
            if column[row] is None:
                column[row] = next_tile(generator)
    return _freeze(columns)


def create(generator: Iterator[Tile], width: int, height: int) -> Board:
    """Build a ``width`` x ``height`` board filled from ``generator``.

    The generator is called exactly once per cell in row-major order. Matches
    present in the initial layout are left in place; see ``settle``.
    """
    grid = populate(empty_grid(width, height), generator)
    return Board(generator=generator, grid=grid, width=width, height=height)


def get_piece(grid: Grid, position: PositionLike) -> Optional[Tile]:
    row, col = position
    if row < 0 or col < 0 or col >= len(grid) or row >= len(grid[col]):
        return None
    return grid[col][row]


def piece(board: Board, position: PositionLike) -> Optional[Tile]:
    row, col = position
    if row < 0 or col < 0 or row >= board.height or col >= board.width:
        return None
    return board.grid[col][row]


def positions(board: Board) -> List[Position]:
    return [Position(row, col) for row in range(board.height) for col in range(board.width)]


def swap_pieces(grid: Grid, first: PositionLike, second: PositionLike) -> Grid:
    a = as_position(first)
    b = as_position(second)
    columns = _thaw(grid)
    columns[a.col][a.row], columns[b.col][b.row] = columns[b.col][b.row], columns[a.col][a.row]
    return _freeze(columns)


def remove_matches(grid: Grid, matched: Iterable[PositionLike]) -> Grid:
    columns = _thaw(grid)
    for row, col in matched:
        columns[col][row] = None
    return _freeze(columns)


def apply_gravity(grid: Grid) -> Grid:
    """Drop tiles toward the bottom of their own column, keeping their order."""
    compacted = []
    for column in grid:
        tiles = [tile for tile in column if tile is not None]
        compacted.append((None,) * (len(column) - len(tiles)) + tuple(tiles))
    return tuple(compacted)


def refill_board(board: Board) -> Board:
    """Compact every column, then fill empty cells from the board's generator.

    Empty cells are filled from the bottom row upward, left to right within a
    row; generator call order is part of the contract.
    """
    columns = _thaw(apply_gravity(board.grid))
    for row in range(board.height - 1, -1, -1):
        for column in columns:
            if column[row] is None:
                column[row] = next_tile(board.generator)
    return replace(board, grid=_freeze(columns))
