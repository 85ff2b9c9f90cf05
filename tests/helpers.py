from __future__ import annotations

from itertools import chain
from typing import Iterable, Sequence

from match3.components.board import Board
from match3.systems.board_ops import create, grid_to_rows


def board_from_rows(rows: Sequence[Sequence[object]], refills: Iterable[object] = ()) -> Board:
    """Build a board whose layout is ``rows``; later refills draw from ``refills``.

    Relies on create() consuming the generator row by row, left to right.
    """
    generator = chain(chain.from_iterable(rows), refills)
    return create(generator, len(rows[0]), len(rows))


def rows_of(board: Board) -> list[list[object]]:
    return grid_to_rows(board.grid)
