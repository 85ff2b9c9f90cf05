from typing import NamedTuple, Tuple, Union


class Position(NamedTuple):
    """Board coordinate. ``row`` grows downward, ``col`` grows rightward.

    Validity is always relative to a board's bounds.
    """
    row: int
    col: int


PositionLike = Union[Position, Tuple[int, int]]


def as_position(value: PositionLike) -> Position:
    if isinstance(value, Position):
        return value
    row, col = value
    return Position(row, col)
