from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Iterator, Optional, Tuple, TypeVar

# Any equality-comparable value other than None, which marks an empty cell.
Tile = TypeVar("Tile")
Column = Tuple[Optional[Tile], ...]
Grid = Tuple[Column, ...]


@dataclass(frozen=True, slots=True)
class Board(Generic[Tile]):
    """Immutable board snapshot.

    ``grid`` is column-major (``grid[col][row]``); empty cells hold ``None``.
    The generator is shared between successive boards and feeds every refill.
    """
    generator: Iterator[Tile]
    grid: Grid
    width: int
    height: int

    def __post_init__(self) -> None:
        if len(self.grid) != self.width:
            raise ValueError(f"grid has {len(self.grid)} columns, expected width {self.width}")
        for index, column in enumerate(self.grid):
            if len(column) != self.height:
                raise ValueError(
                    f"column {index} has {len(column)} cells, expected height {self.height}"
                )


@dataclass(slots=True)
class CurrentBoard:
    """Component holding the live board snapshot for a board entity.

    The snapshot itself is immutable; BoardSystem swaps in successors.
    """
    board: Board[Any]
