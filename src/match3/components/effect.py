from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Generic, Tuple, Union

from match3.components.board import Board, Tile
from match3.components.position import Position


@dataclass(frozen=True, slots=True)
class Match(Generic[Tile]):
    matched: Tile
    positions: Tuple[Position, ...]


@dataclass(frozen=True, slots=True)
class MatchEffect(Generic[Tile]):
    """A run of ``match.positions`` was found and scheduled for removal."""
    match: Match[Tile]
    kind: ClassVar[str] = "Match"


@dataclass(frozen=True, slots=True)
class RefillEffect:
    """Matched cells were cleared, columns compacted and empty cells refilled."""
    kind: ClassVar[str] = "Refill"


Effect = Union[MatchEffect[Tile], RefillEffect]


@dataclass(frozen=True, slots=True)
class MoveResult(Generic[Tile]):
    board: Board[Tile]
    effects: Tuple[Effect[Tile], ...] = ()
