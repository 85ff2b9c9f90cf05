from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, Iterator, List, Optional, Sequence

from match3.components.board import Board, Grid, Tile
from match3.components.effect import Effect, Match, MatchEffect, MoveResult, RefillEffect
from match3.components.position import Position, PositionLike, as_position
from match3.constants import MAX_CASCADE_DEPTH
from match3.systems.board_ops import refill_board, remove_matches, swap_pieces
from match3.systems.match import (
    MatchDirection,
    any_matching_at,
    can_move,
    find_all_matches,
    first_matching_position,
    match_at,
)

logger = logging.getLogger(__name__)


class CascadeLimitExceeded(RuntimeError):
    """Raised when clear/refill passes keep producing matches past the configured cap."""

    def __init__(self, depth: int):
        super().__init__(f"Cascade did not settle within {depth} passes")
        self.depth = depth


def _collect_seed(grid: Grid, seed: Position, effects: List[Effect], pending: Dict[Position, None]) -> None:
    direction = any_matching_at(grid, seed)
    if direction is MatchDirection.NONE:
        return
    if direction is MatchDirection.BOTH:
        lines = (MatchDirection.HORIZONTAL, MatchDirection.VERTICAL)
    else:
        lines = (direction,)
    for line in lines:
        match = match_at(grid, line, seed)
        effects.append(MatchEffect(match))
        pending.update(dict.fromkeys(match.positions))


def _check_depth(depth: int, max_cascades: Optional[int]) -> None:
    if max_cascades is not None and depth >= max_cascades:
        logger.warning("Cascade still matching after %d passes; giving up", depth)
        raise CascadeLimitExceeded(depth)


def _clear_and_refill(board: Board, grid: Grid, pending: Dict[Position, None], effects: List[Effect]) -> Board:
    cleared = remove_matches(grid, pending)
    effects.append(RefillEffect())
    return refill_board(replace(board, grid=cleared))


def move(
    generator: Iterator[Tile],
    board: Board,
    first: PositionLike,
    second: PositionLike,
    *,
    max_cascades: Optional[int] = MAX_CASCADE_DEPTH,
) -> MoveResult:
    """Swap two tiles and resolve the cascade until the board is quiescent.

    An illegal move returns the original board with no effects. Refills always
    draw from ``board.generator``; ``generator`` mirrors ``create``'s signature.
    Each pass emits its Match effects followed by one Refill effect.
    """
    if not can_move(board, first, second):
        return MoveResult(board=board, effects=())
    seeds: Sequence[Position] = (as_position(first), as_position(second))
    grid = swap_pieces(board.grid, first, second)
    effects: List[Effect] = []
    depth = 0
    while True:
        depth += 1
        pending: Dict[Position, None] = {}
        for seed in seeds:
            _collect_seed(grid, seed, effects, pending)
        board = _clear_and_refill(board, grid, pending, effects)
        grid = board.grid
        logger.debug("Cascade pass %d cleared %d tiles", depth, len(pending))
        seed = first_matching_position(board)
        if seed is None:
            break
        _check_depth(depth, max_cascades)
        seeds = (seed,)
    return MoveResult(board=board, effects=tuple(effects))


def settle(board: Board, *, max_cascades: Optional[int] = MAX_CASCADE_DEPTH) -> MoveResult:
    """Clear every run on ``board`` and refill until no run remains.

    Used to scrub layouts that were not produced by a move, such as a freshly
    created board. A quiescent board is returned as-is.
    """
    effects: List[Effect] = []
    depth = 0
    matches: List[Match] = find_all_matches(board)
    while matches:
        depth += 1
        pending: Dict[Position, None] = {}
        for match in matches:
            effects.append(MatchEffect(match))
            pending.update(dict.fromkeys(match.positions))
        board = _clear_and_refill(board, board.grid, pending, effects)
        logger.debug("Settle pass %d cleared %d tiles", depth, len(pending))
        matches = find_all_matches(board)
        if matches:
            _check_depth(depth, max_cascades)
    return MoveResult(board=board, effects=tuple(effects))
