import logging
from typing import Iterator, List, Optional, Tuple

from esper import World
from match3.events.bus import (EventBus, EVENT_TILE_SWAP_REQUEST, EVENT_BOARD_REFILL_REQUEST,
                               EVENT_TILE_SWAP_VALID, EVENT_TILE_SWAP_INVALID, EVENT_MATCH_FOUND,
                               EVENT_REFILL_COMPLETED, EVENT_CASCADE_STEP, EVENT_CASCADE_COMPLETE,
                               EVENT_BOARD_CHANGED)
from match3.components.board import Board, CurrentBoard, Tile
from match3.components.effect import Effect, MatchEffect
from match3.components.generator import RandomTileGenerator
from match3.constants import GRID_ROWS, GRID_COLS, MAX_CASCADE_DEPTH
from match3.systems.board_ops import create, refill_board
from match3.systems.match import can_move
from match3.systems.match_resolution import move, settle
from match3.world import get_tile_registry

logger = logging.getLogger(__name__)


class BoardSystem:
    """Owns the board entity and turns swap requests into cascade events.

    Every request runs to completion inside its handler; effects are replayed on
    the bus in the order the engine produced them.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        rows: int = GRID_ROWS,
        cols: int = GRID_COLS,
        *,
        generator: Optional[Iterator[Tile]] = None,
        settle_initial: bool = True,
        max_cascades: Optional[int] = MAX_CASCADE_DEPTH,
    ):
        self.world = world
        self.event_bus = event_bus
        self.max_cascades = max_cascades
        if generator is None:
            generator = RandomTileGenerator(get_tile_registry(world), rng=getattr(world, "random", None))
        board = create(generator, cols, rows)
        if settle_initial:
            board = settle(board, max_cascades=max_cascades).board
        self.board_entity = self.world.create_entity(CurrentBoard(board=board))
        self.event_bus.subscribe(EVENT_TILE_SWAP_REQUEST, self.on_swap_request)
        self.event_bus.subscribe(EVENT_BOARD_REFILL_REQUEST, self.on_refill_request)

    @property
    def board(self) -> Board:
        return self.world.component_for_entity(self.board_entity, CurrentBoard).board

    def _store(self, board: Board) -> None:
        self.world.component_for_entity(self.board_entity, CurrentBoard).board = board

    def on_swap_request(self, sender, **kwargs):
        src = kwargs.get('src')
        dst = kwargs.get('dst')
        if not src or not dst:
            return
        board = self.board
        if not can_move(board, src, dst):
            logger.debug("Rejected swap %s <-> %s", src, dst)
            self.event_bus.emit(EVENT_TILE_SWAP_INVALID, src=src, dst=dst)
            return
        self.event_bus.emit(EVENT_TILE_SWAP_VALID, src=src, dst=dst)
        result = move(board.generator, board, src, dst, max_cascades=self.max_cascades)
        self._store(result.board)
        self._publish(result.effects)
        self.event_bus.emit(EVENT_BOARD_CHANGED, reason='swap')

    def on_refill_request(self, sender, **kwargs):
        self._store(refill_board(self.board))
        self.event_bus.emit(EVENT_BOARD_CHANGED, reason='refill')

    def _publish(self, effects: Tuple[Effect, ...]) -> None:
        depth = 1
        step_positions: List[Tuple[int, int]] = []
        for effect in effects:
            if isinstance(effect, MatchEffect):
                positions = [tuple(pos) for pos in effect.match.positions]
                step_positions.extend(pos for pos in positions if pos not in step_positions)
                self.event_bus.emit(
                    EVENT_MATCH_FOUND,
                    positions=positions,
                    size=len(positions),
                    type_name=effect.match.matched,
                    depth=depth,
                )
                continue
            self.event_bus.emit(EVENT_CASCADE_STEP, depth=depth, positions=sorted(step_positions))
            self.event_bus.emit(EVENT_REFILL_COMPLETED, depth=depth)
            step_positions = []
            depth += 1
        self.event_bus.emit(EVENT_CASCADE_COMPLETE, depth=depth - 1)
