import random
from typing import Iterable

from esper import World
from .events.bus import EventBus
from match3.components.tile_type_registry import TileTypeRegistry
from match3.components.tile_types import TileTypes
from match3.constants import DEFAULT_TILE_TYPES


def create_world(
    event_bus: EventBus,
    *,
    rng: random.Random | None = None,
    tile_types: Iterable[str] | None = None,
    spawnable: Iterable[str] | None = None,
) -> World:
    world = World()
    setattr(world, "random", rng or random.Random())

    # Create single registry entity with canonical types
    world.create_entity(
        TileTypeRegistry(),
        TileTypes(
            types=list(tile_types or DEFAULT_TILE_TYPES),
            spawnable=list(spawnable or []),
        ),
    )
    return world


def get_tile_registry(world: World) -> TileTypes:
    for entity, _ in world.get_component(TileTypeRegistry):
        return world.component_for_entity(entity, TileTypes)
    raise RuntimeError("TileTypes definitions not found")


def set_spawnable_tile_types(world: World, type_names: Iterable[str], *, allow_empty: bool = False) -> list[str]:
    registry = get_tile_registry(world)
    registry.set_spawnable(type_names, allow_empty=allow_empty)
    return registry.spawnable_types()
