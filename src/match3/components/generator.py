from __future__ import annotations

import random

from match3.components.tile_types import TileTypes


class RandomTileGenerator:
    """Iterator yielding a random spawnable tile type name on every ``next()``.

    Reads the registry on each draw so spawnable changes apply to later refills.
    """

    def __init__(self, tile_types: TileTypes, rng: random.Random | None = None):
        self.tile_types = tile_types
        self.rng = rng or random.Random()

    def __iter__(self) -> "RandomTileGenerator":
        return self

    def __next__(self) -> str:
        choices = self.tile_types.spawnable_types()
        if not choices:
            raise RuntimeError("No spawnable tile types configured")
        return self.rng.choice(choices)
