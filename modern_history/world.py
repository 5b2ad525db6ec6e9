"""The state of one running simulation."""

from __future__ import annotations

import itertools

from .config import GameConfig
from .entities import Army, Capital, Vec2
from .grid import Grid
from .history import GridHistory
from .timer import Timer


class World:
    """Holds the grid, the armies, the capitals and the timers that pace the AI."""

    def __init__(self, config: GameConfig | None = None) -> None:
        self.config = config if config is not None else GameConfig()
        cfg = self.config
        self.grid = Grid(cfg.grid_width, cfg.grid_height)
        self.history = GridHistory(self.grid, cfg.snapshot_interval)
        self.armies: list[Army] = []
        self.capitals: list[Capital] = []
        self.cached_frontline: list[Vec2] = []
        self.ai_timer = Timer(cfg.ai_order_interval)
        self.reinforce_timer = Timer(cfg.reinforce_interval)
        self.split_timer = Timer(cfg.split_interval)
        self.flank_timer = Timer(cfg.flank_interval)
        self.reinforce_tick = 0
        self.spawn_faction = 0
        self._ids = itertools.count()

    def spawn(self, army: Army) -> Army:
        """Add an army, giving it a fresh id, and return it."""
        army.id = next(self._ids)
        self.armies.append(army)
        return army

    def despawn(self, army: Army) -> bool:
        """Remove an army; return False if it was already gone."""
        try:
            self.armies.remove(army)
        except ValueError:
            return False
        return True

    def armies_of(self, faction: int) -> list[Army]:
        return [army for army in self.armies if army.faction == faction]


def spawn_capitals(world: World) -> None:
    """Place the two capitals, one on each side of the map."""
    world.capitals.append(Capital(faction=-1, position=Vec2(-300.0, 0.0)))
    world.capitals.append(Capital(faction=1, position=Vec2(300.0, 0.0)))