"""Setting up a world, advancing it frame by frame, and the windowed game loop."""

from __future__ import annotations

import argparse
import dataclasses
import logging

import pygame

from .armies import consolidate_armies, move_armies, reinforce_from_capitals, spawn_initial_armies
from .config import GameConfig
from .decision import assign_new_orders, assign_orders_timed
from .defense import defend_breakthroughs
from .grid import setup_grid
from .history import GridHistory
from .render import Renderer
from .simulation import (
    apply_combat,
    apply_pressure,
    apply_repulsion,
    apply_supply,
    snapshot_control,
    update_control,
)
from .splitting import ai_split_armies
from .tactics import assign_flanking_orders
from .world import World, spawn_capitals

logger = logging.getLogger(__name__)

WINDOW_SIZE = (1280, 720)
WINDOW_TITLE = "Modern History"
FRAME_RATE = 60


def create_world(config: GameConfig | None = None) -> World:
    """A world ready to run: split map, fresh history, capitals and opening armies."""
    world = World(config)
    setup_grid(world.grid)
    world.history = GridHistory(world.grid, world.config.snapshot_interval)
    spawn_capitals(world)
    spawn_initial_armies(world)
    return world


def step(world: World, delta: float) -> None:
    """Advance the world by ``delta`` seconds: simulation, then AI, then movement."""
    snapshot_control(world, delta)
    consolidate_armies(world)
    apply_pressure(world)
    apply_supply(world)
    apply_combat(world)
    update_control(world)

    assign_new_orders(world)
    assign_orders_timed(world, delta)
    assign_flanking_orders(world, delta)
    defend_breakthroughs(world)
    ai_split_armies(world, delta)

    move_armies(world, delta)
    reinforce_from_capitals(world, delta)
    apply_repulsion(world)


def run(config: GameConfig | None = None) -> None:
    """Open a window and run the simulation until it is closed."""
    logger.info("Modern History simulation starting...")
    pygame.init()
    try:
        screen = pygame.display.set_mode(WINDOW_SIZE)
        pygame.display.set_caption(WINDOW_TITLE)
        world = create_world(config)
        renderer = Renderer(screen)
        clock = pygame.time.Clock()
        delta = 0.0
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                else:
                    renderer.handle_event(event, world)
            step(world, delta)
            renderer.draw(world)
            pygame.display.flip()
            delta = clock.tick(FRAME_RATE) / 1000.0
    finally:
        pygame.quit()


def main(argv: list[str] | None = None) -> int:
    """Command-line entry point."""
    parser = argparse.ArgumentParser(
        prog="modern-history", description="Two factions fight over a map in real time."
    )
    defaults = GameConfig()
    parser.add_argument("--grid-width", type=int, default=defaults.grid_width)
    parser.add_argument("--grid-height", type=int, default=defaults.grid_height)
    parser.add_argument("--verbose", action="store_true", help="log debug messages")
    args = parser.parse_args(argv)
    if args.grid_width <= 0 or args.grid_height <= 0:
        parser.error("grid dimensions must be positive")

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    config = dataclasses.replace(defaults, grid_width=args.grid_width, grid_height=args.grid_height)
    run(config)
    return 0