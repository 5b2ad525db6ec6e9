"""Per-frame rules: pressure, supply, combat, control, repulsion and the front."""

from __future__ import annotations

import itertools
import math

from .entities import Vec2
from .grid import Grid
from .world import World

INFLUENCE_RADIUS_CELLS = 10
_NEIGHBOURS = ((1, 0), (0, 1), (-1, 0), (0, -1))


def detect_frontline(grid: Grid, cell_size: float) -> list[Vec2]:
    """World positions of the edges where control changes sign."""
    half_w = grid.width * cell_size / 2.0
    half_h = grid.height * cell_size / 2.0
    frontline: list[Vec2] = []

    for y in range(grid.height):
        for x in range(grid.width):
            control = grid.get(x, y).control
            if abs(control) < 0.001:
                continue
            for dx, dy in _NEIGHBOURS:
                nx, ny = x + dx, y + dy
                if not grid.contains(nx, ny):
                    continue
                if control * grid.get(nx, ny).control <= 0.0:
                    frontline.append(
                        Vec2(
                            (x + dx * 0.5) * cell_size - half_w,
                            (y + dy * 0.5) * cell_size - half_h,
                        )
                    )
                    break
    return frontline


def snapshot_control(world: World, delta: float) -> bool:
    """Let the control history take a snapshot when its interval has passed."""
    return world.history.snapshot(world.grid, delta)


def apply_pressure(world: World) -> None:
    """Recompute the pressure every army puts on the cells around it."""
    grid = world.grid
    cell_size = world.config.cell_size
    half_w = grid.width * cell_size / 2.0
    half_h = grid.height * cell_size / 2.0
    reach = range(-INFLUENCE_RADIUS_CELLS, INFLUENCE_RADIUS_CELLS + 1)

    for cell in grid.cells:
        cell.pressure = 0.0

    for army in world.armies:
        army_x = int((army.position.x + half_w) / cell_size)
        army_y = int((army.position.y + half_h) / cell_size)
        for dy in reach:
            for dx in reach:
                gx, gy = army_x + dx, army_y + dy
                if not grid.contains(gx, gy):
                    continue
                influence = army.strength / (dx * dx + dy * dy + 100.0) * army.faction
                grid.get(gx, gy).pressure += influence


def apply_supply(world: World) -> None:
    """Heal armies near a friendly capital and wear down the rest."""
    config = world.config
    for army in world.armies:
        nearest = min(
            (
                army.position.distance(capital.position)
                for capital in world.capitals
                if capital.faction == army.faction
            ),
            default=math.inf,
        )
        if nearest < config.supply_range:
            army.strength += config.supply_heal_rate
        else:
            army.strength -= config.supply_attrition_rate
        army.strength = max(army.strength, config.min_army_strength)


def apply_combat(world: World) -> None:
    """Deal damage between enemy armies in range and remove the broken ones."""
    config = world.config
    despawn_threshold = config.min_army_strength * 0.5
    before = [(army, army.position, army.strength, army.faction) for army in world.armies]
    fallen = []

    for army in world.armies:
        total_damage = sum(
            other_strength * config.damage_multiplier
            for other, other_pos, other_strength, other_faction in before
            if other is not army
            and other_faction != army.faction
            and army.position.distance(other_pos) < config.combat_radius
        )
        army.strength -= total_damage
        if army.strength <= despawn_threshold:
            fallen.append(army)

    for army in fallen:
        world.despawn(army)


def update_control(world: World) -> None:
    """Shift each cell's control by its pressure, kept within [-1, 1]."""
    speed = world.config.control_speed
    for cell in world.grid.cells:
        cell.control = min(1.0, max(-1.0, cell.control + cell.pressure * speed))


def apply_repulsion(world: World) -> None:
    """Push enemy armies that stand too close apart."""
    radius = world.config.repulsion_radius
    strength = world.config.repulsion_strength
    before = [(army, army.position, army.faction) for army in world.armies]

    for (army_a, pos_a, faction_a), (army_b, pos_b, faction_b) in itertools.combinations(before, 2):
        if faction_a == faction_b:
            continue
        diff = pos_a - pos_b
        distance = diff.length()
        if 0.001 < distance < radius:
            push = diff.normalize_or_zero() * ((1.0 - distance / radius) * strength)
            army_a.position = army_a.position + push
            army_b.position = army_b.position - push