"""Splitting large armies so the AI can cover a wide front."""

from __future__ import annotations

from collections import Counter

from .entities import ZERO, Army, ArmyOrder, Vec2
from .simulation import detect_frontline
from .world import World

MIN_FRONTLINE_CLUSTERS = 3
MIN_FRONTLINE_SPREAD = 100.0
MAX_ARMIES_FOR_SPLIT = 30
MIN_DISTANCE_FROM_ARMY = 50.0


def find_farthest_frontline(army_pos: Vec2, frontline: list[Vec2], avoid: Vec2) -> Vec2:
    """The front point farthest from ``avoid`` that is not right next to the army."""
    best_dist = 0.0
    best_point = ZERO

    for point in frontline:
        dist_to_avoid = point.distance(avoid)
        if dist_to_avoid > best_dist and point.distance(army_pos) > MIN_DISTANCE_FROM_ARMY:
            best_dist = dist_to_avoid
            best_point = point

    if best_dist == 0.0 and frontline:
        max_dist = 0.0
        for point in frontline:
            d = point.distance(army_pos)
            if d > max_dist:
                max_dist = d
                best_point = point

    return best_point


def frontline_spread(frontline: list[Vec2]) -> float:
    """The larger side of the front's bounding box; 0 for fewer than two points."""
    if len(frontline) < 2:
        return 0.0
    xs = [p.x for p in frontline]
    ys = [p.y for p in frontline]
    return max(max(xs) - min(xs), max(ys) - min(ys))


def ai_split_armies(world: World, delta: float) -> list[Army]:
    """When the split timer fires, detach part of every large army; return the new armies."""
    config = world.config
    if not world.split_timer.tick(delta).finished:
        return []

    frontline = detect_frontline(world.grid, config.cell_size)
    if len(frontline) < MIN_FRONTLINE_CLUSTERS:
        return []
    if frontline_spread(frontline) < MIN_FRONTLINE_SPREAD:
        return []

    ordered = [army for army in world.armies if army.order is not None]
    faction_counts = Counter(army.faction for army in ordered)
    spawned: list[Army] = []

    for army in ordered:
        if army.strength < config.split_threshold:
            continue
        if faction_counts[army.faction] >= MAX_ARMIES_FOR_SPLIT:
            continue

        split_strength = army.strength * config.split_ratio
        army.strength -= split_strength

        new_target = find_farthest_frontline(army.position, frontline, army.order.target)
        offset = Vec2((army.id % 7 - 3) * 5.0, (army.id % 5 - 2) * 5.0)

        spawned.append(
            world.spawn(
                Army(
                    position=army.position + offset,
                    strength=split_strength,
                    faction=army.faction,
                    speed=army.speed,
                    order=ArmyOrder(target=new_target),
                )
            )
        )

    return spawned