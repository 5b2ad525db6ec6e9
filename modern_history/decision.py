"""Choosing where each army should go: toward the front, a comrade, or home."""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass

from .config import GameConfig
from .entities import ZERO, Army, ArmyOrder, Capital, Vec2
from .grid import Grid
from .simulation import detect_frontline
from .world import World

SECTOR_LOAD_RADIUS = 120.0
SECTOR_WIDTH_TOLERANCE = 60.0
RETREAT_STEP = 30.0
RETREAT_OFFSETS = (-40.0, 40.0, -80.0, 80.0, -120.0, 120.0)
CONSOLIDATE_RATIO_NEW = 1.2
CONSOLIDATE_RATIO_TIMED = 0.7


@dataclass
class FrontlineSectors:
    """The front cut into sectors along x, with a threat weight for each."""

    sector_centers: list[Vec2]
    sector_enemy_pressure: list[float]


def find_closest_point(army_pos: Vec2, points: Iterable[Vec2]) -> Vec2:
    """The point nearest ``army_pos``; the origin if there are none."""
    closest_dist = math.inf
    closest_point = ZERO
    for point in points:
        dist = army_pos.distance(point)
        if dist < closest_dist:
            closest_dist = dist
            closest_point = point
    return closest_point


def nearest_friendly_capital(army: Army, capitals: Iterable[Capital]) -> Vec2:
    """Position of the nearest capital of the army's faction; the origin if none."""
    return find_closest_point(
        army.position,
        (capital.position for capital in capitals if capital.faction == army.faction),
    )


def _nearest_position(army: Army, candidates: Iterable[Army]) -> Vec2 | None:
    best: Vec2 | None = None
    best_dist = math.inf
    for other in candidates:
        d = army.position.distance(other.position)
        if d < best_dist:
            best_dist = d
            best = other.position
    return best


def nearest_friendly_army_pos(army: Army, armies: Iterable[Army]) -> Vec2 | None:
    """Position of the nearest other army of the same faction, if any."""
    return _nearest_position(
        army, (other for other in armies if other is not army and other.faction == army.faction)
    )


def nearest_enemy_pos(army: Army, armies: Iterable[Army]) -> Vec2 | None:
    """Position of the nearest army of another faction, if any."""
    return _nearest_position(
        army, (other for other in armies if other is not army and other.faction != army.faction)
    )


def local_force_ratio(army: Army, armies: Iterable[Army], config: GameConfig) -> float:
    """Own plus nearby friendly strength over nearby enemy strength; infinite with no enemy."""
    friendly = 0.0
    enemy = 0.0
    for other in armies:
        if other is army:
            continue
        if army.position.distance(other.position) < config.strength_check_radius:
            if other.faction == army.faction:
                friendly += other.strength
            else:
                enemy += other.strength
    if enemy == 0.0:
        return math.inf
    return (army.strength + friendly) / enemy


def compute_frontline_sectors(
    frontline: Sequence[Vec2],
    faction: int,
    armies: Iterable[Army],
    grid: Grid,
    config: GameConfig,
) -> FrontlineSectors:
    """Split the front into at most ``num_sectors`` bands along x and weigh each.

    Enemy armies are measured against sector centres before any centre exists,
    so they add nothing to the weights; ``armies`` is accepted for that step.
    The weight list starts with one placeholder per sector, which is what
    ``select_sector_target`` reads by sector index.
    """
    if len(frontline) < 2:
        return FrontlineSectors([find_closest_point(ZERO, frontline)], [1.0])

    n = min(config.num_sectors, len(frontline))
    if n <= 0:
        raise ValueError("num_sectors must be positive")

    xs = [p.x for p in frontline]
    min_x = min(xs)
    step = (max(xs) - min_x) / n

    sector_points: list[list[Vec2]] = [[] for _ in range(n)]
    for p in frontline:
        idx = int((p.x - min_x) / step) if step > 0 else 0
        sector_points[min(idx, n - 1)].append(p)

    sector_centers: list[Vec2] = []
    pressures: list[float] = [0.0] * n
    for points in sector_points:
        if not points:
            sector_centers.append(ZERO)
            pressures.append(0.0)
            continue
        sector_centers.append(
            Vec2(sum(p.x for p in points) / len(points), sum(p.y for p in points) / len(points))
        )

    cell_size = config.cell_size
    half_w = grid.width * cell_size / 2.0
    half_h = grid.height * cell_size / 2.0

    max_pressure = 0.0
    for center in sector_centers:
        cell_x = int((center.x + half_w) / cell_size)
        cell_y = int((center.y + half_h) / cell_size)
        control = grid.get(cell_x, cell_y).control if grid.contains(cell_x, cell_y) else 0.0
        enemy_control = max(-control, 0.0) if faction == 1 else max(control, 0.0)
        pressures.append(enemy_control)
        max_pressure = max(max_pressure, enemy_control)

    if max_pressure > 0.0:
        pressures = [p / max_pressure for p in pressures]
    else:
        pressures = [1.0 / n] * len(pressures)

    return FrontlineSectors(sector_centers, pressures)


def select_sector_target(
    army: Army,
    sectors: FrontlineSectors,
    faction_positions: Mapping[int, Sequence[Vec2]],
    frontline: Sequence[Vec2],
) -> Vec2:
    """Pick the best sector for the army and the front point in it closest to the army."""
    centers = sectors.sector_centers
    friendly_positions = faction_positions.get(army.faction)
    if friendly_positions is None:
        return find_closest_point(army.position, centers)

    sector_load = [0.0] * len(centers)
    for pos in friendly_positions:
        min_d = math.inf
        min_idx = 0
        for i, center in enumerate(centers):
            d = pos.distance(center)
            if d < min_d:
                min_d = d
                min_idx = i
        if min_d < SECTOR_LOAD_RADIUS:
            sector_load[min_idx] += 1.0

    best_score = -math.inf
    best_sector = find_closest_point(army.position, centers)
    best_idx = 0
    for i, center in enumerate(centers):
        if center == ZERO:
            continue
        threat_weight = sectors.sector_enemy_pressure[i]
        overload_penalty = sector_load[i] * 0.3
        distance_factor = 1.0 / (1.0 + army.position.distance(center) * 0.005)
        score = threat_weight * 2.0 - overload_penalty + distance_factor
        if score > best_score:
            best_score = score
            best_sector = center
            best_idx = i

    target_x = centers[best_idx].x
    closest_in_sector = find_closest_point(
        army.position,
        (fl for fl in frontline if abs(fl.x - target_x) < SECTOR_WIDTH_TOLERANCE),
    )
    return closest_in_sector if closest_in_sector != ZERO else best_sector


def retreat_waypoint(
    army: Army, capital: Vec2, armies: Iterable[Army], config: GameConfig
) -> Vec2:
    """A step toward the capital, sidestepping enemies; the capital itself if no step is safe."""
    enemies = [other.position for other in armies if other is not army and other.faction != army.faction]
    to_capital = (capital - army.position).normalize_or_zero()
    perpendicular = Vec2(-to_capital.y, to_capital.x)
    best_pos = capital
    best_score = 0.0

    for offset in RETREAT_OFFSETS:
        candidate = army.position + to_capital * RETREAT_STEP + perpendicular * offset
        min_enemy_d = min((candidate.distance(pos) for pos in enemies), default=math.inf)
        score = min_enemy_d * 2.0 - candidate.distance(capital)
        if score > best_score and min_enemy_d > config.combat_radius:
            best_score = score
            best_pos = candidate

    return best_pos


def choose_target(
    army: Army,
    frontline: Sequence[Vec2],
    world: World,
    faction_positions: Mapping[int, Sequence[Vec2]],
) -> Vec2:
    """Target for an army without orders: regroup if weak, else the front, else home."""
    config = world.config
    force_ratio = local_force_ratio(army, world.armies, config)

    if force_ratio < CONSOLIDATE_RATIO_NEW and army.strength < config.min_consolidate_group:
        friendly_pos = nearest_friendly_army_pos(army, world.armies)
        if friendly_pos is not None:
            return friendly_pos

    if frontline:
        sectors = compute_frontline_sectors(
            frontline, army.faction, world.armies, world.grid, config
        )
        return select_sector_target(army, sectors, faction_positions, frontline)

    return nearest_friendly_capital(army, world.capitals)


def build_faction_positions(armies: Iterable[Army]) -> dict[int, list[Vec2]]:
    """Army positions grouped by faction."""
    positions: dict[int, list[Vec2]] = {}
    for army in armies:
        positions.setdefault(army.faction, []).append(army.position)
    return positions


def _front_target(army: Army, frontline: Sequence[Vec2], world: World,
                  faction_positions: Mapping[int, Sequence[Vec2]]) -> Vec2:
    sectors = compute_frontline_sectors(
        frontline, army.faction, world.armies, world.grid, world.config
    )
    return select_sector_target(army, sectors, faction_positions, frontline)


def assign_new_orders(world: World) -> list[Army]:
    """Refresh the cached front and give every army without orders a target."""
    frontline = detect_frontline(world.grid, world.config.cell_size)
    world.cached_frontline = list(frontline)
    faction_positions = build_faction_positions(world.armies)

    unordered = [army for army in world.armies if army.order is None]
    targets = [choose_target(army, frontline, world, faction_positions) for army in unordered]
    for army, target in zip(unordered, targets):
        army.order = ArmyOrder(target=target)
    return unordered


def assign_orders_timed(world: World, delta: float) -> bool:
    """When the AI timer fires, revise orders: retreat, recover, regroup or re-aim at the front.

    Armies defending a breakthrough or flanking keep their orders. Returns
    whether the timer fired.
    """
    config = world.config
    if not world.ai_timer.tick(delta).finished:
        return False

    frontline = world.cached_frontline
    faction_positions = build_faction_positions(world.armies)

    unordered = [army for army in world.armies if army.order is None]
    revisable = [
        army
        for army in world.armies
        if army.order is not None and not army.defending and army.flanking is None
    ]

    targets = [choose_target(army, frontline, world, faction_positions) for army in unordered]
    for army, target in zip(unordered, targets):
        army.order = ArmyOrder(target=target)

    for army in revisable:
        order = army.order
        if order.retreating:
            if army.strength >= config.recover_strength:
                order.retreating = False
                if frontline:
                    order.target = _front_target(army, frontline, world, faction_positions)
            else:
                capital = nearest_friendly_capital(army, world.capitals)
                order.target = retreat_waypoint(army, capital, world.armies, config)
            continue

        force_ratio = local_force_ratio(army, world.armies, config)

        if army.strength < config.retreat_strength and force_ratio < 1.0:
            order.retreating = True
            capital = nearest_friendly_capital(army, world.capitals)
            order.target = retreat_waypoint(army, capital, world.armies, config)
            continue

        if force_ratio < CONSOLIDATE_RATIO_TIMED and army.strength < config.min_consolidate_group:
            friendly_pos = nearest_friendly_army_pos(army, world.armies)
            if friendly_pos is not None:
                order.target = friendly_pos
                continue

        if frontline:
            order.target = _front_target(army, frontline, world, faction_positions)

    return True