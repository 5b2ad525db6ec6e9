"""Spotting enemy salients in the front and sending strong armies to cut them off."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from .config import GameConfig
from .entities import Army, Flanking, FlankSide, Vec2
from .world import World

MIN_FRONTLINE_POINTS = 5
WINDOW_FRACTION = 0.15
SALIENT_ENEMY_RADIUS = 100.0
MAX_SALIENTS = 3
APPROACH_STEP = 20.0
FACTIONS = (-1, 1)


@dataclass(frozen=True)
class Salient:
    """A bulge of the front into a faction's territory, with its tip and base."""

    tip: Vec2
    base_left: Vec2
    base_right: Vec2
    depth: float
    enemy_strength: float


def detect_salients(
    frontline: Sequence[Vec2],
    faction: int,
    armies: Iterable[Army],
    config: GameConfig,
) -> list[Salient]:
    """The up to three most dangerous enemy salients facing ``faction``, worst first."""
    if len(frontline) < MIN_FRONTLINE_POINTS:
        return []

    points = sorted(frontline, key=lambda p: p.y)
    n = len(points)
    window = int(n * WINDOW_FRACTION)
    if window < 2:
        return []

    expected: list[float] = []
    for i in range(n):
        start = max(i - window, 0)
        end = min(i + window + 1, n)
        expected.append(sum(p.x for p in points[start:end]) / (end - start))

    enemies = [(army.position, army.strength) for army in armies if army.faction != faction]

    def deviation(i: int) -> float:
        if faction == 1:
            return expected[i] - points[i].x
        return points[i].x - expected[i]

    min_depth = config.salient_min_depth
    continue_depth = min_depth * 0.5
    deviations = [(i, d) for i in range(n) if (d := deviation(i)) > min_depth]
    if not deviations:
        return []

    visited: set[int] = set()
    salients: list[Salient] = []

    for start_idx, start_dev in deviations:
        if start_idx in visited:
            continue

        tip = points[start_idx]
        max_dev = start_dev
        min_idx = max_idx = start_idx

        j = start_idx + 1
        while j < n and j < start_idx + window * 2:
            current = deviation(j)
            if not current > continue_depth:
                break
            visited.add(j)
            max_idx = j
            if current > max_dev:
                max_dev = current
                tip = points[j]
            j += 1

        j = max(start_idx - 1, 0)
        while j > 0 and start_idx - j < window * 2:
            current = deviation(j)
            if not current > continue_depth:
                break
            visited.add(j)
            min_idx = j
            if current > max_dev:
                max_dev = current
                tip = points[j]
            j -= 1

        visited.add(start_idx)

        base_left = points[min_idx]
        base_right = points[max_idx]
        center = Vec2(
            (base_left.x + base_right.x + tip.x) / 3.0,
            (base_left.y + base_right.y + tip.y) / 3.0,
        )

        enemy_strength = sum(
            strength for pos, strength in enemies if pos.distance(center) < SALIENT_ENEMY_RADIUS
        )
        if enemy_strength < config.salient_min_enemy_strength:
            continue

        if faction == 1:
            depth = max(expected[start_idx] - tip.x, 0.0)
        else:
            depth = max(tip.x - expected[start_idx], 0.0)
        if depth < min_depth:
            continue

        salients.append(Salient(tip, base_left, base_right, depth, enemy_strength))

    salients.sort(key=lambda s: s.depth * s.enemy_strength, reverse=True)
    return salients[:MAX_SALIENTS]


def local_force_ratio_at(pos: Vec2, faction: int, armies: Iterable[Army], radius: float) -> float:
    """Friendly over enemy strength within ``radius`` of ``pos``; infinite with no enemy."""
    friendly = 0.0
    enemy = 0.0
    for army in armies:
        if pos.distance(army.position) < radius:
            if army.faction == faction:
                friendly += army.strength
            else:
                enemy += army.strength
    if enemy == 0.0:
        return math.inf
    return friendly / enemy


def _best_salient(army: Army, salients: Sequence[Salient], config: GameConfig) -> Salient | None:
    best: Salient | None = None
    best_score = 0.0
    for salient in salients:
        dist_to_base = min(
            army.position.distance(salient.base_left),
            army.position.distance(salient.base_right),
        )
        if dist_to_base > config.flanker_radius * 2.0:
            continue
        score = salient.depth * salient.enemy_strength * 0.001 / (1.0 + dist_to_base * 0.01)
        if score > best_score:
            best_score = score
            best = salient
    return best


def assign_flanking_orders(world: World, delta: float) -> list[Army]:
    """When the flank timer fires, send strong armies around salients; return the flankers."""
    config = world.config
    frontline = world.cached_frontline
    ordered = [army for army in world.armies if army.order is not None]

    if not world.flank_timer.tick(delta).just_finished:
        if len(frontline) < MIN_FRONTLINE_POINTS:
            for army in ordered:
                army.flanking = None
        return []

    for army in ordered:
        army.flanking = None

    if len(frontline) < MIN_FRONTLINE_POINTS:
        return []

    faction_salients = {
        faction: salients
        for faction in FACTIONS
        if (salients := detect_salients(frontline, faction, world.armies, config))
    }

    flankers: list[Army] = []
    for army in ordered:
        order = army.order
        if order.retreating:
            continue
        salients = faction_salients.get(army.faction)
        if salients is None:
            continue

        ratio = local_force_ratio_at(army.position, army.faction, world.armies, config.flanker_radius)
        if ratio < config.flank_force_ratio_threshold:
            continue

        salient = _best_salient(army, salients, config)
        if salient is None:
            continue

        if army.position.distance(salient.base_left) <= army.position.distance(salient.base_right):
            base, side = salient.base_left, FlankSide.LEFT
        else:
            base, side = salient.base_right, FlankSide.RIGHT

        midpoint = (salient.base_left + salient.base_right) / 2.0
        direction = (salient.tip - midpoint).normalize_or_zero()
        behind_tip = salient.tip + direction * config.flank_offset
        to_target = (behind_tip - army.position).normalize_or_zero()

        order.target = base + to_target * APPROACH_STEP
        army.flanking = Flanking(target=behind_tip, side=side)
        flankers.append(army)

    return flankers