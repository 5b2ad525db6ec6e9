"""Sending strong armies to plug breakthroughs in the front."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .config import GameConfig
from .entities import ZERO, Vec2
from .grid import Grid
from .history import GridHistory
from .world import World

MAX_THREATS_CONSIDERED = 20
MIN_THREAT_SCORE = 0.05
ENEMY_NEAR_THREAT_RADIUS = 80.0


@dataclass(frozen=True)
class ThreatCell:
    """A cell where the enemy holds or is gaining ground, with how urgent it is."""

    world_pos: Vec2
    score: float


def collect_threats(
    grid: Grid, history: GridHistory, config: GameConfig
) -> dict[int, list[ThreatCell]]:
    """Threatened cells per defending faction, most urgent first."""
    cell_size = config.cell_size
    half_w = grid.width * cell_size / 2.0
    half_h = grid.height * cell_size / 2.0
    deltas = history.control_delta(grid)
    threats: dict[int, list[ThreatCell]] = {}

    for idx, (cell, delta) in enumerate(zip(grid.cells, deltas)):
        control = cell.control
        if abs(control) < 0.2 and abs(delta) < 0.001:
            continue

        target_faction = 1 if control < 0.0 else -1
        if target_faction == 1:
            is_enemy_territory = control < -0.1
            is_pushing_toward = delta < -0.001
        else:
            is_enemy_territory = control > 0.1
            is_pushing_toward = delta > 0.001

        if not is_enemy_territory and not is_pushing_toward:
            continue

        depth_score = abs(control) * 0.3 if is_enemy_territory else 0.0
        velocity_score = min(abs(delta) * 10.0, 1.0) * 0.5 if is_pushing_toward else 0.0
        score = depth_score + velocity_score

        if score > MIN_THREAT_SCORE:
            x, y = idx % grid.width, idx // grid.width
            pos = Vec2(x * cell_size - half_w, y * cell_size - half_h)
            threats.setdefault(target_faction, []).append(ThreatCell(pos, score))

    for cells in threats.values():
        cells.sort(key=lambda threat: threat.score, reverse=True)
    return threats


def defend_breakthroughs(world: World) -> None:
    """Point each strong, non-retreating army at the most pressing nearby threat."""
    config = world.config
    threats_by_faction = collect_threats(world.grid, world.history, config)
    ordered = [army for army in world.armies if army.order is not None]
    army_data = [(army.position, army.strength, army.faction) for army in ordered]

    for army in ordered:
        if army.strength < config.min_defender_strength or army.order.retreating:
            army.defending = False
            continue

        threats = threats_by_faction.get(army.faction)
        if not threats:
            army.defending = False
            continue

        best_threat = ZERO
        best_score = 0.0
        best_dist = math.inf

        for threat in threats[:MAX_THREATS_CONSIDERED]:
            d = army.position.distance(threat.world_pos)
            if d > config.defend_radius * 4.0:
                continue

            nearby_enemy_strength = sum(
                strength
                for pos, strength, faction in army_data
                if faction != army.faction
                and pos.distance(threat.world_pos) < ENEMY_NEAR_THREAT_RADIUS
            )
            army_bonus = nearby_enemy_strength * 0.0002
            distance_decay = 1.0 / (1.0 + d * 0.005)
            total_score = (threat.score + army_bonus) * distance_decay

            if total_score > best_score or (total_score > best_score * 0.9 and d < best_dist):
                best_score = total_score
                best_threat = threat.world_pos
                best_dist = d

        if best_score > MIN_THREAT_SCORE:
            army.defending = True
            army.order.target = best_threat
        else:
            army.defending = False