"""Tunable parameters of the simulation."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GameConfig:
    """Every tunable number the simulation and the AI read."""

    grid_width: int = 256
    grid_height: int = 256
    cell_size: float = 3.0

    combat_radius: float = 40.0
    damage_multiplier: float = 0.0005
    min_army_strength: float = 100.0

    supply_range: float = 200.0
    supply_heal_rate: float = 2.0
    supply_attrition_rate: float = 1.0

    control_speed: float = 0.0001

    initial_army_strength: float = 5000.0
    army_speed: float = 8.0

    merge_radius: float = 10.0
    max_army_strength: float = 20000.0

    arrival_threshold: float = 5.0

    max_armies_per_faction: int = 15
    reinforce_strength: float = 3000.0
    reinforce_speed: float = 8.0
    army_spacing: float = 20.0

    snapshot_interval: float = 1.0

    ai_order_interval: float = 1.0
    reinforce_interval: float = 10.0
    split_interval: float = 5.0
    flank_interval: float = 1.0

    strength_check_radius: float = 80.0
    retreat_strength: float = 500.0
    recover_strength: float = 1500.0
    min_consolidate_group: float = 4000.0
    num_sectors: int = 5

    defend_radius: float = 80.0
    min_defender_strength: float = 1000.0

    split_threshold: float = 10000.0
    split_ratio: float = 0.4

    salient_min_depth: float = 30.0
    salient_min_enemy_strength: float = 2000.0
    flank_offset: float = 50.0
    flank_force_ratio_threshold: float = 1.5
    flanker_radius: float = 120.0

    repulsion_radius: float = 30.0
    repulsion_strength: float = 5.0