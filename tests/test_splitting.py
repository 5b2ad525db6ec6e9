import pytest

from modern_history.config import GameConfig
from modern_history.entities import ZERO, Army, ArmyOrder, Vec2
from modern_history.grid import setup_grid
from modern_history.simulation import detect_frontline
from modern_history.splitting import ai_split_armies, find_farthest_frontline, frontline_spread
from modern_history.world import World


def front_world(**overrides):
    world = World(GameConfig(grid_width=64, grid_height=64, **overrides))
    setup_grid(world.grid)
    return world


def add_army(world, strength, faction=1, order=True):
    return world.spawn(
        Army(
            position=Vec2(0.0, 0.0),
            strength=strength,
            faction=faction,
            speed=8.0,
            order=ArmyOrder(Vec2(0.0, 0.0)) if order else None,
        )
    )


def test_spread_of_few_points_is_zero():
    assert frontline_spread([]) == 0.0
    assert frontline_spread([Vec2(5.0, 5.0)]) == 0.0


def test_spread_takes_larger_side():
    assert frontline_spread([Vec2(0.0, 0.0), Vec2(10.0, 50.0)]) == 50.0
    assert frontline_spread([Vec2(0.0, 0.0), Vec2(70.0, 5.0)]) == 70.0


def test_farthest_from_avoid_away_from_army():
    frontline = [Vec2(10.0, 0.0), Vec2(100.0, 0.0), Vec2(60.0, 0.0)]
    assert find_farthest_frontline(ZERO, frontline, ZERO) == Vec2(100.0, 0.0)


def test_farthest_falls_back_to_farthest_from_army():
    frontline = [Vec2(10.0, 0.0), Vec2(20.0, 0.0)]
    assert find_farthest_frontline(ZERO, frontline, ZERO) == Vec2(20.0, 0.0)


def test_farthest_of_empty_front_is_origin():
    assert find_farthest_frontline(Vec2(3.0, 4.0), [], ZERO) == ZERO


def test_split_conserves_strength_and_targets_front():
    world = front_world()
    big = add_army(world, 12000.0)
    spawned = ai_split_armies(world, world.config.split_interval)
    assert len(spawned) == 1
    child = spawned[0]
    assert child in world.armies
    assert big.strength + child.strength == pytest.approx(12000.0)
    assert child.strength == pytest.approx(12000.0 * world.config.split_ratio)
    assert child.faction == big.faction
    assert child.order.target in detect_frontline(world.grid, world.config.cell_size)


def test_split_skips_small_and_orderless_armies():
    world = front_world()
    small = add_army(world, 5000.0)
    idle = add_army(world, 15000.0, order=False)
    assert ai_split_armies(world, world.config.split_interval) == []
    assert small.strength == 5000.0
    assert idle.strength == 15000.0


def test_split_waits_for_timer():
    world = front_world()
    big = add_army(world, 12000.0)
    assert ai_split_armies(world, world.config.split_interval / 4) == []
    assert big.strength == 12000.0


def test_split_needs_a_front():
    world = World(GameConfig(grid_width=64, grid_height=64))
    big = add_army(world, 12000.0)
    assert ai_split_armies(world, world.config.split_interval) == []
    assert len(world.armies) == 1
    assert big.strength == 12000.0