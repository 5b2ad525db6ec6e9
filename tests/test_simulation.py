import pytest

from modern_history.config import GameConfig
from modern_history.entities import Army, Vec2
from modern_history.grid import Grid, setup_grid
from modern_history.simulation import (
    apply_combat,
    apply_pressure,
    apply_repulsion,
    apply_supply,
    detect_frontline,
    snapshot_control,
    update_control,
)
from modern_history.world import World, spawn_capitals


@pytest.fixture
def world():
    w = World(GameConfig(grid_width=64, grid_height=64))
    setup_grid(w.grid)
    return w


def add(world, x, y, faction, strength=5000.0):
    return world.spawn(Army(position=Vec2(x, y), strength=strength, faction=faction, speed=8.0))


# frontline

def test_frontline_on_split_grid_follows_border():
    grid = Grid(64, 64)
    setup_grid(grid)
    front = detect_frontline(grid, 3.0)
    assert len(front) == 2 * 64
    assert all(abs(p.x) < 3.0 for p in front)


def test_frontline_empty_on_neutral_grid():
    assert detect_frontline(Grid(10, 10), 3.0) == []


def test_frontline_empty_when_one_side_owns_all():
    grid = Grid(10, 10)
    for cell in grid.cells:
        cell.control = 0.7
    assert detect_frontline(grid, 3.0) == []


# pressure

def test_pressure_peaks_under_army(world):
    add(world, 0.0, 0.0, 1)
    apply_pressure(world)
    grid = world.grid
    centre = grid.get(32, 32).pressure
    assert centre > 0
    assert centre == max(c.pressure for c in grid.cells)
    assert grid.get(35, 32).pressure == pytest.approx(grid.get(29, 32).pressure)
    assert grid.get(43, 32).pressure == 0.0


def test_pressure_sign_follows_faction(world):
    add(world, 0.0, 0.0, -1)
    apply_pressure(world)
    assert world.grid.get(32, 32).pressure < 0


def test_pressure_is_reset_each_frame(world):
    army = add(world, 0.0, 0.0, 1)
    apply_pressure(world)
    world.despawn(army)
    apply_pressure(world)
    assert all(c.pressure == 0.0 for c in world.grid.cells)


# control

def test_control_moves_with_pressure(world):
    cell = world.grid.get(32, 10)
    cell.control = 0.0
    cell.pressure = 100.0
    update_control(world)
    assert cell.control == pytest.approx(100.0 * world.config.control_speed)


def test_control_is_clamped(world):
    high = world.grid.get(60, 0)
    low = world.grid.get(0, 0)
    high.pressure = 1e9
    low.pressure = -1e9
    update_control(world)
    assert high.control == 1.0
    assert low.control == -1.0


# supply

def test_supply_heals_near_capital(world):
    spawn_capitals(world)
    army = add(world, -300.0, 10.0, -1, strength=1000.0)
    apply_supply(world)
    assert army.strength == 1000.0 + world.config.supply_heal_rate


def test_supply_attrition_away_from_capital(world):
    spawn_capitals(world)
    army = add(world, 300.0, 0.0, -1, strength=1000.0)
    apply_supply(world)
    assert army.strength == 1000.0 - world.config.supply_attrition_rate


def test_supply_never_below_minimum(world):
    army = add(world, 0.0, 0.0, 1, strength=50.0)
    apply_supply(world)
    assert army.strength == world.config.min_army_strength


# combat

def test_combat_damages_both_sides(world):
    a = add(world, 0.0, 0.0, -1, strength=5000.0)
    b = add(world, 10.0, 0.0, 1, strength=3000.0)
    apply_combat(world)
    mult = world.config.damage_multiplier
    assert a.strength == pytest.approx(5000.0 - 3000.0 * mult)
    assert b.strength == pytest.approx(3000.0 - 5000.0 * mult)


def test_combat_ignores_friends_and_distant_enemies(world):
    a = add(world, 0.0, 0.0, 1, strength=5000.0)
    add(world, 5.0, 0.0, 1, strength=5000.0)
    add(world, 100.0, 0.0, -1, strength=5000.0)
    apply_combat(world)
    assert a.strength == 5000.0


def test_combat_removes_broken_army(world):
    weak = add(world, 0.0, 0.0, -1, strength=60.0)
    strong = add(world, 5.0, 0.0, 1, strength=100000.0)
    apply_combat(world)
    assert weak not in world.armies
    assert world.armies == [strong]
    assert strong.strength < 100000.0


# repulsion

def test_repulsion_pushes_enemies_apart(world):
    a = add(world, 0.0, 0.0, -1)
    b = add(world, 10.0, 0.0, 1)
    apply_repulsion(world)
    assert a.position.x < 0.0
    assert b.position.x > 10.0
    assert a.position.y == 0.0 and b.position.y == 0.0
    assert a.position.distance(b.position) > 10.0


def test_repulsion_leaves_friends_and_distant_alone(world):
    a = add(world, 0.0, 0.0, 1)
    b = add(world, 10.0, 0.0, 1)
    c = add(world, 200.0, 0.0, -1)
    apply_repulsion(world)
    assert (a.position, b.position, c.position) == (
        Vec2(0.0, 0.0),
        Vec2(10.0, 0.0),
        Vec2(200.0, 0.0),
    )


def test_repulsion_skips_coincident_armies(world):
    a = add(world, 4.0, 4.0, 1)
    b = add(world, 4.0, 4.0, -1)
    apply_repulsion(world)
    assert a.position == b.position == Vec2(4.0, 4.0)


# snapshots

def test_snapshot_control_follows_interval(world):
    world.grid.get(0, 0).control = 0.5
    assert snapshot_control(world, 0.5) is False
    assert world.history.control_delta(world.grid)[0] == pytest.approx(1.5)
    assert snapshot_control(world, 0.5) is True
    assert world.history.control_delta(world.grid)[0] == 0.0