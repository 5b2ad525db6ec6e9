import pytest

from modern_history.armies import (
    capital_position,
    consolidate_armies,
    move_armies,
    reinforce_from_capitals,
    spawn_army_at,
    spawn_initial_armies,
)
from modern_history.config import GameConfig
from modern_history.entities import ZERO, Army, ArmyOrder, FlankSide, Flanking, Vec2
from modern_history.world import World, spawn_capitals


def small_world(**overrides):
    return World(GameConfig(grid_width=8, grid_height=8, **overrides))


def make_army(world, position, strength=5000.0, faction=1, order=None):
    return world.spawn(
        Army(position=position, strength=strength, faction=faction, speed=8.0, order=order)
    )


def test_capital_positions():
    assert capital_position(-1) == Vec2(-300.0, 0.0)
    assert capital_position(1) == Vec2(300.0, 0.0)
    assert capital_position(0) == ZERO


def test_spawn_initial_armies_lines_up_both_sides():
    world = small_world()
    spawn_initial_armies(world)
    red = world.armies_of(-1)
    blue = world.armies_of(1)
    assert len(red) == len(blue) == 11
    assert all(a.position.x == -250.0 for a in red)
    assert all(a.position.x == 250.0 for a in blue)
    assert sorted(a.position.y for a in red) == [i * 50.0 for i in range(-5, 6)]
    assert all(a.strength == world.config.initial_army_strength for a in world.armies)


def test_spawn_army_at_uses_selected_faction():
    world = small_world()
    world.spawn_faction = -1
    army = spawn_army_at(world, Vec2(12.0, -4.0))
    assert army in world.armies
    assert army.faction == -1
    assert army.position == Vec2(12.0, -4.0)
    assert army.speed == world.config.army_speed


def test_consolidate_merges_close_friends_into_stronger():
    world = small_world()
    strong = make_army(world, Vec2(0.0, 0.0), strength=3000.0)
    weak = make_army(world, Vec2(5.0, 0.0), strength=2000.0)
    absorbed = consolidate_armies(world)
    assert absorbed == [weak]
    assert world.armies == [strong]
    assert strong.strength == 3000.0 + 2000.0


def test_consolidate_caps_strength():
    world = small_world(max_army_strength=4000.0)
    a = make_army(world, Vec2(0.0, 0.0), strength=3000.0)
    make_army(world, Vec2(1.0, 0.0), strength=2500.0)
    consolidate_armies(world)
    assert world.armies == [a]
    assert a.strength == world.config.max_army_strength


def test_consolidate_leaves_enemies_and_distant_friends():
    world = small_world()
    make_army(world, Vec2(0.0, 0.0), faction=1)
    make_army(world, Vec2(2.0, 0.0), faction=-1)
    make_army(world, Vec2(50.0, 0.0), faction=1)
    assert consolidate_armies(world) == []
    assert len(world.armies) == 3


def test_move_toward_target():
    world = small_world()
    army = make_army(world, Vec2(0.0, 0.0), order=ArmyOrder(Vec2(100.0, 0.0)))
    move_armies(world, 1.0)
    assert army.position.x == pytest.approx(army.speed * 1.0)
    assert army.position.y == pytest.approx(0.0)


def test_move_ignores_armies_without_order_or_arrived():
    world = small_world()
    idle = make_army(world, Vec2(0.0, 0.0))
    arrived = make_army(world, Vec2(10.0, 10.0), order=ArmyOrder(Vec2(11.0, 10.0)))
    move_armies(world, 1.0)
    assert idle.position == Vec2(0.0, 0.0)
    assert arrived.position == Vec2(10.0, 10.0)


def test_flanking_switches_to_final_target_on_arrival():
    world = small_world()
    army = make_army(world, Vec2(0.0, 0.0), order=ArmyOrder(Vec2(1.0, 0.0)))
    army.flanking = Flanking(target=Vec2(0.0, 100.0), side=FlankSide.LEFT)
    move_armies(world, 1.0)
    assert army.order.target == Vec2(0.0, 100.0)
    assert army.position.y > 0.0


def test_reinforce_waits_for_timer():
    world = small_world()
    spawn_capitals(world)
    assert reinforce_from_capitals(world, world.config.reinforce_interval / 2) is None
    assert world.armies == []


def test_reinforce_alternates_factions_and_stacks():
    world = small_world()
    spawn_capitals(world)
    interval = world.config.reinforce_interval
    first = reinforce_from_capitals(world, interval)
    second = reinforce_from_capitals(world, interval)
    third = reinforce_from_capitals(world, interval)
    assert [first.faction, second.faction, third.faction] == [-1, 1, -1]
    assert first.position.x == capital_position(-1).x
    assert second.position.x == capital_position(1).x
    assert first.strength == world.config.reinforce_strength
    assert third.position.y - first.position.y == pytest.approx(world.config.army_spacing)


def test_reinforce_respects_faction_limit():
    world = small_world(max_armies_per_faction=1)
    spawn_capitals(world)
    make_army(world, Vec2(0.0, 0.0), faction=-1)
    assert reinforce_from_capitals(world, world.config.reinforce_interval) is None
    assert world.reinforce_tick == 1
    assert len(world.armies) == 1


def test_reinforce_without_capitals_raises():
    world = small_world()
    with pytest.raises(ValueError):
        reinforce_from_capitals(world, world.config.reinforce_interval)