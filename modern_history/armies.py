"""Army housekeeping: merging, marching, reinforcement and spawning."""

from __future__ import annotations

import logging

from .entities import ZERO, Army, Vec2
from .world import World

logger = logging.getLogger(__name__)

INITIAL_ARMIES_PER_SIDE = 5
INITIAL_ARMY_SPACING = 50.0
INITIAL_FRONT_X = 250.0

_CAPITAL_POSITIONS = {
    -1: Vec2(-300.0, 0.0),
    1: Vec2(300.0, 0.0),
}


def capital_position(faction: int) -> Vec2:
    """Where the capital of ``faction`` stands; the origin for an unknown faction."""
    return _CAPITAL_POSITIONS.get(faction, ZERO)


def consolidate_armies(world: World) -> list[Army]:
    """Merge friendly armies standing within the merge radius; return the absorbed ones."""
    config = world.config
    before = [(army, army.position, army.strength, army.faction) for army in world.armies]
    absorbed: list[Army] = []

    for i, (army_a, pos_a, strength_a, faction_a) in enumerate(before):
        if army_a in absorbed:
            continue
        for army_b, pos_b, strength_b, faction_b in before[i + 1 :]:
            if army_b in absorbed:
                continue
            if faction_a != faction_b:
                continue
            if pos_a.distance(pos_b) > config.merge_radius:
                continue

            if strength_a >= strength_b:
                survivor, loser, gained = army_a, army_b, strength_b
            else:
                survivor, loser, gained = army_b, army_a, strength_a

            survivor.strength = min(survivor.strength + gained, config.max_army_strength)
            absorbed.append(loser)

    for army in absorbed:
        world.despawn(army)
    return absorbed


def move_armies(world: World, delta: float) -> None:
    """March every army with an order toward its target for ``delta`` seconds."""
    arrival = world.config.arrival_threshold

    for army in world.armies:
        order = army.order
        if order is None:
            continue

        if army.flanking is not None and army.position.distance(order.target) < arrival:
            order.target = army.flanking.target

        if army.position.distance(order.target) < arrival:
            continue

        direction = (order.target - army.position).normalize_or_zero()
        army.position = army.position + direction * (army.speed * delta)


def reinforce_from_capitals(world: World, delta: float) -> Army | None:
    """When the reinforcement timer fires, raise a new army at the next capital in turn."""
    config = world.config
    if not world.reinforce_timer.tick(delta).finished:
        return None

    factions = [capital.faction for capital in world.capitals]
    if not factions:
        raise ValueError("no capitals to reinforce from")

    faction = factions[world.reinforce_tick % len(factions)]
    world.reinforce_tick += 1

    count = len(world.armies_of(faction))
    if count >= config.max_armies_per_faction:
        return None

    offset = Vec2(0.0, (count - config.max_armies_per_faction / 2.0) * config.army_spacing)
    return world.spawn(
        Army(
            position=capital_position(faction) + offset,
            strength=config.reinforce_strength,
            faction=faction,
            speed=config.reinforce_speed,
        )
    )


def spawn_initial_armies(world: World) -> None:
    """Line both factions up facing each other across the middle of the map."""
    config = world.config
    for i in range(-INITIAL_ARMIES_PER_SIDE, INITIAL_ARMIES_PER_SIDE + 1):
        offset_y = i * INITIAL_ARMY_SPACING
        for faction, x in ((-1, -INITIAL_FRONT_X), (1, INITIAL_FRONT_X)):
            world.spawn(
                Army(
                    position=Vec2(x, offset_y),
                    strength=config.initial_army_strength,
                    faction=faction,
                    speed=config.army_speed,
                )
            )
    logger.info("Spawned %d armies per faction", INITIAL_ARMIES_PER_SIDE * 2 + 1)


def spawn_army_at(world: World, position: Vec2) -> Army:
    """Place a fresh army of the currently selected spawn faction at ``position``."""
    config = world.config
    army = world.spawn(
        Army(
            position=position,
            strength=config.initial_army_strength,
            faction=world.spawn_faction,
            speed=config.army_speed,
        )
    )
    logger.debug(
        "Spawned army at (%.1f, %.1f) faction=%d", position.x, position.y, world.spawn_faction
    )
    return army