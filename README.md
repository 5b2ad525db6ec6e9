# modern_history

A two-faction war simulation. Red (faction -1) and blue (faction +1) each hold
half of a territorial control grid, with a capital on each side. Armies push
pressure into the grid around them, and that pressure shifts control of the
cells. Armies damage enemies within the combat radius and are removed when they
drop too low. They heal near a friendly capital and lose strength away from
supply. Friendly armies that come within the merge radius of each other merge.
A simple AI sends them to the frontline.

The AI:

- cuts the frontline into sectors along the x axis. It weighs each sector by how
  firmly the enemy holds the ground at its centre and by how many friendly armies
  already cover it;
- sends weak, outnumbered armies back towards their capital by a waypoint that
  keeps clear of enemies. They return to the front once they have recovered;
- sends strong armies to answer cells where the enemy holds or is gaining ground;
- finds enemy salients in the frontline and sends strong armies round their base
  to a point behind the tip;
- splits large armies so that they can cover a wide front.

Reinforcements arrive at a fixed interval. They come from the two capitals in
turn, up to a limit of armies per faction.

## Installing

```
pip install .
```

Add the test tools with `pip install .[test]`.

## Running

```
modern-history
```

This opens a window that shows:

- red and blue territory;
- the two capitals;
- each army as a black square marker, sized by its strength, with the strength
  written above it.

The simulation runs until you close the window.

| Input       | Effect                                 |
|-------------|----------------------------------------|
| `1`         | New armies will be red                 |
| `2`         | New armies will be blue                |
| Left click  | Place an army of the chosen faction    |

Options:

- `--grid-width N` and `--grid-height N` set the size of the control grid.
  Both must be positive. The default is 256 by 256.
- `--verbose` logs debug messages.

## Using it as a library

The simulation can run without a window:

```python
from modern_history.app import create_world, step
from modern_history.config import GameConfig

world = create_world(GameConfig())
for _ in range(600):
    step(world, 1 / 60)

for faction in (-1, 1):
    armies = world.armies_of(faction)
    print(faction, len(armies), sum(a.strength for a in armies))
```

`create_world` builds a `World`. The map is split between the factions, the
capitals are placed, and eleven armies per side are lined up. `step` advances a
world by the given number of seconds. It runs the simulation rules first, then
the AI, then movement and reinforcement.

All tuning values are fields of the frozen dataclass `GameConfig`. They include
the grid size, the combat radius and damage, the supply range, the reinforcement
limits and the AI timer intervals. Set them when you create the config, for
example `GameConfig(max_armies_per_faction=25, split_ratio=0.5)`.

`World.spawn` adds an army and `World.despawn` removes one.
`modern_history.armies.spawn_army_at(world, position)` places an army of the
world's current spawn faction.

`modern_history.simulation.detect_frontline(grid, cell_size)` returns world
positions on the edges between cells whose control differs in sign. These are
the points where the two factions meet.

## What it does not do

There is no way to save or load a running simulation, and no scenario files. The
map always starts split down the middle with the same opening armies. The only
input in the window is the faction choice and placing armies. There is no pause,
no zoom and no camera movement.