"""Drawing the map, capitals and armies with pygame, and turning input into actions."""

from __future__ import annotations

import math

import pygame

from .armies import spawn_army_at
from .entities import Army, Vec2
from .world import World

BACKGROUND = (43, 44, 47)
BLUE_TERRITORY = (51, 102, 255)
RED_TERRITORY = (255, 51, 51)
CAPITAL_COLORS = {-1: (153, 26, 26), 1: (26, 26, 153)}
CAPITAL_SIZE = 12
ARMY_COLOR = (0, 0, 0)
ARMY_TEXT_COLOR = (255, 255, 255)
ARMY_TEXT_OFFSET = 8.0
ARMY_FONT_SIZE = 12
MIN_MARKER = 3.0
MAX_MARKER = 8.0


def cell_color(control: float) -> tuple[int, int, int]:
    """Blue for cells held by faction +1, red otherwise."""
    return BLUE_TERRITORY if control > 0.0 else RED_TERRITORY


def army_marker_size(strength: float) -> float:
    """Side of an army's square marker, growing with the root of its strength."""
    size = math.sqrt(max(strength, 0.0)) * 0.1
    return min(max(size, MIN_MARKER), MAX_MARKER)


class Renderer:
    """Draws a world onto a surface, with the world origin at the surface centre, y up."""

    def __init__(self, surface: pygame.Surface) -> None:
        self.surface = surface
        pygame.font.init()
        self._font = pygame.font.Font(None, ARMY_FONT_SIZE)

    def screen_to_world(self, pos: tuple[float, float]) -> Vec2:
        """World position under the screen point ``pos``."""
        width, height = self.surface.get_size()
        x, y = pos
        return Vec2(x - width / 2.0, height / 2.0 - y)

    def world_to_screen(self, pos: Vec2) -> tuple[float, float]:
        """Screen point at the world position ``pos``."""
        width, height = self.surface.get_size()
        return (pos.x + width / 2.0, height / 2.0 - pos.y)

    def _screen_point(self, pos: Vec2) -> tuple[int, int]:
        x, y = self.world_to_screen(pos)
        return (round(x), round(y))

    def _square(self, center: Vec2, size: float, color: tuple[int, int, int]) -> None:
        side = max(round(size), 1)
        rect = pygame.Rect(0, 0, side, side)
        rect.center = self._screen_point(center)
        self.surface.fill(color, rect)

    def _draw_grid(self, world: World) -> None:
        grid = world.grid
        if grid.width == 0 or grid.height == 0:
            return
        cell_size = world.config.cell_size
        blue, red = bytes(BLUE_TERRITORY), bytes(RED_TERRITORY)
        rows = [grid.cells[start : start + grid.width] for start in range(0, len(grid.cells), grid.width)]
        data = b"".join(blue if cell.control > 0.0 else red for row in reversed(rows) for cell in row)
        image = pygame.image.frombuffer(data, (grid.width, grid.height), "RGB")
        scaled = pygame.transform.scale(
            image, (max(round(grid.width * cell_size), 1), max(round(grid.height * cell_size), 1))
        )
        half_w = grid.width * cell_size / 2.0
        half_h = grid.height * cell_size / 2.0
        top_left = Vec2(-half_w - cell_size / 2.0, (grid.height - 1) * cell_size - half_h + cell_size / 2.0)
        self.surface.blit(scaled, self._screen_point(top_left))

    def _draw_army(self, army: Army) -> None:
        self._square(army.position, army_marker_size(army.strength), ARMY_COLOR)
        label = self._font.render(str(int(army.strength)), True, ARMY_TEXT_COLOR)
        rect = label.get_rect()
        rect.center = self._screen_point(army.position + Vec2(0.0, ARMY_TEXT_OFFSET))
        self.surface.blit(label, rect)

    def draw(self, world: World) -> None:
        """Paint the whole world: territory, then capitals, then armies and their strengths."""
        self.surface.fill(BACKGROUND)
        self._draw_grid(world)
        for capital in world.capitals:
            color = CAPITAL_COLORS.get(capital.faction, ARMY_COLOR)
            self._square(capital.position, CAPITAL_SIZE, color)
        for army in world.armies:
            self._draw_army(army)

    def handle_event(self, event: pygame.event.Event, world: World) -> Army | None:
        """Keys 1 and 2 pick the spawn faction; a left click spawns an army there."""
        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_1:
                world.spawn_faction = -1
            elif event.key == pygame.K_2:
                world.spawn_faction = 1
            return None
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            return spawn_army_at(world, self.screen_to_world(event.pos))
        return None