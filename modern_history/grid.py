"""The control grid on which the two factions fight for territory."""

from __future__ import annotations

from dataclasses import dataclass

BORDER_WIDTH = 10


@dataclass
class Cell:
    """One grid cell. Control runs from -1.0 to 1.0; pressure is the current influence."""

    control: float = 0.0
    pressure: float = 0.0


class Grid:
    """A width-by-height field of cells stored row by row."""

    def __init__(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError("grid dimensions must not be negative")
        self.width = width
        self.height = height
        self.cells = [Cell() for _ in range(width * height)]

    def index(self, x: int, y: int) -> int:
        """Position of cell (x, y) in ``cells``."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"cell ({x}, {y}) outside {self.width}x{self.height} grid")
        return y * self.width + x

    def get(self, x: int, y: int) -> Cell:
        """The cell at (x, y); changes to it change the grid."""
        return self.cells[self.index(x, y)]

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height


def setup_grid(grid: Grid) -> None:
    """Split the grid between the factions with a linear border in the middle."""
    half_width = grid.width // 2
    left_edge = max(half_width - BORDER_WIDTH, 0)
    right_edge = min(half_width + BORDER_WIDTH, grid.width)

    for idx, cell in enumerate(grid.cells):
        x = idx % grid.width
        if x < left_edge:
            cell.control = -1.0
        elif x >= right_edge:
            cell.control = 1.0
        else:
            t = (x - left_edge) / (BORDER_WIDTH * 2)
            cell.control = t * 2.0 - 1.0