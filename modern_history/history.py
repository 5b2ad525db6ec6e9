"""Periodic snapshots of grid control, used to see where the front is moving."""

from __future__ import annotations

from .grid import Grid
from .timer import Timer


class GridHistory:
    """Remembers the control of each cell at the last snapshot."""

    def __init__(self, grid: Grid, snapshot_interval: float) -> None:
        self.previous_control = [cell.control for cell in grid.cells]
        self._timer = Timer(snapshot_interval)

    def control_delta(self, grid: Grid) -> list[float]:
        """Change of control in each cell since the last snapshot."""
        return [cell.control - prev for cell, prev in zip(grid.cells, self.previous_control)]

    def snapshot(self, grid: Grid, delta: float) -> bool:
        """Advance the snapshot timer; record the grid and return True when it fires."""
        if not self._timer.tick(delta).finished:
            return False
        self.previous_control = [cell.control for cell in grid.cells]
        return True