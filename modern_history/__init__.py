"""Two-faction frontline war simulation on a territorial control grid, with a pygame window."""

__version__ = "0.1.0"