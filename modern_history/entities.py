"""Plain data of the simulation: vectors, armies, orders and capitals."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterator


@dataclass(frozen=True)
class Vec2:
    """An immutable two-dimensional vector."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Vec2:
        return Vec2(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vec2:
        return Vec2(self.x / scalar, self.y / scalar)

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def distance(self, other: Vec2) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def normalize_or_zero(self) -> Vec2:
        """Unit vector in the same direction, or the zero vector if there is none."""
        length = self.length()
        if length == 0.0 or not math.isfinite(length):
            return ZERO
        return Vec2(self.x / length, self.y / length)


ZERO = Vec2(0.0, 0.0)


class FlankSide(Enum):
    LEFT = "left"
    RIGHT = "right"


@dataclass
class ArmyOrder:
    """Where an army is heading and whether it is falling back."""

    target: Vec2
    retreating: bool = False


@dataclass
class Flanking:
    """A flanking manoeuvre: the final target behind a salient."""

    target: Vec2
    side: FlankSide


@dataclass(eq=False)
class Army:
    """A field army. Faction is -1 or +1; speed is in world units per second."""

    position: Vec2
    strength: float
    faction: int
    speed: float
    order: ArmyOrder | None = None
    flanking: Flanking | None = None
    defending: bool = False
    id: int = -1


@dataclass(frozen=True)
class Capital:
    """A faction's capital city, the source of supply and reinforcements."""

    faction: int
    position: Vec2