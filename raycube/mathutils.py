"""Small numeric helpers: 2D vectors, interpolation, angles and a stopwatch."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass, field
from typing import Callable, Optional


@dataclass
class Vec2:
    """A mutable two-dimensional vector of floats."""

    x: float = 0.0
    y: float = 0.0

    @property
    def length(self) -> float:
        """Euclidean length of the vector."""
        return math.hypot(self.x, self.y)

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Vec2:
        return Vec2(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __iter__(self):
        yield self.x
        yield self.y


def lerp(start: float, end: float, rate: float) -> float:
    """Linearly interpolate from ``start`` towards ``end`` by ``rate``."""
    return start * (1.0 - rate) + end * rate


def to_rad(degree: float) -> float:
    """Convert degrees to radians."""
    return degree * (math.pi / 180)


@dataclass
class Stopwatch:
    """Milliseconds elapsed since the first reading was taken."""

    clock: Callable[[], float] = time.monotonic
    _start: Optional[float] = field(default=None, init=False, repr=False)

    def elapsed_ms(self) -> int:
        """Return whole milliseconds since the first call; the first call returns 0."""
        now = self.clock()
        if self._start is None:
            self._start = now
        return int((now - self._start) * 1000)