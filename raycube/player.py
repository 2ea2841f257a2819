"""The player: position, facing, rotation and collision-checked movement."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Sequence

from raycube.mathutils import Vec2, lerp, to_rad

ROT_SPD = 5
SPEED = 5
TOLERANCE = 0.5
ACCEL_LIMIT = 0.4
FOV_SCALE = 0.66

_YAWS = {"N": 90.0, "E": 0.0, "S": 270.0, "W": 180.0}
_FORWARD = ("W", "S")
_SIDEWAYS = ("A", "D")


def _round_half_away(value: float) -> int:
    if value >= 0:
        return math.floor(value + 0.5)
    return -math.floor(-value + 0.5)


def _is_wall(grid: Sequence[str], row: int, col: int) -> bool:
    """Cells outside the grid count as walls."""
    if row < 0 or row >= len(grid) or col < 0 or col >= len(grid[row]):
        return True
    return grid[row][col] == "1"


@dataclass
class Player:
    """Player state in map coordinates; ``yaw`` is in degrees, 0 facing east."""

    pos: Vec2 = field(default_factory=lambda: Vec2(-1.0, -1.0))
    dir: Vec2 = field(default_factory=Vec2)
    perp: Vec2 = field(default_factory=Vec2)
    fov: Vec2 = field(default_factory=Vec2)
    yaw: float = 0.0
    speed: float = 0.0
    rot_spd: float = ROT_SPD

    def update_dirs(self) -> None:
        """Recompute the facing vector and the camera plane from ``yaw``."""
        rad = to_rad(self.yaw)
        self.dir = Vec2(math.cos(rad), -math.sin(rad))
        self.fov = Vec2(self.dir.y * -FOV_SCALE, self.dir.x * FOV_SCALE)

    def _update_perp(self) -> None:
        rad = to_rad(90 - self.yaw)
        self.perp = Vec2(math.cos(rad), math.sin(rad))

    def rotate(self, direction: int) -> None:
        """Turn left (``1``) or right (``-1``) by ``rot_spd`` degrees."""
        if direction == 1:
            self.yaw += self.rot_spd
            if self.yaw >= 360:
                self.yaw -= 360
        elif direction == -1:
            self.yaw -= self.rot_spd
            if self.yaw <= 0:
                self.yaw += 360
        self.update_dirs()
        self._update_perp()

    def _blocked_x(self, grid: Sequence[str], vector: Vec2, sign: int) -> bool:
        tol = -TOLERANCE if vector.x * sign < 0 else TOLERANCE
        reach = vector.x * _round_half_away(self.speed) * sign
        return _is_wall(grid, int(self.pos.y), int(self.pos.x + reach + tol))

    def _blocked_y(self, grid: Sequence[str], vector: Vec2, sign: int) -> bool:
        tol = -TOLERANCE if vector.y * sign < 0 else TOLERANCE
        reach = vector.y * _round_half_away(self.speed) * sign
        return _is_wall(grid, int(self.pos.y + reach + tol), int(self.pos.x))

    def move(self, grid: Sequence[str], sign: int, cross: str, delta_time: float) -> None:
        """Step along the facing (``W``/``S``) or sideways (``A``/``D``) axis.

        ``sign`` is ``1`` or ``-1``. Each axis is checked against walls
        separately, the vertical one first.
        """
        if self.speed < ACCEL_LIMIT:
            self.speed = lerp(self.speed, SPEED, 0.1 * delta_time)
        if cross in _FORWARD:
            vector = self.dir
        elif cross in _SIDEWAYS:
            vector = self.perp
        else:
            return
        speed = self.speed
        if not self._blocked_y(grid, vector, sign):
            self.pos.y += speed * vector.y * sign
        if not self._blocked_x(grid, vector, sign):
            self.pos.x += speed * vector.x * sign


def spawn_player(x: int, y: int, direction: str) -> Player:
    """Create a player centred on cell ``(x, y)`` facing ``N``, ``S``, ``E`` or ``W``."""
    try:
        yaw = _YAWS[direction]
    except KeyError:
        raise ValueError(f"unknown start direction {direction!r}") from None
    player = Player(pos=Vec2(x + 0.5, y + 0.5), yaw=yaw)
    player._update_perp()
    player.update_dirs()
    return player