"""Grid raycasting and frame composition."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Sequence

import numpy as np

from raycube.mathutils import Vec2
from raycube.player import Player
from raycube.scene import MapError
from raycube.textures import Side, Texture, get_rgba

WIDTH = 1280
HEIGHT = 720
TEX_WIDTH = 64
TEX_HEIGHT = 64

_HUGE = 1e30
_MAX_LINE = 2**31 - 1


@dataclass(frozen=True)
class RayHit:
    """Where one screen column's ray met a wall and how tall that wall is drawn."""

    dir: Vec2
    map_x: int
    map_y: int
    side: int
    wall_dist: float
    wall_x: float
    line_height: int
    draw_start: int
    draw_end: int


def _hits_wall(grid: Sequence[str], row: int, col: int) -> bool:
    if row < 0 or row >= len(grid) or col < 0 or col >= len(grid[row]):
        return True
    return grid[row][col] == "1"


def _delta(component: float) -> float:
    return abs(1 / component) if component != 0 else _HUGE


def cast_ray(grid: Sequence[str], player: Player, x: int) -> RayHit:
    """Cast the ray for screen column ``x`` through the grid with DDA."""
    camera_x = 2 * x / WIDTH - 1
    ray = Vec2(
        player.dir.x + player.fov.x * camera_x,
        player.dir.y + player.fov.y * camera_x,
    )
    pos = player.pos
    map_x, map_y = int(pos.x), int(pos.y)
    delta_x, delta_y = _delta(ray.x), _delta(ray.y)

    if ray.x < 0:
        step_x, side_x = -1, (pos.x - map_x) * delta_x
    else:
        step_x, side_x = 1, (map_x + 1.0 - pos.x) * delta_x
    if ray.y < 0:
        step_y, side_y = -1, (pos.y - map_y) * delta_y
    else:
        step_y, side_y = 1, (map_y + 1.0 - pos.y) * delta_y

    while True:
        if side_x < side_y:
            side_x += delta_x
            map_x += step_x
            side = 0
        else:
            side_y += delta_y
            map_y += step_y
            side = 1
        if _hits_wall(grid, map_y, map_x):
            break

    wall_dist = side_y - delta_y if side else side_x - delta_x
    line_height = int(HEIGHT / wall_dist) if wall_dist > 0 else _MAX_LINE
    draw_start = max(-(line_height // 2) + HEIGHT // 2, 0)
    draw_end = min(line_height // 2 + HEIGHT // 2, HEIGHT - 1)
    if side == 0:
        wall_x = pos.y + wall_dist * ray.y
    else:
        wall_x = pos.x + wall_dist * ray.x
    wall_x -= np.floor(wall_x)
    return RayHit(
        ray, map_x, map_y, side, wall_dist, float(wall_x),
        line_height, draw_start, draw_end,
    )


def wall_side(hit: RayHit) -> Side:
    """Which face of the wall the ray struck."""
    if hit.side == 0:
        return Side.WE if hit.dir.x < 0 else Side.EA
    return Side.SO if hit.dir.y > 0 else Side.NO


def draw_column(
    buffer: np.ndarray, hit: RayHit, textures: Mapping[Side, Texture], x: int
) -> None:
    """Write the textured wall slice of ``hit`` into column ``x`` of ``buffer``.

    Fully transparent black texels (colour 0) are left unwritten.
    """
    texture = textures.get(wall_side(hit))
    if texture is None:
        raise MapError("set_texture Failure")
    tex_x = int(hit.wall_x * TEX_WIDTH)
    if (hit.side == 0 and hit.dir.x > 0) or (hit.side == 1 and hit.dir.y < 0):
        tex_x = TEX_WIDTH - tex_x - 1
    count = hit.draw_end - hit.draw_start
    if count <= 0:
        return
    step = TEX_HEIGHT / hit.line_height
    start = (hit.draw_start - HEIGHT // 2 + hit.line_height // 2) * step
    increments = np.full(count, step, dtype=np.float64)
    increments[0] = start
    positions = np.cumsum(increments)
    tex_y = positions.astype(np.int64) % TEX_HEIGHT
    colors = texture.colors[tex_y, tex_x]
    rows = np.arange(hit.draw_start, hit.draw_end)
    visible = colors > 0
    buffer[rows[visible], x] = colors[visible]


def render_frame(
    grid: Sequence[str],
    player: Player,
    textures: Mapping[Side, Texture],
    floor: Sequence[int],
    ceiling: Sequence[int],
) -> np.ndarray:
    """Render a ``HEIGHT`` x ``WIDTH`` array of packed RGBA colours.

    Rows below the horizon take the ``ceiling`` colour and rows above it
    the ``floor`` colour; the horizon row itself stays 0 where no wall is.
    """
    player.update_dirs()
    walls = np.zeros((HEIGHT, WIDTH), dtype=np.uint32)
    for x in range(WIDTH):
        draw_column(walls, cast_ray(grid, player, x), textures, x)
    floor_color = get_rgba(floor[0], floor[1], floor[2], 255)
    ceiling_color = get_rgba(ceiling[0], ceiling[1], ceiling[2], 255)
    rows = np.arange(HEIGHT)[:, None]
    half = HEIGHT // 2
    background = np.where(
        rows > half, ceiling_color, np.where(rows < half, floor_color, 0)
    ).astype(np.uint32)
    return np.where(walls > 0, walls, background).astype(np.uint32)