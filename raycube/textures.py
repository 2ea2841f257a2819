"""Wall textures: loading images and reading packed RGBA colours."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterable

import numpy as np
from PIL import Image

from raycube.scene import MapError, TextureSpec

SPRITE_DIR = "./textures/wall/"


class Side(enum.IntEnum):
    """Which wall face a texture belongs to, in the order they are declared."""

    NO = 0
    SO = 1
    EA = 2
    WE = 3


def get_rgba(r: int, g: int, b: int, a: int) -> int:
    """Pack four 8-bit channels into one 32-bit ``0xRRGGBBAA`` value."""
    return ((r & 0xFF) << 24) | ((g & 0xFF) << 16) | ((b & 0xFF) << 8) | (a & 0xFF)


def sprite_path(name: str, nb: int) -> str:
    """Path of frame ``nb`` of the wall sprite called ``name``."""
    return f"{SPRITE_DIR}{name}_{nb}.png"


@dataclass(frozen=True)
class Texture:
    """An RGBA image, stored row by row with four bytes per pixel."""

    width: int
    height: int
    pixels: bytes
    colors: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("texture dimensions must be positive")
        if len(self.pixels) != self.width * self.height * 4:
            raise ValueError("pixel data does not match texture dimensions")
        raw = np.frombuffer(self.pixels, dtype=np.uint8)
        raw = raw.reshape(self.height, self.width, 4).astype(np.uint32)
        packed = (raw[..., 0] << 24) | (raw[..., 1] << 16) | (raw[..., 2] << 8) | raw[..., 3]
        object.__setattr__(self, "colors", packed.astype(np.uint32))

    def color_at(self, x: int, y: int) -> int:
        """Packed ``0xRRGGBBAA`` colour of the pixel at column ``x``, row ``y``."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside texture")
        return int(self.colors[y, x])


def load_texture(path: str) -> Texture:
    """Load an image file as an RGBA texture."""
    try:
        with Image.open(path) as image:
            rgba = image.convert("RGBA")
            return Texture(rgba.width, rgba.height, rgba.tobytes())
    except OSError as exc:
        raise MapError("texture failed to load") from exc


def load_wall_textures(specs: Iterable[TextureSpec]) -> dict[Side, Texture]:
    """Load textures, assigning sides in declaration order: NO, SO, EA, WE."""
    return {side: load_texture(spec.path) for side, spec in zip(Side, specs)}