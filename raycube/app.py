"""The game loop: keyboard handling, rendering to a window, and the command entry point."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import AbstractSet, Mapping, Optional, Sequence

import numpy as np

from raycube.player import Player, spawn_player
from raycube.raycast import HEIGHT, WIDTH, render_frame
from raycube.scene import MapError, Scene, load_scene
from raycube.textures import Side, Texture, load_wall_textures

TITLE = "raycube"
FAREWELL = "\nGame Ended succesfully"

KEY_FORWARD = "w"
KEY_BACKWARD = "s"
KEY_STRAFE_RIGHT = "d"
KEY_STRAFE_LEFT = "a"
KEY_TURN_RIGHT = "right"
KEY_TURN_LEFT = "left"
KEY_QUIT = "escape"

_MOVES = (
    (KEY_FORWARD, 1, "W"),
    (KEY_BACKWARD, -1, "S"),
    (KEY_STRAFE_RIGHT, 1, "D"),
    (KEY_STRAFE_LEFT, -1, "A"),
)
_TURNS = (
    (KEY_TURN_RIGHT, -1),
    (KEY_TURN_LEFT, 1),
)


def _to_rgb(frame: np.ndarray) -> np.ndarray:
    """Unpack a ``(height, width)`` array of ``0xRRGGBBAA`` into a ``(width, height, 3)`` RGB array."""
    channels = [(frame >> shift) & 0xFF for shift in (24, 16, 8)]
    rgb = np.stack(channels, axis=-1).astype(np.uint8)
    return rgb.swapaxes(0, 1)


@dataclass
class Game:
    """A running game: the scene, its wall textures and the player."""

    scene: Scene
    textures: Mapping[Side, Texture] = field(default_factory=dict)
    player: Player = field(init=False)

    def __post_init__(self) -> None:
        x, y, direction = self.scene.start
        self.player = spawn_player(x, y, direction)

    def update(self, pressed: AbstractSet[str], delta_time: float) -> bool:
        """Apply one frame of input; return ``False`` once the quit key is held.

        ``pressed`` holds key names such as ``"w"``, ``"left"`` or ``"escape"``.
        """
        grid = self.scene.grid
        for key, sign, cross in _MOVES:
            if key in pressed:
                self.player.move(grid, sign, cross, delta_time)
        for key, direction in _TURNS:
            if key in pressed:
                self.player.rotate(direction)
        return KEY_QUIT not in pressed

    def frame(self) -> np.ndarray:
        """Render the current view as packed RGBA colours."""
        return render_frame(
            self.scene.grid,
            self.player,
            self.textures,
            self.scene.floor,
            self.scene.ceiling,
        )

    def run(self) -> None:
        """Open a window and play until it is closed or the quit key is pressed."""
        import pygame

        key_codes = {
            KEY_FORWARD: pygame.K_w,
            KEY_BACKWARD: pygame.K_s,
            KEY_STRAFE_RIGHT: pygame.K_d,
            KEY_STRAFE_LEFT: pygame.K_a,
            KEY_TURN_RIGHT: pygame.K_RIGHT,
            KEY_TURN_LEFT: pygame.K_LEFT,
            KEY_QUIT: pygame.K_ESCAPE,
        }
        pygame.init()
        try:
            screen = pygame.display.set_mode((WIDTH, HEIGHT), pygame.RESIZABLE)
            pygame.display.set_caption(TITLE)
            canvas = pygame.Surface((WIDTH, HEIGHT))
            clock = pygame.time.Clock()
            delta_time = 0.0
            running = True
            while running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        running = False
                if not running:
                    break
                state = pygame.key.get_pressed()
                pressed = {name for name, code in key_codes.items() if state[code]}
                if not self.update(pressed, delta_time):
                    break
                pygame.surfarray.blit_array(canvas, _to_rgb(self.frame()))
                if screen.get_size() == canvas.get_size():
                    screen.blit(canvas, (0, 0))
                else:
                    screen.blit(pygame.transform.scale(canvas, screen.get_size()), (0, 0))
                pygame.display.flip()
                delta_time = clock.tick() / 1000.0
        finally:
            pygame.quit()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Load the ``.cub`` scene named on the command line and play it."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        if len(args) != 1:
            raise MapError("Invalid number of arguments")
        scene = load_scene(args[0])
        textures = load_wall_textures(scene.textures)
    except MapError as exc:
        print("Error!", file=sys.stderr)
        print(exc, file=sys.stderr)
        print(FAREWELL)
        return 0
    Game(scene, textures).run()
    print(FAREWELL)
    return 0


if __name__ == "__main__":
    sys.exit(main())