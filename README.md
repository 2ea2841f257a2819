# raycube

A small first-person raycasting engine. It reads a `.cub` scene file that
names four wall textures, gives two background colours and lays out a grid
map, then draws the walls column by column with a DDA raycaster in a pygame
window.

## Installing

```
pip install .
```

For running the tests:

```
pip install .[test]
pytest
```

## Running

```
raycube maps/example.cub
```

Exactly one argument is expected: the path to a file ending in `.cub`.
The window is 1280 x 720 and may be resized; the picture is scaled to fit.

| Key          | Action              |
|--------------|---------------------|
| W / S        | move forward / back |
| A / D        | strafe              |
| Left / Right | turn by 5 degrees   |
| Escape       | quit                |

Closing the window also ends the game. On leaving, the command prints
`Game Ended succesfully`.

If the arguments are wrong, the scene is invalid or a texture cannot be
loaded, `Error!` and the reason are written to standard error and the
command ends without opening a window.

## The `.cub` format

```
NO ./textures/north.png
SO ./textures/south.png
EA ./textures/east.png
WE ./textures/west.png
F 220,100,0
C 225,30,0
111111
100001
10N001
111111
```

- Lines 1 to 4 are textures, each `NAME path`, split at the first space.
  They are assigned to the north, south, east and west faces in the order
  they appear; the name itself is not checked.
- Lines 5 and 6 are colours, `X r,g,b`: the text after the first space is
  split on commas and each part read as an integer. Missing values are 0.
  With the renderer as it stands, the line-5 colour fills the upper half of
  the screen and the line-6 colour the lower half.
- None of the first six lines may start with `1` or a space, and the first
  line must be at least four characters long.
- Every remaining line is a map row, at least three rows. Rows are padded
  with spaces to the width of the longest line in the file.

Map cells may hold `0` (floor), `1` (wall), a space (outside the map) and
exactly one of `N`, `S`, `E`, `W`, which marks the player's start cell and
facing. The first and last rows may hold only walls and spaces, and no
floor cell may touch a space or the edge of the grid. Otherwise
`raycube.scene.MapError` is raised with one of the messages
`Map is not enclosed.`, `Has a character not allowed.` or
`Missing required characters.` (checked in that order), or a
`Parser failure: ...` message for a badly shaped file.

Textures are read with Pillow and converted to RGBA. Walls are sampled as
64 x 64 textures, so images should be at least that size. Texels that are
fully transparent black are not drawn.

## Using it as a library

```python
from raycube.scene import load_scene
from raycube.textures import load_wall_textures
from raycube.app import Game

scene = load_scene("maps/example.cub")
game = Game(scene, load_wall_textures(scene.textures))
game.update({"w", "left"}, delta_time=0.016)
frame = game.frame()  # 720 x 1280 numpy array of 0xRRGGBBAA values
```

- `raycube.scene`: `parse_scene(lines)` parses the lines of a scene,
  `load_scene(path)` opens a file; `Scene`, `TextureSpec`, `MapError`, and
  the checks `pad_grid`, `check_enclosed`, `check_allowed`, `find_player`.
- `raycube.player`: `Player` with `rotate`, `update_dirs` and `move`, and
  `spawn_player(x, y, direction)`.
- `raycube.textures`: `Texture`, `Side`, `get_rgba`, `load_texture`,
  `load_wall_textures` and `sprite_path`.
- `raycube.raycast`: `cast_ray(grid, player, x)` traces one screen column
  and returns a `RayHit`; `wall_side`, `draw_column` and `render_frame`.
- `raycube.mathutils`: `Vec2`, `lerp`, `to_rad` and `Stopwatch`.
- `raycube.app`: `Game` (`update`, `frame`, `run`) and `main(argv=None)`.

## What it does not do

There is no mouse look, no minimap, no sound and no animated textures;
only the keys above are read.