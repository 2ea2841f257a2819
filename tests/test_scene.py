import io

import pytest

from raycube.scene import (
    MapError,
    Scene,
    TextureSpec,
    check_allowed,
    check_enclosed,
    find_player,
    load_scene,
    pad_grid,
    parse_scene,
    read_lines,
)

CONFIG = [
    "NO ./textures/north.png\n",
    "SO ./textures/south.png\n",
    "WE ./textures/west.png\n",
    "EA ./textures/east.png\n",
    "F 220,100,0\n",
    "C 225,30,0\n",
]

MAP = [
    "111111\n",
    "100001\n",
    "10N001\n",
    "111111\n",
]


def scene_lines(rows=None):
    return CONFIG + (MAP if rows is None else rows)


def test_read_lines_keeps_newlines():
    assert list(read_lines(io.StringIO("a\nb"))) == ["a\n", "b"]


def test_parse_valid_scene_textures():
    scene = parse_scene(scene_lines())
    assert isinstance(scene, Scene)
    assert scene.textures == (
        TextureSpec("NO", "./textures/north.png"),
        TextureSpec("SO", "./textures/south.png"),
        TextureSpec("WE", "./textures/west.png"),
        TextureSpec("EA", "./textures/east.png"),
    )


def test_parse_valid_scene_colours():
    scene = parse_scene(scene_lines())
    assert scene.floor == (220, 100, 0, 0)
    assert scene.ceiling == (225, 30, 0, 0)


def test_parse_valid_scene_grid_is_padded():
    scene = parse_scene(scene_lines())
    assert scene.height == len(MAP)
    assert scene.width == max(len(line.rstrip("\n")) for line in scene_lines())
    assert all(len(row) == scene.width for row in scene.grid)
    assert [row.rstrip() for row in scene.grid] == [m.rstrip("\n") for m in MAP]


def test_parse_valid_scene_start():
    scene = parse_scene(scene_lines())
    assert scene.start == (2, 2, "N")


def test_open_floor_is_not_enclosed():
    rows = ["111111\n", "10 001\n", "10N001\n", "111111\n"]
    with pytest.raises(MapError, match="not enclosed"):
        parse_scene(scene_lines(rows))


def test_open_top_wall_is_not_enclosed():
    rows = ["110111\n", "100001\n", "10N001\n", "111111\n"]
    with pytest.raises(MapError, match="not enclosed"):
        parse_scene(scene_lines(rows))


def test_forbidden_character():
    rows = ["111111\n", "10X001\n", "10N001\n", "111111\n"]
    with pytest.raises(MapError, match="not allowed"):
        parse_scene(scene_lines(rows))


def test_missing_player():
    rows = ["111111\n", "100001\n", "100001\n", "111111\n"]
    with pytest.raises(MapError, match="Missing required"):
        parse_scene(scene_lines(rows))


def test_two_players():
    rows = ["111111\n", "10S001\n", "10N001\n", "111111\n"]
    with pytest.raises(MapError, match="Missing required"):
        parse_scene(scene_lines(rows))


def test_map_too_small():
    with pytest.raises(MapError, match="Parser failure"):
        parse_scene(scene_lines(["111111\n", "1N0001\n"]))


def test_map_before_configuration_is_rejected():
    lines = CONFIG[:4] + ["111111\n"] + CONFIG[4:] + MAP
    with pytest.raises(MapError, match="Parser failure"):
        parse_scene(lines)


def test_first_line_too_short():
    with pytest.raises(MapError, match="Parser failure"):
        parse_scene(["NO\n"] + scene_lines()[1:])


def test_empty_input():
    with pytest.raises(MapError, match="Parser failure"):
        parse_scene([])


def test_colour_line_without_space():
    lines = scene_lines()
    lines[4] = "F220,100,0\n"
    with pytest.raises(MapError, match="Parser failure"):
        parse_scene(lines)


def test_colour_missing_components_default_to_zero():
    lines = scene_lines()
    lines[5] = "C 7\n"
    assert parse_scene(lines).ceiling == (7, 0, 0, 0)


def test_pad_grid_fills_with_spaces():
    assert pad_grid(["11", "1"], 3) == ["11 ", "1  "]


def test_pad_grid_keeps_longer_rows():
    padded = pad_grid(["11111", "1"], 3)
    assert padded[0] == "11111"
    assert padded[1].startswith("1") and padded[1].strip() == "1"


def test_check_enclosed_true():
    assert check_enclosed(["111", "101", "111"]) is True


def test_check_enclosed_floor_at_edge():
    assert check_enclosed(["111", "100", "111"]) is False


def test_check_enclosed_empty_grid():
    assert check_enclosed([]) is False


def test_check_allowed():
    assert check_allowed(["10N", "1 E\n"]) is True
    assert check_allowed(["1X"]) is False


def test_find_player_returns_column_row_direction():
    assert find_player(["111", "1W1"]) == (1, 1, "W")


def test_find_player_none():
    with pytest.raises(MapError):
        find_player(["111", "101"])


def test_load_scene_from_file(tmp_path):
    path = tmp_path / "level.cub"
    path.write_text("".join(scene_lines()), encoding="utf-8")
    scene = load_scene(path)
    assert scene.start == (2, 2, "N")
    assert scene.textures[0].name == "NO"


def test_load_scene_wrong_extension(tmp_path):
    path = tmp_path / "level.txt"
    path.write_text("".join(scene_lines()), encoding="utf-8")
    with pytest.raises(MapError, match="Can't open map"):
        load_scene(path)


def test_load_scene_missing_file(tmp_path):
    with pytest.raises(MapError, match="Can't open map"):
        load_scene(tmp_path / "absent.cub")