import pytest

from cubemaze.scene import (
    Scene,
    SceneError,
    check_extension,
    is_xpm,
    load_scene,
    parse_colour,
    parse_scene,
    rgb_to_int,
)

HEADER = (
    "NO ./textures/north.xpm\n"
    "SO ./textures/south.xpm\n"
    "WE ./textures/west.xpm\n"
    "EA ./textures/east.xpm\n"
    "\n"
    "F 220,100,0\n"
    "C 225,30,0\n"
    "\n"
)
MAP_LINES = ["111111", "100001", "10N001", "111111"]
SCENE_TEXT = HEADER + "\n".join(MAP_LINES)


def _channels(value):
    return (value >> 24) & 0xFF, (value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF


def test_check_extension_accepts_cub():
    assert check_extension("maps/level.cub") == "maps/level.cub"


@pytest.mark.parametrize("path", ["maps/level.ber", "level.cub.txt", "cub"])
def test_check_extension_rejects_others(path):
    with pytest.raises(SceneError, match=".cub files"):
        check_extension(path)


def test_is_xpm():
    assert is_xpm("./textures/wall.xpm") is True
    assert is_xpm("./textures/wall.png") is False
    assert is_xpm("./textures/wall.xpm ") is False


def test_rgb_to_int_round_trip():
    assert _channels(rgb_to_int(12, 34, 56)) == (255, 12, 34, 56)
    assert _channels(rgb_to_int(0, 0, 0)) == (255, 0, 0, 0)


def test_parse_colour_matches_rgb_to_int():
    assert parse_colour("220,100,0") == rgb_to_int(220, 100, 0)
    assert parse_colour("220,100,0\n") == rgb_to_int(220, 100, 0)


def test_parse_colour_skips_empty_fields():
    assert parse_colour("1,,2,3") == rgb_to_int(1, 2, 3)


@pytest.mark.parametrize(
    "text",
    ["256,0,0", "1,2", "1,2,3,4", "a,b,c", " 1,2,3", "1, 2,3", "-1,0,0", "", ","],
)
def test_parse_colour_rejects_bad_values(text):
    with pytest.raises(SceneError, match="Wrong colour format"):
        parse_colour(text)


def test_parse_scene_reads_textures_and_colours():
    scene = parse_scene(SCENE_TEXT)
    assert scene.north == "./textures/north.xpm"
    assert scene.south == "./textures/south.xpm"
    assert scene.west == "./textures/west.xpm"
    assert scene.east == "./textures/east.xpm"
    assert scene.floor == rgb_to_int(220, 100, 0)
    assert scene.ceiling == rgb_to_int(225, 30, 0)


def test_parse_scene_grid_is_padded_rectangle():
    scene = parse_scene(SCENE_TEXT)
    assert scene.rows == len(MAP_LINES)
    assert scene.columns == len(MAP_LINES[0]) + 1
    assert all(len(row) == scene.columns for row in scene.grid)
    assert [row.rstrip(" ") for row in scene.grid] == MAP_LINES
    assert all("\n" not in row for row in scene.grid)


def test_parse_scene_pads_short_rows_with_spaces():
    text = HEADER + "1111111\n101\n1111111\n"
    scene = parse_scene(text)
    assert scene.columns == len("1111111\n")
    assert scene.grid[1].startswith("101")
    assert set(scene.grid[1][3:]) == {" "}


def test_spaces_after_identifier_are_skipped():
    text = SCENE_TEXT.replace("NO ./", "NO     ./").replace("F 220", "F    220")
    scene = parse_scene(text)
    assert scene.north == "./textures/north.xpm"
    assert scene.floor == rgb_to_int(220, 100, 0)


def test_empty_file():
    with pytest.raises(SceneError, match="Empty file"):
        parse_scene("")


def test_empty_line_inside_map():
    text = HEADER + "111111\n\n100001\n111111"
    with pytest.raises(SceneError, match="Empty line"):
        parse_scene(text)


def test_empty_line_after_map():
    with pytest.raises(SceneError, match="Empty line"):
        parse_scene(SCENE_TEXT + "\n\n")


@pytest.mark.parametrize(
    ("identifier", "side"),
    [("NO", "north"), ("SO", "south"), ("WE", "west"), ("EA", "east")],
)
def test_missing_texture(identifier, side):
    text = "".join(
        line + "\n" for line in SCENE_TEXT.split("\n") if not line.startswith(identifier)
    )
    with pytest.raises(SceneError, match=f"No {side} texture"):
        parse_scene(text)


@pytest.mark.parametrize(("identifier", "name"), [("F ", "floor"), ("C ", "ceiling")])
def test_missing_colour(identifier, name):
    text = "".join(
        line + "\n" for line in SCENE_TEXT.split("\n") if not line.startswith(identifier)
    )
    with pytest.raises(SceneError, match=f"No {name} colour"):
        parse_scene(text)


def test_duplicate_texture():
    with pytest.raises(SceneError, match="Same texture"):
        parse_scene("NO ./a.xpm\n" + SCENE_TEXT)


def test_duplicate_colour():
    with pytest.raises(SceneError, match="Same colour"):
        parse_scene("C 1,2,3\n" + SCENE_TEXT)


def test_wrong_texture_format():
    text = SCENE_TEXT.replace("north.xpm", "north.png")
    with pytest.raises(SceneError, match="Wrong texture format"):
        parse_scene(text)


def test_wrong_colour_in_scene():
    text = SCENE_TEXT.replace("F 220,100,0", "F 220,100")
    with pytest.raises(SceneError, match="Wrong colour format"):
        parse_scene(text)


def test_colour_line_after_map_becomes_map_row():
    text = SCENE_TEXT.replace("C 225,30,0\n", "") + "\nC 1,2,3"
    scene = parse_scene(text)
    assert scene.ceiling == rgb_to_int(1, 2, 3)
    assert scene.grid[-1].rstrip(" ") == "C 1,2,3"


def test_load_scene_from_file(tmp_path):
    path = tmp_path / "level.cub"
    path.write_text(SCENE_TEXT)
    scene = load_scene(path)
    assert isinstance(scene, Scene)
    assert [row.rstrip(" ") for row in scene.grid] == MAP_LINES
    assert scene.east == "./textures/east.xpm"


def test_load_scene_missing_file(tmp_path):
    with pytest.raises(SceneError, match="File does not exist"):
        load_scene(tmp_path / "absent.cub")


def test_load_scene_rejects_extension(tmp_path):
    path = tmp_path / "level.txt"
    path.write_text(SCENE_TEXT)
    with pytest.raises(SceneError, match=".cub files"):
        load_scene(path)