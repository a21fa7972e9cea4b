import math

import pytest

from cubemaze.constants import CELL_SIZE, SCREEN_HEIGHT, SCREEN_WIDTH
from cubemaze.player import Player
from cubemaze.raycast import (
    Ray,
    WallSide,
    cast_all,
    cast_ray,
    hit_test,
    ray_directions,
)
from cubemaze.validate import StartPosition

ROOM = ["11111 ", "10001 ", "10N01 ", "10001 ", "11111 "]
CENTRE = SCREEN_WIDTH // 2
WALL_DISTANCE = CELL_SIZE + CELL_SIZE // 2


def make_player(direction):
    return Player.from_start(StartPosition(2, 2, direction))


@pytest.mark.parametrize(
    "angle, expected",
    [
        (math.pi / 4, (1, 1)),
        (3 * math.pi / 4, (-1, 1)),
        (5 * math.pi / 4, (-1, -1)),
        (7 * math.pi / 4, (1, -1)),
        (2 * math.pi + 0.1, (1, 1)),
        (-0.1, (1, -1)),
        (0.0, (1, -1)),
        (math.pi / 2, (1, 1)),
    ],
)
def test_ray_directions(angle, expected):
    assert ray_directions(angle) == expected


@pytest.mark.parametrize(
    "row, col, expected",
    [(0, 0, 1), (2, 2, 0), (1, 1, 0), (0, 5, 0), (-1, 0, -1), (5, 0, -1), (0, 6, -1), (0, -1, -1)],
)
def test_hit_test(row, col, expected):
    assert hit_test(ROOM, row, col) == expected


def test_step_vertical_straight_right():
    ray = Ray(angle=0.0, x=320.0, y=320.0, row=2, col=2, x_dir=1, y_dir=-1)
    length = ray.step_vertical()
    assert length == CELL_SIZE // 2
    assert ray.x == 3 * CELL_SIZE
    assert ray.y == 320.0
    assert (ray.row, ray.col) == (2, 3)


def test_step_horizontal_straight_up():
    ray = Ray(angle=3 * math.pi / 2, x=320.0, y=320.0, row=2, col=2, x_dir=1, y_dir=-1)
    length = ray.step_horizontal()
    assert length == CELL_SIZE // 2
    assert ray.y == 2 * CELL_SIZE
    assert (ray.row, ray.col) == (1, 2)


def test_step_horizontal_straight_down():
    ray = Ray(angle=math.pi / 2, x=320.0, y=320.0, row=2, col=2, x_dir=1, y_dir=1)
    ray.step_horizontal()
    assert ray.row == 3
    assert ray.y == 3 * CELL_SIZE


def test_step_horizontal_parallel_ray_never_reaches():
    ray = Ray(angle=0.0, x=320.0, y=320.0, row=2, col=2, x_dir=1, y_dir=-1)
    length = ray.step_horizontal()
    assert math.isinf(length)
    assert ray.x == 320.0
    assert ray.row == 1


@pytest.mark.parametrize(
    "direction, side, horizontal",
    [
        ("N", WallSide.NORTH, True),
        ("S", WallSide.SOUTH, True),
        ("E", WallSide.EAST, False),
        ("W", WallSide.WEST, False),
    ],
)
def test_centre_ray_hits_facing_wall(direction, side, horizontal):
    column = cast_ray(ROOM, make_player(direction), CENTRE)
    assert column.distance == WALL_DISTANCE
    assert column.side is side
    assert column.hit_horizontal is horizontal
    assert column.x == CENTRE


def test_column_is_centred_vertically():
    column = cast_ray(ROOM, make_player("N"), CENTRE)
    assert column.top + column.bottom == SCREEN_HEIGHT
    assert column.bottom - column.top >= column.height


def test_cast_all_facing_north_sees_only_north_wall():
    columns = cast_all(ROOM, make_player("N"))
    assert len(columns) == SCREEN_WIDTH
    assert [column.x for column in columns] == list(range(SCREEN_WIDTH))
    assert all(column.side is WallSide.NORTH for column in columns)
    assert all(abs(column.distance - WALL_DISTANCE) <= 1 for column in columns)
    assert all(0 <= column.offset_x < CELL_SIZE for column in columns)
    assert all(column.top + column.bottom == SCREEN_HEIGHT for column in columns)


def test_cast_all_matches_single_ray():
    player = make_player("E")
    columns = cast_all(ROOM, player)
    assert columns[CENTRE] == cast_ray(ROOM, player, CENTRE)


def test_nearer_wall_is_taller():
    player = make_player("N")
    far = cast_ray(ROOM, player, CENTRE)
    player.y -= CELL_SIZE // 2
    near = cast_ray(ROOM, player, CENTRE)
    assert near.distance < far.distance
    assert near.height > far.height