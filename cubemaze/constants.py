"""Fixed dimensions, speeds, key codes and colours used across the game."""

import math

CELL_SIZE = 128
MINI_CELL_SIZE = 16
STEP_SIZE = 8
TURN_ANGLE = 0.065
PLAYER_SIZE = 8
MINI_PLAYER_SIZE = 16

SCREEN_WIDTH = 1920
SCREEN_HEIGHT = 1020

FOV_ANGLE = math.pi / 3

KEY_W = 119
KEY_S = 115
KEY_A = 97
KEY_D = 100
KEY_LEFT = 65361
KEY_RIGHT = 65363
KEY_ESC = 65307

WINDOW_TITLE = "Cube3D"
GUN_TEXTURE = "./assets/2000p.xpm"

MINIMAP_EMPTY_COLOR = 0x000000
MINIMAP_WALL_COLOR = 0x696969
MINIMAP_FLOOR_COLOR = 0xFFFFFF
MINIMAP_PLAYER_COLOR = 0x0000FF

CEILING_COLOR_STEP = 10000