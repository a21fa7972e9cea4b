# cubemaze

cubemaze is a small first-person maze explorer. It reads a scene from a `.cub` file, checks the map, and draws the maze from the player's point of view with textured walls, using grid raycasting. A minimap in the top-left corner shows the maze and where you are. The window is drawn with pygame.

## Installing

```
pip install .
```

To run the tests, install the test extra and run pytest:

```
pip install .[test]
pytest
```

## Running

Give the command exactly one argument, the path of a `.cub` scene file:

```
cubemaze maps/example.cub
```

The same entry point can also be started as `python -m cubemaze.game maps/example.cub`.

The game opens a 1920×1020 window titled `Cube3D` and runs at up to 60 frames per second. If the arguments are wrong or the scene is invalid, it prints `Error` followed by a line that says what is wrong, and exits with status 1.

### Controls

| Input                          | Action                          |
|--------------------------------|---------------------------------|
| `W` / `S`                      | walk forward / backward         |
| `A` / `D`                      | step sideways left / right      |
| Left / Right arrow             | turn                            |
| Pointer in the left third      | keep turning left               |
| Pointer in the right third     | keep turning right              |
| `Esc` or closing the window    | quit                            |

Releasing any of `W`, `A`, `S`, `D` stops all movement, and releasing either arrow stops all turning. While you walk forward or backward the gun sprite bobs up and down and the ceiling colour shifts a little with every step.

## Scene files

A scene file first lists the four wall textures and the floor and ceiling colours, one per line and in any order. Blank lines may appear among them. The map comes last.

```
NO ./textures/north.xpm
SO ./textures/south.xpm
WE ./textures/west.xpm
EA ./textures/east.xpm
F 220,100,0
C 225,30,0

111111
100001
10N001
111111
```

The rules:

* `NO`, `SO`, `WE` and `EA` each name a texture path that must end in `.xpm`. The path follows the identifier after any number of spaces. Each identifier must appear exactly once.
* `F` (floor) and `C` (ceiling) each take a colour written as `R,G,B`: three decimal values from 0 to 255, separated by commas and without spaces. Each must appear exactly once.
* The map may contain only `0` (floor), `1` (wall), a space (outside), and exactly one of `N`, `S`, `E`, `W`. That letter marks where the player starts and which way the player faces.
* Every non-space cell must be reachable from the start, so the map is one piece. Walls must close the floor off on every side. The map must not contain an empty line, and nothing may follow it.

Shorter map rows are padded with spaces to the width of the longest row.

## Using it as a library

The parts of the game can be used on their own:

* `cubemaze.scene`: `load_scene(path)` and `parse_scene(text)` return a `Scene` holding the texture paths, the packed `floor` and `ceiling` colours and the `grid` rows, with `rows` and `columns` properties. They raise `SceneError`. `check_extension` checks for `.cub`, `is_xpm` checks for `.xpm`, and `parse_colour` and `rgb_to_int` turn colours into `0xFFRRGGBB` integers.
* `cubemaze.validate`: `check_map(grid)` runs every check and returns the player's `StartPosition` (`row`, `col`, `direction`, plus `angle`, `x` and `y`), or raises `MapError`. `check_characters`, `find_players`, `player_start`, `is_one_piece` and `is_closed` run the checks one at a time.
* `cubemaze.player`: `Player.from_start` places a player. `Player.move(grid, key)` takes one step for a `Key` and returns whether the player moved. `Player.turn`, `Player.turn_left` and `Player.turn_right` change the facing. `is_valid_move` is the collision test, and `mouse_turn(x, y)` maps a pointer position to -1, 0 or 1.
* `cubemaze.raycast`: `cast_all(grid, player)` returns one `Column` per screen column, each with its wall height, distance, texture offset and `WallSide`. `cast_ray` casts a single ray. `Ray`, `ray_directions` and `hit_test` are the pieces the casting is built from.
* `cubemaze.render`: `Frame` is a buffer of packed 32-bit colours held in a numpy array. It has `clear`, `fill_floor_ceiling`, `draw_column`, `draw_cell`, `draw_player` and `draw_minimap`. `Textures` holds one image per wall side and reads them with `pixel`. `texture_coords` gives the texel sampled for a screen row.
* `cubemaze.game`: `KeyState` tracks held inputs, `GunBob` moves the gun sprite, and `Game` applies one frame of input with `update` and draws it with `render`. `main` is the entry point of the `cubemaze` command.

## Limitations

* The gun sprite is loaded from `./assets/2000p.xpm`, relative to the current working directory, and that file does not come with the package. If the file is missing, the game stops with `No gun texture`.
* Wall textures are loaded with `pygame.image.load`. Whether `.xpm` files load therefore depends on the image formats your pygame build supports.
* There are no enemies, shooting, doors or sound. The game lets you walk through the maze and look around, and nothing more.