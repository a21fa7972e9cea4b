"""The running game: key state, gun bobbing, per-frame update and rendering."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from dataclasses import dataclass, field

import numpy as np
import pygame

from .constants import (
    CEILING_COLOR_STEP,
    GUN_TEXTURE,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    WINDOW_TITLE,
)
from .player import Key, Player, mouse_turn
from .raycast import cast_all
from .render import Frame, Textures
from .scene import Scene, SceneError, check_extension, load_scene
from .validate import MapError, StartPosition, check_map

_MASK = 0xFFFFFFFF
_GUN_BOB_STEP = 5
_GUN_BOB_HALF = 5
_GUN_BOTTOM_OVERLAP = 30
_FRAME_RATE = 60


@dataclass
class KeyState:
    """Which movement and turning inputs are currently held."""

    w: bool = False
    s: bool = False
    a: bool = False
    d: bool = False
    left: bool = False
    right: bool = False
    mouse_turn: int = 0

    def press(self, key: int) -> bool:
        """Record a key press; return True when the key asks to quit."""
        if key == Key.W:
            self.w = True
        elif key == Key.S:
            self.s = True
        elif key == Key.D:
            self.d = True
        elif key == Key.A:
            self.a = True
        elif key == Key.LEFT:
            self.left = True
        elif key == Key.RIGHT:
            self.right = True
        elif key == Key.ESC:
            return True
        return False

    def release(self, key: int) -> None:
        """Releasing any movement key stops all movement; an arrow stops all turning."""
        if key in (Key.A, Key.D, Key.S, Key.W):
            self.w = self.s = self.a = self.d = False
        elif key in (Key.LEFT, Key.RIGHT):
            self.left = self.right = False


@dataclass
class GunBob:
    """Screen position of the gun sprite, bobbing while the player walks."""

    x: int = 0
    y: int = 0
    step: int = 0

    def advance(self) -> None:
        """Raise the gun for five steps, lower it for five, then rest one step."""
        if self.step < _GUN_BOB_HALF:
            self.y -= _GUN_BOB_STEP
            self.step += 1
        elif self.step < 2 * _GUN_BOB_HALF:
            self.y += _GUN_BOB_STEP
            self.step += 1
        else:
            self.step = 0


@dataclass
class Game:
    """All state of a running game and the logic of one frame."""

    grid: list[str]
    player: Player
    textures: Textures
    ceiling: int
    floor: int
    keys: KeyState = field(default_factory=KeyState)
    gun: GunBob = field(default_factory=GunBob)
    frame: Frame = field(default_factory=Frame)

    def _walk(self) -> None:
        self.ceiling = (self.ceiling + CEILING_COLOR_STEP) & _MASK
        self.gun.advance()

    def update(self) -> None:
        """Apply the held inputs: walk, strafe and turn."""
        if self.keys.w:
            self._walk()
            self.player.move(self.grid, Key.W)
        if self.keys.s:
            self._walk()
            self.player.move(self.grid, Key.S)
        if self.keys.d:
            self.player.move(self.grid, Key.D)
        if self.keys.a:
            self.player.move(self.grid, Key.A)
        if self.keys.left or self.keys.mouse_turn == -1:
            self.player.turn_left()
        if self.keys.right or self.keys.mouse_turn == 1:
            self.player.turn_right()

    def render(self) -> Frame:
        """Draw the current view and minimap into the frame and return it."""
        self.frame.clear()
        self.frame.fill_floor_ceiling(self.ceiling, self.floor)
        for column in cast_all(self.grid, self.player):
            self.frame.draw_column(column, self.textures)
        self.frame.draw_minimap(self.grid, self.player)
        return self.frame


_KEYMAP = {
    pygame.K_w: Key.W,
    pygame.K_s: Key.S,
    pygame.K_a: Key.A,
    pygame.K_d: Key.D,
    pygame.K_LEFT: Key.LEFT,
    pygame.K_RIGHT: Key.RIGHT,
    pygame.K_ESCAPE: Key.ESC,
}


def _error(message: str) -> None:
    print(f"Error\n{message}")


def _surface_to_colours(surface: pygame.Surface) -> np.ndarray:
    rgb = pygame.surfarray.array3d(surface).transpose(1, 0, 2).astype(np.uint32)
    return (rgb[..., 0] << 16) | (rgb[..., 1] << 8) | rgb[..., 2]


def _load_textures(scene: Scene) -> Textures:
    images = {}
    for name in ("north", "south", "west", "east"):
        try:
            surface = pygame.image.load(getattr(scene, name))
        except (pygame.error, OSError) as exc:
            raise SceneError(f"No {name} texture") from exc
        images[name] = _surface_to_colours(surface)
    return Textures(**images)


def _frame_surface(frame: Frame) -> pygame.Surface:
    pixels = frame.pixels
    rgb = np.stack(
        ((pixels >> 16) & 0xFF, (pixels >> 8) & 0xFF, pixels & 0xFF), axis=-1
    ).astype(np.uint8)
    return pygame.surfarray.make_surface(rgb.transpose(1, 0, 2))


def _run(scene: Scene, start: StartPosition) -> int:
    pygame.init()
    try:
        screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        pygame.display.set_caption(WINDOW_TITLE)
        try:
            textures = _load_textures(scene)
        except SceneError as exc:
            _error(str(exc))
            return 1
        try:
            gun_image = pygame.image.load(GUN_TEXTURE)
        except (pygame.error, OSError):
            _error("No gun texture")
            return 1
        gun_width, gun_height = gun_image.get_size()
        game = Game(
            grid=list(scene.grid),
            player=Player.from_start(start),
            textures=textures,
            ceiling=scene.ceiling,
            floor=scene.floor,
            gun=GunBob(
                x=SCREEN_WIDTH // 2 - gun_width // 2,
                y=SCREEN_HEIGHT - gun_height + _GUN_BOTTOM_OVERLAP,
            ),
        )
        clock = pygame.time.Clock()
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    key = _KEYMAP.get(event.key)
                    if key is not None and game.keys.press(key):
                        running = False
                elif event.type == pygame.KEYUP:
                    key = _KEYMAP.get(event.key)
                    if key is not None:
                        game.keys.release(key)
                elif event.type == pygame.MOUSEMOTION:
                    x, y = event.pos
                    game.keys.mouse_turn = mouse_turn(x, y)
            if not running:
                break
            game.update()
            screen.blit(_frame_surface(game.render()), (0, 0))
            screen.blit(gun_image, (game.gun.x, game.gun.y))
            pygame.display.flip()
            clock.tick(_FRAME_RATE)
        return 0
    finally:
        pygame.quit()


def main(argv: Sequence[str] | None = None) -> int:
    """Start the game on the ``.cub`` scene named on the command line."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        _error("Programm accepts only 1 argument")
        return 1
    try:
        check_extension(args[0])
        scene = load_scene(args[0])
        start = check_map(scene.grid)
    except (SceneError, MapError) as exc:
        _error(str(exc))
        return 1
    return _run(scene, start)


if __name__ == "__main__":
    sys.exit(main())