"""Loading a map, drawing it and running the game in a window."""

from __future__ import annotations

import sys
import time
from typing import Any, Iterable, Optional, Sequence

from solong.animation import Animator, Sprite, sprite_paths
from solong.game import Game, GameState, Key, Position, move_counter_text
from solong.mapfile import MapOpenError, PathLike, SoLongError, check_path, read_map
from solong.validation import check_map, check_reachability, find_player

TILE_SIZE = 60
WINDOW_TITLE = "so_long"
_DRAWABLE = frozenset("10PCEU")
_ENCODING = "latin-1"

_BASIC_SPRITES = (Sprite.WALL, Sprite.FLOOR, Sprite.PLAYER, Sprite.MEAT, Sprite.EXIT)
_BONUS_SPRITES = (
    Sprite.WALL,
    Sprite.FLOOR,
    Sprite.EXIT,
    Sprite.MOVES,
    Sprite.COIN,
    Sprite.PLAYER_IDLE,
    Sprite.PLAYER_WALK,
    Sprite.PLAYER_EAT,
    Sprite.PLAYER_DEAD,
    Sprite.ENEMY_WALK,
    Sprite.ENEMY,
)
_BASIC_TILES = {
    "1": Sprite.WALL,
    "0": Sprite.FLOOR,
    "P": Sprite.PLAYER,
    "C": Sprite.MEAT,
    "E": Sprite.EXIT,
}
_BONUS_TILES = {
    "1": Sprite.WALL,
    "0": Sprite.FLOOR,
    "P": Sprite.PLAYER_IDLE,
    "C": Sprite.COIN,
    "U": Sprite.ENEMY,
    "E": Sprite.EXIT,
}

_COUNTER_SHADOW = (0, 0, 0)
_COUNTER_COLOR = (0x78, 0xFF, 0x00)
_FRAME_RATE = 60


def load_game(path: str, bonus: bool = False) -> Game:
    """Check the path, read and validate the map, and return a game on it."""
    check_path(str(path))
    grid = read_map(path)
    check_map(grid, allow_enemies=bonus)
    x, y = find_player(grid)
    check_reachability(grid, x, y)
    return Game(grid, bonus=bonus)


def tile_layout(path: PathLike) -> list[tuple[str, Position]]:
    """Return each drawable tile of the map file with its ``(column, row)``."""
    try:
        with open(path, "r", encoding=_ENCODING, newline="") as stream:
            text = stream.read()
    except OSError as exc:
        raise MapOpenError() from exc
    layout: list[tuple[str, Position]] = []
    for row, line in enumerate(text.split("\n")):
        layout.extend(
            (char, (column, row)) for column, char in enumerate(line) if char in _DRAWABLE
        )
    return layout


def _pixels(position: Position) -> tuple[int, int]:
    x, y = position
    return x * TILE_SIZE, y * TILE_SIZE


def _load_images(pygame: Any, sprites: Iterable[Sprite]) -> dict[Sprite, list[Any]]:
    return {
        sprite: [pygame.image.load(file) for file in sprite_paths(sprite)]
        for sprite in sprites
    }


class _Screen:
    """Blits sprites on the window surface."""

    def __init__(self, pygame: Any, surface: Any, images: dict[Sprite, list[Any]]) -> None:
        self._pygame = pygame
        self.surface = surface
        self.images = images
        self._font: Optional[Any] = None

    def draw(self, sprite: Sprite, frame: int, position: Position) -> None:
        frames = self.images[sprite]
        self.surface.blit(frames[frame % len(frames)], _pixels(position))

    def draw_at(self, sprite: Sprite, pixels: tuple[int, int]) -> None:
        self.surface.blit(self.images[sprite][0], pixels)

    def draw_counter(self, count: int) -> None:
        self.draw_at(Sprite.WALL, (TILE_SIZE, 0))
        text = move_counter_text(count)
        if not text:
            return
        if self._font is None:
            self._pygame.font.init()
            self._font = self._pygame.font.Font(None, 24)
        shadow = self._font.render(text, True, _COUNTER_SHADOW)
        front = self._font.render(text, True, _COUNTER_COLOR)
        for dx, dy in ((0, 0), (1, 0), (2, 0), (0, 1)):
            self.surface.blit(shadow, (TILE_SIZE + dx, 20 + dy))
        self.surface.blit(front, (TILE_SIZE + 1, 21))


def _key_codes(pygame: Any) -> dict[int, int]:
    return {
        pygame.K_ESCAPE: Key.ESC,
        pygame.K_UP: Key.UP,
        pygame.K_DOWN: Key.DOWN,
        pygame.K_LEFT: Key.LEFT,
        pygame.K_RIGHT: Key.RIGHT,
    }


def _flush_messages(game: Game, printed: int) -> int:
    for message in game.messages[printed:]:
        sys.stdout.write(message)
    sys.stdout.flush()
    return len(game.messages)


def run(path: str, bonus: bool = False) -> int:
    """Open a window on a validated map and play until the game ends; return the exit status."""
    game = load_game(path, bonus)
    width = max((len(row) for row in game.grid), default=0)
    height = len(game.grid)
    layout = tile_layout(path)

    import pygame

    try:
        pygame.init()
    except pygame.error:
        sys.stdout.write("Error\n Failed to init mlx\n")
        return 1
    try:
        try:
            surface = pygame.display.set_mode((width * TILE_SIZE, height * TILE_SIZE))
            pygame.display.set_caption(WINDOW_TITLE)
        except pygame.error:
            sys.stdout.write("Error\n Failed to open window\n")
            return 1
        try:
            images = _load_images(pygame, _BONUS_SPRITES if bonus else _BASIC_SPRITES)
        except (pygame.error, OSError):
            sys.stdout.write("Error\n Failed to load images\n")
            return 1
        screen = _Screen(pygame, surface, images)
        tiles = _BONUS_TILES if bonus else _BASIC_TILES
        for char, position in layout:
            sprite = tiles.get(char)
            if sprite is not None:
                screen.draw(sprite, 0, position)
        if bonus:
            screen.draw_at(Sprite.MOVES, (0, 0))
        _play(pygame, game, screen, bonus)
    finally:
        pygame.quit()
    return 0


def _play(pygame: Any, game: Game, screen: _Screen, bonus: bool) -> None:
    keys = _key_codes(pygame)
    animator = Animator(game) if bonus else None
    clock = pygame.time.Clock()
    printed = 0
    while game.state is GameState.RUNNING:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                game.state = GameState.QUIT
                break
            if event.type != pygame.KEYDOWN:
                continue
            before = game.player
            game.handle_key(keys.get(event.key, event.key))
            if game.player != before:
                if not bonus:
                    screen.draw(Sprite.PLAYER, 0, game.player)
                screen.draw(Sprite.FLOOR, 0, before)
                if bonus:
                    screen.draw_counter(game.moves)
            if game.state is not GameState.RUNNING:
                break
        delay = 0.0
        if animator is not None and game.state in (GameState.RUNNING, GameState.LOST):
            for sprite, frame, position in animator.tick():
                screen.draw(sprite, frame, position)
            delay = animator.delay
        printed = _flush_messages(game, printed)
        pygame.display.flip()
        if delay:
            time.sleep(delay)
        else:
            clock.tick(_FRAME_RATE)
    _flush_messages(game, printed)


def _main(argv: Optional[Sequence[str]], bonus: bool) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        sys.stdout.write("Error\n Invalid arguments\n")
        return 1
    try:
        load_game(args[0], bonus)
    except SoLongError as exc:
        sys.stdout.write(f"Error\n {exc}\n")
        return 1
    return run(args[0], bonus)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the basic game on the map named by the single argument."""
    return _main(argv, bonus=False)


def main_bonus(argv: Optional[Sequence[str]] = None) -> int:
    """Run the animated game, with enemies, on the map named by the single argument."""
    return _main(argv, bonus=True)