"""Sprite sets for the bonus game and the per-frame animation schedule."""

from __future__ import annotations

from enum import Enum
from typing import Optional, Union

from solong.game import Game, GameState, Position

DrawCall = tuple["Sprite", int, Position]

_COIN_CYCLE = 7
_ENEMY_CYCLE = 3
_ENEMY_STEP_EVERY = 3
_IDLE_LAST = 6
_WALK_LAST = 9
_EAT_LAST = 8
_DEATH_FRAMES = 17

_ENEMY_DELAY = 0.002
_IDLE_DELAY = 0.1
_WALK_DELAY = 0.05
_EAT_DELAY = 0.1
_DEATH_DELAY = 0.3


class PlayerMode(Enum):
    """Which animation the player shows."""

    IDLE = "S"
    WALK = "W"
    EAT = "E"


class Sprite(Enum):
    """An image or an animation: ``(directory, file stem, frame count)``.

    A frame count of None marks a single image without a frame number.
    """

    WALL = ("src/textures", "wall", None)
    FLOOR = ("src/textures", "floor", None)
    PLAYER = ("src/textures", "player", None)
    MEAT = ("src/textures", "meat", None)
    EXIT = ("src/textures", "exit", None)
    MOVES = ("src_bonus/textures6", "moves", None)
    COIN = ("src_bonus/textures1", "meatB", 8)
    PLAYER_IDLE = ("src_bonus/textures2", "wp", 7)
    PLAYER_WALK = ("src_bonus/textures3", "wlp", 10)
    PLAYER_EAT = ("src_bonus/textures4", "eat", 10)
    PLAYER_DEAD = ("src_bonus/textures5", "dead", 18)
    ENEMY_WALK = ("src_bonus/textures6", "wle", 8)
    ENEMY = ("src_bonus/textures7", "se", 4)

    @property
    def directory(self) -> str:
        return self.value[0]

    @property
    def stem(self) -> str:
        return self.value[1]

    @property
    def frames(self) -> int:
        count = self.value[2]
        return 1 if count is None else count


def sprite_paths(name: Union[Sprite, str]) -> list[str]:
    """Return the image files of a sprite, in frame order."""
    if isinstance(name, Sprite):
        sprite = name
    else:
        try:
            sprite = Sprite[str(name).upper()]
        except KeyError:
            raise ValueError(f"unknown sprite: {name!r}") from None
    directory, stem, count = sprite.value
    if count is None:
        return [f"{directory}/{stem}.xpm"]
    return [f"{directory}/{stem}{number}.xpm" for number in range(1, count + 1)]


class Animator:
    """Decides what to draw on each frame of a running game.

    ``tick`` advances every animation by one frame, moves enemies on their
    schedule and returns the draw calls as ``(sprite, frame, position)``.
    After each tick ``delay`` holds the pause, in seconds, the frame asks for.
    """

    def __init__(self, game: Game) -> None:
        self.game = game
        self.mode = PlayerMode.IDLE
        self.delay = 0.0
        self._coin_frame = 0
        self._enemy_frame = 1
        self._enemy_phase = 0
        self._idle_frame = 1
        self._walk_frame = 0
        self._eat_frame = 0
        self._seen_moves = game.moves
        self._seen_collected = game.collected
        self._death_shown = False

    def tick(self) -> list[DrawCall]:
        """Advance one frame and return what must be drawn."""
        self.delay = 0.0
        if self.game.state is GameState.LOST:
            return self._death()
        if self.game.state is not GameState.RUNNING:
            return []
        self._sync_mode()
        draws = self._coins()
        draws.extend(self._enemies())
        if self.game.state is GameState.LOST:
            draws.extend(self._death())
            return draws
        player = self._player()
        if player is not None:
            draws.append(player)
        return draws

    def _sync_mode(self) -> None:
        if self.game.collected > self._seen_collected:
            self.mode = PlayerMode.EAT
        elif self.game.moves > self._seen_moves:
            self.mode = PlayerMode.WALK
        self._seen_collected = self.game.collected
        self._seen_moves = self.game.moves

    def _coins(self) -> list[DrawCall]:
        if self._coin_frame == _COIN_CYCLE:
            self._coin_frame = 0
        frame = self._coin_frame
        self._coin_frame += 1
        return [(Sprite.COIN, frame, position) for position in self.game.coins]

    def _enemies(self) -> list[DrawCall]:
        draws: list[DrawCall] = []
        if self._enemy_frame == _ENEMY_CYCLE:
            self._enemy_frame = 0
            self._enemy_phase += 1
        if self._enemy_phase == _ENEMY_STEP_EVERY:
            for index, position in enumerate(list(self.game.enemies)):
                if self.game.state is not GameState.RUNNING:
                    break
                draws.append((Sprite.FLOOR, 0, position))
                self.game.move_enemy(index)
            self._enemy_phase = 0
        draws.extend(
            (Sprite.ENEMY, self._enemy_frame, position)
            for position in self.game.enemies
        )
        self.delay += _ENEMY_DELAY
        self._enemy_frame += 1
        return draws

    def _player(self) -> Optional[DrawCall]:
        position = self.game.player
        if self.mode is PlayerMode.IDLE:
            self.delay += _IDLE_DELAY
            draw = (Sprite.PLAYER_IDLE, self._idle_frame, position)
            if self._idle_frame == _IDLE_LAST:
                self._idle_frame = 0
            self._idle_frame += 1
            self._walk_frame = 0
            self._eat_frame = 0
            return draw
        if self.mode is PlayerMode.WALK:
            self.delay += _WALK_DELAY
            draw = (Sprite.PLAYER_WALK, self._walk_frame, position)
            if self._walk_frame == _WALK_LAST:
                self.mode = PlayerMode.IDLE
                self._walk_frame = 0
            self._walk_frame += 1
            self._idle_frame = 0
            self._eat_frame = 0
            return draw
        if self.mode is PlayerMode.EAT:
            self.delay += _EAT_DELAY
            draw = (Sprite.PLAYER_EAT, self._eat_frame, position)
            if self._eat_frame == _EAT_LAST:
                self.mode = PlayerMode.IDLE
                self._eat_frame = 0
            self._eat_frame += 1
            self._walk_frame = 0
            self._idle_frame = 0
            return draw
        return None

    def _death(self) -> list[DrawCall]:
        if self._death_shown:
            return []
        self._death_shown = True
        self.delay += _DEATH_DELAY
        position = self.game.player
        return [(Sprite.PLAYER_DEAD, frame, position) for frame in range(_DEATH_FRAMES)]