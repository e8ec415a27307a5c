"""Game rules: player movement, coin collection, the exit and enemies."""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Optional, Sequence

from solong.formatting import format_printf
from solong.validation import (
    COIN,
    ENEMY,
    EXIT,
    FLOOR,
    WALL,
    count_coins_and_enemies,
    find_player,
)

TRAIL = "T"

WIN_MESSAGE = "you win!"
LOSE_MESSAGE = "You lose\n"
EXIT_LOCKED_MESSAGE = "Error:\nwa si rak mzal mklitych l7am kamlo\n"
MOVES_FORMAT = "Moves: %d\n"

Position = tuple[int, int]


class Key(IntEnum):
    """X11 key symbols the game reacts to."""

    ESC = 65307
    UP = 65362
    W = 119
    DOWN = 65364
    S = 115
    LEFT = 65361
    A = 97
    RIGHT = 65363
    D = 100


class Direction(Enum):
    """A step on the grid as ``(dx, dy)``."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]


class GameState(Enum):
    """Whether the game goes on, and how it ended."""

    RUNNING = "running"
    WON = "won"
    LOST = "lost"
    QUIT = "quit"


_KEY_DIRECTIONS = {
    Key.UP: Direction.UP,
    Key.W: Direction.UP,
    Key.DOWN: Direction.DOWN,
    Key.S: Direction.DOWN,
    Key.LEFT: Direction.LEFT,
    Key.A: Direction.LEFT,
    Key.RIGHT: Direction.RIGHT,
    Key.D: Direction.RIGHT,
}

# Order in which an enemy looks for the player's trail.
_ENEMY_SEARCH = (Direction.UP, Direction.LEFT, Direction.DOWN, Direction.RIGHT)


def direction_for_key(keycode: int) -> Optional[Direction]:
    """Return the direction bound to a key, or None for any other key."""
    return _KEY_DIRECTIONS.get(keycode)  # type: ignore[call-overload]


def move_counter_text(count: int) -> str:
    """Text of the on-screen move counter; empty until the first move."""
    return str(count) if count > 0 else ""


def _positions_of(grid: Sequence[Sequence[str]], tile: str) -> list[Position]:
    return [
        (x, y)
        for y, row in enumerate(grid)
        for x, char in enumerate(row)
        if char == tile
    ]


class Game:
    """State of one game on a validated map.

    Positions are ``(column, row)`` in tiles. In bonus mode the player leaves
    a trail that enemies follow; stepping onto an enemy, or an enemy stepping
    onto the player, loses the game.
    """

    def __init__(self, grid: Sequence[Sequence[str]], bonus: bool = False) -> None:
        self.grid: list[list[str]] = [list(row) for row in grid]
        self.bonus = bonus
        self.player: Position = find_player(self.grid)
        self.total_coins, _ = count_coins_and_enemies(self.grid)
        self.coins: list[Position] = _positions_of(self.grid, COIN)
        self.enemies: list[Position] = _positions_of(self.grid, ENEMY)
        self.collected = 0
        self.moves = 0
        self.state = GameState.RUNNING
        self.last_move: Optional[Direction] = None
        self.ate_coin = False
        self.messages: list[str] = []

    def tile(self, position: Position) -> Optional[str]:
        """Return the tile at ``position``, or None outside the map."""
        x, y = position
        if 0 <= y < len(self.grid) and 0 <= x < len(self.grid[y]):
            return self.grid[y][x]
        return None

    def _set(self, position: Position, tile: str) -> None:
        x, y = position
        self.grid[y][x] = tile

    def _neighbor(self, direction: Direction) -> Position:
        x, y = self.player
        return x + direction.dx, y + direction.dy

    def _emit(self, message: str) -> None:
        self.messages.append(message)

    def handle_key(self, keycode: int) -> list[str]:
        """Apply one key press and return the messages it produced."""
        if self.state is not GameState.RUNNING:
            return []
        start = len(self.messages)
        self.last_move = None
        self.ate_coin = False
        if keycode == Key.ESC:
            self.state = GameState.QUIT
            return []
        direction = direction_for_key(keycode)
        if self.bonus:
            self._bonus_key(direction)
        else:
            self._basic_key(direction)
        return self.messages[start:]

    def _basic_key(self, direction: Optional[Direction]) -> None:
        self._collect_here()
        if direction is None or self._try_exit(direction):
            return
        if self._walkable(direction):
            self._step(direction)
            self._collect_here()
            self._emit(format_printf(MOVES_FORMAT, self.moves))

    def _bonus_key(self, direction: Optional[Direction]) -> None:
        self._set(self.player, TRAIL)
        if direction is not None:
            if self._try_exit(direction):
                return
            if self._walkable(direction):
                self._step(direction)
            here = self.tile(self.player)
            if here == COIN:
                self._eat()
            elif here == ENEMY:
                self._lose()
                return
        self._set(self.player, TRAIL)

    def _try_exit(self, direction: Direction) -> bool:
        if self.tile(self._neighbor(direction)) != EXIT:
            return False
        if self.collected == self.total_coins:
            self.state = GameState.WON
            self._emit(WIN_MESSAGE)
            return True
        self._emit(EXIT_LOCKED_MESSAGE)
        return False

    def _walkable(self, direction: Direction) -> bool:
        return self.tile(self._neighbor(direction)) not in (WALL, EXIT, None)

    def _step(self, direction: Direction) -> None:
        self.player = self._neighbor(direction)
        self.moves += 1
        self.last_move = direction

    def _collect_here(self) -> None:
        if self.tile(self.player) == COIN:
            self.collected += 1
            self._set(self.player, FLOOR)
            self._forget_coin(self.player)

    def _eat(self) -> None:
        self.ate_coin = True
        self.collected += 1
        self._set(self.player, FLOOR)
        self._forget_coin(self.player)

    def _forget_coin(self, position: Position) -> None:
        self.coins = [coin for coin in self.coins if coin != position]

    def _lose(self) -> None:
        self.state = GameState.LOST
        self._emit(LOSE_MESSAGE)

    def move_enemy(self, index: int) -> bool:
        """Move one enemy a step along the player's trail; return whether it moved."""
        x, y = self.enemies[index]
        moved = False
        for direction in _ENEMY_SEARCH:
            target = (x + direction.dx, y + direction.dy)
            if self.tile(target) == TRAIL:
                self._set((x, y), FLOOR)
                self._set(target, ENEMY)
                self.enemies[index] = target
                moved = True
                break
        if (
            self.state is GameState.RUNNING
            and self.enemies[index] == self.player
            and self.tile(self.player) == ENEMY
        ):
            self._lose()
        return moved

    def move_enemies(self) -> list[str]:
        """Move every enemy in turn, stopping once the game is over; return new messages."""
        start = len(self.messages)
        for index in range(len(self.enemies)):
            if self.state is not GameState.RUNNING:
                break
            self.move_enemy(index)
        return self.messages[start:]