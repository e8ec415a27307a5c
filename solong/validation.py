"""Rules a map must satisfy, and the check that its goals are reachable."""

from __future__ import annotations

from collections import Counter
from typing import MutableSequence, Sequence

from solong.mapfile import InvalidMapError

WALL = "1"
FLOOR = "0"
PLAYER = "P"
COIN = "C"
EXIT = "E"
ENEMY = "U"

_BASE_TILES = frozenset({WALL, FLOOR, PLAYER, COIN, EXIT})


def _tally(grid: Sequence[Sequence[str]]) -> Counter[str]:
    return Counter(char for row in grid for char in row)


def _check_walls(grid: Sequence[Sequence[str]]) -> None:
    last = len(grid) - 1
    for index, row in enumerate(grid):
        if index == 0 or index == last:
            if any(char != WALL for char in row):
                raise InvalidMapError()
        elif not row or row[0] != WALL or row[-1] != WALL:
            raise InvalidMapError()


def check_map(grid: Sequence[Sequence[str]], allow_enemies: bool = False) -> None:
    """Raise InvalidMapError unless the map has coins, one player, one exit,
    a closing wall and only known tiles (``U`` enemies only when allowed)."""
    counts = _tally(grid)
    if counts[COIN] < 1 or counts[PLAYER] != 1 or counts[EXIT] != 1:
        raise InvalidMapError()
    _check_walls(grid)
    allowed = _BASE_TILES | {ENEMY} if allow_enemies else _BASE_TILES
    if any(char not in allowed for row in grid for char in row):
        raise InvalidMapError()


def count_coins_and_enemies(grid: Sequence[Sequence[str]]) -> tuple[int, int]:
    """Return ``(coins, enemies)`` found on the map."""
    counts = _tally(grid)
    return counts[COIN], counts[ENEMY]


def count_exits(grid: Sequence[Sequence[str]]) -> int:
    """Return how many exit tiles the map holds."""
    return _tally(grid)[EXIT]


def find_player(grid: Sequence[Sequence[str]]) -> tuple[int, int]:
    """Return the player's ``(column, row)``, scanning row by row."""
    for row_index, row in enumerate(grid):
        for col_index, char in enumerate(row):
            if char == PLAYER:
                return col_index, row_index
    raise InvalidMapError("Player not found")


def flood_fill(
    grid: MutableSequence[MutableSequence[str]], x: int, y: int, total_coins: int
) -> int:
    """Fill every reachable tile with wall, starting at ``(x, y)``.

    Tiles are visited depth first, trying right, left, down and up in turn.
    An exit reached before all ``total_coins`` have been met is sealed and
    not walked through. Returns the number of coins met.
    """
    collected = 0
    stack = [(x, y)]
    while stack:
        cx, cy = stack.pop()
        if cy < 0 or cy >= len(grid) or cx < 0 or cx >= len(grid[cy]):
            continue
        tile = grid[cy][cx]
        if tile == WALL:
            continue
        if tile == COIN:
            collected += 1
        grid[cy][cx] = WALL
        if tile == EXIT and collected != total_coins:
            continue
        stack.extend(((cx, cy - 1), (cx, cy + 1), (cx - 1, cy), (cx + 1, cy)))
    return collected


def check_reachability(grid: Sequence[Sequence[str]], x: int, y: int) -> None:
    """Raise InvalidMapError unless every coin and the exit can be reached from ``(x, y)``."""
    work = [list(row) for row in grid]
    total_coins, _ = count_coins_and_enemies(grid)
    flood_fill(work, x, y, total_coins)
    remaining_coins, _ = count_coins_and_enemies(work)
    if remaining_coins != 0 or count_exits(work) != 0:
        raise InvalidMapError()