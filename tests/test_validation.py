import pytest

from solong.mapfile import InvalidMapError
from solong.validation import (
    check_map,
    check_reachability,
    count_coins_and_enemies,
    count_exits,
    find_player,
    flood_fill,
)

VALID = [
    "1111111",
    "1P0C0E1",
    "1000C01",
    "1111111",
]


def test_valid_map_passes_all_checks():
    assert check_map(VALID) is None
    x, y = find_player(VALID)
    assert VALID[y][x] == "P"
    assert check_reachability(VALID, x, y) is None


def test_counts():
    coins, enemies = count_coins_and_enemies(VALID)
    assert coins == sum(row.count("C") for row in VALID)
    assert enemies == 0
    assert count_exits(VALID) == 1
    assert count_coins_and_enemies(["1U1", "UCU"]) == (1, 3)


@pytest.mark.parametrize(
    "grid",
    [
        ["11111", "1P0E1", "11111"],  # no coin
        ["111111", "1PPCE1", "111111"],  # two players
        ["111111", "1PCEE1", "111111"],  # two exits
        ["111111", "1PC0E1", "111011"],  # hole in bottom wall
        ["110111", "1PC0E1", "111111"],  # hole in top wall
        ["111111", "0PC0E1", "111111"],  # hole in left wall
        ["111111", "1PCXE1", "111111"],  # unknown tile
    ],
)
def test_check_map_rejects(grid):
    with pytest.raises(InvalidMapError):
        check_map(grid)


def test_enemies_only_allowed_in_bonus():
    grid = ["111111", "1PCUE1", "111111"]
    with pytest.raises(InvalidMapError):
        check_map(grid)
    assert check_map(grid, allow_enemies=True) is None


def test_find_player_missing():
    with pytest.raises(InvalidMapError, match="Player not found"):
        find_player(["111", "1C1", "111"])


def test_flood_fill_collects_every_reachable_coin():
    work = [list(row) for row in VALID]
    x, y = find_player(VALID)
    coins, _ = count_coins_and_enemies(VALID)
    assert flood_fill(work, x, y, coins) == coins
    assert all(char == "1" for row in work for char in row)


def test_exit_blocks_path_until_coins_collected():
    grid = ["111111", "1PEC01", "111111"]
    work = [list(row) for row in grid]
    assert flood_fill(work, 1, 1, 1) == 0
    assert work[1][3] == "C"
    assert work[1][2] == "1"
    with pytest.raises(InvalidMapError):
        check_reachability(grid, 1, 1)


def test_unreachable_coin_is_invalid():
    grid = ["1111111", "1P0E1C1", "1111111"]
    with pytest.raises(InvalidMapError):
        check_reachability(grid, 1, 1)


def test_unreachable_exit_is_invalid():
    grid = ["1111111", "1PC01E1", "1111111"]
    with pytest.raises(InvalidMapError):
        check_reachability(grid, 1, 1)


def test_check_reachability_leaves_input_unchanged():
    grid = list(VALID)
    check_reachability(grid, 1, 1)
    assert grid == VALID