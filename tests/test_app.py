import pytest

from solong.app import load_game, main, main_bonus, tile_layout
from solong.game import GameState
from solong.mapfile import InvalidMapError, InvalidPathError, MapOpenError

VALID = "1111111\n1P0C0E1\n1111111\n"
WITH_ENEMY = "1111111\n1P0C0E1\n10U0001\n1111111\n"
UNREACHABLE = "1111111\n1P01CE1\n1111111\n"


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


def write(directory, name, text):
    path = directory / name
    path.write_text(text, encoding="latin-1")
    return name


def test_load_game_valid_map(workdir):
    name = write(workdir, "map.ber", VALID)
    game = load_game(name)
    assert game.player == (1, 1)
    assert game.total_coins == 1
    assert game.state is GameState.RUNNING
    assert game.bonus is False


def test_load_game_rejects_unreachable_exit(workdir):
    name = write(workdir, "map.ber", UNREACHABLE)
    with pytest.raises(InvalidMapError):
        load_game(name)


def test_enemy_rejected_in_basic_mode(workdir):
    name = write(workdir, "map.ber", WITH_ENEMY)
    with pytest.raises(InvalidMapError):
        load_game(name)


def test_enemy_accepted_in_bonus_mode(workdir):
    name = write(workdir, "map.ber", WITH_ENEMY)
    game = load_game(name, bonus=True)
    assert game.enemies == [(2, 2)]
    assert game.bonus is True


def test_load_game_missing_file(workdir):
    with pytest.raises(MapOpenError):
        load_game("missing.ber")


def test_load_game_bad_extension_in_directory(workdir):
    (workdir / "maps").mkdir()
    write(workdir, "maps/map.txt", VALID)
    with pytest.raises(InvalidPathError):
        load_game("maps/map.txt")


def test_load_game_hidden_path(workdir):
    with pytest.raises(InvalidPathError):
        load_game(".map.ber")


def test_tile_layout_positions(workdir):
    name = write(workdir, "small.ber", "111\n1P1\n")
    assert tile_layout(name) == [
        ("1", (0, 0)),
        ("1", (1, 0)),
        ("1", (2, 0)),
        ("1", (0, 1)),
        ("P", (1, 1)),
        ("1", (2, 1)),
    ]


def test_tile_layout_covers_every_tile(workdir):
    name = write(workdir, "map.ber", WITH_ENEMY)
    layout = tile_layout(name)
    assert len(layout) == 28
    assert ("U", (2, 2)) in layout
    assert ("E", (5, 1)) in layout


def test_tile_layout_missing_file(workdir):
    with pytest.raises(MapOpenError):
        tile_layout("nothing.ber")


def test_main_without_arguments(capsys):
    assert main([]) == 1
    assert capsys.readouterr().out == "Error\n Invalid arguments\n"


def test_main_with_too_many_arguments(capsys):
    assert main_bonus(["a.ber", "b.ber"]) == 1
    assert capsys.readouterr().out == "Error\n Invalid arguments\n"


def test_main_invalid_map(workdir, capsys):
    name = write(workdir, "map.ber", UNREACHABLE)
    assert main([name]) == 1
    assert capsys.readouterr().out == "Error\n Map is invalid\n"


def test_main_missing_file(workdir, capsys):
    assert main(["missing.ber"]) == 1
    assert capsys.readouterr().out == "Error\n Failed to open map file\n"


def test_main_bad_path(workdir, capsys):
    assert main_bonus([".hidden.ber"]) == 1
    assert capsys.readouterr().out == "Error\n Invalid file path or extension\n"