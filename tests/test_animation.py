import pytest

from solong.animation import Animator, PlayerMode, Sprite, sprite_paths
from solong.game import Game, GameState, Key

CORRIDOR = [
    "1111111",
    "1P00CE1",
    "1111111",
]

AMBUSH = [
    "11111",
    "1PU01",
    "1C0E1",
    "11111",
]


def _player_draws(draws):
    return [
        d for d in draws
        if d[0] in (Sprite.PLAYER_IDLE, Sprite.PLAYER_WALK, Sprite.PLAYER_EAT)
    ]


def test_sprite_paths_coin_frames():
    paths = sprite_paths(Sprite.COIN)
    assert len(paths) == 8
    assert paths[0] == "src_bonus/textures1/meatB1.xpm"
    assert paths[-1] == "src_bonus/textures1/meatB8.xpm"


def test_sprite_paths_by_name_is_case_insensitive():
    assert sprite_paths("player_dead") == sprite_paths(Sprite.PLAYER_DEAD)
    assert sprite_paths("PLAYER_DEAD")[-1] == "src_bonus/textures5/dead18.xpm"


def test_sprite_paths_single_image():
    assert sprite_paths(Sprite.WALL) == ["src/textures/wall.xpm"]
    assert sprite_paths(Sprite.MOVES) == ["src_bonus/textures6/moves.xpm"]


def test_sprite_paths_unknown_name():
    with pytest.raises(ValueError):
        sprite_paths("dragon")


@pytest.mark.parametrize("sprite", list(Sprite))
def test_every_sprite_has_as_many_paths_as_frames(sprite):
    paths = sprite_paths(sprite)
    assert len(paths) == sprite.frames
    assert all(path.endswith(".xpm") for path in paths)


def test_idle_player_cycles_without_first_frame():
    animator = Animator(Game(CORRIDOR, bonus=True))
    frames = [_player_draws(animator.tick())[0][1] for _ in range(7)]
    assert frames == [1, 2, 3, 4, 5, 6, 1]
    assert animator.mode is PlayerMode.IDLE


def test_coin_frames_stay_within_cycle_and_follow_coins():
    game = Game(CORRIDOR, bonus=True)
    animator = Animator(game)
    for _ in range(20):
        coins = [d for d in animator.tick() if d[0] is Sprite.COIN]
        assert [d[2] for d in coins] == game.coins
        assert all(0 <= d[1] < Sprite.COIN.frames - 1 for d in coins)


def test_walk_animation_runs_then_returns_to_idle():
    game = Game(CORRIDOR, bonus=True)
    animator = Animator(game)
    game.handle_key(Key.RIGHT)
    walk = []
    for _ in range(Sprite.PLAYER_WALK.frames):
        draw = _player_draws(animator.tick())[0]
        assert draw[0] is Sprite.PLAYER_WALK
        assert draw[2] == game.player
        walk.append(draw[1])
    assert walk == list(range(Sprite.PLAYER_WALK.frames))
    assert animator.mode is PlayerMode.IDLE
    after = _player_draws(animator.tick())[0]
    assert after[0] is Sprite.PLAYER_IDLE
    assert after[1] == 0


def test_eating_takes_priority_over_walking():
    game = Game(CORRIDOR, bonus=True)
    animator = Animator(game)
    for _ in range(3):
        game.handle_key(Key.RIGHT)
    assert game.collected == 1
    draw = _player_draws(animator.tick())[0]
    assert draw[0] is Sprite.PLAYER_EAT
    assert animator.mode is PlayerMode.EAT
    assert not [d for d in animator.tick() if d[0] is Sprite.COIN]


def test_tick_sets_a_positive_delay():
    animator = Animator(Game(CORRIDOR, bonus=True))
    animator.tick()
    assert animator.delay > 0


def test_enemy_waits_then_follows_trail_and_kills():
    game = Game(AMBUSH, bonus=True)
    animator = Animator(game)
    start = list(game.enemies)
    game.handle_key(Key.W)
    assert game.tile(game.player) == "T"
    for _ in range(8):
        draws = animator.tick()
        enemies = [d for d in draws if d[0] is Sprite.ENEMY]
        assert [d[2] for d in enemies] == start
        assert all(0 <= d[1] < Sprite.ENEMY.frames for d in enemies)
    assert game.enemies == start
    assert game.state is GameState.RUNNING
    draws = animator.tick()
    assert game.state is GameState.LOST
    assert game.enemies == [game.player]
    dead = [d for d in draws if d[0] is Sprite.PLAYER_DEAD]
    assert [d[1] for d in dead] == list(range(17))
    assert (Sprite.FLOOR, 0, start[0]) in draws
    assert animator.tick() == []


def test_finished_game_draws_nothing():
    game = Game(CORRIDOR, bonus=True)
    animator = Animator(game)
    game.handle_key(Key.ESC)
    assert game.state is GameState.QUIT
    assert animator.tick() == []