# solong

A small top-down puzzle game played on a grid read from a map file.
Walk the player over every collectible, then step onto the exit to win.
The bonus mode adds animated sprites, enemies that follow the player's
trail and an on-screen move counter.

## Installing

```
pip install .
```

This pulls in `pygame`, which draws the window.

## Playing

```
solong maps/level.ber
solong-bonus maps/level.ber
```

Each command takes exactly one argument, the map file. Anything else prints
`Error` / `Invalid arguments` and exits with status 1.

Controls: arrow keys or `W` `A` `S` `D` to move, `Esc` or closing the window
to quit. In the standard mode each move is printed as `Moves: N`; in the
bonus mode the count is drawn near the top-left corner of the window.

Trying to step onto the exit before every item has been collected prints a
message and keeps you where you are; stepping onto it afterwards prints
`you win!` and ends the game. In bonus mode, walking into an enemy, or an
enemy reaching you, ends the game with `You lose`.

## Map files

Each line of the file is one row, and every row must have the same length.
Allowed characters:

| Char | Meaning                         |
|------|---------------------------------|
| `1`  | wall                            |
| `0`  | floor                           |
| `P`  | player start (exactly one)      |
| `C`  | collectible (at least one)      |
| `E`  | exit (exactly one)              |
| `U`  | enemy (bonus mode only)         |

The first and last rows must be all walls, and every other row must start
and end with a wall. Every collectible must be reachable from the start
without passing through the exit, and the exit must be reachable too.

The map path must not start with `.`. When the path contains a `/`, the
file name must end in `.ber`, must not be just `.ber`, and no path
component after a `/` may start with `.`.

Invalid maps are rejected with an `Error` line, a short reason and exit
status 1.

Example:

```
1111111
1P0C0E1
1111111
```

## Images

The game loads its images as `.xpm` files from paths relative to the
current directory: `src/textures/` for the standard mode, plus
`src_bonus/textures1/` to `src_bonus/textures7/` for the bonus mode (see
`solong.animation.sprite_paths` for the exact file names). The package does
not ship these images; run the commands from a directory that holds them,
otherwise the game prints `Failed to load images` and exits with status 1.

## Using it as a library

- `solong.mapfile.read_map(path)` loads a map into a list of rows and raises
  `InvalidMapError` or `MapOpenError` (both `SoLongError`s);
  `check_path(path)` raises `InvalidPathError` for a rejected path.
- `solong.validation.check_map(grid, allow_enemies)`,
  `find_player(grid)` and `check_reachability(grid, x, y)` check a map.
- `solong.app.load_game(path, bonus)` does all of the above and returns a
  `solong.game.Game`.
- `Game.handle_key(keycode)` applies one key press (see `solong.game.Key`)
  and returns the messages it produced; `Game.state` tells whether the game
  is running, won, lost or quit. `Game.move_enemies()` advances the enemies
  one step. No window is needed, which makes the rules easy to script or
  test.
- `solong.animation.Animator(game).tick()` returns the draw calls for one
  animation frame of the bonus mode.
- `solong.lines.LineReader` reads a stream line by line in fixed-size chunks,
  and `solong.formatting.format_printf` expands the `c s p d i u x X %`
  conversions.

## Running the tests

```
pip install ".[test]"
pytest
```