# solong

A small top-down puzzle game played on a tile map. Walk the player around
the map, pick up every collectible, and then step onto the exit to win.
An optional bonus mode adds a wandering enemy, animated player sprites and
an on-screen move counter.

## Installing

```
pip install .
```

The game window is drawn with pygame.

## Playing

```
solong path/to/level.ber
solong --bonus path/to/level.ber
solong --textures path/to/textures path/to/level.ber
```

Options:

- `--bonus` plays with an enemy and animated sprites.
- `--textures DIR` sets the directory the tile images are loaded from
  (default: `textures`, relative to the current directory).

Controls:

- Arrow keys or `W` `A` `S` `D` move the player one tile.
- `Esc` or closing the window quits.

Every successful move prints the running count on standard output, e.g.
`Moves: 3`. In bonus mode the window also shows `moves :3` in its top-left
corner.

The exit only opens once every collectible has been picked up; until then
it blocks the player like a wall. Stepping onto the open exit wins.

In bonus mode the enemy (`X`) takes one random step every frame. It cannot
walk onto walls, collectibles or the exit. If it walks into the player the
game is lost. The player cannot walk onto the enemy's tile. If a map holds
more than one `X`, only the last one (reading rows top to bottom, left to
right) moves.

## Map files

A map is a plain text file whose name ends in `.ber`. Each line is one row
of tiles:

| Char | Tile                     |
|------|--------------------------|
| `1`  | wall                     |
| `0`  | empty floor              |
| `C`  | collectible              |
| `E`  | exit                     |
| `P`  | player start             |
| `X`  | enemy (bonus mode only)  |

Example:

```
1111111111
1P0C0000C1
1011110101
10000C00E1
1111111111
```

Blank lines at the start of the file are skipped.

Before the game starts the map is checked. The first problem found is
printed on standard output after a line reading `Error`, and the command
exits with status 1. The checks, in order:

- a map path must be given and the file must exist (`No such file or directory`);
- the file must not be empty (`Map is empty`);
- the text from the first `.` in the path must be exactly `.ber`;
- every row must have the same length;
- the first and last rows and both side columns must be walls;
- only the characters above may appear (`X` only in bonus mode);
- there must be at least one collectible; in bonus mode, at least one enemy;
- there must be exactly one exit and exactly one starting position;
- every collectible must be reachable from the start without crossing the
  exit, and the exit must be reachable from the start (`Invalid path`).

## Textures

Each tile is drawn at 64×64 pixels. The window is closed straight away if
the wall or floor image is missing; any other missing image is simply not
drawn.

Normal mode reads, inside the texture directory, `xpm/wall.xpm`,
`xpm/floor.xpm`, `xpm/c.xpm`, `xpm/cat_down_0.xpm`, `xpm/exit_0.xpm` and
`xpm/exit_3.xpm` (the open exit).

Bonus mode reads `wall.xpm`, `floor.xpm`, `c.xpm`, `enemy.xpm`,
`exit_0.xpm`, `exit_1.xpm` (the open exit) and four animation frames for
each facing: `cat_up_0.xpm` … `cat_up_3.xpm`, and likewise `cat_down_*`,
`cat_right_*` and `cat_left_*`.

## Using it from Python

- `solong.mapfile.read_map(path)` reads a map file into a list of rows;
  `MapError` is raised for missing or empty files.
- `solong.validation.load_and_validate(path, bonus)` reads and checks a map,
  raising `MapError` with the message of the first problem; `validate_map`
  does the checks on rows already in memory.
- `solong.game.GameState(rows, bonus)` holds a game; `move(direction)` and
  `step_enemy(direction)` return an `Outcome` (`BLOCKED`, `MOVED`, `WON`,
  `LOST`), and `render_rows()` returns the current map.
- `solong.render.Renderer(state, texture_dir).run()` opens the window and
  plays until the game is won, lost or closed.

## Running the tests

```
pip install .[test]
pytest
```