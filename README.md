# totoro-long

A small top-down tile game. You walk a character around a walled map,
pick up every acorn, and then step onto the door to win. Every step is
counted and printed to the terminal.

## Installing

```
pip install .
```

This pulls in `pygame`, which draws the window.

## Playing

```
totoro-long path/to/level.ber
```

The window is titled "Asude" and is 64 pixels per map cell. The tile
images are read from a `textures` directory in the current working
directory: `background.xpm`, `door.xpm`, `acorn.xpm`, `tree.xpm`,
`totoro.xpm` and `totoro_with_door.xpm`. If one of them cannot be read,
the error goes to standard error and the program exits with status 1.

Controls:

| Key   | Action      |
|-------|-------------|
| W     | move up     |
| A     | move left   |
| S     | move down   |
| D     | move right  |
| Esc   | give up     |

Each step that is not blocked by a wall prints `moves: N`. Stepping onto
the door once every acorn is collected prints `You Win! Moves: N` and ends
the game; stepping onto it earlier just stands the character on the door.
Closing the window or pressing Esc prints `You lost! Moves: N`.

Run with a wrong number of arguments, the command prints
`Usage: totoro_long map.ber` and exits with status 1.

## Map files

A map is a plain text file whose name ends in `.ber`. Each line is one
row, built from these characters:

| Char | Meaning          |
|------|------------------|
| `1`  | wall (tree)      |
| `0`  | open floor       |
| `C`  | collectible      |
| `E`  | exit door        |
| `P`  | player start     |

A map is accepted only if:

- the file can be opened, is not empty and has no blank lines;
- all rows have the same length (a file made of one line with no
  trailing newline is rejected as not rectangular);
- it uses only the characters above;
- it has exactly one `P`, exactly one `E` and at least one `C`;
- its border is made entirely of walls;
- every collectible and the exit can be reached from the start.

Example:

```
1111111111
1P0C00C001
1011110101
1C00000E01
1111111111
```

An invalid map is reported on standard error, one line per problem, and
the program exits with status 1.

## Using it as a library

- `totoro_long.mapfile.load_map(path)` reads and checks a map file and
  returns a `GameMap`, raising `MapError` (whose `problems` attribute
  holds every message) on a bad file. `GameMap.from_lines(lines)` builds
  a map from raw lines, `GameMap.problems()` lists everything wrong
  without raising, and `GameMap.validate()` raises on any problem.
  `check_file_name`, `read_lines`, `check_layout` and `reachable_cells`
  are the individual steps.
- `totoro_long.game.Game(game_map, stream=None)` holds the play state.
  `Game.move(direction)` takes a `Direction` and returns an `Outcome`;
  `Game.press_key(keycode)` accepts X key symbols (119/97/115/100 for
  w/a/s/d, 65307 for Esc); `Game.quit()` ends the game as lost.
  `Game.tile_at(row, col)` and `Game.cells()` expose the grid, where the
  character standing on the door is shown as `S`. Messages go to
  `stream`, or standard output.
- `totoro_long.printf.format_string(fmt, *args)` and
  `print_formatted(fmt, *args, stream=None)` implement a small printf
  with `%c %s %p %d %i %u %x %X %%`.
- `totoro_long.xpm.load_xpm(path)` and `parse_xpm(lines)` read XPM images
  into `XpmImage` objects of 0xAARRGGBB pixels, raising `XpmError` on bad
  data.
- `totoro_long.colors.lookup_color(name)` maps X11 colour names to RGB
  values, case-insensitively; `none` gives -1.
- `totoro_long.app.Renderer` draws a `Game` onto a pygame surface, and
  `load_textures(directory)` loads the six textures.

## Limits

Textures are read only as XPM files, and only the XPM features the game
needs (a header, a `c` colour table and pixel rows) are understood. There
is no on-screen move counter; the count is shown only in the terminal.