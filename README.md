# blockfall

A falling-block puzzle game on the classic 10 x 20 grid. Each piece falls one
row at a time. You slide it and rotate it until it lands. When a row is
completely full, it is cleared and the rows above it fall down. The game gets
faster as your score grows.

## Installing

```
pip install .
```

The window is drawn with pygame. The game opens full screen.

## Playing

```
blockfall
```

To make the pieces come in a repeatable order, pass a random seed:

```
blockfall --seed 42
```

Click **START** to begin. To quit at any time, click the red **X** near the
top-left corner or close the window.

| Key          | Action                                             |
|--------------|----------------------------------------------------|
| Left / Right | move the piece one column sideways                 |
| Up or X      | rotate clockwise                                   |
| Z            | rotate anticlockwise                               |
| Down         | skip the rest of the wait; the piece falls one row now |

Some rotations would push a piece into a wall or into landed blocks. The game
then tries to nudge the piece one or two squares to a free spot nearby. If
there is no such spot, the rotation does not happen.

After a piece touches down there is still one fall interval left. You can
slide or rotate it during that time before it locks.

### Next pieces

The panel to the right of the grid shows the next two pieces.

### Scoring and speed

Clearing `n` rows at once scores `n * n` points, so four rows score 16.

Pieces first fall every 500 ms. The speed threshold starts at 10 points. When
a clear brings the score up to the threshold:

- the fall interval drops by 10 ms;
- the threshold rises by 10.

The current score is shown above the grid as eight digits.

### Game over

The game ends when a piece locks into the top row. The pile turns grey, and a
**RESTART** button appears. Click it to start a new game.

### Requirements for the screen and font

- **Screen size.** The layout uses fixed pixel positions. The grid and the
  next-piece panel together need a screen of about 1270 x 730 pixels.
- **Font file.** Text is drawn with a TrueType font file named
  `data-latin.ttf`. It is opened from the working directory, so the game
  must be started from a directory that contains this file.

## What it does not do

- Scores are not saved between games. There is no high-score table.
- There is no pause, no hold piece and no sound.
- The window size, layout and key bindings cannot be configured.

## Using the game logic as a library

The grid and piece logic does no drawing, so you can use it on its own:

```python
import random

from blockfall.board import Grid, check_landed, clear_lines, drop, lock_to_grid
from blockfall.tetromino import NextQueue, place_at_spawn

rng = random.Random(1)
grid = Grid()
queue = NextQueue(rng)
piece = place_at_spawn(queue.pop(), rng)
while not check_landed(piece, grid):
    piece = drop(piece)
game_over = lock_to_grid(piece, grid)
runs = clear_lines(grid)  # size of each run of full rows removed
```

### Pieces and moves

Pieces are immutable `Tetromino` values. `strafe`, `rotate` and `drop` in
`blockfall.board` return the piece after the move. `strafe` and `rotate`
return it unchanged when the move is not possible.

### Drawing

Drawing is done by:

- `blockfall.render.Renderer`, on top of `blockfall.display.Display`;
- `blockfall.raster`, which returns the pixel positions of lines, rectangles,
  triangles and circles.

### Small helpers

- `blockfall.util.sort_list` sorts a list of integers.
- `blockfall.textparse.str_to_float` reads the first number out of a string.
- `blockfall.timing.Timer` measures elapsed milliseconds.

## Running the tests

```
pip install ".[test]"
pytest
```