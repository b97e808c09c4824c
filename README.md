# blockfall

A falling-block puzzle game for the desktop. Pieces come from a seven-bag
randomiser. They rotate with the standard wall-kick tables, and you can hold
a piece once per placement. A ghost shows where the current piece will land.
The next five pieces are always on view.

## Installing

```
pip install .
```

## Playing

```
blockfall
```

The game opens a window titled "Blockfall". The hold box is on the left and
the well is in the centre. The queue, score and cleared lines are on the
right.

Options:

- `--font PATH`: the TrueType font used for the score and line counters.
  Without it, pygame's default font is used.
- `--seed N`: the seed for the piece randomiser, so the piece order can be
  repeated.

| Key         | Action                                    |
|-------------|-------------------------------------------|
| A / D       | Move left / right (auto-repeat when held) |
| S           | Soft drop while held                      |
| Space       | Hard drop                                 |
| L           | Rotate clockwise                          |
| J           | Rotate anticlockwise                      |
| K           | Rotate 180°                               |
| Left Shift  | Hold piece                                |
| R           | Restart                                   |
| Escape      | Quit                                      |

A piece that rests on the stack locks after a short delay. When a piece locks
with part of it above the top of the well, a new game starts.

## Scoring

The table gives the points for the lines cleared by one piece. The points are
multiplied by the current level plus one.

| Lines cleared at once | Points |
|-----------------------|--------|
| 1                     | 40     |
| 2                     | 100    |
| 3                     | 300    |
| 4                     | 1200   |

The level goes up by one every ten lines. Each level makes the pieces fall
faster.

## Using the engine

The game logic lives in `blockfall.engine` and does not need a display:

```python
import random
from blockfall.engine import Game

game = Game(random.Random(1))
game.move_piece(-1)
game.rotate(1)
game.hard_drop()
print(game.score, game.lines_cleared, game.level())
```

`Game` has these methods:

- `move_piece`, `hard_move`, `drop` and `soft_drop` move the falling piece.
- `rotate` turns the falling piece.
- `hard_drop` and `place` lock the falling piece. Each returns `True` when
  the piece locked above the top of the well.
- `swap_hold` exchanges the falling piece with the held piece.
- `ghost_position` gives the landing spot of the falling piece.
- `upcoming` lists the next five pieces.

The board is `game.board`, a list of 20 rows of 10 cells. An empty cell is
0. A filled cell holds the colour index of its piece.

`blockfall.controls.UserControl` turns key presses and frame ticks into
engine calls. It handles delayed auto-shift, auto-repeat, gravity and lock
delay. You can tune the timings in frames through
`blockfall.controls.Handling`. Keys are named as pygame's `key.name` names
them, for example `"a"`, `"space"` or `"left shift"`. You can give your own
mapping from key name to `blockfall.controls.Action`.

## Running the tests

```
pip install .[test]
pytest
```