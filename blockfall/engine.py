"""Game rules: pieces, the seven-piece bag, rotation kicks, scoring."""

from __future__ import annotations

import random
from collections import deque
from dataclasses import dataclass, field

HEIGHT = 20
WIDTH = 10
PREVIEW = 5
SPAWN = (4, 0)

Cell = tuple[int, int]
Tetromino = tuple[Cell, Cell, Cell, Cell]


@dataclass(frozen=True)
class Piece:
    """A tetromino with its four rotation states and its colour index."""

    rotations: tuple[Tetromino, Tetromino, Tetromino, Tetromino]
    index: int
    name: str


PIECES: tuple[Piece, ...] = (
    Piece(
        rotations=(
            ((-1, 0), (0, 0), (1, 0), (2, 0)),
            ((0, 1), (0, 0), (0, -1), (0, -2)),
            ((-2, 0), (-1, 0), (0, 0), (1, 0)),
            ((0, 2), (0, 1), (0, 0), (0, -1)),
        ),
        index=1,
        name="I",
    ),
    Piece(
        rotations=(
            ((-1, 1), (-1, 0), (0, 0), (1, 0)),
            ((0, 1), (1, 1), (0, 0), (0, -1)),
            ((-1, 0), (0, 0), (1, 0), (1, -1)),
            ((0, 1), (0, 0), (0, -1), (-1, -1)),
        ),
        index=6,
        name="J",
    ),
    Piece(
        rotations=(
            ((-1, 0), (0, 0), (1, 0), (1, 1)),
            ((0, 1), (0, 0), (0, -1), (1, -1)),
            ((-1, 0), (0, 0), (1, 0), (-1, -1)),
            ((-1, 1), (0, 1), (0, 0), (0, -1)),
        ),
        index=7,
        name="L",
    ),
    Piece(
        rotations=(
            ((0, 1), (1, 1), (0, 0), (1, 0)),
            ((0, 0), (1, 0), (0, -1), (1, -1)),
            ((-1, 0), (0, 0), (-1, -1), (0, -1)),
            ((-1, 1), (0, 1), (-1, 0), (0, 0)),
        ),
        index=2,
        name="O",
    ),
    Piece(
        rotations=(
            ((0, 1), (1, 1), (-1, 0), (0, 0)),
            ((0, 1), (0, 0), (1, 0), (1, -1)),
            ((0, 0), (1, 0), (-1, -1), (0, -1)),
            ((-1, 1), (-1, 0), (0, 0), (0, -1)),
        ),
        index=4,
        name="S",
    ),
    Piece(
        rotations=(
            ((0, 1), (-1, 0), (0, 0), (1, 0)),
            ((0, 1), (0, 0), (1, 0), (0, -1)),
            ((-1, 0), (0, 0), (1, 0), (0, -1)),
            ((0, 1), (-1, 0), (0, 0), (0, -1)),
        ),
        index=3,
        name="T",
    ),
    Piece(
        rotations=(
            ((-1, 1), (0, 1), (0, 0), (1, 0)),
            ((1, 1), (0, 0), (1, 0), (0, -1)),
            ((-1, 0), (0, 0), (0, -1), (1, -1)),
            ((0, 1), (-1, 0), (0, 0), (-1, -1)),
        ),
        index=5,
        name="Z",
    ),
)

_OFFSET_DATA = (
    ((0, 0), (0, 0), (0, 0), (0, 0), (0, 0)),
    ((0, 0), (1, 0), (1, -1), (0, 2), (1, 2)),
    ((0, 0), (0, 0), (0, 0), (0, 0), (0, 0)),
    ((0, 0), (-1, 0), (-1, -1), (0, 2), (-1, 2)),
)

_I_OFFSET_DATA = (
    ((0, 0), (-1, 0), (2, 0), (-1, 0), (2, 0)),
    ((-1, 0), (0, 0), (0, 0), (0, 1), (0, -2)),
    ((-1, 1), (1, 1), (-2, 1), (1, 0), (-2, 0)),
    ((0, 1), (0, 1), (0, 1), (0, -1), (0, 2)),
)

_O_OFFSET_DATA = ((0, 0), (0, -1), (-1, -1), (-1, 0))

_LINE_SCORES = {1: 40, 2: 100, 3: 300, 4: 1200}


def calc_kicks(name: str, start: int, end: int) -> list[Cell]:
    """Return the five wall-kick candidates for rotating from ``start`` to ``end``."""
    table = _I_OFFSET_DATA if name == "I" else _OFFSET_DATA
    return [
        (sx - ex, sy - ey)
        for (sx, sy), (ex, ey) in zip(table[start], table[end])
    ]


def calc_o_kick(start: int, end: int) -> Cell:
    """Return the fixed offset applied when the O piece rotates."""
    sx, sy = _O_OFFSET_DATA[start]
    ex, ey = _O_OFFSET_DATA[end]
    return (sx - ex, sy - ey)


class Bag:
    """Seven-bag randomiser with a preview of the upcoming pieces."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random()
        self.queue: deque[int] = deque()
        self.next_pieces: deque[int] = deque()
        self.refill()
        for _ in range(PREVIEW):
            self.next_pieces.append(self.queue.popleft())

    def refill(self) -> None:
        """Append a freshly shuffled set of all seven piece indices."""
        indices = list(range(len(PIECES)))
        self._rng.shuffle(indices)
        self.queue.extend(indices)

    def next(self) -> int:
        """Take the front of the preview and push a new piece behind it."""
        if not self.queue:
            self.refill()
        self.next_pieces.append(self.queue.popleft())
        return self.next_pieces.popleft()


def _empty_board() -> list[list[int]]:
    return [[0] * WIDTH for _ in range(HEIGHT)]


@dataclass
class Game:
    """State of one game: the board, the falling piece, hold and score."""

    rng: random.Random | None = None
    board: list[list[int]] = field(default_factory=_empty_board)
    current_rotation: int = 0
    current_position: Cell = SPAWN
    score: int = 0
    lines_cleared: int = 0
    hold_piece: Piece | None = None
    already_switched: bool = False

    def __post_init__(self) -> None:
        self.bag = Bag(self.rng)
        self.current_piece: Piece = PIECES[self.bag.next()]

    def current_tetromino(self) -> Tetromino:
        """Cells of the falling piece in its current rotation."""
        return self.current_piece.rotations[self.current_rotation]

    def check_tetromino(self, position: Cell, tetromino: Tetromino) -> bool:
        """Whether ``tetromino`` fits at ``position``; rows above the board are free."""
        px, py = position
        for tx, ty in tetromino:
            x, y = px + tx, py - ty
            if x < 0 or x >= WIDTH or y >= HEIGHT:
                return False
            if y >= 0 and self.board[y][x] != 0:
                return False
        return True

    def swap_hold(self) -> bool:
        """Exchange the falling piece with the held one, once per placement."""
        if self.already_switched:
            return False
        self.already_switched = True
        held = self.hold_piece
        self.hold_piece = self.current_piece
        self._summon(held if held is not None else self.draw_next())
        return True

    def draw_next(self) -> Piece:
        """Take the next piece from the bag."""
        return PIECES[self.bag.next()]

    def upcoming(self) -> list[Piece]:
        """The pieces shown in the preview, front first."""
        return [PIECES[i] for i in list(self.bag.next_pieces)[:PREVIEW]]

    def move_piece(self, direction: int) -> bool:
        """Shift the piece sideways by ``direction`` columns if it fits."""
        x, y = self.current_position
        target = (x + direction, y)
        if self.check_tetromino(target, self.current_tetromino()):
            self.current_position = target
            return True
        return False

    def _summon(self, piece: Piece) -> None:
        self.current_piece = piece
        self.current_rotation = 0
        self.current_position = SPAWN

    def hard_drop(self) -> bool:
        """Drop the piece to the bottom and lock it; True means game over."""
        while self.drop():
            pass
        return self.place()

    def soft_drop(self) -> bool:
        """Move the piece one row down; same as :meth:`drop`."""
        return self.drop()

    def drop(self) -> bool:
        """Move the piece one row down if it fits."""
        x, y = self.current_position
        target = (x, y + 1)
        if self.check_tetromino(target, self.current_tetromino()):
            self.current_position = target
            return True
        return False

    def hard_move(self, direction: int) -> None:
        """Shift the piece sideways as far as it goes."""
        while self.move_piece(direction):
            pass

    def rotate(self, offset: int) -> None:
        """Rotate by ``offset`` quarter turns clockwise, trying wall kicks."""
        new_rotation = (self.current_rotation + offset) % 4
        x, y = self.current_position

        if self.current_piece.name == "O":
            kx, ky = calc_o_kick(self.current_rotation, new_rotation)
            self.current_position = (x + kx, y - ky)
            self.current_rotation = new_rotation
            return

        tetromino = self.current_piece.rotations[new_rotation]
        for kx, ky in calc_kicks(self.current_piece.name, self.current_rotation, new_rotation):
            target = (x + kx, y - ky)
            if self.check_tetromino(target, tetromino):
                self.current_position = target
                self.current_rotation = new_rotation
                return

    def _clear_lines(self) -> int:
        kept = [row for row in self.board if not all(row)]
        cleared = HEIGHT - len(kept)
        self.board = [[0] * WIDTH for _ in range(cleared)] + kept
        return cleared

    def level(self) -> int:
        """Current level: one per ten cleared lines."""
        return self.lines_cleared // 10

    def _update_score(self, lines: int) -> None:
        self.score += _LINE_SCORES.get(lines, 0) * (self.level() + 1)

    def place(self) -> bool:
        """Lock the piece into the board; True means it stuck out above the top."""
        px, py = self.current_position
        for tx, ty in self.current_tetromino():
            x, y = px + tx, py - ty
            if y < 0:
                return True
            self.board[y][x] = self.current_piece.index

        lines = self._clear_lines()
        self._update_score(lines)
        self.lines_cleared += lines

        self._summon(self.draw_next())
        self.already_switched = False
        return False

    def ghost_position(self) -> Cell:
        """Where the piece would land if dropped straight down."""
        x, y = self.current_position
        tetromino = self.current_tetromino()
        y += 1
        while self.check_tetromino((x, y), tetromino):
            y += 1
        return (x, y - 1)