"""Window, drawing and the main loop."""

from __future__ import annotations

import argparse
import random
from collections.abc import Sequence

import pygame

from .controls import UserControl
from .engine import Game, Tetromino

SQUARE = 30
COLUMNS = 10
ROWS = 20
PADDING = 20

LEFT_AREA_WIDTH = 150
RIGHT_AREA_WIDTH = 150
BOARD_WIDTH = SQUARE * COLUMNS
BOARD_HEIGHT = SQUARE * ROWS
CENTER_AREA_WIDTH = PADDING * 2 + BOARD_WIDTH

WIDTH = LEFT_AREA_WIDTH + BOARD_WIDTH + 2 * PADDING + RIGHT_AREA_WIDTH
HEIGHT = BOARD_HEIGHT + 2 * PADDING

HOLD_SQUARE_SIZE = 20
HOLD_WIDTH = HOLD_SQUARE_SIZE * 4
HOLD_HEIGHT = HOLD_SQUARE_SIZE * 3
HOLD_MARGIN = 20
HOLD_PADDING = 10
NEXTPIECE_HEIGHT = HOLD_SQUARE_SIZE * 15

WHITE = (255, 255, 255)
BACKGROUND = (100, 100, 100)
GHOST_COLOR = (255, 255, 255, 128)
FONT_SIZE = 24
FPS = 60

_COLORS = {
    1: (0, 255, 255),
    2: (255, 255, 0),
    3: (128, 0, 128),
    4: (0, 255, 0),
    5: (255, 0, 0),
    6: (0, 0, 255),
    7: (255, 165, 0),
}

Point = tuple[int, int]
Color = Sequence[int]


def piece_color(index: int) -> tuple[int, int, int]:
    """Colour of a piece index; anything unknown is white."""
    return _COLORS.get(index, WHITE)


def square_polygon(cell: Point, square: int, origin: Point) -> list[Point]:
    """Corners of the bevelled square drawn for ``cell`` on a grid at ``origin``."""
    inset, corner = 1, 3
    side = square - 2 * inset
    left = origin[0] + square * cell[0] + inset
    top = origin[1] + square * cell[1] + inset
    shape = (
        (corner, 0), (side - corner, 0), (side, corner), (side, side - corner),
        (side - corner, side), (corner, side), (0, side - corner), (0, corner),
    )
    return [(left + dx, top + dy) for dx, dy in shape]


def draw_square(surface: pygame.Surface, cell: Point, color: Color,
                square: int, origin: Point) -> None:
    """Fill one grid cell, blending when the colour is translucent."""
    points = square_polygon(cell, square, origin)
    if len(color) == 4 and color[3] < 255:
        left = min(x for x, _ in points)
        top = min(y for _, y in points)
        size = (max(x for x, _ in points) - left + 1, max(y for _, y in points) - top + 1)
        layer = pygame.Surface(size, pygame.SRCALPHA)
        pygame.draw.polygon(layer, color, [(x - left, y - top) for x, y in points])
        surface.blit(layer, (left, top))
    else:
        pygame.draw.polygon(surface, color, points)


def render_piece(surface: pygame.Surface, position: Point, tetromino: Tetromino,
                 color: Color, origin: Point) -> None:
    """Draw a tetromino whose centre sits at board ``position``."""
    px, py = position
    for tx, ty in tetromino:
        draw_square(surface, (tx + px, py - ty), color, SQUARE, origin)


def render_board(surface: pygame.Surface, game: Game,
                 offset: Point = (0, 0)) -> pygame.Rect:
    """Draw the board frame, settled cells, ghost and falling piece."""
    rect = pygame.Rect(PADDING + LEFT_AREA_WIDTH + offset[0], PADDING + offset[1],
                       BOARD_WIDTH, BOARD_HEIGHT)
    pygame.draw.rect(surface, WHITE, rect, 1)
    origin = rect.topleft

    for y, row in enumerate(game.board):
        for x, value in enumerate(row):
            if value:
                draw_square(surface, (x, y), piece_color(value), SQUARE, origin)

    tetromino = game.current_tetromino()
    render_piece(surface, game.ghost_position(), tetromino, GHOST_COLOR, origin)
    render_piece(surface, game.current_position, tetromino,
                 piece_color(game.current_piece.index), origin)
    return rect


def draw_hold(surface: pygame.Surface, game: Game) -> pygame.Rect:
    """Draw the hold box and the held piece, if any."""
    rect = pygame.Rect(LEFT_AREA_WIDTH - HOLD_WIDTH - HOLD_MARGIN - HOLD_PADDING,
                       HOLD_MARGIN - HOLD_PADDING,
                       HOLD_WIDTH + 2 * HOLD_PADDING, HOLD_HEIGHT + 2 * HOLD_PADDING)
    piece = game.hold_piece
    if piece is not None:
        origin = (LEFT_AREA_WIDTH - HOLD_WIDTH - HOLD_MARGIN, HOLD_MARGIN)
        color = piece_color(piece.index)
        for x, y in piece.rotations[0]:
            draw_square(surface, (1 + x, 1 - y), color, HOLD_SQUARE_SIZE, origin)
    pygame.draw.rect(surface, WHITE, rect, 1)
    return rect


def draw_nexts(surface: pygame.Surface, game: Game) -> pygame.Rect:
    """Draw the preview box with the upcoming pieces."""
    rect = pygame.Rect(WIDTH - RIGHT_AREA_WIDTH + HOLD_MARGIN - HOLD_PADDING,
                       HOLD_MARGIN - HOLD_PADDING,
                       HOLD_WIDTH + 2 * HOLD_PADDING, NEXTPIECE_HEIGHT + 2 * HOLD_PADDING)
    origin = (WIDTH - RIGHT_AREA_WIDTH + HOLD_MARGIN, HOLD_MARGIN)
    for slot, piece in enumerate(game.upcoming()):
        color = piece_color(piece.index)
        for x, y in piece.rotations[0]:
            draw_square(surface, (1 + x, 1 + slot * 3 - y), color, HOLD_SQUARE_SIZE, origin)
    pygame.draw.rect(surface, WHITE, rect, 1)
    return rect


def draw_text(surface: pygame.Surface, font: pygame.font.Font, text: str,
              position: Point, color: Color) -> pygame.Rect:
    """Render ``text`` with its top-left corner at ``position``."""
    rendered = font.render(text, True, color)
    return surface.blit(rendered, position)


def draw_stats(surface: pygame.Surface, game: Game, font: pygame.font.Font) -> None:
    """Draw score and cleared-line counters in the right column."""
    x = WIDTH - RIGHT_AREA_WIDTH
    draw_text(surface, font, "SCORE", (x, HEIGHT - 200), WHITE)
    draw_text(surface, font, str(game.score), (x, HEIGHT - 175), WHITE)
    draw_text(surface, font, "LINES", (x, HEIGHT - 100), WHITE)
    draw_text(surface, font, str(game.lines_cleared), (x, HEIGHT - 75), WHITE)


def _play(screen: pygame.Surface, font: pygame.font.Font,
          clock: pygame.time.Clock, rng: random.Random) -> bool:
    """Run one game; True means the player asked to quit."""
    game = Game(rng=rng)
    control = UserControl()
    while True:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return True
            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    return True
                if event.key == pygame.K_r:
                    return False
                if control.action(game, pygame.key.name(event.key), True):
                    return False
            elif event.type == pygame.KEYUP:
                if control.action(game, pygame.key.name(event.key), False):
                    return False
        if control.update(game):
            return False

        screen.fill(BACKGROUND)
        render_board(screen, game)
        draw_hold(screen, game)
        draw_nexts(screen, game)
        draw_stats(screen, game, font)
        pygame.display.flip()
        clock.tick(FPS)


def main(argv: Sequence[str] | None = None) -> int:
    """Open the window and play until the player quits."""
    parser = argparse.ArgumentParser(prog="blockfall", description="Falling-block puzzle game.")
    parser.add_argument("--font", help="TrueType font for the counters")
    parser.add_argument("--seed", type=int, help="seed for the piece randomiser")
    args = parser.parse_args(argv)

    pygame.init()
    try:
        screen = pygame.display.set_mode((WIDTH, HEIGHT))
        pygame.display.set_caption("Blockfall")
        font = pygame.font.Font(args.font, FONT_SIZE)
        clock = pygame.time.Clock()
        rng = random.Random(args.seed)
        while not _play(screen, font, clock, rng):
            pass
    finally:
        pygame.quit()
    return 0