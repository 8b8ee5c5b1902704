"""Drawing of the grid, pieces, score and buttons onto a display."""

from __future__ import annotations

from typing import Protocol

from .board import Grid
from .inputs import ClickableRect
from .tetromino import GRID_H, GRID_W, NextQueue, Tetromino, shape_color
from .util import Vector2, Vector3

BLOCK_SIZE = 25
GRID_X = 820
GRID_Y = 200
GRID_COL = 75

STACK_SHOW = 2
STACK_X = GRID_X + (GRID_W + 3) * BLOCK_SIZE
STACK_Y = GRID_Y

SCORE_DIGITS = 8
FONT = "data-latin.ttf"
CHAR_SIZE = BLOCK_SIZE * 2

BORDER_COLOR = Vector3(0, 0, 200)
GRID_COLOR = Vector3(GRID_COL, GRID_COL, GRID_COL)
WHITE = Vector3(255, 255, 255)
BLACK = Vector3(0, 0, 0)
EXIT_COLOR = Vector3(255, 0, 100)
GAMEOVER_COLOR = Vector3(255, 0, 0)
_EDGE_SHADE = 10


class _Surface(Protocol):
    def present(self) -> None: ...

    def draw_rectangle(
        self,
        start: Vector2,
        end: Vector2,
        color: Vector3,
        fill: bool = True,
        thickness: int = 0,
    ) -> None: ...

    def draw_text(
        self, text: str, font: object, size: int, color: Vector3, position: Vector2
    ) -> object: ...


def format_score(score: int) -> str:
    """Return the score as the eight characters shown on screen.

    Scores below 10**8 are zero padded; larger ones overflow the first
    character past '9', as the score display does.
    """
    if score < 0:
        raise ValueError(f"score cannot be negative: {score}")
    chars = []
    remaining = score
    for power in range(SCORE_DIGITS - 1, 0, -1):
        digit, remaining = divmod(remaining, 10**power)
        chars.append(chr(ord("0") + digit))
    chars.append(chr(ord("0") + remaining))
    return "".join(chars)


def _edge_color(color: Vector3) -> Vector3:
    return Vector3(
        max(color.x - _EDGE_SHADE, 0),
        max(color.y - _EDGE_SHADE, 0),
        max(color.z - _EDGE_SHADE, 0),
    )


def _square(x: int, y: int, origin_x: int, origin_y: int) -> tuple[Vector2, Vector2]:
    """Screen corners of the block at (x, y) of a block grid at origin."""
    return (
        Vector2(origin_x + BLOCK_SIZE * x, origin_y + BLOCK_SIZE * y),
        Vector2(origin_x + BLOCK_SIZE * (x + 1), origin_y + BLOCK_SIZE * (y + 1)),
    )


class Renderer:
    """Draws the game's pieces and screens onto a display."""

    font = FONT

    def __init__(self, display: _Surface) -> None:
        self.display = display

    def _block(self, x: int, y: int, color: Vector3) -> None:
        """Draw one grid square with a slightly darker edge."""
        start, end = _square(x, y, GRID_X, GRID_Y)
        self.display.draw_rectangle(start, end, color, True, 1)
        self.display.draw_rectangle(start, end, _edge_color(color), False, 1)

    def draw_grid(self, grid: Grid) -> None:
        """Draw the bordered grid with every landed block, then present."""
        self.display.draw_rectangle(
            Vector2(GRID_X - BLOCK_SIZE, GRID_Y - BLOCK_SIZE),
            Vector2(
                GRID_X + BLOCK_SIZE * (GRID_W + 1),
                GRID_Y + BLOCK_SIZE * (GRID_H + 1),
            ),
            BORDER_COLOR,
            True,
            1,
        )
        for x in range(GRID_W):
            for y in range(GRID_H):
                cell = grid.cell(x, y)
                self._block(x, y, cell.color if cell.block else GRID_COLOR)
        self.display.present()

    def draw_next(self, queue: NextQueue) -> None:
        """Draw the panel of upcoming pieces, then present."""
        self.display.draw_rectangle(
            Vector2(STACK_X - BLOCK_SIZE, STACK_Y - BLOCK_SIZE),
            Vector2(
                STACK_X + BLOCK_SIZE * 5,
                STACK_Y + BLOCK_SIZE * (4 * STACK_SHOW + 1),
            ),
            BORDER_COLOR,
            True,
            1,
        )
        for x in range(4):
            for y in range(4 * STACK_SHOW):
                start, end = _square(x, y, STACK_X, STACK_Y)
                self.display.draw_rectangle(start, end, GRID_COLOR, True, 1)

        for slot, piece in enumerate(queue.peek(STACK_SHOW)):
            color = shape_color(piece.shape)
            for block in piece.blocks:
                start, end = _square(block.x, block.y + slot * 4, STACK_X, STACK_Y)
                self.display.draw_rectangle(start, end, color, True, 1)
        self.display.present()

    def draw_tetromino(self, tetromino: Tetromino) -> None:
        """Draw a piece's blocks that are on the grid; does not present."""
        color = shape_color(tetromino.shape)
        for block in tetromino.blocks:
            if block.y >= 0:
                self._block(block.x, block.y, color)

    def clear_tetromino(self, tetromino: Tetromino) -> None:
        """Paint a piece's on-grid blocks back to empty squares; does not present."""
        for block in tetromino.blocks:
            if block.y >= 0:
                self._block(block.x, block.y, GRID_COLOR)

    def display_score(self, score: int) -> None:
        """Draw the score above the grid."""
        start = Vector2(GRID_X, GRID_Y - BLOCK_SIZE * 5)
        end = Vector2(start.x + BLOCK_SIZE * 8, start.y + CHAR_SIZE)
        self.display.draw_rectangle(start, end, BLACK, True, 0)
        self.display.draw_text(format_score(score), self.font, CHAR_SIZE, WHITE, start)

    def _button(
        self, label: str, start: Vector2, width_blocks: int, color: Vector3
    ) -> ClickableRect:
        end = Vector2(start.x + BLOCK_SIZE * width_blocks, start.y + CHAR_SIZE)
        self.display.draw_rectangle(start, end, color, True, 0)
        self.display.draw_text(label, self.font, CHAR_SIZE, BLACK, start)
        return ClickableRect(start, end, True)

    def display_start(self) -> ClickableRect:
        """Draw the start button in the middle of the grid and return its area."""
        start = Vector2(
            GRID_X + (GRID_W * BLOCK_SIZE - BLOCK_SIZE * 5) // 2,
            GRID_Y + (GRID_H * BLOCK_SIZE - CHAR_SIZE) // 2,
        )
        return self._button("START", start, 5, WHITE)

    def display_exit(self) -> ClickableRect:
        """Draw the exit button near the top left corner and return its area."""
        start = Vector2(BLOCK_SIZE * 5, BLOCK_SIZE * 5)
        return self._button("X", start, 1, EXIT_COLOR)

    def display_gameover(self) -> ClickableRect:
        """Draw the game-over sign and the restart button; return the button's area."""
        text_pos = Vector2(
            GRID_X + (GRID_W * BLOCK_SIZE - BLOCK_SIZE * 9) // 2,
            GRID_Y + (GRID_H * BLOCK_SIZE - CHAR_SIZE) // 2,
        )
        self.display.draw_text("GAME OVER", self.font, CHAR_SIZE, GAMEOVER_COLOR, text_pos)
        start = Vector2(
            GRID_X + (GRID_W * BLOCK_SIZE - BLOCK_SIZE * 7) // 2,
            text_pos.y + BLOCK_SIZE * 3,
        )
        return self._button("RESTART", start, 7, WHITE)