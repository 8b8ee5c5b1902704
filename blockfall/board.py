"""The playing grid and the moves a falling piece can make on it."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Callable, Optional, Sequence

from .tetromino import GRID_H, GRID_W, Shape, Tetromino, instantiate_tetromino
from .util import Vector2, Vector3

LEFT = "l"
RIGHT = "r"

FROZEN_COLOR = Vector3(175, 175, 175)
MAX_CLEARED_ROWS = 4
# How far a rotated piece's centre may end up from where it was.
_MAX_REPOSITION_DRIFT = 3.0
_REPOSITION_PASSES = 2

OnChange = Optional[Callable[["Grid"], None]]


@dataclass
class Cell:
    """One grid square: whether a block sits on it, and that block's colour."""

    block: bool = False
    color: Vector3 = field(default_factory=lambda: Vector3(0, 0, 0))


class Grid:
    """The GRID_W by GRID_H field of landed blocks; row 0 is the top."""

    width = GRID_W
    height = GRID_H

    def __init__(self) -> None:
        self._rows: list[list[Cell]] = [
            [Cell() for _ in range(GRID_W)] for _ in range(GRID_H)
        ]

    @staticmethod
    def _inside(x: int, y: int) -> bool:
        return 0 <= x < GRID_W and 0 <= y < GRID_H

    def clear(self) -> None:
        """Empty every cell."""
        for row in self._rows:
            for cell in row:
                cell.block = False

    def cell(self, x: int, y: int) -> Cell:
        """Return the cell at (x, y); raise IndexError outside the grid."""
        if not self._inside(x, y):
            raise IndexError(f"cell ({x}, {y}) is outside the grid")
        return self._rows[y][x]

    def is_filled(self, x: int, y: int) -> bool:
        """Return True if a block sits at (x, y); positions off the grid are empty."""
        return self._inside(x, y) and self._rows[y][x].block

    def freeze(self) -> None:
        """Turn every landed block grey."""
        for row in self._rows:
            for cell in row:
                if cell.block:
                    cell.color = FROZEN_COLOR

    def _move_cell(self, x: int, from_y: int, to_y: int) -> None:
        self._rows[to_y][x] = replace(self._rows[from_y][x])
        self._rows[from_y][x].block = False

    def _row_full(self, y: int) -> bool:
        return all(cell.block for cell in self._rows[y])

    def _row_empty(self, y: int) -> bool:
        return not any(cell.block for cell in self._rows[y])


def _notify(on_change: OnChange, grid: Grid) -> None:
    if on_change is not None:
        on_change(grid)


def _fits(blocks: Sequence[Vector2], grid: Grid) -> bool:
    """True if no block is off the sides or bottom or on a landed block.

    Blocks above the grid are allowed.
    """
    return all(
        0 <= b.x < GRID_W and b.y < GRID_H and not grid.is_filled(b.x, b.y)
        for b in blocks
    )


def _center(blocks: Sequence[Vector2]) -> tuple[float, float]:
    xs = [b.x for b in blocks]
    ys = [b.y for b in blocks]
    return (min(xs) + max(xs)) / 2.0, (min(ys) + max(ys)) / 2.0


def strafe(tetromino: Tetromino, grid: Grid, direction: str) -> Tetromino:
    """Shift a piece one column left ('l') or right (anything else).

    Returns the piece unchanged if the move would leave the grid or hit a block.
    """
    moved = tetromino.translated(-1 if direction == LEFT else 1, 0)
    for b in moved.blocks:
        if not 0 <= b.x < GRID_W or grid.is_filled(b.x, b.y):
            return tetromino
    return moved


def drop(tetromino: Tetromino) -> Tetromino:
    """Return the piece moved down one row."""
    return tetromino.translated(0, 1)


def check_landed(tetromino: Tetromino, grid: Grid) -> bool:
    """True if any block on the grid rests on the bottom row or on a landed block."""
    for b in tetromino.blocks:
        if b.y < 0:
            continue
        if b.y == GRID_H - 1 or grid.is_filled(b.x, b.y + 1):
            return True
    return False


def lock_to_grid(tetromino: Tetromino, grid: Grid) -> bool:
    """Write the piece's blocks into the grid.

    Returns True if a block landed on the top row, which ends the game.
    """
    game_over = False
    for b in tetromino.blocks:
        if b.y == 0:
            game_over = True
        if Grid._inside(b.x, b.y):
            cell = grid.cell(b.x, b.y)
            cell.block = True
            cell.color = tetromino.color
    return game_over


def reposition(
    original: Tetromino, candidate: Tetromino, grid: Grid
) -> Optional[Tetromino]:
    """Find a valid spot near a rotated piece that does not fit where it is.

    Tries shifts of one, then two, squares in each direction and picks the
    one whose centre lies closest to the original piece's centre. Returns
    the shifted piece, or None if nothing close enough fits.
    """
    orig_x, orig_y = _center(original.blocks)
    found = False
    best_dist = 0
    for distance in range(1, _REPOSITION_PASSES + 1):
        best_diff = 0.0
        best_x = best_y = 0
        for x in (-1, 0, 1):
            for y in (-1, 0, 1):
                moved = candidate.translated(x * distance, y * distance)
                if not _fits(moved.blocks, grid):
                    continue
                new_x, new_y = _center(moved.blocks)
                diff = abs(new_x - orig_x) + abs(new_y - orig_y)
                if not found or diff < best_diff:
                    best_diff = diff
                    best_dist = distance
                    best_x, best_y = x, y
                    found = True
        if found and best_diff < _MAX_REPOSITION_DRIFT:
            return candidate.translated(best_x * best_dist, best_y * best_dist)
    return None


def rotate(tetromino: Tetromino, grid: Grid, direction: str) -> Tetromino:
    """Rotate a piece anticlockwise ('l') or clockwise ('r').

    A rotation that would not fit is nudged to a nearby free spot; if there
    is none, or the direction is unknown, the piece is returned unchanged.
    """
    if tetromino.shape == Shape.O:
        return tetromino
    if direction == LEFT:
        new_rot = (tetromino.rotation - 1) % 4
    elif direction == RIGHT:
        new_rot = (tetromino.rotation + 1) % 4
    else:
        return tetromino

    current = instantiate_tetromino(0, 0, tetromino.shape, tetromino.rotation)
    target = instantiate_tetromino(0, 0, tetromino.shape, new_rot)
    blocks = tuple(
        b + (new - old)
        for b, new, old in zip(tetromino.blocks, target.blocks, current.blocks)
    )
    candidate = Tetromino(tetromino.shape, tetromino.rotation, blocks)

    if not _fits(blocks, grid):
        placed = reposition(tetromino, candidate, grid)
        if placed is None:
            return tetromino
        candidate = placed
    return Tetromino(candidate.shape, new_rot, candidate.blocks)


def drop_pile(grid: Grid, low_y: int, on_change: OnChange = None) -> None:
    """Move rows down by one, from row low_y upwards, until an empty row.

    Row 0 is never moved. on_change is called after each row moves.
    """
    y = low_y
    while y > 0:
        blank = grid._row_empty(y)
        for x in range(GRID_W):
            grid._move_cell(x, y, y + 1)
        if blank:
            break
        _notify(on_change, grid)
        y -= 1


def remove_lines(
    grid: Grid, start: int, number: int, on_change: OnChange = None
) -> None:
    """Empty number rows (at most four) from row start upwards, then drop the pile."""
    for x in range(GRID_W):
        for y in range(start, start - min(number, MAX_CLEARED_ROWS), -1):
            grid.cell(x, y).block = False
        _notify(on_change, grid)

    for offset in range(number):
        drop_pile(grid, start - number + offset, on_change)


def clear_lines(grid: Grid, on_change: OnChange = None) -> list[int]:
    """Remove runs of full rows, scanning up from the bottom.

    Scanning stops a few rows after the first full row is found, since no
    more than four rows can be completed at once. Returns the size of each
    run removed, in the order they were removed.
    """
    removed: list[int] = []
    checking = True
    y = GRID_H - 1
    first_row = -1
    counter = 0
    while checking and y >= 0:
        if counter:
            counter += 1
            if counter == MAX_CLEARED_ROWS + 1:
                checking = False

        if grid._row_full(y):
            if first_row == -1:
                first_row = y
                if counter == 0:
                    counter = 1
        elif first_row != -1:
            lines = first_row - y
            remove_lines(grid, first_row, lines, on_change)
            removed.append(lines)
            first_row = -1
        y -= 1
    return removed