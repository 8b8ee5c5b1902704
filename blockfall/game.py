"""The game's state machine: start screen, play, game over and restart."""

from __future__ import annotations

import argparse
import random
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Protocol

from .board import (
    LEFT,
    RIGHT,
    Grid,
    check_landed,
    clear_lines,
    drop,
    lock_to_grid,
    rotate,
    strafe,
)
from .inputs import ClickableRect, InputType, Key
from .render import Renderer
from .tetromino import NextQueue, Tetromino, place_at_spawn
from .timing import Timer
from .util import Vector2, seed_rng

START_SPEED = 500
SPEED_INCREMENT = 10
SPEED_THRESHOLD = 10


class GameState(Enum):
    """Stages of the game loop."""

    INIT = auto()
    START = auto()
    PLAY = auto()
    GAMEOVER = auto()
    EXIT = auto()


class _Inputs(Protocol):
    def clear(self) -> None: ...

    def poll(self) -> InputType: ...

    def click_position(self) -> Vector2: ...

    def key(self) -> Optional[Key]: ...


@dataclass
class Controller:
    """Game state, fall speed in milliseconds per row, and score."""

    state: GameState = GameState.INIT
    speed: int = START_SPEED
    speed_score: int = SPEED_THRESHOLD
    score: int = 0

    def reset(self) -> None:
        """Return to a fresh game waiting on the start screen."""
        self.state = GameState.START
        self.speed = START_SPEED
        self.speed_score = SPEED_THRESHOLD
        self.score = 0

    def update_score(self, lines: int) -> None:
        """Add the square of the lines cleared and speed up past each threshold."""
        self.score += lines * lines
        if self.score >= self.speed_score:
            self.increase_speed()

    def increase_speed(self) -> None:
        """Make pieces fall faster and raise the next speed threshold."""
        self.speed -= SPEED_INCREMENT
        self.speed_score += SPEED_THRESHOLD


def _clicked(button: Optional[ClickableRect], position: Vector2) -> bool:
    return button is not None and button.contains(position)


class Game:
    """Runs the game on a display, reading events from an input queue."""

    def __init__(
        self, display, inputs: _Inputs, rng: Optional[random.Random] = None
    ) -> None:
        self.renderer = Renderer(display)
        self.inputs = inputs
        self.rng = rng
        self.controller = Controller()
        self.grid = Grid()
        self.queue: Optional[NextQueue] = None
        self.piece: Optional[Tetromino] = None
        self.timer = Timer()
        self.start_button: Optional[ClickableRect] = None
        self.exit_button: Optional[ClickableRect] = None
        self.restart_button: Optional[ClickableRect] = None

    def run(self) -> None:
        """Run the game loop until the player exits."""
        while self.controller.state is not GameState.EXIT:
            self._step()

    def _step(self) -> None:
        state = self.controller.state
        if state is GameState.INIT:
            self._show_start()
        elif state is GameState.START:
            self._await_start()
        elif state is GameState.PLAY:
            self._play_turn()
        elif state is GameState.GAMEOVER:
            self._await_restart()

    def _show_start(self) -> None:
        self.controller.reset()
        self.grid.clear()
        self.renderer.draw_grid(self.grid)
        self.renderer.display_score(self.controller.score)
        self.start_button = self.renderer.display_start()
        self.exit_button = self.renderer.display_exit()

    def _await_start(self) -> None:
        kind = self.inputs.poll()
        if kind is InputType.QUIT:
            self.controller.state = GameState.EXIT
        elif kind is InputType.LEFT_CLICK_DOWN:
            position = self.inputs.click_position()
            if _clicked(self.start_button, position):
                self.inputs.clear()
                self.renderer.draw_grid(self.grid)
                self.queue = NextQueue(self.rng)
                self.renderer.draw_next(self.queue)
                self.controller.state = GameState.PLAY
            elif _clicked(self.exit_button, position):
                self.controller.state = GameState.EXIT

    def _await_restart(self) -> None:
        kind = self.inputs.poll()
        if kind is InputType.QUIT:
            self.controller.state = GameState.EXIT
        elif kind is InputType.LEFT_CLICK_DOWN:
            position = self.inputs.click_position()
            if _clicked(self.exit_button, position):
                self.controller.state = GameState.EXIT
            elif _clicked(self.restart_button, position):
                self.controller.state = GameState.INIT

    def _play_turn(self) -> None:
        if self.queue is None:
            self.queue = NextQueue(self.rng)
        piece = self.queue.pop()
        self.renderer.draw_next(self.queue)
        self.piece = place_at_spawn(piece, self.rng)

        if self.play_piece() and self.controller.state is not GameState.EXIT:
            self.grid.freeze()
            self.renderer.draw_grid(self.grid)
            self.restart_button = self.renderer.display_gameover()
            self.controller.state = GameState.GAMEOVER

        for lines in clear_lines(self.grid, self.renderer.draw_grid):
            self.controller.update_score(lines)
            self.renderer.display_score(self.controller.score)

    def _show_move(self, old: Tetromino, new: Tetromino) -> None:
        self.renderer.clear_tetromino(old)
        self.renderer.draw_tetromino(new)
        self.renderer.display.present()

    def play_piece(self) -> bool:
        """Let the current piece fall until it lands, then lock it into the grid.

        Returns True if the game ended, either because the piece locked on
        the top row or because the player chose to exit.
        """
        if self.piece is None:
            raise RuntimeError("there is no piece in play")
        falling = True
        while falling:
            if check_landed(self.piece, self.grid):
                break
            dropped = drop(self.piece)
            self._show_move(self.piece, dropped)
            self.piece = dropped
            if check_landed(self.piece, self.grid):
                falling = False
            # Input after the drop leaves a moment to slide a landed piece.
            self.piece = self.input_loop(self.piece)
            if self.controller.state is GameState.EXIT:
                return True
            if not falling and not check_landed(self.piece, self.grid):
                falling = True
        return lock_to_grid(self.piece, self.grid)

    def input_loop(self, piece: Tetromino) -> Tetromino:
        """Handle the player's moves until the fall interval has passed.

        Returns the piece as moved. The down arrow ends the interval early;
        clicking the exit button sets the state to EXIT.
        """
        self.timer.start()
        while self.timer.elapsed_ms() < self.controller.speed:
            kind = self.inputs.poll()
            if kind is InputType.KEYPRESS_DOWN:
                key = self.inputs.key()
                if key is Key.DOWN_ARROW:
                    return piece
                moved = self._apply_key(piece, key)
                if moved != piece:
                    self._show_move(piece, moved)
                    piece = moved
            elif kind is InputType.LEFT_CLICK_DOWN:
                if _clicked(self.exit_button, self.inputs.click_position()):
                    self.controller.state = GameState.EXIT
                    return piece
            elif kind is InputType.QUIT:
                self.controller.state = GameState.EXIT
                return piece
        return piece

    def _apply_key(self, piece: Tetromino, key: Optional[Key]) -> Tetromino:
        if key is Key.LEFT_ARROW:
            return strafe(piece, self.grid, LEFT)
        if key is Key.RIGHT_ARROW:
            return strafe(piece, self.grid, RIGHT)
        if key in (Key.UP_ARROW, Key.X):
            return rotate(piece, self.grid, RIGHT)
        if key is Key.Z:
            return rotate(piece, self.grid, LEFT)
        return piece


def main(argv: Optional[list[str]] = None) -> int:
    """Open a full-screen window and play until the player exits."""
    parser = argparse.ArgumentParser(
        prog="blockfall", description="A falling-blocks puzzle game."
    )
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    args = parser.parse_args(argv)

    from .display import Display
    from .inputs import InputQueue

    display = Display(0, 0, "window", True)
    try:
        size = display.size()
        display.resize(size.x, size.y)
        inputs = InputQueue()
        inputs.clear()
        seed_rng(args.seed)
        Game(display, inputs, None).run()
    finally:
        display.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())