import random
from collections import deque

from blockfall.board import FROZEN_COLOR, Grid, drop, rotate, strafe
from blockfall.game import (
    SPEED_INCREMENT,
    SPEED_THRESHOLD,
    START_SPEED,
    Controller,
    Game,
    GameState,
)
from blockfall.inputs import InputType, Key
from blockfall.render import Renderer, format_score
from blockfall.tetromino import (
    GRID_H,
    GRID_W,
    STACK_SIZE,
    NextQueue,
    instantiate_tetromino,
)
from blockfall.timing import Timer


class FakeDisplay:
    def __init__(self):
        self.texts = []
        self.presents = 0
        self.rectangles = 0

    def present(self):
        self.presents += 1

    def draw_rectangle(self, start, end, color, fill=True, thickness=0):
        self.rectangles += 1

    def draw_text(self, text, font, size, color, position):
        self.texts.append(text)


class ScriptedInputs:
    """Plays back events, then idle polls, then a quit."""

    def __init__(self, events=(), idle=1000):
        self.events = deque(events)
        self.idle = idle
        self.current = None
        self.cleared = 0

    def clear(self):
        self.cleared += 1

    def poll(self):
        if self.events:
            kind, payload = self.events.popleft()
            self.current = payload
            return kind
        if self.idle > 0:
            self.idle -= 1
            return InputType.NONE
        return InputType.QUIT

    def click_position(self):
        return self.current

    def key(self):
        return self.current


def _fast_clock():
    ticks = iter(range(10**9))
    return lambda: next(ticks) * 0.1


def make_game(events=(), idle=1000, seed=0):
    display = FakeDisplay()
    inputs = ScriptedInputs(events, idle)
    game = Game(display, inputs, random.Random(seed))
    game.timer = Timer(clock=_fast_clock())
    return game, display, inputs


def buttons():
    renderer = Renderer(FakeDisplay())
    return renderer.display_start(), renderer.display_exit(), renderer.display_gameover()


def test_controller_reset():
    controller = Controller(state=GameState.GAMEOVER, speed=100, speed_score=70, score=50)
    controller.reset()
    assert controller.state is GameState.START
    assert controller.speed == START_SPEED
    assert controller.speed_score == SPEED_THRESHOLD
    assert controller.score == 0


def test_update_score_below_threshold_keeps_speed():
    controller = Controller()
    controller.update_score(2)
    assert controller.score == 4
    assert controller.speed == START_SPEED


def test_update_score_speeds_up_once_per_update():
    controller = Controller()
    controller.update_score(4)
    assert controller.speed == START_SPEED - SPEED_INCREMENT
    assert controller.speed_score == 2 * SPEED_THRESHOLD


def test_increase_speed():
    controller = Controller()
    controller.increase_speed()
    controller.increase_speed()
    assert controller.speed == START_SPEED - 2 * SPEED_INCREMENT
    assert controller.speed_score == 3 * SPEED_THRESHOLD


def test_exit_button_on_start_screen_ends_run():
    _, exit_button, _ = buttons()
    game, display, _ = make_game([(InputType.LEFT_CLICK_DOWN, exit_button.topleft)])
    game.run()
    assert game.controller.state is GameState.EXIT
    assert "START" in display.texts
    assert game.queue is None


def test_start_then_quit_during_play():
    start_button, _, _ = buttons()
    game, display, inputs = make_game(
        [(InputType.LEFT_CLICK_DOWN, start_button.topleft)], idle=0
    )
    game.run()
    assert game.controller.state is GameState.EXIT
    assert inputs.cleared == 1
    assert len(game.queue) == STACK_SIZE
    assert "GAME OVER" not in display.texts


def test_play_piece_locks_on_bottom():
    game, _, _ = make_game()
    piece = instantiate_tetromino(0, 16, 1, 0)
    game.piece = piece
    assert game.play_piece() is False
    expected = {(b.x, b.y) for b in drop(piece).blocks}
    filled = {
        (x, y) for x in range(GRID_W) for y in range(GRID_H) if game.grid.is_filled(x, y)
    }
    assert filled == expected


def test_play_piece_on_top_row_ends_game():
    game, _, _ = make_game()
    game.grid.cell(1, 1).block = True
    game.grid.cell(2, 1).block = True
    game.piece = instantiate_tetromino(0, -2, 1, 0)
    assert game.play_piece() is True
    assert game.grid.is_filled(1, 0)


def test_input_loop_strafes_left():
    game, display, _ = make_game([(InputType.KEYPRESS_DOWN, Key.LEFT_ARROW)])
    piece = instantiate_tetromino(3, 5, 0, 0)
    result = game.input_loop(piece)
    assert result == strafe(piece, Grid(), "l")
    assert display.presents >= 1


def test_input_loop_rotates_left_with_z():
    game, _, _ = make_game([(InputType.KEYPRESS_DOWN, Key.Z)])
    piece = instantiate_tetromino(3, 5, 2, 0)
    assert game.input_loop(piece) == rotate(piece, Grid(), "l")


def test_input_loop_down_returns_at_once():
    game, _, inputs = make_game(
        [(InputType.KEYPRESS_DOWN, Key.DOWN_ARROW), (InputType.KEYPRESS_DOWN, Key.LEFT_ARROW)]
    )
    piece = instantiate_tetromino(3, 5, 0, 0)
    assert game.input_loop(piece) == piece
    assert len(inputs.events) == 1


def test_input_loop_exit_click():
    _, exit_button, _ = buttons()
    game, _, _ = make_game([(InputType.LEFT_CLICK_DOWN, exit_button.bottomright)])
    game.exit_button = exit_button
    piece = instantiate_tetromino(3, 5, 0, 0)
    assert game.input_loop(piece) == piece
    assert game.controller.state is GameState.EXIT


def test_restart_returns_to_start_screen():
    _, _, restart = buttons()
    game, display, _ = make_game([(InputType.LEFT_CLICK_DOWN, restart.topleft)], idle=0)
    game.controller.state = GameState.GAMEOVER
    game.controller.score = 7
    game.restart_button = restart
    game.run()
    assert game.controller.score == 0
    assert game.controller.state is GameState.EXIT
    assert "START" in display.texts


def test_topping_out_leads_to_game_over():
    game, display, _ = make_game(idle=50)
    for y in range(1, GRID_H):
        for x in range(GRID_W):
            if (x, y) != (0, GRID_H - 1):
                game.grid.cell(x, y).block = True
    game.queue = NextQueue(random.Random(1))
    game.controller.state = GameState.PLAY
    game.run()
    assert "GAME OVER" in display.texts
    assert game.restart_button.active
    assert game.grid.cell(5, 5).color == FROZEN_COLOR
    assert game.controller.state is GameState.EXIT


def test_full_row_is_cleared_and_scored():
    game, display, _ = make_game(idle=0)
    for x in range(GRID_W):
        game.grid.cell(x, GRID_H - 1).block = True
    game.queue = NextQueue(random.Random(2))
    game.controller.state = GameState.PLAY
    game.run()
    assert game.controller.score == 1
    assert not any(game.grid.is_filled(x, GRID_H - 1) for x in range(GRID_W))
    assert format_score(game.controller.score) in display.texts