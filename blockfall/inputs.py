"""Keyboard, mouse and terminal input."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Optional, TextIO

import pygame

from .util import Vector2

_KEYCODE_ESCAPE = 27
_KEYCODE_UP = 1073741906
_KEYCODE_DOWN = 1073741905
_KEYCODE_LEFT = 1073741904
_KEYCODE_RIGHT = 1073741903
_KEYCODE_A = 97
_KEYCODE_Z = 122

_BUTTON_LEFT = 1
_BUTTON_RIGHT = 3


class InputType(Enum):
    """Kinds of input event reported by InputQueue.poll."""

    NONE = auto()
    QUIT = auto()
    KEYPRESS_DOWN = auto()
    LEFT_CLICK_DOWN = auto()
    RIGHT_CLICK_DOWN = auto()
    MOUSE_MOVED = auto()


class Key(Enum):
    """Keys the game recognises."""

    ESCAPE = auto()
    UP_ARROW = auto()
    DOWN_ARROW = auto()
    LEFT_ARROW = auto()
    RIGHT_ARROW = auto()
    A = auto()
    B = auto()
    C = auto()
    D = auto()
    E = auto()
    F = auto()
    G = auto()
    H = auto()
    I = auto()  # noqa: E741
    J = auto()
    K = auto()
    L = auto()
    M = auto()
    N = auto()
    O = auto()  # noqa: E741
    P = auto()
    Q = auto()
    R = auto()
    S = auto()
    T = auto()
    U = auto()
    V = auto()
    W = auto()
    X = auto()
    Y = auto()
    Z = auto()


_SPECIAL_KEYS = {
    _KEYCODE_ESCAPE: Key.ESCAPE,
    _KEYCODE_UP: Key.UP_ARROW,
    _KEYCODE_DOWN: Key.DOWN_ARROW,
    _KEYCODE_LEFT: Key.LEFT_ARROW,
    _KEYCODE_RIGHT: Key.RIGHT_ARROW,
}


def key_from_code(code: int) -> Optional[Key]:
    """Return the Key for a keycode, or None if the key is not recognised."""
    if code in _SPECIAL_KEYS:
        return _SPECIAL_KEYS[code]
    if _KEYCODE_A <= code <= _KEYCODE_Z:
        return Key[chr(code).upper()]
    return None


@dataclass
class ClickableRect:
    """A rectangular screen region that can be clicked."""

    topleft: Vector2
    bottomright: Vector2
    active: bool = False

    def contains(self, position: Vector2) -> bool:
        """Return True if position lies within the rectangle, edges included."""
        return (
            self.topleft.x <= position.x <= self.bottomright.x
            and self.topleft.y <= position.y <= self.bottomright.y
        )


def get_cli(size: int, stream: Optional[TextIO] = None) -> str:
    """Read one line of at most size - 1 characters from the terminal.

    The trailing newline is dropped. If the line is longer, the rest of it
    is read and discarded.
    """
    if size < 2:
        raise ValueError(f"size must be at least 2, got {size}")
    source = sys.stdin if stream is None else stream
    line = source.readline(size - 1)
    if line.endswith("\n"):
        return line[:-1]
    if len(line) == size - 1:
        rest = source.readline()
        while rest and not rest.endswith("\n"):
            rest = source.readline()
    return line


def _pygame_poll() -> Optional[pygame.event.Event]:
    event = pygame.event.poll()
    return None if event.type == pygame.NOEVENT else event


def _pygame_flush() -> None:
    pygame.event.pump()
    pygame.event.clear()


class InputQueue:
    """Reads events one at a time and remembers the last one read."""

    def __init__(
        self,
        poll_event: Optional[Callable[[], Optional[pygame.event.Event]]] = None,
        flush: Optional[Callable[[], None]] = None,
    ) -> None:
        self._poll_event = poll_event or _pygame_poll
        self._flush = flush or _pygame_flush
        self._event: Optional[pygame.event.Event] = None

    def clear(self) -> None:
        """Discard every pending event."""
        self._flush()

    def poll(self) -> InputType:
        """Read the next pending event and report its kind."""
        event = self._poll_event()
        if event is None:
            return InputType.NONE
        self._event = event
        if event.type == pygame.QUIT:
            return InputType.QUIT
        if event.type == pygame.KEYDOWN:
            return InputType.KEYPRESS_DOWN
        if event.type == pygame.MOUSEBUTTONDOWN:
            button = getattr(event, "button", None)
            if button == _BUTTON_LEFT:
                return InputType.LEFT_CLICK_DOWN
            if button == _BUTTON_RIGHT:
                return InputType.RIGHT_CLICK_DOWN
            return InputType.MOUSE_MOVED
        if event.type == pygame.MOUSEMOTION:
            return InputType.MOUSE_MOVED
        return InputType.NONE

    def _position(self) -> Vector2:
        pos = getattr(self._event, "pos", None)
        if pos is None:
            raise LookupError("the last event carries no mouse position")
        return Vector2(int(pos[0]), int(pos[1]))

    def click_position(self) -> Vector2:
        """Return where the last mouse event happened."""
        return self._position()

    def move_position(self) -> Vector2:
        """Return where the mouse was at the last mouse event."""
        return self._position()

    def key(self) -> Optional[Key]:
        """Return the key of the last event, or None if it was not a known key."""
        code = getattr(self._event, "key", None)
        if code is None:
            return None
        return key_from_code(code)