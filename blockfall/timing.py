"""Date stamps and a millisecond timer."""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import datetime
from typing import Callable


@dataclass(frozen=True)
class Timestamp:
    """A local date and time to the second."""

    day: int
    month: int
    year: int
    hour: int
    minute: int
    second: int


@dataclass(frozen=True)
class DateStamp:
    """A local calendar date."""

    day: int
    month: int
    year: int


def get_date_time() -> Timestamp:
    """Return the current local date and time."""
    now = datetime.now()
    return Timestamp(now.day, now.month, now.year, now.hour, now.minute, now.second)


def get_date() -> DateStamp:
    """Return the current local date."""
    today = datetime.now()
    return DateStamp(today.day, today.month, today.year)


class Timer:
    """Measures whole milliseconds elapsed since it was last started."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._start_ms = 0
        self.start()

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def start(self) -> None:
        """Restart the timer from now."""
        self._start_ms = self._now_ms()

    def elapsed_ms(self) -> int:
        """Return the milliseconds passed since the last start."""
        return self._now_ms() - self._start_ms


def wait(wait_ms: int) -> None:
    """Block for wait_ms milliseconds; non-positive values return at once."""
    if wait_ms > 0:
        time.sleep(wait_ms / 1000)