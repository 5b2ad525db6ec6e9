"""A timer driven by frame deltas, in seconds."""

from __future__ import annotations

from enum import Enum

_MAX_TIMES = 2**32 - 1


class TimerMode(Enum):
    ONCE = "once"
    REPEATING = "repeating"


class Timer:
    """Counts elapsed time and reports when the duration has passed."""

    def __init__(self, duration: float, mode: TimerMode = TimerMode.REPEATING) -> None:
        if duration < 0:
            raise ValueError("timer duration must not be negative")
        self.duration = duration
        self.mode = mode
        self.elapsed = 0.0
        self.finished = False
        self.times_finished_this_tick = 0

    @property
    def just_finished(self) -> bool:
        return self.times_finished_this_tick > 0

    def tick(self, delta: float) -> Timer:
        """Advance by ``delta`` seconds and return the timer itself."""
        if delta < 0:
            raise ValueError("cannot tick a timer backwards")
        if self.mode is TimerMode.ONCE and self.finished:
            self.times_finished_this_tick = 0
            return self

        self.elapsed += delta
        self.finished = self.elapsed >= self.duration
        if not self.finished:
            self.times_finished_this_tick = 0
        elif self.mode is TimerMode.REPEATING:
            if self.duration > 0:
                self.times_finished_this_tick = int(self.elapsed // self.duration)
                self.elapsed %= self.duration
            else:
                self.times_finished_this_tick = _MAX_TIMES
                self.elapsed = 0.0
        else:
            self.times_finished_this_tick = 1
            self.elapsed = self.duration
        return self

    def reset(self) -> None:
        self.elapsed = 0.0
        self.finished = False
        self.times_finished_this_tick = 0